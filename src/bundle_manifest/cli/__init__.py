"""CLI module."""
from __future__ import annotations

from bundle_manifest.cli.config import ManifestSettings, get_config
from bundle_manifest.cli.main import app

__all__ = ["ManifestSettings", "app", "get_config"]
