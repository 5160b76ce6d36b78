"""Base exception for bundle-manifest."""
from __future__ import annotations


class ManifestError(Exception):
    """Base class for errors raised while producing a manifest."""
