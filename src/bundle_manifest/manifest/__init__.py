"""Manifest collection, merging and persistence."""
from __future__ import annotations

from bundle_manifest.manifest.collector import (
    AssetCollector,
    AuxiliaryAssetProvider,
    ExtractedAssetProvider,
    resolve_path,
)
from bundle_manifest.manifest.merger import merge
from bundle_manifest.manifest.model import EntryManifest, Manifest
from bundle_manifest.manifest.serialization import (
    ManifestParseError,
    parse_manifest,
    serialize_manifest,
)
from bundle_manifest.manifest.writer import ManifestWriteError, ManifestWriter, WriteOptions

__all__ = [
    "AssetCollector",
    "AuxiliaryAssetProvider",
    "EntryManifest",
    "ExtractedAssetProvider",
    "Manifest",
    "ManifestParseError",
    "ManifestWriteError",
    "ManifestWriter",
    "WriteOptions",
    "merge",
    "parse_manifest",
    "resolve_path",
    "serialize_manifest",
]
