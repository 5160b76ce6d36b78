"""Bundle manifest generator.

Maps a bundler's entry points to the files it emitted for them, keyed by
kind, so templates and deploy tooling can reference hashed filenames.

Example:
    >>> from bundle_manifest import AssetCollector, CompilationResult
    >>> result = CompilationResult.from_chunks({"main": ["index-bundle.js"]})
    >>> AssetCollector().collect(result).to_json()
    '{"main":{"js":"index-bundle.js"}}'
"""
from __future__ import annotations

from bundle_manifest.classifier import classify, strip_query
from bundle_manifest.errors import ManifestError
from bundle_manifest.manifest import (
    AssetCollector,
    AuxiliaryAssetProvider,
    EntryManifest,
    ExtractedAssetProvider,
    Manifest,
    ManifestParseError,
    ManifestWriteError,
    ManifestWriter,
    WriteOptions,
    merge,
)
from bundle_manifest.plugin import CompilationFailedError, CompletionBarrier, ManifestPlugin
from bundle_manifest.types import (
    AssetKind,
    ChunkGroup,
    CompilationResult,
    StatsFormatError,
    load_stats_batch,
)

__version__ = "0.1.0"

__all__ = [
    "AssetCollector",
    "AssetKind",
    "AuxiliaryAssetProvider",
    "ChunkGroup",
    "CompilationFailedError",
    "CompilationResult",
    "CompletionBarrier",
    "EntryManifest",
    "ExtractedAssetProvider",
    "Manifest",
    "ManifestError",
    "ManifestParseError",
    "ManifestPlugin",
    "ManifestWriteError",
    "ManifestWriter",
    "StatsFormatError",
    "WriteOptions",
    "__version__",
    "classify",
    "load_stats_batch",
    "merge",
    "strip_query",
]
