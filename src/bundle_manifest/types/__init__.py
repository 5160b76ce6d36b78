"""Core value types."""
from __future__ import annotations

from bundle_manifest.types.compilation import (
    ChunkGroup,
    CompilationResult,
    StatsFormatError,
    load_stats_batch,
)
from bundle_manifest.types.kind import AssetKind

__all__ = [
    "AssetKind",
    "ChunkGroup",
    "CompilationResult",
    "StatsFormatError",
    "load_stats_batch",
]
