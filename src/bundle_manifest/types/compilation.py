"""Compilation results reported by the bundler.

A CompilationResult is a read-only snapshot of one build pass. It can be
constructed directly or loaded from a webpack-style stats JSON document.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from bundle_manifest.errors import ManifestError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

# webpack 5 reports this when the public path is resolved at runtime.
_AUTO_PUBLIC_PATH = "auto"


class StatsFormatError(ManifestError):
    """Stats document does not have the expected shape."""


@dataclass(frozen=True)
class ChunkGroup:
    """A named chunk group and the files emitted for it, in emission order."""

    name: str
    files: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate the group name."""
        if not self.name:
            msg = "Chunk group name must not be empty"
            raise ValueError(msg)


@dataclass(frozen=True)
class CompilationResult:
    """The bundler's report for one build pass.

    Attributes:
        chunk_groups: Named chunk groups in declaration order.
        public_path: Prefix the bundler serves assets from (may be empty).
        hash: Compilation hash, substituted for ``[hash]`` in the public path.
        errors: Error messages reported by the bundler.
    """

    chunk_groups: tuple[ChunkGroup, ...] = ()
    public_path: str = ""
    hash: str = ""
    errors: tuple[str, ...] = field(default=())

    @property
    def has_errors(self) -> bool:
        """Whether the bundler reported a failed compilation."""
        return bool(self.errors)

    @property
    def entry_names(self) -> tuple[str, ...]:
        """Names of all chunk groups."""
        return tuple(group.name for group in self.chunk_groups)

    @classmethod
    def from_chunks(
        cls,
        chunks: Mapping[str, Iterable[str]],
        *,
        public_path: str = "",
        hash: str = "",  # noqa: A002
        errors: Iterable[str] = (),
    ) -> CompilationResult:
        """Build a result from a name -> files mapping.

        Example:
            >>> result = CompilationResult.from_chunks({"main": ["index-bundle.js"]})
            >>> result.entry_names
            ('main',)
        """
        return cls(
            chunk_groups=tuple(
                ChunkGroup(name=name, files=tuple(files)) for name, files in chunks.items()
            ),
            public_path=public_path,
            hash=hash,
            errors=tuple(errors),
        )

    @classmethod
    def from_stats(cls, stats: Mapping[str, Any]) -> CompilationResult:
        """Load a result from a webpack-style stats JSON document.

        Reads ``assetsByChunkName`` (string or list values), falling back to
        ``entrypoints`` when the former is absent, plus ``publicPath``,
        ``hash`` and ``errors``.

        Args:
            stats: Parsed stats document for a single compiler.

        Returns:
            CompilationResult for the document.

        Raises:
            StatsFormatError: If the document is malformed.
        """
        if not isinstance(stats, dict):
            msg = f"Stats document must be a JSON object, got {type(stats).__name__}"
            raise StatsFormatError(msg)

        if "assetsByChunkName" in stats:
            chunks = _chunks_from_assets_by_name(stats["assetsByChunkName"])
        else:
            chunks = _chunks_from_entrypoints(stats.get("entrypoints", {}))

        public_path = stats.get("publicPath") or ""
        if not isinstance(public_path, str):
            msg = "publicPath must be a string"
            raise StatsFormatError(msg)
        if public_path == _AUTO_PUBLIC_PATH:
            public_path = ""

        return cls.from_chunks(
            chunks,
            public_path=public_path,
            hash=str(stats.get("hash") or ""),
            errors=[_error_message(err) for err in stats.get("errors") or []],
        )


def load_stats_batch(stats: Mapping[str, Any]) -> list[CompilationResult]:
    """Expand a stats document into an ordered batch of results.

    A multi-compiler document carries one stats object per compiler under
    ``children``; any other document is a batch of one.
    """
    children = stats.get("children") if isinstance(stats, dict) else None
    if children and "assetsByChunkName" not in stats:
        if not isinstance(children, list):
            msg = "children must be a list of stats documents"
            raise StatsFormatError(msg)
        return [CompilationResult.from_stats(child) for child in children]
    return [CompilationResult.from_stats(stats)]


def _chunks_from_assets_by_name(value: Any) -> dict[str, list[str]]:
    if not isinstance(value, dict):
        msg = "assetsByChunkName must be a JSON object"
        raise StatsFormatError(msg)

    chunks: dict[str, list[str]] = {}
    for name, files in value.items():
        if isinstance(files, str):
            chunks[name] = [files]
        elif isinstance(files, list) and all(isinstance(f, str) for f in files):
            chunks[name] = list(files)
        else:
            msg = f"Files for chunk {name!r} must be a string or a list of strings"
            raise StatsFormatError(msg)
    return chunks


def _chunks_from_entrypoints(value: Any) -> dict[str, list[str]]:
    if not isinstance(value, dict):
        msg = "entrypoints must be a JSON object"
        raise StatsFormatError(msg)

    chunks: dict[str, list[str]] = {}
    for name, entrypoint in value.items():
        assets = entrypoint.get("assets", []) if isinstance(entrypoint, dict) else None
        if not isinstance(assets, list):
            msg = f"Entrypoint {name!r} must list its assets"
            raise StatsFormatError(msg)
        files: list[str] = []
        for asset in assets:
            # webpack 4 lists names, webpack 5 lists {"name": ..., "size": ...}
            if isinstance(asset, dict):
                asset = asset.get("name")  # noqa: PLW2901
            if not isinstance(asset, str):
                msg = f"Entrypoint {name!r} has an asset without a name"
                raise StatsFormatError(msg)
            files.append(asset)
        chunks[name] = files
    return chunks


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message", error))
    return str(error)
