"""Extract per-entry asset paths from a compilation result."""
from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Protocol

import structlog

from bundle_manifest.classifier import classify
from bundle_manifest.manifest.model import Manifest
from bundle_manifest.types.compilation import CompilationResult

logger = structlog.get_logger()

# "/x", "//cdn/x", "https://cdn/x", "data:..."
_ABSOLUTE_PATH = re.compile(r"^(?:/|[a-zA-Z][a-zA-Z0-9+.-]*:)")
_HASH_TOKEN = "[hash]"
_NAME_TOKEN = "[name]"


class AuxiliaryAssetProvider(Protocol):
    """Source of assets emitted outside the chunk groups' file lists.

    Implemented by build steps such as stylesheet extraction that produce
    files on behalf of an entry.
    """

    def assets_for(self, result: CompilationResult) -> Iterable[tuple[str, str]]:
        """Yield ``(entry_name, path)`` pairs for the given compilation."""
        ...


class ExtractedAssetProvider:
    """Provider for files named from a ``[name]``/``[hash]`` template.

    Example:
        >>> provider = ExtractedAssetProvider("[name]-bundle.css", entries=["styles"])
        >>> list(provider.assets_for(CompilationResult()))
        [('styles', 'styles-bundle.css')]
    """

    def __init__(self, template: str, entries: Sequence[str]) -> None:
        """Initialize the provider.

        Args:
            template: Output filename template.
            entries: Entry names the step produced a file for.
        """
        self.template = template
        self.entries = tuple(entries)

    def assets_for(self, result: CompilationResult) -> Iterable[tuple[str, str]]:
        for name in self.entries:
            path = self.template.replace(_NAME_TOKEN, name).replace(_HASH_TOKEN, result.hash)
            yield name, path


def resolve_public_path(result: CompilationResult) -> str:
    """Return the public path with ``[hash]`` replaced by the compilation hash."""
    return result.public_path.replace(_HASH_TOKEN, result.hash)


def resolve_path(public_path: str, path: str) -> str:
    """Prefix an emitted path with the public path.

    Absolute and URL-like paths are returned unchanged.

    Example:
        >>> resolve_path("/static/", "main.js?abc123")
        '/static/main.js?abc123'
    """
    if not public_path or _ABSOLUTE_PATH.match(path):
        return path
    return public_path + path


class AssetCollector:
    """Build a manifest from one compilation result.

    Every chunk group becomes an entry, shared chunks included. Within one
    collection pass the first path seen for an (entry, kind) pair wins.

    Example:
        >>> collector = AssetCollector()
        >>> result = CompilationResult.from_chunks({"main": ["index-bundle.js"]})
        >>> collector.collect(result).to_json()
        '{"main":{"js":"index-bundle.js"}}'
    """

    def __init__(
        self,
        *,
        providers: Sequence[AuxiliaryAssetProvider] = (),
        include_other: bool = False,
    ) -> None:
        """Initialize the collector.

        Args:
            providers: Auxiliary asset providers, consulted after chunk groups.
            include_other: Record files of unrecognized kinds under ``other``.
        """
        self.providers = tuple(providers)
        self.include_other = include_other

    def collect(self, result: CompilationResult) -> Manifest:
        """Extract the manifest for a compilation.

        Args:
            result: Compilation result to read.

        Returns:
            Manifest with one entry per chunk group plus any provider entries.
        """
        manifest = Manifest()
        public_path = resolve_public_path(result)

        for group in result.chunk_groups:
            manifest.entry(group.name)
            for path in group.files:
                self._record(manifest, group.name, resolve_path(public_path, path))

        for provider in self.providers:
            for name, path in provider.assets_for(result):
                self._record(manifest, name, resolve_path(public_path, path))

        logger.debug("compilation_collected", entry_count=len(manifest), hash=result.hash)
        return manifest

    def _record(self, manifest: Manifest, name: str, path: str) -> None:
        kind = classify(path)
        if not kind.tracked and not self.include_other:
            return
        if not manifest.entry(name).record(kind, path):
            logger.debug("duplicate_kind_dropped", entry=name, kind=kind.value, path=path)
