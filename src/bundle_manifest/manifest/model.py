"""Manifest model: entry name -> asset kind -> path."""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from bundle_manifest.manifest.serialization import (
    ManifestDict,
    ManifestParseError,
    parse_manifest,
    serialize_manifest,
)
from bundle_manifest.types.kind import AssetKind


@dataclass
class EntryManifest:
    """Files produced for one entry, at most one path per kind."""

    paths: dict[AssetKind, str] = field(default_factory=dict)

    def record(self, kind: AssetKind, path: str) -> bool:
        """Record a path unless the kind already has one.

        Returns:
            True if the path was recorded, False if an earlier path won.
        """
        if kind in self.paths:
            return False
        self.paths[kind] = path
        return True

    def get(self, kind: AssetKind) -> str | None:
        return self.paths.get(kind)

    def copy(self) -> EntryManifest:
        return EntryManifest(paths=dict(self.paths))

    def __contains__(self, kind: object) -> bool:
        return kind in self.paths

    def __len__(self) -> int:
        return len(self.paths)

    def to_dict(self) -> dict[str, str]:
        """Convert to the JSON form, kinds in AssetKind order."""
        return {kind.manifest_key: self.paths[kind] for kind in AssetKind if kind in self.paths}

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> EntryManifest:
        """Create from the JSON form.

        Raises:
            ValueError: If a key is not a known manifest key.
        """
        return cls(paths={AssetKind.from_manifest_key(key): path for key, path in data.items()})


@dataclass
class Manifest:
    """Mapping of entry name to the files produced for it.

    Entries keep insertion order, which is the order chunk groups were
    declared in. Equality ignores order.

    Example:
        >>> manifest = Manifest()
        >>> manifest.entry("main").record(AssetKind.SCRIPT, "index-bundle.js")
        True
        >>> manifest.to_json()
        '{"main":{"js":"index-bundle.js"}}'
    """

    entries: dict[str, EntryManifest] = field(default_factory=dict)

    def entry(self, name: str) -> EntryManifest:
        """Get the entry for a name, creating it at the end if absent."""
        return self.entries.setdefault(name, EntryManifest())

    def names(self) -> list[str]:
        return list(self.entries)

    def __getitem__(self, name: str) -> EntryManifest:
        return self.entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> ManifestDict:
        """Convert to the JSON form."""
        return {name: entry.to_dict() for name, entry in self.entries.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, str]]) -> Manifest:
        """Create from the JSON form.

        Raises:
            ManifestParseError: If an entry uses an unknown manifest key.
        """
        entries: dict[str, EntryManifest] = {}
        for name, entry in data.items():
            try:
                entries[name] = EntryManifest.from_dict(entry)
            except ValueError as err:
                msg = f"Invalid entry {name!r}: {err}"
                raise ManifestParseError(msg) from err
        return cls(entries=entries)

    def to_json(self, *, pretty_print: bool = False) -> str:
        """Serialize to manifest JSON."""
        return serialize_manifest(self.to_dict(), pretty_print=pretty_print)

    @classmethod
    def from_json(cls, text: str) -> Manifest:
        """Parse manifest JSON.

        Raises:
            ManifestParseError: If the text is not a valid manifest.
        """
        return cls.from_dict(parse_manifest(text))
