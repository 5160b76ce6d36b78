"""Asset kinds tracked in a manifest."""
from __future__ import annotations

from enum import Enum


class AssetKind(str, Enum):
    """Semantic kind of an emitted file, derived from its extension.

    Declaration order is the order kinds are written within an entry.
    """

    SCRIPT = "script"
    SCRIPT_MAP = "script-map"
    STYLESHEET = "stylesheet"
    STYLESHEET_MAP = "stylesheet-map"
    OTHER = "other"

    @property
    def manifest_key(self) -> str:
        """Key used for this kind in the manifest JSON."""
        return _MANIFEST_KEYS[self]

    @property
    def tracked(self) -> bool:
        """Whether the kind is recorded without opting in to other files."""
        return self is not AssetKind.OTHER

    @classmethod
    def from_manifest_key(cls, key: str) -> AssetKind:
        """Look up a kind by its manifest JSON key.

        Raises:
            ValueError: If the key is not a known manifest key.
        """
        for kind, manifest_key in _MANIFEST_KEYS.items():
            if manifest_key == key:
                return kind
        msg = f"Unknown manifest key: {key!r}"
        raise ValueError(msg)


_MANIFEST_KEYS: dict[AssetKind, str] = {
    AssetKind.SCRIPT: "js",
    AssetKind.SCRIPT_MAP: "jsSourceMap",
    AssetKind.STYLESHEET: "css",
    AssetKind.STYLESHEET_MAP: "cssSourceMap",
    AssetKind.OTHER: "other",
}
