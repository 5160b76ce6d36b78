"""Classify emitted files by extension."""
from __future__ import annotations

from bundle_manifest.types.kind import AssetKind

# Checked in order: source maps before the plain extensions they end with.
_SUFFIXES: tuple[tuple[str, AssetKind], ...] = (
    (".js.map", AssetKind.SCRIPT_MAP),
    (".css.map", AssetKind.STYLESHEET_MAP),
    (".js", AssetKind.SCRIPT),
    (".css", AssetKind.STYLESHEET),
)


def strip_query(path: str) -> str:
    """Remove everything from the first ``?`` onwards.

    Example:
        >>> strip_query("main.js?3f2a9c")
        'main.js'
    """
    return path.split("?", 1)[0]


def classify(path: str) -> AssetKind:
    """Determine the kind of an emitted file.

    The query string is ignored for classification; callers keep the
    original path for the manifest.

    Args:
        path: Emitted file path, possibly with a ``?hash`` suffix.

    Returns:
        The AssetKind, ``OTHER`` for unrecognized extensions.
    """
    bare = strip_query(path)
    for suffix, kind in _SUFFIXES:
        if bare.endswith(suffix):
            return kind
    return AssetKind.OTHER
