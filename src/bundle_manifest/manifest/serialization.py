"""JSON serialization for manifest files.

Output keeps insertion order: entries in declaration order, kinds in
AssetKind order. Compact output has no whitespace, so the same manifest
always serializes to the same bytes.
"""
from __future__ import annotations

import json
from typing import Any

from bundle_manifest.errors import ManifestError

# entry name -> manifest key -> path
ManifestDict = dict[str, dict[str, str]]


class ManifestParseError(ManifestError):
    """Text is not a valid manifest document."""


def serialize_manifest(data: ManifestDict, *, pretty_print: bool = False) -> str:
    """Serialize a manifest dict to JSON.

    Args:
        data: Manifest as produced by ``Manifest.to_dict()``.
        pretty_print: Indent with two spaces instead of compact output.

    Returns:
        JSON string.

    Example:
        >>> serialize_manifest({"main": {"js": "index-bundle.js"}})
        '{"main":{"js":"index-bundle.js"}}'
    """
    if pretty_print:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def parse_manifest(text: str) -> ManifestDict:
    """Parse and validate manifest JSON.

    Args:
        text: Contents of a manifest file.

    Returns:
        Manifest dict with string paths.

    Raises:
        ManifestParseError: If the text is not JSON or has the wrong shape.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as err:
        msg = f"Manifest is not valid JSON: {err}"
        raise ManifestParseError(msg) from err

    if not isinstance(data, dict):
        msg = f"Manifest must be a JSON object, got {type(data).__name__}"
        raise ManifestParseError(msg)

    for name, entry in data.items():
        if not isinstance(entry, dict):
            msg = f"Entry {name!r} must be a JSON object"
            raise ManifestParseError(msg)
        for key, path in entry.items():
            if not isinstance(path, str):
                msg = f"Path for {name!r}.{key} must be a string"
                raise ManifestParseError(msg)

    return data
