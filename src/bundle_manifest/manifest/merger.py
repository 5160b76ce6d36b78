"""Combine manifests from several compilations or builds."""
from __future__ import annotations

from typing import TYPE_CHECKING

from bundle_manifest.manifest.model import Manifest

if TYPE_CHECKING:
    from collections.abc import Iterable


def merge(manifests: Iterable[Manifest]) -> Manifest:
    """Merge manifests in order, later entries replacing earlier ones.

    Replacement is per whole entry: a later manifest's entry for a name
    discards every kind the earlier entry had. Replaced entries keep the
    position where the name was first seen; entries missing from later
    manifests are kept.

    Args:
        manifests: Manifests in compilation order, or ``[prior, fresh]``.

    Returns:
        New manifest; inputs are not modified.
    """
    merged = Manifest()
    for manifest in manifests:
        for name, entry in manifest.entries.items():
            merged.entries[name] = entry.copy()
    return merged
