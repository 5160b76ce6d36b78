"""Tests for merging manifests."""
from __future__ import annotations


class TestMerge:
    """Tests for merge()."""

    def test_single_manifest_unchanged(self) -> None:
        """merge([M]) == M."""
        from bundle_manifest.manifest import Manifest, merge

        manifest = Manifest.from_dict({"main": {"js": "main.js", "css": "main.css"}})

        assert merge([manifest]) == manifest

    def test_empty_input(self) -> None:
        """Merging nothing gives an empty manifest."""
        from bundle_manifest.manifest import Manifest, merge

        assert merge([]) == Manifest()

    def test_disjoint_union(self) -> None:
        """Manifests without shared names are combined."""
        from bundle_manifest.manifest import Manifest, merge

        a = Manifest.from_dict({"one": {"js": "one-bundle.js"}})
        b = Manifest.from_dict({"two": {"js": "two-bundle.js"}})

        assert merge([a, b]).to_dict() == {
            "one": {"js": "one-bundle.js"},
            "two": {"js": "two-bundle.js"},
        }

    def test_later_entry_replaces_whole_entry(self) -> None:
        """Kinds only in the earlier entry are discarded."""
        from bundle_manifest.manifest import Manifest, merge

        a = Manifest.from_dict(
            {"x": {"js": "x-old.js", "css": "x-old.css"}, "y": {"js": "y.js"}}
        )
        b = Manifest.from_dict({"x": {"js": "x-new.js"}})

        assert merge([a, b]).to_dict() == {"x": {"js": "x-new.js"}, "y": {"js": "y.js"}}

    def test_replaced_entry_keeps_position(self) -> None:
        """Key order is first-seen order across the sequence."""
        from bundle_manifest.manifest import Manifest, merge

        a = Manifest.from_dict({"x": {"js": "x1.js"}, "y": {"js": "y.js"}})
        b = Manifest.from_dict({"z": {"js": "z.js"}, "x": {"js": "x2.js"}})

        assert merge([a, b]).names() == ["x", "y", "z"]

    def test_inputs_not_modified(self) -> None:
        """Merging copies entries."""
        from bundle_manifest.manifest import Manifest, merge
        from bundle_manifest.types import AssetKind

        a = Manifest.from_dict({"x": {"js": "x.js"}})
        merged = merge([a])
        merged["x"].record(AssetKind.STYLESHEET, "x.css")

        assert "css" not in a["x"].to_dict()

    def test_deterministic_bytes(self) -> None:
        """Same input sequence gives identical output."""
        from bundle_manifest.manifest import Manifest, merge

        a = Manifest.from_dict({"b": {"js": "b.js"}, "a": {"js": "a.js"}})
        b = Manifest.from_dict({"c": {"css": "c.css"}, "a": {"js": "a2.js"}})

        assert merge([a, b]).to_json() == merge([a, b]).to_json()
        assert merge([a, b]).to_json() == (
            '{"b":{"js":"b.js"},"a":{"js":"a2.js"},"c":{"css":"c.css"}}'
        )
