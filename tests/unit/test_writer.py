"""Tests for ManifestWriter."""
from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


class TestWrite:
    """Tests for writing manifests."""

    def test_writes_compact_json(self, tmp_path: Path) -> None:
        """Default output is compact JSON."""
        from bundle_manifest.manifest import Manifest, ManifestWriter

        destination = tmp_path / "webpack-assets.json"
        manifest = Manifest.from_dict({"main": {"js": "index-bundle.js"}})

        ManifestWriter().write(manifest, destination)

        assert destination.read_text() == '{"main":{"js":"index-bundle.js"}}'

    def test_pretty_print(self, tmp_path: Path) -> None:
        """pretty_print indents output without changing content."""
        from bundle_manifest.manifest import Manifest, ManifestWriter, WriteOptions

        destination = tmp_path / "assets.json"
        manifest = Manifest.from_dict({"main": {"js": "main.js"}})

        ManifestWriter().write(manifest, destination, WriteOptions(pretty_print=True))

        text = destination.read_text()
        assert "\n" in text
        assert json.loads(text) == {"main": {"js": "main.js"}}

    def test_creates_directory(self, tmp_path: Path) -> None:
        """Missing destination directories are created."""
        from bundle_manifest.manifest import Manifest, ManifestWriter

        destination = tmp_path / "build" / "nested" / "assets.json"

        ManifestWriter().write(Manifest(), destination)

        assert destination.read_text() == "{}"

    def test_overwrites_by_default(self, tmp_path: Path) -> None:
        """Without update mode, prior entries are discarded."""
        from bundle_manifest.manifest import Manifest, ManifestWriter

        destination = tmp_path / "assets.json"
        destination.write_text('{"old":{"js":"old.js"}}')

        ManifestWriter().write(Manifest.from_dict({"new": {"js": "new.js"}}), destination)

        assert json.loads(destination.read_text()) == {"new": {"js": "new.js"}}

    def test_update_existing_merges(self, tmp_path: Path) -> None:
        """Update mode keeps prior entries and replaces rebuilt ones."""
        from bundle_manifest.manifest import Manifest, ManifestWriter, WriteOptions

        destination = tmp_path / "assets.json"
        destination.write_text('{"one":{"js":"one-old.js","css":"one.css"},"two":{"js":"two.js"}}')

        written = ManifestWriter().write(
            Manifest.from_dict({"one": {"js": "one-new.js"}}),
            destination,
            WriteOptions(update_existing=True),
        )

        expected = {"one": {"js": "one-new.js"}, "two": {"js": "two.js"}}
        assert json.loads(destination.read_text()) == expected
        assert written.to_dict() == expected

    def test_update_with_corrupt_prior(self, tmp_path: Path) -> None:
        """A corrupt prior file is treated as empty."""
        from bundle_manifest.manifest import Manifest, ManifestWriter, WriteOptions

        destination = tmp_path / "assets.json"
        destination.write_text("{not json")

        ManifestWriter().write(
            Manifest.from_dict({"main": {"js": "main.js"}}),
            destination,
            WriteOptions(update_existing=True),
        )

        assert json.loads(destination.read_text()) == {"main": {"js": "main.js"}}

    def test_process_output(self, tmp_path: Path) -> None:
        """A custom renderer replaces the JSON output."""
        from bundle_manifest.manifest import Manifest, ManifestWriter, WriteOptions

        destination = tmp_path / "assets.js"
        options = WriteOptions(
            process_output=lambda data: "window.ASSETS = " + json.dumps(data) + ";"
        )

        manifest = Manifest.from_dict({"main": {"js": "main.js"}})
        ManifestWriter().write(manifest, destination, options)

        assert destination.read_text() == 'window.ASSETS = {"main": {"js": "main.js"}};'

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """Only the manifest remains after writing."""
        from bundle_manifest.manifest import Manifest, ManifestWriter

        destination = tmp_path / "assets.json"

        ManifestWriter().write(Manifest(), destination)

        assert [p.name for p in tmp_path.iterdir()] == ["assets.json"]

    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root ignores directory permissions",
    )
    def test_write_failure_raises(self, tmp_path: Path) -> None:
        """Unwritable destinations raise ManifestWriteError."""
        from bundle_manifest.manifest import Manifest, ManifestWriteError, ManifestWriter

        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0o500)
        try:
            with pytest.raises(ManifestWriteError):
                ManifestWriter().write(Manifest(), locked / "assets.json")
        finally:
            locked.chmod(0o700)

    def test_destination_parent_is_file(self, tmp_path: Path) -> None:
        """A file where the directory should be raises ManifestWriteError."""
        from bundle_manifest.manifest import Manifest, ManifestWriteError, ManifestWriter

        blocker = tmp_path / "dist"
        blocker.write_text("")

        with pytest.raises(ManifestWriteError) as exc_info:
            ManifestWriter().write(Manifest(), blocker / "assets.json")

        assert exc_info.value.destination == blocker / "assets.json"


class TestRead:
    """Tests for the update-mode reader."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        """Missing files read as an empty manifest."""
        from bundle_manifest.manifest import Manifest, ManifestWriter

        assert ManifestWriter().read(tmp_path / "missing.json") == Manifest()

    def test_wrong_shape_is_empty(self, tmp_path: Path) -> None:
        """Valid JSON with the wrong shape reads as empty."""
        from bundle_manifest.manifest import Manifest, ManifestWriter

        destination = tmp_path / "assets.json"
        destination.write_text('["main.js"]')

        assert ManifestWriter().read(destination) == Manifest()

    def test_roundtrip(self, tmp_path: Path) -> None:
        """Reading back a written manifest gives an equal mapping."""
        from bundle_manifest.manifest import Manifest, ManifestWriter

        destination = tmp_path / "assets.json"
        manifest = Manifest.from_dict(
            {
                "main": {"js": "main-1a2b.js", "jsSourceMap": "main-1a2b.js.map"},
                "styles": {"css": "/static/styles.css?9f8e", "cssSourceMap": "styles.css.map"},
            }
        )
        writer = ManifestWriter()

        writer.write(manifest, destination)

        assert writer.read(destination) == manifest
