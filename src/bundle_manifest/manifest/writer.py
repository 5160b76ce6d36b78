"""Persist manifests to disk.

Writes go to a temporary file in the destination directory which is then
renamed over the destination, so readers never observe a partial file.
"""
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import TYPE_CHECKING

import structlog

from bundle_manifest.errors import ManifestError
from bundle_manifest.manifest.merger import merge
from bundle_manifest.manifest.model import Manifest
from bundle_manifest.manifest.serialization import ManifestParseError, serialize_manifest

if TYPE_CHECKING:
    from collections.abc import Callable

    from bundle_manifest.cli.config import ManifestSettings
    from bundle_manifest.manifest.serialization import ManifestDict

logger = structlog.get_logger()

_FILE_MODE = 0o644


class ManifestWriteError(ManifestError):
    """Manifest could not be written to its destination."""

    def __init__(self, destination: Path, error: OSError) -> None:
        self.destination = destination
        self.error = error
        super().__init__(f"Cannot write manifest to {destination}: {error}")


@dataclass(frozen=True)
class WriteOptions:
    """How a manifest is written.

    Attributes:
        pretty_print: Indent the JSON output.
        update_existing: Merge into the manifest already at the destination.
        process_output: Replaces the default JSON rendering when set.
    """

    pretty_print: bool = False
    update_existing: bool = False
    process_output: Callable[[ManifestDict], str] | None = None

    @classmethod
    def from_settings(cls, settings: ManifestSettings) -> WriteOptions:
        return cls(pretty_print=settings.pretty_print, update_existing=settings.update)


class ManifestWriter:
    """Writes manifests, optionally merging with the file on disk.

    Writes through one instance are serialized, so concurrent update-mode
    writes each see the previous write's result.
    """

    def __init__(self) -> None:
        self._lock = Lock()

    def read(self, destination: Path) -> Manifest:
        """Read the manifest at a destination.

        Args:
            destination: Manifest file path.

        Returns:
            The stored manifest, or an empty one if the file is missing or
            unreadable.
        """
        if not destination.exists():
            return Manifest()

        try:
            return Manifest.from_json(destination.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ManifestParseError) as e:
            logger.warning("prior_manifest_unreadable", path=str(destination), error=str(e))
            return Manifest()

    def write(
        self,
        manifest: Manifest,
        destination: Path,
        options: WriteOptions | None = None,
    ) -> Manifest:
        """Write a manifest to a destination file.

        Args:
            manifest: Manifest to persist.
            destination: Target file; its directory is created if absent.
            options: Write options (defaults to compact overwrite).

        Returns:
            The manifest as written, after any merge with the prior file.

        Raises:
            ManifestWriteError: If the directory or file cannot be written.
        """
        options = options or WriteOptions()

        with self._lock:
            if options.update_existing:
                manifest = merge([self.read(destination), manifest])

            data = manifest.to_dict()
            if options.process_output is not None:
                text = options.process_output(data)
            else:
                text = serialize_manifest(data, pretty_print=options.pretty_print)

            try:
                _write_atomic(destination, text)
            except OSError as err:
                raise ManifestWriteError(destination, err) from err

        logger.info("manifest_written", path=str(destination), entry_count=len(manifest))
        return manifest


def _write_atomic(destination: Path, text: str) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.",
        suffix=".tmp",
        dir=destination.parent,
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        tmp_path.chmod(_FILE_MODE)
        tmp_path.replace(destination)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
