"""Bundler integration: turn completion notifications into a manifest file.

The bundler calls ``ManifestPlugin.on_done`` once per compilation. With
several compilers the notifications may arrive in any order and from any
thread; results are buffered behind a completion barrier and the manifest
is written once, after the last compiler reports.
"""
from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import TYPE_CHECKING

import structlog

from bundle_manifest.errors import ManifestError
from bundle_manifest.manifest.collector import AssetCollector
from bundle_manifest.manifest.merger import merge
from bundle_manifest.manifest.writer import ManifestWriter, WriteOptions

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from bundle_manifest.cli.config import ManifestSettings
    from bundle_manifest.manifest.collector import AuxiliaryAssetProvider
    from bundle_manifest.manifest.model import Manifest
    from bundle_manifest.manifest.serialization import ManifestDict
    from bundle_manifest.types.compilation import CompilationResult

logger = structlog.get_logger()

_MAX_ERRORS_IN_MESSAGE = 5


class CompilationFailedError(ManifestError):
    """The bundler reported errors; no manifest was written."""

    def __init__(self, errors: Sequence[str], *, index: int = 0) -> None:
        self.errors = list(errors)
        self.index = index

        msg_lines = [f"compilation {index} failed with {len(self.errors)} error(s):"]
        for error in self.errors[:_MAX_ERRORS_IN_MESSAGE]:
            msg_lines.append(f"- {error}")
        if len(self.errors) > _MAX_ERRORS_IN_MESSAGE:
            msg_lines.append(f"- ... and {len(self.errors) - _MAX_ERRORS_IN_MESSAGE} more")

        super().__init__("\n".join(msg_lines))


class CompletionBarrier:
    """Buffers compilation results until every compiler has reported.

    Thread-safe. Results are returned in compiler-index order regardless of
    arrival order, and the barrier resets for the next build.
    """

    def __init__(self, expected: int) -> None:
        if expected < 1:
            msg = f"Expected compilation count must be positive, got {expected}"
            raise ValueError(msg)
        self.expected = expected
        self._lock = Lock()
        self._results: dict[int, CompilationResult] = {}

    @property
    def pending(self) -> int:
        """Number of compilers that have not reported yet."""
        with self._lock:
            return self.expected - len(self._results)

    def arrive(self, index: int, result: CompilationResult) -> list[CompilationResult] | None:
        """Record a result.

        Args:
            index: Position of the compiler in the batch.
            result: Its compilation result.

        Returns:
            The complete ordered batch on the last arrival, otherwise None.

        Raises:
            ValueError: If the index is out of range or already reported.
        """
        if not 0 <= index < self.expected:
            msg = f"Compiler index {index} out of range for batch of {self.expected}"
            raise ValueError(msg)

        with self._lock:
            if index in self._results:
                msg = f"Compiler {index} already reported for this build"
                raise ValueError(msg)
            self._results[index] = result
            if len(self._results) < self.expected:
                return None
            batch = [self._results[i] for i in range(self.expected)]
            self._results = {}
            return batch

    def reset(self) -> None:
        """Discard results buffered for an abandoned build."""
        with self._lock:
            self._results = {}


class ManifestPlugin:
    """Adapter between bundler completion events and the manifest writer.

    Example:
        >>> plugin = ManifestPlugin(ManifestSettings(path=Path("dist")))
        >>> manifest = plugin.on_done(CompilationResult.from_chunks({"main": ["main.js"]}))
    """

    def __init__(
        self,
        settings: ManifestSettings,
        *,
        providers: Sequence[AuxiliaryAssetProvider] = (),
        compiler_count: int = 1,
        incremental: bool = False,
        process_output: Callable[[ManifestDict], str] | None = None,
        writer: ManifestWriter | None = None,
    ) -> None:
        """Initialize the plugin.

        Args:
            settings: Output configuration.
            providers: Auxiliary asset providers passed to the collector.
            compiler_count: Compilers in the batch; above 1 needs multi-compiler mode.
            incremental: Write after every compilation through the update path
                instead of waiting for the whole batch.
            process_output: Custom renderer for the manifest file.
            writer: Writer to use (a new one by default).

        Raises:
            ValueError: If several compilers are configured without multi-compiler mode.
        """
        if compiler_count > 1 and not settings.multi_compiler:
            msg = f"{compiler_count} compilers configured but multi-compiler mode is disabled"
            raise ValueError(msg)

        self.settings = settings
        self.incremental = incremental
        self.process_output = process_output
        self.collector = AssetCollector(
            providers=providers,
            include_other=settings.include_other,
        )
        self.writer = writer or ManifestWriter()
        self._barrier = CompletionBarrier(compiler_count)

    def on_done(self, result: CompilationResult, *, index: int = 0) -> Manifest | None:
        """Handle a compilation-done notification.

        Args:
            result: The finished compilation.
            index: Position of the reporting compiler in the batch.

        Returns:
            The manifest written, or None when nothing was written yet.

        Raises:
            CompilationFailedError: If this compilation reported errors.
            ManifestWriteError: If the manifest cannot be written.
        """
        if self.incremental:
            self._check(result, index)
            manifest = self.collector.collect(result)
            return self._write(manifest, update_existing=True)

        batch = self._barrier.arrive(index, result)
        self._check(result, index)
        if batch is None:
            logger.debug("compilation_buffered", index=index, pending=self._barrier.pending)
            return None

        failed = sum(1 for r in batch if r.has_errors)
        if failed:
            logger.warning("manifest_skipped", failed_count=failed, batch_size=len(batch))
            return None

        manifest = merge(self.collector.collect(r) for r in batch)
        return self._write(manifest, update_existing=self.settings.update)

    def run_batch(self, results: Sequence[CompilationResult]) -> Manifest | None:
        """Feed a whole batch in compiler order.

        A failed compilation abandons the batch, so the plugin is ready for
        the next build.

        Returns:
            The manifest written after the last result.

        Raises:
            CompilationFailedError: If any compilation reported errors.
        """
        manifest = None
        try:
            for index, result in enumerate(results):
                manifest = self.on_done(result, index=index)
        except CompilationFailedError:
            self._barrier.reset()
            raise
        return manifest

    def _check(self, result: CompilationResult, index: int) -> None:
        if result.has_errors:
            logger.error("compilation_failed", index=index, error_count=len(result.errors))
            raise CompilationFailedError(result.errors, index=index)

    def _write(self, manifest: Manifest, *, update_existing: bool) -> Manifest:
        options = replace(
            WriteOptions.from_settings(self.settings),
            update_existing=update_existing,
            process_output=self.process_output,
        )
        return self.writer.write(manifest, self.settings.destination, options)
