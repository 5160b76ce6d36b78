"""Generate command implementation."""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from bundle_manifest.cli.config import ManifestSettings, get_config
from bundle_manifest.errors import ManifestError
from bundle_manifest.plugin import CompilationFailedError, ManifestPlugin
from bundle_manifest.types.compilation import CompilationResult, load_stats_batch
from bundle_manifest.types.kind import AssetKind

if TYPE_CHECKING:
    from pathlib import Path

    from bundle_manifest.manifest.model import Manifest

console = Console()
err_console = Console(stderr=True)


def run_generate(
    *,
    stats_files: list[Path],
    overrides: dict[str, Any],
    json_output: bool,
) -> None:
    """Execute generate command.

    Args:
        stats_files: Stats JSON files in compiler order.
        overrides: Settings given on the command line (None means unset).
        json_output: Print the manifest JSON instead of a summary.
    """
    try:
        settings = ManifestSettings(
            **{
                **get_config().model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
            }
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            err_console.print(f"[red]✗[/red] {field}: {error['msg']}")
        raise SystemExit(1) from None

    results = _load_results(stats_files)

    if len(results) > 1 and not settings.multi_compiler:
        err_console.print(
            f"[red]✗[/red] {len(results)} compilations found. "
            "Pass --multi-compiler to combine them into one manifest."
        )
        raise SystemExit(1)

    plugin = ManifestPlugin(settings, compiler_count=len(results))
    try:
        manifest = plugin.run_batch(results)
    except CompilationFailedError as e:
        err_console.print(f"[red]✗[/red] Compilation {e.index} failed, manifest not written")
        for error in e.errors:
            err_console.print(f"  - {error}")
        raise SystemExit(1) from None
    except ManifestError as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise SystemExit(1) from None

    if manifest is None:
        return

    if json_output:
        console.print_json(manifest.to_json())
        return

    _print_summary(manifest)
    console.print(f"[green]✓[/green] Manifest written to {settings.destination}")


def _load_results(stats_files: list[Path]) -> list[CompilationResult]:
    results: list[CompilationResult] = []
    for stats_file in stats_files:
        try:
            document = json.loads(stats_file.read_text(encoding="utf-8"))
            results.extend(load_stats_batch(document))
        except (OSError, json.JSONDecodeError, ManifestError) as e:
            err_console.print(f"[red]✗[/red] Cannot read stats from {stats_file}: {e}")
            raise SystemExit(1) from None
    return results


def _print_summary(manifest: Manifest) -> None:
    """Print one row per entry with a column per kind.

    Args:
        manifest: The written manifest.
    """
    entries = manifest.entries.values()
    kinds = [kind for kind in AssetKind if any(kind in entry for entry in entries)]

    table = Table(title="Manifest")
    table.add_column("Entry", style="cyan")
    for kind in kinds:
        table.add_column(kind.manifest_key)

    for name, entry in manifest.entries.items():
        table.add_row(name, *[entry.get(kind) or "[dim]-[/dim]" for kind in kinds])

    console.print(table)
