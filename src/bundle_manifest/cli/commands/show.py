"""Show command implementation."""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.tree import Tree

from bundle_manifest.manifest.model import Manifest
from bundle_manifest.manifest.serialization import ManifestParseError

if TYPE_CHECKING:
    from pathlib import Path

console = Console()
err_console = Console(stderr=True)


def run_show(*, manifest_path: Path, json_output: bool) -> None:
    """Execute show command."""
    try:
        manifest = Manifest.from_json(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ManifestParseError) as e:
        err_console.print(f"[red]✗[/red] Cannot read manifest {manifest_path}: {e}")
        raise SystemExit(1) from None

    if json_output:
        console.print_json(manifest.to_json())
        return

    if not manifest:
        console.print("[yellow]![/yellow] Manifest has no entries.")
        return

    tree = Tree(f"[bold]{manifest_path}[/bold]")
    for name, entry in manifest.entries.items():
        branch = tree.add(f"[cyan]{name}[/cyan]")
        for key, path in entry.to_dict().items():
            branch.add(f"{key} [dim]{path}[/dim]")

    console.print(tree)
    console.print(f"[green]✓[/green] {len(manifest)} entries")
