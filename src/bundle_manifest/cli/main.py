"""Main CLI entry point using Typer.

This module defines the top-level CLI commands:
- bundle-manifest generate: Write a manifest from bundler stats files
- bundle-manifest show: Display an existing manifest
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path  # noqa: TC003 - Typer requires runtime access
from typing import Annotated

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console

from bundle_manifest import __version__
from bundle_manifest.cli.config import get_config

app = typer.Typer(
    name="bundle-manifest",
    help="Bundle manifest - map entry points to emitted assets",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"bundle-manifest {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version", "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
) -> None:
    """Bundle manifest - map entry points to emitted assets.

    Use 'bundle-manifest COMMAND --help' for information on specific commands.
    """
    try:
        level = "DEBUG" if verbose else get_config().log_level
    except ValidationError as e:
        err_console.print(f"[red]✗[/red] Invalid configuration: {e}")
        raise SystemExit(1) from None

    # stdout is reserved for command output
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        logger_factory=lambda *_: structlog.PrintLogger(sys.stderr),
    )


@app.command()
def generate(
    stats: Annotated[
        list[Path],
        typer.Argument(help="Stats JSON file(s), one per compiler.", exists=True, dir_okay=False),
    ],
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Directory to write the manifest to."),
    ] = None,
    filename: Annotated[
        str | None,
        typer.Option("--filename", "-f", help="Manifest file name."),
    ] = None,
    update: Annotated[
        bool | None,
        typer.Option("--update/--no-update", help="Merge into an existing manifest."),
    ] = None,
    pretty: Annotated[
        bool | None,
        typer.Option("--pretty/--compact", help="Indent the manifest JSON."),
    ] = None,
    multi_compiler: Annotated[
        bool,
        typer.Option("--multi-compiler", help="Combine several compilations into one manifest."),
    ] = False,
    include_other: Annotated[
        bool,
        typer.Option("--include-other", help="Record files of unrecognized kinds."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the written manifest as JSON."),
    ] = False,
) -> None:
    """Generate a manifest from bundler stats.

    Examples:
        bundle-manifest generate stats.json

        bundle-manifest generate stats.json --path dist --pretty

        bundle-manifest generate client.json server.json --multi-compiler
    """
    from bundle_manifest.cli.commands.generate import run_generate  # noqa: PLC0415

    run_generate(
        stats_files=stats,
        overrides={
            "path": path,
            "filename": filename,
            "update": update,
            "pretty_print": pretty,
            "multi_compiler": multi_compiler or None,
            "include_other": include_other or None,
        },
        json_output=json_output,
    )


@app.command()
def show(
    manifest: Annotated[
        Path,
        typer.Argument(help="Manifest file to display.", exists=True, dir_okay=False),
    ],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output raw JSON."),
    ] = False,
) -> None:
    """Show the entries of a manifest file.

    Examples:
        bundle-manifest show dist/webpack-assets.json

        bundle-manifest show dist/webpack-assets.json --json
    """
    from bundle_manifest.cli.commands.show import run_show  # noqa: PLC0415

    run_show(manifest_path=manifest, json_output=json_output)


if __name__ == "__main__":
    app()
