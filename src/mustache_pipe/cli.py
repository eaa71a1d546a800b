"""
mustache_pipe.cli - Command Line Interface
==========================================

This module exposes the transform stage as a Typer command. It is a thin
host: it reads the given files, passes them through the stage and writes
the results under a destination directory.

Usage Examples
--------------
Render with a JSON view:
    $ mustache-pipe render site/*.mustache --view data.json --dest build

Inline view, custom delimiters and a named partial:
    $ mustache-pipe render page.mustache --data '{"title": "Hi"}' \\
          --tags "[[ ]]" --partial header=partials/header.mustache

Show help:
    $ mustache-pipe --help
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mustache_pipe import __version__
from mustache_pipe.errors import MustachePipeError
from mustache_pipe.io import read_sources, write_file
from mustache_pipe.models import DEFAULT_EXTENSION, RenderOptions, SourceFile
from mustache_pipe.stage import mustache


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="mustache-pipe",
    help="Render files through Mustache templates.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"[bold green]mustache-pipe[/] version [cyan]{__version__}[/]")
        raise typer.Exit()


# =============================================================================
# Option Parsers
# =============================================================================

def parse_tags(value: str) -> tuple[str, str]:
    """Parse a delimiter pair written as ``"OPEN CLOSE"``."""
    parts = value.split()
    if len(parts) != 2:
        raise typer.BadParameter(f"Must be 'OPEN CLOSE', got: {value!r}")
    return parts[0], parts[1]


def parse_partial(value: str) -> tuple[str, Path]:
    """Parse a partial argument in format NAME=PATH."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be NAME=PATH, got: {value!r}")
    name, path = value.split("=", 1)
    return name.strip(), Path(path)


def load_partials(values: list[str]) -> dict[str, str]:
    partials: dict[str, str] = {}
    for name, path in map(parse_partial, values):
        try:
            partials[name] = path.read_text(encoding="utf-8")
        except OSError as e:
            raise typer.BadParameter(f"Cannot read partial {name!r}: {e}") from e
    return partials


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]mustache-pipe[/] - Render files through Mustache templates.
    """


# =============================================================================
# Render Command
# =============================================================================

@app.command()
def render(
    sources: Annotated[
        list[Path],
        typer.Argument(
            help="Template files to render",
            exists=True,
            dir_okay=False,
        ),
    ],
    view: Annotated[
        Path | None,
        typer.Option(
            "--view",
            "-v",
            help="JSON file holding the view data",
        ),
    ] = None,
    data: Annotated[
        str | None,
        typer.Option(
            "--data",
            "-d",
            help="Inline JSON view data",
        ),
    ] = None,
    dest: Annotated[
        Path,
        typer.Option(
            "--dest",
            "-o",
            help="Directory to write rendered files into",
        ),
    ] = Path("."),
    base: Annotated[
        Path | None,
        typer.Option(
            "--base",
            "-b",
            help="Base directory; output keeps paths relative to it",
        ),
    ] = None,
    extension: Annotated[
        str,
        typer.Option(
            "--extension",
            "-e",
            help="Extension for rendered files",
        ),
    ] = DEFAULT_EXTENSION,
    tags: Annotated[
        str | None,
        typer.Option(
            "--tags",
            "-t",
            help="Tag delimiters as 'OPEN CLOSE', e.g. '[[ ]]'",
        ),
    ] = None,
    partial: Annotated[
        list[str] | None,
        typer.Option(
            "--partial",
            "-p",
            help="Named partial as NAME=PATH. Repeatable.",
            metavar="NAME=PATH",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """
    Render template files and write the results.

    Each file that fails is reported and skipped; the exit code is 1 if
    any file failed.

    [bold]Examples:[/]

        mustache-pipe render index.mustache --view data.json
        mustache-pipe render src/*.mustache --base src --dest build -e .txt
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )

    if view is not None and data is not None:
        rprint("[red]Error:[/] Use either --view or --data, not both")
        raise typer.Exit(1)

    view_source: Path | dict = view if view is not None else {}
    if data is not None:
        try:
            view_source = json.loads(data)
        except json.JSONDecodeError as e:
            rprint(f"[red]Error:[/] Invalid --data JSON: {escape(str(e))}")
            raise typer.Exit(1)
        if not isinstance(view_source, dict):
            rprint("[red]Error:[/] --data must be a JSON object")
            raise typer.Exit(1)

    option_values: dict = {"extension": extension}
    if tags is not None:
        option_values["tags"] = parse_tags(tags)

    try:
        options = RenderOptions(**option_values)
    except ValidationError as e:
        rprint(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    if base is not None:
        base = base.resolve()
        sources = [source.resolve() for source in sources]
        outside = [source for source in sources if not source.is_relative_to(base)]
        if outside:
            listed = ", ".join(str(source) for source in outside)
            rprint(f"[red]Error:[/] Not inside --base {escape(str(base))}: {escape(listed)}")
            raise typer.Exit(1)

    stage = mustache(view_source, options, load_partials(partial or []))

    failures: list[tuple[SourceFile, MustachePipeError]] = []

    def record_failure(error: MustachePipeError, file: SourceFile) -> None:
        failures.append((file, error))

    written: list[Path] = []
    skipped: list[Path] = []
    for file in stage(read_sources(sources, base=base), on_error=record_failure):
        output_path = write_file(file, dest)
        if output_path is None:
            skipped.append(file.path)
        else:
            written.append(output_path)

    for output_path in written:
        console.print(f"[green]rendered[/] {escape(str(output_path))}")
    for source in skipped:
        console.print(f"[dim]skipped empty[/] {escape(str(source))}")

    if failures:
        error_table = Table(title="Failed Files", show_header=True)
        error_table.add_column("File", style="cyan")
        error_table.add_column("Error", style="red")
        for file, error in failures:
            error_table.add_row(escape(str(file.path)), escape(str(error)))
        console.print(error_table)
        raise typer.Exit(1)

    console.print(Panel(
        f"[bold green]Rendered {len(written)} file(s)[/] into {dest}",
        border_style="green",
    ))


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
