"""CLI entry point for ref-renumber."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from ref_renumber import __version__
from ref_renumber.config import ConfigError, load_config
from ref_renumber.renumber import LabelStyle, renumber_file
from ref_renumber.report import print_summary

logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="ref-renumber",
    help="Renumber TS section.bullet references in a markdown style guide.",
    pretty_exceptions_show_locals=False,
)
console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ref-renumber {__version__}")
        raise typer.Exit()


@app.command()
def main(
    file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Markdown document (default: ./README.md)"),
    ] = None,
    style: Annotated[
        Optional[LabelStyle],
        typer.Option("--style", help="Bullet grammar: single '[TS' or double '[[TS'"),
    ] = None,
    section_start: Annotated[
        Optional[int],
        typer.Option("--section-start", help="Index given to the first '## ' header"),
    ] = None,
    config: Annotated[
        Optional[Path], typer.Option("--config", help="YAML config file path")
    ] = None,
    write: Annotated[
        bool, typer.Option("--write", help="Rewrite the input file instead of printing")
    ] = False,
    check: Annotated[
        bool, typer.Option("--check", help="Exit 1 if the document needs renumbering")
    ] = False,
    summary: Annotated[
        bool, typer.Option("--summary", help="Print a section table to stderr")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True),
    ] = None,
) -> None:
    """Renumber reference bullets and print the document to stdout."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if write and check:
        console.print("[red]--write and --check cannot be combined[/red]")
        raise typer.Exit(2)

    try:
        cfg = load_config(config).merge(
            input_path=file, style=style, section_start=section_start
        )
    except (ConfigError, FileNotFoundError) as exc:
        console.print(f"[red]Invalid config: {exc}[/red]")
        raise typer.Exit(1) from exc

    logger.debug(
        "Renumbering %s (style=%s, section_start=%d)",
        cfg.input_path,
        cfg.style.value,
        cfg.section_start,
    )
    result = renumber_file(
        cfg.input_path, style=cfg.style, section_start=cfg.section_start
    )

    if summary:
        print_summary(result, console)

    if check:
        if result.changed_lines:
            console.print(
                f"[yellow]Needs renumbering ({result.changed_lines} line(s)): "
                f"{cfg.input_path}[/yellow]"
            )
            raise typer.Exit(1)
        return

    if write:
        if result.changed_lines:
            cfg.input_path.write_text(result.text + "\n", encoding="utf-8")
            console.print(f"[green]Renumbered: {cfg.input_path}[/green]")
        else:
            console.print(f"[dim]Already numbered: {cfg.input_path}[/dim]")
        return

    typer.echo(result.text)
