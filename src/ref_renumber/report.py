"""Section summary output."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ref_renumber.renumber import RenumberResult


def print_summary(result: RenumberResult, out: Console) -> None:
    """Print a table of counted sections and their bullet totals."""
    if not result.sections:
        out.print("[yellow]No sections found.[/yellow]")
        return

    table = Table(title="Sections", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Section", style="green")
    table.add_column("Bullets", justify="right")

    for section in result.sections:
        table.add_row(str(section.index), section.title, str(section.bullets))

    out.print(table)
    out.print(
        f"[bold]Bullets:[/bold] {result.bullet_count}  "
        f"[bold]Changed lines:[/bold] {result.changed_lines}"
    )
