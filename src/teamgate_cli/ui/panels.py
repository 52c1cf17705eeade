"""Rich table helpers for consistent CLI output styling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence

# -- Color scheme --
ACCENT = "bright_cyan"
HEADING = "bold cyan"
DIM = "dim"


def get_console() -> Console:
    """Return a shared Rich console instance."""
    return Console()


def status_table(
    title: str,
    rows: Sequence[tuple[str, str, str]],
    *,
    columns: tuple[str, str, str] = ("Check", "Status", "Details"),
    console: Console | None = None,
) -> None:
    """Display a three-column table of (name, status, detail) rows."""
    if console is None:
        console = get_console()

    table = Table(title=f"[{HEADING}]{title}[/{HEADING}]", border_style=ACCENT, expand=False)
    table.add_column(columns[0], style="bold white", min_width=25)
    table.add_column(columns[1], justify="center", min_width=10)
    table.add_column(columns[2], style=DIM)

    for name, status, detail in rows:
        table.add_row(name, status, detail)

    console.print(table)
