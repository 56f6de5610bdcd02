"""
CLI utility helpers: console handles and output formatting.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def print_rows(rows: list[dict[str, Any]], *, title: str = "", as_json: bool = False) -> None:
    """Render a list of flat dicts as a Rich table (or JSON)."""
    if as_json:
        console.print_json(json.dumps(rows, default=str))
        return

    if not rows:
        console.print("[dim]No items.[/dim]")
        return

    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in rows[0]:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(str(row.get(col, "")) for col in rows[0]))
    console.print(table)


def print_summary(data: dict[str, Any], *, as_json: bool = False) -> None:
    """Render a single dict as ``key: value`` lines (or JSON)."""
    if as_json:
        console.print_json(json.dumps(data, default=str))
        return
    for key, value in data.items():
        console.print(f"[bold]{key}[/bold]: {value}")
