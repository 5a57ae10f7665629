"""Rich table rendering helpers.

Cells and titles are wrapped in ``Text`` so tag values and paths are shown
literally, never parsed as markup.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, Sequence

from rich.table import Table
from rich.text import Text


def _cell(value: Any) -> Text:
    return Text(str(value) if value is not None else "")


def make_table(
    title: str | None,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
    *,
    no_wrap: Collection[str] = (),
) -> Table:
    """Build a Rich Table from column headers and row data.

    Columns named in *no_wrap* keep their full width; the others wrap to fit.
    """
    table = Table(title=Text(title) if title else None)
    for col in columns:
        table.add_column(col, no_wrap=col in no_wrap)
    for row in rows:
        table.add_row(*(_cell(cell) for cell in row))
    return table


def kv_table(data: dict[str, Any], *, title: str | None = None) -> Table:
    """Render a key-value dict as a two-column table."""
    table = Table(title=Text(title) if title else None, show_header=False)
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(_cell(key), _cell(value))
    return table
