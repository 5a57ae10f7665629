"""Output dispatcher — renders data as raw JSON, table, YAML, or CSV."""

from __future__ import annotations

import csv
import io
import json
import sys
from collections.abc import Collection, Sequence
from datetime import date, datetime
from typing import Any

from rich.console import Console

from builder_ops.output.tables import kv_table, make_table

console = Console()


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _print_plain(text: str) -> None:
    console.print(text, end="", markup=False, emoji=False, highlight=False, soft_wrap=True)


def output_raw(data: Any) -> None:
    """Write data as indented JSON straight to stdout, without Rich styling."""
    sys.stdout.write(json.dumps(data, indent=4, default=_json_default) + "\n")
    sys.stdout.flush()


def output_json(data: Any) -> None:
    """Print data as formatted JSON."""
    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")
    console.print_json(json.dumps(data, indent=2, default=_json_default))


def output_yaml(data: Any) -> None:
    """Print data as YAML."""
    import yaml

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")
    data = json.loads(json.dumps(data, default=_json_default))
    _print_plain(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))


def output_csv(columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    """Print data as CSV."""
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(columns)
    writer.writerows(
        [[str(v) if v is not None else "" for v in row] for row in rows]
    )
    _print_plain(buf.getvalue())


def output_table(
    data: Any,
    *,
    columns: Sequence[str] | None = None,
    rows: Sequence[Sequence[Any]] | None = None,
    title: str | None = None,
    no_wrap: Collection[str] = (),
) -> None:
    """Print row data as a Rich table, or a dict as a key-value table."""
    if columns and rows is not None:
        console.print(make_table(title, columns, rows, no_wrap=no_wrap))
    else:
        console.print(kv_table(data, title=title))


def output(
    data: Any,
    fmt: str = "table",
    *,
    columns: Sequence[str] | None = None,
    rows: Sequence[Sequence[Any]] | None = None,
    title: str | None = None,
    no_wrap: Collection[str] = (),
) -> None:
    """Dispatch output to the appropriate formatter."""
    if fmt == "json":
        output_json(data)
    elif fmt == "yaml":
        output_yaml(data)
    elif fmt == "csv":
        if columns and rows is not None:
            output_csv(columns, rows)
        else:
            output_json(data)
    else:
        output_table(data, columns=columns, rows=rows, title=title, no_wrap=no_wrap)
