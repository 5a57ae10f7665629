"""EC2 commands — list running instances of an environment."""

from __future__ import annotations

from typing import Annotated

import typer

from builder_ops.client.ec2 import InstanceLister, summarize
from builder_ops.client.errors import error_handler
from builder_ops.commands._common import FormatOpt, ProfileOpt, RegionOpt
from builder_ops.config.constants import DEFAULT_REGION
from builder_ops.output.formatter import output, output_raw

app = typer.Typer(name="ec2", help="Query the EC2 instance inventory.")

COLUMNS = ["Instance", "Name", "Type", "State", "Private IP", "Public IP"]


def _get_lister(region: str, profile: str | None) -> InstanceLister:
    return InstanceLister(region=region, profile=profile)


def _drop_empty_columns(
    columns: list[str], rows: list[list[str]], optional: tuple[str, ...],
) -> tuple[list[str], list[list[str]]]:
    """Remove optional columns that are blank in every row."""
    keep = [
        i for i, col in enumerate(columns)
        if col not in optional or any(row[i] for row in rows)
    ]
    return [columns[i] for i in keep], [[row[i] for i in keep] for row in rows]


@app.command("list-instances")
@error_handler
def list_instances(
    environment: Annotated[str | None, typer.Argument(
        help="Value of the X-Environment tag", show_default=False,
    )] = None,
    region: RegionOpt = DEFAULT_REGION,
    profile: ProfileOpt = None,
    fmt: FormatOpt = "json",
) -> None:
    """List running instances tagged with an environment.

    JSON output is the provider response, unmodified.
    """
    lister = _get_lister(region, profile)
    data = lister.list_instances(environment)
    if fmt == "json":
        output_raw(data)
        return
    columns, rows = COLUMNS, summarize(data)
    if fmt == "table":
        columns, rows = _drop_empty_columns(columns, rows, ("Private IP", "Public IP"))
    output(
        data, fmt,
        columns=columns, rows=rows,
        title=f"Running instances: {environment} ({region})",
        no_wrap=("Instance", "Private IP", "Public IP"),
    )


# Standalone `list-instances <env>` entry point
standalone_app = typer.Typer(name="list-instances", add_completion=False)
standalone_app.command()(list_instances)
