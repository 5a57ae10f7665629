"""Root Typer app — global options and command group registration."""

from __future__ import annotations

from typing import Optional

import typer

from builder_ops import __version__
from builder_ops.commands import ec2_cmd, minio_cmd

app = typer.Typer(
    name="builder-ops",
    help="Operator tools for the Builder Minio store and EC2 fleet.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"builder-ops {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Builder operator CLI — validate Minio deployments and list instances."""


# Register command groups
app.add_typer(minio_cmd.app, name="minio")
app.add_typer(ec2_cmd.app, name="ec2")


def main() -> None:
    app()


def list_instances_main() -> None:
    ec2_cmd.standalone_app()
