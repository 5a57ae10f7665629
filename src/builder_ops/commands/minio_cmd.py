"""Minio commands — validate and render the deployment document."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from builder_ops.client.errors import err_console, error_handler
from builder_ops.commands._common import CertDirOpt, DocumentArg, FormatOpt
from builder_ops.config.constants import DEFAULT_DATA_DIR
from builder_ops.config.manager import DocumentManager
from builder_ops.config.models import AutomaticCluster
from builder_ops.config.validator import minio_environment, server_args
from builder_ops.output.formatter import output

app = typer.Typer(name="minio", help="Validate and render the Minio deployment document.")
console = Console()


def _get_manager(path: Path | None) -> DocumentManager:
    return DocumentManager(path)


def _print_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        err_console.print(f"[yellow]Warning:[/] {escape(warning)}", soft_wrap=True)


@app.command()
@error_handler
def validate(
    path: DocumentArg = None,
    cert_dir: CertDirOpt = None,
    strict: Annotated[bool, typer.Option(
        "--strict", help="Treat ignored standalone/members combinations as errors",
    )] = False,
    fmt: FormatOpt = "table",
) -> None:
    """Validate the document and show the resolved deployment."""
    mgr = _get_manager(path)
    config = mgr.load_config(cert_dir, strict=strict)
    _print_warnings(config.warnings)
    output(config.summary(), fmt, title=f"Deployment: {mgr.path}")
    if fmt == "table":
        console.print(f"[green]Valid {config.mode_name} deployment.[/]")


@app.command()
@error_handler
def show(
    path: DocumentArg = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show the raw document values."""
    mgr = _get_manager(path)
    data = mgr.load()
    if data.get("secret_key"):
        data["secret_key"] = "***"
    if data.get("ssl_cert_pw"):
        data["ssl_cert_pw"] = "***"
    output(data, fmt, title=str(mgr.path))


@app.command()
@error_handler
def init(
    path: DocumentArg = None,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing document")] = False,
) -> None:
    """Write the commented default document."""
    mgr = _get_manager(path)
    written = mgr.write_template(force=force)
    console.print(f"[green]Default document written to {escape(str(written))}.[/]")
    console.print("Change key_id and secret_key before deploying.")


@app.command()
@error_handler
def env(
    path: DocumentArg = None,
    cert_dir: CertDirOpt = None,
    data_dir: Annotated[str, typer.Option(
        "--data-dir", help="Data directory for a standalone server",
    )] = DEFAULT_DATA_DIR,
) -> None:
    """Print the environment handed to the Minio server process."""
    mgr = _get_manager(path)
    config = mgr.load_config(cert_dir)
    _print_warnings(config.warnings)
    for key, value in minio_environment(config).items():
        typer.echo(f"{key}={shlex.quote(value)}")
    if isinstance(config.mode, AutomaticCluster):
        err_console.print(
            f"[yellow]Automatic cluster of {config.mode.expected_node_count} nodes: "
            "volumes are negotiated by the supervisor.[/]"
        )
        return
    volumes = " ".join(server_args(config, data_dir))
    typer.echo(f"MINIO_VOLUMES={shlex.quote(volumes)}")
