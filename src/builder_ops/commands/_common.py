"""Shared Typer option aliases for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from builder_ops.config.constants import ENV_AWS_PROFILE, ENV_REGION

DocumentArg = Annotated[
    Path | None,
    typer.Argument(
        help="Deployment document (default: $BUILDER_MINIO_CONFIG or user config dir)",
        show_default=False,
    ),
]
CertDirOpt = Annotated[
    Path | None,
    typer.Option("--cert-dir", help="Directory holding private.key and public.crt"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format"),
]
RegionOpt = Annotated[
    str,
    typer.Option("--region", envvar=ENV_REGION, help="AWS region to query"),
]
ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", envvar=ENV_AWS_PROFILE, help="AWS credentials profile"),
]
