"""Resolve and check a Minio deployment document.

Mode precedence is fixed: ``standalone = true`` wins over everything, a
non-empty ``members`` list selects an explicit cluster, and only then does
``expected`` describe an automatic cluster.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pydantic

from builder_ops.client.errors import (
    DocumentSchemaError,
    InvalidBucketName,
    InvalidExpectedCount,
    InvalidMembers,
    InvalidModeCombination,
    MissingCertificates,
    MissingCredentials,
    ValidationError,
)
from builder_ops.config.constants import DEFAULT_EXPECTED, MIN_EXPECTED
from builder_ops.config.models import (
    AdminCredentials,
    AutomaticCluster,
    DeploymentConfig,
    DeploymentDocument,
    ExplicitCluster,
    Standalone,
    TlsSettings,
)

_BUCKET_RE = re.compile(r"^[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$")


def _parse(doc: Mapping[str, Any] | DeploymentDocument) -> DeploymentDocument:
    if isinstance(doc, DeploymentDocument):
        return doc
    try:
        return DeploymentDocument.model_validate(dict(doc))
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise DocumentSchemaError(
            f"Invalid value for '{field}': {first['msg']}", field=field,
        ) from exc


def _resolve_mode(
    document: DeploymentDocument, warnings: list[str], strict: bool,
) -> Standalone | AutomaticCluster | ExplicitCluster:
    if document.standalone:
        if document.members:
            msg = (
                "'members' is ignored because 'standalone' is true; "
                "set standalone = false to run an explicit cluster"
            )
            if strict:
                raise InvalidModeCombination(msg, field="members")
            warnings.append(msg)
        return Standalone()

    if document.members:
        for index, member in enumerate(document.members):
            if not member.strip():
                raise InvalidMembers(
                    f"'members[{index}]' must be a non-empty directory or URI",
                    field="members",
                )
        if document.expected != DEFAULT_EXPECTED:
            warnings.append(
                f"'expected' ({document.expected}) is ignored because "
                "'members' defines an explicit cluster"
            )
        return ExplicitCluster(members=list(document.members))

    if document.expected < MIN_EXPECTED:
        raise InvalidExpectedCount(
            f"'expected' must be >= {MIN_EXPECTED} for an automatic cluster, "
            f"got {document.expected}",
            field="expected",
        )
    return AutomaticCluster(expected_node_count=document.expected)


def _check_credentials(document: DeploymentDocument) -> AdminCredentials:
    for field in ("key_id", "secret_key"):
        if not getattr(document, field).strip():
            raise MissingCredentials(
                f"'{field}' is required and must not be empty", field=field,
            )
    return AdminCredentials(key_id=document.key_id, secret_key=document.secret_key)


def _check_tls(document: DeploymentDocument, cert_dir: Path | None) -> TlsSettings:
    tls = TlsSettings(
        enabled=document.use_ssl,
        passphrase=document.ssl_cert_pw,
        cert_dir=cert_dir,
    )
    if not tls.enabled:
        return tls
    if cert_dir is None:
        raise MissingCertificates(
            "'use_ssl' is true but no certificate directory was supplied",
            field="use_ssl",
        )
    missing = [str(path) for path in tls.cert_paths if not path.is_file()]
    if missing:
        raise MissingCertificates(
            f"'use_ssl' is true but certificate files are missing: {', '.join(missing)}",
            field="use_ssl",
        )
    return tls


def _check_bucket_name(name: str) -> None:
    problem = None
    if not _BUCKET_RE.match(name):
        problem = (
            "must be 3-63 characters of lowercase letters, digits, dots and "
            "hyphens, starting and ending with a letter or digit"
        )
    elif ".." in name:
        problem = "must not contain consecutive dots"
    else:
        try:
            ipaddress.IPv4Address(name)
        except ValueError:
            pass
        else:
            problem = "must not be formatted as an IP address"
    if problem:
        raise InvalidBucketName(f"'bucket_name' {problem}, got '{name}'", field="bucket_name")


def validate(
    doc: Mapping[str, Any] | DeploymentDocument,
    *,
    cert_dir: Path | None = None,
    strict: bool = False,
) -> DeploymentConfig:
    """Validate a parsed document and resolve its deployment mode.

    ``cert_dir`` is where ``private.key`` and ``public.crt`` are expected
    when ``use_ssl`` is enabled. With ``strict`` the warning-level
    standalone/members conflict becomes an ``InvalidModeCombination``.
    """
    document = _parse(doc)
    warnings: list[str] = []
    mode = _resolve_mode(document, warnings, strict)
    credentials = _check_credentials(document)
    tls = _check_tls(document, cert_dir)
    _check_bucket_name(document.bucket_name)
    return DeploymentConfig(
        mode=mode,
        admin_credentials=credentials,
        tls=tls,
        bucket_name=document.bucket_name,
        warnings=warnings,
    )


def to_document(config: DeploymentConfig) -> dict[str, Any]:
    """Serialize a resolved config back into the flat document shape.

    The certificate directory is not part of the document; pass it to
    ``validate`` again when re-reading a TLS-enabled config.
    """
    mode = config.mode
    return {
        "standalone": isinstance(mode, Standalone),
        "expected": (
            mode.expected_node_count
            if isinstance(mode, AutomaticCluster)
            else DEFAULT_EXPECTED
        ),
        "members": list(mode.members) if isinstance(mode, ExplicitCluster) else [],
        "key_id": config.admin_credentials.key_id,
        "secret_key": config.admin_credentials.secret_key,
        "use_ssl": config.tls.enabled,
        "ssl_cert_pw": config.tls.passphrase,
        "bucket_name": config.bucket_name,
    }


def minio_environment(config: DeploymentConfig) -> dict[str, str]:
    return {
        "MINIO_ACCESS_KEY": config.admin_credentials.key_id,
        "MINIO_SECRET_KEY": config.admin_credentials.secret_key,
    }


def server_args(config: DeploymentConfig, data_dir: str) -> list[str]:
    """Volume arguments for ``minio server``.

    Automatic clusters have no static list; the supervisor negotiates it.
    """
    if isinstance(config.mode, Standalone):
        return [data_dir]
    if isinstance(config.mode, ExplicitCluster):
        return list(config.mode.members)
    raise ValidationError(
        "An automatic cluster has no static server arguments; membership "
        "is negotiated by the supervisor at runtime",
        field="expected",
    )
