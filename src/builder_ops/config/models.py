"""Pydantic models for the Minio deployment document."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from builder_ops.config.constants import (
    CERT_FILES,
    DEFAULT_BUCKET_NAME,
    DEFAULT_EXPECTED,
    DEFAULT_STANDALONE,
    MIN_EXPECTED,
)


class DeploymentDocument(BaseModel):
    """The flat key/value document read by the supervisor at service start."""

    model_config = ConfigDict(extra="forbid", strict=True)

    standalone: bool = Field(
        default=DEFAULT_STANDALONE, description="Single node, no clustering",
    )
    expected: int = Field(
        default=DEFAULT_EXPECTED,
        description="Node count for an automatic cluster",
    )
    members: list[str] = Field(
        default_factory=list, description="Explicit cluster DIRs or URIs",
    )
    key_id: str = Field(default="", description="Admin access key")
    secret_key: str = Field(default="", description="Admin secret key")
    use_ssl: bool = Field(default=False, description="Serve over TLS")
    ssl_cert_pw: str = Field(default="", description="Certificate passphrase")
    bucket_name: str = Field(
        default=DEFAULT_BUCKET_NAME, description="Default bucket to create",
    )


class Standalone(BaseModel):
    """Single-node deployment."""

    kind: Literal["standalone"] = "standalone"


class AutomaticCluster(BaseModel):
    """Membership negotiated at runtime up to an expected node count."""

    kind: Literal["automatic"] = "automatic"
    expected_node_count: int = Field(default=DEFAULT_EXPECTED, ge=MIN_EXPECTED)


class ExplicitCluster(BaseModel):
    """Membership statically enumerated as storage locations."""

    kind: Literal["explicit"] = "explicit"
    members: list[str] = Field(min_length=1)


DeploymentMode = Annotated[
    Standalone | AutomaticCluster | ExplicitCluster,
    Field(discriminator="kind"),
]


class AdminCredentials(BaseModel):
    key_id: str = Field(min_length=1)
    secret_key: str = Field(min_length=1)

    def masked(self) -> dict[str, str]:
        return {"key_id": self.key_id, "secret_key": "***"}


class TlsSettings(BaseModel):
    enabled: bool = False
    passphrase: str = ""
    cert_dir: Path | None = None

    @property
    def cert_paths(self) -> list[Path]:
        """Certificate files the supervisor expects, or ``[]`` without a directory."""
        if self.cert_dir is None:
            return []
        return [self.cert_dir / name for name in CERT_FILES]


class DeploymentConfig(BaseModel):
    """Fully-resolved deployment, with exactly one mode active."""

    mode: DeploymentMode
    admin_credentials: AdminCredentials
    tls: TlsSettings = Field(default_factory=TlsSettings)
    bucket_name: str = DEFAULT_BUCKET_NAME
    warnings: list[str] = Field(default_factory=list, exclude=True)

    @property
    def mode_name(self) -> str:
        return self.mode.kind

    def summary(self) -> dict[str, object]:
        """Flat, display-safe view of the resolved deployment."""
        data: dict[str, object] = {"mode": self.mode_name}
        if isinstance(self.mode, AutomaticCluster):
            data["expected_node_count"] = self.mode.expected_node_count
        elif isinstance(self.mode, ExplicitCluster):
            data["members"] = ", ".join(self.mode.members)
        data.update(self.admin_credentials.masked())
        data["use_ssl"] = self.tls.enabled
        if self.tls.enabled:
            data["cert_dir"] = str(self.tls.cert_dir)
        data["bucket_name"] = self.bucket_name
        return data
