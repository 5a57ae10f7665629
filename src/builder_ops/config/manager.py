"""Document manager — read/write the Minio deployment TOML."""

from __future__ import annotations

import os
from importlib import resources
from pathlib import Path
from typing import Any

import tomli_w

from builder_ops.client.errors import ConfigurationError
from builder_ops.config.constants import CERTS_DIRNAME, DOCUMENT_FILE, ENV_MINIO_CONFIG
from builder_ops.config.models import DeploymentConfig
from builder_ops.config.validator import to_document, validate

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib


def resolve_document_path(path: Path | None = None) -> Path:
    """Resolve the document location.

    Precedence: explicit path > env var > user config dir.
    """
    if path is not None:
        return path
    env_path = os.environ.get(ENV_MINIO_CONFIG)
    if env_path:
        return Path(env_path)
    return DOCUMENT_FILE


def default_template() -> str:
    return resources.files("builder_ops.config").joinpath("default.toml").read_text()


class DocumentManager:
    """Loads, validates and writes a deployment document on disk."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = resolve_document_path(path)

    @property
    def default_cert_dir(self) -> Path:
        return self.path.parent / CERTS_DIRNAME

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            raise ConfigurationError(
                f"Deployment document not found: {self.path}. Use "
                f"'builder-ops minio init' or set {ENV_MINIO_CONFIG}."
            )
        try:
            return tomllib.loads(self.path.read_bytes().decode())
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Cannot parse {self.path}: {exc}") from exc

    def load_config(
        self, cert_dir: Path | None = None, *, strict: bool = False,
    ) -> DeploymentConfig:
        return validate(
            self.load(),
            cert_dir=cert_dir or self.default_cert_dir,
            strict=strict,
        )

    def save(self, config: DeploymentConfig) -> None:
        self._write(tomli_w.dumps(to_document(config)))

    def write_template(self, *, force: bool = False) -> Path:
        if self.path.exists() and not force:
            raise ConfigurationError(
                f"{self.path} already exists. Pass --force to overwrite."
            )
        self._write(default_template())
        return self.path

    def _write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Atomic write, owner-only: the document holds admin credentials
        temp = self.path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as fh:
            fh.write(text)
        temp.replace(self.path)
