"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import boto3
import pytest
import tomli_w

from builder_ops.config.manager import DocumentManager


@pytest.fixture
def base_document() -> dict[str, Any]:
    """A valid standalone document with every key set."""
    return {
        "standalone": True,
        "expected": 2,
        "members": [],
        "key_id": "depot",
        "secret_key": "password",
        "use_ssl": False,
        "ssl_cert_pw": "",
        "bucket_name": "habitat-builder-artifact-store.default",
    }


@pytest.fixture
def tmp_document(tmp_path: Path) -> Path:
    """Return a temporary document path."""
    return tmp_path / "minio.toml"


@pytest.fixture
def write_document(tmp_document: Path):
    """Write a document dict as TOML and return its path."""

    def _write(data: dict[str, Any]) -> Path:
        tmp_document.write_text(tomli_w.dumps(data))
        return tmp_document

    return _write


@pytest.fixture
def document_manager(tmp_document: Path) -> DocumentManager:
    return DocumentManager(tmp_document)


@pytest.fixture
def cert_dir(tmp_path: Path) -> Path:
    """A certificate directory holding both expected files."""
    certs = tmp_path / "certs"
    certs.mkdir()
    (certs / "private.key").write_text("key")
    (certs / "public.crt").write_text("crt")
    return certs


@pytest.fixture
def ec2_client():
    """An EC2 client with dummy credentials; pair it with a Stubber."""
    return boto3.client(
        "ec2",
        region_name="us-west-2",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def describe_response() -> dict[str, Any]:
    """Sample DescribeInstances response with one running instance."""
    return {
        "Reservations": [
            {
                "ReservationId": "r-0123456789abcdef0",
                "OwnerId": "123456789012",
                "Instances": [
                    {
                        "InstanceId": "i-0abc1234def567890",
                        "InstanceType": "m5.large",
                        "State": {"Code": 16, "Name": "running"},
                        "PrivateIpAddress": "10.0.1.15",
                        "Tags": [
                            {"Key": "Name", "Value": "builder-api-prod-0"},
                            {"Key": "X-Environment", "Value": "prod"},
                        ],
                    }
                ],
            }
        ]
    }
