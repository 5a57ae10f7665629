"""Tests for the root app."""

from typer.testing import CliRunner

from builder_ops import __version__
from builder_ops.app import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_groups_registered():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "minio" in result.output
    assert "ec2" in result.output
