"""Tests for the document manager."""

import os
import stat
from pathlib import Path

import pytest

from builder_ops.client.errors import ConfigurationError, MissingCertificates
from builder_ops.config.manager import DocumentManager, default_template, resolve_document_path
from builder_ops.config.models import ExplicitCluster, Standalone


class TestResolveDocumentPath:
    def test_explicit_path_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BUILDER_MINIO_CONFIG", str(tmp_path / "env.toml"))
        assert resolve_document_path(tmp_path / "cli.toml") == tmp_path / "cli.toml"

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BUILDER_MINIO_CONFIG", str(tmp_path / "env.toml"))
        assert resolve_document_path() == tmp_path / "env.toml"

    def test_user_config_dir(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("BUILDER_MINIO_CONFIG", raising=False)
        path = resolve_document_path()
        assert path.name == "minio.toml"
        assert "builder-ops" in str(path)


class TestDocumentManager:
    def test_load_missing_file(self, document_manager: DocumentManager):
        with pytest.raises(ConfigurationError, match="not found"):
            document_manager.load()

    def test_load_invalid_toml(self, document_manager: DocumentManager, tmp_document: Path):
        tmp_document.write_text("standalone = \n")
        with pytest.raises(ConfigurationError, match="Cannot parse"):
            document_manager.load()

    def test_load_config(self, document_manager: DocumentManager, write_document, base_document):
        write_document({**base_document, "standalone": False, "members": ["/a", "/b"]})
        config = document_manager.load_config()
        assert isinstance(config.mode, ExplicitCluster)
        assert config.mode.members == ["/a", "/b"]

    def test_default_cert_dir(self, document_manager: DocumentManager, tmp_document: Path):
        assert document_manager.default_cert_dir == tmp_document.parent / "certs"

    def test_ssl_uses_default_cert_dir(
        self, document_manager: DocumentManager, write_document, base_document, cert_dir: Path,
    ):
        # cert_dir fixture lives next to the document
        write_document({**base_document, "use_ssl": True})
        config = document_manager.load_config()
        assert config.tls.cert_dir == cert_dir

    def test_ssl_missing_certs(self, document_manager: DocumentManager, write_document, base_document):
        write_document({**base_document, "use_ssl": True})
        with pytest.raises(MissingCertificates):
            document_manager.load_config()

    def test_save_and_reload(self, document_manager: DocumentManager, write_document, base_document):
        write_document({**base_document, "standalone": False, "members": ["/x"]})
        config = document_manager.load_config()
        document_manager.save(config)
        mgr2 = DocumentManager(document_manager.path)
        again = mgr2.load_config()
        assert again.mode == config.mode
        assert again.admin_credentials == config.admin_credentials

    def test_save_is_owner_only(self, document_manager: DocumentManager, write_document, base_document):
        write_document(base_document)
        document_manager.save(document_manager.load_config())
        mode = stat.S_IMODE(os.stat(document_manager.path).st_mode)
        assert mode == 0o600
        assert not document_manager.path.with_suffix(".tmp").exists()

    def test_write_template(self, document_manager: DocumentManager):
        path = document_manager.write_template()
        assert path.read_text() == default_template()
        config = document_manager.load_config()
        assert isinstance(config.mode, Standalone)
        assert config.warnings == []

    def test_write_template_refuses_overwrite(self, document_manager: DocumentManager, tmp_document: Path):
        tmp_document.write_text("key_id = 'mine'\n")
        with pytest.raises(ConfigurationError, match="already exists"):
            document_manager.write_template()
        assert tmp_document.read_text() == "key_id = 'mine'\n"

    def test_write_template_force(self, document_manager: DocumentManager, tmp_document: Path):
        tmp_document.write_text("key_id = 'mine'\n")
        document_manager.write_template(force=True)
        assert "bucket_name" in tmp_document.read_text()

    def test_write_template_creates_parent(self, tmp_path: Path):
        mgr = DocumentManager(tmp_path / "nested" / "dir" / "minio.toml")
        assert mgr.write_template().exists()

    def test_save_large_document(self, document_manager: DocumentManager, write_document, base_document):
        members = [f"http://node{i:04d}.builder.internal/export/data" for i in range(2000)]
        write_document({**base_document, "standalone": False, "members": members})
        document_manager.save(document_manager.load_config())
        again = DocumentManager(document_manager.path).load_config()
        assert isinstance(again.mode, ExplicitCluster)
        assert again.mode.members == members
