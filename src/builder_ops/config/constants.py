"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "builder-ops"
APP_AUTHOR = "Habitat"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
DOCUMENT_FILE = CONFIG_DIR / "minio.toml"
CERTS_DIRNAME = "certs"

# Environment variable names
ENV_MINIO_CONFIG = "BUILDER_MINIO_CONFIG"
ENV_REGION = "BUILDER_OPS_REGION"
ENV_AWS_PROFILE = "BUILDER_OPS_AWS_PROFILE"

# Document defaults
DEFAULT_STANDALONE = True
DEFAULT_EXPECTED = 2
MIN_EXPECTED = 2
DEFAULT_BUCKET_NAME = "habitat-builder-artifact-store.default"
CERT_FILES = ("private.key", "public.crt")

# EC2 query defaults
DEFAULT_REGION = "us-west-2"
ENVIRONMENT_TAG = "X-Environment"
RUNNING_STATE = "running"

# Supervisor service data path used for standalone volumes
DEFAULT_DATA_DIR = "/hab/svc/builder-minio/data"
