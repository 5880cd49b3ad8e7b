"""Shared fixtures for profilestore tests."""

import pytest

SETTINGS_ENV_VARS = (
    "AWS_SHARED_CREDENTIALS_FILE",
    "AWS_CONFIG_FILE",
    "AWS_PROFILE",
    "PROFILESTORE_CREDENTIALS_FILE",
    "PROFILESTORE_CONFIG_FILE",
    "PROFILESTORE_PROFILE",
    "PROFILESTORE_CASE_SENSITIVE",
    "PROFILESTORE_ENABLE_ENV_VARS",
)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Keep the developer's own AWS environment out of the tests."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def chained_raw():
    """A three-level chain listed child first, plus an unrelated root."""
    return {
        "grandchild": {"source_profile": "child", "role_arn": "arn:aws:iam::123:role/c"},
        "child": {"source_profile": "root", "role_arn": "arn:aws:iam::123:role/b"},
        "standalone": {"region": "eu-west-1"},
        "root": {"aws_access_key_id": "AKIA", "aws_secret_access_key": "secret"},
    }


@pytest.fixture
def credentials_yaml(tmp_path):
    path = tmp_path / "credentials.yaml"
    path.write_text(
        "default:\n"
        "  aws_access_key_id: AKIADEFAULT\n"
        "  aws_secret_access_key: default-secret\n"
        "dev:\n"
        "  aws_access_key_id: AKIADEV\n"
        "  region: us-west-2\n"
    )
    return path


@pytest.fixture
def config_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "default:\n"
        "  region: us-east-1\n"
        "  output: json\n"
        "profile dev:\n"
        "  region: eu-central-1\n"
        "  output: table\n"
        "profile admin:\n"
        "  source_profile: dev\n"
        "  role_arn: arn:aws:iam::123456789012:role/admin\n"
    )
    return path
