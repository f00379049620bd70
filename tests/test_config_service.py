"""Tests for profile configuration loading"""

import pytest

from component_tool.api.exceptions import ConfigError
from component_tool.constants import BackendType, ENV_CONFIG_PATH, ENV_PROFILE
from component_tool.services.config_service import ConfigService, default_config_path

CONFIG = """\
active_profile: cloud
profiles:
  local:
    type: oss
    url: http://localhost:9000
  cloud:
    type: cloud
    token: ${TEST_CLOUD_TOKEN}
    account_id: acme
    default_project: shop
"""


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.setenv("TEST_CLOUD_TOKEN", "from-env")
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG)
    return path


def test_missing_file_gives_default_local_profile(tmp_path):
    service = ConfigService(tmp_path / "missing.yaml")

    profile = service.get_profile()

    assert profile.name == "local"
    assert profile.backend_type == BackendType.OSS
    assert profile.url == "http://localhost:9881"


def test_environment_variables_are_expanded(config_file):
    profile = ConfigService(config_file).get_profile()

    assert profile.name == "cloud"
    assert profile.token == "from-env"
    assert profile.default_project == "shop"


def test_explicit_profile_wins_over_environment(config_file, monkeypatch):
    monkeypatch.setenv(ENV_PROFILE, "cloud")
    service = ConfigService(config_file)

    assert service.get_profile().name == "cloud"
    assert service.get_profile("local").url == "http://localhost:9000"


def test_unknown_profile_lists_available(config_file):
    with pytest.raises(ConfigError) as exc_info:
        ConfigService(config_file).get_profile("staging")

    assert "cloud, local" in str(exc_info.value)


def test_invalid_yaml_raises_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("profiles: [unclosed")

    with pytest.raises(ConfigError):
        ConfigService(path).load_config()


def test_cloud_profile_requires_token(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("profiles:\n  cloud:\n    type: cloud\n")

    with pytest.raises(ConfigError):
        ConfigService(path).load_config()


def test_config_path_environment_override(tmp_path, monkeypatch):
    monkeypatch.setenv(ENV_CONFIG_PATH, str(tmp_path / "custom.yaml"))

    assert default_config_path() == tmp_path / "custom.yaml"

