# =============================================================================
# tests/unit/test_config_manager.py
# Unit Tests for Storage Configuration
# =============================================================================

from dataclasses import FrozenInstanceError

import pytest

from edunexus_core.api import StorageConfig, load_config
from edunexus_core.api.config_manager import DEFAULT_API_URL
from edunexus_core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep a stray .edunexus/config.toml out of the tests"""
    monkeypatch.chdir(tmp_path)


def write_toml(tmp_path, body: str):
    path = tmp_path / "config.toml"
    path.write_text(body)
    return path


class TestLoadConfig:

    def test_defaults(self):
        config = load_config(environ={})

        assert config.api_url == DEFAULT_API_URL
        assert config.namespace == "edunexus"
        assert config.storage_key("users") == "edunexus_users"

    def test_toml_file(self, tmp_path):
        path = write_toml(tmp_path, """
[storage]
api_url = "https://edu.example.com/api/"
db_path = "data/local.db"
namespace = "school42"

[storage.headers]
X-Client = "kiosk"
""")

        config = load_config(path, environ={})

        assert config.api_url == "https://edu.example.com/api"
        assert str(config.db_path) == "data/local.db"
        assert config.storage_key("messages") == "school42_messages"
        assert config.headers == {"X-Client": "kiosk"}

    def test_default_file_picked_up(self, tmp_path):
        (tmp_path / ".edunexus").mkdir()
        (tmp_path / ".edunexus" / "config.toml").write_text('[storage]\nnamespace = "demo"\n')

        assert load_config(environ={}).namespace == "demo"

    def test_environment_wins(self, tmp_path):
        path = write_toml(tmp_path, '[storage]\napi_url = "https://from-file/api"\n')

        config = load_config(path, environ={
            "EDUNEXUS_API_URL": "http://from-env:5000/api",
            "EDUNEXUS_DB_PATH": ":memory:",
        })

        assert config.api_url == "http://from-env:5000/api"
        assert config.db_path == ":memory:"

    def test_invalid_toml(self, tmp_path):
        path = write_toml(tmp_path, "[storage\napi_url = ")

        with pytest.raises(ConfigurationError) as exc:
            load_config(path, environ={})

        assert exc.value.code == "CONFIG_001"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "absent.toml", environ={})

    def test_empty_api_url(self, tmp_path):
        path = write_toml(tmp_path, '[storage]\napi_url = "  "\n')

        with pytest.raises(ConfigurationError):
            load_config(path, environ={})


def test_storage_config_is_frozen():
    with pytest.raises(FrozenInstanceError):
        StorageConfig().api_url = "x"
