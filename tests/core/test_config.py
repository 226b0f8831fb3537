"""Tests for smarthealth.core.config."""

import json
import os

import pytest
import yaml

from smarthealth.core.config import DEFAULT_API_BASE_URL, Config
from smarthealth.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _hide_build_env(monkeypatch):
    """Hide build-time URL overrides."""
    monkeypatch.delenv("EXPO_PUBLIC_API_BASE_URL", raising=False)
    monkeypatch.delenv("API_BASE_URL", raising=False)


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.get("paths.data_dir").endswith(".smarthealth-data")
        assert config.get("api.base_url") == DEFAULT_API_BASE_URL
        assert config.get("api.timeout") == 5.0
        assert config.get("goals.water_ml") == 2000
        assert config.get("cycle.length_days") == 28

    def test_custom_data_dir(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("paths.data_dir") == tmp_dir
        assert config.get("paths.store_dir") == os.path.join(tmp_dir, "store")

    def test_build_env_sets_base_url(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("API_BASE_URL", "http://fallback.test/api")
        assert Config(data_dir=tmp_dir).get("api.base_url") == "http://fallback.test/api"

        monkeypatch.setenv("EXPO_PUBLIC_API_BASE_URL", "https://health.example.com/api")
        assert Config(data_dir=tmp_dir).get("api.base_url") == "https://health.example.com/api"

    def test_custom_env_prefix(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("MYAPP_API__TIMEOUT", "12")
        config = Config(env_prefix="MYAPP_", data_dir=tmp_dir)
        assert config.get("api.timeout") == "12"

    def test_yaml_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({"api": {"base_url": "http://10.0.2.2:4000/api"}}, f)

        config = Config(config_file=config_path, data_dir=tmp_dir)
        assert config.get("api.base_url") == "http://10.0.2.2:4000/api"
        assert config.get("api.timeout") == 5.0

    def test_json_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.json")
        with open(config_path, "w") as f:
            json.dump({"goals": {"calories": 1800}}, f)

        assert Config(config_file=config_path, data_dir=tmp_dir).get("goals.calories") == 1800

    def test_invalid_yaml_raises(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            f.write("api: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            Config(config_file=config_path, data_dir=tmp_dir)

    def test_env_overrides_file(self, tmp_dir, monkeypatch):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({"logging": {"level": "INFO"}}, f)

        monkeypatch.setenv("SMARTHEALTH_LOGGING__LEVEL", "DEBUG")
        config = Config(config_file=config_path, data_dir=tmp_dir)
        assert config.get("logging.level") == "DEBUG"

    def test_get_missing_key(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("custom.nested.value", 42)
        assert config.get("custom.nested.value") == 42

    def test_ensure_directories(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.ensure_directories()
        assert os.path.isdir(os.path.join(tmp_dir, "store"))
        assert os.path.isdir(os.path.join(tmp_dir, "logs"))

    def test_extra_defaults(self, tmp_dir):
        config = Config(data_dir=tmp_dir, defaults={"custom": {"key": "value"}})
        assert config.get("custom.key") == "value"
