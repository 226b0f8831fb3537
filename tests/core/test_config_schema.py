"""Tests for smarthealth.core.config_schema and Config.validated()."""

import os
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from smarthealth.core.config import Config
from smarthealth.core.config_schema import SmartHealthConfig
from smarthealth.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _hide_build_env(monkeypatch):
    monkeypatch.delenv("EXPO_PUBLIC_API_BASE_URL", raising=False)
    monkeypatch.delenv("API_BASE_URL", raising=False)


class TestConfigSchema:
    def test_valid_config(self):
        cfg = SmartHealthConfig.model_validate(
            {
                "api": {"base_url": "https://health.example.com/api/", "timeout": 10},
                "paths": {"data_dir": "/tmp/sh-data"},
                "goals": {"water_ml": 2500},
                "cycle": {"length_days": 30, "period_length_days": 6},
            }
        )
        assert cfg.api.base_url == "https://health.example.com/api"
        assert cfg.api.timeout == 10
        assert cfg.paths.data_dir == Path("/tmp/sh-data")
        assert cfg.goals.water_ml == 2500
        assert cfg.goals.calories == 2000
        assert cfg.cycle.period_length_days == 6

    def test_defaults_populate(self):
        cfg = SmartHealthConfig()
        assert cfg.api.base_url == "http://localhost:4000/api"
        assert cfg.logging.level == "WARNING"
        assert cfg.cycle.length_days == 28

    def test_path_expansion(self):
        cfg = SmartHealthConfig.model_validate({"paths": {"data_dir": "~/.smarthealth-data"}})
        assert cfg.paths.data_dir.is_absolute()
        assert "~" not in str(cfg.paths.data_dir)

    def test_empty_base_url_rejected(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            SmartHealthConfig.model_validate({"api": {"base_url": "  "}})

    def test_non_http_base_url_rejected(self):
        with pytest.raises(ValidationError, match="http"):
            SmartHealthConfig.model_validate({"api": {"base_url": "ftp://host/api"}})

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError, match="timeout"):
            SmartHealthConfig.model_validate({"api": {"base_url": "http://x", "timeout": 0}})

    def test_period_must_be_shorter_than_cycle(self):
        with pytest.raises(ValidationError, match="shorter"):
            SmartHealthConfig.model_validate({"cycle": {"length_days": 5, "period_length_days": 5}})

    def test_extra_keys_allowed_at_root(self):
        cfg = SmartHealthConfig.model_validate({"custom_section": {"key": "value"}})
        assert cfg.model_extra["custom_section"] == {"key": "value"}

    def test_config_validated_integration(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({"paths": {"data_dir": os.path.join(tmp_dir, "data")}}, f)

        validated = Config(config_file=config_path, data_dir=tmp_dir).validated()
        assert isinstance(validated, SmartHealthConfig)
        assert validated.paths.data_dir == Path(tmp_dir) / "data"

    def test_config_validated_wraps_errors(self, tmp_dir):
        config = Config(data_dir=tmp_dir)
        config.set("api.timeout", -1)
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            config.validated()
