"""
Hierarchical configuration management.

Loads configuration from multiple sources with this precedence (highest wins):
    1. Environment variables (SMARTHEALTH_SECTION__KEY)
    2. Config file (YAML or JSON)
    3. Consumer-supplied defaults
    4. Built-in defaults

The API base URL additionally honours the mobile build's variables
(``EXPO_PUBLIC_API_BASE_URL``, then ``API_BASE_URL``) as its built-in default.

Usage:
    config = Config(config_file="~/.smarthealth/config.yaml")

    config.get("api.base_url")       # dot-notation access
    config.get("api.timeout")        # seconds
    config.validated().api.timeout   # typed, validated view
"""

import json
import os
from typing import Any

import yaml

from .exceptions import ConfigurationError

_DEFAULT_ENV_PREFIX = "SMARTHEALTH_"
_DEFAULT_DATA_DIR_NAME = ".smarthealth-data"

DEFAULT_API_BASE_URL = "http://localhost:4000/api"
DEFAULT_TIMEOUT_SECONDS = 5.0


def default_api_base_url() -> str:
    """Base URL from the build environment, else the local development server."""
    return os.environ.get("EXPO_PUBLIC_API_BASE_URL") or os.environ.get("API_BASE_URL") or DEFAULT_API_BASE_URL


class Config:
    """
    Central configuration manager.

    Loads and merges configuration from defaults, a config file, and
    environment variables. Env vars use double-underscore to denote nesting:
    SMARTHEALTH_API__TIMEOUT=10 -> config["api"]["timeout"] = "10"
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = _DEFAULT_ENV_PREFIX,
        data_dir: str | None = None,
        defaults: dict[str, Any] | None = None,
    ):
        """
        Args:
            config_file: Path to YAML or JSON configuration file.
            env_prefix: Prefix for environment variable overrides.
            data_dir: Base directory for local data. Defaults to ~/.smarthealth-data.
            defaults: Additional default values to merge (consumer-specific).
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""
        self._data_dir = data_dir or os.path.join("~", _DEFAULT_DATA_DIR_NAME)
        self._extra_defaults = defaults or {}
        self.config_data: dict[str, Any] = {}

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from all sources."""
        self.config_data = self._get_default_config()

        if self._extra_defaults:
            self._update_dict(self.config_data, self._extra_defaults)

        if self.config_file and os.path.exists(self.config_file):
            file_config = self._load_file(self.config_file)
            self._update_dict(self.config_data, file_config)

        # Env vars override everything
        self._load_from_env()

    def _get_default_config(self) -> dict[str, Any]:
        data_dir = os.path.expanduser(self._data_dir)
        return {
            "api": {
                "base_url": default_api_base_url(),
                "timeout": DEFAULT_TIMEOUT_SECONDS,
            },
            "paths": {
                "data_dir": data_dir,
                "store_dir": os.path.join(data_dir, "store"),
                "log_dir": os.path.join(data_dir, "logs"),
            },
            "goals": {
                "water_ml": 2000,
                "calories": 2000,
            },
            "cycle": {
                "length_days": 28,
                "period_length_days": 5,
            },
            "logging": {
                "level": "WARNING",
                "file": None,
            },
        }

    @staticmethod
    def _load_file(path: str) -> dict[str, Any]:
        """Load a YAML or JSON config file."""
        ext = os.path.splitext(path)[1].lower()
        try:
            with open(path) as f:
                if ext in (".yaml", ".yml"):
                    return yaml.safe_load(f) or {}
                elif ext == ".json":
                    return json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Invalid config file {path}: {e}") from e
        return {}

    def _update_dict(self, target: dict, source: dict) -> None:
        """Recursively merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _load_from_env(self) -> None:
        """Override config values from environment variables."""
        if not self.env_prefix:
            return
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.env_prefix):
                continue
            config_key = env_key[len(self.env_prefix) :].lower()
            key_parts = config_key.split("__")

            current = self.config_data
            for part in key_parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]
            current[key_parts[-1]] = env_value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dot-notation path.

        Args:
            key_path: e.g. "api.base_url", "goals.water_ml"
            default: Returned when key is not found.
        """
        parts = key_path.split(".")
        current = self.config_data
        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def set(self, key_path: str, value: Any) -> None:
        """Set a config value by dot-notation path, creating intermediate dicts."""
        parts = key_path.split(".")
        current = self.config_data
        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    def ensure_directories(self) -> None:
        """Create all configured directories if they don't exist."""
        for path_value in self.config_data.get("paths", {}).values():
            if isinstance(path_value, str):
                os.makedirs(os.path.expanduser(path_value), exist_ok=True)

    def validated(self):
        """Return a typed :class:`SmartHealthConfig` view of the current data.

        Raises:
            ConfigurationError: if any section fails validation.
        """
        from pydantic import ValidationError as PydanticValidationError

        from .config_schema import SmartHealthConfig

        try:
            return SmartHealthConfig.model_validate(self.config_data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
