"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed ``SmartHealthConfig``.  Plain
dict-based access keeps working unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class ApiConfig(BaseModel):
    """Backend connection settings."""

    base_url: str
    timeout: float = 5.0

    @field_validator("base_url")
    @classmethod
    def _non_empty_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("api.base_url must not be empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"api.base_url must be an http(s) URL, got {v!r}")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("api.timeout must be positive")
        return v


class PathsConfig(BaseModel):
    """File-system paths used for local state."""

    data_dir: Path
    store_dir: Path | None = None
    log_dir: Path | None = None

    @field_validator("data_dir", "store_dir", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class GoalsConfig(BaseModel):
    """Daily targets used when the backend doesn't supply one."""

    water_ml: int = 2000
    calories: int = 2000


class CycleConfig(BaseModel):
    """Menstrual cycle assumptions."""

    length_days: int = 28
    period_length_days: int = 5

    @model_validator(mode="after")
    def _period_shorter_than_cycle(self) -> CycleConfig:
        if self.period_length_days <= 0 or self.length_days <= 0:
            raise ValueError("cycle lengths must be positive")
        if self.period_length_days >= self.length_days:
            raise ValueError(
                f"period_length_days ({self.period_length_days}) must be shorter than length_days ({self.length_days})"
            )
        return self


class LoggingConfig(BaseModel):
    """loguru sink settings."""

    level: str = "WARNING"
    file: str | None = None


class SmartHealthConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections.
    """

    model_config = ConfigDict(extra="allow")

    api: ApiConfig = ApiConfig(base_url="http://localhost:4000/api")
    paths: PathsConfig = PathsConfig(data_dir=Path("~/.smarthealth-data"))
    goals: GoalsConfig = GoalsConfig()
    cycle: CycleConfig = CycleConfig()
    logging: LoggingConfig = LoggingConfig()
