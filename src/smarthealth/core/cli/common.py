"""Shared setup logic for CLI commands."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from smarthealth.core.exceptions import APIError, ConfigurationError, SmartHealthError

SMARTHEALTH_DIR = Path.home() / ".smarthealth"
CONFIG_PATH = SMARTHEALTH_DIR / "config.yaml"


@dataclass
class Services:
    """Everything a command needs to talk to the backend."""

    config: Any
    auth: Any
    onboarding: Any
    api: Any


def load_config(config_file: str | None = None):
    """Load config from ``config_file`` or ~/.smarthealth/config.yaml, and set up logging."""
    from smarthealth.core.config import Config
    from smarthealth.core.utils.logging import setup_logging_from_config

    path = config_file or str(CONFIG_PATH)
    try:
        config = Config(config_file=path)
        config.validated()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    config.ensure_directories()
    setup_logging_from_config(config)
    return config


def build_services(config) -> Services:
    """Wire the file-backed stores and the API client from config."""
    from smarthealth.api import ApiClient, HealthApi
    from smarthealth.storage import AuthStore, LocalKeyValueStore, OnboardingStore

    store = LocalKeyValueStore(config.get("paths.store_dir"))
    auth = AuthStore(store)
    api = HealthApi(ApiClient.from_config(config, auth))
    return Services(config=config, auth=auth, onboarding=OnboardingStore(store), api=api)


def services_from_context(ctx: click.Context) -> Services:
    obj = ctx.ensure_object(dict)
    if "services" not in obj:
        obj["services"] = build_services(load_config(obj.get("config_file")))
    return obj["services"]


def run(coro: Coroutine[Any, Any, Any]) -> Any:
    """Drive ``coro`` to completion, turning domain errors into CLI errors."""
    try:
        return asyncio.run(coro)
    except APIError as e:
        raise click.ClickException(e.message) from e
    except SmartHealthError as e:
        raise click.ClickException(str(e)) from e
