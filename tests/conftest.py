"""Shared test fixtures for smarthealth."""

import copy
import os
import tempfile
from datetime import datetime

import pytest

from smarthealth.api import HealthApi
from smarthealth.core.exceptions import APIError
from smarthealth.storage import AuthStore, MemoryKeyValueStore, OnboardingStore
from smarthealth.tracking import RecordingPrompter

FROZEN_NOW = datetime(2024, 3, 15, 9, 30)  # a Friday


class FakeClient:
    """In-memory stand-in for ApiClient.

    Routes map ``(METHOD, path)`` to a payload, a callable taking the request
    payload, or an exception to raise.  Unrouted requests fail with a 404
    APIError, the same as an endpoint the backend does not implement.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def on(self, method, path, response):
        self.routes[(method.upper(), path)] = response
        return self

    def calls_to(self, method, path=None):
        return [c for c in self.calls if c[0] == method.upper() and (path is None or c[1] == path)]

    async def _call(self, method, path, params=None, payload=None):
        self.calls.append((method, path, params, payload))
        if (method, path) not in self.routes:
            raise APIError("Not found", status=404, path=path)
        response = self.routes[(method, path)]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            response = response(payload if payload is not None else params)
        return copy.deepcopy(response)

    async def get(self, path, params=None):
        return await self._call("GET", path, params=params)

    async def post(self, path, payload=None):
        return await self._call("POST", path, payload=payload if payload is not None else {})

    async def put(self, path, payload=None):
        return await self._call("PUT", path, payload=payload if payload is not None else {})

    async def delete(self, path):
        return await self._call("DELETE", path)


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "api": {"base_url": "http://health.test/api", "timeout": 2},
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "store_dir": os.path.join(tmp_dir, "data", "store"),
            "log_dir": os.path.join(tmp_dir, "data", "logs"),
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def api(fake_client):
    return HealthApi(fake_client)


@pytest.fixture
def prompter():
    return RecordingPrompter()


@pytest.fixture
def clock():
    return lambda: FROZEN_NOW


@pytest.fixture
def memory_store():
    return MemoryKeyValueStore()


@pytest.fixture
def auth_store(memory_store):
    return AuthStore(memory_store)


@pytest.fixture
def onboarding_store(memory_store):
    return OnboardingStore(memory_store)
