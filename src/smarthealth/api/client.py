"""Smart Health REST transport.

Thin async wrapper around the backend's JSON API with bearer-token auth.
The blocking ``urllib`` call runs in the default executor so concurrent
loads (``asyncio.gather``) don't serialise on the event loop.
"""

from __future__ import annotations

import asyncio
import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Awaitable, Callable
from typing import Any

from loguru import logger

from smarthealth.core.config import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from smarthealth.core.exceptions import APIError, AuthenticationError

TokenProvider = Callable[[], Awaitable[str | None]]


class ApiClient:
    """One call in, one authenticated HTTP request out."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        token_provider: TokenProvider | None = None,
    ):
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token_provider = token_provider

    @classmethod
    def from_config(cls, config, auth_store=None) -> ApiClient:
        """Build a client from ``api.*`` config, reading the token from ``auth_store``."""
        return cls(
            base_url=str(config.get("api.base_url", DEFAULT_API_BASE_URL)),
            timeout=float(config.get("api.timeout", DEFAULT_TIMEOUT_SECONDS)),
            token_provider=auth_store.load_token if auth_store is not None else None,
        )

    def build_url(self, path: str, params: dict[str, Any] | None = None) -> str:
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        if query:
            url = f"{url}?{urllib.parse.urlencode(query, doseq=True)}"
        return url

    async def _headers(self, has_body: bool) -> dict[str, str]:
        headers: dict[str, str] = {"Accept": "application/json"}
        if has_body:
            headers["Content-Type"] = "application/json"
        if self.token_provider is not None:
            token = await self.token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            AuthenticationError: on 401/403.
            APIError: on any other non-2xx status, network error, or timeout.
        """
        method = method.upper()
        url = self.build_url(path, params)
        data = json.dumps(payload).encode("utf-8") if payload is not None else None
        headers = await self._headers(has_body=data is not None)
        req = urllib.request.Request(url=url, data=data, method=method, headers=headers)

        loop = asyncio.get_running_loop()
        try:
            raw = await loop.run_in_executor(None, self._send, req)
        except APIError as e:
            logger.warning(
                f"API error {method} {self.base_url}{path} status={e.status} message={e.message}"
            )
            raise

        if not raw:
            return {}
        try:
            return json.loads(raw.decode("utf-8", errors="ignore"))
        except json.JSONDecodeError:
            return {"raw": raw.decode("utf-8", errors="ignore")}

    def _send(self, req: urllib.request.Request) -> bytes:
        path = urllib.parse.urlsplit(req.full_url).path
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return resp.read()
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="ignore") if hasattr(e, "read") and e.fp else ""
            message = _error_message(body) or str(e.reason)
            error_cls = AuthenticationError if e.code in (401, 403) else APIError
            raise error_cls(message, status=e.code, path=path) from e
        except urllib.error.URLError as e:
            raise APIError(f"Request failed: {e.reason}", path=path) from e
        except TimeoutError as e:
            raise APIError(f"Request timed out after {self.timeout}s", path=path) from e
        except (http.client.HTTPException, OSError) as e:
            # connection dropped while reading the response
            raise APIError(f"Request failed: {e}", path=path) from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, payload: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", path, payload=payload if payload is not None else {})

    async def put(self, path: str, payload: dict[str, Any] | None = None) -> Any:
        return await self.request("PUT", path, payload=payload if payload is not None else {})

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


def _error_message(body: str) -> str:
    """Pull ``message`` out of a JSON error body, else return the raw text."""
    if not body:
        return ""
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        return body.strip()
    if isinstance(parsed, dict):
        return str(parsed.get("message") or parsed.get("error") or body).strip()
    return body.strip()
