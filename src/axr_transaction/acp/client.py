"""Credentialed HTTP transport for the ACP marketplace API."""

from typing import Any

import httpx

from axr_transaction.auth.gate import Credential
from axr_transaction.config import Settings

_BODY_PREVIEW_CHARS = 500


def describe_http_error(exc: Exception) -> str:
    """Render an httpx/parse failure as a single line, including status and body."""
    if isinstance(exc, httpx.HTTPStatusError):
        body = exc.response.text.strip()
        if len(body) > _BODY_PREVIEW_CHARS:
            body = body[:_BODY_PREVIEW_CHARS] + "..."
        detail = f"HTTP {exc.response.status_code}"
        return f"{detail}: {body}" if body else detail
    message = str(exc).strip()
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


def unwrap_data(payload: Any) -> Any:
    """Return the ``data`` member of an API envelope."""
    if not isinstance(payload, dict) or "data" not in payload:
        raise ValueError("response envelope missing 'data'")
    return payload["data"]


class MarketplaceClient:
    def __init__(
        self,
        credential: Credential,
        *,
        base_url: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.credential = credential
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        credential: Credential,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "MarketplaceClient":
        return cls(
            credential,
            base_url=settings.acp_api_base_url,
            timeout_seconds=settings.http_timeout_seconds,
            transport=transport,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "x-api-key": self.credential.secret,
                "Content-Type": "application/json",
            },
            timeout=self.timeout_seconds,
            transport=self._transport,
        )

    async def get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        async with self._client() as client:
            response = await client.get(path, params=params)
            response.raise_for_status()
        return response.json()

    async def post_json(self, path: str, body: dict[str, object]) -> Any:
        async with self._client() as client:
            response = await client.post(path, json=body)
            response.raise_for_status()
        return response.json()
