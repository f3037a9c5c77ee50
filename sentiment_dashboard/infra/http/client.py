from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


class HttpClient:
    def __init__(
        self,
        timeout_seconds: int,
        user_agent: str,
        base_url: str = "",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self.base_url = base_url
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout_seconds),
            headers={
                "User-Agent": self.user_agent,
                "Accept": "application/json",
            },
            follow_redirects=True,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET ``url`` and decode the body as JSON.

        Non-2xx responses raise ``httpx.HTTPStatusError``; a body that is not
        JSON raises ``ValueError``.
        """
        response = await self._request(url=url, params=params)
        return response.json()

    async def _request(self, url: str, params: Optional[Dict[str, str]] = None) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("HttpClient must be used as an async context manager.")
        response = await self._client.get(url, params=params)
        response.raise_for_status()
        return response
