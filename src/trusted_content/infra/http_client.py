from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx


class HttpClient:
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
            follow_redirects=True,
            max_redirects=10,
            transport=transport,
        )

    async def get_json(self, url: str) -> dict:
        resp = await self._client.get(url)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise TypeError("HttpClient invariant violated: expected JSON object")
        return data

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> dict:
        resp = await self._client.post(url, json=dict(payload))
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise TypeError("HttpClient invariant violated: expected JSON object")
        return data

    async def aclose(self) -> None:
        await self._client.aclose()
