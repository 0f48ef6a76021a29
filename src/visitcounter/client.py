"""
Counter Service Client

Thin async HTTP client for the counter service. The UI points it at the
proxy prefix, so every call takes the same path a browser request would.
"""

from typing import Any, Dict, Optional

import httpx


class RequestFailed(Exception):
    """A counter service call did not return a 2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CounterClient:
    """
    Client for the counter service endpoints.

    Args:
        base_url: Service root, e.g. ``http://web/backend``
        transport: Optional httpx transport (tests and in-process routing)
    """

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def request(self, path: str, method: str = "GET") -> Dict[str, Any]:
        try:
            res = await self._http.request(method, f"{self.base_url}{path}")
        except httpx.HTTPError as e:
            raise RequestFailed(str(e) or e.__class__.__name__) from e

        if not res.is_success:
            raise RequestFailed(res.text or f"Request failed: {res.status_code}", res.status_code)

        if res.status_code == 204:
            return {}

        return res.json()

    async def ping(self) -> Dict[str, Any]:
        return await self.request("/ping")

    async def fetch_visits(self) -> Dict[str, Any]:
        return await self.request("/visits")

    async def add_visit(self) -> Dict[str, Any]:
        return await self.request("/visits", method="POST")

    async def aclose(self) -> None:
        await self._http.aclose()
