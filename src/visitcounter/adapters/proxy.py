"""
Backend Proxy

Forwards every request under a fixed prefix to the counter service:
``/backend/visits?x=1`` goes to ``<upstream>/visits?x=1``. Method, body,
status and response body pass through untouched.
"""

import logging
from typing import Iterable, List, Optional, Tuple

import httpx
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

logger = logging.getLogger(__name__)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

HOP_BY_HOP_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
})

# Recomputed by the HTTP client on each side
_REQUEST_SKIP = HOP_BY_HOP_HEADERS | {"host", "content-length"}
_RESPONSE_SKIP = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding"}


def _filter_headers(headers: Iterable[Tuple[str, str]], skip: frozenset) -> List[Tuple[str, str]]:
    return [(k, v) for k, v in headers if k.lower() not in skip]


class BackendProxy:
    """
    Path-rewriting reverse proxy for one upstream service.

    Args:
        upstream_url: Base URL of the counter service, e.g. ``http://api:4000``
        prefix: Path prefix stripped before forwarding
        client: Optional httpx.AsyncClient. When omitted the proxy creates one
                on first use and closes it in aclose().
    """

    def __init__(self, upstream_url: str, prefix: str = "/backend", client: Optional[httpx.AsyncClient] = None):
        self.upstream_url = upstream_url.rstrip("/")
        self.prefix = "/" + prefix.strip("/")
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    def target_url(self, path: str, query: str = "") -> str:
        """Upstream URL for the part of the path after the prefix."""
        url = f"{self.upstream_url}/{path.lstrip('/')}"
        return f"{url}?{query}" if query else url

    async def handle(self, request: Request) -> Response:
        target = self.target_url(request.path_params.get("path", ""), request.url.query)
        body = await request.body()

        try:
            upstream = await self.client.request(
                request.method,
                target,
                content=body or None,
                headers=_filter_headers(request.headers.items(), _REQUEST_SKIP),
            )
        except httpx.HTTPError as e:
            logger.error("Proxy request to %s failed: %s", target, e)
            return JSONResponse({"error": "Bad Gateway"}, status_code=502)

        logger.debug("%s %s -> %s %s", request.method, request.url.path, target, upstream.status_code)
        response = Response(content=upstream.content, status_code=upstream.status_code)
        for key, value in _filter_headers(upstream.headers.multi_items(), _RESPONSE_SKIP):
            response.headers.append(key, value)
        return response

    def routes(self) -> List[Route]:
        """Starlette routes covering the prefix itself and everything below it."""
        return [
            Route(f"{self.prefix}/{{path:path}}", self.handle, methods=PROXY_METHODS),
            Route(self.prefix, self.handle, methods=PROXY_METHODS),
        ]

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
