"""
Client Application - FastHTML + Datastar

Serves the counter page and mounts the backend proxy. Button clicks post to
/ui/* handlers, which call the counter service through the proxy and stream
Datastar signal patches back to the page.
"""

import json
import logging
import secrets
from typing import AsyncIterator, Callable, Dict, Any, Optional

import httpx
from datastar_py import SSE_HEADERS
from datastar_py import ServerSentEventGenerator as SSE
from fasthtml.common import *
from monsterui.all import *
from starlette.responses import StreamingResponse

from ..adapters.proxy import BackendProxy
from ..client import CounterClient
from ..config import ApplicationConfig
from .state import VisitPanel

logger = logging.getLogger(__name__)

datastar_script = Script(src="https://cdn.jsdelivr.net/gh/starfederation/datastar@1.0.0-RC.6/bundles/datastar.js", type="module")

# Host is never resolved: requests are routed in-process to the web app itself
_SELF_ORIGIN = "http://web"


def on_click(action: str) -> Dict[str, str]:
    return {"data-on:click": f"@post('{action}')"}


def counter_page(panel: VisitPanel, prefix: str):
    count_text = "unknown" if panel.count is None else str(panel.count)
    return Main(
        Container(
            H1("Docker 15 Concepts Demo"),
            P(f"Container DNS lets this UI talk to the counter API via `{prefix}/*`.", cls=TextPresets.muted_sm),
            DivLAligned(
                Button("Ping API", cls=ButtonT.secondary, submit=False, **on_click("/ui/ping")),
                Button("Add Visit", cls=ButtonT.primary, submit=False, **on_click("/ui/add-visit")),
                Button("Get Count", cls=ButtonT.secondary, submit=False, **on_click("/ui/load-count")),
            ),
            P("Visit count: ", Span(count_text, data_text="$count ?? 'unknown'", id="visit-count")),
            P("Status: ", Span(panel.status, data_text="$status", id="status")),
            cls="space-y-6",
        ),
        data_signals=json.dumps(panel.model_dump()),
        cls="min-h-screen flex flex-col items-center justify-center p-6 font-mono",
    )


def _stream(patches: AsyncIterator[Dict[str, Any]]) -> StreamingResponse:
    async def events():
        async for patch in patches:
            yield SSE.patch_signals(patch)

    return StreamingResponse(events(), media_type="text/event-stream", headers=SSE_HEADERS)


def create_web(config: Optional[ApplicationConfig] = None, upstream_client: Optional[httpx.AsyncClient] = None) -> FastHTML:
    """
    Build the client application.

    Args:
        config: Application configuration (defaults to the environment)
        upstream_client: Optional httpx client the proxy uses to reach the
                         counter service. When omitted the proxy owns one.

    Returns:
        The configured FastHTML app
    """
    config = config or ApplicationConfig.from_env()
    proxy = BackendProxy(config.web.api_url, prefix=config.web.proxy_prefix, client=upstream_client)

    async def lifespan(app):
        logger.info("Proxying %s/* to %s", proxy.prefix, proxy.upstream_url)
        try:
            yield
        finally:
            await app.state.counter_client.aclose()
            await proxy.aclose()

    app = FastHTML(
        hdrs=(Theme.zinc.headers(), datastar_script),
        secret_key=secrets.token_hex(16),
        lifespan=lifespan,
    )
    app.router.routes[:0] = proxy.routes()
    app.state.proxy = proxy
    app.state.counter_client = CounterClient(
        f"{_SELF_ORIGIN}{proxy.prefix}",
        transport=httpx.ASGITransport(app=app),
    )

    def client_for(req: Request) -> CounterClient:
        return req.app.state.counter_client

    def action_route(path: str, action: Callable[[VisitPanel, CounterClient], AsyncIterator[Dict[str, Any]]]):
        async def handler(req: Request):
            return _stream(action(VisitPanel(), client_for(req)))
        handler.__name__ = action.__name__
        app.post(path)(handler)

    @app.get("/")
    def index(req: Request):
        return Title("Visit Counter"), counter_page(VisitPanel(), proxy.prefix)

    action_route("/ui/ping", VisitPanel.ping)
    action_route("/ui/add-visit", VisitPanel.add_visit)
    action_route("/ui/load-count", VisitPanel.load_count)

    return app
