"""
FastAPI Web Adapter - Counter Service

Exposes the CounterService over HTTP. The store is injected into
create_api (or built from configuration at startup) and reaches handlers
through a FastAPI dependency, never through a module-level global.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI
from fastapi.responses import JSONResponse
from starlette.requests import Request

from ..app.service import CounterService
from ..config import ApplicationConfig
from ..core.errors import StoreUnavailable
from ..persistence.base import VisitStore
from ..persistence.sql import SQLVisitStore

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {"error": "Internal Server Error"}

router = APIRouter()


def get_service(request: Request) -> CounterService:
    """Resolve the CounterService owned by the running app."""
    return request.app.state.service


@router.get("/health")
async def health(service: CounterService = Depends(get_service)):
    return service.health()


@router.get("/ping")
async def ping(service: CounterService = Depends(get_service)):
    return service.health()


@router.get(
    "/visits",
    responses={500: {"description": "Store unavailable"}},
)
async def get_visits(service: CounterService = Depends(get_service)):
    """Current number of recorded visits."""
    count = await service.get_count()
    return {"count": count}


@router.post(
    "/visits",
    responses={500: {"description": "Store unavailable"}},
)
async def add_visit(service: CounterService = Depends(get_service)):
    """Record one visit and return the count read right after it."""
    count = await service.add_visit()
    return {"count": count}


async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error("API error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(INTERNAL_ERROR_BODY, status_code=500)


async def catch_unhandled_errors(request: Request, call_next):
    """Turn any other fault into the uniform 500 before it leaves the app."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled API error on %s %s", request.method, request.url.path)
        return JSONResponse(INTERNAL_ERROR_BODY, status_code=500)


def create_api(store: Optional[VisitStore] = None, config: Optional[ApplicationConfig] = None) -> FastAPI:
    """
    Build the counter service app.

    ```python
    from visitcounter.adapters.api import create_api
    from visitcounter.persistence import MemoryVisitStore

    app = create_api(store=MemoryVisitStore())
    ```

    Args:
        store: Visit store to serve. If None, an SQLVisitStore is created from
               config at startup and disposed at shutdown.
        config: Application configuration (defaults to the environment)

    Returns:
        The configured FastAPI app
    """
    config = config or ApplicationConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned: Optional[VisitStore] = None
        if app.state.service is None:
            owned = SQLVisitStore(config.api.database_url, echo=config.api.database_echo)
            app.state.service = CounterService(owned)

        try:
            await app.state.service.store.ensure_schema()
        except StoreUnavailable as e:
            # /health must keep answering while the database is down; the store
            # retries schema creation on the next request
            logger.warning("Visit store not ready at startup: %s", e)

        logger.info("API listening on %s", config.api.port)
        try:
            yield
        finally:
            if owned is not None:
                await owned.close()
                app.state.service = None

    app = FastAPI(title="Visit Counter API", lifespan=lifespan)
    app.state.service = CounterService(store) if store is not None else None

    app.include_router(router)
    app.add_exception_handler(StoreUnavailable, store_unavailable_handler)
    app.middleware("http")(catch_unhandled_errors)

    return app
