"""Shared fixtures: memory-backed API, web app proxied to it in-process."""

import httpx
import pytest
from fastapi.testclient import TestClient

from visitcounter.adapters.api import create_api
from visitcounter.config import ApplicationConfig
from visitcounter.persistence import MemoryVisitStore
from visitcounter.ui.pages import create_web


@pytest.fixture
def config():
    return ApplicationConfig.from_env({"APP_ENV": "testing"})


@pytest.fixture
def store():
    return MemoryVisitStore()


@pytest.fixture
def api_app(store, config):
    return create_api(store=store, config=config)


@pytest.fixture
def api_client(api_app):
    with TestClient(api_app) as client:
        yield client


@pytest.fixture
def web_app(api_app, config):
    upstream = httpx.AsyncClient(transport=httpx.ASGITransport(app=api_app))
    return create_web(config=config, upstream_client=upstream)


@pytest.fixture
def web_client(web_app):
    with TestClient(web_app) as client:
        yield client
