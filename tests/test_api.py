"""Counter service HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from visitcounter.adapters.api import create_api
from visitcounter.config import ApplicationConfig
from visitcounter.persistence import MemoryVisitStore


class ExplodingStore(MemoryVisitStore):
    """Store failing with an error outside the store taxonomy."""

    async def count_visits(self) -> int:
        raise RuntimeError("boom")


@pytest.mark.parametrize("path", ["/health", "/ping"])
def test_liveness_endpoints(api_client, path):
    res = api_client.get(path)
    assert res.status_code == 200
    assert res.json() == {"ok": True}


@pytest.mark.parametrize("path", ["/health", "/ping"])
def test_liveness_ignores_store_state(api_client, store, path):
    store.available = False
    res = api_client.get(path)
    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_empty_store_count_is_zero(api_client):
    res = api_client.get("/visits")
    assert res.status_code == 200
    assert res.json() == {"count": 0}


def test_add_visit_then_read_count(api_client):
    assert api_client.post("/visits").json() == {"count": 1}
    assert api_client.post("/visits").json() == {"count": 2}

    res = api_client.get("/visits")
    assert res.status_code == 200
    assert res.json() == {"count": 2}


def test_n_sequential_visits_are_all_counted(api_client, store):
    for _ in range(7):
        assert api_client.post("/visits").status_code == 200
    assert api_client.get("/visits").json() == {"count": 7}
    assert len(store.visits) == 7


@pytest.mark.parametrize("method", ["GET", "POST"])
def test_store_unavailable_returns_uniform_500(api_client, store, method):
    store.available = False
    res = api_client.request(method, "/visits")
    assert res.status_code == 500
    assert res.json() == {"error": "Internal Server Error"}


def test_store_error_is_logged(api_client, store, caplog):
    store.available = False
    with caplog.at_level("ERROR", logger="visitcounter.adapters.api"):
        api_client.get("/visits")
    assert any("API error on GET /visits" in r.getMessage() for r in caplog.records)


def test_failed_add_visit_does_not_count(api_client, store):
    store.available = False
    assert api_client.post("/visits").status_code == 500
    store.available = True
    assert api_client.get("/visits").json() == {"count": 0}


def test_unexpected_error_returns_500_without_detail(config, caplog):
    app = create_api(store=ExplodingStore(), config=config)
    # The default client re-raises anything that escapes the app
    with TestClient(app) as client, caplog.at_level("ERROR", logger="visitcounter.adapters.api"):
        res = client.get("/visits")
    assert res.status_code == 500
    assert res.json() == {"error": "Internal Server Error"}
    assert "boom" not in res.text
    assert [r.getMessage() for r in caplog.records if r.name == "visitcounter.adapters.api"] == [
        "Unhandled API error on GET /visits",
    ]


def test_database_reachable_after_startup(tmp_path):
    late = tmp_path / "late"
    config = ApplicationConfig.from_env({
        "APP_ENV": "testing",
        "DATABASE_URL": f"sqlite+aiosqlite:///{late / 'visits.db'}",
    })
    with TestClient(create_api(config=config)) as client:
        assert client.get("/visits").status_code == 500

        late.mkdir()
        res = client.post("/visits")
        assert res.status_code == 200
        assert res.json() == {"count": 1}
        assert client.get("/visits").json() == {"count": 1}


def test_store_built_from_config(tmp_path):
    config = ApplicationConfig.from_env({
        "APP_ENV": "testing",
        "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'visits.db'}",
    })
    with TestClient(create_api(config=config)) as client:
        assert client.get("/visits").json() == {"count": 0}
        assert client.post("/visits").json() == {"count": 1}

    # Rows outlive the process that wrote them
    with TestClient(create_api(config=config)) as client:
        assert client.get("/visits").json() == {"count": 1}


def test_unreachable_database_keeps_health_up(tmp_path):
    config = ApplicationConfig.from_env({
        "APP_ENV": "testing",
        "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'nope' / 'visits.db'}",
    })
    with TestClient(create_api(config=config)) as client:
        assert client.get("/health").json() == {"ok": True}
        assert client.get("/visits").status_code == 500
        assert client.post("/visits").status_code == 500
