"""CounterService over the in-memory store."""

import asyncio

import pytest

from visitcounter.app import CounterService
from visitcounter.core.errors import StoreUnavailable
from visitcounter.persistence import MemoryVisitStore


@pytest.fixture
def service():
    return CounterService(MemoryVisitStore())


def test_health_is_static(service):
    service.store.available = False
    assert service.health() == {"ok": True}


@pytest.mark.asyncio
async def test_add_visit_returns_post_insert_count(service):
    assert await service.get_count() == 0
    assert await service.add_visit() == 1
    assert await service.add_visit() == 2
    assert await service.get_count() == 2


@pytest.mark.asyncio
async def test_concurrent_add_visits_lose_nothing(service):
    counts = await asyncio.gather(*(service.add_visit() for _ in range(20)))
    assert await service.get_count() == 20
    assert max(counts) == 20
    assert all(1 <= c <= 20 for c in counts)


@pytest.mark.asyncio
async def test_store_failure_propagates(service):
    service.store.available = False
    with pytest.raises(StoreUnavailable):
        await service.add_visit()
    with pytest.raises(StoreUnavailable):
        await service.get_count()
