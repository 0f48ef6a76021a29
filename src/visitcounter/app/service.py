"""
Counter Service

The three operations the HTTP API exposes. The service owns nothing but the
store it was given.
"""

from typing import Dict

from ..persistence.base import VisitStore


class CounterService:
    """Health, read count and append visit over an injected VisitStore."""

    def __init__(self, store: VisitStore):
        self.store = store

    def health(self) -> Dict[str, bool]:
        """Static liveness signal. Never touches the store."""
        return {"ok": True}

    async def get_count(self) -> int:
        return await self.store.count_visits()

    async def add_visit(self) -> int:
        """
        Append one visit and return the count read afterwards.

        The insert and the count run as separate round trips, so a concurrent
        insert from another caller may or may not be included in the result.
        """
        await self.store.insert_visit()
        return await self.get_count()
