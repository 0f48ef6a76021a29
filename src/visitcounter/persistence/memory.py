"""
Visit Counter Persistence Layer - Memory Backend

In-memory visit store for development and testing.
"""

from typing import List

from ..core.errors import StoreUnavailable
from ..core.visit import Visit
from .base import VisitStore


class MemoryVisitStore(VisitStore):
    """
    In-memory visit store.

    Data is lost when the process exits. Setting ``available`` to False makes
    every operation fail the way an unreachable database would.
    """

    def __init__(self):
        self._visits: List[Visit] = []
        self.available: bool = True

    def _check_available(self) -> None:
        if not self.available:
            raise StoreUnavailable("memory store is marked unavailable")

    async def insert_visit(self) -> None:
        self._check_available()
        self._visits.append(Visit(id=len(self._visits) + 1))

    async def count_visits(self) -> int:
        self._check_available()
        return len(self._visits)

    @property
    def visits(self) -> List[Visit]:
        """Snapshot of the stored rows, oldest first."""
        return list(self._visits)
