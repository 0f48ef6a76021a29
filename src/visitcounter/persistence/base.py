"""
Visit Counter Persistence Layer - Base Classes

This module provides the abstract interface every visit store implements.
"""

from abc import ABC, abstractmethod


class VisitStore(ABC):
    """
    Abstract base class for visit stores.

    Implementations append Visit rows and count them. Any failure to reach
    the store or run the query must surface as StoreUnavailable.
    """

    @abstractmethod
    async def insert_visit(self) -> None:
        """
        Append one Visit row and commit it.

        Raises:
            StoreUnavailable: if the store cannot be reached or the insert fails
        """
        pass

    @abstractmethod
    async def count_visits(self) -> int:
        """
        Count all Visit rows.

        Returns:
            Number of committed visits (>= 0)

        Raises:
            StoreUnavailable: if the store cannot be reached or the query fails
        """
        pass

    async def ensure_schema(self) -> None:
        """Create the visits table if the backend needs one."""
        pass

    async def close(self) -> None:
        """Release any pooled connections held by the store."""
        pass
