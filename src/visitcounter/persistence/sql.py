"""
SQL Visit Store - SQLModel / SQLAlchemy async backend

Keeps one async engine per store instance. Sessions come from an
async_sessionmaker bound to that engine, so concurrent requests share the
engine's connection pool.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from ..core.errors import StoreUnavailable
from ..core.visit import Visit
from .base import VisitStore

logger = logging.getLogger(__name__)

_ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}

# Errors raised while connecting or querying
STORE_ERRORS = (SQLAlchemyError, OSError)


def normalize_database_url(url: str) -> str:
    """
    Rewrite a plain database URL so it uses an async driver.

    ``postgres://u:p@db/app`` becomes ``postgresql+asyncpg://u:p@db/app``.
    URLs that already name a driver are returned unchanged.
    """
    scheme, sep, rest = url.partition("://")
    if not sep:
        return url
    return f"{_ASYNC_DRIVERS.get(scheme, scheme)}://{rest}"


class SQLVisitStore(VisitStore):
    """
    Visit store backed by a relational database.

    The pool is sized by SQLAlchemy's defaults for the dialect. The visits
    table is created on first use if startup could not reach the database.
    """

    def __init__(self, database_url: str, echo: bool = False, connect_args: Optional[Dict[str, Any]] = None):
        self.database_url = normalize_database_url(database_url)
        self.engine = create_async_engine(
            self.database_url,
            echo=echo,
            connect_args=connect_args or {},
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._schema_ready = False

    async def ensure_schema(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all, tables=[Visit.__table__])
        except STORE_ERRORS as e:
            raise StoreUnavailable(f"could not create visits table: {e}") from e
        self._schema_ready = True

    async def _ready(self) -> None:
        # Retried on every call until the database has been reachable once
        if not self._schema_ready:
            await self.ensure_schema()

    async def insert_visit(self) -> None:
        await self._ready()
        try:
            async with self.session_factory() as session:
                session.add(Visit())
                await session.commit()
        except STORE_ERRORS as e:
            raise StoreUnavailable(f"insert failed: {e}") from e

    async def count_visits(self) -> int:
        await self._ready()
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(func.count()).select_from(Visit))
                return int(result.scalar_one())
        except STORE_ERRORS as e:
            raise StoreUnavailable(f"count failed: {e}") from e

    async def close(self) -> None:
        await self.engine.dispose()
        logger.debug("Disposed engine for %s", self.engine.url.render_as_string(hide_password=True))
