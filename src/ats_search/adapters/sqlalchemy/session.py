"""SQLAlchemy adapter – SqlAlchemySessionFactory."""
from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ats_search.adapters.sqlalchemy.models import Base
from ats_search.config import SearchSettings


class SqlAlchemySessionFactory:
    """Creates async SQLAlchemy sessions from an engine URL."""

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        self._engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: SearchSettings, **engine_kwargs: Any) -> SqlAlchemySessionFactory:
        return cls(settings.database_url, **engine_kwargs)

    @property
    def engine(self) -> Any:
        return self._engine

    def __call__(self) -> AsyncSession:
        return self._session_factory()

    async def create_all(self) -> None:
        """Create the search tables if they do not exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()


__all__ = ["SqlAlchemySessionFactory"]
