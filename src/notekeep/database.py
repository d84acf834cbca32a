# Database connection setup
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .core.models.base import BaseModel

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and session factory.

    Built once at startup, stored on ``app.state.database`` and disposed
    at shutdown. Routes reach it through ``get_db_session``.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        """Create the engine and session factory."""
        if self.is_connected:
            return

        kwargs = {"echo": self.echo}
        if self.url.startswith("sqlite") and ":memory:" in self.url:
            # one shared connection, otherwise every checkout sees an empty DB
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}

        self.engine = create_async_engine(self.url, **kwargs)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info("Database engine created", extra={"dialect": self.engine.dialect.name})

    async def disconnect(self) -> None:
        """Dispose the engine and drop all pooled connections."""
        if not self.is_connected:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database engine disposed")

    async def create_tables(self) -> None:
        """Create all tables."""
        if self.engine is None:
            raise RuntimeError("Database is not connected")
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session, closing it when the block exits."""
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Get database session."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
