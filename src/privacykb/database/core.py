import contextlib
import logging
from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,  # type: ignore[attr-defined]
    create_async_engine,
)

logger = logging.getLogger(__name__)


class KnowledgeBaseDatabaseService:
    """Read-only access to the knowledge base SQLite database.

    The database is opened through a SQLite URI with ``mode=ro``, so a missing
    file surfaces as an OperationalError on first use instead of silently
    creating an empty database.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_url = f"sqlite+aiosqlite:///file:{self.db_path}?mode=ro&uri=true"

        self.async_engine = create_async_engine(
            self.db_url,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

        self.async_session_local = async_sessionmaker(
            autocommit=False, autoflush=False, bind=self.async_engine, class_=AsyncSession
        )

    @contextlib.asynccontextmanager
    async def get_async_db(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide an async database session for dependency injection."""
        async with self.async_session_local() as session:
            yield session

    async def ping(self) -> None:
        """Run a trivial query; raises SQLAlchemyError when the database is unavailable."""
        async with self.get_async_db() as session:
            await session.execute(text("SELECT 1 FROM sqlite_master LIMIT 1"))

    async def dispose(self) -> None:
        """Dispose of the database engine to release resources.

        This should be called when the service is no longer needed,
        especially in tests, to prevent file descriptor leaks.
        """
        if hasattr(self, "async_engine") and self.async_engine:
            await self.async_engine.dispose()
            logger.debug("Async database engine disposed")
