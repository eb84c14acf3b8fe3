"""
Async session manager following kkb_fastapi pattern.

`Database` is initialised once per process (application lifespan or test
fixture) and then used as an async context manager that yields a session,
committing on success and rolling back on error.
"""
import logging
from typing import Optional

from sqlalchemy.engine.url import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.database.session_manager.exceptions import (
    DatabaseNotInitialized,
    DatabaseTransactionError,
)

logger = logging.getLogger(__name__)


class Database:
    _engine: Optional[AsyncEngine] = None
    _async_session_maker: Optional[async_sessionmaker] = None

    def __init__(self):
        self.session: Optional[AsyncSession] = None

    @classmethod
    def init(cls, async_db_url: URL, engine_kw: Optional[dict] = None):
        """Create the engine and session maker shared by all sessions."""
        cls._engine = create_async_engine(async_db_url, **(engine_kw or {}))
        cls._async_session_maker = async_sessionmaker(
            bind=cls._engine, expire_on_commit=False, class_=AsyncSession
        )

    @classmethod
    async def dispose(cls):
        if cls._engine is not None:
            await cls._engine.dispose()
        cls._engine = None
        cls._async_session_maker = None

    async def __aenter__(self) -> AsyncSession:
        if self._async_session_maker is None:
            raise DatabaseNotInitialized("Call Database.init() before opening a session")
        self.session = self._async_session_maker()
        return self.session

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.session.commit()
            else:
                await self.session.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Transaction failed: {e}")
            await self.session.rollback()
            raise DatabaseTransactionError(str(e)) from e
        finally:
            await self.session.close()
