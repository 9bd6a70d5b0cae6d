import contextlib
from mentorlink.common.environment_constants import DATABASE_URL
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


class Database:
    def __init__(self, database_url: str | None = None, echo=False):
        """
        Initialize a Database instance.

        Args:
            database_url (str | None): SQLAlchemy async connection URL. Falls back to
                the DATABASE_URL environment variable when omitted.
            echo (bool): If True, SQLAlchemy will output executed SQL statements.
        """
        self.database_url = database_url or DATABASE_URL
        if not self.database_url:
            raise ValueError("DATABASE_URL must be set")
        self._engine = create_async_engine(self.database_url, echo=echo)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def get_engine(self):
        """
        Expose the underlying SQLAlchemy async engine.

        This is usually needed only for external tools such as table creation scripts.
        """
        return self._engine

    async def close(self):
        """
        Dispose the database engine.

        Typically called on application shutdown to cleanly close connection pools.
        """
        await self._engine.dispose()

    @contextlib.asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a transactional session context manager.

        This handles session lifecycle automatically:
        - create session
        - yield it to the caller
        - rollback on error
        - close session at the end

        Note:
            Services perform an explicit `session.commit()` once a workflow step
            succeeds, so nothing is committed here.
        """
        session: AsyncSession = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
