"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from greyn.config import Settings
from greyn.domain.repository import AccountDirectory, InvitationRepository
from greyn.persistence.database import create_engine, create_session_factory
from greyn.persistence.repository import (
    PostgresInvitationRepository,
    postgres_account_directory,
)
from greyn.util.di.base import ProviderBase
from greyn.util.error import ConfigurationError
from greyn.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine.

        Raises:
            ConfigurationError: If the URL does not use the asyncpg driver
        """
        if not settings.database_url.startswith("postgresql+asyncpg://"):
            raise ConfigurationError(
                "DATABASE__URL must use the postgresql+asyncpg:// driver"
            )
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Committed at the end of the request if no exception occurred,
        rolled back otherwise.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(
        self, session: AsyncSession, settings: Settings
    ) -> InvitationRepository:
        """Provide Invitation repository."""
        return PostgresInvitationRepository(
            session, query_timeout=settings.database.query_timeout_seconds
        )

    @provide(scope=Scope.REQUEST)
    def get_account_directory(
        self, session: AsyncSession, settings: Settings
    ) -> AccountDirectory:
        """Provide the five account repositories, sharing the request's session."""
        return postgres_account_directory(
            session, query_timeout=settings.database.query_timeout_seconds
        )
