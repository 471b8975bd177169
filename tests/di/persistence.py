"""Mock persistence providers for testing."""

from dishka import Scope, provide

from greyn.domain.repository import AccountDirectory, InvitationRepository
from greyn.persistence.repository.inmemory import (
    InMemoryInvitationRepository,
    in_memory_account_directory,
)
from greyn.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so every request against one container sees the same
    store. Each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_invitation_repository(self) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository()

    @provide(scope=Scope.APP)
    def get_account_directory(self) -> AccountDirectory:
        """Provide in-memory account repositories, one per role."""
        return in_memory_account_directory()
