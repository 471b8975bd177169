"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository, in_memory_account_directory
from .invitation import InMemoryInvitationRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryInvitationRepository",
    "in_memory_account_directory",
]
