"""PostgreSQL repository implementations."""

from greyn.persistence.repository.account import (
    PostgresAccountRepository,
    postgres_account_directory,
)
from greyn.persistence.repository.invitation import PostgresInvitationRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresInvitationRepository",
    "postgres_account_directory",
]
