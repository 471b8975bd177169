"""Domain value objects for Greyn."""

from greyn.domain.value.identifiers import AccountId, InvitationId
from greyn.domain.value.query import (
    IdentityFilter,
    IdentityStats,
    InvitationFilter,
    InvitationStats,
)
from greyn.domain.value.types import (
    AccountRole,
    AccountStatus,
    EmailAddress,
    IdentityStatus,
    InvitationCode,
    InvitationStatus,
    InvitationToken,
    Portal,
)

__all__ = [
    # Identifiers
    "AccountId",
    "InvitationId",
    # Types
    "AccountRole",
    "AccountStatus",
    "EmailAddress",
    "IdentityStatus",
    "InvitationCode",
    "InvitationStatus",
    "InvitationToken",
    "Portal",
    # Queries
    "IdentityFilter",
    "IdentityStats",
    "InvitationFilter",
    "InvitationStats",
]
