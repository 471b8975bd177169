"""Query filters and aggregate counts.

Filters are explicit request parameters; None means "no constraint".
"""

from greyn.domain.value.common import ValueObject
from greyn.domain.value.types import (
    AccountRole,
    IdentityStatus,
    InvitationStatus,
    Portal,
)


class IdentityFilter(ValueObject):
    """Filters for listing identities across every account collection."""

    search: str | None = None
    status: IdentityStatus | None = None
    role: AccountRole | None = None
    portal: Portal | None = None


class InvitationFilter(ValueObject):
    """Filters for listing invitations.

    ``search`` matches email or invitation code, case-insensitively.
    """

    search: str | None = None
    status: InvitationStatus | None = None
    role: AccountRole | None = None
    portal: Portal | None = None


class IdentityStats(ValueObject):
    """Identity counts by normalized status."""

    total: int = 0
    active: int = 0
    pending: int = 0
    suspended: int = 0


class InvitationStats(ValueObject):
    """Invitation counts by status."""

    total: int = 0
    pending: int = 0
    accepted: int = 0
    expired: int = 0
    revoked: int = 0
