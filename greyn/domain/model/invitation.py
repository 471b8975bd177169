"""Invitation entity.

Invitations are the only way onto the platform. An administrator invites an
email address into a role and portal; the invitee accepts through a link
carrying an opaque token.
"""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field

from greyn.domain.model.common import DomainModel
from greyn.domain.value import (
    AccountId,
    AccountRole,
    EmailAddress,
    InvitationCode,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    Portal,
)


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - At most one pending invitation per email
    - Tokens are never reused across invitations
    - Accepted and revoked are terminal
    - Expired can only be revived by a resend
    - Invitations are never deleted
    """

    TRANSITIONS: ClassVar[dict[InvitationStatus, frozenset[InvitationStatus]]] = {
        InvitationStatus.PENDING: frozenset(
            {
                InvitationStatus.PENDING,  # resend
                InvitationStatus.ACCEPTED,
                InvitationStatus.REVOKED,
                InvitationStatus.EXPIRED,
            }
        ),
        InvitationStatus.EXPIRED: frozenset(
            {
                InvitationStatus.PENDING,  # resend
                InvitationStatus.REVOKED,
            }
        ),
        InvitationStatus.ACCEPTED: frozenset(),
        InvitationStatus.REVOKED: frozenset(),
    }

    id: InvitationId
    email: EmailAddress
    invitation_code: InvitationCode
    token: InvitationToken
    role: AccountRole
    portal: Portal
    status: InvitationStatus = InvitationStatus.PENDING
    invited_by: AccountId
    invited_at: datetime
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    revoked_at: Optional[datetime] = None
    revoked_by: Optional[AccountId] = None
    resend_count: int = Field(default=0, ge=0)
    last_resent_at: Optional[datetime] = None

    def can_transition_to(self, target: InvitationStatus) -> bool:
        """Whether the state machine allows moving to ``target``."""
        return target in self.TRANSITIONS[self.status]

    def is_expired(self, now: datetime) -> bool:
        """A pending invitation past its expiry time is stale."""
        return now > self.expires_at

    @property
    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING
