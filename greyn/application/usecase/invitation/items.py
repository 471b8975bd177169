"""Invitation representation shared by the invitation use cases."""

from datetime import datetime

from pydantic import BaseModel

from greyn.domain.model import Invitation
from greyn.domain.value import AccountRole, InvitationStatus, Portal


class InvitationItem(BaseModel):
    """Invitation as shown to administrators. The token is never included."""

    invitation_id: str
    email: str
    invitation_code: str
    role: AccountRole
    portal: Portal
    status: InvitationStatus
    invited_by: str
    invited_by_name: str | None = None
    invited_at: datetime
    expires_at: datetime
    accepted_at: datetime | None = None
    revoked_at: datetime | None = None
    revoked_by: str | None = None
    resend_count: int = 0
    last_resent_at: datetime | None = None

    @classmethod
    def from_invitation(
        cls, invitation: Invitation, invited_by_name: str | None = None
    ) -> "InvitationItem":
        return cls(
            invitation_id=str(invitation.id),
            email=invitation.email.root,
            invitation_code=invitation.invitation_code.root,
            role=invitation.role,
            portal=invitation.portal,
            status=invitation.status,
            invited_by=str(invitation.invited_by),
            invited_by_name=invited_by_name,
            invited_at=invitation.invited_at,
            expires_at=invitation.expires_at,
            accepted_at=invitation.accepted_at,
            revoked_at=invitation.revoked_at,
            revoked_by=str(invitation.revoked_by) if invitation.revoked_by else None,
            resend_count=invitation.resend_count,
            last_resent_at=invitation.last_resent_at,
        )
