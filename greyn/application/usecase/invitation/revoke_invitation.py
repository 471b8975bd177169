"""Revoke invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from greyn.application.usecase.invitation.items import InvitationItem
from greyn.domain.service import InvitationService
from greyn.domain.value import AccountId, InvitationId


class RevokeInvitationRequest(BaseModel):
    """Revoke invitation request."""

    invitation_id: UUID
    revoked_by: UUID  # Acting administrator


class RevokeInvitationResponse(BaseModel):
    """Revoke invitation response."""

    invitation: InvitationItem


class RevokeInvitationUseCase:
    """Use case for revoking a pending invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: RevokeInvitationRequest) -> RevokeInvitationResponse:
        invitation = await self.invitation_service.revoke_invitation(
            InvitationId(request.invitation_id),
            revoked_by=AccountId(request.revoked_by),
        )
        return RevokeInvitationResponse(
            invitation=InvitationItem.from_invitation(invitation)
        )
