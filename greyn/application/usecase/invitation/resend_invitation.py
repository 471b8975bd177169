"""Resend invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from greyn.application.usecase.invitation.items import InvitationItem
from greyn.domain.service import InvitationService
from greyn.domain.value import InvitationId


class ResendInvitationRequest(BaseModel):
    """Resend invitation request."""

    invitation_id: UUID
    days_until_expiry: int | None = None


class ResendInvitationResponse(BaseModel):
    """Resend invitation response."""

    invitation: InvitationItem


class ResendInvitationUseCase:
    """Use case for extending and resending a pending or expired invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: ResendInvitationRequest) -> ResendInvitationResponse:
        invitation = await self.invitation_service.resend_invitation(
            InvitationId(request.invitation_id),
            days_until_expiry=request.days_until_expiry,
        )
        return ResendInvitationResponse(
            invitation=InvitationItem.from_invitation(invitation)
        )
