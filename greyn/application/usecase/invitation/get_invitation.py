"""Get invitation use case."""

from uuid import UUID

from pydantic import BaseModel

from greyn.application.usecase.invitation.items import InvitationItem
from greyn.domain.service import IdentityService, InvitationService
from greyn.domain.value import AccountRole, InvitationId


class GetInvitationRequest(BaseModel):
    """Get invitation request."""

    invitation_id: UUID


class GetInvitationResponse(BaseModel):
    """Get invitation response."""

    invitation: InvitationItem


class GetInvitationUseCase:
    """Use case for reading one invitation with its inviter's name."""

    def __init__(
        self, invitation_service: InvitationService, identity_service: IdentityService
    ) -> None:
        self.invitation_service = invitation_service
        self.identity_service = identity_service

    async def execute(self, request: GetInvitationRequest) -> GetInvitationResponse:
        invitation = await self.invitation_service.get_invitation(
            InvitationId(request.invitation_id)
        )
        names = await self.identity_service.resolve_display_names(
            AccountRole.ADMIN, {invitation.invited_by}
        )
        return GetInvitationResponse(
            invitation=InvitationItem.from_invitation(
                invitation, names.get(invitation.invited_by, "Unknown")
            )
        )
