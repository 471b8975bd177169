"""Create invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from greyn.application.usecase.base import BaseUseCase
from greyn.application.usecase.invitation.items import InvitationItem
from greyn.config import Settings
from greyn.domain.service import InvitationService, acceptance_url
from greyn.domain.value import AccountId, AccountRole, Portal


class CreateInvitationRequest(BaseModel):
    """Request to invite an email address."""

    email: str = Field(min_length=1, max_length=255)
    role: AccountRole
    portal: Portal
    invited_by: UUID  # Acting administrator
    days_until_expiry: int | None = None


class CreateInvitationResponse(BaseModel):
    """Response after creating an invitation."""

    invitation: InvitationItem
    invitation_url: str


class CreateInvitationUseCase(BaseUseCase):
    """Use case for inviting a new user."""

    def __init__(self, invitation_service: InvitationService, settings: Settings) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
            settings: Application settings
        """
        self.invitation_service = invitation_service
        self.settings = settings

    async def execute(self, request: CreateInvitationRequest) -> CreateInvitationResponse:
        """Create an invitation; the email is sent in the background.

        Args:
            request: Invitation details

        Returns:
            The created invitation and its acceptance link
        """
        with logfire.span(
            "create_invitation.execute",
            role=request.role.value,
            invited_by=str(request.invited_by),
        ):
            invitation = await self.invitation_service.create_invitation(
                email=request.email,
                role=request.role,
                portal=request.portal,
                invited_by=AccountId(request.invited_by),
                days_until_expiry=request.days_until_expiry,
            )

            return CreateInvitationResponse(
                invitation=InvitationItem.from_invitation(invitation),
                invitation_url=acceptance_url(
                    self.settings.api.frontend_url, invitation.token.root
                ),
            )
