"""Accept invitation use case."""

import logfire
from pydantic import BaseModel

from greyn.domain.service import InvitationService
from greyn.domain.value import AccountRole, InvitationToken, Portal


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    token: str


class AcceptInvitationResponse(BaseModel):
    """What the signup flow needs to create the account."""

    email: str
    role: AccountRole
    portal: Portal
    invitation_code: str


class AcceptInvitationUseCase:
    """Use case for consuming an invitation during signup.

    The signup flow creates the account from the returned details.
    """

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize accept invitation use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(self, request: AcceptInvitationRequest) -> AcceptInvitationResponse:
        """Accept an invitation.

        Args:
            request: Request with the token from the acceptance link

        Returns:
            Email, role, portal and code of the accepted invitation
        """
        with logfire.span(
            "accept_invitation.execute", token=InvitationToken.redact(request.token)
        ):
            invitation = await self.invitation_service.accept_invitation(request.token)
            return AcceptInvitationResponse(
                email=invitation.email.root,
                role=invitation.role,
                portal=invitation.portal,
                invitation_code=invitation.invitation_code.root,
            )
