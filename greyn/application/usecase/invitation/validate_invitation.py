"""Validate invitation use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from greyn.domain.error import NotFoundError
from greyn.domain.service import InvitationService
from greyn.domain.service.invitation_service import ACCEPT_REFUSALS
from greyn.domain.value import AccountRole, InvitationStatus, InvitationToken, Portal


class ValidateInvitationRequest(BaseModel):
    """Validate invitation request."""

    token: str


class ValidateInvitationResponse(BaseModel):
    """Validate invitation response."""

    valid: bool
    status: InvitationStatus | None = None
    email: str | None = None
    role: AccountRole | None = None
    portal: Portal | None = None
    invitation_code: str | None = None
    expires_at: datetime | None = None
    message: str


class ValidateInvitationUseCase:
    """Use case for checking an invitation token without consuming it.

    Lets the signup page show the invitation before the account is created.
    A stale pending invitation is persisted as expired on the way.
    """

    def __init__(self, invitation_service: InvitationService) -> None:
        """Initialize validate invitation use case.

        Args:
            invitation_service: Invitation domain service
        """
        self.invitation_service = invitation_service

    async def execute(
        self, request: ValidateInvitationRequest
    ) -> ValidateInvitationResponse:
        """Validate an invitation token.

        Args:
            request: Validation request with token

        Returns:
            Validation response with invitation details or the reason it is unusable
        """
        with logfire.span(
            "validate_invitation.execute", token=InvitationToken.redact(request.token)
        ):
            try:
                invitation = await self.invitation_service.get_invitation_by_token(
                    request.token
                )
            except NotFoundError:
                return ValidateInvitationResponse(
                    valid=False, message="Invitation not found"
                )

            details = {
                "status": invitation.status,
                "email": invitation.email.root,
                "role": invitation.role,
                "portal": invitation.portal,
                "invitation_code": invitation.invitation_code.root,
                "expires_at": invitation.expires_at,
            }

            if not invitation.is_pending:
                logfire.info(
                    "Invitation not usable",
                    invitation_id=str(invitation.id),
                    status=invitation.status.value,
                )
                return ValidateInvitationResponse(
                    valid=False,
                    message=ACCEPT_REFUSALS[invitation.status],
                    **details,
                )

            return ValidateInvitationResponse(
                valid=True, message="Valid invitation", **details
            )
