"""List invitations use case."""

import logfire
from pydantic import BaseModel

from greyn.application.usecase.invitation.items import InvitationItem
from greyn.domain.service import IdentityService, InvitationService
from greyn.domain.value import (
    AccountId,
    AccountRole,
    InvitationFilter,
    InvitationStatus,
    Portal,
)

# Shown when the inviting administrator no longer exists
UNKNOWN_INVITER = "Unknown"


class ListInvitationsRequest(BaseModel):
    """List invitations request."""

    search: str | None = None
    status: InvitationStatus | None = None
    role: AccountRole | None = None
    portal: Portal | None = None


class ListInvitationsResponse(BaseModel):
    """List invitations response."""

    invitations: list[InvitationItem]
    total: int


class ListInvitationsUseCase:
    """Use case for the admin invitation listing.

    The search term matches the invitee email, the invitation code, or the
    name and email of the inviting administrator.
    """

    def __init__(
        self, invitation_service: InvitationService, identity_service: IdentityService
    ) -> None:
        """Initialize list invitations use case.

        Args:
            invitation_service: Invitation domain service
            identity_service: Identity domain service, for inviter names
        """
        self.invitation_service = invitation_service
        self.identity_service = identity_service

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        """List invitations after expiring stale ones.

        Args:
            request: Filters

        Returns:
            Matching invitations, newest first, with inviter names
        """
        with logfire.span(
            "list_invitations.execute",
            search=request.search,
            status=request.status.value if request.status else None,
        ):
            search = request.search.strip() if request.search else None

            inviter_ids: list[AccountId] = []
            if search:
                inviter_ids = await self.identity_service.find_ids_matching(
                    AccountRole.ADMIN, search
                )

            invitations = await self.invitation_service.list_invitations(
                InvitationFilter(
                    search=search or None,
                    status=request.status,
                    role=request.role,
                    portal=request.portal,
                ),
                inviter_ids=inviter_ids,
            )

            names = await self.identity_service.resolve_display_names(
                AccountRole.ADMIN, {invitation.invited_by for invitation in invitations}
            )
            items = [
                InvitationItem.from_invitation(
                    invitation, names.get(invitation.invited_by, UNKNOWN_INVITER)
                )
                for invitation in invitations
            ]
            return ListInvitationsResponse(invitations=items, total=len(items))
