"""Export invitations use case."""

import csv
import io
from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from greyn.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsUseCase,
)

CSV_HEADERS = [
    "Email",
    "Invitation Code",
    "Role",
    "Portal",
    "Status",
    "Invited By",
    "Invited At",
    "Expires At",
    "Accepted At",
    "Resend Count",
]


class ExportInvitationsResponse(BaseModel):
    """CSV export of invitations."""

    filename: str
    content: str
    count: int


class ExportInvitationsUseCase:
    """Use case for exporting the filtered invitation listing as CSV."""

    def __init__(self, list_invitations: ListInvitationsUseCase) -> None:
        """Initialize export use case.

        Args:
            list_invitations: Listing use case providing filtered rows
        """
        self.list_invitations = list_invitations

    async def execute(self, request: ListInvitationsRequest) -> ExportInvitationsResponse:
        """Export invitations matching the same filters as the listing.

        Args:
            request: Listing filters

        Returns:
            CSV document and a dated filename
        """
        with logfire.span("export_invitations.execute"):
            listing = await self.list_invitations.execute(request)

            buffer = io.StringIO()
            writer = csv.writer(buffer)
            writer.writerow(CSV_HEADERS)
            for item in listing.invitations:
                writer.writerow(
                    [
                        item.email,
                        item.invitation_code,
                        item.role.value,
                        item.portal.value,
                        item.status.value,
                        item.invited_by_name or "",
                        item.invited_at.isoformat(),
                        item.expires_at.isoformat(),
                        item.accepted_at.isoformat() if item.accepted_at else "",
                        item.resend_count,
                    ]
                )

            today = datetime.now(timezone.utc).date().isoformat()
            logfire.info("Invitations exported", count=listing.total)
            return ExportInvitationsResponse(
                filename=f"invitations-{today}.csv",
                content=buffer.getvalue(),
                count=listing.total,
            )
