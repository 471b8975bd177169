"""Change identity status use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from greyn.application.usecase.identity.items import IdentityItem
from greyn.domain.service import IdentityService
from greyn.domain.value import AccountId, IdentityStatus


class ChangeIdentityStatusRequest(BaseModel):
    """Change identity status request."""

    account_id: UUID
    status: IdentityStatus
    changed_by: UUID | None = None  # Acting administrator, for the audit trail


class ChangeIdentityStatusResponse(BaseModel):
    """Change identity status response."""

    user: IdentityItem


class ChangeIdentityStatusUseCase:
    """Use case for activating or suspending an account."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(
        self, request: ChangeIdentityStatusRequest
    ) -> ChangeIdentityStatusResponse:
        """Change an account's status.

        Args:
            request: Account and new status

        Returns:
            The normalized identity after the change
        """
        with logfire.span(
            "change_identity_status.execute",
            account_id=str(request.account_id),
            status=request.status.value,
            changed_by=str(request.changed_by) if request.changed_by else None,
        ):
            identity = await self.identity_service.change_status(
                AccountId(request.account_id), request.status
            )
            return ChangeIdentityStatusResponse(user=IdentityItem.from_identity(identity))
