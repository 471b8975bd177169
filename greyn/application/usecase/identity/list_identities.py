"""List identities use case."""

import logfire
from pydantic import BaseModel

from greyn.application.usecase.identity.items import IdentityItem
from greyn.domain.service import IdentityService
from greyn.domain.value import AccountRole, IdentityFilter, IdentityStatus, Portal


class ListIdentitiesRequest(BaseModel):
    """List identities request."""

    search: str | None = None
    status: IdentityStatus | None = None
    role: AccountRole | None = None
    portal: Portal | None = None


class ListIdentitiesResponse(BaseModel):
    """List identities response."""

    users: list[IdentityItem]
    total: int


class ListIdentitiesUseCase:
    """Use case for the admin user listing across every account kind."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize list identities use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: ListIdentitiesRequest) -> ListIdentitiesResponse:
        """List identities matching the filters.

        Args:
            request: Filters

        Returns:
            Normalized identities
        """
        with logfire.span("list_identities.execute", search=request.search):
            search = request.search.strip() if request.search else None
            identities = await self.identity_service.list_identities(
                IdentityFilter(
                    search=search or None,
                    status=request.status,
                    role=request.role,
                    portal=request.portal,
                )
            )
            items = [IdentityItem.from_identity(identity) for identity in identities]
            return ListIdentitiesResponse(users=items, total=len(items))
