"""Get identity use case."""

from uuid import UUID

from pydantic import BaseModel

from greyn.application.usecase.identity.items import IdentityItem
from greyn.domain.service import IdentityService
from greyn.domain.value import AccountId


class GetIdentityRequest(BaseModel):
    """Get identity request."""

    account_id: UUID


class GetIdentityResponse(BaseModel):
    """Get identity response."""

    user: IdentityItem


class GetIdentityUseCase:
    """Use case for reading one identity, whichever collection holds it."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: GetIdentityRequest) -> GetIdentityResponse:
        identity = await self.identity_service.get_identity(AccountId(request.account_id))
        return GetIdentityResponse(user=IdentityItem.from_identity(identity))
