"""Identity stats use case."""

from pydantic import BaseModel

from greyn.domain.service import IdentityService


class GetIdentityStatsResponse(BaseModel):
    """Identity counts by status."""

    total: int
    active: int
    pending: int
    suspended: int


class GetIdentityStatsUseCase:
    """Use case for the user dashboard counters."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self) -> GetIdentityStatsResponse:
        stats = await self.identity_service.get_stats()
        return GetIdentityStatsResponse(**stats.model_dump())
