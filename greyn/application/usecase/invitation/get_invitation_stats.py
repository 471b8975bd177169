"""Invitation stats use case."""

from pydantic import BaseModel

from greyn.domain.service import InvitationService


class GetInvitationStatsResponse(BaseModel):
    """Invitation counts by status."""

    total: int
    pending: int
    accepted: int
    expired: int
    revoked: int


class GetInvitationStatsUseCase:
    """Use case for the invitation dashboard counters."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self) -> GetInvitationStatsResponse:
        stats = await self.invitation_service.get_stats()
        return GetInvitationStatsResponse(**stats.model_dump())
