"""Invitation routes.

Admin routes expect the acting administrator's id in the ``X-Admin-Id``
header, set by the upstream credential layer.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, Response, status
from pydantic import BaseModel

from greyn.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    ExportInvitationsUseCase,
    GetInvitationRequest,
    GetInvitationResponse,
    GetInvitationStatsResponse,
    GetInvitationStatsUseCase,
    GetInvitationUseCase,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
    RevokeInvitationRequest,
    RevokeInvitationResponse,
    RevokeInvitationUseCase,
    ValidateInvitationRequest,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)
from greyn.domain.value import AccountRole, InvitationStatus, Portal

admin_router = APIRouter(
    prefix="/admin/invitations", tags=["admin-invitations"], route_class=DishkaRoute
)
router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class CreateInvitationAPIRequest(BaseModel):
    """API request for creating an invitation."""

    email: str
    role: AccountRole
    portal: Portal
    days_until_expiry: int | None = None


class ResendInvitationAPIRequest(BaseModel):
    """API request for resending an invitation."""

    days_until_expiry: int | None = None


def _filters(
    search: str | None,
    status_filter: InvitationStatus | None,
    role: AccountRole | None,
    portal: Portal | None,
) -> ListInvitationsRequest:
    return ListInvitationsRequest(
        search=search, status=status_filter, role=role, portal=portal
    )


@admin_router.get("", response_model=ListInvitationsResponse)
async def list_invitations(
    use_case: FromDishka[ListInvitationsUseCase],
    search: str | None = Query(default=None),
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
    role: AccountRole | None = Query(default=None),
    portal: Portal | None = Query(default=None),
) -> ListInvitationsResponse:
    """List invitations, expiring stale ones first.

    Args:
        use_case: List invitations use case from DI
        search: Matches email, code, or the inviting administrator
        status_filter: Optional status filter
        role: Optional role filter
        portal: Optional portal filter

    Returns:
        Matching invitations, newest first
    """
    return await use_case.execute(_filters(search, status_filter, role, portal))


@admin_router.post(
    "", response_model=CreateInvitationResponse, status_code=status.HTTP_201_CREATED
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    use_case: FromDishka[CreateInvitationUseCase],
    admin_id: UUID = Header(alias="X-Admin-Id"),
) -> CreateInvitationResponse:
    """Invite an email address into a role and portal.

    Args:
        request: Invitee details
        use_case: Create invitation use case from DI
        admin_id: Acting administrator

    Returns:
        Created invitation and its acceptance link
    """
    return await use_case.execute(
        CreateInvitationRequest(
            email=request.email,
            role=request.role,
            portal=request.portal,
            invited_by=admin_id,
            days_until_expiry=request.days_until_expiry,
        )
    )


@admin_router.get("/stats", response_model=GetInvitationStatsResponse)
async def get_invitation_stats(
    use_case: FromDishka[GetInvitationStatsUseCase],
) -> GetInvitationStatsResponse:
    """Invitation counts by status."""
    return await use_case.execute()


@admin_router.get("/export")
async def export_invitations(
    use_case: FromDishka[ExportInvitationsUseCase],
    search: str | None = Query(default=None),
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
    role: AccountRole | None = Query(default=None),
    portal: Portal | None = Query(default=None),
) -> Response:
    """Export the filtered invitation listing as CSV."""
    export = await use_case.execute(_filters(search, status_filter, role, portal))
    return Response(
        content=export.content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@admin_router.get("/{invitation_id}", response_model=GetInvitationResponse)
async def get_invitation(
    invitation_id: UUID,
    use_case: FromDishka[GetInvitationUseCase],
) -> GetInvitationResponse:
    """Get one invitation."""
    return await use_case.execute(GetInvitationRequest(invitation_id=invitation_id))


@admin_router.put("/{invitation_id}/resend", response_model=ResendInvitationResponse)
async def resend_invitation(
    invitation_id: UUID,
    use_case: FromDishka[ResendInvitationUseCase],
    request: ResendInvitationAPIRequest | None = None,
) -> ResendInvitationResponse:
    """Extend a pending or expired invitation and email it again."""
    return await use_case.execute(
        ResendInvitationRequest(
            invitation_id=invitation_id,
            days_until_expiry=request.days_until_expiry if request else None,
        )
    )


@admin_router.put("/{invitation_id}/revoke", response_model=RevokeInvitationResponse)
async def revoke_invitation(
    invitation_id: UUID,
    use_case: FromDishka[RevokeInvitationUseCase],
    admin_id: UUID = Header(alias="X-Admin-Id"),
) -> RevokeInvitationResponse:
    """Revoke a pending invitation."""
    return await use_case.execute(
        RevokeInvitationRequest(invitation_id=invitation_id, revoked_by=admin_id)
    )


@router.get("/{token}", response_model=ValidateInvitationResponse)
async def validate_invitation(
    token: str,
    use_case: FromDishka[ValidateInvitationUseCase],
) -> ValidateInvitationResponse:
    """Check an invitation link before signup.

    Never fails for an unknown token; the response says why it is not valid.
    """
    return await use_case.execute(ValidateInvitationRequest(token=token))


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationRequest,
    use_case: FromDishka[AcceptInvitationUseCase],
) -> AcceptInvitationResponse:
    """Consume an invitation. The caller creates the account from the response."""
    return await use_case.execute(request)
