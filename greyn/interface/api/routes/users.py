"""Admin user routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query
from pydantic import BaseModel

from greyn.application.usecase.identity import (
    ChangeIdentityRoleRequest,
    ChangeIdentityRoleResponse,
    ChangeIdentityRoleUseCase,
    ChangeIdentityStatusRequest,
    ChangeIdentityStatusResponse,
    ChangeIdentityStatusUseCase,
    GetIdentityRequest,
    GetIdentityResponse,
    GetIdentityStatsResponse,
    GetIdentityStatsUseCase,
    GetIdentityUseCase,
    ListIdentitiesRequest,
    ListIdentitiesResponse,
    ListIdentitiesUseCase,
)
from greyn.domain.value import AccountRole, IdentityStatus, Portal

router = APIRouter(prefix="/admin/users", tags=["admin-users"], route_class=DishkaRoute)


class ChangeStatusAPIRequest(BaseModel):
    """API request for changing an account's status."""

    status: IdentityStatus


class ChangeRoleAPIRequest(BaseModel):
    """API request for changing an account's role."""

    role: str


@router.get("", response_model=ListIdentitiesResponse)
async def list_users(
    use_case: FromDishka[ListIdentitiesUseCase],
    search: str | None = Query(default=None),
    status_filter: IdentityStatus | None = Query(default=None, alias="status"),
    role: AccountRole | None = Query(default=None),
    portal: Portal | None = Query(default=None),
) -> ListIdentitiesResponse:
    """List users across every account kind.

    Args:
        use_case: List identities use case from DI
        search: Matches email or name
        status_filter: Optional status filter
        role: Optional role filter
        portal: Optional portal filter

    Returns:
        Normalized users
    """
    return await use_case.execute(
        ListIdentitiesRequest(
            search=search, status=status_filter, role=role, portal=portal
        )
    )


@router.get("/stats", response_model=GetIdentityStatsResponse)
async def get_user_stats(
    use_case: FromDishka[GetIdentityStatsUseCase],
) -> GetIdentityStatsResponse:
    """User counts by status."""
    return await use_case.execute()


@router.get("/{account_id}", response_model=GetIdentityResponse)
async def get_user(
    account_id: UUID,
    use_case: FromDishka[GetIdentityUseCase],
) -> GetIdentityResponse:
    """Get one user, whichever account kind holds it."""
    return await use_case.execute(GetIdentityRequest(account_id=account_id))


@router.put("/{account_id}/status", response_model=ChangeIdentityStatusResponse)
async def change_user_status(
    account_id: UUID,
    request: ChangeStatusAPIRequest,
    use_case: FromDishka[ChangeIdentityStatusUseCase],
    admin_id: UUID = Header(alias="X-Admin-Id"),
) -> ChangeIdentityStatusResponse:
    """Activate or suspend a user."""
    return await use_case.execute(
        ChangeIdentityStatusRequest(
            account_id=account_id, status=request.status, changed_by=admin_id
        )
    )


@router.put("/{account_id}/role", response_model=ChangeIdentityRoleResponse)
async def change_user_role(
    account_id: UUID,
    request: ChangeRoleAPIRequest,
    use_case: FromDishka[ChangeIdentityRoleUseCase],
    admin_id: UUID = Header(alias="X-Admin-Id"),
) -> ChangeIdentityRoleResponse:
    """Move a user to another role. The user gets a new id."""
    return await use_case.execute(
        ChangeIdentityRoleRequest(
            account_id=account_id, role=request.role, changed_by=admin_id
        )
    )
