"""Change identity role use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from greyn.application.usecase.identity.items import IdentityItem
from greyn.domain.service import RoleMigrationService
from greyn.domain.value import AccountId


class ChangeIdentityRoleRequest(BaseModel):
    """Change identity role request."""

    account_id: UUID
    role: str  # Validated by the domain, so unknown roles raise InvalidRoleError
    changed_by: UUID | None = None  # Acting administrator, for the audit trail


class ChangeIdentityRoleResponse(BaseModel):
    """Change identity role response.

    The account gets a new id when it moves to another collection.
    """

    user: IdentityItem
    previous_id: str


class ChangeIdentityRoleUseCase:
    """Use case for moving an account to another role."""

    def __init__(self, role_migration_service: RoleMigrationService) -> None:
        """Initialize use case.

        Args:
            role_migration_service: Role migration domain service
        """
        self.role_migration_service = role_migration_service

    async def execute(
        self, request: ChangeIdentityRoleRequest
    ) -> ChangeIdentityRoleResponse:
        """Change an account's role.

        Args:
            request: Account and destination role

        Returns:
            The normalized identity of the migrated account
        """
        with logfire.span(
            "change_identity_role.execute",
            account_id=str(request.account_id),
            role=request.role,
            changed_by=str(request.changed_by) if request.changed_by else None,
        ):
            identity = await self.role_migration_service.change_role(
                AccountId(request.account_id), request.role
            )
            return ChangeIdentityRoleResponse(
                user=IdentityItem.from_identity(identity),
                previous_id=str(request.account_id),
            )
