"""Identity use cases."""

from greyn.application.usecase.identity.change_identity_role import (
    ChangeIdentityRoleRequest,
    ChangeIdentityRoleResponse,
    ChangeIdentityRoleUseCase,
)
from greyn.application.usecase.identity.change_identity_status import (
    ChangeIdentityStatusRequest,
    ChangeIdentityStatusResponse,
    ChangeIdentityStatusUseCase,
)
from greyn.application.usecase.identity.get_identity import (
    GetIdentityRequest,
    GetIdentityResponse,
    GetIdentityUseCase,
)
from greyn.application.usecase.identity.get_identity_stats import (
    GetIdentityStatsResponse,
    GetIdentityStatsUseCase,
)
from greyn.application.usecase.identity.items import IdentityItem
from greyn.application.usecase.identity.list_identities import (
    ListIdentitiesRequest,
    ListIdentitiesResponse,
    ListIdentitiesUseCase,
)

__all__ = [
    "ChangeIdentityRoleRequest",
    "ChangeIdentityRoleResponse",
    "ChangeIdentityRoleUseCase",
    "ChangeIdentityStatusRequest",
    "ChangeIdentityStatusResponse",
    "ChangeIdentityStatusUseCase",
    "GetIdentityRequest",
    "GetIdentityResponse",
    "GetIdentityUseCase",
    "GetIdentityStatsResponse",
    "GetIdentityStatsUseCase",
    "IdentityItem",
    "ListIdentitiesRequest",
    "ListIdentitiesResponse",
    "ListIdentitiesUseCase",
]
