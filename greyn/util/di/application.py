"""Application layer DI providers."""

from dishka import Scope, provide

from greyn.application.usecase.identity import (
    ChangeIdentityRoleUseCase,
    ChangeIdentityStatusUseCase,
    GetIdentityStatsUseCase,
    GetIdentityUseCase,
    ListIdentitiesUseCase,
)
from greyn.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CreateInvitationUseCase,
    ExportInvitationsUseCase,
    GetInvitationStatsUseCase,
    GetInvitationUseCase,
    ListInvitationsUseCase,
    ResendInvitationUseCase,
    RevokeInvitationUseCase,
    ValidateInvitationUseCase,
)
from greyn.config import Settings
from greyn.domain.service import (
    IdentityService,
    InvitationService,
    RoleMigrationService,
)
from greyn.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Invitation use cases
    @provide
    def get_create_invitation_use_case(
        self, invitation_service: InvitationService, settings: Settings
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(
            invitation_service=invitation_service, settings=settings
        )

    @provide
    def get_resend_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> ResendInvitationUseCase:
        """Provide resend invitation use case."""
        return ResendInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_revoke_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> RevokeInvitationUseCase:
        """Provide revoke invitation use case."""
        return RevokeInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_accept_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_validate_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> ValidateInvitationUseCase:
        """Provide validate invitation use case."""
        return ValidateInvitationUseCase(invitation_service=invitation_service)

    @provide
    def get_get_invitation_use_case(
        self,
        invitation_service: InvitationService,
        identity_service: IdentityService,
    ) -> GetInvitationUseCase:
        """Provide get invitation use case."""
        return GetInvitationUseCase(
            invitation_service=invitation_service, identity_service=identity_service
        )

    @provide
    def get_list_invitations_use_case(
        self,
        invitation_service: InvitationService,
        identity_service: IdentityService,
    ) -> ListInvitationsUseCase:
        """Provide list invitations use case."""
        return ListInvitationsUseCase(
            invitation_service=invitation_service, identity_service=identity_service
        )

    @provide
    def get_invitation_stats_use_case(
        self, invitation_service: InvitationService
    ) -> GetInvitationStatsUseCase:
        """Provide invitation stats use case."""
        return GetInvitationStatsUseCase(invitation_service=invitation_service)

    @provide
    def get_export_invitations_use_case(
        self, list_invitations: ListInvitationsUseCase
    ) -> ExportInvitationsUseCase:
        """Provide export invitations use case."""
        return ExportInvitationsUseCase(list_invitations=list_invitations)

    # Identity use cases
    @provide
    def get_list_identities_use_case(
        self, identity_service: IdentityService
    ) -> ListIdentitiesUseCase:
        """Provide list identities use case."""
        return ListIdentitiesUseCase(identity_service=identity_service)

    @provide
    def get_identity_stats_use_case(
        self, identity_service: IdentityService
    ) -> GetIdentityStatsUseCase:
        """Provide identity stats use case."""
        return GetIdentityStatsUseCase(identity_service=identity_service)

    @provide
    def get_get_identity_use_case(
        self, identity_service: IdentityService
    ) -> GetIdentityUseCase:
        """Provide get identity use case."""
        return GetIdentityUseCase(identity_service=identity_service)

    @provide
    def get_change_identity_status_use_case(
        self, identity_service: IdentityService
    ) -> ChangeIdentityStatusUseCase:
        """Provide change identity status use case."""
        return ChangeIdentityStatusUseCase(identity_service=identity_service)

    @provide
    def get_change_identity_role_use_case(
        self, role_migration_service: RoleMigrationService
    ) -> ChangeIdentityRoleUseCase:
        """Provide change identity role use case."""
        return ChangeIdentityRoleUseCase(
            role_migration_service=role_migration_service
        )
