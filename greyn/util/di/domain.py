"""Domain layer DI providers."""

from dishka import Scope, provide

from greyn.adapter.email import InvitationEmailClient
from greyn.config import InvitationSettings
from greyn.domain.repository import AccountDirectory, InvitationRepository
from greyn.domain.service import (
    IdentityService,
    InvitationService,
    NotificationDispatcher,
    RoleMigrationService,
)
from greyn.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session
    lifecycle. The notification dispatcher is APP-scoped so background
    deliveries outlive the request that scheduled them.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_notification_dispatcher(
        self, email_client: InvitationEmailClient
    ) -> NotificationDispatcher:
        """Provide the background invitation email dispatcher."""
        return NotificationDispatcher(notifier=email_client)

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        dispatcher: NotificationDispatcher,
        invitation_settings: InvitationSettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            dispatcher=dispatcher,
            max_code_attempts=invitation_settings.code_generation_attempts,
            default_expiry_days=invitation_settings.default_expiry_days,
        )

    @provide
    def get_identity_service(self, accounts: AccountDirectory) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(accounts=accounts)

    @provide
    def get_role_migration_service(
        self, accounts: AccountDirectory
    ) -> RoleMigrationService:
        """Provide role migration domain service."""
        return RoleMigrationService(accounts=accounts)
