"""Notification infrastructure providers."""

from dishka import Scope, provide
import logfire

from greyn.adapter.email import (
    HttpInvitationEmailClient,
    InvitationEmailClient,
    UnconfiguredInvitationEmailClient,
)
from greyn.config import NotificationSettings, Settings
from greyn.util.di.base import ProviderBase
from greyn.util.observability import instrument_httpx


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider sending email over HTTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_invitation_email_client(
        self, settings: Settings, notification_settings: NotificationSettings
    ) -> InvitationEmailClient:
        """Provide invitation email client.

        Without an API key every send reports "Email service not configured"
        and invitations keep working.
        """
        if not notification_settings.api_key:
            logfire.warn("Email API key not configured; invitation emails disabled")
            return UnconfiguredInvitationEmailClient()

        instrument_httpx()
        return HttpInvitationEmailClient(
            api_key=notification_settings.api_key,
            frontend_url=settings.api.frontend_url,
            from_address=notification_settings.from_address,
            from_name=notification_settings.from_name,
            platform_name=notification_settings.platform_name,
            api_base_url=notification_settings.api_base_url,
            timeout_seconds=notification_settings.timeout_seconds,
        )
