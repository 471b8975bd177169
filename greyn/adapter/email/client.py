"""Invitation email clients.

Mail is sent through a Resend-compatible HTTP API with httpx.
"""

import httpx
import logfire

from greyn.adapter.email.content import (
    invitation_subject,
    render_invitation_html,
    render_invitation_text,
)
from greyn.adapter.error import EmailDeliveryError
from greyn.domain.service.notification import (
    InvitationNotice,
    InvitationNotifier,
    NotificationOutcome,
    acceptance_url,
)

NOT_CONFIGURED = "Email service not configured"


class InvitationEmailClient(InvitationNotifier):
    """Base class for invitation email clients.

    Provides type distinction for dependency injection.
    """

    pass


class HttpInvitationEmailClient(InvitationEmailClient):
    """Sends invitation emails through the provider's ``POST /emails`` endpoint."""

    def __init__(
        self,
        api_key: str,
        frontend_url: str,
        from_address: str,
        from_name: str,
        platform_name: str,
        api_base_url: str = "https://api.resend.com",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize email client.

        Args:
            api_key: Provider API key
            frontend_url: Base URL of the frontend, for acceptance links
            from_address: Sender address
            from_name: Sender display name
            platform_name: Platform name used in the subject and body
            api_base_url: Provider API base URL
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport, replaced in tests
        """
        self.api_key = api_key
        self.frontend_url = frontend_url
        self.sender = f"{from_name} <{from_address}>"
        self.platform_name = platform_name
        self.api_base_url = api_base_url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def send_invitation(self, notice: InvitationNotice) -> NotificationOutcome:
        """Send an invitation email.

        Args:
            notice: Invitation details

        Returns:
            delivered=True when the provider accepted the message

        Raises:
            EmailDeliveryError: If the provider could not be reached
        """
        link = acceptance_url(self.frontend_url, notice.token)
        payload = {
            "from": self.sender,
            "to": [notice.email],
            "subject": invitation_subject(self.platform_name),
            "html": render_invitation_html(notice, link, self.platform_name),
            "text": render_invitation_text(notice, link, self.platform_name),
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.api_base_url,
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    "/emails",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Email provider unreachable: {e}") from e

        if response.is_success:
            logfire.info(
                "Invitation email accepted by provider",
                invitation_code=notice.invitation_code,
                status_code=response.status_code,
            )
            return NotificationOutcome(delivered=True)

        logfire.warn(
            "Invitation email rejected by provider",
            invitation_code=notice.invitation_code,
            status_code=response.status_code,
        )
        return NotificationOutcome(
            delivered=False,
            reason=f"Email provider returned {response.status_code}",
        )


class UnconfiguredInvitationEmailClient(InvitationEmailClient):
    """Used when no API key is configured. Invitations work, emails are skipped."""

    async def send_invitation(self, notice: InvitationNotice) -> NotificationOutcome:
        return NotificationOutcome(delivered=False, reason=NOT_CONFIGURED)


class MockInvitationEmailClient(InvitationEmailClient):
    """Mock email client for testing.

    Records every notice. Set ``fail_with`` to make sends raise.
    """

    def __init__(self) -> None:
        self.sent: list[InvitationNotice] = []
        self.fail_with: Exception | None = None

    async def send_invitation(self, notice: InvitationNotice) -> NotificationOutcome:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(notice)
        return NotificationOutcome(delivered=True)
