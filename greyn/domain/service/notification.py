"""Invitation notifications.

Sending an invitation email never decides whether an invitation operation
succeeds. Notices are handed to a ``NotificationDispatcher``, which delivers
them in background tasks and only logs the outcome.
"""

import asyncio
from datetime import datetime

import logfire

from greyn.domain.value import AccountRole, Portal
from greyn.domain.value.common import ValueObject

from .base import Service


class InvitationNotice(ValueObject):
    """Everything the email sender needs to describe an invitation."""

    email: str
    invitation_code: str
    role: AccountRole
    portal: Portal
    expires_at: datetime
    token: str
    resend: bool = False


class NotificationOutcome(ValueObject):
    """Result reported by a notifier."""

    delivered: bool
    reason: str | None = None


class InvitationNotifier:
    """Invitation email sender interface."""

    async def send_invitation(self, notice: InvitationNotice) -> NotificationOutcome:
        """Send an invitation email.

        Args:
            notice: Invitation details

        Returns:
            Whether the message was handed to the provider, and why not
        """
        raise NotImplementedError


class NotificationDispatcher(Service):
    """Fire-and-forget delivery of invitation notices.

    Holds a reference to every in-flight task so that none is garbage
    collected before it finishes.
    """

    def __init__(self, notifier: InvitationNotifier) -> None:
        """Initialize dispatcher.

        Args:
            notifier: Email sender
        """
        self.notifier = notifier
        self._tasks: set[asyncio.Task[NotificationOutcome]] = set()

    @property
    def in_flight(self) -> int:
        """Number of deliveries not yet finished."""
        return len(self._tasks)

    def dispatch(self, notice: InvitationNotice) -> asyncio.Task[NotificationOutcome]:
        """Schedule delivery of a notice and return immediately.

        Must be called from a running event loop.

        Args:
            notice: Invitation details

        Returns:
            The delivery task; callers are not expected to await it
        """
        task = asyncio.create_task(self._deliver(notice))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every in-flight delivery. Used at shutdown and in tests."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def _deliver(self, notice: InvitationNotice) -> NotificationOutcome:
        with logfire.span(
            "notification_dispatcher.deliver",
            invitation_code=notice.invitation_code,
            resend=notice.resend,
        ):
            try:
                outcome = await self.notifier.send_invitation(notice)
            except Exception as e:
                # Delivery failures end here and never reach the caller
                logfire.error(
                    "Invitation email failed",
                    invitation_code=notice.invitation_code,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return NotificationOutcome(delivered=False, reason=str(e))

            if outcome.delivered:
                logfire.info(
                    "Invitation email sent",
                    invitation_code=notice.invitation_code,
                    resend=notice.resend,
                )
            else:
                logfire.warn(
                    "Invitation email not sent",
                    invitation_code=notice.invitation_code,
                    reason=outcome.reason,
                )
            return outcome


def acceptance_url(frontend_url: str, token: str) -> str:
    """Link an invitee follows to accept an invitation."""
    return f"{frontend_url}/accept-invitation?token={token}"
