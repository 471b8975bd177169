"""Unit tests for NotificationDispatcher."""

import asyncio
from datetime import datetime, timezone

import pytest

from greyn.adapter.email import MockInvitationEmailClient
from greyn.domain.service import (
    InvitationNotice,
    InvitationNotifier,
    NotificationDispatcher,
    NotificationOutcome,
    acceptance_url,
)
from greyn.domain.value import AccountRole, Portal


def make_notice(code: str = "INV-NGO-2025-001") -> InvitationNotice:
    return InvitationNotice(
        email="invitee@example.com",
        invitation_code=code,
        role=AccountRole.NGO,
        portal=Portal.NGO_PORTAL,
        expires_at=datetime(2025, 6, 1, tzinfo=timezone.utc),
        token="a" * 64,
    )


class SlowNotifier(InvitationNotifier):
    """Notifier that waits until released."""

    def __init__(self) -> None:
        self.release = asyncio.Event()

    async def send_invitation(self, notice):
        await self.release.wait()
        return NotificationOutcome(delivered=False, reason="Email service not configured")


class TestDispatch:
    """Tests for dispatch and drain."""

    @pytest.mark.asyncio
    async def test_dispatch_returns_before_delivery(self):
        """The caller is not held up by a slow provider."""
        notifier = SlowNotifier()
        dispatcher = NotificationDispatcher(notifier)

        task = dispatcher.dispatch(make_notice())

        assert not task.done()
        assert dispatcher.in_flight == 1

        notifier.release.set()
        outcome = await task
        assert outcome.delivered is False
        assert outcome.reason == "Email service not configured"
        assert dispatcher.in_flight == 0

    @pytest.mark.asyncio
    async def test_drain_waits_for_all(self):
        client = MockInvitationEmailClient()
        dispatcher = NotificationDispatcher(client)

        dispatcher.dispatch(make_notice("INV-NGO-2025-001"))
        dispatcher.dispatch(make_notice("INV-NGO-2025-002"))
        await dispatcher.drain()

        assert [n.invitation_code for n in client.sent] == [
            "INV-NGO-2025-001",
            "INV-NGO-2025-002",
        ]
        assert dispatcher.in_flight == 0

    @pytest.mark.asyncio
    async def test_failure_is_reported_not_raised(self):
        """A raising notifier yields an undelivered outcome."""
        client = MockInvitationEmailClient()
        client.fail_with = ConnectionError("smtp down")
        dispatcher = NotificationDispatcher(client)

        outcome = await dispatcher.dispatch(make_notice())

        assert outcome.delivered is False
        assert outcome.reason == "smtp down"


def test_acceptance_url():
    assert (
        acceptance_url("https://greyn.eco", "abc")
        == "https://greyn.eco/accept-invitation?token=abc"
    )
