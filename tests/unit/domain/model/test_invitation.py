"""Unit tests for the Invitation state machine and invitation value objects."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from greyn.domain.model import Invitation
from greyn.domain.value import EmailAddress, InvitationCode, InvitationStatus, InvitationToken
from tests.conftest import make_invitation


class TestTransitions:
    """Tests for Invitation.can_transition_to."""

    @pytest.mark.parametrize(
        "status, allowed",
        [
            (
                InvitationStatus.PENDING,
                {
                    InvitationStatus.PENDING,
                    InvitationStatus.ACCEPTED,
                    InvitationStatus.REVOKED,
                    InvitationStatus.EXPIRED,
                },
            ),
            (
                InvitationStatus.EXPIRED,
                {InvitationStatus.PENDING, InvitationStatus.REVOKED},
            ),
            (InvitationStatus.ACCEPTED, set()),
            (InvitationStatus.REVOKED, set()),
        ],
    )
    def test_allowed_targets(self, status, allowed):
        invitation = make_invitation(status=status)

        permitted = {s for s in InvitationStatus if invitation.can_transition_to(s)}

        assert permitted == allowed

    def test_is_expired_strictly_after_expiry(self):
        invitation = make_invitation()

        assert not invitation.is_expired(invitation.expires_at)
        assert invitation.is_expired(invitation.expires_at + timedelta(microseconds=1))

    def test_resend_count_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            Invitation.model_validate({**make_invitation().model_dump(), "resend_count": -1})


class TestValues:
    """Tests for invitation value objects."""

    def test_email_is_normalized(self):
        assert EmailAddress("  Mixed@Case.ORG ").root == "mixed@case.org"
        assert EmailAddress("a@b.co") == EmailAddress("A@B.CO")

    @pytest.mark.parametrize("value", ["", "no-at-sign", "a@b", "a b@c.d"])
    def test_email_rejects_malformed(self, value):
        with pytest.raises(ValidationError):
            EmailAddress(value)

    def test_code_format(self):
        assert InvitationCode("INV-CORP-2025-009").root == "INV-CORP-2025-009"
        with pytest.raises(ValidationError):
            InvitationCode("INV-CORP-25-9")

    def test_token_redacted(self):
        assert InvitationToken.redact("abcdef0123456789") == "abcdef01..."
