"""Unit tests for ValidateInvitationUseCase."""

from datetime import timedelta

import pytest

from greyn.application.usecase.invitation import (
    ValidateInvitationRequest,
    ValidateInvitationUseCase,
)
from greyn.domain.repository import InvitationRepository
from greyn.domain.value import InvitationStatus
from tests.conftest import make_invitation
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestValidateInvitationUseCase:
    """Tests for ValidateInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_valid_pending(self, unit_env):
        use_case = await unit_env.get(ValidateInvitationUseCase)
        repo = await unit_env.get(InvitationRepository)
        invitation = await repo.save(make_invitation())

        response = await use_case.execute(
            ValidateInvitationRequest(token=invitation.token.root)
        )

        assert response.valid is True
        assert response.message == "Valid invitation"
        assert response.email == "invitee@example.com"
        assert response.invitation_code == invitation.invitation_code.root

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        use_case = await unit_env.get(ValidateInvitationUseCase)

        response = await use_case.execute(ValidateInvitationRequest(token="nope"))

        assert response.valid is False
        assert response.message == "Invitation not found"
        assert response.status is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, message",
        [
            (InvitationStatus.ACCEPTED, "Invitation has already been accepted"),
            (InvitationStatus.REVOKED, "Invitation has been revoked"),
            (InvitationStatus.EXPIRED, "Invitation has expired"),
        ],
    )
    async def test_unusable_statuses(self, unit_env, status, message):
        use_case = await unit_env.get(ValidateInvitationUseCase)
        repo = await unit_env.get(InvitationRepository)
        invitation = await repo.save(make_invitation(status=status))

        response = await use_case.execute(
            ValidateInvitationRequest(token=invitation.token.root)
        )

        assert response.valid is False
        assert response.status == status
        assert response.message == message

    @pytest.mark.asyncio
    async def test_stale_pending_is_expired(self, unit_env):
        """Validation persists the expiry of a stale invitation."""
        use_case = await unit_env.get(ValidateInvitationUseCase)
        repo = await unit_env.get(InvitationRepository)
        stale = await repo.save(make_invitation(expires_in=timedelta(hours=-1)))

        response = await use_case.execute(
            ValidateInvitationRequest(token=stale.token.root)
        )

        assert response.valid is False
        assert response.status == InvitationStatus.EXPIRED
        assert (await repo.find_by_id(stale.id)).status == InvitationStatus.EXPIRED
