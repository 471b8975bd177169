"""Unit tests for AcceptInvitationUseCase."""

import pytest

from greyn.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationUseCase,
)
from greyn.domain.error import InvalidStateError
from greyn.domain.repository import InvitationRepository
from greyn.domain.value import AccountRole, InvitationStatus, Portal
from tests.conftest import make_invitation
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAcceptInvitationUseCase:
    """Tests for AcceptInvitationUseCase."""

    @pytest.mark.asyncio
    async def test_returns_signup_details(self, unit_env):
        # Arrange
        use_case = await unit_env.get(AcceptInvitationUseCase)
        repo = await unit_env.get(InvitationRepository)
        invitation = await repo.save(
            make_invitation(
                email="new@corp.com",
                role=AccountRole.CORPORATE,
                portal=Portal.CORPORATE_ESG,
            )
        )

        # Act
        response = await use_case.execute(
            AcceptInvitationRequest(token=invitation.token.root)
        )

        # Assert
        assert response.email == "new@corp.com"
        assert response.role == AccountRole.CORPORATE
        assert response.portal == Portal.CORPORATE_ESG
        assert (await repo.find_by_id(invitation.id)).status == InvitationStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_second_accept_fails(self, unit_env):
        use_case = await unit_env.get(AcceptInvitationUseCase)
        repo = await unit_env.get(InvitationRepository)
        invitation = await repo.save(make_invitation())
        request = AcceptInvitationRequest(token=invitation.token.root)
        await use_case.execute(request)

        with pytest.raises(InvalidStateError):
            await use_case.execute(request)
