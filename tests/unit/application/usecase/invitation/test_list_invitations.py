"""Unit tests for ListInvitationsUseCase and ExportInvitationsUseCase."""

import csv
import io
from datetime import datetime, timezone

import pytest

from greyn.application.usecase.invitation import (
    ExportInvitationsUseCase,
    ListInvitationsRequest,
    ListInvitationsUseCase,
)
from greyn.application.usecase.invitation.export_invitations import CSV_HEADERS
from greyn.domain.repository import AccountDirectory, InvitationRepository
from greyn.domain.value import AccountRole, InvitationStatus
from tests.conftest import make_account, make_invitation
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed(unit_env):
    """One invitation from a known admin, one from a deleted admin."""
    accounts = await unit_env.get(AccountDirectory)
    repo = await unit_env.get(InvitationRepository)
    admin = await accounts.get(AccountRole.ADMIN).create(
        make_account(AccountRole.ADMIN, email="ada@greyn.eco", name="Ada Lovelace")
    )
    known = await repo.save(make_invitation(email="one@example.com", invited_by=admin.id))
    orphan = await repo.save(
        make_invitation(email="two@example.com", status=InvitationStatus.ACCEPTED)
    )
    return known, orphan


class TestListInvitationsUseCase:
    """Tests for ListInvitationsUseCase."""

    @pytest.mark.asyncio
    async def test_resolves_inviter_names(self, unit_env):
        known, orphan = await seed(unit_env)
        use_case = await unit_env.get(ListInvitationsUseCase)

        response = await use_case.execute(ListInvitationsRequest())

        names = {i.invitation_id: i.invited_by_name for i in response.invitations}
        assert response.total == 2
        assert names[str(known.id)] == "Ada Lovelace"
        assert names[str(orphan.id)] == "Unknown"

    @pytest.mark.asyncio
    async def test_search_matches_inviter_name(self, unit_env):
        known, _ = await seed(unit_env)
        use_case = await unit_env.get(ListInvitationsUseCase)

        response = await use_case.execute(ListInvitationsRequest(search=" lovelace "))

        assert [i.invitation_id for i in response.invitations] == [str(known.id)]

    @pytest.mark.asyncio
    async def test_status_filter(self, unit_env):
        _, orphan = await seed(unit_env)
        use_case = await unit_env.get(ListInvitationsUseCase)

        response = await use_case.execute(
            ListInvitationsRequest(status=InvitationStatus.ACCEPTED)
        )

        assert [i.invitation_id for i in response.invitations] == [str(orphan.id)]


class TestExportInvitationsUseCase:
    """Tests for ExportInvitationsUseCase."""

    @pytest.mark.asyncio
    async def test_csv_rows(self, unit_env):
        # Arrange
        known, _ = await seed(unit_env)
        use_case = await unit_env.get(ExportInvitationsUseCase)

        # Act
        response = await use_case.execute(ListInvitationsRequest(search="one@"))

        # Assert
        today = datetime.now(timezone.utc).date().isoformat()
        assert response.filename == f"invitations-{today}.csv"
        assert response.count == 1

        rows = list(csv.reader(io.StringIO(response.content)))
        assert rows[0] == CSV_HEADERS
        assert len(rows) == 2
        assert rows[1][0] == "one@example.com"
        assert rows[1][1] == known.invitation_code.root
        assert rows[1][5] == "Ada Lovelace"
        assert rows[1][8] == ""
