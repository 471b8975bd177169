"""Unit tests for identity normalization and IdentityService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from greyn.domain.error import NotFoundError
from greyn.domain.repository import AccountDirectory
from greyn.domain.service import IdentityService, normalize
from greyn.domain.service.identity_service import summarize_last_active
from greyn.domain.value import (
    AccountId,
    AccountRole,
    AccountStatus,
    IdentityFilter,
    IdentityStatus,
    Portal,
)
from tests.conftest import make_account
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


class TestNormalize:
    """Tests for building identities from account records."""

    def test_ngo_prefers_contact_person(self):
        account = make_account(
            AccountRole.NGO,
            contact_person="Jane Doe",
            organization_name="Green Earth",
        )

        identity = normalize(account, NOW)

        assert identity.display_name == "Jane Doe"
        assert identity.portal_access == frozenset({Portal.NGO_PORTAL})

    def test_blank_name_falls_back(self):
        """Blank name fields are skipped, ending at the email."""
        ngo = make_account(
            AccountRole.NGO, contact_person="  ", organization_name="Green Earth"
        )
        investor = make_account(
            AccountRole.INVESTOR, email="solo@example.com", name=""
        )

        assert normalize(ngo, NOW).display_name == "Green Earth"
        assert normalize(investor, NOW).display_name == "solo@example.com"

    def test_inactive_reads_as_suspended(self):
        """Scenario: a legacy inactive NGO has no portal access."""
        account = make_account(
            AccountRole.NGO,
            status=AccountStatus.INACTIVE,
            organization_name="Green Earth",
        )

        identity = normalize(account, NOW)

        assert identity.status == IdentityStatus.SUSPENDED
        assert identity.portal_access == frozenset()

    def test_pending_has_no_portal_access(self):
        account = make_account(
            AccountRole.CORPORATE, status=AccountStatus.PENDING, company_name="Acme"
        )

        assert normalize(account, NOW).portal_access == frozenset()

    def test_investor_has_no_portals(self):
        account = make_account(AccountRole.INVESTOR, name="Ivy")

        assert normalize(account, NOW).portal_access == frozenset()

    def test_join_date_is_creation_date(self):
        created = datetime(2024, 11, 2, 8, 30, tzinfo=timezone.utc)
        account = make_account(AccountRole.ADMIN, created_at=created)

        assert normalize(account, NOW).join_date.isoformat() == "2024-11-02"


class TestSummarizeLastActive:
    """Tests for the last-active summary."""

    @pytest.mark.parametrize(
        "delta, expected",
        [
            (timedelta(seconds=30), "Just now"),
            (timedelta(minutes=5), "5 min ago"),
            (timedelta(hours=1, minutes=10), "1 hour ago"),
            (timedelta(hours=3), "3 hours ago"),
            (timedelta(days=1, hours=2), "1 day ago"),
            (timedelta(days=6), "6 days ago"),
            (timedelta(days=8), "2025-03-02"),
        ],
    )
    def test_summaries(self, delta, expected):
        assert summarize_last_active(NOW - delta, NOW) == expected

    def test_never(self):
        assert summarize_last_active(None, NOW) == "Never"


class TestIdentityService:
    """Tests for IdentityService queries."""

    @pytest.mark.asyncio
    async def test_list_spans_all_collections(self, unit_env):
        # Arrange
        service = await unit_env.get(IdentityService)
        accounts = await unit_env.get(AccountDirectory)
        for role in AccountDirectory.PROBE_ORDER:
            await accounts.get(role).create(
                make_account(role, email=f"{role.value}@example.com")
            )

        # Act
        identities = await service.list_identities(IdentityFilter())

        # Assert
        assert [i.role for i in identities] == list(AccountDirectory.PROBE_ORDER)

    @pytest.mark.asyncio
    async def test_list_filters(self, unit_env):
        # Arrange
        service = await unit_env.get(IdentityService)
        accounts = await unit_env.get(AccountDirectory)
        await accounts.get(AccountRole.NGO).create(
            make_account(AccountRole.NGO, email="ngo@example.com", organization_name="Green Earth")
        )
        await accounts.get(AccountRole.NGO).create(
            make_account(
                AccountRole.NGO,
                email="old@example.com",
                status=AccountStatus.INACTIVE,
                organization_name="Old Trees",
            )
        )
        await accounts.get(AccountRole.CORPORATE).create(
            make_account(AccountRole.CORPORATE, email="esg@acme.com", company_name="Acme")
        )

        # Act
        suspended = await service.list_identities(
            IdentityFilter(status=IdentityStatus.SUSPENDED)
        )
        ngo_portal = await service.list_identities(
            IdentityFilter(portal=Portal.NGO_PORTAL)
        )
        searched = await service.list_identities(IdentityFilter(search="ACME"))

        # Assert
        assert [i.email.root for i in suspended] == ["old@example.com"]
        assert [i.email.root for i in ngo_portal] == ["ngo@example.com"]
        assert [i.email.root for i in searched] == ["esg@acme.com"]

    @pytest.mark.asyncio
    async def test_stats(self, unit_env):
        service = await unit_env.get(IdentityService)
        accounts = await unit_env.get(AccountDirectory)
        repo = accounts.get(AccountRole.INVESTOR)
        await repo.create(make_account(AccountRole.INVESTOR, email="a@example.com"))
        await repo.create(
            make_account(AccountRole.INVESTOR, email="b@example.com", status=AccountStatus.PENDING)
        )
        await repo.create(
            make_account(AccountRole.INVESTOR, email="c@example.com", status=AccountStatus.INACTIVE)
        )

        stats = await service.get_stats()

        assert (stats.total, stats.active, stats.pending, stats.suspended) == (3, 1, 1, 1)

    @pytest.mark.asyncio
    async def test_get_identity_unknown_raises_not_found(self, unit_env):
        service = await unit_env.get(IdentityService)

        with pytest.raises(NotFoundError):
            await service.get_identity(AccountId(uuid4()))

    @pytest.mark.asyncio
    async def test_change_status(self, unit_env):
        """Suspending an account removes its portal access."""
        service = await unit_env.get(IdentityService)
        accounts = await unit_env.get(AccountDirectory)
        account = await accounts.get(AccountRole.ADMIN).create(
            make_account(AccountRole.ADMIN, name="Root")
        )

        identity = await service.change_status(account.id, IdentityStatus.SUSPENDED)

        assert identity.status == IdentityStatus.SUSPENDED
        assert identity.portal_access == frozenset()
        stored = await accounts.get(AccountRole.ADMIN).find_by_id(account.id)
        assert stored.status == AccountStatus.SUSPENDED

    @pytest.mark.asyncio
    async def test_resolve_display_names_skips_missing(self, unit_env):
        service = await unit_env.get(IdentityService)
        accounts = await unit_env.get(AccountDirectory)
        admin = await accounts.get(AccountRole.ADMIN).create(
            make_account(AccountRole.ADMIN, name="Ada Admin")
        )
        missing = AccountId(uuid4())

        names = await service.resolve_display_names(AccountRole.ADMIN, {admin.id, missing})

        assert names == {admin.id: "Ada Admin"}
