"""Unit tests for RoleMigrationService."""

from uuid import uuid4

import pytest

from greyn.domain.error import (
    DuplicateEmailError,
    InvalidRoleError,
    NotFoundError,
    PartialMigrationError,
)
from greyn.domain.repository import AccountDirectory
from greyn.domain.service import RoleMigrationService
from greyn.domain.service.role_migration_service import carry_over_fields
from greyn.domain.value import AccountId, AccountRole, AccountStatus, IdentityStatus, Portal
from tests.conftest import make_account
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestChangeRole:
    """Tests for change_role."""

    @pytest.mark.asyncio
    async def test_investor_to_corporate(self, unit_env):
        """The account moves collections and gets a new id."""
        # Arrange
        service = await unit_env.get(RoleMigrationService)
        accounts = await unit_env.get(AccountDirectory)
        investor = await accounts.get(AccountRole.INVESTOR).create(
            make_account(AccountRole.INVESTOR, email="x@example.com", name="X")
        )

        # Act
        identity = await service.change_role(investor.id, "corporate")

        # Assert
        assert identity.role == AccountRole.CORPORATE
        assert identity.id != investor.id
        assert identity.display_name == "X"
        assert identity.status == IdentityStatus.ACTIVE
        assert identity.portal_access == frozenset({Portal.CORPORATE_ESG})

        assert await accounts.get(AccountRole.INVESTOR).find_by_id(investor.id) is None
        moved = await accounts.get(AccountRole.CORPORATE).find_by_id(identity.id)
        assert moved.email.root == "x@example.com"
        assert moved.contact_person == "X"

    @pytest.mark.asyncio
    async def test_ngo_to_corporate(self, unit_env):
        """Organization name becomes company name and the contact is kept."""
        # Arrange
        service = await unit_env.get(RoleMigrationService)
        accounts = await unit_env.get(AccountDirectory)
        ngo = await accounts.get(AccountRole.NGO).create(
            make_account(
                AccountRole.NGO,
                email="org@example.com",
                organization_name="Org",
                contact_person="Pat",
            )
        )

        # Act
        identity = await service.change_role(ngo.id, "corporate")

        # Assert
        assert identity.role == AccountRole.CORPORATE
        assert await accounts.get(AccountRole.NGO).find_by_id(ngo.id) is None
        corporate = await accounts.get(AccountRole.CORPORATE).find_by_id(identity.id)
        assert corporate.email.root == "org@example.com"
        assert corporate.company_name == "Org"
        assert corporate.contact_person == "Pat"

    @pytest.mark.asyncio
    async def test_status_and_login_carry_over(self, unit_env):
        service = await unit_env.get(RoleMigrationService)
        accounts = await unit_env.get(AccountDirectory)
        ngo = await accounts.get(AccountRole.NGO).create(
            make_account(
                AccountRole.NGO,
                status=AccountStatus.SUSPENDED,
                organization_name="Green Earth",
            )
        )

        identity = await service.change_role(ngo.id, AccountRole.MARKET_PARTICIPANT)

        assert identity.status == IdentityStatus.SUSPENDED
        assert identity.display_name == "Green Earth"

    @pytest.mark.asyncio
    async def test_same_role_is_noop(self, unit_env):
        service = await unit_env.get(RoleMigrationService)
        accounts = await unit_env.get(AccountDirectory)
        admin = await accounts.get(AccountRole.ADMIN).create(
            make_account(AccountRole.ADMIN, name="Root")
        )

        identity = await service.change_role(admin.id, "admin")

        assert identity.id == admin.id
        assert await accounts.get(AccountRole.ADMIN).find_by_id(admin.id) is not None

    @pytest.mark.asyncio
    async def test_unknown_account_raises_not_found(self, unit_env):
        service = await unit_env.get(RoleMigrationService)

        with pytest.raises(NotFoundError):
            await service.change_role(AccountId(uuid4()), "corporate")

    @pytest.mark.asyncio
    async def test_unknown_role_raises_invalid_role(self, unit_env):
        service = await unit_env.get(RoleMigrationService)
        accounts = await unit_env.get(AccountDirectory)
        investor = await accounts.get(AccountRole.INVESTOR).create(
            make_account(AccountRole.INVESTOR)
        )

        with pytest.raises(InvalidRoleError):
            await service.change_role(investor.id, "wizard")

        assert await accounts.get(AccountRole.INVESTOR).find_by_id(investor.id) is not None

    @pytest.mark.asyncio
    async def test_duplicate_email_leaves_source(self, unit_env):
        """A failed copy changes nothing."""
        # Arrange
        service = await unit_env.get(RoleMigrationService)
        accounts = await unit_env.get(AccountDirectory)
        investor = await accounts.get(AccountRole.INVESTOR).create(
            make_account(AccountRole.INVESTOR, email="both@example.com")
        )
        await accounts.get(AccountRole.CORPORATE).create(
            make_account(AccountRole.CORPORATE, email="both@example.com")
        )

        # Act & Assert
        with pytest.raises(DuplicateEmailError):
            await service.change_role(investor.id, AccountRole.CORPORATE)

        assert await accounts.get(AccountRole.INVESTOR).find_by_id(investor.id) is not None

    @pytest.mark.asyncio
    async def test_failed_delete_raises_partial_migration(self, unit_env, monkeypatch):
        """The account is reported as existing in both collections."""
        # Arrange
        service = await unit_env.get(RoleMigrationService)
        accounts = await unit_env.get(AccountDirectory)
        source = accounts.get(AccountRole.INVESTOR)
        investor = await source.create(make_account(AccountRole.INVESTOR, name="Dual"))

        async def failing_delete(account_id):
            raise ConnectionError("connection reset")

        monkeypatch.setattr(source, "delete", failing_delete)

        # Act
        with pytest.raises(PartialMigrationError) as exc_info:
            await service.change_role(investor.id, AccountRole.NGO)

        # Assert
        error = exc_info.value
        assert error.account_id == str(investor.id)
        assert error.source_role == "investor"
        assert error.target_role == "ngo"
        assert error.retryable is False
        assert await source.find_by_id(investor.id) is not None
        copies = await accounts.get(AccountRole.NGO).search("Dual")
        assert [str(c.id) for c in copies] == [error.new_account_id]


class TestCarryOverFields:
    """Tests for mapping variant fields across roles."""

    def test_corporate_to_ngo(self):
        corporate = make_account(
            AccountRole.CORPORATE,
            company_name="Acme",
            contact_person="Ann",
            tax_id="T-1",
        )

        data = carry_over_fields(corporate, AccountRole.NGO)

        assert data["organization_name"] == "Acme"
        assert data["contact_person"] == "Ann"
        assert "tax_id" not in data
        assert "id" not in data

    def test_admin_to_investor_drops_admin_fields(self):
        admin = make_account(
            AccountRole.ADMIN, name="Ada", admin_code="A1", permissions=("users",)
        )

        data = carry_over_fields(admin, AccountRole.INVESTOR)

        assert data["name"] == "Ada"
        assert "admin_code" not in data
        assert "permissions" not in data
