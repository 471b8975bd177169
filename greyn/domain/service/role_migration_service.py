"""Role migration domain service.

Account variants live in separate collections, so changing a role moves the
record: it is copied into the target collection and then removed from the
source. The two steps are not atomic. If the copy fails nothing changed; if
the removal fails the account exists twice and PartialMigrationError says so.
"""

import logfire
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from greyn.domain.error import InvalidRoleError, NotFoundError, PartialMigrationError
from greyn.domain.model.account import ACCOUNT_TYPES, AccountRecord
from greyn.domain.model.identity import Identity
from greyn.domain.repository import AccountDirectory
from greyn.domain.value import AccountId, AccountRole

from .base import Service
from .identity_service import normalize

# Never copied; the new record gets fresh values
_RESET_FIELDS = {"id", "role", "created_at", "updated_at"}


def parse_role(role: AccountRole | str) -> AccountRole:
    """Resolve a role name.

    Raises:
        InvalidRoleError: If the name is not a known role
    """
    if isinstance(role, AccountRole):
        return role
    try:
        return AccountRole(role)
    except ValueError as e:
        raise InvalidRoleError(str(role)) from e


def _first(account: AccountRecord, *fields: str) -> str | None:
    for field in fields:
        value = getattr(account, field, None)
        if value:
            return value
    return None


def carry_over_fields(account: AccountRecord, target: AccountRole) -> dict[str, Any]:
    """Fields of ``account`` to keep when it becomes a ``target`` account.

    Fields the target variant shares are copied as-is. Name fields are
    mapped across variants: a person's name seeds ``name`` or
    ``contact_person``, an organization's name seeds ``organization_name``
    or ``company_name``.

    Args:
        account: Source record
        target: Destination role

    Returns:
        Keyword arguments for the destination model, without id or timestamps
    """
    target_fields = ACCOUNT_TYPES[target].model_fields
    data = {
        key: value
        for key, value in account.model_dump(exclude=_RESET_FIELDS).items()
        if key in target_fields
    }

    person = _first(account, "contact_person", "name")
    organization = _first(account, "organization_name", "company_name")

    if target == AccountRole.NGO:
        data["contact_person"] = person
        data["organization_name"] = organization
    elif target == AccountRole.CORPORATE:
        data["contact_person"] = person
        data["company_name"] = organization
    else:
        data["name"] = person or organization

    return data


class RoleMigrationService(Service):
    """Domain service for moving accounts between role collections."""

    def __init__(self, accounts: AccountDirectory) -> None:
        """Initialize role migration service.

        Args:
            accounts: The account collections
        """
        self.accounts = accounts

    async def change_role(
        self, account_id: AccountId, new_role: AccountRole | str
    ) -> Identity:
        """Move an account to the collection of another role.

        Args:
            account_id: Account to move
            new_role: Destination role

        Returns:
            Normalized identity of the record now holding the account

        Raises:
            NotFoundError: If no collection holds the account
            InvalidRoleError: If new_role is not a known role
            DuplicateEmailError: If the destination already holds the email;
                the source is untouched
            PartialMigrationError: If the copy succeeded but the source
                could not be removed
        """
        with logfire.span(
            "role_migration_service.change_role",
            account_id=str(account_id),
            new_role=str(new_role),
        ):
            account = await self.accounts.locate(account_id)
            if account is None:
                logfire.warn("Account not found", account_id=str(account_id))
                raise NotFoundError("User", str(account_id))

            target = parse_role(new_role)
            if target == account.role:
                logfire.info(
                    "Role unchanged", account_id=str(account_id), role=target.value
                )
                return normalize(account)

            now = datetime.now(timezone.utc)
            replacement = ACCOUNT_TYPES[target](
                id=AccountId(uuid4()),
                created_at=now,
                updated_at=now,
                **carry_over_fields(account, target),
            )

            # Phase 1: a failure here leaves the source untouched
            created = await self.accounts.get(target).create(replacement)

            # Phase 2
            try:
                deleted = await self.accounts.get(account.role).delete(account.id)
            except Exception as e:
                logfire.error(
                    "Role migration left account in two collections",
                    account_id=str(account.id),
                    source_role=account.role.value,
                    new_account_id=str(created.id),
                    target_role=target.value,
                    error=str(e),
                )
                raise PartialMigrationError(
                    account_id=str(account.id),
                    source_role=account.role.value,
                    new_account_id=str(created.id),
                    target_role=target.value,
                ) from e

            if not deleted:
                logfire.warn(
                    "Source account disappeared during role migration",
                    account_id=str(account.id),
                    source_role=account.role.value,
                )

            logfire.info(
                "Account role changed",
                account_id=str(account.id),
                new_account_id=str(created.id),
                source_role=account.role.value,
                target_role=target.value,
            )
            return normalize(created)
