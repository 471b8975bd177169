"""Identity domain service.

Turns account records from any of the five collections into one uniform
``Identity`` and answers the admin queries built on top of that view.
"""

import logfire
from datetime import datetime, timezone

from greyn.domain.error import NotFoundError
from greyn.domain.model.account import NAME_FIELDS, AccountRecord
from greyn.domain.model.identity import Identity
from greyn.domain.repository import AccountDirectory
from greyn.domain.value import (
    AccountId,
    AccountRole,
    AccountStatus,
    IdentityFilter,
    IdentityStats,
    IdentityStatus,
    Portal,
)

from .base import Service

PORTALS_BY_ROLE: dict[AccountRole, frozenset[Portal]] = {
    AccountRole.INVESTOR: frozenset(),
    AccountRole.NGO: frozenset({Portal.NGO_PORTAL}),
    AccountRole.CORPORATE: frozenset({Portal.CORPORATE_ESG}),
    AccountRole.MARKET_PARTICIPANT: frozenset({Portal.CARBON_MARKETPLACE}),
    AccountRole.ADMIN: frozenset({Portal.ADMIN_PORTAL}),
}


def identity_status(status: AccountStatus) -> IdentityStatus:
    """Map a stored status to an identity status; legacy inactive reads as suspended."""
    if status == AccountStatus.INACTIVE:
        return IdentityStatus.SUSPENDED
    return IdentityStatus(status.value)


def portal_access_for(role: AccountRole, status: IdentityStatus) -> frozenset[Portal]:
    """Portals an identity may enter. Only active identities enter any."""
    if status != IdentityStatus.ACTIVE:
        return frozenset()
    return PORTALS_BY_ROLE[role]


def display_name_for(account: AccountRecord) -> str:
    """Pick the first non-blank name field of the variant, else the email."""
    for field in NAME_FIELDS[account.role]:
        value = getattr(account, field, None)
        if value and value.strip():
            return value.strip()
    return account.email.root


def summarize_last_active(last_login_at: datetime | None, now: datetime) -> str:
    """Describe how long ago an account last logged in.

    Args:
        last_login_at: Last login time, None if never
        now: Reference time

    Returns:
        'Never', 'Just now', 'N min ago', 'N hour(s) ago', 'N day(s) ago',
        or the ISO date for anything a week or older
    """
    if last_login_at is None:
        return "Never"

    minutes = int((now - last_login_at).total_seconds() // 60)
    hours = minutes // 60
    days = hours // 24

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} min ago"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    if days < 7:
        return f"{days} day{'s' if days > 1 else ''} ago"
    return last_login_at.date().isoformat()


def normalize(account: AccountRecord, now: datetime | None = None) -> Identity:
    """Build the uniform identity view of an account record.

    Args:
        account: Record from any account collection
        now: Reference time for the last-active summary

    Returns:
        Normalized identity
    """
    status = identity_status(account.status)
    return Identity(
        id=account.id,
        display_name=display_name_for(account),
        email=account.email,
        role=account.role,
        status=status,
        portal_access=portal_access_for(account.role, status),
        join_date=account.created_at.date(),
        last_active_summary=summarize_last_active(
            account.last_login_at, now or datetime.now(timezone.utc)
        ),
    )


class IdentityService(Service):
    """Domain service for identity queries and status changes."""

    def __init__(self, accounts: AccountDirectory) -> None:
        """Initialize identity service.

        Args:
            accounts: The account collections
        """
        self.accounts = accounts

    async def list_identities(self, filters: IdentityFilter) -> list[Identity]:
        """List identities across collections.

        The search term is pushed down to each collection. Portal and
        status filters apply to the normalized identities.

        Args:
            filters: Search, status, role and portal constraints

        Returns:
            Matching identities, in collection probe order
        """
        with logfire.span(
            "identity_service.list_identities",
            role=filters.role.value if filters.role else None,
            status=filters.status.value if filters.status else None,
            search=filters.search,
        ):
            now = datetime.now(timezone.utc)
            identities: list[Identity] = []
            for repository in self.accounts:
                if filters.role and repository.role != filters.role:
                    continue
                # One collection at a time on the request's session
                for account in await repository.search(filters.search):
                    identities.append(normalize(account, now))

            if filters.portal:
                identities = [i for i in identities if filters.portal in i.portal_access]
            if filters.status:
                identities = [i for i in identities if i.status == filters.status]

            logfire.info("Identities listed", count=len(identities))
            return identities

    async def get_stats(self) -> IdentityStats:
        """Count identities per normalized status."""
        with logfire.span("identity_service.get_stats"):
            identities = await self.list_identities(IdentityFilter())
            return IdentityStats(
                total=len(identities),
                active=sum(1 for i in identities if i.status == IdentityStatus.ACTIVE),
                pending=sum(1 for i in identities if i.status == IdentityStatus.PENDING),
                suspended=sum(
                    1 for i in identities if i.status == IdentityStatus.SUSPENDED
                ),
            )

    async def get_identity(self, account_id: AccountId) -> Identity:
        """Get an identity by account ID.

        Raises:
            NotFoundError: If no collection holds the account
        """
        return normalize(await self.get_account(account_id))

    async def get_account(self, account_id: AccountId) -> AccountRecord:
        """Get the raw account record, whichever collection holds it.

        Raises:
            NotFoundError: If no collection holds the account
        """
        with logfire.span("identity_service.get_account", account_id=str(account_id)):
            account = await self.accounts.locate(account_id)
            if account is None:
                logfire.warn("Account not found", account_id=str(account_id))
                raise NotFoundError("User", str(account_id))
            return account

    async def change_status(
        self, account_id: AccountId, new_status: IdentityStatus
    ) -> Identity:
        """Change the stored status of an account.

        Args:
            account_id: Account to update
            new_status: Status to store

        Returns:
            Normalized identity after the change

        Raises:
            NotFoundError: If no collection holds the account
        """
        with logfire.span(
            "identity_service.change_status",
            account_id=str(account_id),
            new_status=new_status.value,
        ):
            account = await self.get_account(account_id)
            updated = account.model_copy(
                update={
                    "status": AccountStatus(new_status.value),
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            saved = await self.accounts.get(account.role).update(updated)
            logfire.info(
                "Account status changed",
                account_id=str(account_id),
                previous_status=account.status.value,
                new_status=new_status.value,
            )
            return normalize(saved)

    async def find_ids_matching(
        self, role: AccountRole, search: str
    ) -> list[AccountId]:
        """Ids of accounts in one collection whose name or email matches."""
        accounts = await self.accounts.get(role).search(search)
        return [account.id for account in accounts]

    async def resolve_display_names(
        self, role: AccountRole, account_ids: set[AccountId]
    ) -> dict[AccountId, str]:
        """Display names for a set of accounts in one collection.

        Ids with no record are absent from the result.
        """
        if not account_ids:
            return {}
        accounts = await self.accounts.get(role).find_by_ids(account_ids)
        return {account.id: display_name_for(account) for account in accounts}
