"""In-memory account repositories for testing."""

from collections.abc import Collection
from typing import Optional

from greyn.domain.error import DuplicateEmailError
from greyn.domain.model.account import NAME_FIELDS, AccountRecord
from greyn.domain.repository.account import AccountDirectory, AccountRepository
from greyn.domain.value import AccountId, AccountRole, EmailAddress


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for one role."""

    def __init__(self, role: AccountRole) -> None:
        self.role = role
        self._accounts: dict[AccountId, AccountRecord] = {}

    async def find_by_id(self, account_id: AccountId) -> Optional[AccountRecord]:
        """Find an account by ID."""
        return self._accounts.get(account_id)

    async def find_by_ids(self, account_ids: Collection[AccountId]) -> list[AccountRecord]:
        """Find several accounts by ID."""
        return [self._accounts[i] for i in account_ids if i in self._accounts]

    async def find_by_email(self, email: EmailAddress) -> Optional[AccountRecord]:
        """Find an account by email."""
        for account in self._accounts.values():
            if account.email == email:
                return account
        return None

    async def search(self, search: str | None = None) -> list[AccountRecord]:
        """List accounts, newest first, optionally matching a search term."""
        accounts = list(self._accounts.values())
        if search:
            term = search.lower()
            accounts = [a for a in accounts if self._matches(a, term)]
        accounts.sort(key=lambda a: a.created_at, reverse=True)
        return accounts

    async def create(self, account: AccountRecord) -> AccountRecord:
        """Insert a new account.

        Raises:
            DuplicateEmailError: If the collection already holds the email
        """
        if await self.find_by_email(account.email):
            raise DuplicateEmailError(self.role.value, account.email.root)
        self._accounts[account.id] = account
        return account

    async def update(self, account: AccountRecord) -> AccountRecord:
        """Update an existing account."""
        if account.id in self._accounts:
            self._accounts[account.id] = account
        return account

    async def delete(self, account_id: AccountId) -> bool:
        """Delete an account."""
        return self._accounts.pop(account_id, None) is not None

    def _matches(self, account: AccountRecord, term: str) -> bool:
        values = [account.email.root] + [
            getattr(account, field) or "" for field in NAME_FIELDS[self.role]
        ]
        return any(term in value.lower() for value in values)


def in_memory_account_directory() -> AccountDirectory:
    """Account directory with an empty in-memory repository per role."""
    return AccountDirectory(
        {role: InMemoryAccountRepository(role) for role in AccountDirectory.PROBE_ORDER}
    )
