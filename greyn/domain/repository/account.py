"""Account repository interfaces.

Each role owns one collection. ``AccountDirectory`` groups the five
repositories and knows the order in which they are probed by id.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection, Iterator, Mapping

from greyn.domain.model.account import AccountRecord
from greyn.domain.value import AccountId, AccountRole, EmailAddress


class AccountRepository(ABC):
    """Repository for one account collection."""

    role: AccountRole

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> AccountRecord | None:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, account_ids: Collection[AccountId]) -> list[AccountRecord]:
        """Find several accounts at once.

        Args:
            account_ids: Identifiers to look up

        Returns:
            The accounts that exist, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: EmailAddress) -> AccountRecord | None:
        """Find an account by email within this collection.

        Args:
            email: Normalized email

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def search(self, search: str | None = None) -> list[AccountRecord]:
        """List accounts, optionally matching a search term.

        The term matches email and the variant's name fields,
        case-insensitively.

        Args:
            search: Optional substring to match

        Returns:
            Matching accounts, newest first
        """
        pass

    @abstractmethod
    async def create(self, account: AccountRecord) -> AccountRecord:
        """Insert a new account.

        Args:
            account: Account to insert

        Returns:
            The stored account

        Raises:
            DuplicateEmailError: If the collection already holds the email
        """
        pass

    @abstractmethod
    async def update(self, account: AccountRecord) -> AccountRecord:
        """Update an existing account.

        Args:
            account: Account with new field values

        Returns:
            The stored account
        """
        pass

    @abstractmethod
    async def delete(self, account_id: AccountId) -> bool:
        """Delete an account.

        Args:
            account_id: Account to delete

        Returns:
            True if a record was deleted, False if none existed
        """
        pass


class AccountDirectory:
    """The five account collections, addressed by role."""

    # Fixed probe order for lookups by id
    PROBE_ORDER: tuple[AccountRole, ...] = (
        AccountRole.INVESTOR,
        AccountRole.NGO,
        AccountRole.CORPORATE,
        AccountRole.MARKET_PARTICIPANT,
        AccountRole.ADMIN,
    )

    def __init__(self, repositories: Mapping[AccountRole, AccountRepository]) -> None:
        """Initialize the directory.

        Args:
            repositories: One repository per role

        Raises:
            ValueError: If a role has no repository
        """
        missing = [role.value for role in self.PROBE_ORDER if role not in repositories]
        if missing:
            raise ValueError(f"No account repository for roles: {', '.join(missing)}")
        self._repositories = dict(repositories)

    def get(self, role: AccountRole) -> AccountRepository:
        return self._repositories[role]

    def __iter__(self) -> Iterator[AccountRepository]:
        for role in self.PROBE_ORDER:
            yield self._repositories[role]

    async def locate(self, account_id: AccountId) -> AccountRecord | None:
        """Probe each collection in order until the account is found.

        Probes run one after another; the first hit wins.

        Args:
            account_id: Account to find

        Returns:
            The account if any collection holds it, None otherwise
        """
        for repository in self:
            account = await repository.find_by_id(account_id)
            if account is not None:
                return account
        return None
