"""PostgreSQL implementation of the account repositories.

All five account tables share one implementation, parameterized by role.
"""

from collections.abc import Collection
from typing import Optional

from sqlalchemy import delete, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from greyn.domain.error import DuplicateEmailError
from greyn.domain.model import AccountRecord
from greyn.domain.model.account import NAME_FIELDS
from greyn.domain.repository import AccountDirectory, AccountRepository
from greyn.domain.value import AccountId, AccountRole, EmailAddress
from greyn.persistence.mappers import account_to_dict, row_to_account
from greyn.persistence.repository.base import PostgresRepository
from greyn.persistence.tables import ACCOUNT_TABLES, account_email_constraint


class PostgresAccountRepository(PostgresRepository, AccountRepository):
    """PostgreSQL implementation of AccountRepository for one role."""

    def __init__(
        self, session: AsyncSession, role: AccountRole, query_timeout: float = 5.0
    ) -> None:
        """Initialize repository for the table of ``role``.

        Args:
            session: SQLAlchemy async session
            role: Role whose table this repository reads and writes
            query_timeout: Seconds allowed per statement
        """
        super().__init__(session, query_timeout)
        self.role = role
        self.table = ACCOUNT_TABLES[role]

    def _op(self, name: str) -> str:
        return f"{self.table.name}.{name}"

    async def find_by_id(self, account_id: AccountId) -> Optional[AccountRecord]:
        """Find an account by ID.

        Args:
            account_id: Account ID to look up

        Returns:
            Account if found, None otherwise
        """
        stmt = select(self.table).where(self.table.c.id == account_id)
        result = await self._execute(stmt, self._op("find_by_id"))
        row = result.mappings().first()
        return row_to_account(self.role, dict(row)) if row else None

    async def find_by_ids(self, account_ids: Collection[AccountId]) -> list[AccountRecord]:
        """Find several accounts by ID in one query."""
        if not account_ids:
            return []
        stmt = select(self.table).where(self.table.c.id.in_(list(account_ids)))
        result = await self._execute(stmt, self._op("find_by_ids"))
        return [row_to_account(self.role, dict(row)) for row in result.mappings().all()]

    async def find_by_email(self, email: EmailAddress) -> Optional[AccountRecord]:
        """Find an account by email.

        Args:
            email: Normalized email

        Returns:
            Account if found, None otherwise
        """
        stmt = select(self.table).where(self.table.c.email == email.root)
        result = await self._execute(stmt, self._op("find_by_email"))
        row = result.mappings().first()
        return row_to_account(self.role, dict(row)) if row else None

    async def search(self, search: str | None = None) -> list[AccountRecord]:
        """List accounts, newest first, optionally matching a search term.

        Args:
            search: Substring matched against email and name columns

        Returns:
            Matching accounts
        """
        stmt = select(self.table).order_by(self.table.c.created_at.desc())
        if search:
            columns = [self.table.c.email] + [
                self.table.c[field] for field in NAME_FIELDS[self.role]
            ]
            stmt = stmt.where(
                or_(*(column.icontains(search, autoescape=True) for column in columns))
            )
        result = await self._execute(stmt, self._op("search"))
        return [row_to_account(self.role, dict(row)) for row in result.mappings().all()]

    async def create(self, account: AccountRecord) -> AccountRecord:
        """Insert a new account.

        Args:
            account: Account to insert

        Returns:
            The inserted account

        Raises:
            DuplicateEmailError: If the table already holds the email
        """
        stmt = insert(self.table).values(**account_to_dict(account))
        try:
            await self._execute(stmt, self._op("create"))
        except IntegrityError as e:
            if account_email_constraint(self.table.name) in str(e.orig):
                raise DuplicateEmailError(self.role.value, account.email.root) from e
            raise
        await self._flush(self._op("create"))
        return account

    async def update(self, account: AccountRecord) -> AccountRecord:
        """Update an existing account.

        Args:
            account: Account with new values

        Returns:
            The updated account
        """
        stmt = (
            update(self.table)
            .where(self.table.c.id == account.id)
            .values(**account_to_dict(account))
        )
        await self._execute(stmt, self._op("update"))
        await self._flush(self._op("update"))
        return account

    async def delete(self, account_id: AccountId) -> bool:
        """Delete an account.

        Args:
            account_id: Account to delete

        Returns:
            True if a row was deleted
        """
        stmt = delete(self.table).where(self.table.c.id == account_id)
        result = await self._execute(stmt, self._op("delete"))
        await self._flush(self._op("delete"))
        return (result.rowcount or 0) > 0


def postgres_account_directory(
    session: AsyncSession, query_timeout: float = 5.0
) -> AccountDirectory:
    """Account directory with one PostgreSQL repository per role, sharing a session."""
    return AccountDirectory(
        {
            role: PostgresAccountRepository(session, role, query_timeout)
            for role in AccountDirectory.PROBE_ORDER
        }
    )
