"""Shared plumbing for PostgreSQL repositories."""

import asyncio
from typing import Any

import logfire
from sqlalchemy import Executable, Result
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from greyn.domain.error import StoreUnavailableError


class PostgresRepository:
    """Base for repositories backed by an async SQLAlchemy session.

    Every statement is bounded by ``query_timeout``. Timeouts and lost
    connections surface as StoreUnavailableError so they are never
    mistaken for a missing record.
    """

    def __init__(self, session: AsyncSession, query_timeout: float = 5.0) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            query_timeout: Seconds allowed per statement
        """
        self.session = session
        self.query_timeout = query_timeout

    async def _execute(self, stmt: Executable, operation: str) -> Result[Any]:
        try:
            return await asyncio.wait_for(
                self.session.execute(stmt), timeout=self.query_timeout
            )
        except asyncio.TimeoutError as e:
            logfire.error(
                "Store call timed out",
                operation=operation,
                timeout_seconds=self.query_timeout,
            )
            raise StoreUnavailableError(operation, "timed out") from e
        except (OperationalError, InterfaceError, OSError) as e:
            logfire.error("Store unreachable", operation=operation, error=str(e))
            raise StoreUnavailableError(operation, type(e).__name__) from e

    async def _flush(self, operation: str) -> None:
        try:
            await asyncio.wait_for(self.session.flush(), timeout=self.query_timeout)
        except asyncio.TimeoutError as e:
            raise StoreUnavailableError(operation, "timed out") from e
        except (OperationalError, InterfaceError, OSError) as e:
            raise StoreUnavailableError(operation, type(e).__name__) from e
