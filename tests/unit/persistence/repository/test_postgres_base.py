"""Unit tests for PostgresRepository store-call bounds."""

import asyncio

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import OperationalError

from greyn.domain.error import StoreUnavailableError
from greyn.persistence.repository.base import PostgresRepository


class HangingSession:
    """Session whose statements never complete."""

    async def execute(self, stmt):
        await asyncio.sleep(3600)

    async def flush(self):
        await asyncio.sleep(3600)


class BrokenSession:
    """Session whose connection is gone."""

    async def execute(self, stmt):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))

    async def flush(self):
        raise ConnectionResetError("reset")


class TestPostgresRepository:
    """Tests for timeouts and connection errors."""

    @pytest.mark.asyncio
    async def test_timeout_is_store_unavailable(self):
        """A slow store is reported as unavailable, never as a missing record."""
        repo = PostgresRepository(HangingSession(), query_timeout=0.01)

        with pytest.raises(StoreUnavailableError, match="timed out") as exc_info:
            await repo._execute(select(text("1")), "find_invitation_by_token")

        assert exc_info.value.retryable is True
        assert exc_info.value.operation == "find_invitation_by_token"

    @pytest.mark.asyncio
    async def test_flush_timeout_is_store_unavailable(self):
        repo = PostgresRepository(HangingSession(), query_timeout=0.01)

        with pytest.raises(StoreUnavailableError):
            await repo._flush("save_invitation")

    @pytest.mark.asyncio
    async def test_connection_error_is_store_unavailable(self):
        repo = PostgresRepository(BrokenSession())

        with pytest.raises(StoreUnavailableError, match="OperationalError"):
            await repo._execute(select(text("1")), "locate_account")

        with pytest.raises(StoreUnavailableError, match="ConnectionResetError"):
            await repo._flush("create_account")
