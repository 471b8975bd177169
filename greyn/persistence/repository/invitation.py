"""PostgreSQL implementation of Invitation repository."""

from collections.abc import Collection
from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError

from greyn.domain.error import DuplicatePendingInvitationError
from greyn.domain.model import Invitation
from greyn.domain.repository import InvitationRepository
from greyn.domain.value import (
    AccountId,
    EmailAddress,
    InvitationCode,
    InvitationFilter,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)
from greyn.persistence.mappers import invitation_to_dict, row_to_invitation
from greyn.persistence.repository.base import PostgresRepository
from greyn.persistence.tables import PENDING_EMAIL_CONSTRAINT, invitations_table


class PostgresInvitationRepository(PostgresRepository, InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID.

        Args:
            invitation_id: Invitation ID to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self._execute(stmt, "invitations.find_by_id")
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token.

        Args:
            token: Invitation token to look up

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        result = await self._execute(stmt, "invitations.find_by_token")
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_pending_by_email(self, email: EmailAddress) -> Optional[Invitation]:
        """Find the pending invitation for an email.

        Served by the partial unique index on pending emails.

        Args:
            email: Normalized email

        Returns:
            Invitation if found, None otherwise
        """
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.email == email.root,
                invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        result = await self._execute(stmt, "invitations.find_pending_by_email")
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def exists_code(self, code: InvitationCode) -> bool:
        """Check whether an invitation code is taken.

        Args:
            code: Candidate code

        Returns:
            True if the code is in use
        """
        stmt = select(invitations_table.c.id).where(
            invitations_table.c.invitation_code == code.root
        )
        result = await self._execute(stmt, "invitations.exists_code")
        return result.first() is not None

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: Invitation to save

        Returns:
            Saved invitation

        Raises:
            DuplicatePendingInvitationError: If the pending-email index rejects the row
        """
        invitation_dict = invitation_to_dict(invitation)

        existing = await self.find_by_id(invitation.id)

        if existing:
            stmt = (
                update(invitations_table)
                .where(invitations_table.c.id == invitation.id)
                .values(**invitation_dict)
            )
        else:
            stmt = insert(invitations_table).values(**invitation_dict)

        try:
            await self._execute(stmt, "invitations.save")
        except IntegrityError as e:
            if PENDING_EMAIL_CONSTRAINT in str(e.orig):
                raise DuplicatePendingInvitationError(invitation.email.root) from e
            raise

        await self._flush("invitations.save")
        return invitation

    async def find_all(
        self,
        filters: InvitationFilter,
        inviter_ids: Collection[AccountId] = (),
    ) -> list[Invitation]:
        """Find invitations matching filters, newest first.

        Args:
            filters: Status, role, portal and search constraints
            inviter_ids: Inviters whose invitations also match the search

        Returns:
            List of matching invitations
        """
        stmt = select(invitations_table).order_by(invitations_table.c.invited_at.desc())

        if filters.status:
            stmt = stmt.where(invitations_table.c.status == filters.status.value)
        if filters.role:
            stmt = stmt.where(invitations_table.c.role == filters.role.value)
        if filters.portal:
            stmt = stmt.where(invitations_table.c.portal == filters.portal.value)
        if filters.search:
            matches = [
                invitations_table.c.email.icontains(filters.search, autoescape=True),
                invitations_table.c.invitation_code.icontains(
                    filters.search, autoescape=True
                ),
            ]
            if inviter_ids:
                matches.append(invitations_table.c.invited_by.in_(list(inviter_ids)))
            stmt = stmt.where(or_(*matches))

        result = await self._execute(stmt, "invitations.find_all")
        rows = result.mappings().all()
        return [row_to_invitation(dict(row)) for row in rows]

    async def count_by_status(self) -> dict[InvitationStatus, int]:
        """Count invitations per status.

        Returns:
            Mapping of status to count
        """
        stmt = select(invitations_table.c.status, func.count()).group_by(
            invitations_table.c.status
        )
        result = await self._execute(stmt, "invitations.count_by_status")
        return {InvitationStatus(status): count for status, count in result.all()}

    async def expire_stale(self, now: datetime) -> int:
        """Expire every pending invitation past its expiry time in one update.

        Args:
            now: Reference time

        Returns:
            Number of rows updated
        """
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.status == InvitationStatus.PENDING.value,
                    invitations_table.c.expires_at < now,
                )
            )
            .values(status=InvitationStatus.EXPIRED.value)
        )
        result = await self._execute(stmt, "invitations.expire_stale")
        await self._flush("invitations.expire_stale")
        return result.rowcount or 0
