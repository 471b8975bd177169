"""In-memory invitation repository for testing."""

from collections.abc import Collection
from datetime import datetime
from typing import Optional

from greyn.domain.error import DuplicatePendingInvitationError
from greyn.domain.model.invitation import Invitation
from greyn.domain.repository.invitation import InvitationRepository
from greyn.domain.value import (
    AccountId,
    EmailAddress,
    InvitationCode,
    InvitationFilter,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing.

    ``save`` checks pending uniqueness and stores in one step with no await
    in between, mirroring the partial unique index.
    """

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        return self._invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token."""
        for invitation in self._invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def find_pending_by_email(self, email: EmailAddress) -> Optional[Invitation]:
        """Find the pending invitation for an email."""
        return self._pending_for(email)

    async def exists_code(self, code: InvitationCode) -> bool:
        """Check whether an invitation code is taken."""
        return any(i.invitation_code == code for i in self._invitations.values())

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            DuplicatePendingInvitationError: If another pending invitation has the email
        """
        if invitation.status == InvitationStatus.PENDING:
            other = self._pending_for(invitation.email)
            if other and other.id != invitation.id:
                raise DuplicatePendingInvitationError(invitation.email.root)

        self._invitations[invitation.id] = invitation
        return invitation

    async def find_all(
        self,
        filters: InvitationFilter,
        inviter_ids: Collection[AccountId] = (),
    ) -> list[Invitation]:
        """Find invitations matching filters, newest first."""
        matches = []
        for invitation in self._invitations.values():
            if filters.status and invitation.status != filters.status:
                continue
            if filters.role and invitation.role != filters.role:
                continue
            if filters.portal and invitation.portal != filters.portal:
                continue
            if filters.search and not self._matches_search(
                invitation, filters.search, inviter_ids
            ):
                continue
            matches.append(invitation)

        matches.sort(key=lambda i: i.invited_at, reverse=True)
        return matches

    async def count_by_status(self) -> dict[InvitationStatus, int]:
        """Count invitations per status."""
        counts: dict[InvitationStatus, int] = {}
        for invitation in self._invitations.values():
            counts[invitation.status] = counts.get(invitation.status, 0) + 1
        return counts

    async def expire_stale(self, now: datetime) -> int:
        """Expire every stale pending invitation."""
        stale = [
            invitation
            for invitation in self._invitations.values()
            if invitation.is_pending and invitation.expires_at < now
        ]
        for invitation in stale:
            self._invitations[invitation.id] = invitation.model_copy(
                update={"status": InvitationStatus.EXPIRED}
            )
        return len(stale)

    def _pending_for(self, email: EmailAddress) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if invitation.email == email and invitation.is_pending:
                return invitation
        return None

    @staticmethod
    def _matches_search(
        invitation: Invitation, search: str, inviter_ids: Collection[AccountId]
    ) -> bool:
        term = search.lower()
        return (
            term in invitation.email.root
            or term in invitation.invitation_code.root.lower()
            or invitation.invited_by in inviter_ids
        )
