"""Invitation repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Collection
from datetime import datetime

from greyn.domain.model.invitation import Invitation
from greyn.domain.value import (
    AccountId,
    EmailAddress,
    InvitationCode,
    InvitationFilter,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Defines the contract for invitation persistence operations.
    Implementations live in the persistence layer. Every call may raise
    StoreUnavailableError when the store times out or is unreachable.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token.

        Used when an invitee opens the acceptance link.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_email(self, email: EmailAddress) -> Invitation | None:
        """Find the pending invitation for an email, expired or not.

        Args:
            email: Normalized email address

        Returns:
            The pending invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_code(self, code: InvitationCode) -> bool:
        """Check whether an invitation code is already taken.

        Args:
            code: Candidate invitation code

        Returns:
            True if any invitation uses the code
        """
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Args:
            invitation: The invitation to save

        Returns:
            The saved invitation

        Raises:
            DuplicatePendingInvitationError: If saving would leave two pending
                invitations for the same email
        """
        pass

    @abstractmethod
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
            List of invitations
        """
        pass

    @abstractmethod
    async def count_by_status(self) -> dict[InvitationStatus, int]:
        """Count invitations per status.

        Returns:
            Mapping of status to count; absent statuses have no entry
        """
        pass

    @abstractmethod
    async def expire_stale(self, now: datetime) -> int:
        """Mark every pending invitation with expires_at before now as expired.

        Single bulk update; running it twice changes nothing the second time.

        Args:
            now: Reference time

        Returns:
            Number of invitations transitioned
        """
        pass
