"""Invitation domain service.

Owns the invitation lifecycle: create, resend, revoke, accept and the lazy
expiry sweep. Every status change is checked against
``Invitation.can_transition_to``.
"""

import logfire
import secrets
from collections.abc import Callable, Collection
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from greyn.domain.error import (
    CodeGenerationExhaustedError,
    DuplicatePendingInvitationError,
    InvalidStateError,
    InvitationExpiredError,
    NotFoundError,
    ValidationError,
)
from greyn.domain.model.invitation import Invitation
from greyn.domain.repository import InvitationRepository
from greyn.domain.value import (
    AccountId,
    AccountRole,
    EmailAddress,
    InvitationCode,
    InvitationFilter,
    InvitationId,
    InvitationStats,
    InvitationStatus,
    InvitationToken,
    Portal,
)

from .base import Service
from .notification import InvitationNotice, NotificationDispatcher

CODE_PREFIXES: dict[AccountRole, str] = {
    AccountRole.INVESTOR: "IND",
    AccountRole.NGO: "NGO",
    AccountRole.CORPORATE: "CORP",
    AccountRole.MARKET_PARTICIPANT: "CARB",
    AccountRole.ADMIN: "ADM",
}

# Why an invitation that is not pending cannot be accepted
ACCEPT_REFUSALS: dict[InvitationStatus, str] = {
    InvitationStatus.ACCEPTED: "Invitation has already been accepted",
    InvitationStatus.REVOKED: "Invitation has been revoked",
    InvitationStatus.EXPIRED: "Invitation has expired",
}

CodeGenerator = Callable[[AccountRole], InvitationCode]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_invitation_code(role: AccountRole) -> InvitationCode:
    """Draw a random code such as ``INV-NGO-2025-042``.

    Codes are short and will collide; callers must check uniqueness.
    """
    number = secrets.randbelow(1000)
    return InvitationCode(f"INV-{CODE_PREFIXES[role]}-{utcnow().year}-{number:03d}")


def generate_invitation_token() -> InvitationToken:
    """Generate an unguessable token, independent of the invitation code."""
    return InvitationToken(secrets.token_hex(32))


def parse_email(email: str) -> EmailAddress:
    """Normalize an email address.

    Raises:
        ValidationError: If the address is malformed
    """
    try:
        return EmailAddress(email)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid email address: {email!r}") from e


class InvitationService(Service):
    """Domain service for invitation lifecycle operations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        dispatcher: NotificationDispatcher,
        code_generator: CodeGenerator = generate_invitation_code,
        max_code_attempts: int = 10,
        default_expiry_days: int = 7,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            dispatcher: Background sender for invitation emails
            code_generator: Source of candidate invitation codes
            max_code_attempts: Total draws before code generation gives up
            default_expiry_days: Validity used when the caller gives none
        """
        self.invitation_repository = invitation_repository
        self.dispatcher = dispatcher
        self.code_generator = code_generator
        self.max_code_attempts = max_code_attempts
        self.default_expiry_days = default_expiry_days

    async def create_invitation(
        self,
        email: str,
        role: AccountRole,
        portal: Portal,
        invited_by: AccountId,
        days_until_expiry: int | None = None,
    ) -> Invitation:
        """Create a pending invitation and send it.

        A stale pending invitation for the same email is marked expired
        first. The email is dispatched in the background.

        Args:
            email: Invitee email, normalized before use
            role: Role the invitee will receive
            portal: Portal the invitation is for
            invited_by: Administrator creating the invitation
            days_until_expiry: Validity in days

        Returns:
            Created invitation

        Raises:
            ValidationError: If the email is malformed or days is negative
            DuplicatePendingInvitationError: If a live pending invitation exists
            CodeGenerationExhaustedError: If no unused code could be drawn
        """
        days = self._expiry_days(days_until_expiry)
        address = parse_email(email)

        with logfire.span(
            "invitation_service.create_invitation",
            role=role.value,
            portal=portal.value,
            invited_by=str(invited_by),
        ):
            now = utcnow()
            existing = await self.invitation_repository.find_pending_by_email(address)
            if existing:
                if not existing.is_expired(now):
                    logfire.warn(
                        "Pending invitation already exists",
                        invitation_id=str(existing.id),
                    )
                    raise DuplicatePendingInvitationError(address.root)
                await self._mark_expired(existing)

            invitation = Invitation(
                id=InvitationId(uuid4()),
                email=address,
                invitation_code=await self._generate_unique_code(role),
                token=generate_invitation_token(),
                role=role,
                portal=portal,
                status=InvitationStatus.PENDING,
                invited_by=invited_by,
                invited_at=now,
                expires_at=now + timedelta(days=days),
            )

            saved = await self.invitation_repository.save(invitation)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                invitation_code=saved.invitation_code.root,
                expires_at=saved.expires_at.isoformat(),
            )
            self._notify(saved, resend=False)
            return saved

    async def resend_invitation(
        self, invitation_id: InvitationId, days_until_expiry: int | None = None
    ) -> Invitation:
        """Extend a pending or expired invitation and send it again.

        The token is kept, so links already sent keep working.

        Args:
            invitation_id: Invitation to resend
            days_until_expiry: New validity in days, counted from now

        Returns:
            Updated invitation

        Raises:
            NotFoundError: If invitation not found
            InvalidStateError: If invitation is accepted or revoked
            DuplicatePendingInvitationError: If reviving an expired invitation
                while another one is pending for the same email
        """
        days = self._expiry_days(days_until_expiry)

        with logfire.span(
            "invitation_service.resend_invitation", invitation_id=str(invitation_id)
        ):
            invitation = await self.get_invitation(invitation_id)
            if not invitation.can_transition_to(InvitationStatus.PENDING):
                logfire.warn(
                    "Invitation cannot be resent",
                    invitation_id=str(invitation_id),
                    status=invitation.status.value,
                )
                raise InvalidStateError(
                    f"Cannot resend an invitation that is {invitation.status.value}",
                    current_status=invitation.status.value,
                )

            now = utcnow()
            if invitation.status == InvitationStatus.EXPIRED:
                other = await self.invitation_repository.find_pending_by_email(
                    invitation.email
                )
                if other and other.id != invitation.id:
                    if not other.is_expired(now):
                        raise DuplicatePendingInvitationError(invitation.email.root)
                    await self._mark_expired(other)

            resent = invitation.model_copy(
                update={
                    "status": InvitationStatus.PENDING,
                    "expires_at": now + timedelta(days=days),
                    "resend_count": invitation.resend_count + 1,
                    "last_resent_at": now,
                }
            )
            saved = await self.invitation_repository.save(resent)
            logfire.info(
                "Invitation resent",
                invitation_id=str(invitation_id),
                resend_count=saved.resend_count,
                previous_status=invitation.status.value,
            )
            self._notify(saved, resend=True)
            return saved

    async def revoke_invitation(
        self, invitation_id: InvitationId, revoked_by: AccountId
    ) -> Invitation:
        """Revoke a pending or expired invitation.

        Args:
            invitation_id: Invitation to revoke
            revoked_by: Administrator revoking it

        Returns:
            Revoked invitation

        Raises:
            NotFoundError: If invitation not found
            InvalidStateError: If invitation is accepted or revoked
        """
        with logfire.span(
            "invitation_service.revoke_invitation",
            invitation_id=str(invitation_id),
            revoked_by=str(revoked_by),
        ):
            invitation = await self.get_invitation(invitation_id)
            if not invitation.can_transition_to(InvitationStatus.REVOKED):
                logfire.warn(
                    "Invitation cannot be revoked",
                    invitation_id=str(invitation_id),
                    status=invitation.status.value,
                )
                raise InvalidStateError(
                    f"Cannot revoke an invitation that is {invitation.status.value}",
                    current_status=invitation.status.value,
                )

            revoked = invitation.model_copy(
                update={
                    "status": InvitationStatus.REVOKED,
                    "revoked_at": utcnow(),
                    "revoked_by": revoked_by,
                }
            )
            saved = await self.invitation_repository.save(revoked)
            logfire.info("Invitation revoked", invitation_id=str(invitation_id))
            return saved

    async def accept_invitation(self, token: str) -> Invitation:
        """Consume an invitation.

        Creating the account is left to the caller.

        Args:
            token: Token from the acceptance link

        Returns:
            Accepted invitation

        Raises:
            NotFoundError: If no invitation has the token
            InvalidStateError: If the invitation is not pending
            InvitationExpiredError: If the invitation is past its expiry time
        """
        invitation = await self.get_invitation_by_token(token, expire_stale=False)

        with logfire.span(
            "invitation_service.accept_invitation", invitation_id=str(invitation.id)
        ):
            if not invitation.is_pending:
                logfire.warn(
                    "Invitation cannot be accepted",
                    invitation_id=str(invitation.id),
                    status=invitation.status.value,
                )
                raise InvalidStateError(
                    ACCEPT_REFUSALS[invitation.status],
                    current_status=invitation.status.value,
                )

            now = utcnow()
            if invitation.is_expired(now):
                await self._mark_expired(invitation)
                raise InvitationExpiredError(str(invitation.id))

            accepted = invitation.model_copy(
                update={"status": InvitationStatus.ACCEPTED, "accepted_at": now}
            )
            saved = await self.invitation_repository.save(accepted)
            logfire.info(
                "Invitation accepted",
                invitation_id=str(saved.id),
                role=saved.role.value,
            )
            return saved

    async def get_invitation(self, invitation_id: InvitationId) -> Invitation:
        """Get invitation by ID.

        Raises:
            NotFoundError: If invitation not found
        """
        invitation = await self.invitation_repository.find_by_id(invitation_id)
        if not invitation:
            logfire.warn("Invitation not found", invitation_id=str(invitation_id))
            raise NotFoundError("Invitation", str(invitation_id))
        return invitation

    async def get_invitation_by_token(
        self, token: str, expire_stale: bool = True
    ) -> Invitation:
        """Get invitation by token without consuming it.

        Args:
            token: Token from the acceptance link
            expire_stale: Persist a stale pending invitation as expired

        Returns:
            The invitation, with its current status

        Raises:
            NotFoundError: If no invitation has the token
        """
        redacted = InvitationToken.redact(token)
        with logfire.span("invitation_service.get_invitation_by_token", token=redacted):
            try:
                parsed = InvitationToken(token)
            except PydanticValidationError as e:
                raise NotFoundError("Invitation", redacted) from e

            invitation = await self.invitation_repository.find_by_token(parsed)
            if not invitation:
                logfire.warn("Invitation not found", token=redacted)
                raise NotFoundError("Invitation", redacted)

            if (
                expire_stale
                and invitation.is_pending
                and invitation.is_expired(utcnow())
            ):
                invitation = await self._mark_expired(invitation)
            return invitation

    async def expire_stale_invitations(self) -> int:
        """Mark every stale pending invitation as expired.

        Returns:
            Number of invitations expired by this call
        """
        with logfire.span("invitation_service.expire_stale_invitations"):
            expired = await self.invitation_repository.expire_stale(utcnow())
            if expired:
                logfire.info("Stale invitations expired", count=expired)
            return expired

    async def list_invitations(
        self,
        filters: InvitationFilter,
        inviter_ids: Collection[AccountId] = (),
    ) -> list[Invitation]:
        """List invitations, newest first.

        Args:
            filters: Status, role, portal and search constraints
            inviter_ids: Inviters whose invitations also match the search

        Returns:
            Matching invitations
        """
        with logfire.span(
            "invitation_service.list_invitations",
            status=filters.status.value if filters.status else None,
            search=filters.search,
        ):
            await self.expire_stale_invitations()
            invitations = await self.invitation_repository.find_all(
                filters, inviter_ids
            )
            logfire.info("Invitations listed", count=len(invitations))
            return invitations

    async def get_stats(self) -> InvitationStats:
        """Count invitations per status after the expiry sweep."""
        with logfire.span("invitation_service.get_stats"):
            await self.expire_stale_invitations()
            counts = await self.invitation_repository.count_by_status()
            return InvitationStats(
                total=sum(counts.values()),
                pending=counts.get(InvitationStatus.PENDING, 0),
                accepted=counts.get(InvitationStatus.ACCEPTED, 0),
                expired=counts.get(InvitationStatus.EXPIRED, 0),
                revoked=counts.get(InvitationStatus.REVOKED, 0),
            )

    def _expiry_days(self, days_until_expiry: int | None) -> int:
        days = (
            self.default_expiry_days if days_until_expiry is None else days_until_expiry
        )
        if days < 0:
            raise ValidationError("days_until_expiry must not be negative")
        return days

    async def _generate_unique_code(self, role: AccountRole) -> InvitationCode:
        for attempt in range(1, self.max_code_attempts + 1):
            code = self.code_generator(role)
            if not await self.invitation_repository.exists_code(code):
                return code
            logfire.warn(
                "Invitation code collision", code=code.root, attempt=attempt
            )

        logfire.error(
            "Invitation code generation exhausted",
            role=role.value,
            attempts=self.max_code_attempts,
        )
        raise CodeGenerationExhaustedError(role.value, self.max_code_attempts)

    async def _mark_expired(self, invitation: Invitation) -> Invitation:
        expired = invitation.model_copy(update={"status": InvitationStatus.EXPIRED})
        saved = await self.invitation_repository.save(expired)
        logfire.info("Invitation expired", invitation_id=str(invitation.id))
        return saved

    def _notify(self, invitation: Invitation, resend: bool) -> None:
        self.dispatcher.dispatch(
            InvitationNotice(
                email=invitation.email.root,
                invitation_code=invitation.invitation_code.root,
                role=invitation.role,
                portal=invitation.portal,
                expires_at=invitation.expires_at,
                token=invitation.token.root,
                resend=resend,
            )
        )
