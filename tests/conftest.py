"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

from greyn.domain.model import Invitation
from greyn.domain.model.account import ACCOUNT_TYPES, AccountRecord
from greyn.domain.value import (
    AccountId,
    AccountRole,
    AccountStatus,
    EmailAddress,
    InvitationCode,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    Portal,
)

# Keep test runs local: no cloud export, no console noise
logfire.configure(send_to_logfire=False, console=False)


def make_account(
    role: AccountRole,
    email: str = "someone@example.com",
    status: AccountStatus = AccountStatus.ACTIVE,
    **fields,
) -> AccountRecord:
    """Build an account record of the variant for ``role``.

    Extra keyword arguments set variant fields such as ``name`` or
    ``organization_name``.
    """
    now = datetime.now(timezone.utc)
    defaults = {
        "id": AccountId(uuid4()),
        "email": EmailAddress(email),
        "status": status,
        "created_at": now,
        "updated_at": now,
    }
    return ACCOUNT_TYPES[role](**{**defaults, **fields})


def make_invitation(
    email: str = "invitee@example.com",
    status: InvitationStatus = InvitationStatus.PENDING,
    expires_in: timedelta = timedelta(days=7),
    code: str | None = None,
    role: AccountRole = AccountRole.NGO,
    portal: Portal = Portal.NGO_PORTAL,
    invited_by: AccountId | None = None,
) -> Invitation:
    """Build an invitation directly, bypassing the service.

    A negative ``expires_in`` gives an invitation that is already stale.
    """
    now = datetime.now(timezone.utc)
    return Invitation(
        id=InvitationId(uuid4()),
        email=EmailAddress(email),
        invitation_code=InvitationCode(code or f"INV-NGO-{now.year}-{uuid4().int % 1000:03d}"),
        token=InvitationToken(uuid4().hex + uuid4().hex),
        role=role,
        portal=portal,
        status=status,
        invited_by=invited_by or AccountId(uuid4()),
        invited_at=now - timedelta(days=1),
        expires_at=now + expires_in,
    )
