"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from greyn.domain.model import ACCOUNT_TYPES, AccountRecord, Invitation
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


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        email=EmailAddress(row["email"]),
        invitation_code=InvitationCode(row["invitation_code"]),
        token=InvitationToken(row["token"]),
        role=AccountRole(row["role"]),
        portal=Portal(row["portal"]),
        status=InvitationStatus(row["status"]),
        invited_by=AccountId(_uuid(row["invited_by"])),
        invited_at=row["invited_at"],
        expires_at=row["expires_at"],
        accepted_at=row.get("accepted_at"),
        revoked_at=row.get("revoked_at"),
        revoked_by=AccountId(_uuid(row["revoked_by"])) if row.get("revoked_by") else None,
        resend_count=row.get("resend_count", 0),
        last_resent_at=row.get("last_resent_at"),
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    Args:
        invitation: Invitation domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = invitation.model_dump()
    # Enums are stored as their plain string values
    data["role"] = invitation.role.value
    data["portal"] = invitation.portal.value
    data["status"] = invitation.status.value
    return data


def row_to_account(role: AccountRole, row: Dict[str, Any]) -> AccountRecord:
    """Convert database row to the account variant of ``role``.

    Args:
        role: Role owning the table the row came from
        row: Database row as dict

    Returns:
        Account domain model
    """
    model = ACCOUNT_TYPES[role]
    fields = {
        key: value
        for key, value in row.items()
        if key in model.model_fields and key != "role"
    }
    fields["id"] = AccountId(_uuid(row["id"]))
    fields["email"] = EmailAddress(row["email"])
    fields["status"] = AccountStatus(row["status"])
    if "permissions" in fields:
        fields["permissions"] = tuple(fields["permissions"] or ())
    return model(**fields)


def account_to_dict(account: AccountRecord) -> Dict[str, Any]:
    """Convert account domain model to database dict.

    Args:
        account: Any account variant

    Returns:
        Dict suitable for database insertion/update
    """
    data = account.model_dump(exclude={"role"})
    data["status"] = account.status.value
    if "permissions" in data:
        data["permissions"] = list(data["permissions"])
    return data
