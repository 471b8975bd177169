"""Domain value objects for Greyn.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from greyn.domain.value.common import RootValueObject


class AccountRole(str, Enum):
    """Account variant.

    Each role is stored in its own collection.
    """

    INVESTOR = "investor"
    NGO = "ngo"
    CORPORATE = "corporate"
    MARKET_PARTICIPANT = "market-participant"
    ADMIN = "admin"


class AccountStatus(str, Enum):
    """Status as stored on an account record.

    INACTIVE is a legacy value that reads as suspended.
    """

    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"


class IdentityStatus(str, Enum):
    """Normalized status of an identity."""

    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"


class InvitationStatus(str, Enum):
    """Status of an invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    REVOKED = "revoked"


class Portal(str, Enum):
    """Named product area gated by role and active status."""

    CORPORATE_ESG = "Corporate ESG"
    CARBON_MARKETPLACE = "Carbon Marketplace"
    NGO_PORTAL = "NGO Portal"
    ADMIN_PORTAL = "Admin Portal"


class EmailAddress(RootValueObject[str]):
    """Email address, trimmed and lowercased.

    Comparisons are therefore case-insensitive.
    """

    @field_validator("root")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Trim, lowercase and validate the address."""
        v = v.strip().lower()
        if not re.match(r"^\S+@\S+\.\S+$", v):
            raise ValueError("Please provide a valid email")
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        return v


class InvitationToken(RootValueObject[str]):
    """Opaque secret embedded in the acceptance link."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    @staticmethod
    def redact(token: str) -> str:
        """Short prefix of a raw token that is safe to log."""
        return token[:8] + "..."


class InvitationCode(RootValueObject[str]):
    """Human-shareable invitation code.

    Format: INV-<PREFIX>-<YEAR>-<NNN>, e.g. 'INV-NGO-2025-042'
    """

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Validate code format."""
        if not re.match(r"^INV-[A-Z]+-\d{4}-\d{3}$", v):
            raise ValueError("Invitation code must look like INV-<PREFIX>-<YEAR>-<NNN>")
        return v
