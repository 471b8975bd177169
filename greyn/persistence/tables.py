"""SQLAlchemy table definitions for Greyn.

Each account role has its own table. They match the schema defined in the
Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

from greyn.domain.value import AccountRole

# Metadata object for all tables
metadata = MetaData()

# Partial unique index: at most one pending invitation per email
PENDING_EMAIL_CONSTRAINT = "uq_invitations_pending_email"

ACCOUNT_STATUSES = "('active', 'pending', 'suspended', 'inactive')"


def _account_table(name: str, *columns: Column) -> Table:
    """Build an account table with the columns every variant shares."""
    table = Table(
        name,
        metadata,
        Column("id", UUID(as_uuid=True), primary_key=True),
        Column("email", String(255), nullable=False),  # Stored lowercase
        Column("status", String(20), nullable=False, server_default="pending"),
        Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
        Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
        Column(
            "updated_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
        *columns,
        CheckConstraint(f"status IN {ACCOUNT_STATUSES}", name=f"{name}_status_valid"),
    )
    # Unique per table only; the same email may exist under several roles
    Index(account_email_constraint(name), table.c.email, unique=True)
    return table


def account_email_constraint(table_name: str) -> str:
    return f"uq_{table_name}_email"


# ============================================================================
# ACCOUNT TABLES (one per role)
# ============================================================================
individual_accounts_table = _account_table(
    "individual_accounts",
    Column("name", String(255), nullable=True),
)

ngo_accounts_table = _account_table(
    "ngo_accounts",
    Column("organization_name", String(255), nullable=True),
    Column("registration_number", String(100), nullable=True),
    Column("contact_person", String(255), nullable=True),
    Column("location", Text, nullable=True),
)

corporate_accounts_table = _account_table(
    "corporate_accounts",
    Column("company_name", String(255), nullable=True),
    Column("tax_id", String(100), nullable=True),
    Column("contact_person", String(255), nullable=True),
)

market_participant_accounts_table = _account_table(
    "market_participant_accounts",
    Column("name", String(255), nullable=True),
)

administrator_accounts_table = _account_table(
    "administrator_accounts",
    Column("name", String(255), nullable=True),
    Column("admin_code", String(50), nullable=True),
    Column("permissions", ARRAY(String(100)), nullable=False, server_default="{}"),
)

ACCOUNT_TABLES: dict[AccountRole, Table] = {
    AccountRole.INVESTOR: individual_accounts_table,
    AccountRole.NGO: ngo_accounts_table,
    AccountRole.CORPORATE: corporate_accounts_table,
    AccountRole.MARKET_PARTICIPANT: market_participant_accounts_table,
    AccountRole.ADMIN: administrator_accounts_table,
}

# ============================================================================
# INVITATIONS TABLE
# ============================================================================
invitations_table = Table(
    "invitations",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("email", String(255), nullable=False),  # Stored lowercase
    Column("invitation_code", String(32), nullable=False),
    Column("token", String(255), nullable=False),
    Column("role", String(32), nullable=False),
    Column("portal", String(64), nullable=False),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("invited_by", UUID(as_uuid=True), nullable=False),  # Administrator id
    Column("invited_at", TIMESTAMP(timezone=True), nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("revoked_at", TIMESTAMP(timezone=True), nullable=True),
    Column("revoked_by", UUID(as_uuid=True), nullable=True),
    Column("resend_count", Integer, nullable=False, server_default="0"),
    Column("last_resent_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'expired', 'revoked')",
        name="invitations_status_valid",
    ),
    CheckConstraint("resend_count >= 0", name="invitations_resend_count_non_negative"),
)

Index("uq_invitations_code", invitations_table.c.invitation_code, unique=True)
Index("uq_invitations_token", invitations_table.c.token, unique=True)
Index(
    PENDING_EMAIL_CONSTRAINT,
    invitations_table.c.email,
    unique=True,
    postgresql_where=text("status = 'pending'"),
)
Index(
    "idx_invitations_status_expires_at",
    invitations_table.c.status,
    invitations_table.c.expires_at,
)
Index("idx_invitations_invited_at", invitations_table.c.invited_at.desc())
Index("idx_invitations_invited_by", invitations_table.c.invited_by)
