"""initial_schema

Create the identity and invitation schema for Greyn:
- One account table per role (individual, NGO, corporate,
  market participant, administrator), email unique per table
- Invitations, with unique code and token and at most one
  pending invitation per email

Revision ID: 3c1f9a2b7d40
Revises:
Create Date: 2025-11-04 10:12:08.415202

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACCOUNT_STATUSES = "('active', 'pending', 'suspended', 'inactive')"


def _account_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("last_login_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def _create_account_table(name: str, *columns: sa.Column) -> None:
    op.create_table(
        name,
        *_account_columns(),
        *columns,
        sa.CheckConstraint(f"status IN {ACCOUNT_STATUSES}", name=f"{name}_status_valid"),
    )
    op.create_index(f"uq_{name}_email", name, ["email"], unique=True)


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # ACCOUNT TABLES
    # ========================================================================
    _create_account_table(
        "individual_accounts",
        sa.Column("name", sa.String(255), nullable=True),
    )
    _create_account_table(
        "ngo_accounts",
        sa.Column("organization_name", sa.String(255), nullable=True),
        sa.Column("registration_number", sa.String(100), nullable=True),
        sa.Column("contact_person", sa.String(255), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
    )
    _create_account_table(
        "corporate_accounts",
        sa.Column("company_name", sa.String(255), nullable=True),
        sa.Column("tax_id", sa.String(100), nullable=True),
        sa.Column("contact_person", sa.String(255), nullable=True),
    )
    _create_account_table(
        "market_participant_accounts",
        sa.Column("name", sa.String(255), nullable=True),
    )
    _create_account_table(
        "administrator_accounts",
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("admin_code", sa.String(50), nullable=True),
        sa.Column(
            "permissions",
            postgresql.ARRAY(sa.String(100)),
            nullable=False,
            server_default="{}",
        ),
    )

    # ========================================================================
    # INVITATIONS TABLE
    # ========================================================================
    op.create_table(
        "invitations",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("invitation_code", sa.String(32), nullable=False),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("portal", sa.String(64), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("invited_by", sa.UUID(), nullable=False),
        sa.Column("invited_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("revoked_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("revoked_by", sa.UUID(), nullable=True),
        sa.Column("resend_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_resent_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'expired', 'revoked')",
            name="invitations_status_valid",
        ),
        sa.CheckConstraint(
            "resend_count >= 0", name="invitations_resend_count_non_negative"
        ),
    )
    op.create_index(
        "uq_invitations_code", "invitations", ["invitation_code"], unique=True
    )
    op.create_index("uq_invitations_token", "invitations", ["token"], unique=True)
    # At most one pending invitation per email
    op.create_index(
        "uq_invitations_pending_email",
        "invitations",
        ["email"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )
    op.create_index(
        "idx_invitations_status_expires_at", "invitations", ["status", "expires_at"]
    )
    op.create_index(
        "idx_invitations_invited_at",
        "invitations",
        [sa.text("invited_at DESC")],
    )
    op.create_index("idx_invitations_invited_by", "invitations", ["invited_by"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("invitations")
    op.drop_table("administrator_accounts")
    op.drop_table("market_participant_accounts")
    op.drop_table("corporate_accounts")
    op.drop_table("ngo_accounts")
    op.drop_table("individual_accounts")
