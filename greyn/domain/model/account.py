"""Account records.

An account is stored in exactly one of five collections, one per role. The
variants share a core of fields and differ in the fields that carry the
account's display name. ``Account`` is the tagged union over all of them,
discriminated on ``role``.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from greyn.domain.model.common import DomainModel
from greyn.domain.value import AccountId, AccountRole, AccountStatus, EmailAddress


class AccountRecord(DomainModel):
    """Fields shared by every account variant."""

    id: AccountId
    email: EmailAddress  # Unique per collection, not globally
    status: AccountStatus = AccountStatus.PENDING
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class IndividualAccount(AccountRecord):
    """Individual investor."""

    role: Literal[AccountRole.INVESTOR] = AccountRole.INVESTOR
    name: Optional[str] = None


class NgoAccount(AccountRecord):
    """Non-governmental organization."""

    role: Literal[AccountRole.NGO] = AccountRole.NGO
    organization_name: Optional[str] = None
    registration_number: Optional[str] = None
    contact_person: Optional[str] = None
    location: Optional[str] = None


class CorporateAccount(AccountRecord):
    """Corporate entity reporting ESG data."""

    role: Literal[AccountRole.CORPORATE] = AccountRole.CORPORATE
    company_name: Optional[str] = None
    tax_id: Optional[str] = None
    contact_person: Optional[str] = None


class MarketParticipantAccount(AccountRecord):
    """Carbon market participant."""

    role: Literal[AccountRole.MARKET_PARTICIPANT] = AccountRole.MARKET_PARTICIPANT
    name: Optional[str] = None


class AdministratorAccount(AccountRecord):
    """Platform administrator."""

    role: Literal[AccountRole.ADMIN] = AccountRole.ADMIN
    name: Optional[str] = None
    admin_code: Optional[str] = None
    permissions: tuple[str, ...] = ()


Account = Annotated[
    Union[
        IndividualAccount,
        NgoAccount,
        CorporateAccount,
        MarketParticipantAccount,
        AdministratorAccount,
    ],
    Field(discriminator="role"),
]

ACCOUNT_TYPES: dict[AccountRole, type[AccountRecord]] = {
    AccountRole.INVESTOR: IndividualAccount,
    AccountRole.NGO: NgoAccount,
    AccountRole.CORPORATE: CorporateAccount,
    AccountRole.MARKET_PARTICIPANT: MarketParticipantAccount,
    AccountRole.ADMIN: AdministratorAccount,
}

# Fields that may hold a person's or organization's name, per variant
NAME_FIELDS: dict[AccountRole, tuple[str, ...]] = {
    AccountRole.INVESTOR: ("name",),
    AccountRole.NGO: ("contact_person", "organization_name"),
    AccountRole.CORPORATE: ("contact_person", "company_name"),
    AccountRole.MARKET_PARTICIPANT: ("name",),
    AccountRole.ADMIN: ("name",),
}
