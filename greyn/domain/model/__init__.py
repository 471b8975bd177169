"""Domain model entities for Greyn."""

from greyn.domain.model.account import (
    ACCOUNT_TYPES,
    Account,
    AccountRecord,
    AdministratorAccount,
    CorporateAccount,
    IndividualAccount,
    MarketParticipantAccount,
    NgoAccount,
)
from greyn.domain.model.identity import Identity
from greyn.domain.model.invitation import Invitation

__all__ = [
    "ACCOUNT_TYPES",
    "Account",
    "AccountRecord",
    "AdministratorAccount",
    "CorporateAccount",
    "Identity",
    "IndividualAccount",
    "Invitation",
    "MarketParticipantAccount",
    "NgoAccount",
]
