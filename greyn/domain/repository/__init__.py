"""Repository interfaces for the Greyn domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from greyn.domain.repository.account import AccountDirectory, AccountRepository
from greyn.domain.repository.invitation import InvitationRepository

__all__ = [
    "AccountDirectory",
    "AccountRepository",
    "InvitationRepository",
]
