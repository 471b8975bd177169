"""Identity read model.

An identity is the role-independent view of an account record. It is
derived on every read and never stored.
"""

from datetime import date

from pydantic import model_validator

from greyn.domain.model.common import DomainModel
from greyn.domain.value import (
    AccountId,
    AccountRole,
    EmailAddress,
    IdentityStatus,
    Portal,
)


class Identity(DomainModel):
    """Normalized identity.

    ``portal_access`` is always empty unless the identity is active.
    """

    id: AccountId
    display_name: str
    email: EmailAddress
    role: AccountRole
    status: IdentityStatus
    portal_access: frozenset[Portal] = frozenset()
    join_date: date
    last_active_summary: str

    @model_validator(mode="after")
    def validate_portal_access(self) -> "Identity":
        """Reject portal access for identities that are not active."""
        if self.portal_access and self.status != IdentityStatus.ACTIVE:
            raise ValueError(
                f"A {self.status.value} identity cannot have portal access"
            )
        return self
