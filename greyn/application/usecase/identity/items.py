"""Identity representation shared by the identity use cases."""

from datetime import date

from pydantic import BaseModel

from greyn.domain.model import Identity
from greyn.domain.value import AccountRole, IdentityStatus, Portal


class IdentityItem(BaseModel):
    """Identity as shown to administrators."""

    id: str
    display_name: str
    email: str
    role: AccountRole
    status: IdentityStatus
    portal_access: list[Portal]
    join_date: date
    last_active: str

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityItem":
        return cls(
            id=str(identity.id),
            display_name=identity.display_name,
            email=identity.email.root,
            role=identity.role,
            status=identity.status,
            portal_access=sorted(identity.portal_access, key=lambda p: p.value),
            join_date=identity.join_date,
            last_active=identity.last_active_summary,
        )
