"""Domain services."""

from .base import Service
from .identity_service import IdentityService, normalize
from .invitation_service import InvitationService
from .notification import (
    InvitationNotice,
    InvitationNotifier,
    NotificationDispatcher,
    NotificationOutcome,
    acceptance_url,
)
from .role_migration_service import RoleMigrationService

__all__ = [
    "IdentityService",
    "InvitationNotice",
    "InvitationNotifier",
    "InvitationService",
    "NotificationDispatcher",
    "NotificationOutcome",
    "RoleMigrationService",
    "Service",
    "acceptance_url",
    "normalize",
]
