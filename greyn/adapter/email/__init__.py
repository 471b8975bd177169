"""Invitation email adapter."""

from .client import (
    HttpInvitationEmailClient,
    InvitationEmailClient,
    MockInvitationEmailClient,
    UnconfiguredInvitationEmailClient,
)

__all__ = [
    "HttpInvitationEmailClient",
    "InvitationEmailClient",
    "MockInvitationEmailClient",
    "UnconfiguredInvitationEmailClient",
]
