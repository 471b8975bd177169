"""Strongly typed identifiers for Greyn domain entities."""

from typing import NewType
from uuid import UUID

# Shared by every account variant, so an id can be probed across collections
AccountId = NewType("AccountId", UUID)
InvitationId = NewType("InvitationId", UUID)
