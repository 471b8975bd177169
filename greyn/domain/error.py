"""Domain layer errors.

Every error carries a stable machine-readable ``kind`` and a human message,
so callers can explain why an operation failed without parsing text.
"""

from typing import ClassVar


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[str] = "domain_error"
    retryable: ClassVar[bool] = False

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Domain validation error."""

    kind = "validation_error"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidStateError(DomainError):
    """Raised when an operation would make an illegal state transition."""

    kind = "invalid_state"

    def __init__(self, message: str, current_status: str | None = None):
        self.current_status = current_status
        super().__init__(message)


class DuplicatePendingInvitationError(DomainError):
    """Raised when an email already has a live pending invitation."""

    kind = "duplicate_pending_invitation"

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"A pending invitation already exists for {email}")


class InvitationExpiredError(DomainError):
    """Raised when an invitation is used after its expiry time."""

    kind = "expired"

    def __init__(self, invitation_id: str):
        self.invitation_id = invitation_id
        super().__init__("Invitation has expired")


class CodeGenerationExhaustedError(DomainError):
    """Raised when no unused invitation code was found within the attempt budget."""

    kind = "code_generation_exhausted"
    retryable = True

    def __init__(self, role: str, attempts: int):
        self.role = role
        self.attempts = attempts
        super().__init__(
            f"Failed to generate a unique invitation code for role {role} "
            f"after {attempts} attempts"
        )


class InvalidRoleError(DomainError):
    """Raised when a role has no corresponding account collection."""

    kind = "invalid_role"

    def __init__(self, role: str):
        self.role = role
        super().__init__(f"Invalid role: {role}")


class DuplicateEmailError(DomainError):
    """Raised when an account collection already holds the email."""

    kind = "duplicate_email"

    def __init__(self, role: str, email: str):
        self.role = role
        self.email = email
        super().__init__(f"An account with email {email} already exists for role {role}")


class PartialMigrationError(DomainError):
    """Raised when a role change created the new record but kept the old one.

    The account now exists in both collections and needs manual
    reconciliation. Never retried automatically.
    """

    kind = "partial_migration"

    def __init__(
        self,
        account_id: str,
        source_role: str,
        new_account_id: str,
        target_role: str,
    ):
        self.account_id = account_id
        self.source_role = source_role
        self.new_account_id = new_account_id
        self.target_role = target_role
        super().__init__(
            f"Account {account_id} was copied to {target_role} as {new_account_id} "
            f"but could not be removed from {source_role}; "
            "it now exists in both collections"
        )


class StoreUnavailableError(DomainError):
    """Raised when the record store times out or cannot be reached."""

    kind = "store_unavailable"
    retryable = True

    def __init__(self, operation: str, reason: str | None = None):
        self.operation = operation
        self.reason = reason
        message = f"Record store unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
