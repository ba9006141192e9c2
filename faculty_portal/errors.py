"""Business-rule exceptions raised by the ledger, services and importers.

Storage failures use the DatabaseError family from ``faculty_portal.db``.
"""


class PortalError(Exception):
    """Base exception for business-rule violations."""
    pass


class ValidationError(PortalError):
    """Raised when input is rejected before any storage call."""
    pass


class NotFoundError(PortalError):
    """Raised when a requested row does not exist (or is not visible to the actor)."""
    pass


class InvalidTransitionError(PortalError):
    """Raised when a moderation action is not valid in the row's current state."""
    pass


class ConfirmationRequiredError(PortalError):
    """Raised when a destructive action is dispatched without confirmation."""
    pass


class PermissionDeniedError(PortalError):
    """Raised when an actor attempts an action reserved for another role."""
    pass
