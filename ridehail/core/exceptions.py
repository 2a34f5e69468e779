"""Domain exceptions raised by the service layer."""

from typing import Any, Dict, Optional


class RideHailError(Exception):
    """Base class for business errors returned to API callers."""

    code = "error"
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(RideHailError):
    """Raised when an entity, or an entity scoped to the caller, cannot be found."""
    code = "not_found"
    status_code = 404


class InvalidStateError(RideHailError):
    """Raised when an action is not valid for the current order status."""
    code = "invalid_state"
    status_code = 409


class InvalidTransitionError(InvalidStateError):
    """Raised when a status change is not in the transition table."""
    code = "invalid_transition"


class IneligibleError(RideHailError):
    """Raised when a driver fails availability or subscription checks."""
    code = "ineligible"
    status_code = 403


class WrongRoleError(RideHailError):
    """Raised when a user does not have the role the operation needs."""
    code = "wrong_role"
    status_code = 403


class AlreadyPaidError(RideHailError):
    """Raised when paying an order that is already paid."""
    code = "already_paid"
    status_code = 409


class AmountMismatchError(RideHailError):
    """Raised when a payment amount does not match the order fare."""
    code = "amount_mismatch"
    status_code = 400


class ConflictError(RideHailError):
    """Raised when a unique record already exists."""
    code = "conflict"
    status_code = 409
