"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer and the checkout result can catch them uniformly and
display user-friendly messages.  Every subclass carries a stable ``code``
that callers can branch on without parsing the message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "domain_error"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "validation_error"


class InvalidRequest(ValidationError):
    """A checkout request is malformed (empty cart, missing customer data)."""

    code = "invalid_request"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "not_found"


class ProductNotFound(EntityNotFoundError):

    code = "product_not_found"

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: '{product_id}'")


class InsufficientStock(DomainException):
    """Requested quantity exceeds what is left on the shelf."""

    code = "insufficient_stock"

    def __init__(
        self,
        product_id: str,
        product_name: str,
        requested: int,
        available: int,
    ) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f'Insufficient stock for "{product_name}". Available: {available}'
        )


class AccessDenied(DomainException):
    """The current caller may not perform the operation."""

    code = "access_denied"


class Unauthorized(AccessDenied):

    code = "unauthorized"

    def __init__(self, message: str = "You must be signed in to make a purchase") -> None:
        super().__init__(message)


class EmailNotVerified(AccessDenied):

    code = "email_not_verified"

    def __init__(
        self, message: str = "You must verify your email before making a purchase"
    ) -> None:
        super().__init__(message)


class AdminRequired(AccessDenied):

    code = "admin_required"

    def __init__(self, message: str = "Administrator privileges required") -> None:
        super().__init__(message)


class PersistenceFailure(DomainException):
    """Unexpected storage error. The message is never shown to customers."""

    code = "persistence_failure"
    public_message = "Error processing the order"


class NotificationFailure(DomainException):
    """A receipt could not be delivered. Logged, never surfaced."""

    code = "notification_failure"
