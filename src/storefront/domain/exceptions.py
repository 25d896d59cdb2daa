"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Every subclass carries a stable ``code`` that callers can switch on.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "VALIDATION_ERROR"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NOT_FOUND"


class InsufficientStockError(DomainException):
    """Requested quantity exceeds what a product or variant has in stock."""

    code = "INSUFFICIENT_STOCK"

    def __init__(self, item_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {item_name} "
            f"(need {requested}, have {available} available)"
        )
        self.item_name = item_name
        self.requested = requested
        self.available = available


class InvalidTransitionError(DomainException):
    """An order lifecycle move that the transition table does not allow."""

    code = "INVALID_TRANSITION"

    def __init__(self, from_status: str, to_status: str) -> None:
        super().__init__(f"Invalid status transition: {from_status} -> {to_status}")
        self.from_status = from_status
        self.to_status = to_status


class InvalidPaymentSignatureError(DomainException):
    """Gateway verification data did not match the locally held order."""

    code = "INVALID_PAYMENT_SIGNATURE"


class ConcurrentModificationError(DomainException):
    """A versioned save lost against a concurrent writer."""

    code = "CONCURRENT_MODIFICATION"
