"""Domain layer: exceptions and state machines shared by the services."""

from storefront.domain.exceptions import (
    DomainError,
    DuplicateError,
    InvalidIdentifierError,
    InvalidStateTransitionError,
    NotFoundError,
    ReviewNotAllowedError,
    ValidationError,
)
from storefront.domain.state_machines import OrderStatus, validate_order_transition

__all__ = [
    "DomainError",
    "DuplicateError",
    "InvalidIdentifierError",
    "InvalidStateTransitionError",
    "NotFoundError",
    "ReviewNotAllowedError",
    "ValidationError",
    "OrderStatus",
    "validate_order_transition",
]
