"""Domain exceptions.

All domain-level errors that represent business rule violations.
Services raise these; the API layer renders them with the status code
and machine-readable error code each class declares.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    error_code = "DOMAIN_ERROR"
    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Lookup Errors
# ============================================================================


class NotFoundError(DomainError):
    """Raised when a record does not exist."""

    error_code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity_type: str, entity_id: str) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of record (e.g., "Product", "Banner").
            entity_id: Identifier that was looked up.
        """
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )


class InvalidIdentifierError(DomainError):
    """Raised when an identifier is not a valid ObjectId."""

    error_code = "INVALID_ID"
    status_code = 400

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid id: {value}", details={"value": value})


# ============================================================================
# Write Errors
# ============================================================================


class ValidationError(DomainError):
    """Raised when input is structurally valid but breaks a business rule."""

    error_code = "VALIDATION_ERROR"
    status_code = 400


class DuplicateError(DomainError):
    """Raised when a unique field already exists."""

    error_code = "DUPLICATE"
    status_code = 409

    def __init__(self, entity_type: str, field: str, value: Any) -> None:
        """Initialize duplicate error.

        Args:
            entity_type: Type of record.
            field: Name of the unique field.
            value: Conflicting value.
        """
        super().__init__(
            f"{entity_type} with {field} '{value}' already exists",
            details={"entity_type": entity_type, "field": field, "value": value},
        )


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when an invalid state transition is attempted.

    This error indicates that the requested operation cannot be performed
    in the current state of the entity.
    """

    error_code = "INVALID_STATE_TRANSITION"
    status_code = 409

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity_type: Type of entity (e.g., "Order").
            entity_id: ID of the entity.
            current_state: Current state of the entity.
            target_state: Attempted target state.
            allowed_transitions: List of allowed target states from current state.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot transition {entity_type}({entity_id}) "
            f"from '{current_state}' to '{target_state}'. "
            f"Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )


# ============================================================================
# Review Errors
# ============================================================================


class ReviewNotAllowedError(DomainError):
    """Raised when a user may not review a product."""

    error_code = "REVIEW_NOT_ALLOWED"
    status_code = 400

    def __init__(self, user_id: str, product_id: str, reason: str) -> None:
        """Initialize review not allowed error.

        Args:
            user_id: Reviewing user.
            product_id: Reviewed product.
            reason: Explanation shown to the client.
        """
        super().__init__(
            reason,
            details={"user_id": user_id, "product_id": product_id},
        )
