"""State machines for domain records.

Deterministic state machine for order fulfilment. Status updates coming
from the admin dashboard are validated against it before they are
persisted.
"""

from enum import Enum

from storefront.domain.exceptions import InvalidStateTransitionError


# ============================================================================
# Order State Machine
# ============================================================================


class OrderStatus(str, Enum):
    """Order lifecycle states.

    State diagram:
        PENDING ──► PROCESSING ──► SHIPPED ──► DELIVERED
           │            │             │
           └────────────┴─────────────┴──────► CANCEL
    """

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCEL = "cancel"

    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: The target state.

        Returns:
            True if transition is allowed.
        """
        return target in _ORDER_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["OrderStatus"]:
        """Get list of valid target states, in lifecycle order."""
        allowed = _ORDER_TRANSITIONS.get(self, set())
        return [status for status in OrderStatus if status in allowed]

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return len(_ORDER_TRANSITIONS.get(self, set())) == 0


_ORDER_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCEL},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCEL},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCEL},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCEL: set(),
}


def validate_order_transition(
    order_id: str,
    current: OrderStatus,
    target: OrderStatus,
) -> None:
    """Validate an order status transition.

    Args:
        order_id: ID of the order.
        current: Current status.
        target: Requested status.

    Raises:
        InvalidStateTransitionError: If the transition is not allowed.
    """
    if not current.can_transition_to(target):
        raise InvalidStateTransitionError(
            entity_type="Order",
            entity_id=order_id,
            current_state=current.value,
            target_state=target.value,
            allowed_transitions=[s.value for s in current.allowed_transitions()],
        )
