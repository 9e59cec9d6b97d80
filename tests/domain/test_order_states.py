"""Tests for the order state machine."""

import pytest

from storefront.domain import OrderStatus, validate_order_transition
from storefront.domain.exceptions import InvalidStateTransitionError


class TestOrderStatus:
    """Tests for OrderStatus state machine."""

    def test_pending_can_start_processing(self) -> None:
        """PENDING can transition to PROCESSING."""
        assert OrderStatus.PENDING.can_transition_to(OrderStatus.PROCESSING)

    def test_pending_cannot_skip_to_shipped(self) -> None:
        """PENDING cannot transition directly to SHIPPED."""
        assert not OrderStatus.PENDING.can_transition_to(OrderStatus.SHIPPED)

    def test_processing_can_ship(self) -> None:
        assert OrderStatus.PROCESSING.can_transition_to(OrderStatus.SHIPPED)

    def test_shipped_can_be_delivered(self) -> None:
        assert OrderStatus.SHIPPED.can_transition_to(OrderStatus.DELIVERED)

    @pytest.mark.parametrize(
        "status",
        [OrderStatus.PENDING, OrderStatus.PROCESSING, OrderStatus.SHIPPED],
    )
    def test_open_orders_can_be_cancelled(self, status: OrderStatus) -> None:
        """Any non-terminal order can be cancelled."""
        assert status.can_transition_to(OrderStatus.CANCEL)

    def test_cannot_go_backwards(self) -> None:
        assert not OrderStatus.SHIPPED.can_transition_to(OrderStatus.PROCESSING)

    @pytest.mark.parametrize("status", [OrderStatus.DELIVERED, OrderStatus.CANCEL])
    def test_terminal_states(self, status: OrderStatus) -> None:
        """DELIVERED and CANCEL are terminal."""
        assert status.is_terminal()
        assert status.allowed_transitions() == []

    def test_allowed_transitions_in_lifecycle_order(self) -> None:
        assert OrderStatus.PENDING.allowed_transitions() == [
            OrderStatus.PROCESSING,
            OrderStatus.CANCEL,
        ]


class TestValidateOrderTransition:
    """Tests for validate_order_transition."""

    def test_valid_transition(self) -> None:
        validate_order_transition("order-1", OrderStatus.PENDING, OrderStatus.PROCESSING)

    def test_invalid_transition_raises(self) -> None:
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            validate_order_transition("order-1", OrderStatus.DELIVERED, OrderStatus.PENDING)

        error = exc_info.value
        assert error.status_code == 409
        assert error.details["current_state"] == "delivered"
        assert error.details["target_state"] == "pending"
        assert error.details["allowed_transitions"] == []
