"""Order API endpoints.

Provides endpoints for placing orders and moving them through the
fulfilment lifecycle.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from storefront.api.schemas import (
    ErrorResponse,
    OrderCreateRequest,
    OrderResponse,
    OrderStatusRequest,
)
from storefront.api.serializers import serialize_document
from storefront.application.order_service import OrderService
from storefront.domain.state_machines import OrderStatus
from storefront.infrastructure.database import MongoDatabase, get_database

router = APIRouter(prefix="/orders", tags=["Orders"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    database: Annotated[MongoDatabase, Depends(get_database)],
) -> OrderService:
    """Get order service bound to the request's database."""
    return OrderService(database)


# ============================================================================
# Converters
# ============================================================================


def order_to_response(order: dict[str, Any]) -> OrderResponse:
    """Convert an order document to response schema."""
    return OrderResponse.model_validate(serialize_document(order))


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Place order",
    description="Place an order; ordered quantities are taken out of stock.",
)
def create_order(
    request: OrderCreateRequest,
    service: Annotated[OrderService, Depends(get_service)],
) -> OrderResponse:
    """Place an order.

    Args:
        request: Order details.
        service: Order service.

    Returns:
        The stored order with its order ID and invoice number.
    """
    return order_to_response(service.create_order(request.model_dump()))


@router.get("", response_model=list[OrderResponse], summary="List orders")
def list_orders(
    service: Annotated[OrderService, Depends(get_service)],
) -> list[OrderResponse]:
    return [order_to_response(o) for o in service.list_orders()]


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Get order",
)
def get_order(
    order_id: str,
    service: Annotated[OrderService, Depends(get_service)],
) -> OrderResponse:
    return order_to_response(service.get_order(order_id))


@router.patch(
    "/{order_id}/status",
    response_model=OrderResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update order status",
)
def update_order_status(
    order_id: str,
    request: OrderStatusRequest,
    service: Annotated[OrderService, Depends(get_service)],
) -> OrderResponse:
    """Move an order to a new status.

    Args:
        order_id: Order identifier.
        request: Target status.
        service: Order service.

    Returns:
        Updated order.

    Raises:
        InvalidStateTransitionError: If the order cannot move to the
            requested status (rendered as 409).
    """
    order = service.update_status(order_id, OrderStatus(request.status))
    return order_to_response(order)
