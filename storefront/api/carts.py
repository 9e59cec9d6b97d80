"""Guest cart API endpoints.

Carts are addressed by the shopper's email address.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

from storefront.api.schemas import (
    CartItemsRequest,
    CartResponse,
    CartSaveRequest,
    ErrorResponse,
)
from storefront.api.serializers import serialize_document
from storefront.application.cart_service import CartService
from storefront.infrastructure.database import MongoDatabase, get_database

router = APIRouter(prefix="/carts", tags=["Carts"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    database: Annotated[MongoDatabase, Depends(get_database)],
) -> CartService:
    """Get cart service bound to the request's database."""
    return CartService(database)


# ============================================================================
# Converters
# ============================================================================


def cart_to_response(cart: dict[str, Any]) -> CartResponse:
    """Convert a cart document to response schema."""
    return CartResponse.model_validate(serialize_document(cart))


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=CartResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": CartResponse, "description": "Existing cart updated"},
        400: {"model": ErrorResponse},
    },
    summary="Save guest cart",
)
def save_cart(
    request: CartSaveRequest,
    response: Response,
    service: Annotated[CartService, Depends(get_service)],
) -> CartResponse:
    """Save a guest cart.

    Replaces the items of the shopper's active cart when there is one
    (200), otherwise creates a new cart (201).
    """
    result = service.save_cart(
        request.email,
        [item.model_dump() for item in request.items],
    )
    if not result.created:
        response.status_code = status.HTTP_200_OK
    return cart_to_response(result.cart)


@router.get(
    "/{email}",
    response_model=CartResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get guest cart",
)
def get_cart(
    email: str,
    service: Annotated[CartService, Depends(get_service)],
) -> CartResponse:
    return cart_to_response(service.get_cart(email))


@router.put("/{email}", response_model=CartResponse, summary="Replace cart items")
def update_cart_items(
    email: str,
    request: CartItemsRequest,
    service: Annotated[CartService, Depends(get_service)],
) -> CartResponse:
    """Replace the items of a cart, creating the cart if needed."""
    cart = service.update_items(email, [item.model_dump() for item in request.items])
    return cart_to_response(cart)


@router.delete(
    "/{email}",
    response_model=CartResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Deactivate guest cart",
)
def delete_cart(
    email: str,
    service: Annotated[CartService, Depends(get_service)],
) -> CartResponse:
    return cart_to_response(service.delete_cart(email))
