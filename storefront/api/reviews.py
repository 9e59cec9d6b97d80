"""Review API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from storefront.api.schemas import (
    ErrorResponse,
    ReviewCreateRequest,
    ReviewResponse,
    ReviewsDeletedResponse,
)
from storefront.api.serializers import serialize_document
from storefront.application.review_service import ReviewService
from storefront.infrastructure.database import MongoDatabase, get_database

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def get_service(
    database: Annotated[MongoDatabase, Depends(get_database)],
) -> ReviewService:
    """Get review service bound to the request's database."""
    return ReviewService(database)


def review_to_response(review: dict[str, Any]) -> ReviewResponse:
    """Convert a review document to response schema."""
    return ReviewResponse.model_validate(serialize_document(review))


@router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Add review",
)
def add_review(
    request: ReviewCreateRequest,
    service: Annotated[ReviewService, Depends(get_service)],
) -> ReviewResponse:
    """Review a product.

    The user must have ordered the product and may review it only once.
    """
    return review_to_response(service.add_review(request.model_dump()))


@router.get(
    "/product/{product_id}",
    response_model=list[ReviewResponse],
    responses={400: {"model": ErrorResponse}},
    summary="List product reviews",
)
def list_product_reviews(
    product_id: str,
    service: Annotated[ReviewService, Depends(get_service)],
) -> list[ReviewResponse]:
    return [review_to_response(r) for r in service.list_for_product(product_id)]


@router.delete(
    "/product/{product_id}",
    response_model=ReviewsDeletedResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product reviews",
)
def delete_product_reviews(
    product_id: str,
    service: Annotated[ReviewService, Depends(get_service)],
) -> ReviewsDeletedResponse:
    deleted = service.delete_for_product(product_id)
    return ReviewsDeletedResponse(product_id=product_id, deleted_count=deleted)
