"""Category API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from storefront.api.schemas import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    DeleteResponse,
    ErrorResponse,
)
from storefront.api.serializers import serialize_document
from storefront.application.category_service import CategoryService
from storefront.infrastructure.database import MongoDatabase, get_database

router = APIRouter(prefix="/categories", tags=["Categories"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    database: Annotated[MongoDatabase, Depends(get_database)],
) -> CategoryService:
    """Get category service bound to the request's database."""
    return CategoryService(database)


# ============================================================================
# Converters
# ============================================================================


def category_to_response(category: dict[str, Any]) -> CategoryResponse:
    """Convert a category document to response schema."""
    return CategoryResponse.model_validate(serialize_document(category))


# ============================================================================
# Endpoints
# ============================================================================


@router.get("", response_model=list[CategoryResponse], summary="List shown categories")
def list_shown_categories(
    service: Annotated[CategoryService, Depends(get_service)],
) -> list[CategoryResponse]:
    """Categories visible in the storefront navigation."""
    return [category_to_response(c) for c in service.list_shown()]


@router.get("/all", response_model=list[CategoryResponse], summary="List all categories")
def list_all_categories(
    service: Annotated[CategoryService, Depends(get_service)],
) -> list[CategoryResponse]:
    return [category_to_response(c) for c in service.list_all()]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Create category",
)
def create_category(
    request: CategoryCreateRequest,
    service: Annotated[CategoryService, Depends(get_service)],
) -> CategoryResponse:
    return category_to_response(service.create_category(request.model_dump()))


@router.post(
    "/bulk",
    response_model=list[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Replace all categories",
)
def replace_categories(
    request: list[CategoryCreateRequest],
    service: Annotated[CategoryService, Depends(get_service)],
) -> list[CategoryResponse]:
    """Replace every category with the submitted list.

    Used to seed a fresh storefront.
    """
    categories = service.replace_all([item.model_dump() for item in request])
    return [category_to_response(c) for c in categories]


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get category",
)
def get_category(
    category_id: str,
    service: Annotated[CategoryService, Depends(get_service)],
) -> CategoryResponse:
    return category_to_response(service.get_category(category_id))


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update category",
)
def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    service: Annotated[CategoryService, Depends(get_service)],
) -> CategoryResponse:
    """Update a category.

    Renaming the category label also renames it on the category's products.
    """
    category = service.update_category(category_id, request.model_dump(exclude_unset=True))
    return category_to_response(category)


@router.delete(
    "/{category_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete category",
)
def delete_category(
    category_id: str,
    service: Annotated[CategoryService, Depends(get_service)],
) -> DeleteResponse:
    category = service.delete_category(category_id)
    return DeleteResponse(id=str(category["_id"]), message="Category deleted")
