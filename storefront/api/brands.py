"""Brand API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from storefront.api.schemas import (
    BrandCreateRequest,
    BrandResponse,
    BrandUpdateRequest,
    DeleteResponse,
    ErrorResponse,
)
from storefront.api.serializers import serialize_document
from storefront.application.brand_service import BrandService
from storefront.infrastructure.database import MongoDatabase, get_database

router = APIRouter(prefix="/brands", tags=["Brands"])


def get_service(
    database: Annotated[MongoDatabase, Depends(get_database)],
) -> BrandService:
    """Get brand service bound to the request's database."""
    return BrandService(database)


def brand_to_response(brand: dict[str, Any]) -> BrandResponse:
    """Convert a brand document to response schema."""
    return BrandResponse.model_validate(serialize_document(brand))


@router.get("", response_model=list[BrandResponse], summary="List active brands")
def list_active_brands(
    service: Annotated[BrandService, Depends(get_service)],
) -> list[BrandResponse]:
    return [brand_to_response(b) for b in service.list_active()]


@router.post(
    "",
    response_model=BrandResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Create brand",
)
def create_brand(
    request: BrandCreateRequest,
    service: Annotated[BrandService, Depends(get_service)],
) -> BrandResponse:
    return brand_to_response(service.create_brand(request.model_dump()))


@router.post(
    "/bulk",
    response_model=list[BrandResponse],
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Replace all brands",
)
def replace_brands(
    request: list[BrandCreateRequest],
    service: Annotated[BrandService, Depends(get_service)],
) -> list[BrandResponse]:
    brands = service.replace_all([item.model_dump() for item in request])
    return [brand_to_response(b) for b in brands]


@router.get(
    "/{brand_id}",
    response_model=BrandResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get brand",
)
def get_brand(
    brand_id: str,
    service: Annotated[BrandService, Depends(get_service)],
) -> BrandResponse:
    return brand_to_response(service.get_brand(brand_id))


@router.patch(
    "/{brand_id}",
    response_model=BrandResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update brand",
)
def update_brand(
    brand_id: str,
    request: BrandUpdateRequest,
    service: Annotated[BrandService, Depends(get_service)],
) -> BrandResponse:
    return brand_to_response(
        service.update_brand(brand_id, request.model_dump(exclude_unset=True))
    )


@router.delete(
    "/{brand_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete brand",
)
def delete_brand(
    brand_id: str,
    service: Annotated[BrandService, Depends(get_service)],
) -> DeleteResponse:
    brand = service.delete_brand(brand_id)
    return DeleteResponse(id=str(brand["_id"]), message="Brand deleted")
