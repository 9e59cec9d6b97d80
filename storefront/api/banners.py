"""Homepage banner API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from storefront.api.schemas import (
    BannerCreateRequest,
    BannerResponse,
    BannerUpdateRequest,
    DeleteResponse,
    ErrorResponse,
)
from storefront.api.serializers import serialize_document
from storefront.application.banner_service import BannerService
from storefront.infrastructure.database import MongoDatabase, get_database

router = APIRouter(prefix="/banners", tags=["Banners"])


def get_service(
    database: Annotated[MongoDatabase, Depends(get_database)],
) -> BannerService:
    return BannerService(database)


def banner_to_response(banner: dict[str, Any]) -> BannerResponse:
    """Convert a banner document to response schema."""
    return BannerResponse.model_validate(serialize_document(banner))


@router.get("", response_model=list[BannerResponse], summary="List banners")
def list_banners(
    service: Annotated[BannerService, Depends(get_service)],
) -> list[BannerResponse]:
    return [banner_to_response(b) for b in service.list_banners()]


@router.get("/active", response_model=list[BannerResponse], summary="List active banners")
def list_active_banners(
    service: Annotated[BannerService, Depends(get_service)],
) -> list[BannerResponse]:
    """Banners shown on the homepage, in display order."""
    return [banner_to_response(b) for b in service.list_active()]


@router.post(
    "",
    response_model=BannerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create banner",
)
def create_banner(
    request: BannerCreateRequest,
    service: Annotated[BannerService, Depends(get_service)],
) -> BannerResponse:
    return banner_to_response(service.create_banner(request.model_dump()))


@router.get(
    "/{banner_id}",
    response_model=BannerResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get banner",
)
def get_banner(
    banner_id: str,
    service: Annotated[BannerService, Depends(get_service)],
) -> BannerResponse:
    return banner_to_response(service.get_banner(banner_id))


@router.patch(
    "/{banner_id}",
    response_model=BannerResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update banner",
)
def update_banner(
    banner_id: str,
    request: BannerUpdateRequest,
    service: Annotated[BannerService, Depends(get_service)],
) -> BannerResponse:
    return banner_to_response(
        service.update_banner(banner_id, request.model_dump(exclude_unset=True))
    )


@router.delete(
    "/{banner_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete banner",
)
def delete_banner(
    banner_id: str,
    service: Annotated[BannerService, Depends(get_service)],
) -> DeleteResponse:
    banner = service.delete_banner(banner_id)
    return DeleteResponse(id=str(banner["_id"]), message="Banner deleted")
