"""Announcement bar API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from storefront.api.schemas import (
    AnnouncementCreateRequest,
    AnnouncementResponse,
    AnnouncementUpdateRequest,
    DeleteResponse,
    ErrorResponse,
)
from storefront.api.serializers import serialize_document
from storefront.application.announcement_service import AnnouncementService
from storefront.infrastructure.database import MongoDatabase, get_database

router = APIRouter(prefix="/announcements", tags=["Announcements"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    database: Annotated[MongoDatabase, Depends(get_database)],
) -> AnnouncementService:
    """Get announcement service bound to the request's database."""
    return AnnouncementService(database)


# ============================================================================
# Converters
# ============================================================================


def announcement_to_response(announcement: dict[str, Any]) -> AnnouncementResponse:
    """Convert an announcement document to response schema."""
    return AnnouncementResponse.model_validate(serialize_document(announcement))


# ============================================================================
# Endpoints
# ============================================================================


@router.get("", response_model=list[AnnouncementResponse], summary="List announcements")
def list_announcements(
    service: Annotated[AnnouncementService, Depends(get_service)],
) -> list[AnnouncementResponse]:
    return [announcement_to_response(a) for a in service.list_announcements()]


@router.get(
    "/active",
    response_model=list[AnnouncementResponse],
    summary="List active announcements",
    description="Announcements that are switched on and inside their date window.",
)
def list_active_announcements(
    service: Annotated[AnnouncementService, Depends(get_service)],
) -> list[AnnouncementResponse]:
    return [announcement_to_response(a) for a in service.list_active()]


@router.post(
    "",
    response_model=AnnouncementResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create announcement",
)
def create_announcement(
    request: AnnouncementCreateRequest,
    service: Annotated[AnnouncementService, Depends(get_service)],
) -> AnnouncementResponse:
    return announcement_to_response(service.create_announcement(request.model_dump()))


@router.get(
    "/{announcement_id}",
    response_model=AnnouncementResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get announcement",
)
def get_announcement(
    announcement_id: str,
    service: Annotated[AnnouncementService, Depends(get_service)],
) -> AnnouncementResponse:
    return announcement_to_response(service.get_announcement(announcement_id))


@router.patch(
    "/{announcement_id}",
    response_model=AnnouncementResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update announcement",
)
def update_announcement(
    announcement_id: str,
    request: AnnouncementUpdateRequest,
    service: Annotated[AnnouncementService, Depends(get_service)],
) -> AnnouncementResponse:
    announcement = service.update_announcement(
        announcement_id, request.model_dump(exclude_unset=True)
    )
    return announcement_to_response(announcement)


@router.patch(
    "/{announcement_id}/toggle",
    response_model=AnnouncementResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Toggle announcement",
)
def toggle_announcement(
    announcement_id: str,
    service: Annotated[AnnouncementService, Depends(get_service)],
) -> AnnouncementResponse:
    """Switch an announcement on or off."""
    return announcement_to_response(service.toggle_status(announcement_id))


@router.delete(
    "/{announcement_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete announcement",
)
def delete_announcement(
    announcement_id: str,
    service: Annotated[AnnouncementService, Depends(get_service)],
) -> DeleteResponse:
    announcement = service.delete_announcement(announcement_id)
    return DeleteResponse(id=str(announcement["_id"]), message="Announcement deleted")
