"""Contact form API endpoints.

Provides the public contact form submission and the admin inbox.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, status

from storefront.api.schemas import (
    ContactCreateRequest,
    ContactListResponse,
    ContactResponse,
    ContactStatsResponse,
    ContactUpdateRequest,
    DeleteResponse,
    ErrorResponse,
)
from storefront.api.serializers import serialize_document
from storefront.application.contact_service import (
    ContactFilter,
    ContactPriority,
    ContactService,
    ContactStatus,
)
from storefront.catalog.service import PaginationParams
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import MongoDatabase, get_database

router = APIRouter(prefix="/contacts", tags=["Contacts"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    database: Annotated[MongoDatabase, Depends(get_database)],
) -> ContactService:
    """Get contact service bound to the request's database."""
    return ContactService(database)


# ============================================================================
# Converters
# ============================================================================


def contact_to_response(contact: dict[str, Any]) -> ContactResponse:
    """Convert a contact document to response schema."""
    return ContactResponse.model_validate(serialize_document(contact))


def client_ip(request: Request) -> str | None:
    """Client address, honouring X-Forwarded-For from a reverse proxy."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit contact form",
)
def create_contact(
    body: ContactCreateRequest,
    request: Request,
    service: Annotated[ContactService, Depends(get_service)],
) -> ContactResponse:
    """Store a contact form submission.

    Messages that mention urgency are flagged as high priority.
    """
    contact = service.create_contact(
        body.model_dump(),
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    return contact_to_response(contact)


@router.get("", response_model=ContactListResponse, summary="List contact messages")
def list_contacts(
    service: Annotated[ContactService, Depends(get_service)],
    status_filter: Annotated[ContactStatus | None, Query(alias="status")] = None,
    priority: ContactPriority | None = None,
    is_read: bool | None = None,
    search: Annotated[str | None, Query(description="Search name, email, subject, message")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=settings.max_page_size)] = settings.default_page_size,
    sort_by: str = "created_at",
    sort_order: Annotated[str, Query(pattern="^(asc|desc)$")] = "desc",
) -> ContactListResponse:
    """List contact messages with filters and pagination."""
    result = service.list_contacts(
        ContactFilter(
            status=status_filter.value if status_filter else None,
            priority=priority.value if priority else None,
            is_read=is_read,
            search=search,
        ),
        PaginationParams(
            page=page,
            page_size=page_size,
            sort_by=sort_by,
            sort_order=sort_order,
        ),
    )
    return ContactListResponse(
        items=[contact_to_response(c) for c in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        has_next=result.has_next,
        has_prev=result.has_prev,
    )


@router.get("/stats", response_model=ContactStatsResponse, summary="Contact inbox stats")
def contact_stats(
    service: Annotated[ContactService, Depends(get_service)],
) -> ContactStatsResponse:
    return ContactStatsResponse(**service.stats())


@router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get contact message",
)
def get_contact(
    contact_id: str,
    service: Annotated[ContactService, Depends(get_service)],
) -> ContactResponse:
    """Get a contact message and mark it as read."""
    return contact_to_response(service.get_contact(contact_id))


@router.patch(
    "/{contact_id}",
    response_model=ContactResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update contact message",
)
def update_contact(
    contact_id: str,
    body: ContactUpdateRequest,
    service: Annotated[ContactService, Depends(get_service)],
) -> ContactResponse:
    contact = service.update_contact(contact_id, body.model_dump(exclude_unset=True))
    return contact_to_response(contact)


@router.delete(
    "/{contact_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete contact message",
)
def delete_contact(
    contact_id: str,
    service: Annotated[ContactService, Depends(get_service)],
) -> DeleteResponse:
    contact = service.delete_contact(contact_id)
    return DeleteResponse(id=str(contact["_id"]), message="Contact message deleted")
