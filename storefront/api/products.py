"""Product API endpoints.

Provides endpoints for browsing the catalog (filtered listings,
category pages, offers, top rated) and for managing products.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from storefront.api.schemas import (
    CountResponse,
    DeleteResponse,
    ErrorResponse,
    ProductCreateRequest,
    ProductListResponse,
    ProductResponse,
    ProductUpdateRequest,
)
from storefront.api.serializers import serialize_document
from storefront.catalog.models import ProductStatus
from storefront.catalog.service import (
    CatalogService,
    PaginatedResult,
    PaginationParams,
    ProductFilter,
)
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import MongoDatabase, get_database

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    database: Annotated[MongoDatabase, Depends(get_database)],
) -> CatalogService:
    """Get catalog service bound to the request's database."""
    return CatalogService(database)


def get_filters(
    category: Annotated[str | None, Query(description="Category slug")] = None,
    subcategory: Annotated[str | None, Query(description="Subcategory slug")] = None,
    min_price: Annotated[float | None, Query(ge=0, description="Minimum price")] = None,
    max_price: Annotated[float | None, Query(ge=0, description="Maximum price")] = None,
    status: Annotated[ProductStatus | None, Query(description="Product status")] = None,
    in_stock: Annotated[bool | None, Query(description="Only products in stock")] = None,
    featured: Annotated[bool | None, Query(description="Filter by featured flag")] = None,
    search: Annotated[str | None, Query(description="Search title, SKU and category")] = None,
) -> ProductFilter:
    """Collect product filter query parameters."""
    return ProductFilter(
        category=category,
        subcategory=subcategory,
        min_price=min_price,
        max_price=max_price,
        status=status.value if status else None,
        in_stock=in_stock,
        featured=featured,
        search=search,
    )


def get_pagination(
    page: Annotated[int, Query(ge=1, description="Page number (1-based)")] = 1,
    page_size: Annotated[
        int,
        Query(ge=1, le=settings.max_page_size, description="Items per page"),
    ] = settings.default_page_size,
    sort_by: Annotated[str, Query(description="Sort field")] = "created_at",
    sort_order: Annotated[str, Query(pattern="^(asc|desc)$", description="Sort order")] = "desc",
) -> PaginationParams:
    """Collect pagination query parameters."""
    return PaginationParams(
        page=page,
        page_size=page_size,
        sort_by=sort_by,
        sort_order=sort_order,
    )


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: dict[str, Any]) -> ProductResponse:
    """Convert a product document to response schema."""
    return ProductResponse.model_validate(serialize_document(product))


def products_to_response(products: list[dict[str, Any]]) -> list[ProductResponse]:
    return [product_to_response(p) for p in products]


def page_to_response(result: PaginatedResult[dict[str, Any]]) -> ProductListResponse:
    """Convert a paginated product result to response schema."""
    return ProductListResponse(
        items=products_to_response(result.items),
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        has_next=result.has_next,
        has_prev=result.has_prev,
    )


# ============================================================================
# Listings
# ============================================================================


@router.get(
    "",
    response_model=ProductListResponse,
    summary="List products",
    description="List products filtered by category/subcategory slug, price, status and text.",
)
def list_products(
    service: Annotated[CatalogService, Depends(get_service)],
    filters: Annotated[ProductFilter, Depends(get_filters)],
    pagination: Annotated[PaginationParams, Depends(get_pagination)],
) -> ProductListResponse:
    """List products with filters and pagination.

    Category and subcategory slugs are matched against the stored labels,
    so ``subcategory=1-14-rod-end-parts`` finds products filed under
    ``1 1/4" Rod End Parts``.
    """
    return page_to_response(service.list_products(filters, pagination))


@router.get("/count", response_model=CountResponse, summary="Count products")
def count_products(
    service: Annotated[CatalogService, Depends(get_service)],
    filters: Annotated[ProductFilter, Depends(get_filters)],
) -> CountResponse:
    """Count products matching the same filters as the listing."""
    return CountResponse(count=service.count_products(filters))


@router.get(
    "/by-category",
    response_model=list[ProductResponse],
    responses={400: {"model": ErrorResponse}},
    summary="List products of a category",
)
def list_by_category(
    service: Annotated[CatalogService, Depends(get_service)],
    category: Annotated[str | None, Query(description="Category slug")] = None,
    subcategory: Annotated[str | None, Query(description="Subcategory slug")] = None,
) -> list[ProductResponse]:
    """List every product of a category page, newest first."""
    return products_to_response(service.list_by_category(category, subcategory))


@router.get("/stock-out", response_model=list[ProductResponse], summary="Out-of-stock products")
def stock_out_products(
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[ProductResponse]:
    return products_to_response(service.stock_out_products())


@router.get("/offers", response_model=list[ProductResponse], summary="Products on offer")
def offer_products(
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[ProductResponse]:
    """Products whose offer has not ended yet."""
    return products_to_response(service.offer_products())


@router.get("/top-rated", response_model=list[ProductResponse], summary="Top rated products")
def top_rated_products(
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[ProductResponse]:
    """Reviewed products ordered by average rating."""
    return products_to_response(service.top_rated_products())


# ============================================================================
# Single product
# ============================================================================


@router.get(
    "/{id_or_slug}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
def get_product(
    id_or_slug: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductResponse:
    """Get a product by ID or slug."""
    return product_to_response(service.get_product(id_or_slug))


@router.get(
    "/{product_id}/related",
    response_model=list[ProductResponse],
    responses={404: {"model": ErrorResponse}},
    summary="Related products",
)
def related_products(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[ProductResponse]:
    """Other products of the same category."""
    return products_to_response(service.related_products(product_id))


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Create product",
)
def create_product(
    request: ProductCreateRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductResponse:
    """Create a product and add it to its category."""
    return product_to_response(service.create_product(request.model_dump()))


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update product",
)
def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductResponse:
    """Update the provided fields of a product."""
    return product_to_response(
        service.update_product(product_id, request.model_dump(exclude_unset=True))
    )


@router.delete(
    "/{product_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
def delete_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> DeleteResponse:
    product = service.delete_product(product_id)
    return DeleteResponse(id=str(product["_id"]), message="Product deleted")
