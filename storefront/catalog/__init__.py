"""Product Catalog.

Products, categories and brands, plus the slug matcher that turns
storefront URL slugs into label filters.
"""

from storefront.catalog.models import BrandStatus, CategoryStatus, ProductStatus
from storefront.catalog.repository import (
    BrandRepository,
    CategoryRepository,
    ProductRepository,
)
from storefront.catalog.service import (
    CatalogService,
    PaginatedResult,
    PaginationParams,
    ProductFilter,
)
from storefront.catalog.slug_matcher import (
    build_category_pattern,
    build_subcategory_pattern,
)

__all__ = [
    # Slug matching
    "build_category_pattern",
    "build_subcategory_pattern",
    # Models
    "BrandStatus",
    "CategoryStatus",
    "ProductStatus",
    # Repositories
    "BrandRepository",
    "CategoryRepository",
    "ProductRepository",
    # Service
    "CatalogService",
    "PaginatedResult",
    "PaginationParams",
    "ProductFilter",
]
