"""Application services for the storefront resources."""

from storefront.application.announcement_service import AnnouncementService
from storefront.application.banner_service import BannerService
from storefront.application.brand_service import BrandService
from storefront.application.cart_service import CartService, SaveCartResult
from storefront.application.category_service import CategoryService
from storefront.application.contact_service import ContactService
from storefront.application.order_service import OrderService, generate_order_id
from storefront.application.review_service import ReviewService

__all__ = [
    "AnnouncementService",
    "BannerService",
    "BrandService",
    "CartService",
    "CategoryService",
    "ContactService",
    "OrderService",
    "ReviewService",
    "SaveCartResult",
    "generate_order_id",
]
