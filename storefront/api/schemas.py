"""API schemas for the storefront API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from storefront.application.announcement_service import AnnouncementType
from storefront.application.banner_service import BannerStatus
from storefront.application.contact_service import ContactPriority, ContactStatus
from storefront.catalog.models import BrandStatus, CategoryStatus, ProductStatus
from storefront.domain.state_machines import OrderStatus


class RequestModel(BaseModel):
    """Base for request bodies; enums are dumped as their values."""

    model_config = ConfigDict(use_enum_values=True)


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | list[Any] = Field(
        default_factory=dict, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginatedResponse(BaseModel):
    """Base paginated response."""

    total: int = Field(..., description="Total number of items")
    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Total number of pages")
    has_next: bool = Field(..., description="Whether there is a next page")
    has_prev: bool = Field(..., description="Whether there is a previous page")


class DeleteResponse(BaseModel):
    """Response for a deleted record."""

    id: str = Field(..., description="Identifier of the deleted record")
    message: str = Field(..., description="Confirmation message")


class CountResponse(BaseModel):
    """Response carrying a single count."""

    count: int = Field(..., description="Number of matching records")


class DocumentResponse(BaseModel):
    """Base for stored documents."""

    id: str = Field(..., description="Record identifier")
    created_at: datetime | None = Field(default=None, description="Creation time")
    updated_at: datetime | None = Field(default=None, description="Last update time")


# ============================================================================
# Product Schemas
# ============================================================================


class ShippingSchema(BaseModel):
    """Shipping cost of a product."""

    price: float = Field(default=0, ge=0, description="Shipping price")
    description: str = Field(default="", description="Shipping note")


class ProductCategorySchema(BaseModel):
    """Reference to the category a product is filed under."""

    id: str = Field(..., description="Category identifier")
    name: str = Field(..., description="Category label")


class KeyValueSchema(BaseModel):
    """A free-form product attribute."""

    key: str
    value: str


class OfferDateSchema(BaseModel):
    """Time window of a product offer."""

    start_date: datetime | None = None
    end_date: datetime | None = None


class ProductOptionSchema(BaseModel):
    """A purchasable product option."""

    title: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)


class ProductCreateRequest(RequestModel):
    """Request to create a product."""

    sku: str | None = Field(default=None, description="Stock keeping unit")
    sku_arrangement_order_no: int | None = Field(
        default=None, description="Position of the SKU within its family"
    )
    title: str = Field(..., min_length=3, max_length=150, description="Product title")
    slug: str = Field(..., min_length=1, description="URL slug (unique)")
    img: str = Field(..., description="Main image URL")
    image_urls: list[str] = Field(default_factory=list, description="Gallery image URLs")
    parent: str = Field(..., min_length=1, description="Category label")
    children: str = Field(..., min_length=1, description="Subcategory label")
    price: float = Field(..., ge=0, description="Unit price")
    discount: float = Field(default=0, ge=0, description="Discount percentage")
    shipping: ShippingSchema = Field(default_factory=ShippingSchema)
    quantity: int = Field(..., ge=0, description="Units in stock")
    category: ProductCategorySchema
    status: ProductStatus = Field(default=ProductStatus.IN_STOCK)
    description: str = Field(..., description="Product description")
    video_id: str | None = Field(default=None, description="Product video ID")
    additional_information: list[KeyValueSchema] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    offer_date: OfferDateSchema | None = None
    featured: bool = False
    options: list[ProductOptionSchema] = Field(default_factory=list)


class ProductUpdateRequest(RequestModel):
    """Request to update a product. Only provided fields change."""

    sku: str | None = None
    sku_arrangement_order_no: int | None = None
    title: str | None = Field(default=None, min_length=3, max_length=150)
    slug: str | None = Field(default=None, min_length=1)
    img: str | None = None
    image_urls: list[str] | None = None
    parent: str | None = Field(default=None, min_length=1)
    children: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0)
    discount: float | None = Field(default=None, ge=0)
    shipping: ShippingSchema | None = None
    quantity: int | None = Field(default=None, ge=0)
    category: ProductCategorySchema | None = None
    status: ProductStatus | None = None
    description: str | None = None
    video_id: str | None = None
    additional_information: list[KeyValueSchema] | None = None
    tags: list[str] | None = None
    offer_date: OfferDateSchema | None = None
    featured: bool | None = None
    options: list[ProductOptionSchema] | None = None


class ProductResponse(DocumentResponse):
    """Response for a product."""

    sku: str | None = None
    sku_arrangement_order_no: int | None = None
    title: str
    slug: str
    img: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    parent: str | None = None
    children: str | None = None
    price: float
    discount: float = 0
    shipping: ShippingSchema | None = None
    quantity: int = 0
    category: ProductCategorySchema | None = None
    status: str
    reviews: list[str] = Field(default_factory=list, description="Review identifiers")
    description: str | None = None
    video_id: str | None = None
    additional_information: list[KeyValueSchema] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    offer_date: OfferDateSchema | None = None
    featured: bool = False
    sell_count: int = 0
    options: list[ProductOptionSchema] = Field(default_factory=list)
    rating: float | None = Field(
        default=None, ge=0, le=5, description="Average review rating (top-rated listing)"
    )


class ProductListResponse(PaginatedResponse):
    """Paginated list of products."""

    items: list[ProductResponse] = Field(..., description="List of products")


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryCreateRequest(RequestModel):
    """Request to create a category."""

    img: str | None = Field(default=None, description="Category image URL")
    parent: str = Field(..., min_length=1, description="Category label (unique)")
    children: list[str] = Field(default_factory=list, description="Subcategory labels")
    description: str | None = None
    products: list[str] = Field(default_factory=list, description="Product identifiers")
    status: CategoryStatus = CategoryStatus.SHOW


class CategoryUpdateRequest(RequestModel):
    """Request to update a category."""

    img: str | None = None
    parent: str | None = Field(default=None, min_length=1)
    children: list[str] | None = None
    description: str | None = None
    status: CategoryStatus | None = None


class CategoryResponse(DocumentResponse):
    """Response for a category."""

    img: str | None = None
    parent: str
    children: list[str] = Field(default_factory=list)
    description: str | None = None
    products: list[str] = Field(default_factory=list)
    status: str


# ============================================================================
# Brand Schemas
# ============================================================================


class BrandCreateRequest(RequestModel):
    """Request to create a brand."""

    name: str = Field(..., min_length=1, description="Brand name (unique)")
    logo: str | None = None
    description: str | None = None
    email: EmailStr | None = None
    website: str | None = None
    location: str | None = None
    status: BrandStatus = BrandStatus.ACTIVE


class BrandUpdateRequest(RequestModel):
    """Request to update a brand."""

    name: str | None = Field(default=None, min_length=1)
    logo: str | None = None
    description: str | None = None
    email: EmailStr | None = None
    website: str | None = None
    location: str | None = None
    status: BrandStatus | None = None


class BrandResponse(DocumentResponse):
    """Response for a brand."""

    name: str
    logo: str | None = None
    description: str | None = None
    email: str | None = None
    website: str | None = None
    location: str | None = None
    status: str


# ============================================================================
# Cart Schemas
# ============================================================================


class CartItemSchema(BaseModel):
    """A line in a cart or order."""

    product_id: str = Field(..., description="Product identifier")
    title: str = Field(..., description="Product title")
    img: str | None = Field(default=None, description="Product image URL")
    price: float = Field(..., ge=0, description="Unit price")
    order_quantity: int = Field(..., ge=1, description="Ordered units")
    sku: str | None = None


class CartSaveRequest(RequestModel):
    """Request to save a guest cart."""

    email: EmailStr = Field(..., description="Shopper email")
    items: list[CartItemSchema] = Field(..., description="Cart lines")


class CartItemsRequest(RequestModel):
    """Request to replace the items of a cart."""

    items: list[CartItemSchema] = Field(..., description="Cart lines")


class CartResponse(DocumentResponse):
    """Response for a guest cart."""

    email: str
    items: list[CartItemSchema] = Field(default_factory=list)
    is_active: bool = True
    expires_at: datetime | None = None


# ============================================================================
# Order Schemas
# ============================================================================


class OrderCreateRequest(RequestModel):
    """Request to place an order."""

    user: str | None = Field(default=None, description="User identifier; omit for guests")
    cart: list[CartItemSchema] = Field(..., min_length=1, description="Ordered lines")
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    email: EmailStr
    contact: str = Field(..., min_length=1, description="Phone number")
    city: str = Field(..., min_length=1)
    state: str | None = None
    country: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    sub_total: float = Field(..., ge=0)
    shipping_cost: float = Field(..., ge=0)
    discount: float = Field(default=0, ge=0)
    total_amount: float = Field(..., ge=0)
    shipping_option: str | None = None
    payment_method: str = Field(..., min_length=1)
    order_note: str | None = None


class OrderStatusRequest(RequestModel):
    """Request to change the status of an order."""

    status: OrderStatus


class OrderResponse(DocumentResponse):
    """Response for an order."""

    order_id: str = Field(..., description="Human-readable order ID")
    invoice: int = Field(..., description="Sequential invoice number")
    user: str | None = None
    is_guest_order: bool
    cart: list[CartItemSchema]
    name: str
    address: str
    email: str
    contact: str
    city: str
    state: str | None = None
    country: str
    zip_code: str
    sub_total: float
    shipping_cost: float
    discount: float = 0
    total_amount: float
    shipping_option: str | None = None
    payment_method: str
    order_note: str | None = None
    status: str


# ============================================================================
# Review Schemas
# ============================================================================


class ReviewCreateRequest(RequestModel):
    """Request to review a product."""

    user_id: str = Field(..., min_length=1, description="Reviewing user")
    product_id: str = Field(..., description="Reviewed product")
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = None
    guest_email: EmailStr | None = None
    guest_name: str | None = None
    is_from_feedback_email: bool = False


class ReviewResponse(DocumentResponse):
    """Response for a review."""

    user_id: str
    product_id: str
    order_id: str | None = None
    rating: int
    comment: str | None = None
    guest_email: str | None = None
    guest_name: str | None = None
    is_from_feedback_email: bool = False


class ReviewsDeletedResponse(BaseModel):
    """Response after deleting the reviews of a product."""

    product_id: str
    deleted_count: int


# ============================================================================
# Banner Schemas
# ============================================================================


class CtaSchema(BaseModel):
    """Call-to-action button of a banner."""

    text: str = Field(..., max_length=50)
    link: str


class BannerCreateRequest(RequestModel):
    """Request to create a banner."""

    desktop_img: str
    mobile_img: str
    heading: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    small_sub_description: str | None = Field(default=None, max_length=200)
    cta: CtaSchema | None = None
    include_caption: bool = True
    status: BannerStatus = BannerStatus.ACTIVE
    order: int = Field(default=0, description="Display position")


class BannerUpdateRequest(RequestModel):
    """Request to update a banner."""

    desktop_img: str | None = None
    mobile_img: str | None = None
    heading: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    small_sub_description: str | None = Field(default=None, max_length=200)
    cta: CtaSchema | None = None
    include_caption: bool | None = None
    status: BannerStatus | None = None
    order: int | None = None


class BannerResponse(DocumentResponse):
    """Response for a banner."""

    desktop_img: str
    mobile_img: str
    heading: str
    description: str | None = None
    small_sub_description: str | None = None
    cta: CtaSchema | None = None
    include_caption: bool = True
    status: str
    order: int = 0


# ============================================================================
# Announcement Schemas
# ============================================================================


class AnnouncementCreateRequest(RequestModel):
    """Request to create an announcement."""

    title: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=500)
    link: str | None = None
    link_text: str = Field(default="Learn More", max_length=50)
    type: AnnouncementType = AnnouncementType.INFO
    background_color: str = "#1e40af"
    text_color: str = "#ffffff"
    priority: int = Field(default=0, ge=0)
    is_active: bool = True
    start_date: datetime | None = Field(default=None, description="Defaults to now")
    end_date: datetime | None = None
    display_order: int = 0
    show_close_button: bool = True


class AnnouncementUpdateRequest(RequestModel):
    """Request to update an announcement."""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    message: str | None = Field(default=None, min_length=1, max_length=500)
    link: str | None = None
    link_text: str | None = Field(default=None, max_length=50)
    type: AnnouncementType | None = None
    background_color: str | None = None
    text_color: str | None = None
    priority: int | None = Field(default=None, ge=0)
    is_active: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    display_order: int | None = None
    show_close_button: bool | None = None


class AnnouncementResponse(DocumentResponse):
    """Response for an announcement."""

    title: str
    message: str
    link: str | None = None
    link_text: str = "Learn More"
    type: str
    background_color: str
    text_color: str
    priority: int = 0
    is_active: bool
    start_date: datetime | None = None
    end_date: datetime | None = None
    display_order: int = 0
    show_close_button: bool = True


# ============================================================================
# Contact Schemas
# ============================================================================


class ContactCreateRequest(RequestModel):
    """Contact form submission."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(default=None, pattern=r"^\+?[1-9]\d{0,15}$")
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)

    @field_validator("name", "subject", "message")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ContactUpdateRequest(RequestModel):
    """Admin triage of a contact message."""

    status: ContactStatus | None = None
    priority: ContactPriority | None = None
    admin_notes: str | None = Field(default=None, max_length=1000)
    is_read: bool | None = None
    responded_by: str | None = None


class ContactResponse(DocumentResponse):
    """Response for a contact message."""

    name: str
    email: str
    phone: str | None = None
    subject: str
    message: str
    status: str
    priority: str
    admin_notes: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    is_read: bool = False
    responded_at: datetime | None = None
    responded_by: str | None = None


class ContactListResponse(PaginatedResponse):
    """Paginated list of contact messages."""

    items: list[ContactResponse] = Field(..., description="List of contact messages")


class ContactStatsResponse(BaseModel):
    """Contact inbox counters."""

    total: int
    new: int
    in_progress: int
    resolved: int
    closed: int
    unread: int
    high_priority: int
