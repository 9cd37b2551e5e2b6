"""
Product schemas for request/response validation
"""

from pydantic import Field, field_validator
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime
from decimal import Decimal
from enum import Enum
import uuid

from storefront.models import Product
from storefront.schemas.base import BaseSchema, PaginationMeta

RatingStats = Tuple[float, int]


class ProductSortField(str, Enum):
    PRICE = "price"
    CREATED_AT = "createdAt"
    NAME = "name"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ProductImageCreate(BaseSchema):
    url: str = Field(..., min_length=1, max_length=500)
    alt_text: Optional[str] = Field(None, max_length=255)


class ProductVariantCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    sku: Optional[str] = Field(None, max_length=100)
    price: Optional[Decimal] = Field(None, gt=0, le=1000000, decimal_places=2)
    stock_qty: Optional[int] = Field(None, ge=0, le=100000)
    attributes: Optional[Dict[str, Any]] = None


class ProductCreate(BaseSchema):
    """Schema for creating a product"""
    name: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = Field(None, min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    price: Decimal = Field(..., gt=0, le=1000000, decimal_places=2)
    compare_price: Optional[Decimal] = Field(None, gt=0, le=1000000, decimal_places=2)
    stock_qty: int = Field(0, ge=0, le=100000)
    sku: str = Field(..., min_length=1, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    category_id: uuid.UUID
    images: Optional[List[ProductImageCreate]] = None
    variants: Optional[List[ProductVariantCreate]] = None

    @field_validator("name", "sku")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class ProductUpdate(BaseSchema):
    """Schema for partially updating a product"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    price: Optional[Decimal] = Field(None, gt=0, le=1000000, decimal_places=2)
    compare_price: Optional[Decimal] = Field(None, gt=0, le=1000000, decimal_places=2)
    stock_qty: Optional[int] = Field(None, ge=0, le=100000)
    sku: Optional[str] = Field(None, min_length=1, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    category_id: Optional[uuid.UUID] = None


class ProductImageResponse(BaseSchema):
    id: uuid.UUID
    url: str
    alt_text: Optional[str] = None
    position: int
    is_primary: bool


class ProductVariantResponse(BaseSchema):
    id: uuid.UUID
    name: str
    sku: Optional[str] = None
    price: Optional[Decimal] = None
    stock_qty: Optional[int] = None
    attributes: Optional[Dict[str, Any]] = None


class CategorySummary(BaseSchema):
    id: uuid.UUID
    name: str
    slug: str


class ProductSummary(BaseSchema):
    """Compact product view embedded in carts, wishlists and orders"""
    id: uuid.UUID
    name: str
    slug: str
    price: Decimal
    compare_price: Optional[Decimal] = None
    stock_qty: int
    primary_image: Optional[str] = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductSummary":
        return cls(
            id=product.id,
            name=product.name,
            slug=product.slug,
            price=product.price,
            compare_price=product.compare_price,
            stock_qty=product.stock_qty,
            primary_image=primary_image_url(product),
        )


class ProductResponse(BaseSchema):
    """Schema for product response"""
    id: uuid.UUID
    name: str
    slug: str
    description: str
    price: Decimal
    compare_price: Optional[Decimal] = None
    stock_qty: int
    sku: str
    brand: Optional[str] = None
    category_id: uuid.UUID
    average_rating: float = 0
    review_count: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_product(cls, product: Product, rating: Optional[RatingStats] = None):
        """Build from an ORM product plus its (average, count) rating aggregate"""
        item = cls.model_validate(product)
        if rating:
            item.average_rating, item.review_count = rating
        return item


class ProductListItem(ProductResponse):
    category: Optional[CategorySummary] = None
    primary_image: Optional[str] = None

    @classmethod
    def from_product(cls, product: Product, rating: Optional[RatingStats] = None) -> "ProductListItem":
        item = super().from_product(product, rating)
        item.primary_image = primary_image_url(product)
        return item


class ProductDetailResponse(ProductResponse):
    category: Optional[CategorySummary] = None
    images: List[ProductImageResponse] = []
    variants: List[ProductVariantResponse] = []


class ProductData(BaseSchema):
    product: ProductDetailResponse


class ProductListData(BaseSchema):
    products: List[ProductListItem]
    pagination: PaginationMeta


def primary_image_url(product: Product) -> Optional[str]:
    """URL of the primary image, falling back to the first by position"""
    images = product.__dict__.get("images") or []
    for image in images:
        if image.is_primary:
            return image.url
    return images[0].url if images else None
