"""
Cart schemas
"""

from pydantic import Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
import uuid

from storefront.core.config import settings
from storefront.schemas.base import BaseSchema
from storefront.api.v1.products.schemas import ProductSummary


class CartItemCreate(BaseSchema):
    """Add item to cart"""
    product_id: uuid.UUID
    variant_id: Optional[uuid.UUID] = None
    quantity: int = Field(1, ge=1, le=settings.MAX_CART_ITEM_QUANTITY)


class CartItemUpdate(BaseSchema):
    """Update cart item quantity"""
    quantity: int = Field(..., ge=1, le=settings.MAX_CART_ITEM_QUANTITY)


class VariantSummary(BaseSchema):
    id: uuid.UUID
    name: str
    sku: Optional[str] = None
    price: Optional[Decimal] = None
    stock_qty: Optional[int] = None
    attributes: Optional[Dict[str, Any]] = None


class CartItemResponse(BaseSchema):
    """Cart line with current pricing"""
    id: uuid.UUID
    product_id: uuid.UUID
    variant_id: Optional[uuid.UUID] = None
    quantity: int
    price_at_add: Decimal
    unit_price: Decimal
    subtotal: Decimal
    product: ProductSummary
    variant: Optional[VariantSummary] = None
    created_at: datetime


class CartResponse(BaseSchema):
    """Cart with lines and subtotal at current prices"""
    id: uuid.UUID
    items: List[CartItemResponse]
    subtotal: Decimal
    item_count: int


class CartData(BaseSchema):
    cart: CartResponse
