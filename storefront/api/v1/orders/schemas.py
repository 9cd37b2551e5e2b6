"""
Order schemas for request/response validation
"""

from pydantic import Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
import uuid

from storefront.models import OrderStatus, PaymentStatus
from storefront.schemas.base import BaseSchema, PaginationMeta
from storefront.api.v1.addresses.schemas import AddressCreate, AddressResponse


class OrderCreate(BaseSchema):
    """
    Checkout request

    Each address is given either as the id of a saved address or inline.
    """
    shipping_address_id: Optional[uuid.UUID] = None
    shipping_address: Optional[AddressCreate] = None
    billing_address_id: Optional[uuid.UUID] = None
    billing_address: Optional[AddressCreate] = None
    payment_method: str = Field(..., min_length=1, max_length=50)

    @model_validator(mode="after")
    def validate_addresses(self):
        if not (self.shipping_address_id or self.shipping_address):
            raise ValueError("Shipping address is required")
        if not (self.billing_address_id or self.billing_address):
            raise ValueError("Billing address is required")
        return self


class OrderStatusUpdate(BaseSchema):
    status: OrderStatus

    @field_validator("status", mode="before")
    @classmethod
    def normalize_case(cls, v):
        return v.lower() if isinstance(v, str) else v


class TrackingCreate(BaseSchema):
    status: str = Field(..., min_length=1, max_length=100)
    location: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=2000)


class TrackingResponse(BaseSchema):
    id: uuid.UUID
    status: str
    location: Optional[str] = None
    notes: Optional[str] = None
    timestamp: datetime


class OrderItemResponse(BaseSchema):
    """Order line snapshot"""
    id: uuid.UUID
    product_id: uuid.UUID
    variant_id: Optional[uuid.UUID] = None
    product_name: str
    product_sku: Optional[str] = None
    quantity: int
    price: Decimal
    subtotal: Decimal


class OrderListItem(BaseSchema):
    """Order as listed"""
    id: uuid.UUID
    order_number: str
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: str
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    total: Decimal
    created_at: datetime
    items: List[OrderItemResponse] = []


class OrderResponse(OrderListItem):
    """Full order with addresses and tracking, newest entry first"""
    user_id: uuid.UUID
    updated_at: datetime
    shipping_address: AddressResponse
    billing_address: AddressResponse
    tracking: List[TrackingResponse] = []


class OrderData(BaseSchema):
    order: OrderResponse


class OrderListData(BaseSchema):
    orders: List[OrderListItem]
    pagination: PaginationMeta


class TrackingData(BaseSchema):
    tracking: TrackingResponse
