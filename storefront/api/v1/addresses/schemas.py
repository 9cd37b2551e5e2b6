"""
Address schemas
"""

from pydantic import Field
from typing import List
from datetime import datetime
import uuid

from storefront.models import AddressType
from storefront.schemas.base import BaseSchema


class AddressCreate(BaseSchema):
    """Shipping or billing address supplied by the user"""
    type: AddressType = AddressType.BOTH
    full_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=3, max_length=20)
    street: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    is_default: bool = False


class AddressResponse(AddressCreate):
    id: uuid.UUID
    created_at: datetime


class AddressData(BaseSchema):
    address: AddressResponse


class AddressListData(BaseSchema):
    addresses: List[AddressResponse]
