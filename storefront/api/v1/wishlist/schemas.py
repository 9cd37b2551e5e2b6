"""
Wishlist schemas
"""

from typing import List
from datetime import datetime
import uuid

from storefront.models import WishlistItem
from storefront.schemas.base import BaseSchema
from storefront.api.v1.products.schemas import ProductSummary


class WishlistAdd(BaseSchema):
    product_id: uuid.UUID


class WishlistItemResponse(BaseSchema):
    id: uuid.UUID
    product_id: uuid.UUID
    product: ProductSummary
    created_at: datetime

    @classmethod
    def from_item(cls, item: WishlistItem) -> "WishlistItemResponse":
        return cls(
            id=item.id,
            product_id=item.product_id,
            product=ProductSummary.from_product(item.product),
            created_at=item.created_at
        )


class WishlistResponse(BaseSchema):
    items: List[WishlistItemResponse]
    item_count: int


class WishlistData(BaseSchema):
    wishlist: WishlistResponse


class WishlistItemData(BaseSchema):
    wishlist_item: WishlistItemResponse
