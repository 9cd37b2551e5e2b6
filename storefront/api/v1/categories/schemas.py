"""
Category schemas
"""

from typing import List, Optional
from datetime import datetime
import uuid

from storefront.schemas.base import BaseSchema, PaginationMeta
from storefront.api.v1.products.schemas import ProductListItem


class CategoryRef(BaseSchema):
    id: uuid.UUID
    name: str
    slug: str


class CategoryResponse(BaseSchema):
    """Category as listed"""
    id: uuid.UUID
    name: str
    slug: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    parent_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime


class CategoryListItem(CategoryResponse):
    parent: Optional[CategoryRef] = None
    children: List[CategoryRef] = []
    product_count: int = 0


class CategoryDetailResponse(CategoryResponse):
    parent: Optional[CategoryRef] = None
    children: List[CategoryRef] = []
    products: List[ProductListItem] = []


class CategoryListData(BaseSchema):
    categories: List[CategoryListItem]


class CategoryData(BaseSchema):
    category: CategoryDetailResponse


class CategoryProductsData(BaseSchema):
    category: CategoryRef
    products: List[ProductListItem]
    pagination: PaginationMeta
