"""
Product API routes
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from decimal import Decimal
import uuid

from storefront.core.database import get_db
from storefront.api.v1.auth.dependencies import require_admin
from storefront.models import Product, User
from storefront.schemas.base import ApiResponse
from storefront.utils.pagination import PaginationParams, get_pagination_params
from .schemas import (
    ProductCreate,
    ProductData,
    ProductDetailResponse,
    ProductListData,
    ProductListItem,
    ProductSortField,
    ProductUpdate,
    SortOrder
)
from .services import ProductService

router = APIRouter()


def get_product_service(db: AsyncSession = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.get(
    "",
    response_model=ApiResponse[ProductListData],
    summary="List products"
)
async def list_products(
    pagination: PaginationParams = Depends(get_pagination_params),
    search: Optional[str] = Query(None, max_length=200),
    category_id: Optional[uuid.UUID] = Query(None, alias="categoryId"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", gt=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", gt=0),
    sort_by: ProductSortField = Query(ProductSortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
    service: ProductService = Depends(get_product_service)
):
    """List products with filters and pagination"""
    result = await service.list_products(
        pagination,
        search=search or None,
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order
    )
    ratings = await service.rating_stats(result["items"])
    return ApiResponse(
        data=ProductListData(
            products=[ProductListItem.from_product(p, ratings.get(p.id)) for p in result["items"]],
            pagination=result["pagination"]
        )
    )


@router.get(
    "/{product_id}",
    response_model=ApiResponse[ProductData],
    summary="Get product details"
)
async def get_product(
    product_id: uuid.UUID,
    service: ProductService = Depends(get_product_service)
):
    """Get product with category, images and variants"""
    product = await service.get_product(product_id)
    return ApiResponse(data=ProductData(product=await _detail(service, product)))


@router.post(
    "",
    response_model=ApiResponse[ProductData],
    status_code=status.HTTP_201_CREATED,
    summary="Create product (admin)"
)
async def create_product(
    product_data: ProductCreate,
    admin: User = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """Create new product"""
    product = await service.create_product(product_data)
    return ApiResponse(
        message="Product created successfully",
        data=ProductData(product=await _detail(service, product))
    )


@router.put(
    "/{product_id}",
    response_model=ApiResponse[ProductData],
    summary="Update product (admin)"
)
async def update_product(
    product_id: uuid.UUID,
    product_data: ProductUpdate,
    admin: User = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """Partially update a product"""
    product = await service.update_product(product_id, product_data)
    return ApiResponse(
        message="Product updated successfully",
        data=ProductData(product=await _detail(service, product))
    )


@router.delete(
    "/{product_id}",
    response_model=ApiResponse[None],
    summary="Delete product (admin)"
)
async def delete_product(
    product_id: uuid.UUID,
    admin: User = Depends(require_admin),
    service: ProductService = Depends(get_product_service)
):
    """Delete product"""
    await service.delete_product(product_id)
    return ApiResponse(message="Product deleted successfully")


async def _detail(service: ProductService, product: Product) -> ProductDetailResponse:
    ratings = await service.rating_stats([product])
    return ProductDetailResponse.from_product(product, ratings.get(product.id))
