"""
Category API routes
Read-only browsing of the category tree and its products
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.database import get_db
from storefront.core.exceptions import NotFoundException
from storefront.schemas.base import ApiResponse
from storefront.utils.pagination import PaginationParams, get_pagination_params, paginate
from storefront.api.v1.products.schemas import ProductListItem
from storefront.api.v1.reviews.crud import ReviewRepository
from .crud import CategoryRepository
from .schemas import (
    CategoryData,
    CategoryDetailResponse,
    CategoryListData,
    CategoryListItem,
    CategoryProductsData,
    CategoryRef
)

router = APIRouter()

DETAIL_PRODUCT_LIMIT = 20


@router.get(
    "",
    response_model=ApiResponse[CategoryListData],
    summary="List categories"
)
async def list_categories(db: AsyncSession = Depends(get_db)):
    """All categories with parent, children and product count"""
    categories = CategoryRepository(db)
    rows = await categories.list_all()
    counts = await categories.product_counts()

    items = []
    for category in rows:
        item = CategoryListItem.model_validate(category)
        item.product_count = counts.get(category.id, 0)
        items.append(item)

    return ApiResponse(data=CategoryListData(categories=items))


@router.get(
    "/{category_id}",
    response_model=ApiResponse[CategoryData],
    summary="Get category"
)
async def get_category(category_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    """Get category with parent, children and its newest products"""
    categories = CategoryRepository(db)
    category = await categories.get_with_family(category_id)
    if not category:
        raise NotFoundException("Category not found")

    products = await categories.get_products(category.id, limit=DETAIL_PRODUCT_LIMIT)
    ratings = await ReviewRepository(db).rating_stats(p.id for p in products)

    detail = CategoryDetailResponse(
        id=category.id,
        name=category.name,
        slug=category.slug,
        description=category.description,
        image_url=category.image_url,
        parent_id=category.parent_id,
        created_at=category.created_at,
        updated_at=category.updated_at,
        parent=CategoryRef.model_validate(category.parent) if category.parent else None,
        children=[CategoryRef.model_validate(child) for child in category.children],
        products=[ProductListItem.from_product(p, ratings.get(p.id)) for p in products]
    )
    return ApiResponse(data=CategoryData(category=detail))


@router.get(
    "/{slug_or_id}/products",
    response_model=ApiResponse[CategoryProductsData],
    summary="List products in category"
)
async def get_category_products(
    slug_or_id: str,
    pagination: PaginationParams = Depends(get_pagination_params),
    db: AsyncSession = Depends(get_db)
):
    """Paginated products of a category addressed by UUID or slug"""
    categories = CategoryRepository(db)

    try:
        category = await categories.get(uuid.UUID(slug_or_id))
    except ValueError:
        category = await categories.get_by_slug(slug_or_id)

    if not category:
        raise NotFoundException("Category not found")

    result = await paginate(db, categories.products_query(category.id), pagination)
    ratings = await ReviewRepository(db).rating_stats(p.id for p in result["items"])
    return ApiResponse(
        data=CategoryProductsData(
            category=CategoryRef.model_validate(category),
            products=[ProductListItem.from_product(p, ratings.get(p.id)) for p in result["items"]],
            pagination=result["pagination"]
        )
    )
