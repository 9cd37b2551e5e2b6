"""
Product service layer
Handles catalog business logic
"""

from typing import Any, Dict, Iterable, Optional
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from storefront.core.database import transaction
from storefront.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException
)
from storefront.models import Product, ProductImage, ProductVariant
from storefront.utils.helpers import generate_slug
from storefront.utils.pagination import PaginationParams, paginate
from storefront.api.v1.categories.crud import CategoryRepository
from storefront.api.v1.reviews.crud import ReviewRepository
from .crud import ProductRepository
from .schemas import ProductCreate, ProductSortField, ProductUpdate, RatingStats, SortOrder

logger = logging.getLogger(__name__)


class ProductService:
    """Catalog service"""

    def __init__(
        self,
        db: AsyncSession,
        products: Optional[ProductRepository] = None,
        categories: Optional[CategoryRepository] = None,
        reviews: Optional[ReviewRepository] = None
    ):
        self.db = db
        self.products = products or ProductRepository(db)
        self.categories = categories or CategoryRepository(db)
        self.reviews = reviews or ReviewRepository(db)

    async def list_products(
        self,
        params: PaginationParams,
        search: Optional[str] = None,
        category_id: Optional[uuid.UUID] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort_by: ProductSortField = ProductSortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC
    ) -> Dict[str, Any]:
        """Paginated, filtered product listing"""
        query = self.products.search_query(
            search=search,
            category_id=category_id,
            min_price=min_price,
            max_price=max_price,
            sort_by=sort_by,
            sort_order=sort_order
        )
        return await paginate(self.db, query, params)

    async def get_product(self, product_id: uuid.UUID) -> Product:
        """
        Get product with category, images and variants

        Raises:
            NotFoundException: If product not found
        """
        product = await self.products.get(product_id, load_relations=True)
        if not product:
            raise NotFoundException("Product not found")
        return product

    async def rating_stats(self, products: Iterable[Product]) -> Dict[uuid.UUID, RatingStats]:
        """Average rating and review count keyed by product id"""
        return await self.reviews.rating_stats(p.id for p in products)

    async def create_product(self, data: ProductCreate) -> Product:
        """
        Create a product with its images and variants

        Raises:
            BadRequestException: If SKU or slug already used
            NotFoundException: If category not found
        """
        async with transaction(self.db):
            if await self.products.get_by_sku(data.sku):
                raise BadRequestException("Product with this SKU already exists", error_code="DUPLICATE_SKU")

            if not await self.categories.get(data.category_id):
                raise NotFoundException("Category not found")

            slug = await self._resolve_slug(data)

            product = Product(
                name=data.name,
                slug=slug,
                description=data.description,
                price=data.price,
                compare_price=data.compare_price,
                stock_qty=data.stock_qty,
                sku=data.sku,
                brand=data.brand,
                category_id=data.category_id,
                images=[
                    ProductImage(
                        url=image.url,
                        alt_text=image.alt_text or data.name,
                        position=index + 1,
                        is_primary=index == 0
                    )
                    for index, image in enumerate(data.images or [])
                ],
                variants=[
                    ProductVariant(**variant.model_dump())
                    for variant in data.variants or []
                ]
            )
            await self.products.add(product)

        logger.info(f"Product created: {product.name} ({product.sku})")
        return await self.get_product(product.id)

    async def update_product(self, product_id: uuid.UUID, data: ProductUpdate) -> Product:
        """
        Partially update a product

        Raises:
            NotFoundException: If product or category not found
            BadRequestException: If the new SKU or slug is taken
        """
        async with transaction(self.db):
            product = await self.products.get(product_id)
            if not product:
                raise NotFoundException("Product not found")

            changes = data.model_dump(exclude_unset=True)
            if changes.get("slug"):
                changes["slug"] = generate_slug(changes["slug"])

            if changes.get("sku") and changes["sku"] != product.sku:
                if await self.products.get_by_sku(changes["sku"]):
                    raise BadRequestException("Product with this SKU already exists", error_code="DUPLICATE_SKU")

            if changes.get("slug") and changes["slug"] != product.slug:
                if await self.products.get_by_slug(changes["slug"]):
                    raise BadRequestException("Product with this slug already exists", error_code="DUPLICATE_SLUG")

            if changes.get("category_id") and not await self.categories.get(changes["category_id"]):
                raise NotFoundException("Category not found")

            for field, value in changes.items():
                # Required columns only change to real values
                if value is None and field not in ("compare_price", "brand"):
                    continue
                setattr(product, field, value)

            await self.db.flush()

        logger.info(f"Product updated: {product.name} ({product.id})")
        return await self.get_product(product.id)

    async def delete_product(self, product_id: uuid.UUID) -> None:
        """
        Delete a product with its images, variants, reviews, cart lines and wishlist entries

        Raises:
            NotFoundException: If product not found
            ConflictException: If orders reference the product
        """
        async with transaction(self.db):
            product = await self.products.get_for_delete(product_id)
            if not product:
                raise NotFoundException("Product not found")

            if await self.products.has_order_items(product_id):
                raise ConflictException(
                    "Product is referenced by existing orders",
                    error_code="PRODUCT_HAS_ORDERS"
                )

            await self.products.delete(product)

        logger.info(f"Product deleted: {product.name} ({product_id})")

    async def _resolve_slug(self, data: ProductCreate) -> str:
        if data.slug:
            slug = generate_slug(data.slug)
            if await self.products.get_by_slug(slug):
                raise BadRequestException("Product with this slug already exists", error_code="DUPLICATE_SLUG")
            return slug

        slug = generate_slug(data.name)
        if await self.products.get_by_slug(slug):
            slug = f"{slug}-{generate_slug(data.sku)}"
        return slug
