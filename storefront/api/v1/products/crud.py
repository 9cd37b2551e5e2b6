"""
Product CRUD operations
Database operations for products and variants
"""

from typing import Optional
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, exists, or_
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select
import uuid

from storefront.models import Product, ProductVariant, OrderItem, Review
from .schemas import ProductSortField, SortOrder

SORT_COLUMNS = {
    ProductSortField.PRICE: Product.price,
    ProductSortField.CREATED_AT: Product.created_at,
    ProductSortField.NAME: Product.name,
}


class ProductRepository:
    """Product persistence bound to one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(
        self,
        product_id: uuid.UUID,
        load_relations: bool = False
    ) -> Optional[Product]:
        """Get product by ID"""
        query = select(Product).where(Product.id == product_id)

        if load_relations:
            query = query.options(
                selectinload(Product.category),
                selectinload(Product.images),
                selectinload(Product.variants)
            ).execution_options(populate_existing=True)

        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_for_delete(self, product_id: uuid.UUID) -> Optional[Product]:
        """Get product with every collection its delete touches"""
        result = await self.db.execute(
            select(Product)
            .options(
                selectinload(Product.images),
                selectinload(Product.variants),
                selectinload(Product.cart_items),
                selectinload(Product.wishlist_items),
                selectinload(Product.reviews).selectinload(Review.images),
                selectinload(Product.reviews).selectinload(Review.votes),
                selectinload(Product.order_items)
            )
            .where(Product.id == product_id)
        )
        return result.scalar_one_or_none()

    async def get_by_sku(self, sku: str) -> Optional[Product]:
        """Get product by SKU"""
        result = await self.db.execute(
            select(Product).where(Product.sku == sku)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Product]:
        """Get product by slug"""
        result = await self.db.execute(
            select(Product).where(Product.slug == slug)
        )
        return result.scalar_one_or_none()

    async def get_variant(self, variant_id: uuid.UUID) -> Optional[ProductVariant]:
        """Get a single variant"""
        result = await self.db.execute(
            select(ProductVariant).where(ProductVariant.id == variant_id)
        )
        return result.scalar_one_or_none()

    async def has_order_items(self, product_id: uuid.UUID) -> bool:
        """Check whether any order snapshot references the product"""
        return bool(
            await self.db.scalar(
                select(exists().where(OrderItem.product_id == product_id))
            )
        )

    def search_query(
        self,
        search: Optional[str] = None,
        category_id: Optional[uuid.UUID] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort_by: ProductSortField = ProductSortField.CREATED_AT,
        sort_order: SortOrder = SortOrder.DESC
    ) -> Select:
        """Build the filtered, ordered product listing query"""
        query = select(Product).options(
            selectinload(Product.category),
            selectinload(Product.images)
        )

        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Product.name.ilike(pattern),
                    Product.description.ilike(pattern),
                    Product.brand.ilike(pattern)
                )
            )

        if category_id:
            query = query.where(Product.category_id == category_id)

        if min_price is not None:
            query = query.where(Product.price >= min_price)

        if max_price is not None:
            query = query.where(Product.price <= max_price)

        column = SORT_COLUMNS[sort_by]
        ordering = column.asc() if sort_order == SortOrder.ASC else column.desc()
        return query.order_by(ordering, Product.id)

    async def add(self, product: Product) -> Product:
        """Stage a new product and flush to assign identifiers"""
        self.db.add(product)
        await self.db.flush()
        return product

    async def delete(self, product: Product) -> None:
        """Delete a product loaded via get_for_delete"""
        await self.db.delete(product)
        await self.db.flush()
