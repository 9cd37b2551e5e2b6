"""
Category CRUD operations
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select
from sqlalchemy import select, func
from typing import Dict, List, Optional
import uuid

from storefront.models import Category, Product


class CategoryRepository:
    """Category persistence bound to one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, category_id: uuid.UUID) -> Optional[Category]:
        """Get category by ID"""
        result = await self.db.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_with_family(self, category_id: uuid.UUID) -> Optional[Category]:
        """Get category by ID with parent and children loaded"""
        stmt = (
            select(Category)
            .options(
                selectinload(Category.parent),
                selectinload(Category.children)
            )
            .where(Category.id == category_id)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        """Get category by slug"""
        result = await self.db.execute(
            select(Category).where(Category.slug == slug)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Category]:
        """All categories, alphabetical, with parent and children loaded"""
        stmt = (
            select(Category)
            .options(
                selectinload(Category.parent),
                selectinload(Category.children)
            )
            .order_by(Category.name)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def product_counts(self) -> Dict[uuid.UUID, int]:
        """Number of products per category id"""
        stmt = (
            select(Product.category_id, func.count(Product.id))
            .group_by(Product.category_id)
        )
        result = await self.db.execute(stmt)
        return {category_id: count for category_id, count in result.all()}

    async def get_products(self, category_id: uuid.UUID, limit: int = 20) -> List[Product]:
        """Newest products of a category"""
        stmt = (
            self.products_query(category_id)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    def products_query(self, category_id: uuid.UUID) -> Select:
        """Query for the products of a category, newest first"""
        return (
            select(Product)
            .options(
                selectinload(Product.category),
                selectinload(Product.images)
            )
            .where(Product.category_id == category_id)
            .order_by(Product.created_at.desc(), Product.id)
        )
