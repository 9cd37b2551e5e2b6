"""
Wishlist CRUD operations
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
import uuid

from storefront.models import Product, WishlistItem


class WishlistRepository:
    """Wishlist persistence bound to one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: uuid.UUID) -> List[WishlistItem]:
        """User's wishlist entries, newest first, with products"""
        result = await self.db.execute(
            select(WishlistItem)
            .options(selectinload(WishlistItem.product).selectinload(Product.images))
            .where(WishlistItem.user_id == user_id)
            .order_by(WishlistItem.created_at.desc())
        )
        return list(result.scalars().all())

    async def get(
        self,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
        load_product: bool = False
    ) -> Optional[WishlistItem]:
        """Get the entry for a (user, product) pair"""
        query = select(WishlistItem).where(
            WishlistItem.user_id == user_id,
            WishlistItem.product_id == product_id
        )
        if load_product:
            query = query.options(
                selectinload(WishlistItem.product).selectinload(Product.images)
            ).execution_options(populate_existing=True)

        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def add(self, item: WishlistItem) -> WishlistItem:
        """Stage a new wishlist entry"""
        self.db.add(item)
        await self.db.flush()
        return item

    async def delete(self, item: WishlistItem) -> None:
        """Delete one wishlist entry"""
        await self.db.delete(item)
        await self.db.flush()
