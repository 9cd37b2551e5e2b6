"""
Cart CRUD operations
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.orm import selectinload
import uuid

from storefront.models import Cart, CartItem, Product


class CartRepository:
    """Cart and cart line persistence bound to one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_user(self, user_id: uuid.UUID, load_items: bool = False) -> Optional[Cart]:
        """Get a user's cart, optionally with lines, products and variants"""
        query = select(Cart).where(Cart.user_id == user_id)

        if load_items:
            query = query.options(
                selectinload(Cart.items)
                .selectinload(CartItem.product)
                .selectinload(Product.images),
                selectinload(Cart.items).selectinload(CartItem.variant)
            ).execution_options(populate_existing=True)

        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create(self, user_id: uuid.UUID) -> Cart:
        """Insert an empty cart for the user"""
        cart = Cart(user_id=user_id)
        self.db.add(cart)
        await self.db.flush()
        return cart

    async def get_item(self, item_id: uuid.UUID) -> Optional[CartItem]:
        """Get a cart line with its cart, product and variant"""
        result = await self.db.execute(
            select(CartItem)
            .options(
                selectinload(CartItem.cart),
                selectinload(CartItem.product),
                selectinload(CartItem.variant)
            )
            .where(CartItem.id == item_id)
        )
        return result.scalar_one_or_none()

    async def find_item(
        self,
        cart_id: uuid.UUID,
        product_id: uuid.UUID,
        variant_id: Optional[uuid.UUID] = None
    ) -> Optional[CartItem]:
        """Find the line for a (product, variant) pair in a cart"""
        query = select(CartItem).where(
            CartItem.cart_id == cart_id,
            CartItem.product_id == product_id
        )
        if variant_id is None:
            query = query.where(CartItem.variant_id.is_(None))
        else:
            query = query.where(CartItem.variant_id == variant_id)

        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def add_item(self, item: CartItem) -> CartItem:
        """Stage a new cart line"""
        self.db.add(item)
        await self.db.flush()
        return item

    async def delete_item(self, item: CartItem) -> None:
        """Delete one cart line"""
        await self.db.delete(item)
        await self.db.flush()

    async def clear(self, cart_id: uuid.UUID) -> int:
        """Delete every line of a cart; the cart row stays"""
        result = await self.db.execute(
            delete(CartItem).where(CartItem.cart_id == cart_id)
        )
        return result.rowcount or 0
