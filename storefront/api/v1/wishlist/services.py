"""
Wishlist service layer
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from storefront.core.database import transaction
from storefront.core.exceptions import ConflictException, NotFoundException, OutOfStockException
from storefront.models import CartItem, User, WishlistItem
from storefront.services.pricing import to_money
from storefront.api.v1.cart.crud import CartRepository
from storefront.api.v1.products.crud import ProductRepository
from .crud import WishlistRepository

logger = logging.getLogger(__name__)


class WishlistService:
    """Wishlist service"""

    def __init__(
        self,
        db: AsyncSession,
        wishlist: Optional[WishlistRepository] = None,
        carts: Optional[CartRepository] = None,
        products: Optional[ProductRepository] = None
    ):
        self.db = db
        self.wishlist = wishlist or WishlistRepository(db)
        self.carts = carts or CartRepository(db)
        self.products = products or ProductRepository(db)

    async def get_wishlist(self, user: User):
        """User's entries, newest first"""
        return await self.wishlist.list_for_user(user.id)

    async def add(self, user: User, product_id: uuid.UUID) -> Tuple[WishlistItem, bool]:
        """
        Add a product to the wishlist

        Returns:
            The entry and whether it was newly created

        Raises:
            NotFoundException: If product not found
        """
        async with transaction(self.db):
            if not await self.products.get(product_id):
                raise NotFoundException("Product not found")

            existing = await self.wishlist.get(user.id, product_id)
            created = existing is None
            if created:
                await self.wishlist.add(WishlistItem(user_id=user.id, product_id=product_id))

        if created:
            logger.info(f"Wishlist add: user={user.id} product={product_id}")
        return await self.wishlist.get(user.id, product_id, load_product=True), created

    async def remove(self, user: User, product_id: uuid.UUID) -> bool:
        """Remove a product from the wishlist; returns whether an entry existed"""
        async with transaction(self.db):
            item = await self.wishlist.get(user.id, product_id)
            if item is None:
                return False
            await self.wishlist.delete(item)

        logger.info(f"Wishlist remove: user={user.id} product={product_id}")
        return True

    async def move_to_cart(self, user: User, product_id: uuid.UUID) -> None:
        """
        Move a wishlist entry into the cart as one unit

        The product lands on its no-variant cart line: a new line with
        quantity 1, or the existing line incremented by one. The wishlist
        entry is removed in the same transaction.

        Raises:
            NotFoundException: If the product is not in the wishlist
            OutOfStockException: If the product has no stock
            ConflictException: If the merged quantity exceeds stock
        """
        async with transaction(self.db):
            item = await self.wishlist.get(user.id, product_id, load_product=True)
            if item is None:
                raise NotFoundException("Product not in wishlist")

            product = item.product
            if product.stock_qty < 1:
                raise OutOfStockException()

            cart = await self.carts.get_by_user(user.id)
            if cart is None:
                cart = await self.carts.create(user.id)

            line = await self.carts.find_item(cart.id, product_id)
            if line:
                new_quantity = line.quantity + 1
                if new_quantity > product.stock_qty:
                    raise ConflictException(
                        "Insufficient stock for requested quantity",
                        error_code="INSUFFICIENT_STOCK"
                    )
                line.quantity = new_quantity
            else:
                await self.carts.add_item(
                    CartItem(
                        cart_id=cart.id,
                        product_id=product_id,
                        variant_id=None,
                        quantity=1,
                        price_at_add=to_money(product.price)
                    )
                )

            await self.wishlist.delete(item)

        logger.info(f"Wishlist move to cart: user={user.id} product={product_id}")
