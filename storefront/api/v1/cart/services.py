"""
Cart service layer
Handles shopping cart business logic
"""

from typing import Optional
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from storefront.core.database import transaction
from storefront.core.exceptions import (
    ForbiddenException,
    InsufficientStockException,
    NotFoundException
)
from storefront.models import Cart, CartItem, User
from storefront.services.pricing import effective_price, effective_stock, to_money
from storefront.api.v1.products.crud import ProductRepository
from storefront.api.v1.products.schemas import ProductSummary
from .crud import CartRepository
from .schemas import CartItemCreate, CartItemResponse, CartResponse, VariantSummary

logger = logging.getLogger(__name__)


class CartService:
    """Shopping cart service"""

    def __init__(
        self,
        db: AsyncSession,
        carts: Optional[CartRepository] = None,
        products: Optional[ProductRepository] = None
    ):
        self.db = db
        self.carts = carts or CartRepository(db)
        self.products = products or ProductRepository(db)

    async def get_or_create_cart(self, user: User) -> Cart:
        """Return the user's cart, creating it on first access"""
        cart = await self.carts.get_by_user(user.id)
        if cart is None:
            cart = await self.carts.create(user.id)
            logger.info(f"Cart created for user {user.id}")
        return cart

    async def get_cart(self, user: User) -> CartResponse:
        """
        Get the user's cart with current prices

        Returns:
            Cart lines, subtotal at current prices and line count
        """
        cart = await self.get_or_create_cart(user)
        cart = await self.carts.get_by_user(user.id, load_items=True)
        return self._build_response(cart)

    async def add_item(self, user: User, item_data: CartItemCreate) -> CartResponse:
        """
        Add item to cart, merging into an existing line

        Args:
            user: Cart owner
            item_data: Product, optional variant and quantity

        Returns:
            Updated cart

        Raises:
            NotFoundException: If product or variant not found
            InsufficientStockException: If the quantity exceeds stock
        """
        async with transaction(self.db):
            product = await self.products.get(item_data.product_id)
            if not product:
                raise NotFoundException("Product not found")

            variant = None
            if item_data.variant_id:
                variant = await self.products.get_variant(item_data.variant_id)
                if not variant or variant.product_id != product.id:
                    raise NotFoundException("Product variant not found")

            available = effective_stock(product, variant)
            if item_data.quantity > available:
                raise InsufficientStockException(available=available)

            cart = await self.get_or_create_cart(user)
            existing = await self.carts.find_item(cart.id, product.id, item_data.variant_id)

            if existing:
                new_quantity = existing.quantity + item_data.quantity
                if new_quantity > available:
                    raise InsufficientStockException(
                        "Insufficient stock for requested quantity",
                        available=available
                    )
                existing.quantity = new_quantity
                await self.db.flush()
            else:
                await self.carts.add_item(
                    CartItem(
                        cart_id=cart.id,
                        product_id=product.id,
                        variant_id=item_data.variant_id,
                        quantity=item_data.quantity,
                        price_at_add=effective_price(product, variant)
                    )
                )

        logger.info(
            f"Cart add: user={user.id} product={product.id} "
            f"variant={item_data.variant_id} qty={item_data.quantity}"
        )
        return await self.get_cart(user)

    async def update_item(self, user: User, item_id: uuid.UUID, quantity: int) -> CartResponse:
        """
        Set a cart line's quantity

        Raises:
            NotFoundException: If line not found
            ForbiddenException: If the line is in another user's cart
            InsufficientStockException: If the quantity exceeds stock
        """
        async with transaction(self.db):
            item = await self.carts.get_item(item_id)
            if not item:
                raise NotFoundException("Cart item not found")

            if item.cart.user_id != user.id:
                raise ForbiddenException("Cart item belongs to another user")

            available = effective_stock(item.product, item.variant)
            if quantity > available:
                raise InsufficientStockException(available=available)

            item.quantity = quantity
            await self.db.flush()

        logger.info(f"Cart update: user={user.id} item={item_id} qty={quantity}")
        return await self.get_cart(user)

    async def remove_item(self, user: User, item_id: uuid.UUID) -> None:
        """
        Remove a cart line; removing a missing line succeeds

        Raises:
            ForbiddenException: If the line is in another user's cart
        """
        async with transaction(self.db):
            item = await self.carts.get_item(item_id)
            if not item:
                return

            if item.cart.user_id != user.id:
                raise ForbiddenException("Cart item belongs to another user")

            await self.carts.delete_item(item)

        logger.info(f"Cart remove: user={user.id} item={item_id}")

    async def clear_cart(self, user: User) -> None:
        """Delete every line of the user's cart"""
        async with transaction(self.db):
            cart = await self.carts.get_by_user(user.id)
            if cart is None:
                return
            removed = await self.carts.clear(cart.id)

        logger.info(f"Cart cleared: user={user.id} lines={removed}")

    @staticmethod
    def _build_response(cart: Cart) -> CartResponse:
        items = []
        subtotal = Decimal("0")

        for item in cart.items:
            unit_price = effective_price(item.product, item.variant)
            line_subtotal = to_money(unit_price * item.quantity)
            subtotal += line_subtotal

            items.append(
                CartItemResponse(
                    id=item.id,
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    quantity=item.quantity,
                    price_at_add=item.price_at_add,
                    unit_price=unit_price,
                    subtotal=line_subtotal,
                    product=ProductSummary.from_product(item.product),
                    variant=VariantSummary.model_validate(item.variant) if item.variant else None,
                    created_at=item.created_at
                )
            )

        return CartResponse(
            id=cart.id,
            items=items,
            subtotal=to_money(subtotal),
            item_count=len(items)
        )
