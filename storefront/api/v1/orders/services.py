"""
Order service layer
Turns a cart into an immutable order and keeps its tracking history
"""

from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from storefront.core.database import transaction
from storefront.core.exceptions import (
    BadRequestException,
    EmptyCartException,
    ForbiddenException,
    NotFoundException
)
from storefront.models import (
    Address,
    Order,
    OrderItem,
    OrderStatus,
    OrderTracking,
    PaymentStatus,
    User
)
from storefront.services.pricing import (
    calculate_order_totals,
    effective_price,
    lines_subtotal,
    to_money
)
from storefront.utils.helpers import generate_order_number
from storefront.utils.pagination import PaginationParams, paginate
from storefront.api.v1.addresses.crud import AddressRepository
from storefront.api.v1.addresses.schemas import AddressCreate
from storefront.api.v1.cart.crud import CartRepository
from .crud import OrderRepository
from .schemas import OrderCreate, TrackingCreate

logger = logging.getLogger(__name__)

ORDER_PLACED = "Order Placed"


class OrderService:
    """Order management service"""

    def __init__(
        self,
        db: AsyncSession,
        orders: Optional[OrderRepository] = None,
        carts: Optional[CartRepository] = None,
        addresses: Optional[AddressRepository] = None
    ):
        self.db = db
        self.orders = orders or OrderRepository(db)
        self.carts = carts or CartRepository(db)
        self.addresses = addresses or AddressRepository(db)

    async def place_order(self, user: User, order_data: OrderCreate) -> Order:
        """
        Create an order from the user's cart

        Every step runs in one transaction: the order, its item snapshots,
        any inline addresses, the first tracking entry and the emptied cart
        are committed together or not at all.

        Args:
            user: Buyer
            order_data: Address references or payloads and payment method

        Returns:
            Created order with items, addresses and tracking

        Raises:
            EmptyCartException: If the cart is missing or has no lines
            BadRequestException: If an address cannot be resolved
        """
        async with transaction(self.db):
            cart = await self.carts.get_by_user(user.id, load_items=True)
            if cart is None or not cart.items:
                raise EmptyCartException()

            # Totals come from current catalog prices, not price_at_add
            subtotal = lines_subtotal(
                (item.product, item.variant, item.quantity) for item in cart.items
            )
            totals = calculate_order_totals(subtotal)

            shipping_address = await self._resolve_address(
                user,
                order_data.shipping_address_id,
                order_data.shipping_address,
                "Shipping"
            )
            billing_address = await self._resolve_address(
                user,
                order_data.billing_address_id,
                order_data.billing_address,
                "Billing"
            )

            items = []
            for cart_item in cart.items:
                price = effective_price(cart_item.product, cart_item.variant)
                items.append(
                    OrderItem(
                        product_id=cart_item.product_id,
                        variant_id=cart_item.variant_id,
                        product_name=cart_item.product.name,
                        product_sku=(
                            cart_item.variant.sku
                            if cart_item.variant and cart_item.variant.sku
                            else cart_item.product.sku
                        ),
                        quantity=cart_item.quantity,
                        price=price,
                        subtotal=to_money(price * cart_item.quantity)
                    )
                )

            order = Order(
                order_number=generate_order_number(),
                user_id=user.id,
                status=OrderStatus.PENDING,
                payment_status=PaymentStatus.PENDING,
                payment_method=order_data.payment_method,
                subtotal=totals.subtotal,
                tax=totals.tax,
                shipping_cost=totals.shipping_cost,
                total=totals.total,
                shipping_address_id=shipping_address.id,
                billing_address_id=billing_address.id,
                items=items,
                tracking=[
                    OrderTracking(
                        status=ORDER_PLACED,
                        notes=f"Order created with payment method: {order_data.payment_method}"
                    )
                ]
            )
            await self.orders.add(order)
            await self.carts.clear(cart.id)

        logger.info(
            f"Order created: {order.order_number} for user {user.email} "
            f"total={totals.total}"
        )
        return await self._load(order.id)

    async def list_orders(self, user: User, params: PaginationParams) -> Dict[str, Any]:
        """Caller's orders, newest first"""
        return await paginate(self.db, self.orders.list_query(user.id), params)

    async def get_order(self, user: User, order_id: uuid.UUID) -> Order:
        """
        Get order details

        Raises:
            NotFoundException: If order not found
            ForbiddenException: If caller is neither the buyer nor an admin
        """
        order = await self._load(order_id)
        if order.user_id != user.id and not user.is_admin:
            raise ForbiddenException("You do not have access to this order")
        return order

    async def update_status(self, order_id: uuid.UUID, new_status: OrderStatus) -> Order:
        """
        Set order status and record it in the tracking history

        Raises:
            NotFoundException: If order not found
        """
        async with transaction(self.db):
            order = await self.orders.get(order_id)
            if not order:
                raise NotFoundException("Order not found")

            order.status = new_status
            await self.orders.add_tracking(
                OrderTracking(
                    order_id=order.id,
                    status=f"Status updated to {new_status.value}",
                    notes="Order status changed by admin"
                )
            )

        logger.info(f"Order {order.order_number} status updated to {new_status.value}")
        return await self._load(order_id)

    async def add_tracking(self, order_id: uuid.UUID, tracking_data: TrackingCreate) -> OrderTracking:
        """
        Append a tracking entry

        Raises:
            NotFoundException: If order not found
        """
        async with transaction(self.db):
            order = await self.orders.get(order_id)
            if not order:
                raise NotFoundException("Order not found")

            entry = await self.orders.add_tracking(
                OrderTracking(
                    order_id=order.id,
                    status=tracking_data.status,
                    location=tracking_data.location,
                    notes=tracking_data.notes
                )
            )

        logger.info(f"Tracking added to order {order.order_number}: {entry.status}")
        return entry

    async def _load(self, order_id: uuid.UUID) -> Order:
        order = await self.orders.get(order_id, load_relations=True)
        if not order:
            raise NotFoundException("Order not found")
        return order

    async def _resolve_address(
        self,
        user: User,
        address_id: Optional[uuid.UUID],
        payload: Optional[AddressCreate],
        label: str
    ) -> Address:
        """Use a saved address of the caller, else insert the inline one"""
        if address_id:
            address = await self.addresses.get(address_id)
            if not address or address.user_id != user.id:
                raise BadRequestException(
                    f"{label} address not found",
                    error_code="INVALID_ADDRESS"
                )
            return address

        if payload is None:
            raise BadRequestException("Shipping and billing addresses are required")

        return await self.addresses.add(
            Address(user_id=user.id, **payload.model_dump(exclude={"is_default"}))
        )
