"""
Order CRUD operations
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select
import uuid

from storefront.models import Order, OrderTracking


class OrderRepository:
    """Order and tracking persistence bound to one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, order_id: uuid.UUID, load_relations: bool = False) -> Optional[Order]:
        """Get order by ID, optionally with items, addresses and tracking"""
        query = select(Order).where(Order.id == order_id)

        if load_relations:
            query = query.options(
                selectinload(Order.items),
                selectinload(Order.tracking),
                selectinload(Order.shipping_address),
                selectinload(Order.billing_address)
            ).execution_options(populate_existing=True)

        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    def list_query(self, user_id: uuid.UUID) -> Select:
        """Query for a user's orders, newest first"""
        return (
            select(Order)
            .options(selectinload(Order.items))
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id)
        )

    async def add(self, order: Order) -> Order:
        """Stage a new order with its items and tracking"""
        self.db.add(order)
        await self.db.flush()
        return order

    async def add_tracking(self, entry: OrderTracking) -> OrderTracking:
        """Append a tracking entry"""
        self.db.add(entry)
        await self.db.flush()
        return entry
