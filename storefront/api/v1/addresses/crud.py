"""
Address CRUD operations
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
import uuid

from storefront.models import Address


class AddressRepository:
    """Address persistence bound to one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, address_id: uuid.UUID) -> Optional[Address]:
        """Get address by ID"""
        result = await self.db.execute(
            select(Address).where(Address.id == address_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: uuid.UUID) -> List[Address]:
        """User's addresses, default first"""
        result = await self.db.execute(
            select(Address)
            .where(Address.user_id == user_id)
            .order_by(Address.is_default.desc(), Address.created_at.desc())
        )
        return list(result.scalars().all())

    async def add(self, address: Address) -> Address:
        """Stage a new address, demoting the previous default if needed"""
        if address.is_default:
            await self.db.execute(
                update(Address)
                .where(Address.user_id == address.user_id, Address.is_default == True)  # noqa: E712
                .values(is_default=False)
            )
        self.db.add(address)
        await self.db.flush()
        return address
