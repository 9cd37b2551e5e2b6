"""
Shared fixtures: an in-memory database per test, an HTTP client bound to
the app and factories for users, catalog rows and addresses.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from decimal import Decimal  # noqa: E402
from typing import Optional  # noqa: E402
import uuid  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from storefront.core.database import get_db  # noqa: E402
from storefront.core.security import SecurityUtils  # noqa: E402
from storefront.main import app  # noqa: E402
from storefront.models import (  # noqa: E402
    Address,
    Base,
    Category,
    Product,
    ProductImage,
    ProductVariant,
    User,
    UserRole
)


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    yield factory

    await engine.dispose()


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class Factory:
    """Inserts rows through short-lived sessions"""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def save(self, *objects):
        async with self.session_factory() as session:
            session.add_all(objects)
            await session.commit()
        return objects[0] if len(objects) == 1 else objects

    async def user(self, role: UserRole = UserRole.CUSTOMER, is_active: bool = True) -> User:
        tag = uuid.uuid4().hex[:8]
        return await self.save(
            User(
                email=f"{role.value}-{tag}@example.com",
                first_name="Test",
                last_name=tag,
                role=role,
                is_active=is_active,
            )
        )

    async def category(self, name: str = "Electronics", parent: Optional[Category] = None) -> Category:
        tag = uuid.uuid4().hex[:6]
        return await self.save(
            Category(
                name=name,
                slug=f"{name.lower()}-{tag}",
                parent_id=parent.id if parent else None,
            )
        )

    async def product(
        self,
        category: Category,
        price: str = "10.00",
        stock_qty: int = 10,
        name: str = "Widget",
        with_image: bool = True,
    ) -> Product:
        tag = uuid.uuid4().hex[:8]
        product = Product(
            name=name,
            slug=f"{name.lower().replace(' ', '-')}-{tag}",
            description=f"{name} description",
            sku=f"SKU-{tag}",
            category_id=category.id,
            price=Decimal(price),
            stock_qty=stock_qty,
        )
        if with_image:
            product.images = [ProductImage(url=f"https://img.example.com/{tag}.png", position=1, is_primary=True)]
        return await self.save(product)

    async def variant(
        self,
        product: Product,
        price: Optional[str] = None,
        stock_qty: Optional[int] = None,
        name: str = "Large",
    ) -> ProductVariant:
        return await self.save(
            ProductVariant(
                product_id=product.id,
                name=name,
                sku=f"VAR-{uuid.uuid4().hex[:8]}",
                price=Decimal(price) if price is not None else None,
                stock_qty=stock_qty,
            )
        )

    async def address(self, user: User) -> Address:
        return await self.save(
            Address(
                user_id=user.id,
                full_name="Jamie Doe",
                phone="555-0100",
                street="1 Main St",
                city="Springfield",
                state="IL",
                postal_code="62701",
                country="US",
            )
        )


@pytest.fixture
def factory(session_factory):
    return Factory(session_factory)


def auth_headers(user: User) -> dict:
    token = SecurityUtils.create_access_token({"sub": str(user.id), "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def customer(factory):
    return await factory.user()


@pytest.fixture
async def other_customer(factory):
    return await factory.user()


@pytest.fixture
async def admin(factory):
    return await factory.user(role=UserRole.ADMIN)


@pytest.fixture
async def category(factory):
    return await factory.category()


INLINE_ADDRESS = {
    "fullName": "Jamie Doe",
    "phone": "555-0100",
    "street": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "postalCode": "62701",
    "country": "US",
}
