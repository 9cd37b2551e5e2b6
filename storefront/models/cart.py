"""
Shopping cart models
One cart per user, created on first access
"""

from sqlalchemy import Column, Integer, Numeric, ForeignKey, UniqueConstraint, CheckConstraint, Uuid
from sqlalchemy.orm import relationship

from .base import Base, TimestampedModel, UUIDModel


class Cart(Base, TimestampedModel, UUIDModel):
    """A user's in-progress cart"""

    __tablename__ = "carts"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), unique=True, nullable=False)

    # Relationships
    user = relationship("User", back_populates="cart")
    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.created_at"
    )


class CartItem(Base, TimestampedModel, UUIDModel):
    """Shopping cart line"""

    __tablename__ = "cart_items"

    cart_id = Column(Uuid(as_uuid=True), ForeignKey("carts.id"), nullable=False, index=True)

    # Product
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False)
    variant_id = Column(Uuid(as_uuid=True), ForeignKey("product_variants.id"), nullable=True)

    # Quantity and price
    quantity = Column(Integer, nullable=False, default=1)
    price_at_add = Column(Numeric(10, 2), nullable=False)  # Price at time of adding, never re-synced

    # Relationships
    cart = relationship("Cart", back_populates="items")
    product = relationship("Product", back_populates="cart_items")
    variant = relationship("ProductVariant")

    # Constraints
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", "variant_id", name="uq_cart_product_variant"),
        CheckConstraint("quantity > 0", name="check_positive_cart_quantity"),
    )
