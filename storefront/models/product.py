"""Catalog models: products, variants and images"""

from sqlalchemy import (
    Column, String, Text, Numeric, Integer, Boolean, JSON, ForeignKey, Index,
    CheckConstraint, Uuid
)
from sqlalchemy.orm import relationship

from .base import Base, TimestampedModel, UUIDModel


class Product(Base, TimestampedModel, UUIDModel):
    """Sellable catalog entry"""

    __tablename__ = "products"

    # Basic info
    name = Column(String(200), nullable=False, index=True)
    slug = Column(String(200), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False)
    sku = Column(String(100), unique=True, nullable=False, index=True)
    brand = Column(String(100), nullable=True)

    # Categorization
    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=False)

    # Pricing
    price = Column(Numeric(10, 2), nullable=False, index=True)
    compare_price = Column(Numeric(10, 2), nullable=True)

    # Inventory (informational only, nothing reserves it)
    stock_qty = Column(Integer, default=0, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="products")
    variants = relationship("ProductVariant", back_populates="product", cascade="all, delete-orphan")
    images = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductImage.position"
    )
    cart_items = relationship("CartItem", back_populates="product", cascade="all, delete-orphan")
    wishlist_items = relationship("WishlistItem", back_populates="product", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="product", cascade="all, delete-orphan")
    order_items = relationship("OrderItem", back_populates="product")

    # Constraints
    __table_args__ = (
        CheckConstraint("price > 0", name="check_positive_price"),
        CheckConstraint("stock_qty >= 0", name="check_non_negative_stock"),
        Index("idx_products_category_price", "category_id", "price"),
    )

    @property
    def is_in_stock(self) -> bool:
        return self.stock_qty > 0


class ProductVariant(Base, TimestampedModel, UUIDModel):
    """Product variants (size, color, etc.)"""

    __tablename__ = "product_variants"

    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    sku = Column(String(100), unique=True, nullable=True, index=True)

    # Variant attributes
    attributes = Column(JSON, nullable=True)  # {"color": "Red", "size": "XL"}

    # Override the parent product when set
    price = Column(Numeric(10, 2), nullable=True)
    stock_qty = Column(Integer, nullable=True)

    # Relationships
    product = relationship("Product", back_populates="variants")

    __table_args__ = (
        CheckConstraint("stock_qty IS NULL OR stock_qty >= 0", name="check_variant_non_negative_stock"),
    )


class ProductImage(Base, TimestampedModel, UUIDModel):
    """Product images"""

    __tablename__ = "product_images"

    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False, index=True)
    url = Column(String(500), nullable=False)
    alt_text = Column(String(255), nullable=True)
    position = Column(Integer, default=0, nullable=False)
    is_primary = Column(Boolean, default=False, nullable=False)

    # Relationships
    product = relationship("Product", back_populates="images")
