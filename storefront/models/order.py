"""
Order models
Orders are immutable snapshots; only status fields change after creation
"""

from sqlalchemy import Column, String, Numeric, Integer, Enum, ForeignKey, Index, Text, DateTime, Uuid
from sqlalchemy.orm import relationship
import enum

from .base import Base, TimestampedModel, UUIDModel, utcnow


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class Order(Base, TimestampedModel, UUIDModel):
    """Placed order"""

    __tablename__ = "orders"

    # Order identification
    order_number = Column(String(50), unique=True, nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    # Status
    status = Column(Enum(OrderStatus), default=OrderStatus.PENDING, nullable=False, index=True)
    payment_status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)
    payment_method = Column(String(50), nullable=False)

    # Amounts
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    shipping_cost = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    # Addresses
    shipping_address_id = Column(Uuid(as_uuid=True), ForeignKey("addresses.id"), nullable=False)
    billing_address_id = Column(Uuid(as_uuid=True), ForeignKey("addresses.id"), nullable=False)

    # Relationships
    user = relationship("User", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
    tracking = relationship(
        "OrderTracking",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderTracking.timestamp.desc()"
    )
    shipping_address = relationship("Address", foreign_keys=[shipping_address_id])
    billing_address = relationship("Address", foreign_keys=[billing_address_id])

    # Indexes
    __table_args__ = (
        Index("idx_orders_user_created", "user_id", "created_at"),
    )


class OrderItem(Base, TimestampedModel, UUIDModel):
    """Line of an order, copied from the cart at checkout"""

    __tablename__ = "order_items"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False)
    variant_id = Column(Uuid(as_uuid=True), ForeignKey("product_variants.id"), nullable=True)

    # Item details (snapshot at time of order)
    product_name = Column(String(200), nullable=False)
    product_sku = Column(String(100), nullable=True)

    # Quantities and pricing
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product", back_populates="order_items")


class OrderTracking(Base, UUIDModel):
    """Append-only order history entry"""

    __tablename__ = "order_tracking"

    order_id = Column(Uuid(as_uuid=True), ForeignKey("orders.id"), nullable=False)
    status = Column(String(100), nullable=False)
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    order = relationship("Order", back_populates="tracking")

    __table_args__ = (
        Index("idx_order_tracking_order_time", "order_id", "timestamp"),
    )
