"""
Address model for shipping and billing
"""

from sqlalchemy import Column, String, Boolean, Enum, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import enum

from .base import Base, TimestampedModel, UUIDModel


class AddressType(str, enum.Enum):
    SHIPPING = "shipping"
    BILLING = "billing"
    BOTH = "both"


class Address(Base, TimestampedModel, UUIDModel):
    """User addresses for shipping/billing"""

    __tablename__ = "addresses"

    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    type = Column(Enum(AddressType), default=AddressType.BOTH, nullable=False)

    # Recipient
    full_name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=False)

    # Location
    street = Column(String(500), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    postal_code = Column(String(20), nullable=False)
    country = Column(String(100), nullable=False)

    is_default = Column(Boolean, default=False, nullable=False)

    # Relationships
    user = relationship("User", back_populates="addresses")
