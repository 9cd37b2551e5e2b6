"""
Category model for product categorization
Hierarchy is a flat adjacency list: each row points at its parent by id
"""

from sqlalchemy import Column, String, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from .base import Base, TimestampedModel, UUIDModel


class Category(Base, TimestampedModel, UUIDModel):
    """Product category with optional parent"""

    __tablename__ = "categories"

    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)

    # No acyclicity check; parent_id may point anywhere in the table
    parent_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=True, index=True)

    # Relationships
    parent = relationship("Category", remote_side="Category.id", back_populates="children")
    children = relationship("Category", back_populates="parent")
    products = relationship("Product", back_populates="category")
