"""
Product review and rating models
One review per user and product; votes are one per user and review
"""

from sqlalchemy import (
    Column, String, Integer, Text, Enum, ForeignKey, Index, UniqueConstraint, CheckConstraint, Uuid
)
from sqlalchemy.orm import relationship
import enum

from .base import Base, TimestampedModel, UUIDModel


class VoteType(str, enum.Enum):
    HELPFUL = "helpful"
    UNHELPFUL = "unhelpful"


class Review(Base, TimestampedModel, UUIDModel):
    """Product reviews and ratings"""

    __tablename__ = "reviews"

    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)

    # Review content
    rating = Column(Integer, nullable=False)
    title = Column(String(100), nullable=False)
    comment = Column(Text, nullable=False)

    # Engagement, recounted from votes on every vote
    helpful_count = Column(Integer, default=0, nullable=False)
    unhelpful_count = Column(Integer, default=0, nullable=False)

    # Relationships
    product = relationship("Product", back_populates="reviews")
    user = relationship("User", back_populates="reviews")
    images = relationship("ReviewImage", back_populates="review", cascade="all, delete-orphan")
    votes = relationship("ReviewVote", back_populates="review", cascade="all, delete-orphan")

    # Constraints
    __table_args__ = (
        UniqueConstraint("product_id", "user_id", name="uq_product_user_review"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="check_rating_range"),
        Index("idx_reviews_product_created", "product_id", "created_at"),
    )


class ReviewImage(Base, TimestampedModel, UUIDModel):
    """Image attached to a review"""

    __tablename__ = "review_images"

    review_id = Column(Uuid(as_uuid=True), ForeignKey("reviews.id"), nullable=False, index=True)
    url = Column(String(500), nullable=False)

    review = relationship("Review", back_populates="images")


class ReviewVote(Base, TimestampedModel, UUIDModel):
    """Helpful/unhelpful vote on a review"""

    __tablename__ = "review_votes"

    review_id = Column(Uuid(as_uuid=True), ForeignKey("reviews.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    vote_type = Column(Enum(VoteType), nullable=False)

    review = relationship("Review", back_populates="votes")

    __table_args__ = (
        UniqueConstraint("review_id", "user_id", name="uq_review_user_vote"),
    )
