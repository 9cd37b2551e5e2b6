"""
Review schemas
"""

from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime
import uuid

from storefront.models import VoteType
from storefront.schemas.base import BaseSchema, PaginationMeta


class ReviewCreate(BaseSchema):
    """Schema for creating a review"""
    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1, max_length=100)
    comment: str = Field(..., min_length=10, max_length=1000)
    images: Optional[List[str]] = Field(None, max_length=10)

    @field_validator("images")
    @classmethod
    def validate_image_urls(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        for url in v or []:
            if not url.startswith(("http://", "https://")) or len(url) > 500:
                raise ValueError("images must be http(s) URLs")
        return v


class ReviewUpdate(BaseSchema):
    """Schema for partially updating a review"""
    rating: Optional[int] = Field(None, ge=1, le=5)
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    comment: Optional[str] = Field(None, min_length=10, max_length=1000)


class ReviewVoteCreate(BaseSchema):
    vote_type: VoteType

    @field_validator("vote_type", mode="before")
    @classmethod
    def normalize_case(cls, v):
        # HELPFUL and helpful are the same vote
        return v.lower() if isinstance(v, str) else v


class ReviewAuthor(BaseSchema):
    id: uuid.UUID
    first_name: str
    last_name: str


class ReviewImageResponse(BaseSchema):
    id: uuid.UUID
    url: str


class ReviewResponse(BaseSchema):
    """Schema for review response"""
    id: uuid.UUID
    product_id: uuid.UUID
    rating: int
    title: str
    comment: str
    helpful_count: int
    unhelpful_count: int
    user: ReviewAuthor
    images: List[ReviewImageResponse] = []
    created_at: datetime
    updated_at: datetime


class ReviewData(BaseSchema):
    review: ReviewResponse


class ReviewListData(BaseSchema):
    reviews: List[ReviewResponse]
    pagination: PaginationMeta


class VoteCounts(BaseSchema):
    helpful_count: int
    unhelpful_count: int
