"""
Review API routes
Listing and creation hang off a product; edits, deletes and votes address the review
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.database import get_db
from storefront.api.v1.auth.dependencies import get_current_user
from storefront.models import User
from storefront.schemas.base import ApiResponse
from storefront.utils.pagination import PaginationParams, get_pagination_params
from .schemas import (
    ReviewCreate,
    ReviewData,
    ReviewListData,
    ReviewResponse,
    ReviewUpdate,
    ReviewVoteCreate,
    VoteCounts
)
from .services import ReviewService

router = APIRouter()
product_reviews_router = APIRouter()


def get_review_service(db: AsyncSession = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


@product_reviews_router.get(
    "/{product_id}/reviews",
    response_model=ApiResponse[ReviewListData],
    summary="List product reviews"
)
async def list_product_reviews(
    product_id: uuid.UUID,
    pagination: PaginationParams = Depends(get_pagination_params),
    service: ReviewService = Depends(get_review_service)
):
    """Reviews of a product, newest first"""
    result = await service.list_reviews(product_id, pagination)
    return ApiResponse(
        data=ReviewListData(
            reviews=[ReviewResponse.model_validate(r) for r in result["items"]],
            pagination=result["pagination"]
        )
    )


@product_reviews_router.post(
    "/{product_id}/reviews",
    response_model=ApiResponse[ReviewData],
    status_code=status.HTTP_201_CREATED,
    summary="Review a product"
)
async def create_review(
    product_id: uuid.UUID,
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    """Create a review for a product"""
    review = await service.create_review(current_user, product_id, review_data)
    return ApiResponse(
        message="Review created successfully",
        data=ReviewData(review=ReviewResponse.model_validate(review))
    )


@router.put("/{review_id}", response_model=ApiResponse[ReviewData])
async def update_review(
    review_id: uuid.UUID,
    review_data: ReviewUpdate,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    """Update own review"""
    review = await service.update_review(current_user, review_id, review_data)
    return ApiResponse(
        message="Review updated successfully",
        data=ReviewData(review=ReviewResponse.model_validate(review))
    )


@router.delete("/{review_id}", response_model=ApiResponse[None])
async def delete_review(
    review_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    """Delete own review (admins may delete any)"""
    await service.delete_review(current_user, review_id)
    return ApiResponse(message="Review deleted successfully")


@router.post("/{review_id}/vote", response_model=ApiResponse[VoteCounts])
async def vote_review(
    review_id: uuid.UUID,
    vote_data: ReviewVoteCreate,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service)
):
    """Mark a review helpful or unhelpful"""
    counts = await service.vote(current_user, review_id, vote_data.vote_type)
    return ApiResponse(message="Vote recorded successfully", data=counts)
