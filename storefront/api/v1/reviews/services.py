"""
Review service layer
Handles product reviews, ratings and helpfulness votes
"""

from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from storefront.core.database import transaction
from storefront.core.exceptions import BadRequestException, ForbiddenException, NotFoundException
from storefront.models import Review, ReviewImage, ReviewVote, User, VoteType
from storefront.utils.pagination import PaginationParams, paginate
from storefront.api.v1.products.crud import ProductRepository
from .crud import ReviewRepository
from .schemas import ReviewCreate, ReviewUpdate, VoteCounts

logger = logging.getLogger(__name__)


class ReviewService:
    """Product review service"""

    def __init__(
        self,
        db: AsyncSession,
        reviews: Optional[ReviewRepository] = None,
        products: Optional[ProductRepository] = None
    ):
        self.db = db
        self.reviews = reviews or ReviewRepository(db)
        self.products = products or ProductRepository(db)

    async def list_reviews(self, product_id: uuid.UUID, params: PaginationParams) -> Dict[str, Any]:
        """
        Paginated reviews of a product, newest first

        Raises:
            NotFoundException: If product not found
        """
        if not await self.products.get(product_id):
            raise NotFoundException("Product not found")
        return await paginate(self.db, self.reviews.list_query(product_id), params)

    async def create_review(self, user: User, product_id: uuid.UUID, data: ReviewCreate) -> Review:
        """
        Create a review; each user reviews a product once

        Raises:
            NotFoundException: If product not found
            BadRequestException: If the user already reviewed the product
        """
        async with transaction(self.db):
            if not await self.products.get(product_id):
                raise NotFoundException("Product not found")

            if await self.reviews.get_by_author(product_id, user.id):
                raise BadRequestException(
                    "You have already reviewed this product",
                    error_code="DUPLICATE_REVIEW"
                )

            review = await self.reviews.add(
                Review(
                    product_id=product_id,
                    user_id=user.id,
                    rating=data.rating,
                    title=data.title,
                    comment=data.comment,
                    helpful_count=0,
                    unhelpful_count=0,
                    images=[ReviewImage(url=url) for url in data.images or []]
                )
            )

        logger.info(f"Review created for product {product_id} by user {user.email}")
        return await self._load(review.id)

    async def update_review(self, user: User, review_id: uuid.UUID, data: ReviewUpdate) -> Review:
        """
        Partially update a review

        Raises:
            NotFoundException: If review not found
            ForbiddenException: If caller is not the author
        """
        async with transaction(self.db):
            review = await self.reviews.get(review_id)
            if not review:
                raise NotFoundException("Review not found")

            if review.user_id != user.id:
                raise ForbiddenException("You can only update your own reviews")

            for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(review, field, value)
            await self.db.flush()

        logger.info(f"Review {review_id} updated by user {user.email}")
        return await self._load(review_id)

    async def delete_review(self, user: User, review_id: uuid.UUID) -> None:
        """
        Delete a review with its images and votes

        Raises:
            NotFoundException: If review not found
            ForbiddenException: If caller is neither the author nor an admin
        """
        async with transaction(self.db):
            review = await self.reviews.get(review_id, load_relations=True)
            if not review:
                raise NotFoundException("Review not found")

            if review.user_id != user.id and not user.is_admin:
                raise ForbiddenException("You can only delete your own reviews")

            await self.reviews.delete(review)

        logger.info(f"Review {review_id} deleted by user {user.email}")

    async def vote(self, user: User, review_id: uuid.UUID, vote_type: VoteType) -> VoteCounts:
        """
        Record or change the caller's vote and recount the review's votes

        Raises:
            NotFoundException: If review not found
        """
        async with transaction(self.db):
            review = await self.reviews.get(review_id)
            if not review:
                raise NotFoundException("Review not found")

            vote = await self.reviews.get_vote(review_id, user.id)
            if vote:
                vote.vote_type = vote_type
                await self.db.flush()
            else:
                await self.reviews.add_vote(
                    ReviewVote(review_id=review_id, user_id=user.id, vote_type=vote_type)
                )

            helpful, unhelpful = await self.reviews.count_votes(review_id)
            review.helpful_count = helpful
            review.unhelpful_count = unhelpful
            await self.db.flush()

        logger.info(f"User {user.email} voted {vote_type.value} on review {review_id}")
        return VoteCounts(helpful_count=helpful, unhelpful_count=unhelpful)

    async def _load(self, review_id: uuid.UUID) -> Review:
        review = await self.reviews.get(review_id, load_relations=True)
        if not review:
            raise NotFoundException("Review not found")
        return review
