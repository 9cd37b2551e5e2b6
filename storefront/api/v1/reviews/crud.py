"""
Review CRUD operations
"""

from typing import Dict, Iterable, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select
import uuid

from storefront.models import Review, ReviewVote, VoteType


class ReviewRepository:
    """Review and vote persistence bound to one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, review_id: uuid.UUID, load_relations: bool = False) -> Optional[Review]:
        """Get review by ID, optionally with author, images and votes"""
        query = select(Review).where(Review.id == review_id)

        if load_relations:
            query = query.options(
                selectinload(Review.user),
                selectinload(Review.images),
                selectinload(Review.votes)
            ).execution_options(populate_existing=True)

        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_author(self, product_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Review]:
        """Get a user's review of a product"""
        result = await self.db.execute(
            select(Review).where(Review.product_id == product_id, Review.user_id == user_id)
        )
        return result.scalar_one_or_none()

    def list_query(self, product_id: uuid.UUID) -> Select:
        """Query for a product's reviews, newest first"""
        return (
            select(Review)
            .options(selectinload(Review.user), selectinload(Review.images))
            .where(Review.product_id == product_id)
            .order_by(Review.created_at.desc(), Review.id)
        )

    async def add(self, review: Review) -> Review:
        """Stage a new review with its images"""
        self.db.add(review)
        await self.db.flush()
        return review

    async def delete(self, review: Review) -> None:
        """Delete a review loaded with its images and votes"""
        await self.db.delete(review)
        await self.db.flush()

    async def get_vote(self, review_id: uuid.UUID, user_id: uuid.UUID) -> Optional[ReviewVote]:
        """Get a user's vote on a review"""
        result = await self.db.execute(
            select(ReviewVote).where(ReviewVote.review_id == review_id, ReviewVote.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def add_vote(self, vote: ReviewVote) -> ReviewVote:
        """Stage a new vote"""
        self.db.add(vote)
        await self.db.flush()
        return vote

    async def count_votes(self, review_id: uuid.UUID) -> Tuple[int, int]:
        """Helpful and unhelpful vote counts for a review"""
        result = await self.db.execute(
            select(ReviewVote.vote_type, func.count(ReviewVote.id))
            .where(ReviewVote.review_id == review_id)
            .group_by(ReviewVote.vote_type)
        )
        counts = {vote_type: count for vote_type, count in result.all()}
        return counts.get(VoteType.HELPFUL, 0), counts.get(VoteType.UNHELPFUL, 0)

    async def rating_stats(self, product_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, Tuple[float, int]]:
        """Average rating and review count per product id"""
        product_ids = list(product_ids)
        if not product_ids:
            return {}

        result = await self.db.execute(
            select(Review.product_id, func.avg(Review.rating), func.count(Review.id))
            .where(Review.product_id.in_(product_ids))
            .group_by(Review.product_id)
        )
        return {
            product_id: (round(float(average), 2), count)
            for product_id, average, count in result.all()
        }
