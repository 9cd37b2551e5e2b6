"""
Pagination utilities
"""

from typing import Any, Dict
from fastapi import Query
from pydantic import BaseModel, Field
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from storefront.core.config import settings


class PaginationParams(BaseModel):
    """Pagination parameters"""
    page: int = Field(1, ge=1, description="Page number")
    limit: int = Field(20, ge=1, description="Page size")

    @property
    def offset(self) -> int:
        """Calculate offset"""
        return (self.page - 1) * self.limit


def get_pagination_params(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Page size"
    )
) -> PaginationParams:
    """Get pagination parameters from query"""
    return PaginationParams(page=page, limit=limit)


async def paginate(
    db: AsyncSession,
    query: Select,
    params: PaginationParams
) -> Dict[str, Any]:
    """
    Paginate query results

    Args:
        db: Database session
        query: SQLAlchemy query (ordering and loader options included)
        params: Page and page size

    Returns:
        Dictionary with the page of items and pagination metadata
    """
    # Get total count
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total = await db.scalar(count_query) or 0

    # Apply pagination
    result = await db.execute(query.offset(params.offset).limit(params.limit))
    items = list(result.scalars().unique().all())

    return {
        "items": items,
        "pagination": {
            "page": params.page,
            "limit": params.limit,
            "total": total,
            "total_pages": (total + params.limit - 1) // params.limit,
        },
    }
