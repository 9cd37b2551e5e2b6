"""
Wishlist API routes
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.database import get_db
from storefront.api.v1.auth.dependencies import get_current_user
from storefront.models import User
from storefront.schemas.base import ApiResponse
from .schemas import (
    WishlistAdd,
    WishlistData,
    WishlistItemData,
    WishlistItemResponse,
    WishlistResponse
)
from .services import WishlistService

router = APIRouter()


def get_wishlist_service(db: AsyncSession = Depends(get_db)) -> WishlistService:
    return WishlistService(db)


@router.get("", response_model=ApiResponse[WishlistData])
async def get_wishlist(
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Get the caller's wishlist"""
    items = await service.get_wishlist(current_user)
    return ApiResponse(
        data=WishlistData(
            wishlist=WishlistResponse(
                items=[WishlistItemResponse.from_item(item) for item in items],
                item_count=len(items)
            )
        )
    )


@router.post(
    "",
    response_model=ApiResponse[WishlistItemData],
    status_code=status.HTTP_201_CREATED
)
async def add_to_wishlist(
    data: WishlistAdd,
    response: Response,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Add product to wishlist; adding it again returns the existing entry"""
    item, created = await service.add(current_user, data.product_id)
    if not created:
        response.status_code = status.HTTP_200_OK

    return ApiResponse(
        message="Product added to wishlist" if created else "Product already in wishlist",
        data=WishlistItemData(wishlist_item=WishlistItemResponse.from_item(item))
    )


@router.delete("/{product_id}", response_model=ApiResponse[None])
async def remove_from_wishlist(
    product_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Remove product from wishlist"""
    removed = await service.remove(current_user, product_id)
    return ApiResponse(
        message="Product removed from wishlist" if removed else "Product not in wishlist"
    )


@router.post("/{product_id}/move-to-cart", response_model=ApiResponse[None])
async def move_to_cart(
    product_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Move product from wishlist to cart"""
    await service.move_to_cart(current_user, product_id)
    return ApiResponse(message="Product moved to cart")
