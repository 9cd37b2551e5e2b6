"""
Cart API routes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.database import get_db
from storefront.api.v1.auth.dependencies import get_current_user
from storefront.models import User
from storefront.schemas.base import ApiResponse
from .schemas import CartData, CartItemCreate, CartItemUpdate
from .services import CartService

router = APIRouter()


def get_cart_service(db: AsyncSession = Depends(get_db)) -> CartService:
    return CartService(db)


@router.get("", response_model=ApiResponse[CartData])
async def get_cart(
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Get the caller's cart"""
    cart = await service.get_cart(current_user)
    return ApiResponse(data=CartData(cart=cart))


@router.post(
    "/items",
    response_model=ApiResponse[CartData],
    status_code=status.HTTP_201_CREATED
)
async def add_to_cart(
    item_data: CartItemCreate,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Add item to cart"""
    cart = await service.add_item(current_user, item_data)
    return ApiResponse(message="Item added to cart", data=CartData(cart=cart))


@router.put("/items/{item_id}", response_model=ApiResponse[CartData])
async def update_cart_item(
    item_id: uuid.UUID,
    update_data: CartItemUpdate,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Update cart item quantity"""
    cart = await service.update_item(current_user, item_id, update_data.quantity)
    return ApiResponse(message="Cart item updated", data=CartData(cart=cart))


@router.delete("/items/{item_id}", response_model=ApiResponse[None])
async def remove_cart_item(
    item_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Remove item from cart"""
    await service.remove_item(current_user, item_id)
    return ApiResponse(message="Item removed from cart")


@router.delete("", response_model=ApiResponse[None])
async def clear_cart(
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service)
):
    """Remove every item from the cart"""
    await service.clear_cart(current_user)
    return ApiResponse(message="Cart cleared")
