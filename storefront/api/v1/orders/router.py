"""
Order API routes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from storefront.core.database import get_db
from storefront.api.v1.auth.dependencies import get_current_user, require_admin
from storefront.models import User
from storefront.schemas.base import ApiResponse
from storefront.utils.pagination import PaginationParams, get_pagination_params
from .schemas import (
    OrderCreate,
    OrderData,
    OrderListData,
    OrderListItem,
    OrderResponse,
    OrderStatusUpdate,
    TrackingCreate,
    TrackingData,
    TrackingResponse
)
from .services import OrderService

router = APIRouter()


def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    return OrderService(db)


@router.post(
    "",
    response_model=ApiResponse[OrderData],
    status_code=status.HTTP_201_CREATED
)
async def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Place an order from the caller's cart"""
    order = await service.place_order(current_user, order_data)
    return ApiResponse(
        message="Order created successfully",
        data=OrderData(order=OrderResponse.model_validate(order))
    )


@router.get("", response_model=ApiResponse[OrderListData])
async def list_orders(
    pagination: PaginationParams = Depends(get_pagination_params),
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """List the caller's orders"""
    result = await service.list_orders(current_user, pagination)
    return ApiResponse(
        data=OrderListData(
            orders=[OrderListItem.model_validate(o) for o in result["items"]],
            pagination=result["pagination"]
        )
    )


@router.get("/{order_id}", response_model=ApiResponse[OrderData])
async def get_order(
    order_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Get order details"""
    order = await service.get_order(current_user, order_id)
    return ApiResponse(data=OrderData(order=OrderResponse.model_validate(order)))


@router.put("/{order_id}/status", response_model=ApiResponse[OrderData])
async def update_order_status(
    order_id: uuid.UUID,
    status_data: OrderStatusUpdate,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """Update order status (admin); status names are case-insensitive"""
    order = await service.update_status(order_id, status_data.status)
    return ApiResponse(
        message="Order status updated successfully",
        data=OrderData(order=OrderResponse.model_validate(order))
    )


@router.post(
    "/{order_id}/tracking",
    response_model=ApiResponse[TrackingData],
    status_code=status.HTTP_201_CREATED
)
async def add_order_tracking(
    order_id: uuid.UUID,
    tracking_data: TrackingCreate,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """Add tracking information (admin)"""
    entry = await service.add_tracking(order_id, tracking_data)
    return ApiResponse(
        message="Tracking information added successfully",
        data=TrackingData(tracking=TrackingResponse.model_validate(entry))
    )
