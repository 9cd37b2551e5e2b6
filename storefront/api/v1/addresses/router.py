"""
Address book routes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from storefront.core.database import get_db
from storefront.api.v1.auth.dependencies import get_current_user
from storefront.models import Address, User
from storefront.schemas.base import ApiResponse
from .crud import AddressRepository
from .schemas import AddressCreate, AddressData, AddressListData, AddressResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=ApiResponse[AddressListData])
async def list_addresses(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List the caller's addresses"""
    addresses = await AddressRepository(db).list_for_user(current_user.id)
    return ApiResponse(
        data=AddressListData(
            addresses=[AddressResponse.model_validate(a) for a in addresses]
        )
    )


@router.post(
    "",
    response_model=ApiResponse[AddressData],
    status_code=status.HTTP_201_CREATED
)
async def create_address(
    address_data: AddressCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Add an address to the caller's address book"""
    address = await AddressRepository(db).add(
        Address(user_id=current_user.id, **address_data.model_dump())
    )
    logger.info(f"Address created: {address.id} for user {current_user.id}")
    return ApiResponse(
        message="Address created successfully",
        data=AddressData(address=AddressResponse.model_validate(address))
    )
