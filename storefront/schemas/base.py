"""Base schemas and the response envelope"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Base schema with common configuration

    JSON keys are camelCase on the wire; snake_case names are accepted too.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every successful response"""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class PaginationMeta(BaseSchema):
    """Pagination block returned with list endpoints"""
    page: int
    limit: int
    total: int
    total_pages: int
