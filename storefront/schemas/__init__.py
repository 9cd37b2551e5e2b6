"""Shared request/response schemas"""

from .base import ApiResponse, BaseSchema, PaginationMeta

__all__ = ["ApiResponse", "BaseSchema", "PaginationMeta"]
