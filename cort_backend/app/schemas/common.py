"""
Response envelope schemas shared by every endpoint.

Success: {data, status, message}
Paginated: {data: {data: [...], pagination}, status, message}
"""

from pydantic import BaseModel
from typing import Generic, List, TypeVar

T = TypeVar("T")


class PaginationMeta(BaseModel):
    """Pagination metadata for list responses."""
    page: int
    limit: int
    total: int
    pages: int
    hasNext: bool
    hasPrev: bool


class ApiResponse(BaseModel, Generic[T]):
    """Standard response envelope."""
    data: T
    status: int
    message: str


class PaginatedData(BaseModel, Generic[T]):
    """Page of items plus pagination metadata."""
    data: List[T]
    pagination: PaginationMeta


class MessageResponse(BaseModel):
    """Payload for operations that only report a message (deletes)."""
    message: str
