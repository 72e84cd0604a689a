"""
Response envelope helpers.
"""

from typing import Any, Dict, List
from fastapi import status
from cort_backend.app.schemas.common import PaginationMeta


def serialize_response(
    data: Any,
    status_code: int = status.HTTP_200_OK,
    message: str = "Success"
) -> Dict[str, Any]:
    """Wrap a payload in the {data, status, message} envelope."""
    return {
        "data": data,
        "status": status_code,
        "message": message,
    }


def serialize_paginated_response(
    items: List[Any],
    pagination: PaginationMeta,
    status_code: int = status.HTTP_200_OK,
    message: str = "Success"
) -> Dict[str, Any]:
    """Wrap a page of items in the paginated envelope."""
    return serialize_response(
        {"data": items, "pagination": pagination},
        status_code=status_code,
        message=message,
    )
