"""
Pagination helpers for list endpoints.
"""

import math
from cort_backend.app.schemas.common import PaginationMeta


def calculate_pagination(page: int, limit: int, total: int) -> PaginationMeta:
    """
    Build pagination metadata.
    
    pages is ceil(total / limit), and at least 1 so an empty result still
    reports a single (empty) page.
    
    Example:
        total=25, limit=10 -> pages=3; page 1 has no previous page,
        page 3 has no next page.
    """
    pages = math.ceil(total / limit) or 1
    return PaginationMeta(
        page=page,
        limit=limit,
        total=total,
        pages=pages,
        hasNext=page < pages,
        hasPrev=page > 1,
    )


def calculate_skip(page: int, limit: int) -> int:
    """Row offset for the given 1-based page."""
    return (page - 1) * limit
