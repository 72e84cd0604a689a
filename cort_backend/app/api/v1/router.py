"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from cort_backend.app.api.v1.endpoints import auth, companies, vehicles

router = APIRouter()

# Authentication endpoints
router.include_router(auth.router)

# Resource endpoints
router.include_router(companies.router)
router.include_router(vehicles.router)
