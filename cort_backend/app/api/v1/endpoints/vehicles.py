"""
Vehicle API Endpoints.

Role checks are declared per route; per-vehicle ownership rules are
enforced in VehicleService.
"""

from typing import Optional
from fastapi import APIRouter, Depends, status, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession
from cort_backend.app.db.session import get_db
from cort_backend.app.core.config import settings
from cort_backend.app.core.guards import authorize
from cort_backend.app.core.policy import RoutePolicy
from cort_backend.app.models.enums import UserRole
from cort_backend.app.models.vehicle_enums import OwnershipType, VehicleCategory
from cort_backend.app.schemas.auth import AuthenticatedUser
from cort_backend.app.schemas.common import ApiResponse, MessageResponse, PaginatedData
from cort_backend.app.schemas.vehicle import VehicleCreate, VehicleResponse, VehicleUpdate
from cort_backend.app.services.vehicle_service import VehicleService
from cort_backend.app.utils.messages import VehicleMessages
from cort_backend.app.utils.response import serialize_paginated_response, serialize_response

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])

FLEET_MANAGERS = (UserRole.SUPER_ADMIN, UserRole.COMPANY_ADMIN)

CREATE_POLICY = RoutePolicy.allow(*FLEET_MANAGERS)
LIST_POLICY = RoutePolicy.allow(*FLEET_MANAGERS)
GET_POLICY = RoutePolicy.allow(*FLEET_MANAGERS)
UPDATE_POLICY = RoutePolicy.allow(*FLEET_MANAGERS)
DELETE_POLICY = RoutePolicy.allow(*FLEET_MANAGERS)


@router.post("/create", response_model=ApiResponse[VehicleResponse], status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    current_user: AuthenticatedUser = Depends(authorize(CREATE_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """
    Register a new vehicle.
    
    Company Admin vehicles are owned by their company; Super Admin vehicles
    join the platform fleet.
    """
    vehicle = await VehicleService.create(db, vehicle_data, current_user)
    return serialize_response(
        VehicleResponse.model_validate(vehicle),
        status.HTTP_201_CREATED,
        VehicleMessages.CREATED
    )


@router.get("/list", response_model=ApiResponse[PaginatedData[VehicleResponse]])
async def list_vehicles(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.default_page_size, ge=1, description="Items per page"),
    search: Optional[str] = Query(None, description="Search by plate number, make, or model"),
    category: Optional[VehicleCategory] = Query(None, description="Filter by category"),
    ownership: Optional[OwnershipType] = Query(None, description="Filter by ownership type"),
    show_all: bool = Query(False, description="Super Admin only: include client-owned vehicles"),
    current_user: AuthenticatedUser = Depends(authorize(LIST_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """List vehicles visible to the caller."""
    vehicles, pagination = await VehicleService.find_all(
        db,
        current_user,
        page=page,
        limit=limit,
        search=search,
        category=category,
        ownership=ownership,
        show_all=show_all,
    )
    return serialize_paginated_response(
        [VehicleResponse.model_validate(vehicle) for vehicle in vehicles],
        pagination,
        message=VehicleMessages.LIST_RETRIEVED
    )


@router.get("/{id}", response_model=ApiResponse[VehicleResponse])
async def get_vehicle(
    id: int = Path(..., description="Vehicle ID"),
    current_user: AuthenticatedUser = Depends(authorize(GET_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """Get a vehicle by ID (ownership enforced)."""
    vehicle = await VehicleService.find_one(db, id, current_user)
    return serialize_response(VehicleResponse.model_validate(vehicle), message=VehicleMessages.RETRIEVED)


@router.patch("/update/{id}", response_model=ApiResponse[VehicleResponse])
async def update_vehicle(
    vehicle_data: VehicleUpdate,
    id: int = Path(..., description="Vehicle ID"),
    current_user: AuthenticatedUser = Depends(authorize(UPDATE_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """Update vehicle details. The owning company can never change."""
    vehicle = await VehicleService.update(db, id, vehicle_data, current_user)
    return serialize_response(VehicleResponse.model_validate(vehicle), message=VehicleMessages.UPDATED)


@router.delete("/delete/{id}", response_model=ApiResponse[MessageResponse])
async def delete_vehicle(
    id: int = Path(..., description="Vehicle ID"),
    current_user: AuthenticatedUser = Depends(authorize(DELETE_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """
    Delete a vehicle.
    
    Blocked while bookings, routes, driver profiles or contracts reference it.
    """
    message = await VehicleService.remove(db, id, current_user)
    return serialize_response(MessageResponse(message=message), message=message)
