"""
Vehicle service.

Vehicles are either owned by a client company or by the platform fleet
(owner_company_id NULL). Ownership rules live here because they depend on
that duality:

- COMPANY_ADMIN works only with their own company's vehicles.
- SUPER_ADMIN works with the platform fleet; client fleets are read-only
  for them (and listed only with show_all).
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, func, or_, false
from sqlalchemy.ext.asyncio import AsyncSession

from cort_backend.app.core.exceptions import (
    ConflictError,
    InsufficientPermissionsError,
    InvalidStateError,
    ResourceNotFoundError,
)
from cort_backend.app.models.chauffeur_booking import ChauffeurBooking
from cort_backend.app.models.driver_profile import DriverProfile
from cort_backend.app.models.enums import UserRole
from cort_backend.app.models.route import Route
from cort_backend.app.models.shuttle_contract import ShuttleContract
from cort_backend.app.models.vehicle import Vehicle
from cort_backend.app.models.vehicle_enums import OwnershipType, VehicleCategory
from cort_backend.app.schemas.auth import AuthenticatedUser
from cort_backend.app.schemas.common import PaginationMeta
from cort_backend.app.schemas.vehicle import VehicleCreate, VehicleUpdate
from cort_backend.app.utils.messages import VehicleMessages
from cort_backend.app.utils.pagination import calculate_pagination, calculate_skip

logger = logging.getLogger("cort.vehicles")

# Tables whose rows keep a vehicle from being deleted
DEPENDENT_COLUMNS = {
    "chauffeur_bookings": ChauffeurBooking.vehicle_id,
    "routes": Route.vehicle_id,
    "driver_profiles": DriverProfile.vehicle_id,
    "shuttle_contracts": ShuttleContract.vehicle_id,
}


class VehicleService:

    @staticmethod
    async def _plate_taken(db: AsyncSession, plate_number: str) -> bool:
        result = await db.execute(select(Vehicle.id).where(Vehicle.plate_number == plate_number))
        return result.scalar_one_or_none() is not None

    @staticmethod
    def resolve_owner_company(vehicle_data: VehicleCreate, current_user: AuthenticatedUser) -> Optional[int]:
        """
        Decide owner_company_id for a new vehicle.
        
        COMPANY_ADMIN: always their own company (must have one)
        SUPER_ADMIN: platform fleet only; supplying a company is forbidden
        """
        if current_user.role == UserRole.COMPANY_ADMIN:
            if current_user.company_id is None:
                raise InvalidStateError(VehicleMessages.NO_COMPANY)
            return current_user.company_id

        if current_user.role == UserRole.SUPER_ADMIN:
            if vehicle_data.owner_company_id is not None:
                raise InsufficientPermissionsError(VehicleMessages.PLATFORM_ONLY_CREATE)
            return None

        return None

    @staticmethod
    def ensure_can_view(vehicle: Vehicle, current_user: AuthenticatedUser) -> None:
        """COMPANY_ADMIN may only view vehicles owned by their company."""
        if current_user.role == UserRole.COMPANY_ADMIN:
            if current_user.company_id is None or vehicle.owner_company_id != current_user.company_id:
                raise InsufficientPermissionsError(VehicleMessages.UNAUTHORIZED_ACCESS)

    @staticmethod
    def ensure_can_mutate(vehicle: Vehicle, current_user: AuthenticatedUser, message: str) -> None:
        """SUPER_ADMIN may only modify platform fleet vehicles."""
        if current_user.role == UserRole.SUPER_ADMIN and vehicle.owner_company_id is not None:
            raise InsufficientPermissionsError(message)

    @staticmethod
    async def _get(db: AsyncSession, vehicle_id: int) -> Optional[Vehicle]:
        # populate_existing refreshes server-side timestamps and the owner relationship
        result = await db.execute(
            select(Vehicle)
            .where(Vehicle.id == vehicle_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create(db: AsyncSession, vehicle_data: VehicleCreate, current_user: AuthenticatedUser) -> Vehicle:
        owner_company_id = VehicleService.resolve_owner_company(vehicle_data, current_user)

        if await VehicleService._plate_taken(db, vehicle_data.plate_number):
            raise ConflictError(VehicleMessages.PLATE_EXISTS, field="plate_number")

        values = vehicle_data.model_dump(exclude={"owner_company_id"})
        vehicle = Vehicle(**values, owner_company_id=owner_company_id)
        db.add(vehicle)
        await db.commit()

        logger.info("Vehicle %s created by %s (owner_company_id=%s)", vehicle.id, current_user.id, owner_company_id)
        return await VehicleService._get(db, vehicle.id)

    @staticmethod
    async def find_all(
        db: AsyncSession,
        current_user: AuthenticatedUser,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        category: Optional[VehicleCategory] = None,
        ownership: Optional[OwnershipType] = None,
        show_all: bool = False,
    ) -> Tuple[List[Vehicle], PaginationMeta]:
        """
        Paginated vehicle list, newest first.
        
        Scoping:
            COMPANY_ADMIN: owner_company_id = their company (nothing without one)
            SUPER_ADMIN: platform fleet only, unless show_all is set
        """
        conditions = []

        if current_user.role == UserRole.COMPANY_ADMIN:
            if current_user.company_id is None:
                conditions.append(false())
            else:
                conditions.append(Vehicle.owner_company_id == current_user.company_id)
        elif current_user.role == UserRole.SUPER_ADMIN:
            if not show_all:
                conditions.append(Vehicle.owner_company_id.is_(None))

        if search:
            pattern = f"%{search}%"
            conditions.append(or_(
                Vehicle.plate_number.ilike(pattern),
                Vehicle.make.ilike(pattern),
                Vehicle.model.ilike(pattern),
            ))

        if category:
            conditions.append(Vehicle.category == category)

        if ownership:
            conditions.append(Vehicle.ownership == ownership)

        total_result = await db.execute(select(func.count(Vehicle.id)).where(*conditions))
        total = total_result.scalar() or 0

        query = (
            select(Vehicle)
            .where(*conditions)
            .order_by(Vehicle.id.desc())
            .offset(calculate_skip(page, limit))
            .limit(limit)
        )
        result = await db.execute(query)
        vehicles = list(result.scalars().all())

        return vehicles, calculate_pagination(page, limit, total)

    @staticmethod
    async def find_one(db: AsyncSession, vehicle_id: int, current_user: AuthenticatedUser) -> Vehicle:
        vehicle = await VehicleService._get(db, vehicle_id)

        if not vehicle:
            raise ResourceNotFoundError(VehicleMessages.NOT_FOUND, resource="vehicle", resource_id=vehicle_id)

        VehicleService.ensure_can_view(vehicle, current_user)
        return vehicle

    @staticmethod
    async def update(
        db: AsyncSession,
        vehicle_id: int,
        vehicle_data: VehicleUpdate,
        current_user: AuthenticatedUser,
    ) -> Vehicle:
        vehicle = await VehicleService.find_one(db, vehicle_id, current_user)
        VehicleService.ensure_can_mutate(vehicle, current_user, VehicleMessages.PLATFORM_ONLY_UPDATE)

        update_data = vehicle_data.model_dump(exclude_unset=True, exclude_none=True)
        # Ownership transfer is not an update operation
        update_data.pop("owner_company_id", None)

        new_plate = update_data.get("plate_number")
        if new_plate and new_plate != vehicle.plate_number:
            if await VehicleService._plate_taken(db, new_plate):
                raise ConflictError(VehicleMessages.PLATE_EXISTS, field="plate_number")

        for field, value in update_data.items():
            setattr(vehicle, field, value)

        await db.commit()

        logger.info("Vehicle %s updated by %s (%s)", vehicle_id, current_user.id, ", ".join(update_data) or "no changes")
        return await VehicleService._get(db, vehicle_id)

    @staticmethod
    async def count_dependents(db: AsyncSession, vehicle_id: int) -> dict:
        counts = {}
        for name, column in DEPENDENT_COLUMNS.items():
            result = await db.execute(select(func.count()).where(column == vehicle_id))
            counts[name] = result.scalar() or 0
        return counts

    @staticmethod
    async def remove(db: AsyncSession, vehicle_id: int, current_user: AuthenticatedUser) -> str:
        """
        Delete a vehicle with no bookings, routes, driver profiles or contracts.
        
        Raises:
            ResourceNotFoundError: unknown vehicle
            InsufficientPermissionsError: ownership rules deny the caller
            InvalidStateError: dependent records exist
        """
        vehicle = await VehicleService.find_one(db, vehicle_id, current_user)
        VehicleService.ensure_can_mutate(vehicle, current_user, VehicleMessages.PLATFORM_ONLY_DELETE)

        dependents = await VehicleService.count_dependents(db, vehicle_id)
        if any(count > 0 for count in dependents.values()):
            logger.info("Vehicle %s not deleted, dependents: %s", vehicle_id, dependents)
            raise InvalidStateError(VehicleMessages.CANNOT_DELETE_WITH_RELATIONS)

        await db.delete(vehicle)
        await db.commit()

        logger.info("Vehicle %s deleted by %s", vehicle_id, current_user.id)
        return VehicleMessages.DELETED
