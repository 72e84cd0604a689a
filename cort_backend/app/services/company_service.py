"""
Company service.

CRUD for client companies. Role and instance ownership checks happen in the
route guards before these methods run; list scoping for COMPANY_ADMIN is
applied here.
"""

import logging
from typing import List, Tuple

from sqlalchemy import select, func, false
from sqlalchemy.ext.asyncio import AsyncSession

from cort_backend.app.core.exceptions import ConflictError, InvalidStateError, ResourceNotFoundError
from cort_backend.app.models.company import Company
from cort_backend.app.models.enums import UserRole
from cort_backend.app.models.route import Route
from cort_backend.app.models.user import User
from cort_backend.app.models.vehicle import Vehicle
from cort_backend.app.schemas.auth import AuthenticatedUser
from cort_backend.app.schemas.common import PaginationMeta
from cort_backend.app.schemas.company import CompanyCreate, CompanyUpdate
from cort_backend.app.utils.messages import CompanyMessages
from cort_backend.app.utils.pagination import calculate_pagination, calculate_skip

logger = logging.getLogger("cort.companies")


async def _count(db: AsyncSession, column, value) -> int:
    result = await db.execute(select(func.count()).where(column == value))
    return result.scalar() or 0


class CompanyService:

    @staticmethod
    async def _email_taken(db: AsyncSession, email: str) -> bool:
        result = await db.execute(select(Company.id).where(Company.email == email))
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def create(db: AsyncSession, company_data: CompanyCreate) -> Company:
        if await CompanyService._email_taken(db, company_data.email):
            raise ConflictError(CompanyMessages.EMAIL_EXISTS, field="email")

        company = Company(**company_data.model_dump())
        db.add(company)
        await db.commit()
        await db.refresh(company)

        logger.info("Company %s created", company.id)
        return company

    @staticmethod
    async def find_all(
        db: AsyncSession,
        current_user: AuthenticatedUser,
        page: int = 1,
        limit: int = 10,
        search: str = None,
    ) -> Tuple[List[Company], PaginationMeta]:
        """
        Paginated company list, newest first.
        
        COMPANY_ADMIN only ever sees their own company; an admin without a
        company sees nothing.
        """
        conditions = []

        if current_user.role == UserRole.COMPANY_ADMIN:
            if current_user.company_id is None:
                conditions.append(false())
            else:
                conditions.append(Company.id == current_user.company_id)

        if search:
            conditions.append(Company.name.ilike(f"%{search}%"))

        total_result = await db.execute(select(func.count(Company.id)).where(*conditions))
        total = total_result.scalar() or 0

        query = (
            select(Company)
            .where(*conditions)
            .order_by(Company.created_at.desc(), Company.id.desc())
            .offset(calculate_skip(page, limit))
            .limit(limit)
        )
        result = await db.execute(query)
        companies = list(result.scalars().all())

        return companies, calculate_pagination(page, limit, total)

    @staticmethod
    async def find_one(db: AsyncSession, company_id: int) -> Company:
        result = await db.execute(select(Company).where(Company.id == company_id))
        company = result.scalar_one_or_none()

        if not company:
            raise ResourceNotFoundError(CompanyMessages.NOT_FOUND, resource="company", resource_id=company_id)

        return company

    @staticmethod
    async def update(db: AsyncSession, company_id: int, company_data: CompanyUpdate) -> Company:
        company = await CompanyService.find_one(db, company_id)

        update_data = company_data.model_dump(exclude_unset=True, exclude_none=True)

        new_email = update_data.get("email")
        if new_email and new_email != company.email:
            if await CompanyService._email_taken(db, new_email):
                raise ConflictError(CompanyMessages.EMAIL_EXISTS, field="email")

        for field, value in update_data.items():
            setattr(company, field, value)

        await db.commit()
        await db.refresh(company)

        logger.info("Company %s updated (%s)", company.id, ", ".join(update_data) or "no changes")
        return company

    @staticmethod
    async def remove(db: AsyncSession, company_id: int) -> str:
        """
        Delete a company that owns no users, vehicles or routes.
        
        Raises:
            ResourceNotFoundError: unknown company
            InvalidStateError: dependent records exist
        """
        company = await CompanyService.find_one(db, company_id)

        dependents = {
            "users": await _count(db, User.company_id, company_id),
            "vehicles": await _count(db, Vehicle.owner_company_id, company_id),
            "routes": await _count(db, Route.company_id, company_id),
        }
        if any(count > 0 for count in dependents.values()):
            logger.info("Company %s not deleted, dependents: %s", company_id, dependents)
            raise InvalidStateError(CompanyMessages.CANNOT_DELETE_WITH_RELATIONS)

        await db.delete(company)
        await db.commit()

        logger.info("Company %s deleted", company_id)
        return CompanyMessages.DELETED
