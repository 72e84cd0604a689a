"""
Company API Endpoints.

Creation and deletion are SUPER_ADMIN only; instance reads and updates are
restricted to the caller's own company unless they are SUPER_ADMIN.
"""

from typing import Optional
from fastapi import APIRouter, Depends, status, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession
from cort_backend.app.db.session import get_db
from cort_backend.app.core.config import settings
from cort_backend.app.core.guards import authorize
from cort_backend.app.core.policy import OwnershipLevel, RoutePolicy
from cort_backend.app.models.enums import UserRole
from cort_backend.app.schemas.auth import AuthenticatedUser
from cort_backend.app.schemas.common import ApiResponse, MessageResponse, PaginatedData
from cort_backend.app.schemas.company import CompanyCreate, CompanyResponse, CompanyUpdate
from cort_backend.app.services.company_service import CompanyService
from cort_backend.app.utils.messages import CompanyMessages
from cort_backend.app.utils.response import serialize_paginated_response, serialize_response

router = APIRouter(prefix="/companies", tags=["Companies"])

CREATE_POLICY = RoutePolicy.allow(UserRole.SUPER_ADMIN)
LIST_POLICY = RoutePolicy.allow(UserRole.SUPER_ADMIN, UserRole.COMPANY_ADMIN)
GET_POLICY = RoutePolicy.allow(
    UserRole.SUPER_ADMIN, UserRole.COMPANY_ADMIN, UserRole.EMPLOYEE,
    ownership=OwnershipLevel.OWN_ONLY,
)
UPDATE_POLICY = RoutePolicy.allow(
    UserRole.SUPER_ADMIN, UserRole.COMPANY_ADMIN,
    ownership=OwnershipLevel.OWN_ONLY,
)
DELETE_POLICY = RoutePolicy.allow(UserRole.SUPER_ADMIN)


@router.post("/create", response_model=ApiResponse[CompanyResponse], status_code=status.HTTP_201_CREATED)
async def create_company(
    company_data: CompanyCreate,
    current_user: AuthenticatedUser = Depends(authorize(CREATE_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """Create a new company (Super Admin only)."""
    company = await CompanyService.create(db, company_data)
    return serialize_response(
        CompanyResponse.model_validate(company),
        status.HTTP_201_CREATED,
        CompanyMessages.CREATED
    )


@router.get("/list", response_model=ApiResponse[PaginatedData[CompanyResponse]])
async def list_companies(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.default_page_size, ge=1, description="Items per page"),
    search: Optional[str] = Query(None, description="Search by company name"),
    current_user: AuthenticatedUser = Depends(authorize(LIST_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """
    List companies.
    
    Company Admins only see their own company.
    """
    companies, pagination = await CompanyService.find_all(db, current_user, page=page, limit=limit, search=search)
    return serialize_paginated_response(
        [CompanyResponse.model_validate(company) for company in companies],
        pagination,
        message=CompanyMessages.LIST_RETRIEVED
    )


@router.get("/{id}", response_model=ApiResponse[CompanyResponse])
async def get_company(
    id: int = Path(..., description="Company ID"),
    current_user: AuthenticatedUser = Depends(authorize(GET_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """Get a company by ID (ownership enforced)."""
    company = await CompanyService.find_one(db, id)
    return serialize_response(CompanyResponse.model_validate(company), message=CompanyMessages.RETRIEVED)


@router.patch("/update/{id}", response_model=ApiResponse[CompanyResponse])
async def update_company(
    company_data: CompanyUpdate,
    id: int = Path(..., description="Company ID"),
    current_user: AuthenticatedUser = Depends(authorize(UPDATE_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """Update company details (ownership enforced)."""
    company = await CompanyService.update(db, id, company_data)
    return serialize_response(CompanyResponse.model_validate(company), message=CompanyMessages.UPDATED)


@router.delete("/delete/{id}", response_model=ApiResponse[MessageResponse])
async def delete_company(
    id: int = Path(..., description="Company ID"),
    current_user: AuthenticatedUser = Depends(authorize(DELETE_POLICY)),
    db: AsyncSession = Depends(get_db)
):
    """
    Delete a company (Super Admin only).
    
    Blocked while the company still has users, vehicles or routes.
    """
    message = await CompanyService.remove(db, id)
    return serialize_response(MessageResponse(message=message), message=message)
