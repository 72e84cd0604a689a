"""
Security guards for role-based and ownership-based access control.

``authorize(policy)`` builds the dependency that runs, in order:
authentication gate -> role check -> (optional) company ownership check.
"""

import logging
from typing import Optional
from fastapi import Depends, Request

from cort_backend.app.core.dependencies import get_current_user
from cort_backend.app.core.exceptions import (
    InsufficientPermissionsError,
    InvalidInputError,
)
from cort_backend.app.core.policy import OwnershipLevel, RoutePolicy
from cort_backend.app.models.enums import UserRole
from cort_backend.app.schemas.auth import AuthenticatedUser
from cort_backend.app.utils.messages import CompanyMessages

logger = logging.getLogger("cort.auth")


def enforce_role(policy: RoutePolicy, user: AuthenticatedUser) -> None:
    """
    Raise 403 unless the user's role is declared by the policy.
    
    There is no role hierarchy: SUPER_ADMIN passes only if listed.
    """
    if not policy.permits_role(user.role):
        required = ", ".join(sorted(role.value for role in policy.roles))
        logger.info("Role %s denied; required one of: %s", user.role.value, required)
        raise InsufficientPermissionsError(
            message=f"Access denied. Required role: {required}",
            details={"required_roles": sorted(role.value for role in policy.roles)}
        )


def verify_company_access(level: OwnershipLevel, user: AuthenticatedUser, company_id: int) -> bool:
    """
    Decide whether the user may act on the given company.
    
    For SUPER_ADMIN: always allowed
    For ANY: always allowed
    For OWN_ONLY: user.company_id must match company_id
    """
    if user.role == UserRole.SUPER_ADMIN:
        return True

    if level == OwnershipLevel.ANY:
        return True

    if level == OwnershipLevel.OWN_ONLY:
        return user.company_id is not None and user.company_id == company_id

    return False


class CompanyAccessGuard:
    """
    Declarative ownership guard for company instance routes.
    
    Usage:
        guard = CompanyAccessGuard()
        guard.enforce(OwnershipLevel.OWN_ONLY, current_user, "7")
    """

    def parse_company_id(self, raw_id: Optional[str]) -> int:
        try:
            return int(raw_id)
        except (TypeError, ValueError):
            raise InvalidInputError("Company id must be an integer", details={"id": raw_id})

    def enforce(self, level: OwnershipLevel, user: AuthenticatedUser, raw_id: Optional[str]) -> None:
        """
        Raise 403 if the ownership check fails.
        
        Raises:
            InvalidInputError: 400 if the id is not an integer
            InsufficientPermissionsError: 403 if access is denied
        """
        company_id = self.parse_company_id(raw_id)
        if not verify_company_access(level, user, company_id):
            raise InsufficientPermissionsError(CompanyMessages.UNAUTHORIZED_ACCESS)


company_access_guard = CompanyAccessGuard()


def authorize(policy: RoutePolicy):
    """
    Dependency factory enforcing a RoutePolicy.
    
    Usage:
        CREATE_POLICY = RoutePolicy.allow(UserRole.SUPER_ADMIN)
        
        @router.post("/create")
        async def create(current_user: AuthenticatedUser = Depends(authorize(CREATE_POLICY))):
            ...
    
    Returns:
        Dependency yielding the AuthenticatedUser (None for public policies)
    """
    if policy.public:
        async def public_access() -> None:
            return None

        public_access.policy = policy
        return public_access

    async def policy_checker(
        request: Request,
        current_user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        enforce_role(policy, current_user)

        if policy.ownership is not None:
            company_access_guard.enforce(
                policy.ownership,
                current_user,
                request.path_params.get(policy.resource_id_param),
            )

        return current_user

    policy_checker.policy = policy
    return policy_checker
