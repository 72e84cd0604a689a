"""
Role policy and ownership policy tests.
"""

import pytest

from cort_backend.app.api.v1.endpoints import auth as auth_endpoints
from cort_backend.app.api.v1.endpoints import companies as company_endpoints
from cort_backend.app.api.v1.endpoints import vehicles as vehicle_endpoints
from cort_backend.app.core.exceptions import InsufficientPermissionsError, InvalidInputError
from cort_backend.app.core.guards import (
    authorize,
    company_access_guard,
    enforce_role,
    verify_company_access,
)
from cort_backend.app.core.policy import AUTHENTICATED, PUBLIC, OwnershipLevel, RoutePolicy
from cort_backend.app.models.enums import UserRole, UserStatus
from cort_backend.app.schemas.auth import AuthenticatedUser


def build_user(role: UserRole, company_id=None) -> AuthenticatedUser:
    return AuthenticatedUser(
        id="0c8f5c2e-1111-4000-8000-000000000001",
        email="someone@cort.com",
        full_name="Some One",
        role=role,
        company_id=company_id,
        account_status=UserStatus.ACTIVE,
    )


def test_declared_route_policies():
    assert auth_endpoints.SIGNUP_POLICY.public
    assert auth_endpoints.LOGIN_POLICY.public
    assert auth_endpoints.PROFILE_POLICY.roles == frozenset()

    assert company_endpoints.CREATE_POLICY.roles == {UserRole.SUPER_ADMIN}
    assert company_endpoints.LIST_POLICY.roles == {UserRole.SUPER_ADMIN, UserRole.COMPANY_ADMIN}
    assert company_endpoints.GET_POLICY.roles == {
        UserRole.SUPER_ADMIN, UserRole.COMPANY_ADMIN, UserRole.EMPLOYEE
    }
    assert company_endpoints.GET_POLICY.ownership == OwnershipLevel.OWN_ONLY
    assert company_endpoints.UPDATE_POLICY.ownership == OwnershipLevel.OWN_ONLY
    assert company_endpoints.DELETE_POLICY.roles == {UserRole.SUPER_ADMIN}

    for policy in (
        vehicle_endpoints.CREATE_POLICY,
        vehicle_endpoints.LIST_POLICY,
        vehicle_endpoints.GET_POLICY,
        vehicle_endpoints.UPDATE_POLICY,
        vehicle_endpoints.DELETE_POLICY,
    ):
        assert policy.roles == {UserRole.SUPER_ADMIN, UserRole.COMPANY_ADMIN}
        assert policy.ownership is None


def test_authorize_exposes_policy():
    policy = RoutePolicy.allow(UserRole.DRIVER)
    assert authorize(policy).policy is policy
    assert authorize(PUBLIC).policy is PUBLIC


@pytest.mark.asyncio
async def test_public_policy_yields_no_user():
    assert await authorize(PUBLIC)() is None


def test_empty_role_set_admits_any_role():
    for role in UserRole:
        assert AUTHENTICATED.permits_role(role)
        enforce_role(AUTHENTICATED, build_user(role))


def test_super_admin_has_no_implicit_access():
    policy = RoutePolicy.allow(UserRole.COMPANY_ADMIN)

    with pytest.raises(InsufficientPermissionsError) as exc_info:
        enforce_role(policy, build_user(UserRole.SUPER_ADMIN))

    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "Access denied. Required role: COMPANY_ADMIN"
    assert exc_info.value.details == {"required_roles": ["COMPANY_ADMIN"]}


def test_denial_lists_every_required_role():
    policy = RoutePolicy.allow(UserRole.SUPER_ADMIN, UserRole.COMPANY_ADMIN)

    with pytest.raises(InsufficientPermissionsError) as exc_info:
        enforce_role(policy, build_user(UserRole.EMPLOYEE))

    assert "COMPANY_ADMIN" in exc_info.value.message
    assert "SUPER_ADMIN" in exc_info.value.message


@pytest.mark.parametrize("role, user_company, target, expected", [
    (UserRole.SUPER_ADMIN, None, 9, True),
    (UserRole.SUPER_ADMIN, 5, 9, True),
    (UserRole.COMPANY_ADMIN, 5, 5, True),
    (UserRole.COMPANY_ADMIN, 5, 9, False),
    (UserRole.COMPANY_ADMIN, None, 9, False),
    (UserRole.EMPLOYEE, 5, 5, True),
    (UserRole.EMPLOYEE, 5, 6, False),
])
def test_own_only_access(role, user_company, target, expected):
    user = build_user(role, company_id=user_company)
    assert verify_company_access(OwnershipLevel.OWN_ONLY, user, target) is expected


def test_any_level_admits_every_caller():
    user = build_user(UserRole.EMPLOYEE, company_id=None)
    assert verify_company_access(OwnershipLevel.ANY, user, 9) is True


def test_guard_denies_foreign_company():
    with pytest.raises(InsufficientPermissionsError) as exc_info:
        company_access_guard.enforce(OwnershipLevel.OWN_ONLY, build_user(UserRole.COMPANY_ADMIN, 5), "9")
    assert exc_info.value.message == "You do not have permission to access this company"


def test_guard_rejects_non_integer_id():
    with pytest.raises(InvalidInputError):
        company_access_guard.enforce(OwnershipLevel.OWN_ONLY, build_user(UserRole.SUPER_ADMIN), "abc")


@pytest.mark.asyncio
@pytest.mark.parametrize("role, method, url", [
    (UserRole.EMPLOYEE, "get", "/v1/companies/list"),
    (UserRole.DRIVER, "get", "/v1/companies/list"),
    (UserRole.COMPANY_ADMIN, "post", "/v1/companies/create"),
    (UserRole.COMPANY_ADMIN, "delete", "/v1/companies/delete/1"),
    (UserRole.EMPLOYEE, "get", "/v1/vehicles/list"),
    (UserRole.DRIVER, "get", "/v1/vehicles/1"),
])
async def test_role_gate_over_http(client, make_user, make_company, auth_headers, role, method, url):
    company = await make_company()
    user = await make_user(role=role, company_id=company.id)

    kwargs = {"headers": auth_headers(user)}
    if method == "post":
        kwargs["json"] = {"name": "Acme", "email": "contact@acme.com"}
    response = await getattr(client, method)(url, **kwargs)

    assert response.status_code == 403
    body = response.json()
    assert body["error_code"] == "ERR_PERM_001"
    assert body["message"].startswith("Access denied. Required role:")
