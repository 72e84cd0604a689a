"""
Integration tests for company management.

Covers creation, scoped listing, ownership-guarded reads and updates, and
delete blocking by dependent records.
"""

import pytest

from cort_backend.app.models.enums import UserRole
from cort_backend.app.models.route import Route

COMPANY_PAYLOAD = {
    "name": "Acme Logistics",
    "email": "contact@acme.com",
    "ntn_number": "1234567-8",
    "contact_person": "Bilal Ahmed",
    "address": "12 Mall Road, Lahore",
    "is_shuttle_enabled": True,
}


@pytest.fixture
async def super_admin(make_user):
    return await make_user(role=UserRole.SUPER_ADMIN)


@pytest.mark.asyncio
async def test_super_admin_creates_company(client, super_admin, auth_headers):
    response = await client.post("/v1/companies/create", json=COMPANY_PAYLOAD, headers=auth_headers(super_admin))

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == 201
    assert body["message"] == "Company created successfully"
    data = body["data"]
    assert data["id"] > 0
    assert data["name"] == "Acme Logistics"
    assert data["is_shuttle_enabled"] is True
    assert data["is_chauffeur_enabled"] is False


@pytest.mark.asyncio
async def test_create_company_duplicate_email(client, super_admin, auth_headers, make_company):
    await make_company(email=COMPANY_PAYLOAD["email"])

    response = await client.post("/v1/companies/create", json=COMPANY_PAYLOAD, headers=auth_headers(super_admin))

    assert response.status_code == 409
    assert response.json()["message"] == "Company with this email already exists"


@pytest.mark.asyncio
async def test_create_company_invalid_email(client, super_admin, auth_headers):
    response = await client.post(
        "/v1/companies/create",
        json={**COMPANY_PAYLOAD, "email": "not-an-email"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "ERR_VALIDATION"


@pytest.mark.asyncio
async def test_super_admin_lists_all_companies(client, super_admin, auth_headers, make_company):
    for i in range(3):
        await make_company(name=f"Company {i}")

    response = await client.get("/v1/companies/list", headers=auth_headers(super_admin))

    assert response.status_code == 200
    page = response.json()["data"]
    assert len(page["data"]) == 3
    assert page["pagination"]["total"] == 3


@pytest.mark.asyncio
async def test_list_search_by_name(client, super_admin, auth_headers, make_company):
    await make_company(name="Acme Logistics")
    await make_company(name="Blue Line Transport")

    response = await client.get("/v1/companies/list?search=acme", headers=auth_headers(super_admin))

    names = [c["name"] for c in response.json()["data"]["data"]]
    assert names == ["Acme Logistics"]


@pytest.mark.asyncio
async def test_company_admin_lists_only_own_company(client, make_user, auth_headers, make_company):
    own = await make_company(name="Own Co")
    await make_company(name="Other Co")
    admin = await make_user(role=UserRole.COMPANY_ADMIN, company_id=own.id)

    response = await client.get("/v1/companies/list", headers=auth_headers(admin))

    assert response.status_code == 200
    page = response.json()["data"]
    assert [c["id"] for c in page["data"]] == [own.id]
    assert page["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_company_admin_without_company_lists_nothing(client, make_user, auth_headers, make_company):
    await make_company()
    admin = await make_user(role=UserRole.COMPANY_ADMIN, company_id=None)

    response = await client.get("/v1/companies/list", headers=auth_headers(admin))

    page = response.json()["data"]
    assert page["data"] == []
    assert page["pagination"]["total"] == 0
    assert page["pagination"]["pages"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.COMPANY_ADMIN, UserRole.EMPLOYEE])
async def test_members_read_own_company(client, make_user, auth_headers, make_company, role):
    company = await make_company()
    member = await make_user(role=role, company_id=company.id)

    response = await client.get(f"/v1/companies/{company.id}", headers=auth_headers(member))

    assert response.status_code == 200
    assert response.json()["data"]["id"] == company.id


@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.COMPANY_ADMIN, UserRole.EMPLOYEE])
async def test_members_denied_other_company(client, make_user, auth_headers, make_company, role):
    own = await make_company()
    other = await make_company()
    member = await make_user(role=role, company_id=own.id)

    response = await client.get(f"/v1/companies/{other.id}", headers=auth_headers(member))

    assert response.status_code == 403
    assert response.json()["message"] == "You do not have permission to access this company"


@pytest.mark.asyncio
async def test_ownership_checked_before_existence(client, make_user, auth_headers, make_company):
    own = await make_company()
    admin = await make_user(role=UserRole.COMPANY_ADMIN, company_id=own.id)

    response = await client.get("/v1/companies/9999", headers=auth_headers(admin))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_get_unknown_company(client, super_admin, auth_headers):
    response = await client.get("/v1/companies/9999", headers=auth_headers(super_admin))

    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "ERR_NOT_FOUND_001"
    assert body["details"] == {"resource": "company", "id": 9999}


@pytest.mark.asyncio
async def test_non_integer_company_id(client, super_admin, auth_headers):
    response = await client.get("/v1/companies/abc", headers=auth_headers(super_admin))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_company_admin_updates_own_company(client, make_user, auth_headers, make_company):
    company = await make_company(name="Old Name", address="Old Address")
    admin = await make_user(role=UserRole.COMPANY_ADMIN, company_id=company.id)

    response = await client.patch(
        f"/v1/companies/update/{company.id}",
        json={"name": None, "address": "New Address", "is_chauffeur_enabled": True},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Old Name"
    assert data["address"] == "New Address"
    assert data["is_chauffeur_enabled"] is True


@pytest.mark.asyncio
async def test_company_admin_cannot_update_other_company(client, make_user, auth_headers, make_company, db_session):
    own = await make_company()
    other = await make_company(name="Untouched")
    admin = await make_user(role=UserRole.COMPANY_ADMIN, company_id=own.id)

    response = await client.patch(
        f"/v1/companies/update/{other.id}",
        json={"name": "Hijacked"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 403
    await db_session.refresh(other)
    assert other.name == "Untouched"


@pytest.mark.asyncio
async def test_employee_cannot_update_company(client, make_user, auth_headers, make_company):
    company = await make_company()
    employee = await make_user(role=UserRole.EMPLOYEE, company_id=company.id)

    response = await client.patch(
        f"/v1/companies/update/{company.id}",
        json={"name": "Renamed"},
        headers=auth_headers(employee),
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_company_email_conflict(client, super_admin, auth_headers, make_company):
    await make_company(email="taken@company.com")
    company = await make_company()

    response = await client.patch(
        f"/v1/companies/update/{company.id}",
        json={"email": "taken@company.com"},
        headers=auth_headers(super_admin),
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_delete_company(client, super_admin, auth_headers, make_company):
    company = await make_company()

    response = await client.delete(f"/v1/companies/delete/{company.id}", headers=auth_headers(super_admin))

    assert response.status_code == 200
    assert response.json()["data"] == {"message": "Company deleted successfully"}

    follow_up = await client.get(f"/v1/companies/{company.id}", headers=auth_headers(super_admin))
    assert follow_up.status_code == 404


@pytest.mark.asyncio
async def test_delete_unknown_company(client, super_admin, auth_headers):
    response = await client.delete("/v1/companies/delete/9999", headers=auth_headers(super_admin))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_blocked_by_users(client, super_admin, auth_headers, make_company, make_user):
    company = await make_company()
    await make_user(role=UserRole.EMPLOYEE, company_id=company.id)

    response = await client.delete(f"/v1/companies/delete/{company.id}", headers=auth_headers(super_admin))

    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "ERR_STATE_001"
    assert body["message"] == "Cannot delete company with active users or related data"


@pytest.mark.asyncio
async def test_delete_blocked_by_vehicles(client, super_admin, auth_headers, make_company, make_vehicle):
    company = await make_company()
    await make_vehicle(owner_company_id=company.id)

    response = await client.delete(f"/v1/companies/delete/{company.id}", headers=auth_headers(super_admin))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_blocked_by_routes(client, super_admin, auth_headers, make_company, db_session):
    company = await make_company()
    db_session.add(Route(name="Gulberg Loop", company_id=company.id))
    await db_session.commit()

    response = await client.delete(f"/v1/companies/delete/{company.id}", headers=auth_headers(super_admin))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_company_admin_cannot_delete(client, make_user, auth_headers, make_company):
    company = await make_company()
    admin = await make_user(role=UserRole.COMPANY_ADMIN, company_id=company.id)

    response = await client.delete(f"/v1/companies/delete/{company.id}", headers=auth_headers(admin))

    assert response.status_code == 403
