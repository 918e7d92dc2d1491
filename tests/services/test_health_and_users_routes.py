"""Health probes and the admin-only user directory routes."""

import pytest
from sqlalchemy import update

from finledger.models.user import User


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


@pytest.fixture
async def admin(signup, test_db):
    account = await signup("root@example.com", first_name="Root", last_name="Admin")
    await test_db.execute(
        update(User).where(User.id == account["user"]["id"]).values(is_admin=True),
    )
    await test_db.commit()
    return account


async def test_user_listing_forbidden_for_regular_user(client, signup):
    regular = await signup("plain@example.com")
    res = await client.get("/api/v1/users", headers=regular["headers"])
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "ADMIN_REQUIRED"


async def test_user_listing_for_admin(client, admin, signup):
    await signup("jane@example.com", first_name="Jane", last_name="Austen")
    await signup("mark@example.com", first_name="Mark", last_name="Twain")

    res = await client.get(
        "/api/v1/users", params={"searchQuery": "jane aus"}, headers=admin["headers"],
    )

    assert res.status_code == 200
    body = res.json()
    assert [u["email"] for u in body["data"]] == ["jane@example.com"]
    assert body["meta"]["total"] == 1


async def test_user_listing_email_filter(client, admin, signup):
    await signup("mark@example.com")
    res = await client.get(
        "/api/v1/users", params={"email": "mark@example.com"}, headers=admin["headers"],
    )
    assert [u["email"] for u in res.json()["data"]] == ["mark@example.com"]


async def test_user_lookup(client, admin, signup):
    mark = await signup("mark@example.com")
    res = await client.get(f"/api/v1/users/{mark['user']['id']}", headers=admin["headers"])
    assert res.status_code == 200
    assert res.json()["email"] == "mark@example.com"

    res = await client.get("/api/v1/users/999999", headers=admin["headers"])
    assert res.status_code == 404
