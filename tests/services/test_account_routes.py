"""Account Routes: profile, password, balance, and account removal over HTTP."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from finledger.models.transaction import Transaction


@pytest.fixture
async def alice(signup):
    return await signup(
        "alice@example.com", password="alice-password",
        first_name="Alice", last_name="Liddell",
    )


async def _post_transaction(client, who, amount, category):
    res = await client.post(
        "/api/v1/transactions",
        json={"amount": amount, "category": category},
        headers=who["headers"],
    )
    assert res.status_code == 201, res.text


async def test_get_profile_hides_password_hash(client, alice):
    res = await client.get("/api/v1/account", headers=alice["headers"])
    assert res.status_code == 200
    body = res.json()
    assert body["email"] == "alice@example.com"
    assert "password_hash" not in body
    assert "password" not in body


async def test_balance_scenario(client, alice):
    """revenue 100 and shopping 40 leave a balance of 60."""
    await _post_transaction(client, alice, "100", "revenue")
    await _post_transaction(client, alice, "40", "shopping")

    res = await client.get("/api/v1/account/balance", headers=alice["headers"])

    assert res.status_code == 200
    assert Decimal(res.json()["balance"]) == Decimal("60")


async def test_balance_empty_ledger_is_zero(client, alice):
    res = await client.get("/api/v1/account/balance", headers=alice["headers"])
    assert Decimal(res.json()["balance"]) == Decimal("0")


async def test_update_profile(client, alice):
    res = await client.patch(
        "/api/v1/account/profile",
        json={"first_name": "Alicia"},
        headers=alice["headers"],
    )
    assert res.status_code == 200
    assert res.json()["first_name"] == "Alicia"
    assert res.json()["last_name"] == "Liddell"


async def test_update_profile_email_collision_is_409(client, alice, signup):
    await signup("bob@example.com")
    res = await client.patch(
        "/api/v1/account/profile",
        json={"email": "bob@example.com"},
        headers=alice["headers"],
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "EMAIL_TAKEN"


async def test_update_profile_null_email_is_400(client, alice):
    res = await client.patch(
        "/api/v1/account/profile",
        json={"email": None},
        headers=alice["headers"],
    )
    assert res.status_code == 400


async def test_change_password_then_login(client, alice):
    res = await client.patch(
        "/api/v1/account/password",
        json={"current_password": "alice-password", "new_password": "rabbit-hole-42"},
        headers=alice["headers"],
    )
    assert res.status_code == 204

    old = await client.post(
        "/api/v1/auth/login",
        json={"email": "alice@example.com", "password": "alice-password"},
    )
    new = await client.post(
        "/api/v1/auth/login",
        json={"email": "alice@example.com", "password": "rabbit-hole-42"},
    )
    assert old.status_code == 401
    assert new.status_code == 200


async def test_change_password_wrong_current_is_401(client, alice):
    res = await client.patch(
        "/api/v1/account/password",
        json={"current_password": "guess-guess", "new_password": "rabbit-hole-42"},
        headers=alice["headers"],
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "PASSWORD_INCORRECT"


async def test_change_password_to_over_72_bytes_is_400(client, alice):
    res = await client.patch(
        "/api/v1/account/password",
        json={"current_password": "alice-password", "new_password": "é" * 40},
        headers=alice["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "new_password"

    login = await client.post(
        "/api/v1/auth/login",
        json={"email": "alice@example.com", "password": "alice-password"},
    )
    assert login.status_code == 200


async def test_delete_account_requires_password(client, alice):
    res = await client.request(
        "DELETE", "/api/v1/account",
        json={"password": "wrong-password"},
        headers=alice["headers"],
    )
    assert res.status_code == 401

    res = await client.get("/api/v1/account", headers=alice["headers"])
    assert res.status_code == 200


async def test_delete_account_cascades(client, alice, test_db):
    await _post_transaction(client, alice, "10", "food")
    await _post_transaction(client, alice, "20", "grant")

    res = await client.request(
        "DELETE", "/api/v1/account",
        json={"password": "alice-password"},
        headers=alice["headers"],
    )

    assert res.status_code == 200
    assert res.json()["email"] == "alice@example.com"
    remaining = await test_db.scalar(
        select(func.count()).select_from(Transaction)
        .where(Transaction.user_id == alice["user"]["id"]),
    )
    assert remaining == 0

    res = await client.get("/api/v1/account", headers=alice["headers"])
    assert res.status_code == 401
