from datetime import datetime, timedelta, timezone

from loyalty.models.users.user_models import RefreshToken
from loyalty.services.auth.token_cleanup_service import purge_stale_refresh_tokens
from tests.factories import count_rows


async def _login(client, email="admin@example.com", password="secret123"):
    return await client.post("/auth/login", json={"email": email, "password": password})


async def test_login_returns_tokens(client, admin_user):
    res = await _login(client)

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["auth"]["token_type"] == "bearer"
    assert data["user"]["role"] == "admin"


async def test_login_with_wrong_password(client, admin_user):
    res = await _login(client, password="nope-nope")
    assert res.status_code == 401
    assert res.json()["error_code"] == "UNAUTHORIZED"


async def test_refresh_rotates_token(client, admin_user):
    refresh_token = (await _login(client)).json()["data"]["auth"]["refresh_token"]

    first = await client.post("/auth/refresh", json={"refresh_token": refresh_token})
    second = await client.post("/auth/refresh", json={"refresh_token": refresh_token})

    assert first.status_code == 200
    assert first.json()["data"]["refresh_token"] != refresh_token
    assert second.status_code == 401


async def test_logout_invalidates_access_token(client, admin_user):
    access_token = (await _login(client)).json()["data"]["auth"]["access_token"]
    headers = {"Authorization": f"Bearer {access_token}"}

    assert (await client.post("/auth/logout", headers=headers)).status_code == 200

    res = await client.get("/settings/", headers=headers)
    assert res.status_code == 401


async def test_staff_cannot_use_admin_endpoints(client, staff_headers):
    res = await client.put("/settings/", json={"points_for_reward": 5}, headers=staff_headers)
    assert res.status_code == 403
    assert res.json()["error_code"] == "PERMISSION_DENIED"


async def test_admin_creates_staff_account(client, admin_headers):
    res = await client.post(
        "/users/",
        json={"email": "till@example.com", "password": "till-pass"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["role"] == "staff"

    login = await _login(client, email="till@example.com", password="till-pass")
    assert login.status_code == 200

    activities = await client.get("/activities/", headers=admin_headers)
    assert activities.status_code == 200
    assert activities.json()["data"]["total"] >= 2


async def test_deactivated_staff_is_locked_out(client, admin_headers, staff_user, staff_headers):
    res = await client.delete(f"/users/{staff_user.id}", headers=admin_headers)
    assert res.status_code == 200

    res = await client.get("/settings/", headers=staff_headers)
    assert res.status_code in (401, 403)


async def test_purge_removes_revoked_and_expired_tokens(db, admin_user):
    now = datetime.now(timezone.utc)
    db.add_all([
        RefreshToken(user_id=admin_user.id, token="live", expires_at=now + timedelta(days=1)),
        RefreshToken(user_id=admin_user.id, token="revoked", revoked=True, expires_at=now + timedelta(days=1)),
        RefreshToken(user_id=admin_user.id, token="expired", expires_at=now - timedelta(days=1)),
    ])
    await db.commit()

    purged = await purge_stale_refresh_tokens(db)

    assert purged == 2
    assert await count_rows(db, RefreshToken) == 1


async def test_activity_log_filters_by_message(client, admin_headers, db, admin_user):
    from tests.factories import make_customer

    await make_customer(db, customer_id="LC1", name="Erin")
    res = await client.delete("/customers/LC1", headers=admin_headers)
    assert res.status_code == 200

    res = await client.get("/activities/", params={"search": "deleted customer"}, headers=admin_headers)
    items = res.json()["data"]["items"]
    assert len(items) == 1
    assert "Erin (LC1)" in items[0]["message"]
    assert items[0]["username_snapshot"] == "admin@example.com"


async def test_activity_log_rejects_inverted_date_range(client, admin_headers):
    res = await client.get(
        "/activities/",
        params={"date_from": "2026-02-01T00:00:00", "date_to": "2026-01-01T00:00:00"},
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["error_code"] == "VALIDATION_ERROR"
