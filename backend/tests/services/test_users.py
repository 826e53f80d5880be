"""User and system role routes — profile, sessions, role administration.

Invariants:
    - Profile updates only log fields that actually changed
    - The sessions list flags the caller's current session
    - Admin-only routes return 403 for regular users
    - An admin cannot change their own role; every change is logged
"""

from sqlalchemy import select

from fantasy_api.models import ProfileChangeLog


# --- Profile ------------------------------------------------------------------

async def test_profile_lists_commissioned_leagues(client, user, create_league):
    league = await create_league(user)
    resp = await client.get("/api/user/profile", headers=user["headers"])
    assert resp.status_code == 200
    profile = resp.json()["data"]
    assert profile["email"] == "player@nfl.test"
    assert profile["commissioned_leagues"][0]["league_id"] == league["league_id"]
    assert profile["commissioned_leagues"][0]["is_primary_commissioner"] is True
    assert profile["teams"][0]["team_id"] == league["team_id"]


async def test_update_profile_logs_changed_fields(client, user, fresh_db):
    resp = await client.put(
        "/api/user/profile", json={"name": "Renamed Player", "alias": "Ace"},
        headers=user["headers"],
    )
    assert resp.status_code == 200
    assert sorted(resp.json()["data"]["changed_fields"]) == ["alias", "name"]

    async with fresh_db() as db:
        rows = (await db.execute(
            select(ProfileChangeLog).where(ProfileChangeLog.user_id == user["user_id"]),
        )).scalars().all()
        assert {r.field_name for r in rows} == {"name", "alias"}


async def test_update_profile_without_changes(client, user):
    resp = await client.put(
        "/api/user/profile", json={"name": "Regular Player"}, headers=user["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "No changes"
    assert resp.json()["data"]["changed_fields"] == []


async def test_update_profile_rejects_bad_image(client, user):
    resp = await client.put("/api/user/profile", json={
        "profile_image_url": "https://cdn/me.png", "profile_image_bytes": 100,
    }, headers=user["headers"])
    assert resp.status_code == 400


async def test_sessions_mark_current(client, user):
    resp = await client.get("/api/user/sessions", headers=user["headers"])
    sessions = resp.json()["data"]
    assert len(sessions) == 1
    assert sessions[0]["is_current"] is True


async def test_active_users_requires_admin(client, user, admin):
    assert (await client.get("/api/user/active", headers=user["headers"])).status_code == 403
    resp = await client.get("/api/user/active", headers=admin["headers"])
    assert resp.status_code == 200
    emails = {u["email"] for u in resp.json()["data"]}
    assert {"player@nfl.test", "admin@nfl.test"} <= emails


# --- System roles -------------------------------------------------------------

async def test_list_roles(client, admin):
    resp = await client.get("/api/system-roles", headers=admin["headers"])
    assert resp.status_code == 200
    assert [r["role_code"] for r in resp.json()["data"]] == ["ADMIN", "USER"]


async def test_change_role_and_history(client, admin, user):
    resp = await client.put(
        f"/api/system-roles/users/{user['user_id']}",
        json={"new_role_code": "admin", "reason": "Helps with the catalogue"},
        headers=admin["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "user_id": user["user_id"], "old_role_code": "USER", "new_role_code": "ADMIN",
    }

    history = await client.get(
        f"/api/system-roles/users/{user['user_id']}/changes", headers=admin["headers"],
    )
    entries = history.json()["data"]
    assert len(entries) == 1
    assert entries[0]["changed_by_user_id"] == admin["user_id"]

    # the promoted user can now reach admin routes
    assert (await client.get("/api/user/active", headers=user["headers"])).status_code == 200


async def test_change_own_role_rejected(client, admin):
    resp = await client.put(
        f"/api/system-roles/users/{admin['user_id']}",
        json={"new_role_code": "USER"}, headers=admin["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "SELF_ROLE_CHANGE"


async def test_change_role_unknown_code(client, admin, user):
    resp = await client.put(
        f"/api/system-roles/users/{user['user_id']}",
        json={"new_role_code": "OWNER"}, headers=admin["headers"],
    )
    assert resp.status_code == 400


async def test_change_role_same_role(client, admin, user):
    resp = await client.put(
        f"/api/system-roles/users/{user['user_id']}",
        json={"new_role_code": "USER"}, headers=admin["headers"],
    )
    assert resp.json()["error"]["code"] == "ROLE_UNCHANGED"


async def test_list_users_by_role(client, admin, user):
    resp = await client.get(
        "/api/system-roles/users", params={"role_code": "admin"}, headers=admin["headers"],
    )
    page = resp.json()["data"]
    assert page["total_records"] == 1
    assert page["items"][0]["email"] == "admin@nfl.test"


async def test_system_role_routes_require_admin(client, user):
    resp = await client.get("/api/system-roles/users", headers=user["headers"])
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "ADMIN_REQUIRED"
