"""Season routes — creation rules, single current season, confirmations.

Invariants:
    - Only one season is current at a time
    - Overlapping date ranges and duplicate names are 409
    - Deactivate and delete require ?confirm=true
    - A season used by a league cannot be deleted
"""

from datetime import datetime, timedelta, timezone

TODAY = datetime.now(timezone.utc).date()


def _season_body(name: str, start_offset: int, weeks: int = 4, current: bool = False) -> dict:
    start = TODAY + timedelta(days=start_offset)
    return {
        "name": name,
        "week_count": weeks,
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=7 * weeks)).isoformat(),
        "mark_as_current": current,
    }


async def test_current_season_is_public(client, current_season):
    resp = await client.get("/api/seasons/current")
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == current_season["id"]


async def test_no_current_season_is_404(client):
    resp = await client.get("/api/seasons/current")
    assert resp.status_code == 404


async def test_create_requires_admin(client, user):
    resp = await client.post("/api/seasons", json=_season_body("Nope", 0), headers=user["headers"])
    assert resp.status_code == 403


async def test_new_current_season_clears_previous(client, admin, current_season):
    resp = await client.post(
        "/api/seasons", json=_season_body("Next Season", 200, current=True),
        headers=admin["headers"],
    )
    assert resp.status_code == 201
    new_id = resp.json()["data"]["id"]

    old = await client.get(f"/api/seasons/{current_season['id']}", headers=admin["headers"])
    assert old.json()["data"]["is_current"] is False
    current = await client.get("/api/seasons/current")
    assert current.json()["data"]["id"] == new_id


async def test_overlapping_season_rejected(client, admin, current_season):
    resp = await client.post(
        "/api/seasons", json=_season_body("Overlap", 10), headers=admin["headers"],
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "SEASON_OVERLAP"


async def test_duplicate_name_rejected(client, admin, current_season):
    resp = await client.post(
        "/api/seasons", json=_season_body("season one", 400), headers=admin["headers"],
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "SEASON_NAME_TAKEN"


async def test_invalid_window_lists_errors(client, admin):
    body = _season_body("Short", 0, weeks=4)
    body["end_date"] = (TODAY + timedelta(days=10)).isoformat()
    resp = await client.post("/api/seasons", json=body, headers=admin["headers"])
    assert resp.status_code == 400
    assert "28 days" in resp.json()["message"]


async def test_weeks_schedule(client, admin, current_season):
    resp = await client.get(f"/api/seasons/{current_season['id']}/weeks", headers=admin["headers"])
    weeks = resp.json()["data"]
    assert len(weeks) == 17
    assert weeks[0]["start_date"] == current_season["start_date"]


async def test_make_current_requires_confirmation(client, admin, current_season):
    created = await client.post(
        "/api/seasons", json=_season_body("Later", 300), headers=admin["headers"],
    )
    season_id = created.json()["data"]["id"]

    resp = await client.put(
        f"/api/seasons/{season_id}", json={"set_as_current": True}, headers=admin["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "CONFIRMATION_REQUIRED"

    resp = await client.put(
        f"/api/seasons/{season_id}",
        json={"set_as_current": True, "confirm_make_current": True},
        headers=admin["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["is_current"] is True


async def test_deactivate_requires_confirm(client, admin, current_season):
    url = f"/api/seasons/{current_season['id']}/deactivate"
    assert (await client.post(url, headers=admin["headers"])).status_code == 400

    resp = await client.post(url, params={"confirm": "true"}, headers=admin["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["is_active"] is False
    assert resp.json()["data"]["is_current"] is False


async def test_delete_unused_season(client, admin, current_season):
    url = f"/api/seasons/{current_season['id']}"
    resp = await client.delete(url, params={"confirm": "true"}, headers=admin["headers"])
    assert resp.status_code == 200
    assert (await client.get(url, headers=admin["headers"])).status_code == 404


async def test_delete_season_in_use(client, admin, current_season, create_league):
    await create_league(admin)
    resp = await client.delete(
        f"/api/seasons/{current_season['id']}", params={"confirm": "true"},
        headers=admin["headers"],
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "SEASON_IN_USE"
