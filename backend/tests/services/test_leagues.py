"""League routes — creation, membership, configuration, status and commissioner roles.

Invariants:
    - Creating a league needs a current season and makes the creator primary commissioner
      with the league's first team
    - League names are unique within a season
    - Joining checks the password, open status, free slots and team-name uniqueness
    - PreDraft-only settings freeze once the league leaves PreDraft
    - Status changes, co-commissioner management and transfer are primary-commissioner only
    - Closed is terminal
"""

from sqlalchemy import select

from fantasy_api.models import LeagueConfigHistory, LeagueStatusHistory, TeamRoster


async def _full_league(create_league, join_league, register_user, owner) -> dict:
    league = await create_league(owner, team_slots=4)
    for n in range(1, 4):
        member = await register_user(f"member{n}@nfl.test", f"Member {n}")
        await join_league(member, league["league_id"], f"Team {n}")
    return league


# --- Creation -----------------------------------------------------------------

async def test_create_league(client, user, create_league):
    league = await create_league(user, team_slots=10)
    assert league["status"] == 0
    assert league["available_slots"] == 9
    assert 100000 <= league["league_public_id"] <= 999999

    roles = await client.get(f"/api/league/{league['league_id']}/roles", headers=user["headers"])
    data = roles.json()["data"]
    assert data["is_primary_commissioner"] is True
    assert "COMMISSIONER" in data["roles"]
    assert "MANAGER" in data["roles"]
    assert data["team_id"] == league["team_id"]


async def test_create_league_without_current_season(client, user):
    resp = await client.post("/api/league", json={
        "name": "Too Early", "team_slots": 4, "league_password": "League123",
        "initial_team_name": "Crew",
    }, headers=user["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "NO_CURRENT_SEASON"


async def test_create_league_validation(client, user, current_season):
    resp = await client.post("/api/league", json={
        "name": "Bad", "team_slots": 5, "playoff_teams": 5,
        "league_password": "weak", "initial_team_name": "Crew",
    }, headers=user["headers"])
    assert resp.status_code == 400
    details = resp.json()["error"]["details"]
    assert any("Team slots" in d for d in details)
    assert any("Playoff teams" in d for d in details)
    assert any(d.startswith("League password") for d in details)


async def test_league_name_unique_in_season(client, user, admin, create_league):
    await create_league(user, name="Sunday League")
    resp = await client.post("/api/league", json={
        "name": "sunday league", "team_slots": 4, "league_password": "League123",
        "initial_team_name": "Other",
    }, headers=admin["headers"])
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "LEAGUE_NAME_TAKEN"


async def test_create_league_with_ppr_schema(client, user, create_league):
    schemas = (await client.get("/api/scoring/schemas")).json()["data"]
    ppr = next(s for s in schemas if s["name"] == "PPR")
    league = await create_league(user, scoring_schema_id=ppr["id"])
    summary = await client.get(f"/api/league/{league['league_id']}/summary", headers=user["headers"])
    assert summary.json()["data"]["scoring_schema_name"] == "PPR"
    assert summary.json()["data"]["position_format_name"] == "Default"


# --- Joining ------------------------------------------------------------------

async def test_join_league(client, user, register_user, create_league, join_league):
    league = await create_league(user)
    member = await register_user("joiner@nfl.test", "Joiner")
    joined = await join_league(member, league["league_id"], "Joiner Squad")
    assert joined["available_slots"] == 2

    teams = await client.get(f"/api/league/{league['league_id']}/teams", headers=member["headers"])
    assert {t["team_name"] for t in teams.json()["data"]} == {"Commissioner Crew", "Joiner Squad"}

    members = await client.get(f"/api/league/{league['league_id']}/members", headers=member["headers"])
    roles = {m["user_id"]: m["role_code"] for m in members.json()["data"]}
    assert roles[member["user_id"]] == "MANAGER"


async def test_join_wrong_password(client, user, register_user, create_league):
    league = await create_league(user)
    member = await register_user("wrong@nfl.test")
    resp = await client.post("/api/league/join", json={
        "league_id": league["league_id"], "league_password": "Nope12345", "team_name": "X",
    }, headers=member["headers"])
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "INVALID_LEAGUE_PASSWORD"


async def test_join_twice(client, user, create_league):
    league = await create_league(user)
    resp = await client.post("/api/league/join", json={
        "league_id": league["league_id"], "league_password": "League123", "team_name": "Again",
    }, headers=user["headers"])
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "ALREADY_MEMBER"


async def test_join_team_name_taken(client, user, register_user, create_league):
    league = await create_league(user)
    member = await register_user("copycat@nfl.test")
    resp = await client.post("/api/league/join", json={
        "league_id": league["league_id"], "league_password": "League123",
        "team_name": "commissioner crew",
    }, headers=member["headers"])
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "TEAM_NAME_TAKEN"


async def test_join_full_league(client, user, register_user, create_league, join_league):
    league = await _full_league(create_league, join_league, register_user, user)
    late = await register_user("late@nfl.test")
    resp = await client.post("/api/league/join", json={
        "league_id": league["league_id"], "league_password": "League123", "team_name": "Late",
    }, headers=late["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "LEAGUE_FULL"


async def test_validate_password(client, user, create_league):
    league = await create_league(user)
    url = f"/api/league/{league['league_id']}/validate-password"
    ok = await client.post(url, json={"league_password": "League123"}, headers=user["headers"])
    bad = await client.post(url, json={"league_password": "Other1234"}, headers=user["headers"])
    assert ok.json()["data"]["is_valid"] is True
    assert bad.json()["data"]["is_valid"] is False


async def test_overlong_league_password_is_just_wrong(client, user, register_user, create_league):
    league = await create_league(user)
    url = f"/api/league/{league['league_id']}/validate-password"
    resp = await client.post(url, json={"league_password": "X" * 90}, headers=user["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["is_valid"] is False

    member = await register_user("long@nfl.test")
    resp = await client.post("/api/league/join", json={
        "league_id": league["league_id"], "league_password": "X" * 90, "team_name": "Long",
    }, headers=member["headers"])
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "INVALID_LEAGUE_PASSWORD"


# --- Directory & search -------------------------------------------------------

async def test_directory_and_search(client, user, admin, create_league):
    await create_league(user, name="Sunday League")
    await create_league(admin, name="Monday Night", team_name="Admin Team")

    directory = await client.get("/api/league/directory", headers=user["headers"])
    assert len(directory.json()["data"]) == 2

    resp = await client.get(
        "/api/league/search", params={"name": "monday"}, headers=user["headers"],
    )
    page = resp.json()["data"]
    assert page["total_records"] == 1
    assert page["items"][0]["name"] == "Monday Night"
    assert page["items"][0]["teams_count"] == 1


async def test_search_only_available(client, user, register_user, create_league, join_league):
    await _full_league(create_league, join_league, register_user, user)
    resp = await client.get(
        "/api/league/search", params={"only_available": "true"}, headers=user["headers"],
    )
    assert resp.json()["data"]["total_records"] == 0


# --- Configuration ------------------------------------------------------------

async def test_edit_config_logs_history(client, user, create_league, fresh_db):
    league = await create_league(user)
    resp = await client.put(f"/api/league/{league['league_id']}/config", json={
        "team_slots": 8, "description": "Friends and family", "allow_decimals": True,
    }, headers=user["headers"])
    assert resp.status_code == 200
    # allow_decimals was already true
    assert sorted(resp.json()["data"]["changed_fields"]) == ["description", "team_slots"]

    async with fresh_db() as db:
        rows = (await db.execute(
            select(LeagueConfigHistory).where(LeagueConfigHistory.league_id == league["league_id"]),
        )).scalars().all()
        assert {r.field_name for r in rows} == {"team_slots", "description"}


async def test_edit_config_requires_commissioner(client, user, register_user, create_league,
                                                 join_league):
    league = await create_league(user)
    member = await register_user("manager@nfl.test")
    await join_league(member, league["league_id"], "Managers")
    resp = await client.put(
        f"/api/league/{league['league_id']}/config", json={"description": "mine"},
        headers=member["headers"],
    )
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "NOT_COMMISSIONER"


async def test_active_league_freezes_slots(client, user, register_user, create_league, join_league):
    league = await _full_league(create_league, join_league, register_user, user)
    url = f"/api/league/{league['league_id']}"
    resp = await client.put(f"{url}/status", json={"new_status": 1}, headers=user["headers"])
    assert resp.status_code == 200

    frozen = await client.put(f"{url}/config", json={"team_slots": 6}, headers=user["headers"])
    assert frozen.status_code == 400
    assert "PreDraft" in frozen.json()["message"]

    renamed = await client.put(f"{url}/config", json={"name": "Renamed"}, headers=user["headers"])
    assert renamed.status_code == 200


# --- Status -------------------------------------------------------------------

async def test_activate_requires_full_league(client, user, create_league):
    league = await create_league(user)
    resp = await client.put(
        f"/api/league/{league['league_id']}/status", json={"new_status": 1},
        headers=user["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"


async def test_closed_is_terminal(client, user, create_league, fresh_db):
    league = await create_league(user)
    url = f"/api/league/{league['league_id']}/status"
    closed = await client.put(
        url, json={"new_status": 3, "reason": "Season cancelled"}, headers=user["headers"],
    )
    assert closed.status_code == 200
    assert closed.json()["data"] == {"league_id": league["league_id"], "old_status": 0, "new_status": 3}

    reopen = await client.put(url, json={"new_status": 2}, headers=user["headers"])
    assert reopen.status_code == 400

    async with fresh_db() as db:
        history = (await db.execute(select(LeagueStatusHistory))).scalars().all()
        assert [(h.old_status, h.new_status, h.reason) for h in history] == [
            (0, 3, "Season cancelled"),
        ]


async def test_status_change_primary_only(client, user, register_user, create_league, join_league):
    league = await create_league(user)
    member = await register_user("co@nfl.test")
    await join_league(member, league["league_id"], "Co Team")
    base = f"/api/league/{league['league_id']}"
    await client.post(f"{base}/co-commissioners/{member['user_id']}", headers=user["headers"])

    resp = await client.put(f"{base}/status", json={"new_status": 3}, headers=member["headers"])
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "NOT_PRIMARY_COMMISSIONER"


# --- Membership ---------------------------------------------------------------

async def test_remove_team_drops_roster(
    client, user, register_user, create_league, join_league, create_player, fresh_db,
):
    league = await create_league(user)
    member = await register_user("removed@nfl.test")
    joined = await join_league(member, league["league_id"], "Short Stay")
    player = await create_player("Jordan", "Love")
    await client.post(f"/api/team/{joined['team_id']}/roster", json={
        "player_id": player["id"], "acquisition_type": "FreeAgent",
    }, headers=member["headers"])

    resp = await client.delete(
        f"/api/league/{league['league_id']}/teams/{joined['team_id']}", headers=user["headers"],
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["available_slots"] == 3

    async with fresh_db() as db:
        entry = (await db.execute(select(TeamRoster))).scalars().one()
        assert entry.is_active is False
        assert entry.dropped_date is not None

    # the player is free again in this league
    available = await client.get(
        "/api/nflplayer/available", params={"league_id": league["league_id"]},
        headers=user["headers"],
    )
    assert available.json()["data"]["total_records"] == 1


async def test_cannot_remove_primary_commissioner_team(client, user, create_league):
    league = await create_league(user)
    resp = await client.delete(
        f"/api/league/{league['league_id']}/teams/{league['team_id']}", headers=user["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "PRIMARY_COMMISSIONER_TEAM"


async def test_leave_league(client, user, register_user, create_league, join_league):
    league = await create_league(user)
    member = await register_user("leaver@nfl.test")
    await join_league(member, league["league_id"], "Leavers")

    resp = await client.post(f"/api/league/{league['league_id']}/leave", headers=member["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["available_slots"] == 3

    roles = await client.get(f"/api/league/{league['league_id']}/roles", headers=member["headers"])
    assert roles.json()["data"]["roles"] == []

    # leaving frees the team name and the seat
    await join_league(member, league["league_id"], "Leavers")


async def test_primary_commissioner_cannot_leave(client, user, create_league):
    league = await create_league(user)
    resp = await client.post(f"/api/league/{league['league_id']}/leave", headers=user["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "PRIMARY_COMMISSIONER_CANNOT_LEAVE"


# --- Commissioner roles -------------------------------------------------------

async def test_co_commissioner_round_trip(client, user, register_user, create_league, join_league):
    league = await create_league(user)
    member = await register_user("helper@nfl.test")
    await join_league(member, league["league_id"], "Helpers")
    url = f"/api/league/{league['league_id']}/co-commissioners/{member['user_id']}"

    added = await client.post(url, headers=user["headers"])
    assert added.status_code == 200
    assert added.json()["data"]["role_code"] == "CO_COMMISSIONER"

    # co-commissioners may edit configuration
    edit = await client.put(
        f"/api/league/{league['league_id']}/config", json={"description": "helped"},
        headers=member["headers"],
    )
    assert edit.status_code == 200

    removed = await client.delete(url, headers=user["headers"])
    assert removed.json()["data"]["role_code"] == "MANAGER"

    again = await client.delete(url, headers=user["headers"])
    assert again.status_code == 400


async def test_co_commissioner_requires_membership(client, user, register_user, create_league):
    league = await create_league(user)
    outsider = await register_user("outsider@nfl.test")
    resp = await client.post(
        f"/api/league/{league['league_id']}/co-commissioners/{outsider['user_id']}",
        headers=user["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "NOT_A_MEMBER"


async def test_transfer_commissioner(client, user, register_user, create_league, join_league):
    league = await create_league(user)
    member = await register_user("heir@nfl.test", "Heir")
    await join_league(member, league["league_id"], "Heirs")
    base = f"/api/league/{league['league_id']}"

    resp = await client.post(f"{base}/transfer-commissioner", json={
        "new_commissioner_user_id": member["user_id"],
    }, headers=user["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["new_commissioner_name"] == "Heir"

    new_roles = (await client.get(f"{base}/roles", headers=member["headers"])).json()["data"]
    old_roles = (await client.get(f"{base}/roles", headers=user["headers"])).json()["data"]
    assert new_roles["is_primary_commissioner"] is True
    assert "COMMISSIONER" in new_roles["roles"]
    assert old_roles["is_primary_commissioner"] is False
    assert "CO_COMMISSIONER" in old_roles["roles"]

    # the former primary can no longer change status
    denied = await client.put(f"{base}/status", json={"new_status": 3}, headers=user["headers"])
    assert denied.status_code == 403


async def test_transfer_to_self(client, user, create_league):
    league = await create_league(user)
    resp = await client.post(f"/api/league/{league['league_id']}/transfer-commissioner", json={
        "new_commissioner_user_id": user["user_id"],
    }, headers=user["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "SELF_TRANSFER"


async def test_commissioner_views_member_roles(
    client, admin, user, register_user, create_league, join_league,
):
    league = await create_league(user)
    member = await register_user("viewed@nfl.test")
    rival = await register_user("rival-viewer@nfl.test")
    await join_league(member, league["league_id"], "Viewed")
    await join_league(rival, league["league_id"], "Rival Viewers")
    url = f"/api/league/{league['league_id']}/users/{member['user_id']}/roles"

    resp = await client.get(url, headers=user["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["roles"] == ["MANAGER"]
    assert resp.json()["data"]["user_id"] == member["user_id"]

    assert (await client.get(url, headers=member["headers"])).status_code == 200
    assert (await client.get(url, headers=admin["headers"])).status_code == 200

    denied = await client.get(url, headers=rival["headers"])
    assert denied.status_code == 403
    assert denied.json()["error"]["code"] == "NOT_COMMISSIONER"


async def test_member_roles_unknown_member_is_404(client, user, register_user, create_league):
    league = await create_league(user)
    outsider = await register_user("not-here@nfl.test")
    resp = await client.get(
        f"/api/league/{league['league_id']}/users/{outsider['user_id']}/roles",
        headers=user["headers"],
    )
    assert resp.status_code == 404


async def test_password_info_primary_only(client, user, register_user, create_league, join_league):
    league = await create_league(user)
    member = await register_user("curious@nfl.test")
    await join_league(member, league["league_id"], "Curious")
    url = f"/api/league/{league['league_id']}/password-info"

    resp = await client.get(url, headers=user["headers"])
    assert resp.status_code == 200
    info = resp.json()["data"]
    assert info["league_name"] == "Sunday League"
    assert info["has_password"] is True
    assert info["teams_count"] == 2
    assert info["available_slots"] == 2
    assert "League123" not in resp.text

    denied = await client.get(url, headers=member["headers"])
    assert denied.status_code == 403
    assert denied.json()["error"]["code"] == "NOT_PRIMARY_COMMISSIONER"
