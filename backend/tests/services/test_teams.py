"""Team routes — branding, roster moves and acquisition distribution.

Invariants:
    - Only the owner edits branding; team names stay unique inside a league
    - Owners and league commissioners may manage a roster; other members may not
    - A player sits on at most one active roster per league
    - Dropping is a soft delete: the entry stays with is_active=false
    - Distribution percentages are computed over active roster entries
"""

from sqlalchemy import select

from fantasy_api.models import TeamChangeLog


async def test_update_branding(client, user, create_league, fresh_db):
    league = await create_league(user)
    resp = await client.put(f"/api/team/{league['team_id']}/branding", json={
        "team_name": "Blitz Brigade",
        "thumbnail_url": "https://cdn/blitz.png", "thumbnail_width": 512, "thumbnail_height": 512,
        "thumbnail_bytes": 30_000,
    }, headers=user["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["team_name"] == "Blitz Brigade"

    async with fresh_db() as db:
        fields = set((await db.execute(
            select(TeamChangeLog.field_name).where(TeamChangeLog.team_id == league["team_id"]),
        )).scalars())
        assert {"team_name", "thumbnail_url"} <= fields


async def test_branding_owner_only(client, user, register_user, create_league, join_league):
    league = await create_league(user)
    member = await register_user("member@nfl.test")
    await join_league(member, league["league_id"], "Visitors")
    resp = await client.put(
        f"/api/team/{league['team_id']}/branding", json={"team_name": "Hijacked"},
        headers=member["headers"],
    )
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "NOT_TEAM_OWNER"


async def test_branding_name_taken(client, user, register_user, create_league, join_league):
    league = await create_league(user)
    member = await register_user("member@nfl.test")
    joined = await join_league(member, league["league_id"], "Visitors")
    resp = await client.put(
        f"/api/team/{joined['team_id']}/branding", json={"team_name": "COMMISSIONER CREW"},
        headers=member["headers"],
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "TEAM_NAME_TAKEN"


async def test_branding_rejects_bad_image(client, user, create_league):
    league = await create_league(user)
    resp = await client.put(f"/api/team/{league['team_id']}/branding", json={
        "team_image_url": "https://cdn/big.png", "team_image_width": 4000, "team_image_height": 4000,
    }, headers=user["headers"])
    assert resp.status_code == 400


async def test_roster_add_and_my_team(client, user, create_league, create_player):
    league = await create_league(user)
    qb = await create_player("Jordan", "Love", position="QB")
    rb = await create_player("Josh", "Jacobs", position="RB")
    wr = await create_player("Jayden", "Reed", position="WR")
    base = f"/api/team/{league['team_id']}"
    for player, acquisition in ((qb, "Draft"), (rb, "Draft"), (wr, "Trade")):
        resp = await client.post(f"{base}/roster", json={
            "player_id": player["id"], "acquisition_type": acquisition,
        }, headers=user["headers"])
        assert resp.status_code == 201

    team = (await client.get(f"{base}/my-team", headers=user["headers"])).json()["data"]
    assert team["total_players"] == 3
    assert team["acquisition_counts"] == {"Draft": 2, "Trade": 1, "FreeAgent": 0, "Waiver": 0}
    assert team["league_name"] == "Sunday League"

    filtered = await client.get(f"{base}/my-team", params={"position": "rb"}, headers=user["headers"])
    assert [r["player_name"] for r in filtered.json()["data"]["roster"]] == ["Josh Jacobs"]

    searched = await client.get(f"{base}/my-team", params={"search": "reed"}, headers=user["headers"])
    assert [r["position"] for r in searched.json()["data"]["roster"]] == ["WR"]


async def test_distribution(client, user, create_league, create_player):
    league = await create_league(user)
    base = f"/api/team/{league['team_id']}"
    for n, acquisition in enumerate(("Draft", "Draft", "FreeAgent")):
        player = await create_player(f"Player{n}", "Test", position="WR")
        await client.post(f"{base}/roster", json={
            "player_id": player["id"], "acquisition_type": acquisition,
        }, headers=user["headers"])

    items = (await client.get(f"{base}/roster/distribution", headers=user["headers"])).json()["data"]
    assert items == [
        {"acquisition_type": "Draft", "player_count": 2, "percentage": 66.67},
        {"acquisition_type": "FreeAgent", "player_count": 1, "percentage": 33.33},
    ]


async def test_player_on_one_roster_per_league(
    client, user, register_user, create_league, join_league, create_player,
):
    league = await create_league(user)
    member = await register_user("rival@nfl.test")
    joined = await join_league(member, league["league_id"], "Rivals")
    player = await create_player("Jordan", "Love")

    first = await client.post(f"/api/team/{league['team_id']}/roster", json={
        "player_id": player["id"], "acquisition_type": "Draft",
    }, headers=user["headers"])
    assert first.status_code == 201

    second = await client.post(f"/api/team/{joined['team_id']}/roster", json={
        "player_id": player["id"], "acquisition_type": "Waiver",
    }, headers=member["headers"])
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "PLAYER_ROSTERED"


async def test_commissioner_manages_member_roster(
    client, user, register_user, create_league, join_league, create_player,
):
    league = await create_league(user)
    member = await register_user("managed@nfl.test")
    joined = await join_league(member, league["league_id"], "Managed")
    player = await create_player("Jordan", "Love")
    resp = await client.post(f"/api/team/{joined['team_id']}/roster", json={
        "player_id": player["id"], "acquisition_type": "FreeAgent",
    }, headers=user["headers"])
    assert resp.status_code == 201


async def test_member_cannot_touch_other_roster(
    client, user, register_user, create_league, join_league,
):
    league = await create_league(user)
    member = await register_user("nosy@nfl.test")
    await join_league(member, league["league_id"], "Nosy")
    resp = await client.get(f"/api/team/{league['team_id']}/my-team", headers=member["headers"])
    assert resp.status_code == 403


async def test_drop_player(client, user, create_league, create_player):
    league = await create_league(user)
    player = await create_player("Jordan", "Love")
    base = f"/api/team/{league['team_id']}"
    added = (await client.post(f"{base}/roster", json={
        "player_id": player["id"], "acquisition_type": "Draft",
    }, headers=user["headers"])).json()["data"]

    dropped = await client.post(f"{base}/roster/{added['roster_id']}/remove", headers=user["headers"])
    assert dropped.status_code == 200
    assert dropped.json()["data"]["is_active"] is False

    again = await client.post(f"{base}/roster/{added['roster_id']}/remove", headers=user["headers"])
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "ALREADY_DROPPED"

    team = (await client.get(f"{base}/my-team", headers=user["headers"])).json()["data"]
    assert team["total_players"] == 0


async def test_inactive_player_cannot_be_added(client, admin, user, create_league, create_player):
    league = await create_league(user)
    player = await create_player("Jordan", "Love")
    await client.post(f"/api/nflplayer/{player['id']}/deactivate", headers=admin["headers"])
    resp = await client.post(f"/api/team/{league['team_id']}/roster", json={
        "player_id": player["id"], "acquisition_type": "Draft",
    }, headers=user["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "PLAYER_INACTIVE"


async def test_closed_league_roster_frozen(client, user, create_league, create_player):
    league = await create_league(user)
    player = await create_player("Jordan", "Love")
    await client.put(
        f"/api/league/{league['league_id']}/status", json={"new_status": 3},
        headers=user["headers"],
    )
    resp = await client.post(f"/api/team/{league['team_id']}/roster", json={
        "player_id": player["id"], "acquisition_type": "Draft",
    }, headers=user["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "LEAGUE_CLOSED"
