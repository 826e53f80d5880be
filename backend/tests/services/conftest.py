"""Service test fixtures — async DB, FastAPI test client and account helpers.

Invariants:
    - Every test gets a fresh in-memory SQLite database with reference data seeded
    - get_db dependency overridden to use the test DB
    - db_manager patched so the readiness probe sees the test engine
    - get_email_sender overridden: reset mails are captured, never delivered

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares one connection, so rows
      committed by a request are visible to the assertions that follow
    - Assertions that read the DB open a fresh session (fresh_db) instead of reusing
      one whose identity map may hold stale rows
    - Accounts are created through the API (register + login): tests exercise the real
      bearer-session path rather than forging tokens
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from fantasy_api.db.base import Base
from fantasy_api.db.seed import promote_to_admin, seed_reference_data
from fantasy_api.infrastructure.database import get_db, DatabaseSessionManager
from fantasy_api.infrastructure.email_sender import get_email_sender
import fantasy_api.infrastructure.database as db_module
from fantasy_api.main import app

PASSWORD = "Secret123"
LEAGUE_PASSWORD = "League123"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await seed_reference_data(session)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fresh_db(test_session_factory):
    """Open a new session for post-request assertions: `async with fresh_db() as db:`."""
    return test_session_factory


class FakeEmailSender:
    """Records password reset mails instead of sending them."""

    def __init__(self):
        self.sent: list[dict] = []

    async def send_password_reset(self, to: str, token: str, expires_at: datetime) -> bool:
        self.sent.append({"to": to, "token": token, "expires_at": expires_at})
        return True


@pytest.fixture
def email_sender():
    return FakeEmailSender()


@pytest.fixture
async def client(test_engine, test_session_factory, email_sender):
    """FastAPI test client with DB and email dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    # Readiness probe reads the module-level manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Account helpers ─────────────────────────────────────────────


def auth_headers(session_id: str) -> dict:
    return {"Authorization": f"Bearer {session_id}"}


@pytest.fixture
def register_user(client):
    """Register and log in a user. Returns {user_id, email, headers}."""
    async def _register(email: str, name: str = "Test User", password: str = PASSWORD) -> dict:
        resp = await client.post("/api/auth/register", json={
            "name": name,
            "email": email,
            "password": password,
            "password_confirm": password,
        })
        assert resp.status_code == 201, resp.text
        login = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        data = login.json()["data"]
        return {
            "user_id": data["user_id"],
            "email": email,
            "headers": auth_headers(data["session_id"]),
        }

    return _register


@pytest.fixture
async def admin(register_user, test_session_factory):
    account = await register_user("admin@nfl.test", "League Admin")
    async with test_session_factory() as session:
        assert await promote_to_admin(session, account["email"])
    return account


@pytest.fixture
async def user(register_user):
    return await register_user("player@nfl.test", "Regular Player")


@pytest.fixture
async def current_season(client, admin):
    start = datetime.now(timezone.utc).date()
    resp = await client.post("/api/seasons", json={
        "name": "Season One",
        "week_count": 17,
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=7 * 17)).isoformat(),
        "mark_as_current": True,
    }, headers=admin["headers"])
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture
def create_league(client, current_season):
    """Create a league owned by `owner`. Returns the LeagueCreated payload."""
    async def _create(owner: dict, name: str = "Sunday League", team_slots: int = 4,
                      team_name: str = "Commissioner Crew", **extra) -> dict:
        body = {
            "name": name,
            "team_slots": team_slots,
            "league_password": LEAGUE_PASSWORD,
            "initial_team_name": team_name,
            **extra,
        }
        resp = await client.post("/api/league", json=body, headers=owner["headers"])
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create


@pytest.fixture
def join_league(client):
    async def _join(member: dict, league_id: int, team_name: str) -> dict:
        resp = await client.post("/api/league/join", json={
            "league_id": league_id,
            "league_password": LEAGUE_PASSWORD,
            "team_name": team_name,
        }, headers=member["headers"])
        assert resp.status_code == 200, resp.text
        return resp.json()["data"]

    return _join


@pytest.fixture
async def nfl_team(client, admin):
    resp = await client.post("/api/nflteam", json={
        "team_name": "Green Bay Packers", "city": "Green Bay",
    }, headers=admin["headers"])
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture
def create_player(client, admin, nfl_team):
    async def _create(first_name: str, last_name: str, position: str = "QB",
                      nfl_team_id: int | None = None) -> dict:
        resp = await client.post("/api/nflplayer", json={
            "first_name": first_name,
            "last_name": last_name,
            "position": position,
            "nfl_team_id": nfl_team_id or nfl_team["id"],
        }, headers=admin["headers"])
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create
