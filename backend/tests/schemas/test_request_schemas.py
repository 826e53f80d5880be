"""Request schemas — stripping, length limits and partial-update semantics.

Invariants:
    - Required names are stripped and blank names rejected
    - Update payloads only report fields present in the body (exclude_unset)
    - Role codes are upper-cased before reaching the service
"""

import pytest
from pydantic import ValidationError

from fantasy_api.core.domain_types import AcquisitionType
from fantasy_api.schemas.auth import RegisterRequest
from fantasy_api.schemas.common import ApiResponse, Page
from fantasy_api.schemas.league import JoinLeagueRequest, LeagueConfigUpdate, LeagueCreate
from fantasy_api.schemas.nfl import NFLPlayerCreate, NFLTeamUpdate
from fantasy_api.schemas.system_role import ChangeRoleRequest
from fantasy_api.schemas.team import AddRosterPlayerRequest, UpdateBrandingRequest


# --- Auth ---------------------------------------------------------------------

def test_register_strips_name_and_blank_alias():
    req = RegisterRequest(
        name="  Jordan  ", email=" fan@nfl.com ", alias="   ",
        password="Secret123", password_confirm="Secret123",
    )
    assert req.name == "Jordan"
    assert req.email == "fan@nfl.com"
    assert req.alias is None
    assert req.language_code == "en"


def test_register_rejects_whitespace_name():
    with pytest.raises(ValidationError):
        RegisterRequest(
            name="   ", email="fan@nfl.com",
            password="Secret123", password_confirm="Secret123",
        )


def test_register_name_max_length():
    with pytest.raises(ValidationError):
        RegisterRequest(
            name="x" * 51, email="fan@nfl.com",
            password="Secret123", password_confirm="Secret123",
        )


# --- Leagues ------------------------------------------------------------------

def test_league_create_defaults():
    req = LeagueCreate(
        name=" Sunday League ", team_slots=10, league_password="League123",
        initial_team_name="Crew",
    )
    assert req.name == "Sunday League"
    assert req.playoff_teams == 4
    assert req.allow_decimals is True
    assert req.position_format_id is None


def test_league_config_update_is_partial():
    req = LeagueConfigUpdate(description=None, max_roster_changes=5)
    assert req.model_dump(exclude_unset=True) == {"description": None, "max_roster_changes": 5}


def test_join_request_rejects_blank_team_name():
    with pytest.raises(ValidationError):
        JoinLeagueRequest(league_id=1, league_password="League123", team_name="  ")


# --- NFL catalogue ------------------------------------------------------------

def test_nfl_player_create_strips_names():
    req = NFLPlayerCreate(first_name=" Aaron ", last_name=" Rodgers ", position="qb", nfl_team_id=1)
    assert req.first_name == "Aaron"
    assert req.last_name == "Rodgers"


def test_nfl_player_create_requires_team():
    with pytest.raises(ValidationError):
        NFLPlayerCreate(first_name="A", last_name="B", position="QB", nfl_team_id=0)


def test_nfl_team_update_only_sets_sent_fields():
    req = NFLTeamUpdate(city=" Chicago ")
    assert req.model_dump(exclude_unset=True) == {"city": "Chicago"}


def test_nfl_team_update_rejects_blank_name():
    with pytest.raises(ValidationError):
        NFLTeamUpdate(team_name="   ")


# --- Teams & roles ------------------------------------------------------------

def test_branding_strips_team_name():
    assert UpdateBrandingRequest(team_name=" Blitz ").team_name == "Blitz"


def test_roster_add_accepts_acquisition_codes():
    req = AddRosterPlayerRequest(player_id=3, acquisition_type="FreeAgent")
    assert req.acquisition_type is AcquisitionType.FREE_AGENT


def test_roster_add_rejects_unknown_acquisition():
    with pytest.raises(ValidationError):
        AddRosterPlayerRequest(player_id=3, acquisition_type="Lottery")


def test_change_role_upper_cases_code():
    assert ChangeRoleRequest(new_role_code=" admin ").new_role_code == "ADMIN"


# --- Envelope -----------------------------------------------------------------

def test_api_response_defaults_to_success():
    body = ApiResponse[Page[int]](
        message="ok",
        data=Page(items=[1, 2], total_records=2, current_page=1, page_size=50, total_pages=1),
    ).model_dump()
    assert body["success"] is True
    assert body["data"]["items"] == [1, 2]
