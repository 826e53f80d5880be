"""App assembly — the application module imports and registers every router."""

import importlib


def test_main_imports_and_mounts_routers():
    main = importlib.import_module("fantasy_api.main")
    paths = {route.path for route in main.app.routes}
    for prefix in (
        "/api/health", "/api/auth", "/api/user", "/api/system-roles", "/api/seasons",
        "/api/reference", "/api/scoring", "/api/nflteam", "/api/nflplayer",
        "/api/league", "/api/team", "/api/audit",
    ):
        assert any(path.startswith(prefix) for path in paths), prefix


def test_catalogue_services_expose_list_methods():
    from fantasy_api.services.nfl_player_service import NFLPlayerService
    from fantasy_api.services.nfl_team_service import NFLTeamService

    assert callable(NFLPlayerService.list_players)
    assert callable(NFLTeamService.list_teams)
