"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - UserAccount is referenced by every audit/change-log table

Design Decisions:
    - One file per aggregate (entity + its change log) for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references and Base.metadata is complete before create_all / autogenerate
"""

from fantasy_api.models.system_role import SystemRole, SystemRoleChangeLog  # noqa: F401
from fantasy_api.models.user_account import UserAccount, ProfileChangeLog  # noqa: F401
from fantasy_api.models.user_session import (  # noqa: F401
    UserSession, LoginAttempt, PasswordResetRequest,
)
from fantasy_api.models.season import Season  # noqa: F401
from fantasy_api.models.position_format import PositionFormat, PositionSlot  # noqa: F401
from fantasy_api.models.scoring import ScoringSchema, ScoringRule  # noqa: F401
from fantasy_api.models.nfl_team import NFLTeam, NFLTeamChangeLog  # noqa: F401
from fantasy_api.models.nfl_player import NFLPlayer, NFLPlayerChangeLog  # noqa: F401
from fantasy_api.models.league import (  # noqa: F401
    LeagueRole, League, LeagueMember, LeagueConfigHistory, LeagueStatusHistory,
)
from fantasy_api.models.team import Team, TeamChangeLog, TeamRoster  # noqa: F401
from fantasy_api.models.user_action_log import UserActionLog  # noqa: F401
