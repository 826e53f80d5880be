"""League ORM — fantasy leagues, memberships, and their config/status history.

Invariants:
    - Every league belongs to one season; name is unique within a season
    - public_id is a unique 6-digit number shared with invitees
    - Exactly one active member per league has is_primary_commissioner = True
    - A membership is active while left_at is NULL
    - league_password_hash holds a bcrypt hash, never the password
    - status follows LeagueStatus (0 PreDraft, 1 Active, 2 Inactive, 3 Closed)

Design Decisions:
    - Memberships are closed (left_at) rather than deleted: the roster of past managers
      stays queryable
    - Config and status history as separate tables: status carries a reason, config
      carries field-level diffs
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Integer, Boolean, Date, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from fantasy_api.db.base import Base, utc_now


class LeagueRole(Base):
    __tablename__ = "league_role"

    role_code: Mapped[str] = mapped_column(String(20), primary_key=True)
    display: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(300), nullable=True)


class League(Base):
    __tablename__ = "league"
    __table_args__ = (UniqueConstraint("season_id", "name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    public_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    season_id: Mapped[int] = mapped_column(
        ForeignKey("season.id"), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    team_slots: Mapped[int] = mapped_column(Integer, nullable=False)
    league_password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    allow_decimals: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    playoff_teams: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    trade_deadline_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    trade_deadline_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    max_roster_changes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_free_agent_adds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    position_format_id: Mapped[int] = mapped_column(
        ForeignKey("position_format.id"), nullable=False,
    )
    scoring_schema_id: Mapped[int] = mapped_column(
        ForeignKey("scoring_schema.id"), nullable=False,
    )
    created_by_user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=utc_now,
    )


class LeagueMember(Base):
    __tablename__ = "league_member"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    league_id: Mapped[int] = mapped_column(
        ForeignKey("league.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    role_code: Mapped[str] = mapped_column(
        ForeignKey("league_role.role_code"), nullable=False,
    )
    is_primary_commissioner: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    left_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )


class LeagueConfigHistory(Base):
    __tablename__ = "league_config_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    league_id: Mapped[int] = mapped_column(
        ForeignKey("league.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    changed_by_user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id"), nullable=False,
    )
    field_name: Mapped[str] = mapped_column(String(50), nullable=False)
    old_value: Mapped[str | None] = mapped_column(String(500), nullable=True)
    new_value: Mapped[str | None] = mapped_column(String(500), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )


class LeagueStatusHistory(Base):
    __tablename__ = "league_status_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    league_id: Mapped[int] = mapped_column(
        ForeignKey("league.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    changed_by_user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id"), nullable=False,
    )
    old_status: Mapped[int] = mapped_column(Integer, nullable=False)
    new_status: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(300), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
