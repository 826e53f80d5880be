"""Fantasy Team ORM — a manager's team inside a league, its branding history and roster.

Invariants:
    - team_name is unique among active teams of the same league
    - A team is active while its owner is an active member of the league
    - Roster entries are soft-dropped (is_active False + dropped_date), never deleted
    - A player appears on at most one active roster per league (enforced by service)
"""

from datetime import datetime

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from fantasy_api.db.base import Base, utc_now


class Team(Base):
    __tablename__ = "team"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    league_id: Mapped[int] = mapped_column(
        ForeignKey("league.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    owner_user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id"), nullable=False, index=True,
    )
    team_name: Mapped[str] = mapped_column(String(100), nullable=False)
    team_image_url: Mapped[str | None] = mapped_column(String(400), nullable=True)
    team_image_width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    team_image_height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    team_image_bytes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(String(400), nullable=True)
    thumbnail_width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    thumbnail_height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    thumbnail_bytes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=utc_now,
    )


class TeamChangeLog(Base):
    __tablename__ = "team_change_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    team_id: Mapped[int] = mapped_column(
        ForeignKey("team.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    changed_by_user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id"), nullable=False,
    )
    field_name: Mapped[str] = mapped_column(String(50), nullable=False)
    old_value: Mapped[str | None] = mapped_column(String(400), nullable=True)
    new_value: Mapped[str | None] = mapped_column(String(400), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )


class TeamRoster(Base):
    __tablename__ = "team_roster"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    team_id: Mapped[int] = mapped_column(
        ForeignKey("team.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    nfl_player_id: Mapped[int] = mapped_column(
        ForeignKey("nfl_player.id"), nullable=False, index=True,
    )
    acquisition_type: Mapped[str] = mapped_column(String(20), nullable=False)
    acquisition_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    dropped_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    added_by_user_id: Mapped[int] = mapped_column(
        ForeignKey("user_account.id"), nullable=False,
    )
