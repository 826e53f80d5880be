"""NFL Team ORM — real-world franchises and their edit history.

Invariants:
    - team_name is unique
    - Deactivation is a soft delete (is_active = False); rows are never removed
    - Each changed field on update writes one NFLTeamChangeLog row
"""

from datetime import datetime

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from fantasy_api.db.base import Base, utc_now


class NFLTeam(Base):
    __tablename__ = "nfl_team"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    team_name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    team_image_url: Mapped[str | None] = mapped_column(String(400), nullable=True)
    team_image_width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    team_image_height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    team_image_bytes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(String(400), nullable=True)
    thumbnail_width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    thumbnail_height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    thumbnail_bytes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=utc_now,
    )


class NFLTeamChangeLog(Base):
    __tablename__ = "nfl_team_change_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nfl_team_id: Mapped[int] = mapped_column(
        ForeignKey("nfl_team.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    changed_by_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("user_account.id", ondelete="SET NULL"), nullable=True,
    )
    field_name: Mapped[str] = mapped_column(String(50), nullable=False)
    old_value: Mapped[str | None] = mapped_column(String(400), nullable=True)
    new_value: Mapped[str | None] = mapped_column(String(400), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
