"""NFL Player ORM — real-world players, their NFL team, injury status and edit history.

Invariants:
    - (first_name, last_name, nfl_team_id) is unique
    - A player on an active fantasy roster cannot be deactivated
"""

from datetime import datetime

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fantasy_api.db.base import Base, utc_now


class NFLPlayer(Base):
    __tablename__ = "nfl_player"
    __table_args__ = (
        UniqueConstraint("first_name", "last_name", "nfl_team_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    position: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    nfl_team_id: Mapped[int] = mapped_column(
        ForeignKey("nfl_team.id"), nullable=False, index=True,
    )
    injury_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    injury_description: Mapped[str | None] = mapped_column(String(300), nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(400), nullable=True)
    photo_width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    photo_height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    photo_bytes: Mapped[int | None] = mapped_column(Integer, nullable=True)
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
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, onupdate=utc_now,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class NFLPlayerChangeLog(Base):
    __tablename__ = "nfl_player_change_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nfl_player_id: Mapped[int] = mapped_column(
        ForeignKey("nfl_player.id", ondelete="CASCADE"), nullable=False, index=True,
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
