"""Position Format ORM — lineup templates (slots per position) leagues can adopt."""

from datetime import datetime

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fantasy_api.db.base import Base, utc_now


class PositionFormat(Base):
    __tablename__ = "position_format"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(300), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )

    slots: Mapped[list["PositionSlot"]] = relationship(
        back_populates="position_format",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PositionSlot.id",
    )


class PositionSlot(Base):
    __tablename__ = "position_slot"
    __table_args__ = (
        UniqueConstraint("position_format_id", "position_code"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    position_format_id: Mapped[int] = mapped_column(
        ForeignKey("position_format.id", ondelete="CASCADE"), nullable=False,
    )
    position_code: Mapped[str] = mapped_column(String(20), nullable=False)
    slot_count: Mapped[int] = mapped_column(Integer, nullable=False)
    # Bench/IR slots hold players without scoring
    points_allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    position_format: Mapped["PositionFormat"] = relationship(back_populates="slots")
