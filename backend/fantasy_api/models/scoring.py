"""Scoring ORM — versioned scoring schemas and their per-metric rules.

Invariants:
    - (name, version) is unique
    - A rule awards points_per_unit for every unit_value of the metric, and/or flat_points
"""

from datetime import datetime

from sqlalchemy import String, Integer, Boolean, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fantasy_api.db.base import Base, utc_now


class ScoringSchema(Base):
    __tablename__ = "scoring_schema"
    __table_args__ = (UniqueConstraint("name", "version"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_template: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    description: Mapped[str | None] = mapped_column(String(300), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )

    rules: Mapped[list["ScoringRule"]] = relationship(
        back_populates="schema",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ScoringRule.id",
    )


class ScoringRule(Base):
    __tablename__ = "scoring_rule"
    __table_args__ = (UniqueConstraint("scoring_schema_id", "metric_code"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    scoring_schema_id: Mapped[int] = mapped_column(
        ForeignKey("scoring_schema.id", ondelete="CASCADE"), nullable=False,
    )
    metric_code: Mapped[str] = mapped_column(String(30), nullable=False)
    points_per_unit: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit: Mapped[str | None] = mapped_column(String(20), nullable=True)
    unit_value: Mapped[int | None] = mapped_column(Integer, nullable=True)
    flat_points: Mapped[float | None] = mapped_column(Float, nullable=True)

    schema: Mapped["ScoringSchema"] = relationship(back_populates="rules")
