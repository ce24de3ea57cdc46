"""ORM models for Sweet Spot."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base declarative class."""


class CategorySweetSpot(Base):
    """A scored prop candidate written by the daily category analysis."""

    __tablename__ = "category_sweet_spots"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    analysis_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    player_name: Mapped[str] = mapped_column(String(128), nullable=False)
    prop_type: Mapped[str] = mapped_column(String(64), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    recommended_side: Mapped[str] = mapped_column(String(16), nullable=False)
    recommended_line: Mapped[float | None] = mapped_column(Float)
    actual_line: Mapped[float | None] = mapped_column(Float)
    projected_value: Mapped[float | None] = mapped_column(Float)
    l10_avg: Mapped[float | None] = mapped_column(Float)
    l10_hit_rate: Mapped[float | None] = mapped_column(Float)
    confidence_score: Mapped[float | None] = mapped_column(Float)
    team_name: Mapped[str | None] = mapped_column(String(64))
    archetype: Mapped[str | None] = mapped_column(String(64))
    outcome: Mapped[str | None] = mapped_column(String(16))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class GameEnvironment(Base):
    """Vegas total and pace for a team's game on a date."""

    __tablename__ = "game_environment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    game_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    team_abbrev: Mapped[str] = mapped_column(String(16), nullable=False)
    vegas_total: Mapped[float | None] = mapped_column(Float)
    pace_rating: Mapped[str | None] = mapped_column(String(16))


class BacktestRunRecord(Base):
    """One strategy version replayed over a date range."""

    __tablename__ = "backtest_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    run_name: Mapped[str] = mapped_column(String(255), nullable=False)
    builder_version: Mapped[str] = mapped_column(String(64), nullable=False)
    date_range_start: Mapped[date] = mapped_column(Date, nullable=False)
    date_range_end: Mapped[date] = mapped_column(Date, nullable=False)
    config: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    total_slates: Mapped[int] = mapped_column(Integer, default=0)
    total_parlays_built: Mapped[int] = mapped_column(Integer, default=0)
    total_legs: Mapped[int] = mapped_column(Integer, default=0)
    legs_hit: Mapped[int] = mapped_column(Integer, default=0)
    legs_missed: Mapped[int] = mapped_column(Integer, default=0)
    legs_pushed: Mapped[int] = mapped_column(Integer, default=0)
    leg_hit_rate: Mapped[float] = mapped_column(Float, default=0.0)
    parlay_win_rate: Mapped[float] = mapped_column(Float, default=0.0)
    avg_synergy_score: Mapped[float] = mapped_column(Float, default=0.0)
    avg_edge_value: Mapped[float] = mapped_column(Float, default=0.0)
    picks_blocked_by_edge: Mapped[int] = mapped_column(Integer, default=0)
    picks_blocked_by_synergy: Mapped[int] = mapped_column(Integer, default=0)
    baseline_run_id: Mapped[int | None] = mapped_column(ForeignKey("backtest_runs.id"))
    improvement_vs_baseline: Mapped[float | None] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    slates: Mapped[list[BacktestParlayResult]] = relationship(
        back_populates="run",
        cascade="all, delete-orphan",
    )


class BacktestParlayResult(Base):
    """Graded parlay for a single slate within a run."""

    __tablename__ = "backtest_parlay_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    run_id: Mapped[int] = mapped_column(ForeignKey("backtest_runs.id"), nullable=False)
    slate_date: Mapped[date] = mapped_column(Date, nullable=False)
    parlay_type: Mapped[str] = mapped_column(String(32), nullable=False)
    legs: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    leg_count: Mapped[int] = mapped_column(Integer, default=0)
    legs_hit: Mapped[int] = mapped_column(Integer, default=0)
    legs_missed: Mapped[int] = mapped_column(Integer, default=0)
    legs_pushed: Mapped[int] = mapped_column(Integer, default=0)
    all_legs_hit: Mapped[bool] = mapped_column(Boolean, default=False)
    total_synergy_score: Mapped[float] = mapped_column(Float, default=0.0)
    conflicts_detected: Mapped[int] = mapped_column(Integer, default=0)
    edge_blocked_count: Mapped[int] = mapped_column(Integer, default=0)
    avg_edge_value: Mapped[float] = mapped_column(Float, default=0.0)

    run: Mapped[BacktestRunRecord] = relationship(back_populates="slates")
