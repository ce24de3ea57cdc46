"""Pydantic schemas for the Sweet Spot API."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


class BacktestRequest(BaseModel):
    date_start: date | None = None
    date_end: date | None = None
    versions: list[str] | None = Field(default=None, min_length=1)
    parlay_type: str | None = None
    persist: bool = False
    include_slates: bool = False


class RunSummary(BaseModel):
    version: str
    parlay_type: str
    total_slates: int
    total_parlays: int
    total_legs: int
    legs_hit: int
    legs_missed: int
    legs_pushed: int
    full_parlay_wins: int
    leg_hit_rate: float
    parlay_win_rate: float
    avg_edge: float
    avg_synergy: float
    picks_blocked_by_edge: int
    picks_blocked_by_conflict: int
    slates: list[dict[str, Any]] | None = None


class BlockedPicks(BaseModel):
    total: int
    would_have_hit: int
    would_have_missed: int
    blocking_effectiveness: float


class ComparisonResponse(BaseModel):
    baseline_version: str
    challenger_version: str
    baseline_leg_hit_rate: float
    challenger_leg_hit_rate: float
    baseline_parlay_win_rate: float
    challenger_parlay_win_rate: float
    leg_hit_rate_delta: float
    parlay_win_rate_delta: float
    blocked: BlockedPicks


class BacktestResponse(BaseModel):
    has_data: bool
    message: str
    date_start: date | None
    date_end: date | None
    total_settled_picks: int
    unique_dates: int
    runs: list[RunSummary]
    comparison: ComparisonResponse | None = None


class StrategyResponse(BaseModel):
    version: str
    description: str
    slots: list[str]
    thresholds: dict[str, float] | None
    synergy: bool
    synergy_weight: float


class StoredRunResponse(BaseModel):
    id: int
    run_name: str
    builder_version: str
    date_range_start: date
    date_range_end: date
    total_parlays_built: int
    leg_hit_rate: float
    parlay_win_rate: float
    baseline_run_id: int | None = None
    improvement_vs_baseline: float | None = None
    created_at: datetime
