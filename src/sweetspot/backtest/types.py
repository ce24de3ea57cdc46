"""Dataclasses for backtest runs, slate results, and comparisons."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class LegDetail:
    player_name: str
    prop_type: str
    category: str
    side: str
    line: float | None
    edge: float
    score: float
    outcome: str
    l10_hit_rate: float | None
    confidence_score: float | None


@dataclass(frozen=True)
class SlateResult:
    slate_date: date
    parlay_type: str
    legs: tuple[LegDetail, ...]
    legs_hit: int
    legs_missed: int
    legs_pushed: int
    all_legs_hit: bool
    total_synergy: float
    avg_edge: float
    edge_blocked_count: int
    conflict_blocked_count: int

    @property
    def leg_count(self) -> int:
        return len(self.legs)


@dataclass(frozen=True)
class RunTotals:
    """Additive per-run accumulator; ``+`` is associative and commutative."""

    slates: int = 0
    parlays: int = 0
    full_wins: int = 0
    legs: int = 0
    hits: int = 0
    misses: int = 0
    pushes: int = 0
    edge_sum: float = 0.0
    synergy_sum: float = 0.0
    blocked_by_edge: int = 0
    blocked_by_conflict: int = 0

    def __add__(self, other: RunTotals) -> RunTotals:
        return RunTotals(
            slates=self.slates + other.slates,
            parlays=self.parlays + other.parlays,
            full_wins=self.full_wins + other.full_wins,
            legs=self.legs + other.legs,
            hits=self.hits + other.hits,
            misses=self.misses + other.misses,
            pushes=self.pushes + other.pushes,
            edge_sum=self.edge_sum + other.edge_sum,
            synergy_sum=self.synergy_sum + other.synergy_sum,
            blocked_by_edge=self.blocked_by_edge + other.blocked_by_edge,
            blocked_by_conflict=self.blocked_by_conflict + other.blocked_by_conflict,
        )

    @classmethod
    def from_slate(cls, slate: SlateResult) -> RunTotals:
        built = slate.leg_count > 0
        return cls(
            slates=1,
            parlays=1 if built else 0,
            full_wins=1 if slate.all_legs_hit else 0,
            legs=slate.leg_count,
            hits=slate.legs_hit,
            misses=slate.legs_missed,
            pushes=slate.legs_pushed,
            edge_sum=slate.avg_edge if built else 0.0,
            synergy_sum=slate.total_synergy if built else 0.0,
            blocked_by_edge=slate.edge_blocked_count,
            blocked_by_conflict=slate.conflict_blocked_count,
        )


@dataclass(frozen=True)
class BacktestRun:
    version: str
    parlay_type: str
    date_start: date
    date_end: date
    config: dict[str, Any]
    totals: RunTotals
    slates: tuple[SlateResult, ...] = ()

    @property
    def total_parlays(self) -> int:
        return self.totals.parlays

    @property
    def leg_hit_rate(self) -> float:
        decided = self.totals.hits + self.totals.misses
        return self.totals.hits / decided if decided else 0.0

    @property
    def parlay_win_rate(self) -> float:
        return self.totals.full_wins / self.totals.parlays if self.totals.parlays else 0.0

    @property
    def avg_edge(self) -> float:
        return self.totals.edge_sum / self.totals.parlays if self.totals.parlays else 0.0

    @property
    def avg_synergy(self) -> float:
        return self.totals.synergy_sum / self.totals.parlays if self.totals.parlays else 0.0

    def summary(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "parlay_type": self.parlay_type,
            "total_slates": self.totals.slates,
            "total_parlays": self.total_parlays,
            "total_legs": self.totals.legs,
            "legs_hit": self.totals.hits,
            "legs_missed": self.totals.misses,
            "legs_pushed": self.totals.pushes,
            "full_parlay_wins": self.totals.full_wins,
            "leg_hit_rate": self.leg_hit_rate,
            "parlay_win_rate": self.parlay_win_rate,
            "avg_edge": self.avg_edge,
            "avg_synergy": self.avg_synergy,
            "picks_blocked_by_edge": self.totals.blocked_by_edge,
            "picks_blocked_by_conflict": self.totals.blocked_by_conflict,
        }


@dataclass(frozen=True)
class BlockedPicksAnalysis:
    total: int = 0
    would_have_hit: int = 0
    would_have_missed: int = 0

    @property
    def blocking_effectiveness(self) -> float:
        """Percentage of decided blocked picks that would have missed."""

        decided = self.would_have_hit + self.would_have_missed
        return 100.0 * self.would_have_missed / decided if decided else 0.0


@dataclass(frozen=True)
class Comparison:
    baseline_version: str
    challenger_version: str
    baseline_leg_hit_rate: float
    challenger_leg_hit_rate: float
    baseline_parlay_win_rate: float
    challenger_parlay_win_rate: float
    blocked: BlockedPicksAnalysis

    @property
    def leg_hit_rate_delta(self) -> float:
        return self.challenger_leg_hit_rate - self.baseline_leg_hit_rate

    @property
    def parlay_win_rate_delta(self) -> float:
        return self.challenger_parlay_win_rate - self.baseline_parlay_win_rate

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["leg_hit_rate_delta"] = self.leg_hit_rate_delta
        payload["parlay_win_rate_delta"] = self.parlay_win_rate_delta
        payload["blocked"]["blocking_effectiveness"] = self.blocked.blocking_effectiveness
        return payload


@dataclass
class BacktestReport:
    date_start: date | None
    date_end: date | None
    total_settled_picks: int = 0
    unique_dates: int = 0
    runs: list[BacktestRun] = field(default_factory=list)
    comparison: Comparison | None = None
    message: str = ""

    @property
    def has_data(self) -> bool:
        return self.total_settled_picks > 0

    def to_dict(self, include_slates: bool = False) -> dict[str, Any]:
        runs = []
        for run in self.runs:
            payload = run.summary()
            if include_slates:
                payload["slates"] = [asdict(slate) for slate in run.slates]
            runs.append(payload)
        return {
            "has_data": self.has_data,
            "message": self.message,
            "date_start": self.date_start,
            "date_end": self.date_end,
            "total_settled_picks": self.total_settled_picks,
            "unique_dates": self.unique_dates,
            "runs": runs,
            "comparison": self.comparison.to_dict() if self.comparison else None,
        }
