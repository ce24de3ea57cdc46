"""Dataclasses and closed tag enumerations for candidate and parlay modeling."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class PropFamily(str, Enum):
    POINTS = "points"
    REBOUNDS = "rebounds"
    ASSISTS = "assists"
    THREES = "threes"
    PRA = "pra"
    PR = "pr"
    PA = "pa"
    RA = "ra"
    OTHER = "other"


class Category(str, Enum):
    """Archetype categories a parlay slot can ask for."""

    STAR_FLOOR_OVER = "STAR_FLOOR_OVER"
    BIG_ASSIST_OVER = "BIG_ASSIST_OVER"
    THREE_POINT_SHOOTER = "THREE_POINT_SHOOTER"
    LOW_SCORER_UNDER = "LOW_SCORER_UNDER"
    ROLE_PLAYER_REB = "ROLE_PLAYER_REB"
    BIG_REBOUNDER = "BIG_REBOUNDER"
    ELITE_REB_OVER = "ELITE_REB_OVER"
    MID_SCORER_UNDER = "MID_SCORER_UNDER"
    HIGH_ASSIST_UNDER = "HIGH_ASSIST_UNDER"
    ELITE_REBOUNDER = "ELITE_REBOUNDER"
    LOW_LINE_REBOUNDER = "LOW_LINE_REBOUNDER"
    NON_SCORING_SHOOTER = "NON_SCORING_SHOOTER"


class Side(str, Enum):
    OVER = "over"
    UNDER = "under"
    HOME = "home"
    AWAY = "away"

    @property
    def is_positive(self) -> bool:
        """Over and home bets win when the outcome lands above the line."""

        return self in (Side.OVER, Side.HOME)


class Outcome(str, Enum):
    HIT = "hit"
    MISS = "miss"
    PUSH = "push"
    PENDING = "pending"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.PENDING


@dataclass(frozen=True)
class Pick:
    """One scorable bet candidate for an analysis date."""

    pick_id: str
    player_name: str
    prop_type: str
    prop_family: PropFamily
    category: Category
    side: Side
    analysis_date: date
    recommended_line: float | None = None
    actual_line: float | None = None
    projected_value: float | None = None
    l10_avg: float | None = None
    l10_hit_rate: float | None = None
    confidence_score: float | None = None
    team_name: str | None = None
    outcome: Outcome = Outcome.PENDING

    @property
    def line(self) -> float | None:
        """Line the bet is graded against: the actual line when it was moved."""

        return self.actual_line if self.actual_line is not None else self.recommended_line

    @property
    def player_key(self) -> str:
        return self.player_name.strip().casefold()

    @property
    def team_key(self) -> str:
        return (self.team_name or "").strip().casefold()


@dataclass(frozen=True)
class GameContext:
    team_abbrev: str
    vegas_total: float | None = None
    pace_rating: str | None = None


@dataclass(frozen=True)
class SelectedLeg:
    pick: Pick
    edge: float
    score: float


@dataclass
class BuildResult:
    selected: list[SelectedLeg] = field(default_factory=list)
    blocked_by_edge: list[Pick] = field(default_factory=list)
    blocked_by_conflict: list[Pick] = field(default_factory=list)


@dataclass(frozen=True)
class GradeResult:
    hit: int
    miss: int
    push: int
    all_hit: bool
    hit_rate: float
