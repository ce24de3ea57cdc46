"""Pydantic schemas for candidate and game environment rows.

Free-form strings from the upstream analysis (prop types, categories, sides,
outcomes) are resolved to closed tags here so the parlay core never does
string matching.
"""

from __future__ import annotations

import re
from datetime import date

from pydantic import BaseModel, ConfigDict

from sweetspot.parlays.types import Category, GameContext, Outcome, Pick, PropFamily, Side

_SEPARATORS = re.compile(r"[_\s-]+")


def normalize_prop_family(prop_type: str) -> PropFamily:
    """Resolve a free-form prop type such as ``player_points_rebounds``."""

    normalized = _SEPARATORS.sub("", prop_type.lower())
    has_points = "point" in normalized
    has_rebounds = "rebound" in normalized
    has_assists = "assist" in normalized
    if has_points and has_rebounds and has_assists:
        return PropFamily.PRA
    if has_points and has_rebounds:
        return PropFamily.PR
    if has_points and has_assists:
        return PropFamily.PA
    if has_rebounds and has_assists:
        return PropFamily.RA
    if has_points or normalized == "pts":
        return PropFamily.POINTS
    if has_rebounds or normalized == "reb":
        return PropFamily.REBOUNDS
    if has_assists or normalized == "ast":
        return PropFamily.ASSISTS
    if "three" in normalized or normalized == "3pt":
        return PropFamily.THREES
    return PropFamily.OTHER


def parse_category(value: str) -> Category | None:
    try:
        return Category(value.strip().upper())
    except ValueError:
        return None


def parse_side(value: str) -> Side | None:
    try:
        return Side(value.strip().lower())
    except ValueError:
        return None


def parse_outcome(value: str | None) -> Outcome:
    if not value:
        return Outcome.PENDING
    try:
        return Outcome(value.strip().lower())
    except ValueError:
        return Outcome.PENDING


class PickRecord(BaseModel):
    """Row shape of ``category_sweet_spots``."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    analysis_date: date
    player_name: str
    prop_type: str
    category: str
    recommended_side: str
    recommended_line: float | None = None
    actual_line: float | None = None
    projected_value: float | None = None
    l10_avg: float | None = None
    l10_hit_rate: float | None = None
    confidence_score: float | None = None
    team_name: str | None = None
    outcome: str | None = None

    def to_pick(self) -> Pick | None:
        """Tagged candidate, or None when the category or side is not recognized."""

        category = parse_category(self.category)
        side = parse_side(self.recommended_side)
        if category is None or side is None:
            return None
        return Pick(
            pick_id=self.id,
            player_name=self.player_name,
            prop_type=self.prop_type,
            prop_family=normalize_prop_family(self.prop_type),
            category=category,
            side=side,
            analysis_date=self.analysis_date,
            recommended_line=self.recommended_line,
            actual_line=self.actual_line,
            projected_value=self.projected_value,
            l10_avg=self.l10_avg,
            l10_hit_rate=self.l10_hit_rate,
            confidence_score=self.confidence_score,
            team_name=self.team_name,
            outcome=parse_outcome(self.outcome),
        )


class GameEnvironmentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    game_date: date
    team_abbrev: str
    vegas_total: float | None = None
    pace_rating: str | None = None

    def to_context(self) -> GameContext:
        return GameContext(
            team_abbrev=self.team_abbrev,
            vegas_total=self.vegas_total,
            pace_rating=self.pace_rating,
        )
