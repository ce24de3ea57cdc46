"""Edge evaluation for individual bet candidates.

Sign convention: edge is positive when the bet is favored. For positive
direction sides (over, home) that is ``projection - line``; for under and
away it is ``line - projection``.
"""

from __future__ import annotations

from sweetspot.parlays.strategy import ScoringWeights
from sweetspot.parlays.types import Pick


def reconstruct_projection(pick: Pick) -> float | None:
    """Return the first available estimate of the candidate's true value."""

    for value in (pick.projected_value, pick.l10_avg, pick.recommended_line, pick.actual_line):
        if value is not None:
            return value
    return None


def calculate_edge(pick: Pick, projection: float) -> float:
    line = pick.line
    if line is None:
        raise ValueError(f"pick {pick.pick_id} has no line to measure edge against")
    if pick.side.is_positive:
        return projection - line
    return line - projection


def evaluate_edge(pick: Pick) -> float | None:
    """Edge of the candidate, or None when it cannot be scored."""

    projection = reconstruct_projection(pick)
    if projection is None or pick.line is None:
        return None
    return calculate_edge(pick, projection)


def base_score(pick: Pick, edge: float, weights: ScoringWeights | None = None) -> float:
    weights = weights or ScoringWeights()
    hit_rate = pick.l10_hit_rate if pick.l10_hit_rate is not None else weights.default_hit_rate
    confidence = (
        pick.confidence_score if pick.confidence_score is not None else weights.default_confidence
    )
    return hit_rate * weights.hit_rate + confidence * weights.confidence + edge * weights.edge
