"""Outcome grading for built parlays."""

from __future__ import annotations

from collections.abc import Iterable

from sweetspot.parlays.types import GradeResult, Outcome, SelectedLeg


def grade_parlay(legs: Iterable[SelectedLeg]) -> GradeResult:
    hit = miss = push = 0
    for leg in legs:
        if leg.pick.outcome is Outcome.HIT:
            hit += 1
        elif leg.pick.outcome is Outcome.MISS:
            miss += 1
        elif leg.pick.outcome is Outcome.PUSH:
            push += 1
    decided = hit + miss
    return GradeResult(
        hit=hit,
        miss=miss,
        push=push,
        all_hit=miss == 0 and hit > 0,
        hit_rate=hit / decided if decided else 0.0,
    )
