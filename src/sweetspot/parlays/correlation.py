"""Pairwise synergy and conflict scoring between parlay legs."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Mapping, Sequence

from sweetspot.parlays.strategy import SynergyRules
from sweetspot.parlays.types import GameContext, Pick, PropFamily, Side

SCORING_FAMILIES = frozenset({PropFamily.POINTS, PropFamily.ASSISTS})


def index_game_contexts(contexts: Iterable[GameContext]) -> dict[str, GameContext]:
    """Key contexts by lower-cased team abbreviation; later rows win."""

    index: dict[str, GameContext] = {}
    for ctx in contexts:
        key = ctx.team_abbrev.strip().casefold()
        if key:
            index[key] = ctx
    return index


def expected_total(
    team_key: str,
    contexts: Mapping[str, GameContext],
    rules: SynergyRules,
) -> float:
    ctx = contexts.get(team_key)
    if ctx is None or not ctx.vegas_total:
        return rules.neutral_total
    return ctx.vegas_total


def is_hard_conflict(leg_a: Pick, leg_b: Pick) -> bool:
    """Same individual on opposite sides: the two legs cannot both win."""

    return leg_a.player_key == leg_b.player_key and leg_a.side != leg_b.side


def leg_synergy(
    leg_a: Pick,
    leg_b: Pick,
    contexts: Mapping[str, GameContext],
    rules: SynergyRules | None = None,
) -> float:
    """Signed compatibility of two legs; negative values are conflicts."""

    rules = rules or SynergyRules()

    if is_hard_conflict(leg_a, leg_b):
        return rules.hard_conflict

    same_team = bool(leg_a.team_key) and leg_a.team_key == leg_b.team_key
    both_over = leg_a.side is Side.OVER and leg_b.side is Side.OVER
    if same_team and leg_a.prop_family == leg_b.prop_family and both_over:
        return rules.soft_conflict

    total_a = expected_total(leg_a.team_key, contexts, rules)
    total_b = expected_total(leg_b.team_key, contexts, rules)
    synergy = 0.0

    if total_a < rules.slow_total or total_b < rules.slow_total:
        both_rebounds = leg_a.prop_family == leg_b.prop_family == PropFamily.REBOUNDS
        if both_rebounds and both_over:
            synergy += rules.slow_rebound_bonus
        if Side.UNDER in (leg_a.side, leg_b.side):
            synergy += rules.slow_under_bonus

    if (total_a > rules.fast_total or total_b > rules.fast_total) and not same_team:
        scoring = leg_a.prop_family in SCORING_FAMILIES and leg_b.prop_family in SCORING_FAMILIES
        if scoring and both_over:
            synergy += rules.fast_scoring_bonus

    if same_team and leg_a.prop_family != leg_b.prop_family:
        synergy += rules.same_team_complement_bonus

    return synergy


def synergy_with_selected(
    pick: Pick,
    selected: Sequence[Pick],
    contexts: Mapping[str, GameContext],
    rules: SynergyRules | None = None,
) -> float:
    return sum((leg_synergy(pick, leg, contexts, rules) for leg in selected), 0.0)


def parlay_synergy(
    legs: Sequence[Pick],
    contexts: Mapping[str, GameContext],
    rules: SynergyRules | None = None,
) -> float:
    """Total synergy over every unordered pair of legs."""

    total = 0.0
    for leg_a, leg_b in itertools.combinations(legs, 2):
        total += leg_synergy(leg_a, leg_b, contexts, rules)
    return total
