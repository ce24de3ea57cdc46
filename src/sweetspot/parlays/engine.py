"""Parlay construction logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from sweetspot.parlays.correlation import is_hard_conflict, synergy_with_selected
from sweetspot.parlays.edge import base_score, evaluate_edge
from sweetspot.parlays.strategy import StrategyConfig
from sweetspot.parlays.types import BuildResult, GameContext, Pick, SelectedLeg

logger = logging.getLogger(__name__)


def build_parlay(
    picks: Iterable[Pick],
    strategy: StrategyConfig,
    contexts: Mapping[str, GameContext] | None = None,
) -> BuildResult:
    """Fill the strategy's slots in order, greedily taking the best leg for each.

    Ties on score keep the candidate seen first in input order.
    """

    pool = list(picks)
    contexts = contexts or {}
    result = BuildResult()

    for slot in strategy.slots:
        candidates = [pick for pick in pool if pick.category == slot]
        if not candidates:
            continue

        best: SelectedLeg | None = None
        chosen = [leg.pick for leg in result.selected]
        for pick in candidates:
            edge = evaluate_edge(pick)
            if edge is None:
                result.blocked_by_edge.append(pick)
                continue

            threshold = strategy.threshold_for(pick.prop_family)
            if threshold is not None and abs(edge) < threshold:
                result.blocked_by_edge.append(pick)
                continue

            if any(is_hard_conflict(pick, leg) for leg in chosen):
                result.blocked_by_conflict.append(pick)
                continue

            synergy = 0.0
            if strategy.correlation_enabled:
                synergy = synergy_with_selected(pick, chosen, contexts, strategy.synergy)
                if synergy <= strategy.synergy.conflict_block_at:
                    result.blocked_by_conflict.append(pick)
                    continue

            score = base_score(pick, edge, strategy.weights) + synergy * strategy.synergy_weight
            if best is None or score > best.score:
                best = SelectedLeg(pick=pick, edge=edge, score=score)

        if best is not None:
            result.selected.append(best)
        else:
            logger.debug("slot %s left empty (%d candidates)", slot.value, len(candidates))

    return result
