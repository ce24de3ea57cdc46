"""Replay parlay strategies over settled historical slates."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from functools import reduce

from sweetspot.backtest.types import (
    BacktestRun,
    BlockedPicksAnalysis,
    Comparison,
    LegDetail,
    RunTotals,
    SlateResult,
)
from sweetspot.errors import ConfigurationError
from sweetspot.parlays.correlation import parlay_synergy
from sweetspot.parlays.edge import evaluate_edge
from sweetspot.parlays.engine import build_parlay
from sweetspot.parlays.grading import grade_parlay
from sweetspot.parlays.strategy import DEFAULT_SLOT_SHAPE, StrategyConfig
from sweetspot.parlays.types import GameContext, Outcome, Pick, SelectedLeg

logger = logging.getLogger(__name__)


def settled_only(picks: Iterable[Pick]) -> list[Pick]:
    return [pick for pick in picks if pick.outcome.is_terminal]


def group_by_date(picks: Iterable[Pick]) -> dict[date, list[Pick]]:
    """Bucket picks by analysis date, sorted by date, keeping input order within a day."""

    buckets: dict[date, list[Pick]] = {}
    for pick in picks:
        buckets.setdefault(pick.analysis_date, []).append(pick)
    return {day: buckets[day] for day in sorted(buckets)}


def _leg_detail(leg: SelectedLeg) -> LegDetail:
    pick = leg.pick
    return LegDetail(
        player_name=pick.player_name,
        prop_type=pick.prop_type,
        category=pick.category.value,
        side=pick.side.value,
        line=pick.line,
        edge=leg.edge,
        score=leg.score,
        outcome=pick.outcome.value,
        l10_hit_rate=pick.l10_hit_rate,
        confidence_score=pick.confidence_score,
    )


def run_slate(
    slate_date: date,
    picks: Sequence[Pick],
    strategy: StrategyConfig,
    contexts: Mapping[str, GameContext],
    parlay_type: str = DEFAULT_SLOT_SHAPE,
) -> SlateResult:
    """Build and grade one date's parlay."""

    built = build_parlay(picks, strategy, contexts)
    graded = grade_parlay(built.selected)
    legs = [leg.pick for leg in built.selected]
    avg_edge = (
        sum(leg.edge for leg in built.selected) / len(built.selected) if built.selected else 0.0
    )
    slate = SlateResult(
        slate_date=slate_date,
        parlay_type=parlay_type,
        legs=tuple(_leg_detail(leg) for leg in built.selected),
        legs_hit=graded.hit,
        legs_missed=graded.miss,
        legs_pushed=graded.push,
        all_legs_hit=graded.all_hit,
        total_synergy=parlay_synergy(legs, contexts, strategy.synergy),
        avg_edge=avg_edge,
        edge_blocked_count=len(built.blocked_by_edge),
        conflict_blocked_count=len(built.blocked_by_conflict),
    )
    logger.debug(
        "%s %s: %d legs, %d hit, %d blocked by edge, %d by conflict",
        strategy.version,
        slate_date.isoformat(),
        slate.leg_count,
        slate.legs_hit,
        slate.edge_blocked_count,
        slate.conflict_blocked_count,
    )
    return slate


def aggregate_slates(slates: Iterable[SlateResult]) -> RunTotals:
    return reduce(lambda acc, slate: acc + RunTotals.from_slate(slate), slates, RunTotals())


def run_strategy(
    picks: Iterable[Pick],
    strategy: StrategyConfig,
    contexts: Mapping[str, GameContext],
    date_start: date,
    date_end: date,
    parlay_type: str = DEFAULT_SLOT_SHAPE,
    max_workers: int = 1,
) -> BacktestRun:
    """Backtest one strategy version over every settled date in the range."""

    in_range = [pick for pick in settled_only(picks) if date_start <= pick.analysis_date <= date_end]
    by_date = group_by_date(in_range)
    logger.info(
        "Running %s over %d slates (%s to %s)",
        strategy.version,
        len(by_date),
        date_start.isoformat(),
        date_end.isoformat(),
    )

    def _slate(item: tuple[date, list[Pick]]) -> SlateResult:
        return run_slate(item[0], item[1], strategy, contexts, parlay_type)

    if max_workers > 1 and len(by_date) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            slates = list(executor.map(_slate, by_date.items()))
    else:
        slates = [_slate(item) for item in by_date.items()]

    run = BacktestRun(
        version=strategy.version,
        parlay_type=parlay_type,
        date_start=date_start,
        date_end=date_end,
        config=strategy.snapshot(),
        totals=aggregate_slates(slates),
        slates=tuple(slates),
    )
    logger.info(
        "%s finished: %d parlays, leg hit rate %.3f, parlay win rate %.3f",
        strategy.version,
        run.total_parlays,
        run.leg_hit_rate,
        run.parlay_win_rate,
    )
    return run


def run_backtest(
    picks: Iterable[Pick],
    strategies: Sequence[StrategyConfig],
    contexts: Mapping[str, GameContext],
    date_start: date,
    date_end: date,
    parlay_type: str = DEFAULT_SLOT_SHAPE,
    max_workers: int = 1,
) -> list[BacktestRun]:
    pool = list(picks)
    return [
        run_strategy(pool, strategy, contexts, date_start, date_end, parlay_type, max_workers)
        for strategy in strategies
    ]


def would_block(pick: Pick, strategy: StrategyConfig) -> bool:
    """Whether the strategy's edge rule rejects the pick before any slot logic."""

    edge = evaluate_edge(pick)
    if edge is None:
        return True
    threshold = strategy.threshold_for(pick.prop_family)
    return threshold is not None and abs(edge) < threshold


def analyze_blocked(picks: Iterable[Pick], strategy: StrategyConfig) -> BlockedPicksAnalysis:
    blocked = [pick for pick in picks if would_block(pick, strategy)]
    return BlockedPicksAnalysis(
        total=len(blocked),
        would_have_hit=sum(1 for pick in blocked if pick.outcome is Outcome.HIT),
        would_have_missed=sum(1 for pick in blocked if pick.outcome is Outcome.MISS),
    )


def compare_runs(
    baseline: BacktestRun,
    challenger: BacktestRun,
    challenger_strategy: StrategyConfig,
    picks: Iterable[Pick],
) -> Comparison:
    """Compare two completed runs and measure what the challenger's edge gate filtered."""

    baseline_range = (baseline.date_start, baseline.date_end)
    challenger_range = (challenger.date_start, challenger.date_end)
    if baseline_range != challenger_range:
        raise ConfigurationError(
            "cannot compare runs over different date ranges: "
            f"{baseline.version} {baseline.date_start} to {baseline.date_end}, "
            f"{challenger.version} {challenger.date_start} to {challenger.date_end}"
        )

    in_range = [
        pick
        for pick in settled_only(picks)
        if challenger.date_start <= pick.analysis_date <= challenger.date_end
    ]
    return Comparison(
        baseline_version=baseline.version,
        challenger_version=challenger.version,
        baseline_leg_hit_rate=baseline.leg_hit_rate,
        challenger_leg_hit_rate=challenger.leg_hit_rate,
        baseline_parlay_win_rate=baseline.parlay_win_rate,
        challenger_parlay_win_rate=challenger.parlay_win_rate,
        blocked=analyze_blocked(in_range, challenger_strategy),
    )
