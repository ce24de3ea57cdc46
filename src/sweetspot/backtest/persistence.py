"""Store completed backtest runs and their slate results."""

from __future__ import annotations

from dataclasses import asdict

from sqlalchemy import select
from sqlalchemy.orm import Session

from sweetspot.backtest.types import BacktestReport, BacktestRun
from sweetspot.db.models import BacktestParlayResult, BacktestRunRecord


def _run_record(run: BacktestRun) -> BacktestRunRecord:
    record = BacktestRunRecord(
        run_name=(
            f"{run.version} Backtest {run.date_start.isoformat()} to {run.date_end.isoformat()}"
        ),
        builder_version=run.version,
        date_range_start=run.date_start,
        date_range_end=run.date_end,
        config=dict(run.config),
        total_slates=run.totals.slates,
        total_parlays_built=run.total_parlays,
        total_legs=run.totals.legs,
        legs_hit=run.totals.hits,
        legs_missed=run.totals.misses,
        legs_pushed=run.totals.pushes,
        leg_hit_rate=run.leg_hit_rate,
        parlay_win_rate=run.parlay_win_rate,
        avg_synergy_score=run.avg_synergy,
        avg_edge_value=run.avg_edge,
        picks_blocked_by_edge=run.totals.blocked_by_edge,
        picks_blocked_by_synergy=run.totals.blocked_by_conflict,
    )
    for slate in run.slates:
        record.slates.append(
            BacktestParlayResult(
                slate_date=slate.slate_date,
                parlay_type=slate.parlay_type,
                legs=[asdict(leg) for leg in slate.legs],
                leg_count=slate.leg_count,
                legs_hit=slate.legs_hit,
                legs_missed=slate.legs_missed,
                legs_pushed=slate.legs_pushed,
                all_legs_hit=slate.all_legs_hit,
                total_synergy_score=slate.total_synergy,
                conflicts_detected=slate.conflict_blocked_count,
                edge_blocked_count=slate.edge_blocked_count,
                avg_edge_value=slate.avg_edge,
            )
        )
    return record


def persist_report(session: Session, report: BacktestReport) -> list[int]:
    """Insert one run record per run; returns the run ids in report order.

    A comparison always pairs the first run (baseline) with the second, so the
    records are linked by position.
    """

    records: list[BacktestRunRecord] = []
    for run in report.runs:
        record = _run_record(run)
        session.add(record)
        records.append(record)
    session.flush()

    comparison = report.comparison
    if comparison is not None and len(records) >= 2:
        baseline, challenger = records[0], records[1]
        challenger.baseline_run_id = baseline.id
        challenger.improvement_vs_baseline = comparison.leg_hit_rate_delta
        session.flush()

    return [record.id for record in records]


def latest_runs(session: Session, limit: int = 10) -> list[BacktestRunRecord]:
    stmt = (
        select(BacktestRunRecord)
        .order_by(BacktestRunRecord.created_at.desc(), BacktestRunRecord.id.desc())
        .limit(limit)
    )
    return list(session.scalars(stmt))
