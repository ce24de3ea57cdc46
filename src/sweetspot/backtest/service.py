"""Entry point tying the candidate store, the runner, and persistence together."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from datetime import date

from sqlalchemy.orm import Session

from sweetspot.backtest.persistence import persist_report
from sweetspot.backtest.runner import compare_runs, group_by_date, run_backtest
from sweetspot.backtest.types import BacktestReport
from sweetspot.config import get_settings
from sweetspot.data.ingestion import fetch_game_contexts, fetch_settled_picks
from sweetspot.db.database import get_session
from sweetspot.errors import ConfigurationError
from sweetspot.parlays.correlation import index_game_contexts
from sweetspot.parlays.strategy import get_strategy, resolve_slot_shape

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractContextManager[Session]]


class BacktestService:
    """Run parlay backtests against the candidate store."""

    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.settings = get_settings()
        self.session_factory = session_factory or get_session
        self.max_workers = max_workers or self.settings.backtest_max_workers

    def run(
        self,
        date_start: date | None,
        date_end: date | None,
        versions: Sequence[str] | None = None,
        parlay_type: str | None = None,
        persist: bool = False,
    ) -> BacktestReport:
        parlay_type = (parlay_type or self.settings.default_parlay_type).strip().upper()
        slot_shape = resolve_slot_shape(parlay_type)
        strategies = [
            get_strategy(version).with_slots(slot_shape)
            for version in (versions or self.settings.default_strategy_versions)
        ]
        resolved = [strategy.version for strategy in strategies]
        if len(set(resolved)) != len(resolved):
            raise ConfigurationError(
                f"duplicate strategy versions requested: {', '.join(resolved)}"
            )

        if date_start is None or date_end is None or date_start > date_end:
            return BacktestReport(date_start, date_end, message="No data: invalid date range")

        with self.session_factory() as session:
            picks = fetch_settled_picks(session, date_start, date_end)
            contexts = index_game_contexts(fetch_game_contexts(session, date_start, date_end))
        logger.info(
            "Loaded %d settled picks and %d game contexts for %s to %s",
            len(picks),
            len(contexts),
            date_start.isoformat(),
            date_end.isoformat(),
        )

        runs = run_backtest(
            picks,
            strategies,
            contexts,
            date_start,
            date_end,
            parlay_type=parlay_type,
            max_workers=self.max_workers,
        )
        comparison = None
        if len(runs) == 2:
            comparison = compare_runs(runs[0], runs[1], strategies[1], picks)

        report = BacktestReport(
            date_start=date_start,
            date_end=date_end,
            total_settled_picks=len(picks),
            unique_dates=len(group_by_date(picks)),
            runs=runs,
            comparison=comparison,
            message="ok" if picks else "No data: no settled picks found in date range",
        )
        if persist and report.has_data:
            with self.session_factory() as session:
                run_ids = persist_report(session, report)
            logger.info("Persisted backtest runs %s", run_ids)
        return report
