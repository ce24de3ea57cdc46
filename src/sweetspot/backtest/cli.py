"""Command line entry point for running a parlay backtest."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

from sweetspot.backtest.service import BacktestService
from sweetspot.config import get_settings
from sweetspot.db.database import init_db
from sweetspot.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _parse_versions(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    return [item.strip() for item in raw.split(",") if item.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--start", type=date.fromisoformat, required=True, help="YYYY-MM-DD")
    parser.add_argument("--end", type=date.fromisoformat, required=True, help="YYYY-MM-DD")
    parser.add_argument(
        "--versions",
        help="Comma separated strategy versions, baseline first (default from settings).",
    )
    parser.add_argument("--parlay-type", help="Slot shape, e.g. OPTIMAL_6.")
    parser.add_argument("--workers", type=int, default=None, help="Threads used per run.")
    parser.add_argument("--persist", action="store_true", help="Store runs in the database.")
    parser.add_argument("--slates", action="store_true", help="Include per-date results.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=get_settings().log_level.upper())
    init_db()
    service = BacktestService(max_workers=args.workers)
    try:
        report = service.run(
            args.start,
            args.end,
            versions=_parse_versions(args.versions),
            parlay_type=args.parlay_type,
            persist=args.persist,
        )
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2
    print(json.dumps(report.to_dict(include_slates=args.slates), indent=2, default=str))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
