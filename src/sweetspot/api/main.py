"""CLI entrypoint to run the Sweet Spot FastAPI server."""

from __future__ import annotations

import argparse
import logging
import os

import uvicorn

from sweetspot.config import get_settings
from sweetspot.db.database import init_db

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the Sweet Spot backtest API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument(
        "--skip-init-db",
        action="store_true",
        help="Do not create missing backtest tables before serving",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=get_settings().log_level.upper())
    if not args.skip_init_db:
        init_db()
    logger.info("Serving backtest API on %s:%d", args.host, args.port)
    uvicorn.run("sweetspot.api.server:app", host=args.host, port=args.port, reload=False)


if __name__ == "__main__":  # pragma: no cover
    main()
