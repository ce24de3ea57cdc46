"""FastAPI backend for Sweet Spot backtests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Header, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sweetspot import __version__
from sweetspot.api.schemas import (
    BacktestRequest,
    BacktestResponse,
    StoredRunResponse,
    StrategyResponse,
)
from sweetspot.backtest.persistence import latest_runs
from sweetspot.backtest.service import BacktestService
from sweetspot.config import get_api_access_key
from sweetspot.db.database import SessionLocal
from sweetspot.errors import ConfigurationError
from sweetspot.parlays.strategy import list_strategies

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Sweet Spot Parlay API",
    version=__version__,
    description="Backtests category-slot parlay strategies against settled picks.",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_backtest_service() -> BacktestService:
    return BacktestService()


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    expected = get_api_access_key()
    if not x_api_key or x_api_key != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


SessionDep = Annotated[Session, Depends(get_db)]
APIKeyDep = Annotated[None, Depends(require_api_key)]
ServiceDep = Annotated[BacktestService, Depends(get_backtest_service)]
LimitQuery = Annotated[int, Query(ge=1, le=50)]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
def version() -> dict[str, Any]:
    return {
        "name": "sweetspot-parlays",
        "version": __version__,
        "strategies": [config.version for config in list_strategies()],
    }


@app.get("/strategies", response_model=list[StrategyResponse])
def strategies() -> list[StrategyResponse]:
    out = []
    for config in list_strategies():
        snapshot = config.snapshot()
        out.append(
            StrategyResponse(
                version=config.version,
                description=config.description,
                slots=snapshot["slots"],
                thresholds=snapshot["thresholds"],
                synergy=config.correlation_enabled,
                synergy_weight=config.synergy_weight,
            )
        )
    return out


@app.post("/run_parlay_backtest", response_model=BacktestResponse)
def run_parlay_backtest(
    payload: BacktestRequest,
    _: APIKeyDep,
    service: ServiceDep,
) -> BacktestResponse:
    try:
        report = service.run(
            payload.date_start,
            payload.date_end,
            versions=payload.versions,
            parlay_type=payload.parlay_type,
            persist=payload.persist,
        )
    except ConfigurationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        logger.error("Candidate store query failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to load settled picks: {exc}",
        ) from exc
    return BacktestResponse.model_validate(report.to_dict(include_slates=payload.include_slates))


@app.get("/backtest_runs", response_model=list[StoredRunResponse])
def backtest_runs(
    _: APIKeyDep,
    session: SessionDep,
    limit: LimitQuery = 10,
) -> list[StoredRunResponse]:
    return [
        StoredRunResponse(
            id=row.id,
            run_name=row.run_name,
            builder_version=row.builder_version,
            date_range_start=row.date_range_start,
            date_range_end=row.date_range_end,
            total_parlays_built=row.total_parlays_built,
            leg_hit_rate=row.leg_hit_rate,
            parlay_win_rate=row.parlay_win_rate,
            baseline_run_id=row.baseline_run_id,
            improvement_vs_baseline=row.improvement_vs_baseline,
            created_at=row.created_at,
        )
        for row in latest_runs(session, limit)
    ]
