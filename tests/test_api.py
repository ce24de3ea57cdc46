"""API tests."""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from sweetspot.api import server
from sweetspot.backtest.runner import compare_runs, run_backtest
from sweetspot.backtest.types import BacktestReport
from sweetspot.errors import ConfigurationError
from sweetspot.parlays.strategy import BASELINE_V5, SYNERGY_V6
from sweetspot.parlays.types import Category, Outcome, Pick, PropFamily, Side

HEADERS = {"X-API-Key": "test-key"}


def _report() -> BacktestReport:
    picks = [
        Pick(
            pick_id="1",
            player_name="Domantas Sabonis",
            prop_type="assists",
            prop_family=PropFamily.ASSISTS,
            category=Category.BIG_ASSIST_OVER,
            side=Side.OVER,
            analysis_date=date(2026, 1, 23),
            recommended_line=5.5,
            projected_value=8.0,
            team_name="SAC",
            outcome=Outcome.HIT,
        )
    ]
    start = end = date(2026, 1, 23)
    runs = run_backtest(picks, [BASELINE_V5, SYNERGY_V6], {}, start, end)
    return BacktestReport(
        date_start=start,
        date_end=end,
        total_settled_picks=1,
        unique_dates=1,
        runs=runs,
        comparison=compare_runs(runs[0], runs[1], SYNERGY_V6, picks),
        message="ok",
    )


class FakeService:
    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc
        self.calls: list[dict] = []

    def run(self, date_start, date_end, versions=None, parlay_type=None, persist=False):
        self.calls.append({"versions": versions, "parlay_type": parlay_type, "persist": persist})
        if self.exc is not None:
            raise self.exc
        return _report()


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setenv("SWEETSPOT_API_KEY", "test-key")
    yield TestClient(server.app)
    server.app.dependency_overrides.clear()


def _use(service: FakeService) -> None:
    server.app.dependency_overrides[server.get_backtest_service] = lambda: service


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_strategies_endpoint(client) -> None:
    body = client.get("/strategies").json()
    assert [item["version"] for item in body] == ["v5.0_baseline", "v6.0_synergy"]
    assert body[0]["thresholds"] is None
    assert body[1]["thresholds"]["points"] == 4.5


def test_backtest_requires_api_key(client) -> None:
    _use(FakeService())
    response = client.post("/run_parlay_backtest", json={})
    assert response.status_code == 401


def test_backtest_returns_runs_and_comparison(client) -> None:
    service = FakeService()
    _use(service)
    response = client.post(
        "/run_parlay_backtest",
        headers=HEADERS,
        json={"date_start": "2026-01-23", "date_end": "2026-01-23", "include_slates": True},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["has_data"] is True
    assert [run["version"] for run in body["runs"]] == ["v5.0_baseline", "v6.0_synergy"]
    assert body["runs"][1]["total_parlays"] == 1
    assert len(body["runs"][1]["slates"]) == 1
    assert body["comparison"]["blocked"]["total"] == 0
    assert service.calls[0]["persist"] is False


def test_configuration_errors_are_bad_requests(client) -> None:
    _use(FakeService(ConfigurationError("unknown strategy version: v9")))
    response = client.post("/run_parlay_backtest", headers=HEADERS, json={"versions": ["v9"]})
    assert response.status_code == 400
    assert "v9" in response.json()["detail"]


def test_store_failures_are_bad_gateway(client) -> None:
    _use(FakeService(OperationalError("select", {}, Exception("database is locked"))))
    response = client.post(
        "/run_parlay_backtest",
        headers=HEADERS,
        json={"date_start": "2026-01-23", "date_end": "2026-01-24"},
    )
    assert response.status_code == 502
