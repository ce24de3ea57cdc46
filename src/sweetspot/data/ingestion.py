"""Candidate and game context queries for the backtest."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from sweetspot.data.schemas import GameEnvironmentRecord, PickRecord
from sweetspot.db.models import CategorySweetSpot, GameEnvironment
from sweetspot.parlays.types import GameContext, Outcome, Pick

logger = logging.getLogger(__name__)

TERMINAL_OUTCOMES = [Outcome.HIT.value, Outcome.MISS.value, Outcome.PUSH.value]


def fetch_settled_picks(session: Session, date_start: date, date_end: date) -> list[Pick]:
    """Load active, settled candidates analysed within the range, oldest first."""

    stmt = (
        select(CategorySweetSpot)
        .where(CategorySweetSpot.analysis_date >= date_start)
        .where(CategorySweetSpot.analysis_date <= date_end)
        .where(CategorySweetSpot.outcome.in_(TERMINAL_OUTCOMES))
        .where(CategorySweetSpot.is_active.is_(True))
        .order_by(CategorySweetSpot.analysis_date.asc(), CategorySweetSpot.id.asc())
    )
    picks: list[Pick] = []
    for row in session.scalars(stmt):
        pick = PickRecord.model_validate(row).to_pick()
        if pick is None:
            logger.debug(
                "Skipping %s: unrecognized category %r or side %r",
                row.id,
                row.category,
                row.recommended_side,
            )
            continue
        picks.append(pick)
    return picks


def fetch_game_contexts(session: Session, date_start: date, date_end: date) -> list[GameContext]:
    stmt = (
        select(GameEnvironment)
        .where(GameEnvironment.game_date >= date_start)
        .where(GameEnvironment.game_date <= date_end)
        .order_by(GameEnvironment.game_date.asc(), GameEnvironment.id.asc())
    )
    return [
        GameEnvironmentRecord.model_validate(row).to_context()
        for row in session.scalars(stmt)
        if row.team_abbrev
    ]
