"""Parlay builder tests."""

from __future__ import annotations

from datetime import date

from sweetspot.parlays import engine
from sweetspot.parlays.strategy import BASELINE_V5, SYNERGY_V6, StrategyConfig
from sweetspot.parlays.types import Category, Pick, PropFamily, Side

STRICT_STAR = StrategyConfig(
    version="test_strict",
    slots=(Category.STAR_FLOOR_OVER,),
    edge_thresholds={PropFamily.POINTS: 3.0},
    correlation_enabled=True,
)


def _pick(
    pick_id: str,
    category: Category = Category.STAR_FLOOR_OVER,
    *,
    player: str | None = None,
    family: PropFamily = PropFamily.POINTS,
    side: Side = Side.OVER,
    line: float | None = 24.0,
    projection: float | None = None,
    hit_rate: float | None = 0.7,
    team: str | None = None,
) -> Pick:
    return Pick(
        pick_id=pick_id,
        player_name=player or f"Player {pick_id}",
        prop_type=family.value,
        prop_family=family,
        category=category,
        side=side,
        analysis_date=date(2026, 1, 23),
        recommended_line=line,
        projected_value=projection,
        l10_hit_rate=hit_rate,
        confidence_score=0.7,
        team_name=team or f"T{pick_id}",
    )


def _full_slate() -> list[Pick]:
    return [
        _pick("star", Category.STAR_FLOOR_OVER, projection=30.0),
        _pick("ast", Category.BIG_ASSIST_OVER, family=PropFamily.ASSISTS, line=4.5, projection=7.0),
        _pick("3pt", Category.THREE_POINT_SHOOTER, family=PropFamily.THREES, line=2.5, projection=4.0),
        _pick("under", Category.LOW_SCORER_UNDER, side=Side.UNDER, line=9.5, projection=4.0),
        _pick("role", Category.ROLE_PLAYER_REB, family=PropFamily.REBOUNDS, line=4.5, projection=7.5),
        _pick("big", Category.BIG_REBOUNDER, family=PropFamily.REBOUNDS, line=9.5, projection=13.0),
    ]


def test_baseline_selects_best_score_without_edge_gate() -> None:
    strong = _pick("a", projection=28.0, hit_rate=0.8)
    weak = _pick("b", projection=22.0, hit_rate=0.5)
    result = engine.build_parlay([weak, strong], BASELINE_V5)
    assert [leg.pick.pick_id for leg in result.selected] == ["a"]
    assert result.selected[0].edge == 4.0
    assert result.blocked_by_edge == []


def test_strict_edge_gate_blocks_small_edges() -> None:
    strong = _pick("a", projection=28.0, hit_rate=0.8)
    weak = _pick("b", projection=22.0, hit_rate=0.5)
    result = engine.build_parlay([strong, weak], STRICT_STAR)
    assert [leg.pick.pick_id for leg in result.selected] == ["a"]
    assert result.blocked_by_edge == [weak]


def test_missing_projection_is_blocked_by_edge() -> None:
    pick = _pick("a", line=None)
    result = engine.build_parlay([pick], BASELINE_V5)
    assert result.selected == []
    assert result.blocked_by_edge == [pick]


def test_full_slate_fills_every_slot_in_order() -> None:
    result = engine.build_parlay(_full_slate(), SYNERGY_V6)
    assert [leg.pick.category for leg in result.selected] == list(SYNERGY_V6.slots)


def test_missing_categories_leave_slots_empty() -> None:
    pool = [pick for pick in _full_slate() if pick.category is not Category.BIG_ASSIST_OVER]
    result = engine.build_parlay(pool, BASELINE_V5)
    assert len(result.selected) == len(BASELINE_V5.slots) - 1
    assert Category.BIG_ASSIST_OVER not in {leg.pick.category for leg in result.selected}


def test_empty_pool_is_a_valid_result() -> None:
    result = engine.build_parlay([], SYNERGY_V6)
    assert result.selected == []
    assert result.blocked_by_edge == []
    assert result.blocked_by_conflict == []


def test_same_player_opposite_sides_never_both_selected() -> None:
    over = _pick("over", Category.STAR_FLOOR_OVER, player="Ja Morant", projection=31.0, team="MEM")
    under = _pick(
        "under",
        Category.LOW_SCORER_UNDER,
        player="Ja Morant",
        side=Side.UNDER,
        projection=17.0,
        team="MEM",
    )
    for strategy in (BASELINE_V5, SYNERGY_V6):
        result = engine.build_parlay([over, under], strategy)
        assert [leg.pick.pick_id for leg in result.selected] == ["over"]
        assert result.blocked_by_conflict == [under]


def test_same_team_complement_tilts_selection() -> None:
    star = _pick("star", projection=30.0, team="SAC")
    teammate = _pick(
        "teammate", Category.BIG_ASSIST_OVER, family=PropFamily.ASSISTS,
        line=4.5, projection=7.0, hit_rate=0.60, team="SAC",
    )
    other = _pick(
        "other", Category.BIG_ASSIST_OVER, family=PropFamily.ASSISTS,
        line=4.5, projection=7.0, hit_rate=0.62, team="CHI",
    )
    baseline = engine.build_parlay([star, other, teammate], BASELINE_V5)
    strict = engine.build_parlay([star, other, teammate], SYNERGY_V6)
    assert baseline.selected[1].pick.pick_id == "other"
    assert strict.selected[1].pick.pick_id == "teammate"


def test_ties_keep_first_candidate_in_input_order() -> None:
    first = _pick("first", projection=28.0)
    second = _pick("second", projection=28.0)
    assert engine.build_parlay([first, second], BASELINE_V5).selected[0].pick is first
    assert engine.build_parlay([second, first], BASELINE_V5).selected[0].pick is second


def test_build_is_deterministic() -> None:
    pool = _full_slate() + [_pick("extra", projection=29.5, hit_rate=0.75)]
    first = engine.build_parlay(pool, SYNERGY_V6)
    second = engine.build_parlay(pool, SYNERGY_V6)
    assert first == second


def test_raising_threshold_never_unblocks() -> None:
    pool = [_pick(str(idx), projection=24.0 + idx) for idx in range(8)]
    previous = -1
    for threshold in (0.0, 1.0, 2.5, 4.0, 6.5, 10.0):
        strategy = StrategyConfig(
            version="sweep",
            slots=(Category.STAR_FLOOR_OVER,),
            edge_thresholds={PropFamily.POINTS: threshold},
        )
        blocked = len(engine.build_parlay(pool, strategy).blocked_by_edge)
        assert blocked >= previous
        previous = blocked
    assert previous == len(pool)


def test_two_soft_conflicts_block_a_third_same_team_over() -> None:
    pool = [
        _pick("a", Category.STAR_FLOOR_OVER, projection=30.0, team="PHX"),
        _pick("b", Category.BIG_ASSIST_OVER, projection=30.0, team="PHX"),
        _pick("c", Category.THREE_POINT_SHOOTER, projection=30.0, team="PHX"),
    ]

    strict = engine.build_parlay(pool, SYNERGY_V6)
    # b overlaps a once (-1) and is still taken; c overlaps both (-2)
    assert [leg.pick.pick_id for leg in strict.selected] == ["a", "b"]
    assert strict.selected[1].score < strict.selected[0].score
    assert [pick.pick_id for pick in strict.blocked_by_conflict] == ["c"]
    assert strict.blocked_by_edge == []

    baseline = engine.build_parlay(pool, BASELINE_V5)
    assert [leg.pick.pick_id for leg in baseline.selected] == ["a", "b", "c"]
    assert baseline.blocked_by_conflict == []
