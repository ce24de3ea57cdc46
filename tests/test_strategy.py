"""Strategy registry tests."""

from __future__ import annotations

import pytest

from sweetspot.errors import ConfigurationError
from sweetspot.parlays import strategy
from sweetspot.parlays.types import Category, PropFamily


def test_registry_lists_baseline_and_synergy() -> None:
    versions = [config.version for config in strategy.list_strategies()]
    assert versions == ["v5.0_baseline", "v6.0_synergy"]


def test_aliases_resolve_to_versions() -> None:
    assert strategy.get_strategy("baseline").version == "v5.0_baseline"
    assert strategy.get_strategy(" Strict ").version == "v6.0_synergy"


def test_unknown_version_fails_loudly() -> None:
    with pytest.raises(ConfigurationError, match="unknown strategy version"):
        strategy.get_strategy("v7.0_magic")
    with pytest.raises(ValueError):
        strategy.get_strategy("")


def test_empty_slot_list_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        strategy.StrategyConfig(version="broken", slots=())


def test_slot_shape_override() -> None:
    config = strategy.get_strategy("v6.0_synergy", slot_shape="optimal_5_legacy")
    assert config.slots == strategy.SLOT_SHAPES["OPTIMAL_5_LEGACY"]
    assert config.correlation_enabled is True
    assert strategy.SYNERGY_V6.slots == strategy.SLOT_SHAPES["OPTIMAL_6"]
    with pytest.raises(ConfigurationError, match="unknown parlay type"):
        strategy.get_strategy("v6.0_synergy", slot_shape="OPTIMAL_12")


def test_thresholds() -> None:
    assert strategy.BASELINE_V5.threshold_for(PropFamily.POINTS) is None
    assert strategy.SYNERGY_V6.threshold_for(PropFamily.POINTS) == 4.5
    assert strategy.SYNERGY_V6.threshold_for(PropFamily.OTHER) == 2.0


def test_threshold_table_is_read_only() -> None:
    table = {PropFamily.POINTS: 3.0}
    config = strategy.StrategyConfig(
        version="custom", slots=(Category.STAR_FLOOR_OVER,), edge_thresholds=table
    )
    table[PropFamily.POINTS] = 99.0
    assert config.threshold_for(PropFamily.POINTS) == 3.0
    with pytest.raises(TypeError):
        config.edge_thresholds[PropFamily.POINTS] = 1.0  # type: ignore[index]


def test_snapshot_is_plain_data() -> None:
    snapshot = strategy.SYNERGY_V6.snapshot()
    assert snapshot["thresholds"]["points"] == 4.5
    assert snapshot["slots"][0] == "STAR_FLOOR_OVER"
    assert snapshot["synergy"] is True
