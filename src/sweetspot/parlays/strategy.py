"""Versioned strategy configurations and the slot shapes they build against."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from sweetspot.errors import ConfigurationError
from sweetspot.parlays.types import Category, PropFamily


@dataclass(frozen=True)
class ScoringWeights:
    hit_rate: float = 6.0
    confidence: float = 0.25
    edge: float = 0.15
    default_hit_rate: float = 0.6
    default_confidence: float = 0.7


@dataclass(frozen=True)
class SynergyRules:
    """Game-total cutoffs and the signed values the correlation analyzer emits."""

    slow_total: float = 215.0
    fast_total: float = 228.0
    neutral_total: float = 220.0
    hard_conflict: float = -2.0
    soft_conflict: float = -1.0
    slow_rebound_bonus: float = 1.0
    slow_under_bonus: float = 0.5
    fast_scoring_bonus: float = 1.0
    same_team_complement_bonus: float = 0.3
    conflict_block_at: float = -2.0


@dataclass(frozen=True)
class StrategyConfig:
    version: str
    slots: tuple[Category, ...]
    edge_thresholds: Mapping[PropFamily, float] | None = None
    default_edge_threshold: float = 2.0
    correlation_enabled: bool = False
    synergy_weight: float = 2.0
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    synergy: SynergyRules = field(default_factory=SynergyRules)
    description: str = ""

    def __post_init__(self) -> None:
        if not self.slots:
            raise ConfigurationError(f"strategy {self.version!r} has an empty slot list")
        if self.edge_thresholds is not None:
            object.__setattr__(
                self, "edge_thresholds", MappingProxyType(dict(self.edge_thresholds))
            )

    def threshold_for(self, family: PropFamily) -> float | None:
        """Minimum |edge| required for the family, or None when there is no gate."""

        if self.edge_thresholds is None:
            return None
        return self.edge_thresholds.get(family, self.default_edge_threshold)

    def with_slots(self, slots: tuple[Category, ...]) -> StrategyConfig:
        return replace(self, slots=tuple(slots))

    def snapshot(self) -> dict[str, object]:
        """Plain description of the config for persisted run records."""

        thresholds = (
            {family.value: value for family, value in self.edge_thresholds.items()}
            if self.edge_thresholds is not None
            else None
        )
        return {
            "version": self.version,
            "slots": [slot.value for slot in self.slots],
            "thresholds": thresholds,
            "default_edge_threshold": self.default_edge_threshold,
            "synergy": self.correlation_enabled,
            "synergy_weight": self.synergy_weight,
        }


SLOT_SHAPES: dict[str, tuple[Category, ...]] = {
    "OPTIMAL_6": (
        Category.STAR_FLOOR_OVER,
        Category.BIG_ASSIST_OVER,
        Category.THREE_POINT_SHOOTER,
        Category.LOW_SCORER_UNDER,
        Category.ROLE_PLAYER_REB,
        Category.BIG_REBOUNDER,
    ),
    "OPTIMAL_5_LEGACY": (
        Category.ELITE_REB_OVER,
        Category.ROLE_PLAYER_REB,
        Category.BIG_ASSIST_OVER,
        Category.LOW_SCORER_UNDER,
        Category.MID_SCORER_UNDER,
    ),
}

DEFAULT_SLOT_SHAPE = "OPTIMAL_6"

V6_EDGE_THRESHOLDS: dict[PropFamily, float] = {
    PropFamily.POINTS: 4.5,
    PropFamily.REBOUNDS: 2.5,
    PropFamily.ASSISTS: 2.0,
    PropFamily.THREES: 1.0,
    PropFamily.PRA: 6.0,
    PropFamily.PR: 4.0,
    PropFamily.PA: 4.0,
    PropFamily.RA: 3.0,
}

BASELINE_V5 = StrategyConfig(
    version="v5.0_baseline",
    slots=SLOT_SHAPES[DEFAULT_SLOT_SHAPE],
    description="Best score per slot; no edge gate, no correlation awareness.",
)

SYNERGY_V6 = StrategyConfig(
    version="v6.0_synergy",
    slots=SLOT_SHAPES[DEFAULT_SLOT_SHAPE],
    edge_thresholds=V6_EDGE_THRESHOLDS,
    correlation_enabled=True,
    description="Hard edge gate per prop family plus correlation-aware scoring.",
)

STRATEGY_ALIASES = {
    "baseline": "v5.0_baseline",
    "v5": "v5.0_baseline",
    "synergy": "v6.0_synergy",
    "strict": "v6.0_synergy",
    "v6": "v6.0_synergy",
}


def _registry() -> dict[str, StrategyConfig]:
    out: dict[str, StrategyConfig] = {}
    for config in (BASELINE_V5, SYNERGY_V6):
        if config.version in out:
            raise ConfigurationError(f"duplicate strategy version: {config.version}")
        out[config.version] = config
    return out


def resolve_version(version: str) -> str:
    raw = version.strip()
    if not raw:
        raise ConfigurationError("strategy version is required")
    return STRATEGY_ALIASES.get(raw.lower(), raw)


def resolve_slot_shape(parlay_type: str) -> tuple[Category, ...]:
    slots = SLOT_SHAPES.get(parlay_type.strip().upper())
    if slots is None:
        options = ",".join(sorted(SLOT_SHAPES))
        raise ConfigurationError(f"unknown parlay type: {parlay_type} (options: {options})")
    return slots


def list_strategies() -> list[StrategyConfig]:
    return sorted(_registry().values(), key=lambda config: config.version)


def get_strategy(version: str, slot_shape: str | None = None) -> StrategyConfig:
    registry = _registry()
    config = registry.get(resolve_version(version))
    if config is None:
        options = ",".join(sorted(registry))
        raise ConfigurationError(f"unknown strategy version: {version} (options: {options})")
    if slot_shape is not None:
        config = config.with_slots(resolve_slot_shape(slot_shape))
    return config
