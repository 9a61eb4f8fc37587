"""Run settings for the scheduler."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class OptimizationPreference(Enum):
    """Which heuristics run and how the composite score is weighted."""
    FUEL = "fuel"
    CAPACITY = "capacity"
    BALANCED = "balanced"
    TIME = "time"


class CargoStrategy(Enum):
    """How cargo is loaded onto the solved schedule."""
    GREEDY = "greedy"
    EXACT = "exact"


# (fuel weight, capacity weight)
SCORE_WEIGHTS: Dict[OptimizationPreference, Tuple[float, float]] = {
    OptimizationPreference.FUEL: (0.8, 0.2),
    OptimizationPreference.CAPACITY: (0.2, 0.8),
}
DEFAULT_SCORE_WEIGHTS = (0.5, 0.5)


def _parse_enum(enum_cls, value: Any, option: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ValueError(
            f"Invalid {option} {value!r} (expected one of: {choices})"
        ) from None


def _parse_iterations(value: Any) -> int:
    """Accept whole numbers (or numeric strings) of at least 1."""
    if isinstance(value, bool) or value is None:
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float) and value.is_integer():
        parsed = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        parsed = int(value)
    else:
        parsed = None

    if parsed is None or parsed < 1:
        raise ValueError(
            f"max_backtracking_iterations must be an integer of at least 1, got {value!r}"
        )
    return parsed


@dataclass
class Settings:
    """
    Scheduler settings.

    Attributes:
        optimization_preference: Heuristic selection and score weighting
        max_backtracking_iterations: Search node budget for the CSP solver
        cargo_strategy: Greedy bin-packing or exact loading
    """
    optimization_preference: OptimizationPreference = OptimizationPreference.FUEL
    max_backtracking_iterations: int = 1000
    cargo_strategy: CargoStrategy = CargoStrategy.GREEDY

    def __post_init__(self) -> None:
        self.optimization_preference = _parse_enum(
            OptimizationPreference, self.optimization_preference,
            "optimization preference"
        )
        self.cargo_strategy = _parse_enum(
            CargoStrategy, self.cargo_strategy, "cargo strategy"
        )
        self.max_backtracking_iterations = _parse_iterations(
            self.max_backtracking_iterations
        )

    @property
    def runs_fuel_heuristic(self) -> bool:
        return self.optimization_preference is not OptimizationPreference.CAPACITY

    @property
    def runs_cargo_heuristic(self) -> bool:
        return self.optimization_preference in (
            OptimizationPreference.CAPACITY,
            OptimizationPreference.BALANCED,
        )

    @property
    def score_weights(self) -> Tuple[float, float]:
        """(fuel weight, capacity weight) for the composite flight score."""
        return SCORE_WEIGHTS.get(self.optimization_preference, DEFAULT_SCORE_WEIGHTS)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """
        Build settings from a snake_case or camelCase mapping.

        Keys that only matter to the settings form (e.g. ``heuristicWeight``)
        are ignored.
        """
        kwargs: Dict[str, Any] = {}
        for snake, camel in (
            ("optimization_preference", "optimizationPreference"),
            ("max_backtracking_iterations", "maxBacktrackingIterations"),
            ("cargo_strategy", "cargoStrategy"),
        ):
            if snake in data:
                kwargs[snake] = data[snake]
            elif camel in data:
                kwargs[snake] = data[camel]
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "optimizationPreference": self.optimization_preference.value,
            "maxBacktrackingIterations": self.max_backtracking_iterations,
            "cargoStrategy": self.cargo_strategy.value,
        }
