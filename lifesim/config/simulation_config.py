"""Simulation configuration aggregates.

The engine takes a single ``SimulationConfig``; each section defaults to the
module constants so ``SimulationConfig()`` is the production setup.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from lifesim.config.arena import ALLOWED_SPEEDS, ARENA_HEIGHT, ARENA_WIDTH, DAY_LENGTH_TICKS
from lifesim.config.ecosystem import (
    INITIAL_CARNIVORES,
    INITIAL_FOOD,
    INITIAL_HERBIVORES,
    INITIAL_OMNIVORES,
    SPAWN_MARGIN,
    STATS_HISTORY_LENGTH,
)
from lifesim.config.food import FOOD_SPAWN_INTERVAL, MAX_FOOD
from lifesim.exceptions import ConfigurationError


@dataclass
class ArenaConfig:
    """Arena geometry and obstacle toggle."""

    width: float = ARENA_WIDTH
    height: float = ARENA_HEIGHT
    day_length: int = DAY_LENGTH_TICKS
    obstacles_enabled: bool = True


@dataclass
class PopulationConfig:
    """Founder counts used by setup() and reset()."""

    herbivores: int = INITIAL_HERBIVORES
    omnivores: int = INITIAL_OMNIVORES
    carnivores: int = INITIAL_CARNIVORES
    spawn_margin: float = SPAWN_MARGIN


@dataclass
class FoodConfig:
    """Food seeding and automatic spawning."""

    initial_food: int = INITIAL_FOOD
    max_food: int = MAX_FOOD
    spawn_interval: int = FOOD_SPAWN_INTERVAL
    auto_spawn: bool = True


@dataclass
class SimulationConfig:
    """Top-level configuration for a simulation engine.

    Attributes:
        arena: Arena dimensions and obstacle toggle
        population: Founder counts
        food: Food seeding and spawning
        speed: Initial logical ticks per frame
        stats_history: Snapshots kept for adaptation-rate analysis
    """

    arena: ArenaConfig = field(default_factory=ArenaConfig)
    population: PopulationConfig = field(default_factory=PopulationConfig)
    food: FoodConfig = field(default_factory=FoodConfig)
    speed: float = 1.0
    stats_history: int = STATS_HISTORY_LENGTH

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Return a copy with top-level fields replaced."""
        return replace(self, **overrides)

    def validate(self) -> None:
        """Raise ConfigurationError if any value is out of range."""
        if self.arena.width <= 0 or self.arena.height <= 0:
            raise ConfigurationError(
                f"Arena must have positive size, got {self.arena.width}x{self.arena.height}"
            )
        if self.arena.day_length <= 0:
            raise ConfigurationError("day_length must be positive")
        if min(self.population.herbivores, self.population.omnivores, self.population.carnivores) < 0:
            raise ConfigurationError("Founder counts cannot be negative")
        if self.food.initial_food < 0 or self.food.max_food < 0:
            raise ConfigurationError("Food counts cannot be negative")
        if self.food.spawn_interval < 0:
            raise ConfigurationError("spawn_interval cannot be negative")
        validate_speed(self.speed)


def validate_speed(speed: float) -> float:
    """Return ``speed`` as a float or raise ConfigurationError.

    Any positive finite multiplier is accepted; the UI offers ALLOWED_SPEEDS.
    """
    try:
        value = float(speed)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Speed must be a number, got {speed!r}") from e
    if not value > 0 or value == float("inf"):
        raise ConfigurationError(
            f"Speed must be positive and finite (UI offers {ALLOWED_SPEEDS}), got {speed!r}"
        )
    return value
