"""Derived ecosystem metrics for evolutionary analysis.

This module adds secondary scores on top of the primary Stats:
- Genetic diversity (mean variance of the heritable traits)
- Selection pressure (food shortage plus hunger)
- Adaptation rate (how far mean traits moved over the history window)
- Predation rate and food scarcity
- Population and food trends relative to the previous tick

Every score is clamped to [0, 100].
"""

from collections import deque
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Deque, Dict, List, Optional, Sequence, Tuple

from lifesim.config.ecosystem import STATS_HISTORY_LENGTH, TREND_THRESHOLD
from lifesim.entities.organism import Organism
from lifesim.entities.species import Species
from lifesim.genetics.dna import TRAIT_SPECS_BY_NAME
from lifesim.stats.ecosystem_stats import Stats

DIVERSITY_TRAITS = ("speed", "efficiency", "aggression", "size", "socialness")


class Trend(Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class TimeSeriesSnapshot:
    """A compact record of ecosystem state at one tick."""

    tick: int
    population: int
    food_count: int
    genetic_diversity: float
    average_energy: float


@dataclass(frozen=True)
class EnhancedStats:
    """Primary stats plus the derived scores for the same tick."""

    stats: Stats
    genetic_diversity: float
    selection_pressure: float
    adaptation_rate: float
    predation_rate: float
    food_scarcity: float
    day_night_phase: float
    population_trend: Trend
    food_trend: Trend

    def to_dict(self) -> Dict[str, Any]:
        result = self.stats.to_dict()
        result.update(
            genetic_diversity=self.genetic_diversity,
            selection_pressure=self.selection_pressure,
            adaptation_rate=self.adaptation_rate,
            predation_rate=self.predation_rate,
            food_scarcity=self.food_scarcity,
            day_night_phase=self.day_night_phase,
            population_trend=self.population_trend.value,
            food_trend=self.food_trend.value,
        )
        return result


def _clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def calculate_genetic_diversity(organisms: Sequence[Organism]) -> float:
    """Mean population variance of the diversity traits, scaled by 100."""
    if not organisms:
        return 0.0
    n = len(organisms)
    total_variance = 0.0
    for trait in DIVERSITY_TRAITS:
        values = [getattr(o.dna, trait) for o in organisms]
        mean = sum(values) / n
        total_variance += sum((v - mean) ** 2 for v in values) / n
    return _clamp_score(total_variance / len(DIVERSITY_TRAITS) * 100)


def calculate_selection_pressure(organisms: Sequence[Organism], food_count: int) -> float:
    """High when food per organism is low and organisms are hungry."""
    if not organisms:
        return 0.0
    n = len(organisms)
    food_per_organism = food_count / n
    energy_ratio = (sum(o.energy for o in organisms) / n) / (sum(o.max_energy for o in organisms) / n)
    food_pressure = max(0.0, 1 - food_per_organism / 2)
    return _clamp_score((food_pressure + (1 - energy_ratio)) * 50)


def calculate_predation_rate(organisms: Sequence[Organism]) -> float:
    """Attack-capable predators per herbivore, as a percentage."""
    predators = sum(1 for o in organisms if o.species.attacks(o.dna.aggression))
    prey = sum(1 for o in organisms if o.species is Species.HERBIVORE)
    if prey == 0:
        return 0.0
    return _clamp_score(predators / prey * 100)


def calculate_food_scarcity(organisms: Sequence[Organism], food_count: int) -> float:
    if not organisms:
        return 0.0
    return _clamp_score((1 - food_count / len(organisms) / 3) * 100)


def get_trend(current: float, previous: Optional[float]) -> Trend:
    """Direction of change, ignoring moves smaller than 5% of the previous value."""
    if previous is None:
        return Trend.STABLE
    diff = current - previous
    if diff == 0 or abs(diff) < abs(previous) * TREND_THRESHOLD:
        return Trend.STABLE
    return Trend.UP if diff > 0 else Trend.DOWN


def mean_trait_vector(organisms: Sequence[Organism]) -> Optional[Tuple[float, ...]]:
    """Population mean of every trait, normalised to its allowed range."""
    if not organisms:
        return None
    n = len(organisms)
    vector = []
    for name, spec in TRAIT_SPECS_BY_NAME.items():
        mean = sum(getattr(o.dna, name) for o in organisms) / n
        vector.append((mean - spec.min_val) / (spec.max_val - spec.min_val))
    return tuple(vector)


class EnhancedStatisticsTracker:
    """Derives EnhancedStats each tick and keeps a bounded history.

    The previous tick's Stats drive the trend flags; a rolling window of
    normalised mean-trait vectors drives the adaptation rate.
    """

    def __init__(self, max_history_length: int = STATS_HISTORY_LENGTH):
        self.max_history_length = max_history_length
        self.previous: Optional[Stats] = None
        self.trait_history: Deque[Tuple[float, ...]] = deque(maxlen=max_history_length)
        self.time_series: Deque[TimeSeriesSnapshot] = deque(maxlen=max_history_length)

    def update(
        self,
        stats: Stats,
        organisms: Sequence[Organism],
        day_night_phase: float,
    ) -> EnhancedStats:
        """Compute the derived scores for ``stats`` and roll history forward."""
        vector = mean_trait_vector(organisms)
        if vector is not None:
            self.trait_history.append(vector)

        diversity = calculate_genetic_diversity(organisms)
        previous = self.previous
        enhanced = EnhancedStats(
            stats=stats,
            genetic_diversity=diversity,
            selection_pressure=calculate_selection_pressure(organisms, stats.food_count),
            adaptation_rate=self.calculate_adaptation_rate(),
            predation_rate=calculate_predation_rate(organisms),
            food_scarcity=calculate_food_scarcity(organisms, stats.food_count),
            day_night_phase=day_night_phase,
            population_trend=get_trend(
                stats.total_population, previous.total_population if previous else None
            ),
            food_trend=get_trend(stats.food_count, previous.food_count if previous else None),
        )

        self.time_series.append(
            TimeSeriesSnapshot(
                tick=stats.tick,
                population=stats.total_population,
                food_count=stats.food_count,
                genetic_diversity=diversity,
                average_energy=stats.average_energy,
            )
        )
        self.previous = stats
        return enhanced

    def calculate_adaptation_rate(self) -> float:
        """Percent of the allowed trait range the mean genome drifted over the window."""
        if len(self.trait_history) < 2:
            return 0.0
        oldest = self.trait_history[0]
        newest = self.trait_history[-1]
        shift = sum(abs(a - b) for a, b in zip(newest, oldest)) / len(newest)
        return _clamp_score(shift * 100)

    def get_time_series_summary(self, ticks: int = 100) -> Dict[str, Any]:
        """Summarise the most recent ``ticks`` history entries."""
        recent: List[TimeSeriesSnapshot] = list(self.time_series)[-ticks:]
        if not recent:
            return {"samples": 0}
        populations = [s.population for s in recent]
        return {
            "samples": len(recent),
            "first_tick": recent[0].tick,
            "last_tick": recent[-1].tick,
            "population_min": min(populations),
            "population_max": max(populations),
            "population_mean": sum(populations) / len(populations),
            "food_mean": sum(s.food_count for s in recent) / len(recent),
            "diversity_mean": sum(s.genetic_diversity for s in recent) / len(recent),
            "series": [asdict(s) for s in recent],
        }

    def reset(self) -> None:
        self.previous = None
        self.trait_history.clear()
        self.time_series.clear()
