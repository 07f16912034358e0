"""Primary population statistics, recomputed every tick."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, Sequence

from lifesim.entities.organism import Organism
from lifesim.entities.species import Species


@dataclass
class EventCounters:
    """Cumulative birth and death counters; only a full reset clears them."""

    reproduction_events: int = 0
    death_events: int = 0
    deaths_by_cause: Dict[str, int] = field(default_factory=dict)

    def record_birth(self) -> None:
        self.reproduction_events += 1

    def record_death(self, cause: str) -> None:
        self.death_events += 1
        self.deaths_by_cause[cause] = self.deaths_by_cause.get(cause, 0) + 1

    def reset(self) -> None:
        self.reproduction_events = 0
        self.death_events = 0
        self.deaths_by_cause.clear()


@dataclass(frozen=True)
class Stats:
    """Read-only population summary for one tick.

    ``elapsed_seconds`` is wall-clock time since the engine started or was
    last reset.
    """

    herbivore_count: int = 0
    carnivore_count: int = 0
    omnivore_count: int = 0
    total_population: int = 0
    average_age: float = 0.0
    average_energy: float = 0.0
    food_count: int = 0
    reproduction_events: int = 0
    death_events: int = 0
    starvation_deaths: int = 0
    old_age_deaths: int = 0
    predation_deaths: int = 0
    max_generation: int = 0
    tick: int = 0
    elapsed_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def count_species(organisms: Iterable[Organism]) -> Dict[Species, int]:
    counts = {species: 0 for species in Species}
    for organism in organisms:
        counts[organism.species] += 1
    return counts


def compute_stats(
    organisms: Sequence[Organism],
    food_count: int,
    counters: EventCounters,
    tick: int,
    elapsed_seconds: float,
) -> Stats:
    """Aggregate the live collections into a Stats snapshot."""
    counts = count_species(organisms)
    population = len(organisms)
    if population:
        average_age = sum(o.age for o in organisms) / population
        average_energy = sum(o.energy for o in organisms) / population
        max_generation = max(o.generation for o in organisms)
    else:
        average_age = average_energy = 0.0
        max_generation = 0

    causes = counters.deaths_by_cause
    return Stats(
        herbivore_count=counts[Species.HERBIVORE],
        carnivore_count=counts[Species.CARNIVORE],
        omnivore_count=counts[Species.OMNIVORE],
        total_population=population,
        average_age=average_age,
        average_energy=average_energy,
        food_count=food_count,
        reproduction_events=counters.reproduction_events,
        death_events=counters.death_events,
        starvation_deaths=causes.get("starvation", 0),
        old_age_deaths=causes.get("old_age", 0),
        predation_deaths=causes.get("predation", 0),
        max_generation=max_generation,
        tick=tick,
        elapsed_seconds=elapsed_seconds,
    )
