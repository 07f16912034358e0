"""The organism genome: seven bounded real-valued traits.

A DNA instance is immutable. Organisms never change their own traits; new
values only appear through ``crossover`` or ``mutate`` when a child is born,
which is also the only place the allowed bounds are enforced. Founder values
come from narrower ranges that sit inside those bounds.
"""

import random as pyrandom
from dataclasses import asdict, dataclass
from typing import Dict, List

from lifesim.genetics.trait import (
    TraitSpec,
    crossover_traits_from_specs,
    mutate_traits_from_specs,
    random_traits_from_specs,
)

# name, allowed range, founder range, crossover width, mutation width
DNA_TRAIT_SPECS: List[TraitSpec] = [
    TraitSpec("speed", 0.2, 2.0, 0.5, 1.5, 0.2, 0.1),
    TraitSpec("efficiency", 0.2, 2.0, 0.5, 1.5, 0.2, 0.1),
    TraitSpec("aggression", 0.0, 1.0, 0.0, 1.0, 0.2, 0.1),
    TraitSpec("size", 0.5, 1.5, 0.8, 1.2, 0.1, 0.05),
    TraitSpec("reproduction_threshold", 40.0, 120.0, 60.0, 100.0, 10.0, 5.0),
    TraitSpec("lifespan", 1000.0, 6000.0, 1500.0, 4500.0, 500.0, 200.0),
    TraitSpec("socialness", 0.0, 1.0, 0.0, 1.0, 0.2, 0.1),
]

TRAIT_SPECS_BY_NAME: Dict[str, TraitSpec] = {spec.name: spec for spec in DNA_TRAIT_SPECS}


@dataclass(frozen=True)
class DNA:
    """Heritable trait vector of an organism.

    Attributes:
        speed: Movement speed multiplier (also caps top speed)
        efficiency: Divides metabolic cost; higher burns less energy
        aggression: Drives omnivore hunting (see organism thresholds)
        size: Body size; sets max energy and radius
        reproduction_threshold: Energy needed before reproducing
        lifespan: Maximum age in ticks
        socialness: Flocking tendency; flocks only above 0.5
    """

    speed: float
    efficiency: float
    aggression: float
    size: float
    reproduction_threshold: float
    lifespan: float
    socialness: float

    @classmethod
    def random(cls, rng: pyrandom.Random) -> "DNA":
        """Generate founder DNA with independent uniform draws."""
        return cls(**random_traits_from_specs(DNA_TRAIT_SPECS, rng))

    @classmethod
    def from_parents(cls, parent1: "DNA", parent2: "DNA", rng: pyrandom.Random) -> "DNA":
        """Sexual reproduction: mean of both parents plus per-trait jitter."""
        return cls(**crossover_traits_from_specs(DNA_TRAIT_SPECS, parent1, parent2, rng))

    def mutated(self, rng: pyrandom.Random) -> "DNA":
        """Asexual reproduction: this DNA plus per-trait jitter."""
        return DNA(**mutate_traits_from_specs(DNA_TRAIT_SPECS, self, rng))

    def in_bounds(self) -> bool:
        return all(
            spec.min_val <= getattr(self, spec.name) <= spec.max_val for spec in DNA_TRAIT_SPECS
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def generate_founder_dna(rng: pyrandom.Random) -> DNA:
    return DNA.random(rng)


def crossover(parent1: DNA, parent2: DNA, rng: pyrandom.Random) -> DNA:
    return DNA.from_parents(parent1, parent2, rng)


def mutate(parent: DNA, rng: pyrandom.Random) -> DNA:
    return parent.mutated(rng)
