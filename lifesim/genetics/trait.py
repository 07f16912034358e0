"""Genetic trait specifications and inheritance helpers.

This module provides:
- TraitSpec: Declarative specification for a trait's bounds and variation
- Helper functions that apply a list of specs to build founder or child values

Perturbations are drawn as ``U(-0.5, 0.5) * width`` so a width of 0.2 gives a
half-width of 0.1. Crossover and mutation widths are declared per trait.
"""

import random as pyrandom
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class TraitSpec:
    """Declarative specification for a heritable trait.

    Attributes:
        name: Attribute name on the DNA container
        min_val: Lowest value allowed for offspring
        max_val: Highest value allowed for offspring
        founder_min: Lowest value drawn for founders
        founder_max: Highest value drawn for founders
        crossover_width: Full width of the perturbation after parent averaging
        mutation_width: Full width of the perturbation for asexual copies
    """

    name: str
    min_val: float
    max_val: float
    founder_min: float
    founder_max: float
    crossover_width: float
    mutation_width: float

    def random_value(self, rng: pyrandom.Random) -> float:
        """Draw a founder value uniformly from the founder range."""
        return self.founder_min + rng.random() * (self.founder_max - self.founder_min)

    def clamp(self, value: float) -> float:
        return max(self.min_val, min(self.max_val, value))

    def blend(self, value1: float, value2: float, rng: pyrandom.Random) -> float:
        """Average two parent values and perturb (unclamped)."""
        return (value1 + value2) / 2 + (rng.random() - 0.5) * self.crossover_width

    def drift(self, value: float, rng: pyrandom.Random) -> float:
        """Perturb a single parent value (unclamped)."""
        return value + (rng.random() - 0.5) * self.mutation_width


def random_traits_from_specs(specs: List[TraitSpec], rng: pyrandom.Random) -> Dict[str, float]:
    """Draw every trait independently from its founder range."""
    return {spec.name: spec.random_value(rng) for spec in specs}


def crossover_traits_from_specs(
    specs: List[TraitSpec],
    parent1: object,
    parent2: object,
    rng: pyrandom.Random,
) -> Dict[str, float]:
    """Blend two parents trait by trait, clamping each result into bounds."""
    return {
        spec.name: spec.clamp(
            spec.blend(getattr(parent1, spec.name), getattr(parent2, spec.name), rng)
        )
        for spec in specs
    }


def mutate_traits_from_specs(
    specs: List[TraitSpec],
    parent: object,
    rng: pyrandom.Random,
) -> Dict[str, float]:
    """Copy one parent with independent per-trait drift, clamped into bounds."""
    return {spec.name: spec.clamp(spec.drift(getattr(parent, spec.name), rng)) for spec in specs}
