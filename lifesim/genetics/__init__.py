"""Genetics for organisms: trait specs, DNA, crossover and mutation."""

from lifesim.genetics.dna import (
    DNA,
    DNA_TRAIT_SPECS,
    TRAIT_SPECS_BY_NAME,
    crossover,
    generate_founder_dna,
    mutate,
)
from lifesim.genetics.trait import TraitSpec

__all__ = [
    "DNA",
    "DNA_TRAIT_SPECS",
    "TRAIT_SPECS_BY_NAME",
    "TraitSpec",
    "crossover",
    "generate_founder_dna",
    "mutate",
]
