"""Artificial-life arena simulation.

Organisms of three species (herbivores, omnivores, carnivores) carrying a
seven-trait genome forage, hunt, flock, reproduce and die in a bounded 2D
arena with obstacles and regrowing food.
"""

from lifesim.entities import Food, Obstacle, Organism, PlacementMode, Species
from lifesim.exceptions import CommandError, ConfigurationError, LifeSimError, SimulationError
from lifesim.genetics import DNA
from lifesim.simulation import Command, CommandType, SimulationEngine, WorldSnapshot
from lifesim.stats import EnhancedStats, Stats

__all__ = [
    "Command",
    "CommandError",
    "CommandType",
    "ConfigurationError",
    "DNA",
    "EnhancedStats",
    "Food",
    "LifeSimError",
    "Obstacle",
    "Organism",
    "PlacementMode",
    "SimulationEngine",
    "SimulationError",
    "Species",
    "Stats",
    "WorldSnapshot",
]
