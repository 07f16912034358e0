"""Simulation engine, commands and snapshots."""

from lifesim.simulation.commands import Command, CommandQueue, CommandType
from lifesim.simulation.engine import SimulationEngine
from lifesim.simulation.snapshot import (
    FoodSnapshot,
    OrganismSnapshot,
    ParticleSnapshot,
    TrailPointSnapshot,
    WorldSnapshot,
)

__all__ = [
    "Command",
    "CommandQueue",
    "CommandType",
    "FoodSnapshot",
    "OrganismSnapshot",
    "ParticleSnapshot",
    "SimulationEngine",
    "TrailPointSnapshot",
    "WorldSnapshot",
]
