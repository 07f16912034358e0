"""Simulation systems run by the engine once per tick."""

from lifesim.systems.base import BaseSystem, SystemResult
from lifesim.systems.food_spawning import FoodSpawningSystem
from lifesim.systems.interaction import InteractionSystem
from lifesim.systems.particles import ParticleSystem
from lifesim.systems.time_system import TimeSystem

__all__ = [
    "BaseSystem",
    "FoodSpawningSystem",
    "InteractionSystem",
    "ParticleSystem",
    "SystemResult",
    "TimeSystem",
]
