"""Arena entities: organisms, food, obstacles and particles."""

from lifesim.entities.base import Entity
from lifesim.entities.food import Food
from lifesim.entities.obstacle import Obstacle
from lifesim.entities.organism import Organism, TrailPoint
from lifesim.entities.particle import Particle, create_burst
from lifesim.entities.species import PlacementMode, Species

__all__ = [
    "Entity",
    "Food",
    "Obstacle",
    "Organism",
    "Particle",
    "PlacementMode",
    "Species",
    "TrailPoint",
    "create_burst",
]
