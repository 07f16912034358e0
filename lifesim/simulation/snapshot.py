"""Immutable views of the world handed to renderers and the API."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from lifesim.entities.food import Food
from lifesim.entities.obstacle import Obstacle
from lifesim.entities.organism import Organism
from lifesim.entities.particle import Particle
from lifesim.stats.ecosystem_stats import Stats
from lifesim.stats.enhanced_statistics import EnhancedStats


@dataclass(frozen=True)
class TrailPointSnapshot:
    x: float
    y: float
    alpha: float


@dataclass(frozen=True)
class OrganismSnapshot:
    id: int
    species: str
    x: float
    y: float
    dx: float
    dy: float
    radius: float
    age: int
    energy: float
    max_energy: float
    generation: int
    color: str
    trail: Tuple[TrailPointSnapshot, ...]
    dna: Dict[str, float]

    @classmethod
    def from_organism(cls, organism: Organism) -> "OrganismSnapshot":
        return cls(
            id=organism.id,
            species=organism.species.value,
            x=organism.x,
            y=organism.y,
            dx=organism.vel.x,
            dy=organism.vel.y,
            radius=organism.radius,
            age=organism.age,
            energy=organism.energy,
            max_energy=organism.max_energy,
            generation=organism.generation,
            color=organism.color,
            trail=tuple(TrailPointSnapshot(p.x, p.y, p.alpha) for p in organism.trail),
            dna=organism.dna.to_dict(),
        )


@dataclass(frozen=True)
class FoodSnapshot:
    id: int
    x: float
    y: float
    radius: float
    energy: float

    @classmethod
    def from_food(cls, food: Food) -> "FoodSnapshot":
        return cls(id=food.id, x=food.x, y=food.y, radius=food.radius, energy=food.energy)


@dataclass(frozen=True)
class ParticleSnapshot:
    x: float
    y: float
    life: float
    color: str
    size: float

    @classmethod
    def from_particle(cls, particle: Particle) -> "ParticleSnapshot":
        return cls(
            x=particle.x,
            y=particle.y,
            life=particle.life,
            color=particle.color,
            size=particle.size,
        )


@dataclass(frozen=True)
class WorldSnapshot:
    """Everything a renderer needs for one frame.

    ``day_phase`` is the sine of the cycle position (positive by day);
    ``background_rgb`` is the matching background tint.
    """

    tick: int
    width: float
    height: float
    paused: bool
    speed: float
    placement_mode: str
    day_phase: float
    is_day: bool
    background_rgb: Tuple[int, int, int]
    organisms: Tuple[OrganismSnapshot, ...]
    food: Tuple[FoodSnapshot, ...]
    obstacles: Tuple[Obstacle, ...]
    particles: Tuple[ParticleSnapshot, ...]
    stats: Stats
    enhanced_stats: Optional[EnhancedStats] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict (enums flattened to their values)."""
        return {
            "tick": self.tick,
            "width": self.width,
            "height": self.height,
            "paused": self.paused,
            "speed": self.speed,
            "placement_mode": self.placement_mode,
            "day_phase": self.day_phase,
            "is_day": self.is_day,
            "background_rgb": list(self.background_rgb),
            "organisms": [asdict(o) for o in self.organisms],
            "food": [asdict(f) for f in self.food],
            "obstacles": [o.to_dict() for o in self.obstacles],
            "particles": [asdict(p) for p in self.particles],
            "stats": self.stats.to_dict(),
            "enhanced_stats": self.enhanced_stats.to_dict() if self.enhanced_stats else None,
        }
