"""Organism entity: genome-driven steering, physics and metabolism.

An organism moves through two implicit states. While it has a target it
steers toward it; once within reach (or with no target) it wanders with a
small random jitter. Interaction with other entities (eating, killing,
reproducing and dying) is resolved afterwards by the interaction system.
"""

import math
import random as pyrandom
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from lifesim.config.organisms import (
    BASE_MAX_ENERGY,
    BASE_METABOLIC_COST,
    BASE_RADIUS,
    FLOCK_COHESION,
    FLOCK_MIN_SOCIALNESS,
    FLOCK_RADIUS,
    FORAGE_ENERGY_RATIO,
    HUNT_ENERGY_RATIO,
    INITIAL_ENERGY_RATIO,
    INITIAL_VELOCITY_SPREAD,
    MATURITY_AGE,
    MAX_ENERGY_PER_SIZE,
    MAX_SPEED_FACTOR,
    MIN_RADIUS,
    MOVEMENT_METABOLIC_COST,
    OFFSPRING_SPAWN_GAP,
    RADIUS_PER_SIZE,
    REPRODUCTION_COOLDOWN,
    REPRODUCTION_COST_RATIO,
    SEEK_IMPULSE,
    SEEK_SPEED_FACTOR,
    SEPARATION_RADIUS,
    SEPARATION_STRENGTH,
    TARGET_REACHED_DISTANCE,
    TRAIL_ALPHA_DECAY,
    TRAIL_MAX_LENGTH,
    VELOCITY_DAMPING,
    WANDER_JITTER,
)
from lifesim.entities.base import Entity
from lifesim.entities.species import Species
from lifesim.genetics import DNA
from lifesim.math_utils import Vector2

if TYPE_CHECKING:
    from lifesim.entities.food import Food
    from lifesim.entities.obstacle import Obstacle


@dataclass(eq=False)
class TrailPoint:
    """A fading breadcrumb left behind a moving organism."""

    x: float
    y: float
    alpha: float
    color: str


class Organism(Entity):
    """A living agent with fixed species and DNA.

    Attributes:
        species: Dietary class, never changes
        dna: Immutable genome
        vel: Velocity in pixels per tick
        energy: Current energy; may dip below zero before the death check
        max_energy: Fixed at birth from the size trait
        age: Ticks lived
        target: Point being steered toward, or None while wandering
        reproduction_cooldown: Ticks until the organism may reproduce again
        generation: 0 for founders, parent generation + 1 for offspring
        alive: False once removed from the world
    """

    def __init__(
        self,
        x: float,
        y: float,
        species: Species,
        dna: Optional[DNA] = None,
        *,
        rng: pyrandom.Random,
        generation: int = 0,
        energy: Optional[float] = None,
    ) -> None:
        super().__init__(x, y)
        self.species = species
        self.dna: DNA = dna if dna is not None else DNA.random(rng)
        self.generation = generation
        self.age = 0
        self.max_energy: float = BASE_MAX_ENERGY + self.dna.size * MAX_ENERGY_PER_SIZE
        self.energy: float = self.max_energy * INITIAL_ENERGY_RATIO if energy is None else energy
        self.vel = Vector2(
            (rng.random() - 0.5) * INITIAL_VELOCITY_SPREAD * self.dna.speed,
            (rng.random() - 0.5) * INITIAL_VELOCITY_SPREAD * self.dna.speed,
        )
        self.target: Optional[Vector2] = None
        self.reproduction_cooldown = 0
        self.trail: List[TrailPoint] = []
        self.alive = True

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def radius(self) -> float:
        """Body radius, shrinking with the square root of the energy ratio."""
        energy_factor = math.sqrt(max(self.energy, 0.0) / self.max_energy)
        return max(MIN_RADIUS, (BASE_RADIUS + self.dna.size * RADIUS_PER_SIZE) * energy_factor)

    @property
    def color(self) -> str:
        return self.species.color

    @property
    def is_seeking(self) -> bool:
        return self.target is not None

    def is_colliding_with(self, x: float, y: float, radius: float) -> bool:
        return self.distance_to(x, y) < self.radius + radius

    def overlaps_obstacle(self, obstacle: "Obstacle") -> bool:
        return obstacle.overlaps_circle(self.pos.x, self.pos.y, self.radius)

    def can_reproduce(self) -> bool:
        return (
            self.energy > self.dna.reproduction_threshold
            and self.reproduction_cooldown == 0
            and self.age > MATURITY_AGE
        )

    def is_dead(self) -> bool:
        return self.energy <= 0 or self.age > self.dna.lifespan

    # ------------------------------------------------------------------
    # Behaviour
    # ------------------------------------------------------------------

    def update_ai(
        self,
        organisms: Sequence["Organism"],
        food: Sequence["Food"],
        rng: pyrandom.Random,
    ) -> None:
        """Pick a target, flock, then steer or wander."""
        self._acquire_target(organisms, food)

        if self.dna.socialness > FLOCK_MIN_SOCIALNESS:
            self.apply_flocking(organisms)

        if self.target is not None:
            self.move_towards(self.target.x, self.target.y)
        else:
            self.vel.add_inplace(
                (rng.random() - 0.5) * WANDER_JITTER,
                (rng.random() - 0.5) * WANDER_JITTER,
            )

    def _acquire_target(self, organisms: Sequence["Organism"], food: Sequence["Food"]) -> None:
        # Hunting runs second so it overrides foraging for hungry omnivores.
        if self.species.eats_food and self.energy < self.max_energy * FORAGE_ENERGY_RATIO:
            nearest_food = self.find_nearest(food)
            if nearest_food is not None:
                self.target = nearest_food.pos.copy()

        if (
            self.species.hunts(self.dna.aggression)
            and self.energy < self.max_energy * HUNT_ENERGY_RATIO
        ):
            own_radius = self.radius
            prey = self.find_nearest(
                o
                for o in organisms
                if o is not self
                and (
                    o.species is Species.HERBIVORE
                    or (o.species is Species.OMNIVORE and o.radius < own_radius)
                )
            )
            if prey is not None:
                self.target = prey.pos.copy()

    def find_nearest(self, candidates: Iterable[Entity]) -> Optional[Entity]:
        """Closest candidate; the first one wins ties."""
        nearest = None
        min_distance = math.inf
        for candidate in candidates:
            distance = self.distance_to(candidate.pos.x, candidate.pos.y)
            if distance < min_distance:
                min_distance = distance
                nearest = candidate
        return nearest

    def move_towards(self, target_x: float, target_y: float) -> None:
        """Accelerate toward a point, or clear the target once it is reached."""
        dx = target_x - self.pos.x
        dy = target_y - self.pos.y
        distance = math.sqrt(dx * dx + dy * dy)

        if distance > TARGET_REACHED_DISTANCE:
            impulse = self.dna.speed * SEEK_SPEED_FACTOR * SEEK_IMPULSE
            self.vel.add_inplace(dx / distance * impulse, dy / distance * impulse)
        else:
            self.target = None

    def apply_flocking(self, organisms: Sequence["Organism"]) -> None:
        """Cohesion toward same-species neighbours plus short-range separation."""
        neighbors = [
            o
            for o in organisms
            if o is not self
            and o.species is self.species
            and self.distance_to(o.pos.x, o.pos.y) < FLOCK_RADIUS
        ]
        if not neighbors:
            return

        center_x = sum(n.pos.x for n in neighbors) / len(neighbors)
        center_y = sum(n.pos.y for n in neighbors) / len(neighbors)
        cohesion = FLOCK_COHESION * self.dna.socialness
        self.vel.add_inplace(
            (center_x - self.pos.x) * cohesion,
            (center_y - self.pos.y) * cohesion,
        )

        for neighbor in neighbors:
            distance = self.distance_to(neighbor.pos.x, neighbor.pos.y)
            if 0 < distance < SEPARATION_RADIUS:
                force = SEPARATION_STRENGTH / distance
                self.vel.add_inplace(
                    -(neighbor.pos.x - self.pos.x) * force,
                    -(neighbor.pos.y - self.pos.y) * force,
                )

    # ------------------------------------------------------------------
    # Physics and metabolism
    # ------------------------------------------------------------------

    def update(self, width: float, height: float, obstacles: Sequence["Obstacle"]) -> None:
        """Advance age, position, velocity, energy, trail and cooldown by one tick."""
        self.age += 1
        pos = self.pos
        vel = self.vel
        pos.add_inplace(vel.x, vel.y)

        for obstacle in obstacles:
            if self.overlaps_obstacle(obstacle):
                if pos.x < obstacle.x or pos.x > obstacle.x + obstacle.width:
                    vel.x = -vel.x
                if pos.y < obstacle.y or pos.y > obstacle.y + obstacle.height:
                    vel.y = -vel.y
                pos.add_inplace(-vel.x, -vel.y)

        radius = self.radius
        if pos.x <= radius or pos.x >= width - radius:
            vel.x = -vel.x
        if pos.y <= radius or pos.y >= height - radius:
            vel.y = -vel.y
        pos.x = max(radius, min(width - radius, pos.x))
        pos.y = max(radius, min(height - radius, pos.y))

        vel.scale_inplace(VELOCITY_DAMPING)
        # Metabolic cost uses the damped speed before the limit is applied.
        current_speed = vel.length()
        vel.limit_inplace(self.dna.speed * MAX_SPEED_FACTOR)

        self.energy -= (
            BASE_METABOLIC_COST + current_speed * MOVEMENT_METABOLIC_COST
        ) / self.dna.efficiency

        self.update_trail()

        if self.reproduction_cooldown > 0:
            self.reproduction_cooldown -= 1

    def update_trail(self) -> None:
        self.trail.append(TrailPoint(self.pos.x, self.pos.y, 1.0, self.color))
        for point in self.trail:
            point.alpha -= TRAIL_ALPHA_DECAY
        self.trail = [p for p in self.trail if p.alpha > 0]
        if len(self.trail) > TRAIL_MAX_LENGTH:
            del self.trail[0]

    # ------------------------------------------------------------------
    # Reproduction
    # ------------------------------------------------------------------

    def reproduce(self, partner: Optional["Organism"], rng: pyrandom.Random) -> "Organism":
        """Pay the reproduction cost and build a child next to this organism.

        With a partner the child's DNA is a crossover of both parents,
        otherwise a mutated copy of this one. The caller decides whether the
        child's position is acceptable.
        """
        self.energy -= self.dna.reproduction_threshold * REPRODUCTION_COST_RATIO
        self.reproduction_cooldown = REPRODUCTION_COOLDOWN

        if partner is not None:
            child_dna = DNA.from_parents(self.dna, partner.dna, rng)
            generation = max(self.generation, partner.generation) + 1
        else:
            child_dna = self.dna.mutated(rng)
            generation = self.generation + 1

        angle = rng.random() * math.pi * 2
        distance = self.radius + OFFSPRING_SPAWN_GAP
        return Organism(
            self.pos.x + math.cos(angle) * distance,
            self.pos.y + math.sin(angle) * distance,
            self.species,
            child_dna,
            rng=rng,
            generation=generation,
        )

    def __repr__(self) -> str:
        return (
            f"Organism(id={self.id}, species={self.species.value}, "
            f"energy={self.energy:.1f}, age={self.age})"
        )
