"""Organism update loop and interaction resolution.

Every tick each living organism first runs its own behaviour (steering,
physics, metabolism) and is then resolved against the live world state in a
fixed order:

1. Feeding: non-carnivores consume every food item they touch.
2. Predation: carnivores and aggressive omnivores kill at most one prey.
3. Reproduction: eligible organisms mate (or rarely bud) and place a child.
4. Death: starvation or old age removes the organism.

Organisms are processed over a stable snapshot in reverse collection order.
Anything removed earlier in the tick is flagged dead and skipped; children
born during the tick wait until the next one.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from lifesim.config.organisms import (
    ASEXUAL_REPRODUCTION_CHANCE,
    MATE_SEARCH_RADIUS,
    PREDATION_ENERGY_TRANSFER,
    PREY_SIZE_RATIO,
)
from lifesim.entities.organism import Organism
from lifesim.entities.particle import EAT_COLOR, KILL_COLOR, NATURAL_DEATH_COLOR
from lifesim.entities.species import Species
from lifesim.systems.base import BaseSystem, SystemResult

if TYPE_CHECKING:
    from lifesim.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)

# Death causes, used as counter keys.
STARVATION = "starvation"
OLD_AGE = "old_age"
PREDATION = "predation"


class InteractionSystem(BaseSystem):
    """Runs organism behaviour and resolves feeding, predation, births and deaths.

    Per-tick counts are collected in ``_tick_counts`` and returned from
    ``update`` as the SystemResult details.
    """

    def __init__(self, engine: "SimulationEngine") -> None:
        super().__init__(engine, "Interaction")
        self._tick_counts: Dict[str, int] = self._empty_counts()

    @staticmethod
    def _empty_counts() -> Dict[str, int]:
        return {
            "food_eaten": 0,
            "kills": 0,
            "births": 0,
            "births_discarded": 0,
            STARVATION: 0,
            OLD_AGE: 0,
        }

    def _do_update(self, tick: int) -> SystemResult:
        engine = self._engine
        self._tick_counts = self._empty_counts()
        processed = 0

        for organism in tuple(reversed(engine.organisms)):
            if not organism.alive:
                continue
            organism.update_ai(engine.organisms, engine.food, engine.rng)
            organism.update(engine.width, engine.height, engine.obstacles)
            self.resolve(organism)
            processed += 1

        counts = self._tick_counts
        return SystemResult(
            entities_affected=processed,
            entities_spawned=counts["births"],
            entities_removed=counts["kills"] + counts[STARVATION] + counts[OLD_AGE],
            details=dict(counts),
        )

    def resolve(self, organism: Organism) -> None:
        """Apply feeding, predation, reproduction and the death check."""
        if organism.species.eats_food:
            self.resolve_feeding(organism)
        if organism.species.attacks(organism.dna.aggression):
            self.resolve_predation(organism)
        if organism.can_reproduce():
            self.resolve_reproduction(organism)
        self.resolve_death(organism)

    def resolve_feeding(self, organism: Organism) -> int:
        """Eat every touching food item. Returns the number eaten."""
        engine = self._engine
        eaten = 0
        for food in reversed(tuple(engine.food)):
            if not organism.is_colliding_with(food.x, food.y, food.radius):
                continue
            organism.energy = min(organism.energy + food.energy, organism.max_energy)
            engine.remove_food(food)
            engine.particle_system.emit(food.x, food.y, EAT_COLOR)
            eaten += 1
        self._tick_counts["food_eaten"] += eaten
        return eaten

    def resolve_predation(self, predator: Organism) -> Optional[Organism]:
        """Kill the first eligible touching prey, scanning from the back.

        Prey must be a herbivore or noticeably smaller than the predator, and
        the predator needs more energy than the prey. Returns the prey killed.
        """
        engine = self._engine
        predator_radius = predator.radius
        for prey in reversed(tuple(engine.organisms)):
            if prey is predator or not prey.alive:
                continue
            if not predator.is_colliding_with(prey.x, prey.y, prey.radius):
                continue
            if not (
                prey.species is Species.HERBIVORE or prey.radius < predator_radius * PREY_SIZE_RATIO
            ):
                continue
            if predator.energy <= prey.energy:
                continue

            gain = min(prey.energy * PREDATION_ENERGY_TRANSFER, predator.max_energy - predator.energy)
            predator.energy += gain
            engine.particle_system.emit(prey.x, prey.y, KILL_COLOR, death=True)
            engine.remove_organism(prey, PREDATION)
            self._tick_counts["kills"] += 1
            logger.debug("Organism %d ate organism %d (+%.1f)", predator.id, prey.id, gain)
            return prey
        return None

    def find_mate(self, organism: Organism) -> Optional[Organism]:
        """First eligible same-species organism within mating range."""
        for other in self._engine.organisms:
            if (
                other is not organism
                and other.species is organism.species
                and other.can_reproduce()
                and organism.distance_to(other.x, other.y) < MATE_SEARCH_RADIUS
            ):
                return other
        return None

    def resolve_reproduction(self, organism: Organism) -> Optional[Organism]:
        """Reproduce sexually with a nearby mate, or asexually by chance.

        The cost is paid even if the child lands somewhere invalid and is
        discarded. Returns the child when it was added to the world.
        """
        engine = self._engine
        mate = self.find_mate(organism)
        if mate is None and engine.rng.random() >= ASEXUAL_REPRODUCTION_CHANCE:
            return None

        child = organism.reproduce(mate, engine.rng)
        if engine.add_offspring(child):
            self._tick_counts["births"] += 1
            return child
        self._tick_counts["births_discarded"] += 1
        return None

    def resolve_death(self, organism: Organism) -> bool:
        if not organism.alive or not organism.is_dead():
            return False
        cause = STARVATION if organism.energy <= 0 else OLD_AGE
        engine = self._engine
        engine.particle_system.emit(organism.x, organism.y, NATURAL_DEATH_COLOR, death=True)
        engine.remove_organism(organism, cause)
        self._tick_counts[cause] += 1
        return True

    def get_debug_info(self) -> Dict[str, Any]:
        return {**super().get_debug_info(), "last_tick": dict(self._tick_counts)}
