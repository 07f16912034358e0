"""Simulation engine: owns the world and advances it tick by tick.

The engine is a coordinator. Behaviour lives in the entities and the
systems; the engine holds the collections, applies queued commands between
frames, runs the systems in a fixed order each tick and publishes immutable
snapshots and statistics.
"""

import json
import logging
import random
import time
from typing import Any, Callable, Dict, List, Optional, TypeVar

from lifesim.config.arena import (
    OBSTACLE_EDGE_MARGIN,
    OBSTACLE_EXTRA_COUNT,
    OBSTACLE_MIN_COUNT,
    OBSTACLE_MIN_SIDE,
    OBSTACLE_SIDE_RANGE,
)
from lifesim.config.food import FOOD_EDGE_MARGIN, FOOD_PLACEMENT_ATTEMPTS, SETTINGS_FOOD_TOP_UP_LIMIT
from lifesim.config.simulation_config import SimulationConfig, validate_speed
from lifesim.entities.food import Food
from lifesim.entities.obstacle import Obstacle
from lifesim.entities.organism import Organism
from lifesim.entities.particle import EAT_COLOR, Particle
from lifesim.entities.species import PlacementMode, Species
from lifesim.exceptions import CommandError, ConfigurationError, LifeSimError
from lifesim.genetics import DNA
from lifesim.simulation.commands import Command, CommandQueue, CommandType
from lifesim.simulation.snapshot import (
    FoodSnapshot,
    OrganismSnapshot,
    ParticleSnapshot,
    WorldSnapshot,
)
from lifesim.stats.ecosystem_stats import EventCounters, Stats, compute_stats
from lifesim.stats.enhanced_statistics import EnhancedStatisticsTracker, EnhancedStats
from lifesim.systems.base import BaseSystem, SystemResult
from lifesim.systems.food_spawning import FoodSpawningSystem
from lifesim.systems.interaction import InteractionSystem
from lifesim.systems.particles import ParticleSystem
from lifesim.systems.time_system import TimeSystem

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _remove_by_identity(items: List[T], target: T) -> bool:
    for index, item in enumerate(items):
        if item is target:
            del items[index]
            return True
    return False


class SimulationEngine:
    """A headless artificial-life engine.

    Architecture:
        SimulationEngine (coordinator)
        ├── TimeSystem (day/night cycle)
        ├── InteractionSystem (organism behaviour, feeding, predation, births, deaths)
        ├── ParticleSystem (cosmetic bursts)
        ├── FoodSpawningSystem (timed food batches)
        └── EnhancedStatisticsTracker (derived metrics and history)

    Attributes:
        config: Simulation configuration
        organisms: Living organisms in collection order
        food: Food items in the arena
        obstacles: Static obstacles, kept across resets
        particles: Cosmetic particles
        tick_count: Logical ticks since start or reset
        paused: Whether advance_frame() runs ticks
        speed: Logical ticks per frame (fractions accumulate across frames)
        placement_mode: What place_at_point() creates by default
        max_food: Cap used by the food spawner
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Initialize the engine with empty collections.

        Call ``setup()`` to populate the arena.

        Args:
            config: Aggregate simulation configuration
            rng: Shared random number generator for deterministic runs
            seed: Optional seed (used if rng is not provided)
        """
        self.config = config or SimulationConfig()
        self.config.validate()
        self.rng: random.Random = rng if rng is not None else random.Random(seed)
        self.seed = seed if rng is None else None

        self.width: float = self.config.arena.width
        self.height: float = self.config.arena.height

        self.organisms: List[Organism] = []
        self.food: List[Food] = []
        self.obstacles: List[Obstacle] = []
        self.particles: List[Particle] = []

        self.tick_count: int = 0
        self.paused: bool = False
        self.speed: float = self.config.speed
        self.placement_mode: PlacementMode = PlacementMode.FOOD
        self.max_food: int = self.config.food.max_food
        self._tick_accumulator: float = 0.0
        self.start_time: float = time.time()

        self.counters = EventCounters()
        self.commands = CommandQueue()

        self.time_system = TimeSystem(self, self.config.arena.day_length)
        self.interaction_system = InteractionSystem(self)
        self.particle_system = ParticleSystem(self)
        self.food_spawning_system = FoodSpawningSystem(self, self.config.food.spawn_interval)
        self.food_spawning_system.enabled = self.config.food.auto_spawn
        # Execution order within a tick
        self._systems: List[BaseSystem] = [
            self.time_system,
            self.interaction_system,
            self.particle_system,
            self.food_spawning_system,
        ]
        self.last_results: Dict[str, SystemResult] = {}

        self.stats_tracker = EnhancedStatisticsTracker(self.config.stats_history)
        self.stats: Stats = Stats()
        self.enhanced_stats: Optional[EnhancedStats] = None

        self._command_handlers: Dict[CommandType, Callable[[Command], Any]] = {
            CommandType.PAUSE: lambda c: self.pause(),
            CommandType.RESUME: lambda c: self.resume(),
            CommandType.TOGGLE_PAUSE: lambda c: self.toggle_pause(),
            CommandType.SET_SPEED: lambda c: self.set_speed(c.payload["speed"]),
            CommandType.SET_PLACEMENT_MODE: lambda c: self.set_placement_mode(c.payload["mode"]),
            CommandType.PLACE: lambda c: self.place_at_point(
                c.payload["x"], c.payload["y"], c.payload.get("mode")
            ),
            CommandType.RESET: lambda c: self.reset(),
            CommandType.APPLY_SETTINGS: lambda c: self.apply_settings(c.payload["max_food"]),
        }

    # =========================================================================
    # Setup
    # =========================================================================

    def setup(self) -> None:
        """Seed founders, generate obstacles and scatter the initial food."""
        self.seed_population()
        if self.config.arena.obstacles_enabled:
            self.create_obstacles()
        self.spawn_food(self.config.food.initial_food)
        self.refresh_stats()
        logger.info(
            "Simulation set up: %d organisms, %d food, %d obstacles (%dx%d)",
            len(self.organisms),
            len(self.food),
            len(self.obstacles),
            self.width,
            self.height,
        )

    def seed_population(self) -> List[Organism]:
        """Create the founder population, species by species."""
        population = self.config.population
        margin = population.spawn_margin
        founders = []
        for species, count in (
            (Species.HERBIVORE, population.herbivores),
            (Species.OMNIVORE, population.omnivores),
            (Species.CARNIVORE, population.carnivores),
        ):
            for _ in range(count):
                x = self.rng.random() * (self.width - 2 * margin) + margin
                y = self.rng.random() * (self.height - 2 * margin) + margin
                founders.append(self.spawn_organism(species, x, y))
        logger.debug("Seeded %d founders", len(founders))
        return founders

    def create_obstacles(self) -> List[Obstacle]:
        count = OBSTACLE_MIN_COUNT + int(self.rng.random() * (OBSTACLE_EXTRA_COUNT + 1))
        created = []
        for _ in range(count):
            obstacle = Obstacle(
                x=self.rng.random() * (self.width - 2 * OBSTACLE_EDGE_MARGIN) + OBSTACLE_EDGE_MARGIN,
                y=self.rng.random() * (self.height - 2 * OBSTACLE_EDGE_MARGIN) + OBSTACLE_EDGE_MARGIN,
                width=OBSTACLE_MIN_SIDE + self.rng.random() * OBSTACLE_SIDE_RANGE,
                height=OBSTACLE_MIN_SIDE + self.rng.random() * OBSTACLE_SIDE_RANGE,
            )
            created.append(obstacle)
        self.obstacles.extend(created)
        return created

    # =========================================================================
    # Entity management
    # =========================================================================

    def spawn_food(self, count: int) -> List[Food]:
        """Scatter ``count`` food items, trying to keep them out of obstacles.

        After the last attempt the position is accepted even if blocked.
        """
        spawned = []
        for _ in range(max(0, count)):
            attempts = 0
            while True:
                x = self.rng.random() * (self.width - 2 * FOOD_EDGE_MARGIN) + FOOD_EDGE_MARGIN
                y = self.rng.random() * (self.height - 2 * FOOD_EDGE_MARGIN) + FOOD_EDGE_MARGIN
                attempts += 1
                if attempts >= FOOD_PLACEMENT_ATTEMPTS or not self.is_point_in_obstacle(x, y):
                    break
            food = Food(x, y, rng=self.rng)
            self.food.append(food)
            spawned.append(food)
        return spawned

    def spawn_organism(
        self, species: Species, x: float, y: float, dna: Optional[DNA] = None
    ) -> Organism:
        """Add an organism at a position without any placement checks."""
        organism = Organism(x, y, Species.from_value(species), dna, rng=self.rng)
        self.organisms.append(organism)
        return organism

    def add_offspring(self, child: Organism) -> bool:
        """Add a newborn if its position is valid. Returns False when discarded."""
        if not self.is_valid_placement(child.x, child.y):
            logger.debug("Discarded offspring at (%.1f, %.1f)", child.x, child.y)
            return False
        self.organisms.append(child)
        self.particle_system.emit(child.x, child.y, child.color)
        self.counters.record_birth()
        return True

    def remove_organism(self, organism: Organism, cause: str) -> None:
        """Remove an organism by identity and count the death."""
        if not organism.alive:
            return
        organism.alive = False
        _remove_by_identity(self.organisms, organism)
        self.counters.record_death(cause)

    def remove_food(self, food: Food) -> None:
        _remove_by_identity(self.food, food)

    def is_point_in_obstacle(self, x: float, y: float) -> bool:
        return any(obstacle.contains_point(x, y) for obstacle in self.obstacles)

    def is_inside_arena(self, x: float, y: float) -> bool:
        return 0 <= x <= self.width and 0 <= y <= self.height

    def is_valid_placement(self, x: float, y: float) -> bool:
        return self.is_inside_arena(x, y) and not self.is_point_in_obstacle(x, y)

    def organism_at(self, x: float, y: float) -> Optional[Organism]:
        """Topmost organism whose body covers the point."""
        for organism in reversed(self.organisms):
            if organism.distance_to(x, y) <= organism.radius:
                return organism
        return None

    # =========================================================================
    # Controls
    # =========================================================================

    def place_at_point(
        self, x: float, y: float, mode: Optional[PlacementMode] = None
    ) -> Optional[Any]:
        """Place food or a founder organism at a point.

        Uses the current placement mode unless ``mode`` is given. Points in an
        obstacle or outside the arena are ignored and None is returned.
        """
        placement = PlacementMode.from_value(mode) if mode is not None else self.placement_mode
        if not self.is_valid_placement(x, y):
            logger.debug("Rejected %s placement at (%.1f, %.1f)", placement.value, x, y)
            return None

        species = placement.species
        if species is None:
            food = Food(x, y, rng=self.rng)
            self.food.append(food)
            self.particle_system.emit(x, y, EAT_COLOR)
            return food
        organism = self.spawn_organism(species, x, y)
        self.particle_system.emit(x, y, organism.color)
        return organism

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def set_speed(self, speed: float) -> None:
        self.speed = validate_speed(speed)
        logger.debug("Speed set to %s", self.speed)

    def set_placement_mode(self, mode: "str | PlacementMode") -> None:
        self.placement_mode = PlacementMode.from_value(mode)

    def apply_settings(self, max_food: int) -> List[Food]:
        """Change the food cap and top up toward it, at most 20 items at once."""
        if max_food < 0:
            raise ConfigurationError(f"max_food cannot be negative, got {max_food}")
        self.max_food = max_food
        top_up = min(max_food - len(self.food), SETTINGS_FOOD_TOP_UP_LIMIT)
        spawned = self.spawn_food(top_up) if top_up > 0 else []
        logger.info("Applied settings: max_food=%d (+%d food)", max_food, len(spawned))
        return spawned

    def reset(self) -> None:
        """Start over with fresh founders and food; obstacles are kept."""
        self.organisms.clear()
        self.food.clear()
        self.particles.clear()
        self.counters.reset()
        self.tick_count = 0
        self._tick_accumulator = 0.0
        for system in self._systems:
            system.reset()
        self.stats_tracker.reset()
        self.last_results = {}
        self.start_time = time.time()

        self.seed_population()
        self.spawn_food(self.config.food.initial_food)
        self.refresh_stats()
        logger.info(
            "Simulation reset: %d organisms, %d food", len(self.organisms), len(self.food)
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def submit(self, command: Command) -> None:
        """Queue a command for the start of the next frame."""
        self.commands.submit(command)

    def apply_command(self, command: Command) -> Any:
        handler = self._command_handlers.get(command.type)
        if handler is None:
            raise CommandError(f"No handler for command {command.type!r}")
        logger.debug("Applying command %s %s", command.type.value, command.payload)
        return handler(command)

    def apply_pending_commands(self) -> int:
        """Apply every queued command in order. Returns how many succeeded.

        A command that fails is logged and dropped; the rest still apply.
        """
        applied = 0
        for command in self.commands.drain():
            try:
                self.apply_command(command)
            except LifeSimError as e:
                logger.warning("Dropped command %s: %s", command.type.value, e)
                continue
            applied += 1
        return applied

    # =========================================================================
    # Update loop
    # =========================================================================

    def advance_frame(self) -> int:
        """Apply queued commands, then run as many ticks as the speed allows.

        Fractional speeds accumulate: at 0.5 a tick runs every other frame.
        Returns the number of ticks run.
        """
        self.apply_pending_commands()
        if self.paused:
            return 0

        self._tick_accumulator += self.speed
        ticks = int(self._tick_accumulator)
        self._tick_accumulator -= ticks
        for _ in range(ticks):
            self.tick()
        return ticks

    def tick(self) -> None:
        """Run one logical tick of every system, then refresh statistics."""
        self.tick_count += 1
        results = {}
        for system in self._systems:
            results[system.name] = system.update(self.tick_count)
        self.last_results = results
        self.refresh_stats()

    def refresh_stats(self) -> EnhancedStats:
        self.stats = compute_stats(
            self.organisms,
            len(self.food),
            self.counters,
            self.tick_count,
            time.time() - self.start_time,
        )
        self.enhanced_stats = self.stats_tracker.update(
            self.stats,
            self.organisms,
            self.time_system.time / self.time_system.cycle_length,
        )
        return self.enhanced_stats

    # =========================================================================
    # Views
    # =========================================================================

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            tick=self.tick_count,
            width=self.width,
            height=self.height,
            paused=self.paused,
            speed=self.speed,
            placement_mode=self.placement_mode.value,
            day_phase=self.time_system.get_day_phase(),
            is_day=self.time_system.is_day(),
            background_rgb=self.time_system.get_background_rgb(),
            organisms=tuple(OrganismSnapshot.from_organism(o) for o in self.organisms),
            food=tuple(FoodSnapshot.from_food(f) for f in self.food),
            obstacles=tuple(self.obstacles),
            particles=tuple(ParticleSnapshot.from_particle(p) for p in self.particles),
            stats=self.stats,
            enhanced_stats=self.enhanced_stats,
        )

    def get_stats(self) -> Dict[str, Any]:
        if self.enhanced_stats is None:
            return self.stats.to_dict()
        return self.enhanced_stats.to_dict()

    def get_systems_debug_info(self) -> Dict[str, Any]:
        return {system.name: system.get_debug_info() for system in self._systems}

    def export_stats_json(self, filename: str) -> None:
        """Write current stats plus the recent history to a JSON file."""
        payload = {
            "stats": self.get_stats(),
            "history": self.stats_tracker.get_time_series_summary(),
            "systems": self.get_systems_debug_info(),
        }
        with open(filename, "w") as f:
            json.dump(payload, f, indent=2)
        logger.info("Exported stats to %s", filename)

    def log_stats(self) -> None:
        stats = self.stats
        logger.info(
            "tick=%d population=%d (H=%d O=%d C=%d) food=%d births=%d deaths=%d",
            stats.tick,
            stats.total_population,
            stats.herbivore_count,
            stats.omnivore_count,
            stats.carnivore_count,
            stats.food_count,
            stats.reproduction_events,
            stats.death_events,
        )

    # =========================================================================
    # Run methods
    # =========================================================================

    def run_headless(
        self,
        max_ticks: int = 10000,
        stats_interval: int = 300,
        export_json: Optional[str] = None,
    ) -> Stats:
        """Set up and run ``max_ticks`` ticks without a display."""
        logger.info("Running headless for %d ticks", max_ticks)
        self.setup()
        for tick in range(1, max_ticks + 1):
            self.tick()
            if stats_interval > 0 and tick % stats_interval == 0:
                self.log_stats()
        logger.info("Headless run complete")
        self.log_stats()
        if export_json:
            self.export_stats_json(export_json)
        return self.stats
