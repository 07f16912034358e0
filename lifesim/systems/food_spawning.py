"""Automatic food spawning.

Food trickles in at a fixed cadence: once the timer passes the spawn
interval and the arena is below its food cap, a small random batch is
spawned and the timer restarts. While the cap is reached the timer keeps
counting, so food reappears on the first tick with room for it.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict

from lifesim.config.food import FOOD_SPAWN_BATCH_MAX, FOOD_SPAWN_BATCH_MIN
from lifesim.systems.base import BaseSystem, SystemResult

if TYPE_CHECKING:
    from lifesim.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)


class FoodSpawningSystem(BaseSystem):
    """Spawns batches of food on a timer.

    Attributes:
        timer: Ticks since the last batch
        spawn_interval: Timer value that must be exceeded before spawning
    """

    def __init__(self, engine: "SimulationEngine", spawn_interval: int) -> None:
        super().__init__(engine, "FoodSpawning")
        self.timer: int = 0
        self.spawn_interval = spawn_interval

    def _do_update(self, tick: int) -> SystemResult:
        engine = self._engine
        self.timer += 1
        if self.timer <= self.spawn_interval or len(engine.food) >= engine.max_food:
            return SystemResult.empty()

        count = engine.rng.randint(FOOD_SPAWN_BATCH_MIN, FOOD_SPAWN_BATCH_MAX)
        spawned = engine.spawn_food(count)
        self.timer = 0
        logger.debug("Spawned %d food at tick %d", len(spawned), tick)
        return SystemResult(entities_spawned=len(spawned), details={"food_spawned": len(spawned)})

    def reset(self) -> None:
        self.timer = 0

    def get_debug_info(self) -> Dict[str, Any]:
        return {**super().get_debug_info(), "timer": self.timer}
