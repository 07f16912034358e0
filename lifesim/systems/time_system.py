"""Day/night cycle.

The cycle is purely visual: it tints the background and is reported in the
statistics, but never changes organism behaviour.
"""

import math
from typing import TYPE_CHECKING, Any, Dict, Tuple

from lifesim.config.arena import (
    BACKGROUND_BASE_INTENSITY,
    BACKGROUND_DAY_GAIN,
    BACKGROUND_NIGHT_GAIN,
    DAY_LENGTH_TICKS,
)
from lifesim.systems.base import BaseSystem, SystemResult

if TYPE_CHECKING:
    from lifesim.simulation.engine import SimulationEngine


class TimeSystem(BaseSystem):
    """Tracks the position within the day/night cycle.

    Attributes:
        time: Ticks since the start of the current cycle
        cycle_length: Ticks in one full day
    """

    def __init__(self, engine: "SimulationEngine", cycle_length: int = DAY_LENGTH_TICKS) -> None:
        super().__init__(engine, "Time")
        self.time: int = 0
        self.cycle_length: int = cycle_length
        self._days_elapsed: int = 0

    def _do_update(self, tick: int) -> SystemResult:
        was_day = self.is_day()
        self.time = (self.time + 1) % self.cycle_length
        if self.time == 0:
            self._days_elapsed += 1
        return SystemResult(
            details={
                "day_phase": self.get_day_phase(),
                "day_transitioned": was_day != self.is_day(),
            }
        )

    def reset(self) -> None:
        self.time = 0
        self._days_elapsed = 0

    def get_day_phase(self) -> float:
        """Sine of the cycle position: positive during the day, in [-1, 1]."""
        return math.sin(2 * math.pi * (self.time % self.cycle_length) / self.cycle_length)

    def is_day(self) -> bool:
        return self.get_day_phase() > 0

    def get_background_rgb(self) -> Tuple[int, int, int]:
        """Background tint: a slightly blue grey by day, darker grey at night."""
        phase = self.get_day_phase()
        if phase > 0:
            intensity = math.floor(BACKGROUND_BASE_INTENSITY + phase * BACKGROUND_DAY_GAIN)
            return (intensity, intensity, intensity + 2)
        intensity = math.floor(BACKGROUND_BASE_INTENSITY + phase * BACKGROUND_NIGHT_GAIN)
        return (intensity, intensity, intensity)

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            **super().get_debug_info(),
            "time": self.time,
            "day_phase": self.get_day_phase(),
            "is_day": self.is_day(),
            "days_elapsed": self._days_elapsed,
        }
