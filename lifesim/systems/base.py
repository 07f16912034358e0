"""Base class for the per-tick systems.

A system handles one slice of the tick (time, organism interactions,
particles, food spawning). The engine calls ``update`` on each system in a
fixed order; disabled systems are skipped and report that they were.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from lifesim.simulation.engine import SimulationEngine

__all__ = ["BaseSystem", "SystemResult"]


@dataclass
class SystemResult:
    """What a system did during one tick.

    Attributes:
        entities_affected: Entities the system updated
        entities_spawned: Entities it created
        entities_removed: Entities it removed
        skipped: True when the system was disabled
        details: Per-system counters, e.g. ``{"food_eaten": 3}``
    """

    entities_affected: int = 0
    entities_spawned: int = 0
    entities_removed: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "SystemResult":
        return cls()

    @classmethod
    def skipped_result(cls) -> "SystemResult":
        return cls(skipped=True)

    def __add__(self, other: "SystemResult") -> "SystemResult":
        """Merge two results. Numeric details present in both are summed."""
        if other.skipped:
            return self
        if self.skipped:
            return other

        details = dict(self.details)
        for key, value in other.details.items():
            previous = details.get(key)
            if isinstance(previous, (int, float)) and isinstance(value, (int, float)):
                details[key] = previous + value
            else:
                details[key] = value
        return SystemResult(
            self.entities_affected + other.entities_affected,
            self.entities_spawned + other.entities_spawned,
            self.entities_removed + other.entities_removed,
            details=details,
        )


class BaseSystem(ABC):
    """One stage of the tick pipeline, bound to an engine.

    Attributes:
        name: Key used for this system in ``engine.last_results``
        enabled: When False, ``update`` does nothing
    """

    def __init__(self, engine: "SimulationEngine", name: str) -> None:
        self._engine = engine
        self.name = name
        self.enabled = True
        self._update_count = 0

    @property
    def engine(self) -> "SimulationEngine":
        return self._engine

    @property
    def update_count(self) -> int:
        """Ticks this system actually ran (disabled ticks excluded)."""
        return self._update_count

    def update(self, tick: int) -> SystemResult:
        if not self.enabled:
            return SystemResult.skipped_result()
        result = self._do_update(tick)
        self._update_count += 1
        return result if result is not None else SystemResult.empty()

    @abstractmethod
    def _do_update(self, tick: int) -> Optional[SystemResult]:
        """Run this system's share of tick ``tick``."""

    def reset(self) -> None:
        """Clear per-run state. Stateless systems keep the default no-op."""

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "enabled": self.enabled,
            "update_count": self._update_count,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, enabled={self.enabled})"
