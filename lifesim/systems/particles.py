"""Particle advancement and pruning."""

from typing import TYPE_CHECKING

from lifesim.entities.particle import create_burst
from lifesim.systems.base import BaseSystem, SystemResult

if TYPE_CHECKING:
    from lifesim.simulation.engine import SimulationEngine


class ParticleSystem(BaseSystem):
    """Moves and fades particles, dropping the expired ones."""

    def __init__(self, engine: "SimulationEngine") -> None:
        super().__init__(engine, "Particles")

    def emit(self, x: float, y: float, color: str, death: bool = False) -> None:
        """Add a burst of particles at a point."""
        self._engine.particles.extend(create_burst(x, y, color, self._engine.rng, death=death))

    def _do_update(self, tick: int) -> SystemResult:
        particles = self._engine.particles
        before = len(particles)
        particles[:] = [p for p in particles if p.advance()]
        return SystemResult(
            entities_affected=len(particles),
            entities_removed=before - len(particles),
        )
