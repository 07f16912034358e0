"""Short-lived visual particles emitted on simulation events."""

import math
import random as pyrandom
from dataclasses import dataclass
from typing import List

from lifesim.config.arena import (
    PARTICLE_BURST_COUNT,
    PARTICLE_DEATH_BURST_COUNT,
    PARTICLE_DEATH_SIZE,
    PARTICLE_DECAY_PER_TICK,
    PARTICLE_SIZE,
)

# Colors used for bursts that are not species-coloured.
EAT_COLOR = "#00ff00"
KILL_COLOR = "#ff0000"
NATURAL_DEATH_COLOR = "#666666"


@dataclass(eq=False)
class Particle:
    """A drifting, fading dot. ``life`` runs from 1.0 down to 0."""

    x: float
    y: float
    dx: float
    dy: float
    life: float
    color: str
    size: float

    def advance(self) -> bool:
        """Move one tick and fade; return False once expired."""
        self.x += self.dx
        self.y += self.dy
        self.life -= PARTICLE_DECAY_PER_TICK
        return self.life > 0


def create_burst(
    x: float, y: float, color: str, rng: pyrandom.Random, death: bool = False
) -> List[Particle]:
    """Build a burst of particles around a point.

    Death bursts are larger, with more and bigger particles.
    """
    count = PARTICLE_DEATH_BURST_COUNT if death else PARTICLE_BURST_COUNT
    size = PARTICLE_DEATH_SIZE if death else PARTICLE_SIZE
    particles = []
    for i in range(count):
        angle = (math.pi * 2 / count) * i + rng.random() * 0.5
        speed = 1 + rng.random() * 3
        particles.append(
            Particle(
                x=x,
                y=y,
                dx=math.cos(angle) * speed,
                dy=math.sin(angle) * speed,
                life=1.0,
                color=color,
                size=size,
            )
        )
    return particles
