"""Stationary food items."""

import random as pyrandom
from typing import Optional

from lifesim.config.food import (
    FOOD_BASE_RADIUS,
    FOOD_ENERGY_RANGE,
    FOOD_MIN_ENERGY,
    FOOD_RADIUS_ENERGY_DIVISOR,
    FOOD_RADIUS_SCALE,
)
from lifesim.entities.base import Entity


class Food(Entity):
    """A food pellet. Consumed whole by the first eligible organism touching it."""

    def __init__(
        self,
        x: float,
        y: float,
        *,
        rng: Optional[pyrandom.Random] = None,
        energy: Optional[float] = None,
    ) -> None:
        super().__init__(x, y)
        if energy is None:
            if rng is None:
                raise ValueError("Food requires either an rng or an explicit energy")
            energy = FOOD_MIN_ENERGY + rng.random() * FOOD_ENERGY_RANGE
        self.energy: float = energy
        self.radius: float = FOOD_BASE_RADIUS + (energy / FOOD_RADIUS_ENERGY_DIVISOR) * FOOD_RADIUS_SCALE
