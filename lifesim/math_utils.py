"""Mutable 2D vector for positions and velocities."""

from __future__ import annotations

import math
from typing import Tuple


class Vector2:
    """A 2D vector updated in place on the hot path.

    Organisms hold one for position and one for velocity and mutate them
    every tick, so the in-place methods avoid allocating.
    """

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(self.x - x, self.y - y)

    def update(self, x: float, y: float) -> None:
        self.x, self.y = float(x), float(y)

    def add_inplace(self, dx: float, dy: float) -> Vector2:
        self.x += dx
        self.y += dy
        return self

    def scale_inplace(self, factor: float) -> Vector2:
        self.x *= factor
        self.y *= factor
        return self

    def limit_inplace(self, max_length: float) -> Vector2:
        """Shrink to ``max_length`` when longer; direction is kept."""
        length = self.length()
        if length > max_length and length > 0:
            factor = max_length / length
            self.x *= factor
            self.y *= factor
        return self

    def copy(self) -> Vector2:
        return Vector2(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Vector2({self.x:.3f}, {self.y:.3f})"
