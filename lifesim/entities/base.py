"""Shared base for positioned entities."""

import itertools

from lifesim.math_utils import Vector2

_entity_ids = itertools.count(1)


def next_entity_id() -> int:
    """Return a process-wide unique entity id."""
    return next(_entity_ids)


class Entity:
    """Anything with a position and an id."""

    def __init__(self, x: float, y: float) -> None:
        self.id: int = next_entity_id()
        self.pos: Vector2 = Vector2(x, y)

    @property
    def x(self) -> float:
        return self.pos.x

    @property
    def y(self) -> float:
        return self.pos.y

    def distance_to(self, x: float, y: float) -> float:
        return self.pos.distance_to(x, y)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, x={self.pos.x:.1f}, y={self.pos.y:.1f})"
