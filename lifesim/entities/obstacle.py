"""Static rectangular obstacles."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Obstacle:
    """Axis-aligned rectangle that organisms bounce off.

    ``x`` and ``y`` are the top-left corner. Obstacles are generated once per
    engine and survive resets.
    """

    x: float
    y: float
    width: float
    height: float

    def contains_point(self, px: float, py: float) -> bool:
        """Inclusive point-in-rectangle test."""
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height

    def overlaps_circle(self, cx: float, cy: float, radius: float) -> bool:
        """Circle vs. rectangle test against the radius-expanded box."""
        return (
            cx + radius > self.x
            and cx - radius < self.x + self.width
            and cy + radius > self.y
            and cy - radius < self.y + self.height
        )

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
