"""Species and placement modes."""

from enum import Enum
from typing import Optional

from lifesim.config.organisms import ATTACK_AGGRESSION, HUNT_TARGET_AGGRESSION
from lifesim.exceptions import ConfigurationError


class Species(Enum):
    """Dietary class of an organism. Never changes after birth."""

    HERBIVORE = "herbivore"
    CARNIVORE = "carnivore"
    OMNIVORE = "omnivore"

    @property
    def eats_food(self) -> bool:
        """Herbivores and omnivores consume food items."""
        return self is not Species.CARNIVORE

    @property
    def color(self) -> str:
        return _SPECIES_COLORS[self]

    def hunts(self, aggression: float) -> bool:
        """Whether a hungry organism of this species picks organisms as targets."""
        if self is Species.CARNIVORE:
            return True
        return self is Species.OMNIVORE and aggression > HUNT_TARGET_AGGRESSION

    def attacks(self, aggression: float) -> bool:
        """Whether an organism of this species kills prey on contact."""
        if self is Species.CARNIVORE:
            return True
        return self is Species.OMNIVORE and aggression > ATTACK_AGGRESSION

    @classmethod
    def from_value(cls, value: "str | Species") -> "Species":
        if isinstance(value, Species):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise ConfigurationError(f"Unknown species: {value!r}") from e


_SPECIES_COLORS = {
    Species.HERBIVORE: "#4CAF50",
    Species.CARNIVORE: "#F44336",
    Species.OMNIVORE: "#FF9800",
}


class PlacementMode(Enum):
    """What a user click places in the arena."""

    FOOD = "food"
    HERBIVORE = "herbivore"
    CARNIVORE = "carnivore"
    OMNIVORE = "omnivore"

    @property
    def species(self) -> Optional[Species]:
        """The species placed by this mode, or None for food."""
        if self is PlacementMode.FOOD:
            return None
        return Species(self.value)

    @classmethod
    def from_value(cls, value: "str | PlacementMode") -> "PlacementMode":
        if isinstance(value, PlacementMode):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise ConfigurationError(f"Unknown placement mode: {value!r}") from e
