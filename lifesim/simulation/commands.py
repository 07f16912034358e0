"""User intents queued for the engine.

Controls never touch the engine's collections directly. They build a
``Command`` and submit it; the engine drains the queue at the start of the
next frame, so every command is applied between ticks.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, List, Mapping, Optional

from lifesim.config.simulation_config import validate_speed
from lifesim.entities.species import PlacementMode
from lifesim.exceptions import CommandError, ConfigurationError


class CommandType(Enum):
    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE_PAUSE = "toggle_pause"
    SET_SPEED = "set_speed"
    SET_PLACEMENT_MODE = "set_placement_mode"
    PLACE = "place"
    RESET = "reset"
    APPLY_SETTINGS = "apply_settings"


@dataclass(frozen=True)
class Command:
    """A validated intent with its payload."""

    type: CommandType
    payload: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def pause(cls) -> "Command":
        return cls(CommandType.PAUSE)

    @classmethod
    def resume(cls) -> "Command":
        return cls(CommandType.RESUME)

    @classmethod
    def toggle_pause(cls) -> "Command":
        return cls(CommandType.TOGGLE_PAUSE)

    @classmethod
    def reset(cls) -> "Command":
        return cls(CommandType.RESET)

    @classmethod
    def set_speed(cls, speed: float) -> "Command":
        try:
            value = validate_speed(speed)
        except ConfigurationError as e:
            raise CommandError(str(e)) from e
        return cls(CommandType.SET_SPEED, {"speed": value})

    @classmethod
    def set_placement_mode(cls, mode: "str | PlacementMode") -> "Command":
        try:
            placement = PlacementMode.from_value(mode)
        except ConfigurationError as e:
            raise CommandError(str(e)) from e
        return cls(CommandType.SET_PLACEMENT_MODE, {"mode": placement})

    @classmethod
    def place(
        cls, x: float, y: float, mode: "Optional[str | PlacementMode]" = None
    ) -> "Command":
        """Place at a point; without a mode the engine's current mode is used."""
        try:
            payload: Dict[str, Any] = {"x": float(x), "y": float(y)}
        except (TypeError, ValueError) as e:
            raise CommandError(f"Placement coordinates must be numbers, got ({x!r}, {y!r})") from e
        if mode is not None:
            try:
                payload["mode"] = PlacementMode.from_value(mode)
            except ConfigurationError as e:
                raise CommandError(str(e)) from e
        return cls(CommandType.PLACE, payload)

    @classmethod
    def apply_settings(cls, max_food: int) -> "Command":
        try:
            value = int(max_food)
        except (TypeError, ValueError) as e:
            raise CommandError(f"max_food must be an integer, got {max_food!r}") from e
        if value < 0:
            raise CommandError(f"max_food cannot be negative, got {value}")
        return cls(CommandType.APPLY_SETTINGS, {"max_food": value})

    @classmethod
    def from_request(cls, name: str, data: Optional[Mapping[str, Any]] = None) -> "Command":
        """Build a command from a name and a loose payload (e.g. JSON).

        Raises:
            CommandError: Unknown command name or missing/invalid payload
        """
        data = data or {}
        try:
            command_type = CommandType(name)
        except ValueError as e:
            raise CommandError(f"Unknown command: {name!r}") from e

        try:
            if command_type is CommandType.SET_SPEED:
                return cls.set_speed(data["speed"])
            if command_type is CommandType.SET_PLACEMENT_MODE:
                return cls.set_placement_mode(data["mode"])
            if command_type is CommandType.PLACE:
                return cls.place(data["x"], data["y"], data.get("mode"))
            if command_type is CommandType.APPLY_SETTINGS:
                return cls.apply_settings(data["max_food"])
        except KeyError as e:
            raise CommandError(f"Command {name!r} is missing field {e.args[0]!r}") from e
        return cls(command_type)


class CommandQueue:
    """FIFO of pending commands, drained once per frame."""

    def __init__(self) -> None:
        self._pending: Deque[Command] = deque()

    def submit(self, command: Command) -> None:
        self._pending.append(command)

    def drain(self) -> List[Command]:
        """Remove and return every pending command in submission order."""
        drained = []
        while self._pending:
            drained.append(self._pending.popleft())
        return drained

    def clear(self) -> None:
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)
