"""Tests for command construction, validation and queueing."""

import pytest

from lifesim.entities import PlacementMode
from lifesim.exceptions import CommandError
from lifesim.simulation import Command, CommandQueue, CommandType


class TestFromRequest:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("pause", CommandType.PAUSE),
            ("resume", CommandType.RESUME),
            ("toggle_pause", CommandType.TOGGLE_PAUSE),
            ("reset", CommandType.RESET),
        ],
    )
    def test_commands_without_payload(self, name, expected):
        command = Command.from_request(name)
        assert command.type is expected
        assert command.payload == {}

    def test_set_speed(self):
        command = Command.from_request("set_speed", {"speed": "2"})
        assert command.payload == {"speed": 2.0}

    def test_place_with_mode(self):
        command = Command.from_request("place", {"x": 10, "y": 20, "mode": "Carnivore"})
        assert command.payload == {"x": 10.0, "y": 20.0, "mode": PlacementMode.CARNIVORE}

    def test_place_without_mode(self):
        command = Command.from_request("place", {"x": 10, "y": 20})
        assert "mode" not in command.payload

    def test_apply_settings(self):
        command = Command.from_request("apply_settings", {"max_food": 150})
        assert command.payload == {"max_food": 150}

    def test_unknown_command(self):
        with pytest.raises(CommandError, match="Unknown command"):
            Command.from_request("explode")

    def test_missing_field(self):
        with pytest.raises(CommandError, match="missing field 'speed'"):
            Command.from_request("set_speed", {})

    @pytest.mark.parametrize(
        "name,data",
        [
            ("set_speed", {"speed": 0}),
            ("set_speed", {"speed": "fast"}),
            ("set_placement_mode", {"mode": "tree"}),
            ("place", {"x": "left", "y": 3}),
            ("place", {"x": 1, "y": 3, "mode": "rock"}),
            ("apply_settings", {"max_food": -5}),
            ("apply_settings", {"max_food": "lots"}),
        ],
    )
    def test_invalid_payloads(self, name, data):
        with pytest.raises(CommandError):
            Command.from_request(name, data)


def test_commands_are_immutable():
    command = Command.pause()
    with pytest.raises(AttributeError):
        command.type = CommandType.RESUME


def test_queue_drains_in_submission_order():
    queue = CommandQueue()
    queue.submit(Command.pause())
    queue.submit(Command.set_speed(2))
    queue.submit(Command.resume())

    assert len(queue) == 3
    drained = queue.drain()

    assert [c.type for c in drained] == [
        CommandType.PAUSE,
        CommandType.SET_SPEED,
        CommandType.RESUME,
    ]
    assert len(queue) == 0
    assert queue.drain() == []


def test_queue_clear():
    queue = CommandQueue()
    queue.submit(Command.reset())
    queue.clear()
    assert len(queue) == 0
