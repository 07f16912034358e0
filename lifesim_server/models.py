"""Request and response models for the HTTP API."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class CommandRequest(BaseModel):
    """A control command, e.g. ``{"command": "set_speed", "data": {"speed": 2}}``."""

    command: str
    data: Optional[Dict[str, Any]] = None


class CommandResponse(BaseModel):
    success: bool
    command: Optional[str] = None
    queued: int = 0
    error: Optional[str] = None


class StatusResponse(BaseModel):
    """Lightweight view of the running simulation."""

    running: bool
    paused: bool
    tick: int
    speed: float
    placement_mode: str
    population: int
    food_count: int
    obstacle_count: int
    fps: float
    is_day: bool


class HealthResponse(BaseModel):
    status: str
    uptime_seconds: float
