"""Life simulation exception hierarchy.

Simulation conditions (blocked placements, empty target scans, organisms
removed mid-tick) are absorbed by the engine and never raised. The classes
below cover programming and configuration mistakes so callers can catch
something narrower than ``Exception``.
"""


class LifeSimError(Exception):
    """Root of all life simulation exceptions."""


class SimulationError(LifeSimError):
    """Errors during simulation execution (engine, systems, entities)."""


class CommandError(SimulationError):
    """A command could not be built or applied (unknown type, bad payload)."""


class ConfigurationError(LifeSimError):
    """Invalid or missing configuration."""
