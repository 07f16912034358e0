"""Configuration package for the life simulation.

Constants are grouped by concern (arena, organisms, food, ecosystem). The
dataclass aggregates in ``simulation_config`` bundle them into a single
object the engine accepts.
"""
