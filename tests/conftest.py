"""Pytest configuration and fixtures for life simulation tests."""

import random

import pytest

from lifesim.config.simulation_config import ArenaConfig, FoodConfig, SimulationConfig
from lifesim.entities import Organism, Species
from lifesim.genetics import DNA
from lifesim.simulation import SimulationEngine

BASE_DNA = dict(
    speed=1.0,
    efficiency=1.0,
    aggression=0.5,
    size=1.0,
    reproduction_threshold=80.0,
    lifespan=3000.0,
    socialness=0.0,
)


def make_dna(**overrides) -> DNA:
    """DNA with neutral defaults; socialness 0 keeps flocking off."""
    return DNA(**{**BASE_DNA, **overrides})


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def quiet_config():
    """Open arena with no obstacles and no automatic food."""
    return SimulationConfig(
        arena=ArenaConfig(obstacles_enabled=False),
        food=FoodConfig(auto_spawn=False),
    )


@pytest.fixture
def empty_engine(quiet_config):
    """An engine that has not been set up: no organisms, food or obstacles."""
    return SimulationEngine(quiet_config, seed=42)


@pytest.fixture
def simulation_engine():
    """Setup a simulation engine for testing with deterministic seed."""
    engine = SimulationEngine(seed=42)
    engine.setup()
    return engine


@pytest.fixture
def add_organism(empty_engine):
    """Factory placing a still organism with chosen DNA into ``empty_engine``."""

    def _add(species, x, y, *, energy=None, age=0, **dna_overrides) -> Organism:
        organism = empty_engine.spawn_organism(Species(species), x, y, make_dna(**dna_overrides))
        if energy is not None:
            organism.energy = energy
        organism.age = age
        organism.vel.update(0.0, 0.0)
        return organism

    return _add
