"""Tests for organism steering, physics, metabolism and reproduction."""

import math
import random

import pytest

from lifesim.entities import Food, Obstacle, Organism, Species
from lifesim.genetics import TRAIT_SPECS_BY_NAME

from conftest import make_dna

WIDTH, HEIGHT = 1280, 720


def still_organism(species=Species.HERBIVORE, x=400.0, y=300.0, energy=None, **dna_overrides):
    organism = Organism(x, y, species, make_dna(**dna_overrides), rng=random.Random(0), energy=energy)
    organism.vel.update(0.0, 0.0)
    return organism


class TestDerivedState:
    def test_energy_initialised_from_size(self):
        organism = still_organism(size=1.5)
        assert organism.max_energy == pytest.approx(140.0)
        assert organism.energy == pytest.approx(112.0)

    def test_initial_velocity_scaled_by_speed(self):
        rng = random.Random(3)
        for _ in range(20):
            organism = Organism(0, 0, Species.HERBIVORE, make_dna(speed=0.5), rng=rng)
            assert abs(organism.vel.x) <= 1.0
            assert abs(organism.vel.y) <= 1.0

    def test_radius_at_full_energy(self):
        organism = still_organism(size=1.0)
        organism.energy = organism.max_energy
        assert organism.radius == pytest.approx(8.0)

    def test_radius_never_below_minimum(self):
        organism = still_organism()
        organism.energy = -5
        assert organism.radius == 3.0

    def test_founders_get_random_dna(self):
        organism = Organism(10, 10, Species.CARNIVORE, rng=random.Random(1))
        assert organism.dna.in_bounds()
        assert organism.generation == 0


class TestEligibility:
    @pytest.mark.parametrize("age,expected", [(200, False), (201, True)])
    def test_maturity(self, age, expected):
        organism = still_organism(energy=100)
        organism.age = age
        assert organism.can_reproduce() is expected

    def test_needs_energy_above_threshold(self):
        organism = still_organism(energy=80, reproduction_threshold=80)
        organism.age = 500
        assert not organism.can_reproduce()

    def test_cooldown_blocks(self):
        organism = still_organism(energy=100)
        organism.age = 500
        organism.reproduction_cooldown = 1
        assert not organism.can_reproduce()

    def test_death_conditions(self):
        organism = still_organism(lifespan=1000)
        assert not organism.is_dead()
        organism.energy = 0
        assert organism.is_dead()
        organism.energy = 50
        organism.age = 1001
        assert organism.is_dead()


class TestPhysics:
    def test_metabolism_at_rest(self):
        organism = still_organism(efficiency=2.0)
        before = organism.energy
        organism.update(WIDTH, HEIGHT, [])
        assert organism.energy == pytest.approx(before - 0.05)
        assert organism.age == 1

    def test_cost_uses_speed_before_clamp(self):
        organism = still_organism(speed=1.0)
        organism.vel.update(100.0, 0.0)
        before = organism.energy
        organism.update(WIDTH, HEIGHT, [])
        # damped speed is 99, clamped afterwards to 3
        assert organism.energy == pytest.approx(before - (0.1 + 99 * 0.1))
        assert organism.vel.length() == pytest.approx(3.0)

    def test_bounces_off_right_wall(self):
        organism = still_organism(x=WIDTH - 9)
        organism.vel.update(5.0, 0.0)
        organism.update(WIDTH, HEIGHT, [])
        assert organism.vel.x < 0
        assert organism.x <= WIDTH - organism.radius

    def test_bounces_off_obstacle(self):
        obstacle = Obstacle(x=410, y=250, width=50, height=100)
        organism = still_organism(x=400, y=300)
        organism.vel.update(4.0, 0.0)
        organism.update(WIDTH, HEIGHT, [obstacle])
        assert organism.vel.x == pytest.approx(-4.0 * 0.99)
        assert organism.vel.y == 0
        assert organism.y == pytest.approx(300.0)

    def test_cooldown_counts_down(self):
        organism = still_organism()
        organism.reproduction_cooldown = 2
        organism.update(WIDTH, HEIGHT, [])
        organism.update(WIDTH, HEIGHT, [])
        organism.update(WIDTH, HEIGHT, [])
        assert organism.reproduction_cooldown == 0

    def test_trail_is_bounded(self):
        organism = still_organism()
        organism.vel.update(1.0, 1.0)
        for _ in range(50):
            organism.update(WIDTH, HEIGHT, [])
        assert 0 < len(organism.trail) <= 20
        assert all(0 < point.alpha <= 1 for point in organism.trail)


class TestSteering:
    def test_hungry_herbivore_targets_nearest_food(self, seeded_rng):
        organism = still_organism(energy=10)
        near = Food(420, 300, energy=30)
        far = Food(600, 300, energy=30)
        organism.update_ai([organism], [far, near], seeded_rng)
        assert organism.target.as_tuple() == (420, 300)
        assert organism.vel.x > 0

    def test_sated_herbivore_wanders(self, seeded_rng):
        organism = still_organism()
        organism.energy = organism.max_energy
        organism.update_ai([organism], [Food(420, 300, energy=30)], seeded_rng)
        assert organism.target is None
        assert abs(organism.vel.x) <= 0.15 and abs(organism.vel.y) <= 0.15

    def test_carnivore_hunts_herbivores_not_carnivores(self, seeded_rng):
        hunter = still_organism(Species.CARNIVORE, energy=10)
        rival = still_organism(Species.CARNIVORE, x=405, y=300)
        prey = still_organism(Species.HERBIVORE, x=500, y=300)
        hunter.update_ai([hunter, rival, prey], [], seeded_rng)
        assert hunter.target.as_tuple() == (500, 300)

    def test_carnivore_ignores_food(self, seeded_rng):
        hunter = still_organism(Species.CARNIVORE, energy=10)
        hunter.update_ai([hunter], [Food(410, 300, energy=30)], seeded_rng)
        assert hunter.target is None

    def test_target_cleared_when_reached(self):
        organism = still_organism()
        organism.target = organism.pos.copy()
        organism.move_towards(organism.target.x + 3, organism.target.y)
        assert organism.target is None

    def test_flocking_pulls_toward_neighbours(self):
        organism = still_organism(socialness=1.0)
        neighbour = still_organism(x=460, y=300)
        organism.apply_flocking([organism, neighbour])
        assert organism.vel.x > 0

    def test_separation_pushes_apart(self):
        organism = still_organism(socialness=1.0)
        neighbour = still_organism(x=410, y=300)
        organism.apply_flocking([organism, neighbour])
        # cohesion +0.02, separation -0.05
        assert organism.vel.x < 0

    def test_flocking_ignores_other_species(self):
        organism = still_organism(socialness=1.0)
        other = still_organism(Species.CARNIVORE, x=460, y=300)
        organism.apply_flocking([organism, other])
        assert organism.vel.x == 0


class TestSpeciesThresholds:
    def test_omnivore_targets_above_half_aggression(self):
        assert Species.OMNIVORE.hunts(0.55)
        assert not Species.OMNIVORE.hunts(0.5)

    def test_omnivore_attacks_only_above_point_six(self):
        assert not Species.OMNIVORE.attacks(0.55)
        assert Species.OMNIVORE.attacks(0.65)

    def test_herbivore_never_hunts(self):
        assert not Species.HERBIVORE.hunts(1.0)
        assert not Species.HERBIVORE.attacks(1.0)


class TestReproduce:
    def test_asexual_child(self, seeded_rng):
        parent = still_organism(energy=100, reproduction_threshold=80)
        child = parent.reproduce(None, seeded_rng)

        assert parent.energy == pytest.approx(52.0)
        assert parent.reproduction_cooldown == 300
        assert child.species is Species.HERBIVORE
        assert child.generation == 1
        assert child.distance_to(parent.x, parent.y) == pytest.approx(parent.radius + 10)
        for name, spec in TRAIT_SPECS_BY_NAME.items():
            assert abs(getattr(child.dna, name) - getattr(parent.dna, name)) <= spec.mutation_width / 2 + 1e-9

    def test_sexual_child_takes_higher_generation(self, seeded_rng):
        parent = still_organism(energy=100)
        partner = still_organism(energy=100, x=410)
        partner.generation = 4
        child = parent.reproduce(partner, seeded_rng)
        assert child.generation == 5
        assert partner.reproduction_cooldown == 0

    def test_child_position_uses_radius_after_cost(self, seeded_rng):
        parent = still_organism(energy=120, reproduction_threshold=120, size=1.0)
        radius_before = parent.radius
        child = parent.reproduce(None, seeded_rng)
        distance = child.distance_to(parent.x, parent.y)
        assert distance < radius_before + 10
        assert distance == pytest.approx(parent.radius + 10)
        assert math.isfinite(distance)
