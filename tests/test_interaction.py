"""Tests for feeding, predation, reproduction and death within a tick."""

import random

import pytest

from lifesim.entities import Food, Obstacle, Organism, Species
from lifesim.systems.interaction import OLD_AGE, PREDATION, STARVATION

from conftest import make_dna


class FixedRandom(random.Random):
    """A Random whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def test_herbivore_eats_food_and_caps_energy(empty_engine, add_organism):
    herbivore = add_organism("herbivore", 400, 300, energy=80, size=0.5)
    empty_engine.food.append(Food(400, 300, energy=30))

    empty_engine.tick()

    assert herbivore.max_energy == pytest.approx(100.0)
    assert herbivore.energy == pytest.approx(100.0)
    assert empty_engine.food == []
    assert empty_engine.stats.food_count == 0
    assert empty_engine.last_results["Interaction"].details["food_eaten"] == 1


def test_herbivore_eats_every_touching_food(empty_engine, add_organism):
    add_organism("herbivore", 400, 300, energy=20)
    empty_engine.food.extend([Food(401, 300, energy=30), Food(399, 301, energy=30)])
    empty_engine.food.append(Food(900, 500, energy=30))

    empty_engine.tick()

    assert len(empty_engine.food) == 1
    assert empty_engine.food[0].x == 900


def test_carnivore_does_not_eat_food(empty_engine, add_organism):
    add_organism("carnivore", 400, 300, energy=80)
    empty_engine.food.append(Food(400, 300, energy=30))

    empty_engine.tick()

    assert len(empty_engine.food) == 1


def test_carnivore_kills_weaker_herbivore(empty_engine, add_organism):
    herbivore = add_organism("herbivore", 400, 300, energy=20, size=0.5)
    carnivore = add_organism("carnivore", 400, 300, energy=50, size=0.5)

    empty_engine.tick()

    assert herbivore not in empty_engine.organisms
    assert not herbivore.alive
    # The carnivore runs first: it pays its resting cost, then takes 70% of
    # the prey's untouched energy.
    assert carnivore.energy == pytest.approx(50 - 0.1 + 0.7 * 20)
    stats = empty_engine.stats
    assert stats.herbivore_count == 0
    assert stats.death_events == 1
    assert stats.predation_deaths == 1


def test_prey_killed_before_its_turn_is_never_processed(empty_engine, add_organism):
    herbivore = add_organism("herbivore", 400, 300, energy=20, size=0.5)
    add_organism("carnivore", 400, 300, energy=50, size=0.5)

    empty_engine.tick()

    # The carnivore was added last and runs first.
    assert herbivore.age == 0
    assert empty_engine.last_results["Interaction"].entities_affected == 1


def test_no_kill_when_predator_has_less_energy(empty_engine, add_organism):
    add_organism("herbivore", 400, 300, energy=50, size=0.5)
    add_organism("carnivore", 400, 300, energy=20, size=0.5)

    empty_engine.tick()

    assert empty_engine.stats.herbivore_count == 1
    assert empty_engine.stats.death_events == 0


def test_non_herbivore_prey_must_be_smaller(empty_engine, add_organism):
    add_organism("omnivore", 400, 300, energy=20, size=1.5)
    add_organism("carnivore", 400, 300, energy=50, size=0.5)

    empty_engine.tick()

    assert empty_engine.stats.omnivore_count == 1


def test_small_omnivore_is_valid_prey(empty_engine, add_organism):
    omnivore = add_organism("omnivore", 400, 300, energy=20, size=0.5)
    add_organism("carnivore", 400, 300, energy=140, size=1.5)

    empty_engine.tick()

    assert not omnivore.alive


@pytest.mark.parametrize("aggression,killed", [(0.55, False), (0.65, True)])
def test_omnivore_attack_threshold(empty_engine, add_organism, aggression, killed):
    herbivore = add_organism("herbivore", 400, 300, energy=20, size=0.5)
    add_organism("omnivore", 400, 300, energy=50, size=0.5, aggression=aggression)

    empty_engine.tick()

    assert herbivore.alive is not killed


@pytest.mark.parametrize("prey_x,killed", [(410.4, True), (410.7, False)])
def test_kill_reach_uses_prey_body_radius(empty_engine, add_organism, prey_x, killed):
    # Radii are about 7.30 and 3.27, so contact ends near 10.57.
    carnivore = add_organism("carnivore", 400, 300, energy=100)
    herbivore = add_organism("herbivore", prey_x, 300, energy=20)

    prey = empty_engine.interaction_system.resolve_predation(carnivore)

    assert (prey is herbivore) is killed
    assert herbivore.alive is not killed


def test_at_most_one_kill_per_predator_per_tick(empty_engine, add_organism):
    add_organism("herbivore", 400, 300, energy=10, size=0.5)
    add_organism("herbivore", 400, 300, energy=10, size=0.5)
    add_organism("carnivore", 400, 300, energy=90, size=1.5)

    empty_engine.tick()

    assert empty_engine.stats.herbivore_count == 1
    assert empty_engine.last_results["Interaction"].details["kills"] == 1


class TestReproduction:
    def test_mature_pair_reproduces(self, empty_engine, add_organism):
        first = add_organism("herbivore", 400, 300, energy=100, age=201)
        second = add_organism("herbivore", 420, 300, energy=100, age=201)

        empty_engine.tick()

        assert empty_engine.stats.reproduction_events >= 1
        child = empty_engine.organisms[2]
        assert child.species is Species.HERBIVORE
        assert child.generation == 1
        assert child.age == 0
        # The second organism runs first and takes the first as its mate.
        assert second.reproduction_cooldown == 300
        assert child.distance_to(second.x, second.y) == pytest.approx(second.radius + 10)
        assert first.reproduction_cooldown in (0, 300)

    def test_immature_pair_does_not_reproduce(self, empty_engine, add_organism):
        add_organism("herbivore", 400, 300, energy=100, age=199)
        add_organism("herbivore", 420, 300, energy=100, age=199)

        empty_engine.tick()

        assert empty_engine.stats.reproduction_events == 0
        assert len(empty_engine.organisms) == 2

    def test_mate_must_share_species(self, empty_engine, add_organism):
        herbivore = add_organism("herbivore", 400, 300, energy=100, age=201)
        omnivore = add_organism("omnivore", 420, 300, energy=100, age=201)

        assert empty_engine.interaction_system.find_mate(herbivore) is None
        assert empty_engine.interaction_system.find_mate(omnivore) is None

    def test_mate_must_be_close(self, empty_engine, add_organism):
        herbivore = add_organism("herbivore", 400, 300, energy=100, age=201)
        add_organism("herbivore", 460, 300, energy=100, age=201)

        assert empty_engine.interaction_system.find_mate(herbivore) is None

    def test_offspring_outside_arena_is_discarded(self, empty_engine, seeded_rng):
        child = Organism(-50, 300, Species.HERBIVORE, make_dna(), rng=seeded_rng)

        assert empty_engine.add_offspring(child) is False
        assert child not in empty_engine.organisms
        assert empty_engine.counters.reproduction_events == 0

    def test_buds_without_mate_on_low_draw(self, empty_engine, add_organism):
        parent = add_organism("herbivore", 400, 300, energy=100, age=201)
        empty_engine.rng = FixedRandom(0.05)

        child = empty_engine.interaction_system.resolve_reproduction(parent)

        assert child is not None
        assert child in empty_engine.organisms
        assert child.generation == 1
        assert parent.energy == pytest.approx(100 - 0.6 * 80)
        assert parent.reproduction_cooldown == 300
        assert empty_engine.counters.reproduction_events == 1

    @pytest.mark.parametrize("draw", [0.1, 0.5, 0.99])
    def test_no_bud_without_mate_on_high_draw(self, empty_engine, add_organism, draw):
        parent = add_organism("herbivore", 400, 300, energy=100, age=201)
        empty_engine.rng = FixedRandom(draw)

        assert empty_engine.interaction_system.resolve_reproduction(parent) is None

        assert empty_engine.organisms == [parent]
        assert parent.energy == 100
        assert parent.reproduction_cooldown == 0

    def test_cost_paid_when_offspring_lands_in_obstacle(self, empty_engine, add_organism):
        parent = add_organism("herbivore", 400, 300, energy=110, age=201, reproduction_threshold=80)
        # Every point on the spawn circle lies inside this box.
        empty_engine.obstacles.append(Obstacle(x=350, y=250, width=100, height=100))
        empty_engine.rng = FixedRandom(0.0)
        interaction = empty_engine.interaction_system

        assert interaction.resolve_reproduction(parent) is None

        assert parent.energy == pytest.approx(110 - 0.6 * 80)
        assert parent.reproduction_cooldown == 300
        assert interaction.get_debug_info()["last_tick"]["births_discarded"] == 1
        assert empty_engine.organisms == [parent]
        assert empty_engine.counters.reproduction_events == 0

    def test_newborns_wait_for_next_tick(self, empty_engine, add_organism):
        add_organism("herbivore", 400, 300, energy=100, age=201)
        add_organism("herbivore", 420, 300, energy=100, age=201)

        empty_engine.tick()
        newborns = [o for o in empty_engine.organisms if o.generation == 1]
        assert newborns and all(o.age == 0 for o in newborns)

        empty_engine.tick()
        assert all(o.age == 1 for o in newborns if o.alive)


class TestDeath:
    def test_starvation(self, empty_engine, add_organism):
        organism = add_organism("herbivore", 400, 300, energy=0.05)

        empty_engine.tick()

        assert not organism.alive
        assert empty_engine.stats.starvation_deaths == 1
        assert empty_engine.counters.deaths_by_cause == {STARVATION: 1}
        assert empty_engine.particles

    def test_old_age(self, empty_engine, add_organism):
        organism = add_organism("herbivore", 400, 300, age=1000, lifespan=1000)

        empty_engine.tick()

        assert not organism.alive
        assert empty_engine.stats.old_age_deaths == 1
        assert empty_engine.counters.deaths_by_cause == {OLD_AGE: 1}

    def test_survives_at_lifespan(self, empty_engine, add_organism):
        organism = add_organism("herbivore", 400, 300, age=999, lifespan=1000)

        empty_engine.tick()

        assert organism.alive
        assert organism.age == 1000

    def test_removal_is_counted_once(self, empty_engine, add_organism):
        organism = add_organism("herbivore", 400, 300)

        empty_engine.remove_organism(organism, PREDATION)
        empty_engine.remove_organism(organism, PREDATION)

        assert empty_engine.counters.death_events == 1
