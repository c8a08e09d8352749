import random

import pytest

from smartroad.app import Key, Simulation
from smartroad.vehicles import Direction, Turn, Vehicle


def make_sim(seed=1):
    return Simulation(rng=random.Random(seed))


def test_spawn_up_adds_northbound_vehicle_at_bottom_edge():
    sim = make_sim()
    added = sim.handle_key(Key.UP, now=0.0)
    assert len(added) == 1
    assert sim.vehicles == added
    assert added[0].direction is Direction.NORTH
    assert added[0].y == 700


@pytest.mark.parametrize(
    "key, direction",
    [
        (Key.UP, Direction.NORTH),
        (Key.DOWN, Direction.SOUTH),
        (Key.LEFT, Direction.WEST),
        (Key.RIGHT, Direction.EAST),
    ],
)
def test_arrow_keys_map_to_directions(key, direction):
    sim = make_sim()
    added = sim.handle_key(key, now=0.0)
    assert [v.direction for v in added] == [direction]


def test_spawn_cooldown_blocks_same_key():
    sim = make_sim()
    assert sim.spawn(Direction.NORTH, Key.UP, now=0.0) is not None
    assert sim.spawn(Direction.NORTH, Key.UP, now=1.0) is None
    assert len(sim.vehicles) == 1
    assert sim.spawn(Direction.NORTH, Key.UP, now=2.0) is not None
    assert len(sim.vehicles) == 2


def test_different_keys_have_independent_cooldowns():
    sim = make_sim()
    sim.handle_key(Key.UP, now=0.0)
    sim.handle_key(Key.DOWN, now=0.0)
    assert {v.direction for v in sim.vehicles} == {Direction.NORTH, Direction.SOUTH}


def test_spawn_random_shares_one_cooldown():
    for seed in range(10):
        sim = make_sim(seed)
        added = sim.spawn_random(now=0.0)
        assert len(added) == 1
        assert sim.vehicles == added


def test_random_key_spawns_through_spawn_random():
    sim = make_sim()
    added = sim.handle_key(Key.RANDOM, now=0.0)
    assert len(added) == 1
    assert sim.last_spawn == {Key.RANDOM: 0.0}


def test_escape_toggles_statistics_then_quits():
    sim = make_sim()
    assert sim.handle_key(Key.ESCAPE, now=0.0) == []
    assert sim.statistics.show_statistics is True
    assert sim.should_quit is False
    sim.handle_key(Key.ESCAPE, now=0.1)
    assert sim.should_quit is True


def test_step_removes_vehicles_outside_the_map():
    sim = make_sim()
    sim.vehicles.append(Vehicle(x=-5, y=300, direction=Direction.WEST, turn=Turn.FORWARD))
    sim.step(now=0.0)
    assert sim.vehicles == []


def test_step_moves_vehicle_and_records_velocity():
    sim = make_sim()
    car = Vehicle(x=425, y=700, direction=Direction.NORTH, turn=Turn.RIGHT)
    sim.vehicles.append(car)
    sim.step(now=0.0)
    assert car.y == 695
    assert sim.statistics.max_velocity == car.velocity == 5


def test_step_records_crossing_time():
    sim = make_sim()
    car = Vehicle(x=390, y=100, direction=Direction.NORTH, turn=Turn.FORWARD, created=0.0)
    sim.vehicles.append(car)
    sim.step(now=3.0)
    assert car.passed_inter is True
    assert car.time_recorded is True
    assert sim.statistics.number_of_vehicles == 1
    assert sim.statistics.max_time == pytest.approx(3.0)
    assert sim.statistics.min_time == pytest.approx(3.0)


def test_spawned_vehicles_stay_in_map_for_a_few_steps():
    sim = make_sim(7)
    sim.handle_key(Key.UP, now=0.0)
    sim.handle_key(Key.LEFT, now=0.0)
    for _ in range(5):
        sim.step(now=0.0)
    assert len(sim.vehicles) == 2
    assert all(0 <= v.x <= 700 and 0 <= v.y <= 700 for v in sim.vehicles)