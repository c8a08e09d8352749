"""Vehicles crossing the intersection: spawning, spacing, turning and movement."""

from __future__ import annotations

import random
import time as _time
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, Iterable, MutableMapping, NamedTuple, Optional, Sequence

SPAWN_COOLDOWN = 1.5
SAFETY_DISTANCE = 60
SPAWN_DISTANCE = 80
WORLD_SIZE = 700


class Direction(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


class Turn(Enum):
    LEFT = "left"
    RIGHT = "right"
    FORWARD = "forward"


class VehiclePriority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class VehicleSnapshot(NamedTuple):
    """Frozen view of a vehicle taken before a simulation step."""

    x: int
    y: int
    direction: Direction
    turn: Turn
    passed: bool


_ANGLES = {
    Direction.NORTH: 0.0,
    Direction.SOUTH: 180.0,
    Direction.EAST: 90.0,
    Direction.WEST: 270.0,
}

_SPAWN_POINTS = {
    Direction.NORTH: {1: (425, 700), 2: (350, 700), 3: (390, 700)},
    Direction.SOUTH: {1: (230, 0), 2: (310, 0), 3: (270, 0)},
    Direction.EAST: {1: (0, 425), 2: (0, 350), 3: (0, 390)},
    Direction.WEST: {1: (700, 230), 2: (700, 310), 3: (700, 270)},
}

_LANE_TURNS = {1: Turn.RIGHT, 2: Turn.LEFT, 3: Turn.FORWARD}

_TURN_RESULT = {
    (Direction.NORTH, Turn.LEFT): Direction.WEST,
    (Direction.SOUTH, Turn.RIGHT): Direction.WEST,
    (Direction.NORTH, Turn.RIGHT): Direction.EAST,
    (Direction.SOUTH, Turn.LEFT): Direction.EAST,
    (Direction.EAST, Turn.LEFT): Direction.NORTH,
    (Direction.WEST, Turn.RIGHT): Direction.NORTH,
    (Direction.EAST, Turn.RIGHT): Direction.SOUTH,
    (Direction.WEST, Turn.LEFT): Direction.SOUTH,
}

# (own direction, direction of the vehicle that has priority over it)
_YIELDS_TO = {
    (Direction.NORTH, Direction.WEST),
    (Direction.WEST, Direction.SOUTH),
    (Direction.SOUTH, Direction.EAST),
    (Direction.EAST, Direction.NORTH),
}


def _outside(x: int, y: int) -> bool:
    return x < 0 or x > WORLD_SIZE or y < 0 or y > WORLD_SIZE


def _is_too_close(
    direction: Direction, x: int, y: int, other_x: int, other_y: int, limit: int
) -> bool:
    if direction is Direction.NORTH:
        return x == other_x and y > other_y and y - other_y < limit
    if direction is Direction.SOUTH:
        return x == other_x and y < other_y and other_y - y < limit
    if direction is Direction.EAST:
        return y == other_y and x < other_x and other_x - x < limit
    return y == other_y and x > other_x and x - other_x < limit


@dataclass
class Vehicle:
    """A car driving through the intersection."""

    x: int
    y: int
    direction: Direction
    turn: Turn
    angle: float = 0.0
    width: int = 50
    height: int = 50
    time: int = 140
    velocity: int = 5
    distance: int = 700
    passed: bool = False
    created: float = 0.0
    passed_inter: bool = False
    time_recorded: bool = False

    def snapshot(self) -> VehicleSnapshot:
        return VehicleSnapshot(self.x, self.y, self.direction, self.turn, self.passed)

    def is_out(self) -> bool:
        return _outside(self.x, self.y)

    def can_add_vehicle(
        self,
        last_spawn: MutableMapping[Hashable, float],
        key: Hashable,
        vehicles: Iterable["Vehicle"],
        now: Optional[float] = None,
    ) -> bool:
        """Check the spawn cooldown for ``key`` and the spacing to other cars.

        On success the spawn time for ``key`` is recorded.
        """
        if now is None:
            now = _time.monotonic()
        last = last_spawn.get(key)
        if last is not None and now - last < SPAWN_COOLDOWN:
            return False
        if self.check_safety_distance_car(vehicles):
            return False
        last_spawn[key] = now
        return True

    def priority(self, other_direction: Direction, other_turn: Turn) -> VehiclePriority:
        if (self.direction, other_direction) in _YIELDS_TO and other_turn in (
            Turn.FORWARD,
            Turn.LEFT,
        ):
            return VehiclePriority.LOW
        return VehiclePriority.HIGH

    def is_at_intersection_start(self) -> bool:
        if self.direction is Direction.NORTH:
            return 170 < self.y <= 480
        if self.direction is Direction.SOUTH:
            return 185 <= self.y < 440
        if self.direction is Direction.EAST:
            return 175 <= self.x < 440
        return 170 < self.x <= 480

    def has_passed_intersection(self) -> bool:
        if self.direction is Direction.NORTH:
            return self.y <= 230
        if self.direction is Direction.SOUTH:
            return self.y >= 470
        if self.direction is Direction.EAST:
            return self.x >= 470
        return self.x <= 230

    def check_safety_distance(self, snapshots: Iterable[VehicleSnapshot]) -> bool:
        """True when a vehicle ahead in the same direction is too close."""
        return any(
            s.direction is self.direction
            and _is_too_close(self.direction, self.x, self.y, s.x, s.y, SAFETY_DISTANCE)
            for s in snapshots
        )

    def check_safety_distance_car(self, vehicles: Iterable["Vehicle"]) -> bool:
        """True when a vehicle ahead in the same direction blocks spawning."""
        return any(
            v.direction is self.direction
            and _is_too_close(self.direction, self.x, self.y, v.x, v.y, SPAWN_DISTANCE)
            for v in vehicles
        )

    def collision(self, snapshots: Iterable[VehicleSnapshot]):
        """Look for crossing traffic that conflicts with this vehicle.

        Returns ``(collides, (own_direction, (other_direction, x, y)), distance)``
        describing the last conflicting candidate examined.
        """
        other = (self.direction, self.x, self.y)
        any_collision = False
        distance = (0, 0)
        sx, sy = self.x, self.y

        for vx, vy, dir_, turn, _ in snapshots:
            relevant = turn is Turn.FORWARD or (
                turn is Turn.LEFT and self.turn is Turn.LEFT
            )
            if not relevant:
                continue
            if self.direction is Direction.NORTH:
                if dir_ is Direction.EAST:
                    other = (Direction.EAST, vx, vy)
                    distance = (abs(sy - vy), abs(sx - vx))
                    if sx >= vx - 70 and abs(sy - vy) >= abs(sx - vx) and vy <= sy + 70:
                        any_collision = True
                elif dir_ is Direction.WEST:
                    other = (Direction.WEST, vx, vy)
                    distance = (abs(sy - vy), abs(vx - sx))
                    if sx <= vx + 140 and abs(sy - vy) >= abs(vx - sx) and vy <= sy + 140:
                        any_collision = True
            elif self.direction is Direction.SOUTH:
                if dir_ is Direction.EAST:
                    other = (Direction.EAST, vx, vy)
                    distance = (abs(sy - vy), abs(sx - vx))
                    if sy <= vy and abs(sy - vy) >= abs(sx - vx) and vx - 70 <= sx:
                        any_collision = True
                elif dir_ is Direction.WEST:
                    other = (Direction.WEST, vx, vy)
                    distance = (abs(sy - vy), abs(vx - sx))
                    if sy <= vy and abs(sy - vy) >= abs(vx - sx) and vx + 70 >= sx:
                        any_collision = True
            elif self.direction is Direction.EAST:
                if dir_ is Direction.NORTH:
                    other = (Direction.NORTH, vx, vy)
                    distance = (abs(vx - sx), abs(vy - sy))
                    if sx <= vx and abs(vx - sx) >= abs(vy - sy) and vy + 50 >= sy:
                        any_collision = True
                elif dir_ is Direction.SOUTH:
                    other = (Direction.SOUTH, vx, vy)
                    distance = (abs(vx - sx), abs(vy - sy))
                    if sx <= vx and abs(vx - sx) >= abs(vy - sy) and vy - 70 <= sy:
                        any_collision = True
            else:
                if dir_ is Direction.NORTH:
                    other = (Direction.NORTH, vx, vy)
                    distance = (abs(sx - vx), abs(vy - sy))
                    if sx >= vx and abs(sx - vx) >= abs(vy - sy) and vy + 70 >= sy:
                        any_collision = True
                elif dir_ is Direction.SOUTH:
                    other = (Direction.SOUTH, vx, vy)
                    distance = (abs(sx - vx), abs(vy - sy))
                    if sx >= vx and abs(sx - vx) >= abs(vy - sy) and vy - 70 <= sy:
                        any_collision = True

        return any_collision, (self.direction, other), distance

    def _choose_timing(self, snapshots: Sequence[VehicleSnapshot]) -> None:
        if self.collision(snapshots)[0]:
            if self.turn is Turn.LEFT:
                self.time = 1000
            elif self.turn is Turn.RIGHT:
                self.time = 140
            elif self.direction in (Direction.EAST, Direction.WEST):
                if any(
                    s.direction in (Direction.SOUTH, Direction.NORTH) and not s.passed
                    for s in snapshots
                ):
                    self.time = 1000
            else:
                self.time = 35
        elif self.turn is Turn.LEFT:
            self.time = 1000
        elif self.turn is Turn.RIGHT:
            self.time = 140
        else:
            self.time = 15

    def _resume_from_stop(self, snapshots: Sequence[VehicleSnapshot]) -> None:
        is_left = self.turn is Turn.LEFT

        def waiting(directions) -> bool:
            return any(
                s.direction in directions and not s.passed and s.turn is not Turn.FORWARD
                for s in snapshots
            )

        if self.direction is Direction.NORTH:
            self.time = 1000 if waiting((Direction.SOUTH,)) else 15
            if 290 <= self.y <= 310 and is_left:
                self.execute_turn()
        elif self.direction is Direction.SOUTH:
            self.time = 35
            if 340 <= self.y <= 350 and is_left:
                self.execute_turn()
        elif self.direction is Direction.EAST:
            crossing = (Direction.WEST, Direction.SOUTH, Direction.NORTH)
            self.time = 1000 if waiting(crossing) else 35
            if 340 <= self.x <= 370 and is_left:
                self.execute_turn()
        else:
            crossing = (Direction.NORTH, Direction.SOUTH)
            self.time = 1000 if waiting(crossing) else 35
            if 290 <= self.x <= 310 and is_left:
                self.execute_turn()

    def _turn_right_if_due(self) -> None:
        self.time = 140
        turn_points = {
            Direction.NORTH: ("y", 425),
            Direction.SOUTH: ("y", 230),
            Direction.EAST: ("x", 230),
            Direction.WEST: ("x", 425),
        }
        axis, point = turn_points[self.direction]
        if getattr(self, axis) == point:
            self.execute_turn()

    def update(self, snapshots: Sequence[VehicleSnapshot]) -> None:
        """Advance the vehicle by one simulation step."""
        if self.is_at_intersection_start():
            self._choose_timing(snapshots)
            road_clear = all(
                s.turn is not Turn.FORWARD or _outside(s.x, s.y) for s in snapshots
            )
            if self.velocity == 0 and road_clear:
                self._resume_from_stop(snapshots)
            elif self.turn is Turn.RIGHT:
                self._turn_right_if_due()

        self.velocity = self.distance // self.time
        if self.check_safety_distance(snapshots):
            self.velocity = 0

        if self.direction is Direction.NORTH:
            self.y -= self.velocity
        elif self.direction is Direction.SOUTH:
            self.y += self.velocity
        elif self.direction is Direction.EAST:
            self.x += self.velocity
        else:
            self.x -= self.velocity

        if self.has_passed_intersection():
            self.passed_inter = True

    def execute_turn(self) -> None:
        """Take the planned turn, after which the vehicle drives straight on."""
        if self.turn is not Turn.FORWARD:
            self.direction = _TURN_RESULT.get((self.direction, self.turn), self.direction)
            self.angle = _ANGLES[self.direction]
            self.turn = Turn.FORWARD
        self.passed = True


def is_in_bounds(vehicles: Iterable[Vehicle]) -> bool:
    """True when any vehicle is inside the central crossing area."""
    return any(230 < v.x < 425 and 230 < v.y < 425 for v in vehicles)


def random_direction(rng: Optional[random.Random] = None) -> Direction:
    rng = rng or random.Random()
    return (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)[
        rng.randrange(4)
    ]


def new_vehicle(
    direction: Direction,
    existing: Iterable[Vehicle],
    rng: Optional[random.Random] = None,
    now: Optional[float] = None,
) -> Vehicle:
    """Create a vehicle at the edge of the map heading in ``direction``.

    The lane, and with it the planned turn, is random; while the crossing is
    occupied only the right-turn lane is used.
    """
    rng = rng or random.Random()
    lane = rng.randint(1, 3)
    if is_in_bounds(existing):
        lane = 1
    x, y = _SPAWN_POINTS[direction][lane]
    return Vehicle(
        x=x,
        y=y,
        direction=direction,
        turn=_LANE_TURNS[lane],
        angle=_ANGLES[direction],
        created=_time.monotonic() if now is None else now,
    )