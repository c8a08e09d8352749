"""The interactive intersection simulation and its command-line entry point."""

from __future__ import annotations

import argparse
import random
import sys
import time as _time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Hashable, List, Optional, Sequence

from smartroad.statistics import Statistics
from smartroad.vehicles import (
    WORLD_SIZE,
    Direction,
    Vehicle,
    new_vehicle,
    random_direction,
)

FRAME_RATE = 60


class Key(Enum):
    """Keys the simulation reacts to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    RANDOM = "random"
    ESCAPE = "escape"


_KEY_DIRECTIONS = {
    Key.UP: Direction.NORTH,
    Key.DOWN: Direction.SOUTH,
    Key.LEFT: Direction.WEST,
    Key.RIGHT: Direction.EAST,
}


@dataclass
class Simulation:
    """State of the running intersection: vehicles, spawn timers and statistics."""

    vehicles: List[Vehicle] = field(default_factory=list)
    last_spawn: Dict[Hashable, float] = field(default_factory=dict)
    statistics: Statistics = field(default_factory=Statistics)
    rng: random.Random = field(default_factory=random.Random)
    should_quit: bool = False

    def spawn(
        self, direction: Direction, key: Hashable, now: Optional[float] = None
    ) -> Optional[Vehicle]:
        """Try to add a vehicle heading in ``direction``; return it if it was added."""
        if now is None:
            now = _time.monotonic()
        vehicle = new_vehicle(direction, self.vehicles, self.rng, now)
        if vehicle.can_add_vehicle(self.last_spawn, key, self.vehicles, now):
            self.vehicles.append(vehicle)
            return vehicle
        return None

    def spawn_random(self, now: Optional[float] = None) -> List[Vehicle]:
        """Try to add one to three vehicles in random directions."""
        if now is None:
            now = _time.monotonic()
        added = []
        for _ in range(self.rng.randint(1, 3)):
            vehicle = self.spawn(random_direction(self.rng), Key.RANDOM, now)
            if vehicle is not None:
                added.append(vehicle)
        return added

    def handle_key(self, key: Key, now: Optional[float] = None) -> List[Vehicle]:
        """React to a key press and return the vehicles it added."""
        if now is None:
            now = _time.monotonic()
        if key is Key.ESCAPE:
            if self.statistics.show_statistics:
                self.should_quit = True
            else:
                self.statistics.toggle()
            return []
        if key is Key.RANDOM:
            return self.spawn_random(now)
        vehicle = self.spawn(_KEY_DIRECTIONS[key], key, now)
        return [vehicle] if vehicle is not None else []

    def step(self, now: Optional[float] = None) -> None:
        """Drop vehicles that left the map, move the rest and update statistics."""
        self.vehicles = [v for v in self.vehicles if not v.is_out()]
        snapshots = [v.snapshot() for v in self.vehicles]
        for vehicle in self.vehicles:
            vehicle.update(snapshots)
        self.statistics.record_max_velocity(self.vehicles)
        self.statistics.record_min_velocity(self.vehicles)
        self.statistics.increment(self.vehicles)
        self.statistics.record_times(self.vehicles, now)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="smartroad", description="Simulate traffic through a smart intersection."
    )
    parser.add_argument(
        "--assets",
        type=Path,
        default=Path("assets"),
        help="directory holding intersection.png and vehicles.png",
    )
    parser.add_argument(
        "--font", default=None, help="TrueType font for the statistics screen"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the simulation window and run until the user quits."""
    args = _parse_args(argv)

    import pygame

    from smartroad.scene import draw_road, draw_statistics, draw_vehicle, load_image

    key_map = {
        pygame.K_UP: Key.UP,
        pygame.K_DOWN: Key.DOWN,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_r: Key.RANDOM,
        pygame.K_ESCAPE: Key.ESCAPE,
    }

    pygame.init()
    try:
        screen = pygame.display.set_mode((WORLD_SIZE, WORLD_SIZE))
        pygame.display.set_caption("smart road")
        try:
            background = load_image(args.assets / "intersection.png")
            car = load_image(args.assets / "vehicles.png")
        except (FileNotFoundError, pygame.error) as exc:
            print(f"smartroad: cannot load image: {exc}", file=sys.stderr)
            return 1
        font = pygame.font.Font(args.font, 20)
        small_font = pygame.font.Font(args.font, 16)

        simulation = Simulation()
        clock = pygame.time.Clock()
        while not simulation.should_quit:
            draw_road(screen, background)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    simulation.should_quit = True
                elif event.type == pygame.KEYDOWN:
                    key = key_map.get(event.key)
                    if key is not None:
                        simulation.handle_key(key)
            simulation.step()
            for vehicle in simulation.vehicles:
                draw_vehicle(screen, vehicle, car)
            if simulation.statistics.show_statistics:
                draw_statistics(screen, simulation.statistics, font, small_font)
            pygame.display.flip()
            clock.tick(FRAME_RATE)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())