"""Running statistics about the vehicles that cross the intersection."""

from __future__ import annotations

import time as _time
from dataclasses import dataclass
from typing import Iterable, List, Optional

from smartroad.vehicles import Vehicle

TITLE = "================ STATISTICS ================"
QUIT_MESSAGE = "Press Esc again to Quit"


@dataclass
class Statistics:
    """Counters and extremes gathered while the simulation runs."""

    number_of_vehicles: int = 0
    max_velocity: int = 0
    min_velocity: float = 0.0
    max_time: float = 0.0
    min_time: float = 0.0
    close_calls: int = 0
    show_statistics: bool = False

    def toggle(self) -> bool:
        """Flip the statistics screen on or off and return the new state."""
        self.show_statistics = not self.show_statistics
        return self.show_statistics

    def increment(self, vehicles: Iterable[Vehicle]) -> None:
        """Count the vehicles that have passed the intersection."""
        self.number_of_vehicles = sum(1 for v in vehicles if v.passed_inter)

    def record_max_velocity(self, vehicles: Iterable[Vehicle]) -> None:
        for vehicle in vehicles:
            if self.max_velocity < vehicle.velocity:
                self.max_velocity = vehicle.velocity

    def record_min_velocity(self, vehicles: Iterable[Vehicle]) -> None:
        for vehicle in vehicles:
            if self.min_velocity > float(vehicle.velocity):
                self.min_velocity = float(vehicle.velocity)

    def record_times(self, vehicles: Iterable[Vehicle], now: Optional[float] = None) -> None:
        """Record crossing times for vehicles that passed and are not yet counted."""
        if now is None:
            now = _time.monotonic()
        for vehicle in vehicles:
            if vehicle.passed_inter and not vehicle.time_recorded:
                duration = now - vehicle.created
                self.update_max_time(duration)
                self.update_min_time(duration)
                vehicle.time_recorded = True

    def update_max_time(self, time: float) -> None:
        if time > self.max_time:
            self.max_time = time

    def update_min_time(self, time: float) -> None:
        if self.min_time == 0 or time < self.min_time:
            self.min_time = time

    def lines(self) -> List[str]:
        """The statistics as display lines, without title and quit message."""
        return [
            "Max number of vehicles that passed the intersection: "
            f"{self.number_of_vehicles}",
            f"Max velocity of all vehicles: {self.max_velocity} m/s",
            f"Min velocity of all vehicles: {self.min_velocity:.1f} m/s",
            "Max time that the vehicles took to pass the intersection: "
            f"{self.max_time:.2f} seconds",
            "Min time that the vehicles took to pass the intersection: "
            f"{self.min_time:.2f} seconds",
            f"Close calls: {self.close_calls}",
            "Collisions: 0",
        ]