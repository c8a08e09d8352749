# smartroad

A small simulation of a four-way crossing with no traffic lights. Vehicles
drive in from every side of a 700 × 700 window in one of three lanes. The lane
sets where a vehicle goes: it turns right, goes straight on, or turns left.
Each vehicle speeds up, slows down or waits depending on the crossing traffic.
The program keeps statistics on the vehicles that get through.

## Installation

```
pip install .
```

The window is drawn with pygame.

## Running

```
smartroad
```

Options:

- `--assets DIR`: directory that holds `intersection.png` (the road,
  stretched over the whole window) and `vehicles.png` (the car image).
  The default is `assets` in the current directory. If either image cannot
  be loaded, the command prints an error and exits with status 1.
- `--font FILE`: TrueType font for the statistics screen. Without it,
  pygame's default font is used.

| Key   | Action                                                |
|-------|-------------------------------------------------------|
| Up    | Send a vehicle in from the south, heading north       |
| Down  | Send a vehicle in from the north, heading south       |
| Left  | Send a vehicle in from the east, heading west         |
| Right | Send a vehicle in from the west, heading east         |
| R     | Try to send one to three vehicles in random directions |
| Esc   | Show the statistics; press again to quit              |

Each key has a cooldown of 1.5 seconds; all vehicles sent with R share the
cooldown of that key. A new vehicle is also refused if it would start less
than 80 pixels behind another vehicle going the same way in the same lane.
While a vehicle is inside the central crossing area, new vehicles are always
put in the right-turn lane.

## Statistics

The statistics screen shows:

- how many of the vehicles currently on the map have passed the intersection
- the highest velocity seen, and a lowest velocity
- the longest and shortest time a vehicle took from entering the map to
  passing the intersection

The screen also has lines for close calls and collisions. Both stay at 0,
because the simulation does not detect or count them.

## Using the model directly

The simulation logic in `smartroad.vehicles` and `smartroad.statistics` does
not depend on the display:

```python
import random
import time

from smartroad.vehicles import Direction, new_vehicle
from smartroad.statistics import Statistics

rng = random.Random(1)
now = time.monotonic()
car = new_vehicle(Direction.NORTH, [], rng, now)
snapshots = [car.snapshot()]
car.update(snapshots)

stats = Statistics()
stats.record_max_velocity([car])
print(stats.lines())
```

`smartroad.app.Simulation` combines these pieces with the keyboard handling.
Its `handle_key` method takes a `smartroad.app.Key` and its `step` method moves
every vehicle by one frame and updates the statistics. Both run the same logic
as the window, but draw nothing. Drawing is done by the functions in
`smartroad.scene`.

## Tests

```
pip install .[test]
pytest
```