# trafficsim

A small discrete-time traffic simulation. Cars and bicycles travel along
one-way roads joined by junctions, park until a start time, refuel at
junctions that have a fuel station and pick a random onward road whenever
they reach the end of one. An optional graphics client can send the network
and the vehicles to an external drawing server.

## Installation

```
pip install .
```

Install the test extra to run the tests:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package provides the `trafficsim` command:

```
trafficsim --help
trafficsim vehicles                 # two cars and a bicycle driving freely
trafficsim road                     # one urban road, one driving car, two parked vehicles
trafficsim network --seed 1         # four junctions, thirteen vehicles, ten hours
trafficsim deferred --seed 0        # how queued changes to a DeferredList apply
trafficsim run network.txt          # simulate a network read from a file
trafficsim run network.txt --until 5 --step 0.25 --graphics
```

`run` simulates from time 0 in steps of `--step` hours (default 0.1) until
`--until` (default 10), prints an `Error: ...` line for every line of the
file it could not read, and finally prints a table of all roads with the
vehicles on them. A missing file or a non-positive step ends the command
with exit status 1.

## Network files

A network file holds one record per line:

```
KREUZUNG <name> <fuel>
STRASSE <start> <end> <forward> <backward> <length> <limit> <no_overtaking>
PKW <name> <max_speed> <consumption> <tank_volume> <junction> <start_time>
FAHRRAD <name> <max_speed> <junction> <start_time>
```

- `KREUZUNG` creates a junction whose fuel station holds `<fuel>` litres.
- `STRASSE` creates a road from `<start>` to `<end>` named `<forward>` and
  the road back named `<backward>`. The limit is `1` (50 km/h), `2`
  (100 km/h) or `3` (motorway, no limit); `<no_overtaking>` is `0` or
  another integer for an overtaking ban.
- `PKW` and `FAHRRAD` park a car or a bicycle on the first road of
  `<junction>` until `<start_time>`; a car is refuelled there if the
  junction's station has fuel.

With graphics turned on, a `KREUZUNG` line is followed by its x/y
coordinates and a `STRASSE` line by the number of points and then the point
coordinates. Unknown commands, duplicate junction names, unknown junctions
and missing or malformed fields are recorded as errors and the line is
skipped.

## Library use

```python
import io

from trafficsim.simobject import CLOCK
from trafficsim.simulation import Simulation

network = io.StringIO(
    "KREUZUNG A 0\n"
    "KREUZUNG B 1000\n"
    "STRASSE A B AB BA 40 1 1\n"
    "PKW Mini 80 5.5 250 A 0.5\n"
    "FAHRRAD Bike 25 A 1\n"
)

sim = Simulation()
sim.load(network)
for junction in sim.junctions:
    print(junction.name, [road.name for road in junction.roads])
print(sim.errors)

CLOCK.reset()
while CLOCK.time < 3:
    CLOCK.advance(0.1)
    sim.simulate()
```

The building blocks can also be used on their own:

- `trafficsim.simobject`: `SimObject`, the base class with a unique id,
  and `CLOCK`, the shared `SimulationClock` (`advance`, `reset`, `time`).
- `trafficsim.vehicles`: `Vehicle`, `Car` (burns fuel, drives at most the
  road's limit, breaks down when the tank is empty, `refuel` fills it) and
  `Bicycle` (loses 10 % of its speed per 20 km, never below 12 km/h).
- `trafficsim.behaviour`: `Driving` and `Parking`, which decide how far a
  vehicle moves, and the events `StartDriving` and `EndOfRoad` they raise.
  On a road with an overtaking ban a vehicle stops 0.5 km behind the one
  ahead.
- `trafficsim.road`: `Road`, which `accept`s vehicles either driving (at the
  back) or parked until a start time (at the front), and hands them back
  with `release`; `vehicle_positions` lists the vehicles still running.
- `trafficsim.junction`: `Junction`; `Junction.connect` links two junctions
  with a pair of roads, `random_road` picks an onward road avoiding a
  U-turn where possible (using the junction's `rng`), and `refuel` fills up
  cars while the station has fuel.
- `trafficsim.speed_limit`: the `SpeedLimit` enumeration and
  `approximately_equal`.
- `trafficsim.deferred`: `DeferredList`, a list whose insertions and
  removals take effect only when `update` is called, so it can be changed
  safely while it is being iterated.
- `trafficsim.graphics`: `GraphicsClient`, which sends `#`-terminated text
  commands to the drawing server and raises `GraphicsError` for rejected
  requests. Pass `sender=` (any callable taking a string) to collect the
  messages instead of opening a connection.

## What it does not include

The drawing server itself is not part of this package. With graphics turned
on, `GraphicsClient` runs `java -jar SimuServer.jar <port>` from the current
directory (change this with `server_command`, or pass `None` to start
nothing) and connects to it over TCP; without such a server, `--graphics`
fails with a connection error. Simulations are not saved anywhere: the only
output is the printed tables and messages.