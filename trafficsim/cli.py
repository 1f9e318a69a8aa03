"""Command-line entry point with the demonstration scenarios."""

from __future__ import annotations

import argparse
import random
import sys
from collections.abc import Sequence
from typing import TextIO

from .deferred import DeferredList
from .graphics import GraphicsClient
from .junction import Junction
from .road import Road
from .simobject import CLOCK
from .simulation import Simulation
from .speed_limit import SpeedLimit
from .vehicles import Bicycle, Car, Vehicle


def _stream(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def run_vehicles_demo(out: TextIO | None = None) -> list[Vehicle]:
    """Drive two cars and a bicycle freely for ten hours, printing a table."""
    out = _stream(out)
    CLOCK.reset()
    fleet: list[Vehicle] = [
        Car("Mini", 180, 5.5, 40),
        Car("BMW", 220, 7.5, 60),
        Bicycle("Bike", 25),
    ]
    base = Vehicle("base_fz")

    print(Vehicle.header(), file=out)
    for vehicle in fleet:
        print(vehicle, file=out)
    print(base, file=out)

    audi = Car("Audi", 200, 6.5, 50)
    base.assign_from(audi)
    print(audi, file=out)
    print(base, file=out)

    while CLOCK.time < 10:
        CLOCK.advance(0.5)
        for vehicle in fleet:
            vehicle.simulate()
            print(vehicle, file=out)

    bike, bmw = fleet[2], fleet[1]
    print(f"Total distance of the bike less than the BMW's?  {int(bike < bmw)}", file=out)
    return fleet


def run_road_demo(out: TextIO | None = None) -> Road:
    """Run one urban road with a driving car and two parked vehicles."""
    out = _stream(out)
    CLOCK.reset()
    road = Road("Weg1", 100, SpeedLimit.URBAN)
    road.accept(Car("Mini", 180, 5.5, 40))
    road.accept(Car("BMW", 220, 7.5, 60), 3.0)
    road.accept(Bicycle("Bike", 25), 6.0)

    print(Road.header(), file=out)
    print(road, file=out)
    while CLOCK.time < 10:
        CLOCK.advance(0.3)
        road.simulate()
        print("---", file=out)
    return road


def run_network_demo(out: TextIO | None = None, seed: int | None = None) -> list[Junction]:
    """Run a network of four junctions with thirteen vehicles for ten hours."""
    out = _stream(out)
    CLOCK.reset()
    rng = random.Random(seed)
    kr1 = Junction("Kreuzung1", 0)
    kr2 = Junction("Kreuzung2", 1000)
    kr3 = Junction("Kreuzung3", 0)
    kr4 = Junction("Kreuzung4", 0)
    junctions = [kr1, kr2, kr3, kr4]
    for junction in junctions:
        junction.rng = rng

    Junction.connect("W12", "W21", 40, kr1, kr2, SpeedLimit.URBAN, True)
    Junction.connect("W23a", "W32a", 115, kr2, kr3, SpeedLimit.MOTORWAY, False)
    Junction.connect("W23b", "W32b", 40, kr2, kr3, SpeedLimit.URBAN, True)
    Junction.connect("W24", "W42", 55, kr2, kr4, SpeedLimit.URBAN, True)
    Junction.connect("W34", "W43", 85, kr3, kr4, SpeedLimit.MOTORWAY, True)
    Junction.connect("W44a", "W44b", 130, kr4, kr4, SpeedLimit.COUNTRY_ROAD, True)

    arrivals: list[tuple[Vehicle, float]] = [
        (Car("Mini", 80, 5.5, 250), 0.1),
        (Car("BMW", 220, 7.5, 60), 1),
        (Car("Dummerchen", 200, 5.5, 10), 2),
        (Car("Audi", 150, 6, 500), 3),
        (Car("VW", 180, 5.5, 250), 3.5),
        (Car("Mercedes", 220, 7.5, 60), 4),
        (Car("Opel", 200, 5.5, 100), 4.5),
        (Car("Ford", 150, 6, 500), 5),
        (Car("Toyota", 180, 5.5, 250), 6),
        (Bicycle("Bike", 25), 7),
        (Bicycle("Bike2", 28), 2),
        (Bicycle("Bike3", 30), 3),
        (Bicycle("Bike4", 20), 6),
    ]
    for vehicle, start_time in arrivals:
        kr1.accept(vehicle, start_time)

    while CLOCK.time < 10:
        CLOCK.advance(0.1)
        for junction in junctions:
            junction.simulate()

    print(Road.header(), file=out)
    for junction in junctions:
        for road in junction.roads:
            print(road, file=out)
    return junctions


def run_deferred_demo(out: TextIO | None = None, seed: int | None = 0) -> list[int]:
    """Show how queued changes to a deferred list take effect on update."""
    out = _stream(out)
    rng = random.Random(seed)
    numbers: DeferredList[int] = DeferredList()
    for _ in range(20):
        numbers.push_back(rng.randint(1, 10))
    numbers.update()

    def show(label: str) -> None:
        print(label, file=out)
        print(" ".join(str(value) for value in numbers), file=out)

    show("List:")
    for value in numbers:
        if value > 5:
            numbers.erase(value)
    show("List after scheduling erase:")
    numbers.update()
    show("List after update:")
    numbers.push_front(100)
    numbers.push_back(200)
    numbers.update()
    show("List after push_front and push_back:")
    return list(numbers)


def run_file(
    path: str,
    out: TextIO | None = None,
    with_graphics: bool = False,
    until: float = 10.0,
    step: float = 0.1,
) -> Simulation:
    """Load a network description from ``path`` and simulate it up to ``until``."""
    out = _stream(out)
    if step <= 0:
        raise ValueError("step must be positive")
    with open(path, encoding="utf-8") as stream:
        graphics = GraphicsClient() if with_graphics else None
        simulation = Simulation(graphics)
        simulation.load(stream, with_graphics)
    for message in simulation.errors:
        print(f"Error: {message}", file=out)

    CLOCK.reset()
    try:
        while CLOCK.time < until:
            CLOCK.advance(step)
            simulation.simulate()
            if graphics is not None:
                graphics.set_time(CLOCK.time)
    finally:
        if graphics is not None:
            graphics.close()

    print(Road.header(), file=out)
    for junction in simulation.junctions:
        for road in junction.roads:
            print(road, file=out)
    return simulation


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trafficsim", description="Road traffic simulation.")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("vehicles", help="drive a few vehicles freely")
    commands.add_parser("road", help="simulate a single road")
    network = commands.add_parser("network", help="simulate a small road network")
    network.add_argument("--seed", type=int, default=None)
    deferred = commands.add_parser("deferred", help="show the deferred list")
    deferred.add_argument("--seed", type=int, default=0)
    run = commands.add_parser("run", help="simulate a network read from a file")
    run.add_argument("file")
    run.add_argument("--graphics", action="store_true")
    run.add_argument("--until", type=float, default=10.0)
    run.add_argument("--step", type=float, default=0.1)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the chosen scenario; return the process exit status."""
    args = _parser().parse_args(argv)
    try:
        if args.command == "vehicles":
            run_vehicles_demo()
        elif args.command == "road":
            run_road_demo()
        elif args.command == "network":
            run_network_demo(seed=args.seed)
        elif args.command == "deferred":
            run_deferred_demo(seed=args.seed)
        else:
            run_file(args.file, with_graphics=args.graphics, until=args.until, step=args.step)
    except (OSError, ValueError) as error:
        print(f"ERROR: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())