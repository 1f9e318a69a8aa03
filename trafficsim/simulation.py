"""Building a road network from a text description and running it."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from .graphics import GraphicsClient
from .junction import Junction
from .speed_limit import SpeedLimit
from .vehicles import Bicycle, Car, Vehicle

logger = logging.getLogger(__name__)

GRAPHICS_SIZE = 2000


def _field(tokens: Iterator[str], what: str) -> str:
    field = next(tokens, None)
    if field is None:
        raise ValueError(f"missing {what}")
    return field


def _float(tokens: Iterator[str], what: str) -> float:
    field = _field(tokens, what)
    try:
        return float(field)
    except ValueError:
        raise ValueError(f"invalid {what}: {field!r}") from None


def _int(tokens: Iterator[str], what: str) -> int:
    field = _field(tokens, what)
    try:
        return int(field)
    except ValueError:
        raise ValueError(f"invalid {what}: {field!r}") from None


class Simulation:
    """A network of junctions, roads and vehicles read from text lines.

    Each line starts with a command: ``KREUZUNG``, ``STRASSE``, ``PKW``
    or ``FAHRRAD``. A faulty line is recorded in :attr:`errors` and
    skipped; reading goes on with the next line.
    """

    def __init__(self, graphics: Any = None) -> None:
        self._graphics = graphics
        self._junctions: list[Junction] = []
        self._by_name: dict[str, Junction] = {}
        self._errors: list[str] = []

    @property
    def junctions(self) -> list[Junction]:
        return list(self._junctions)

    @property
    def errors(self) -> list[str]:
        """Messages of the lines that could not be read."""
        return list(self._errors)

    def load(self, stream: Iterable[str], with_graphics: bool = False) -> None:
        """Read the network from ``stream``, drawing it if ``with_graphics``."""
        if with_graphics:
            if self._graphics is None:
                self._graphics = GraphicsClient()
            self._graphics.initialise(GRAPHICS_SIZE, GRAPHICS_SIZE)
        for line_number, line in enumerate(stream, start=1):
            tokens = iter(line.split())
            command = next(tokens, "")
            try:
                self._read_line(command, tokens, line_number, with_graphics)
            except Exception as error:
                message = str(error)
                logger.error("Error: %s", message)
                self._errors.append(message)

    def _lookup(self, name: str, line_number: int) -> Junction:
        junction = self._by_name.get(name)
        if junction is None:
            raise ValueError(
                f"Junction with name {name} not found. Error at line: {line_number}"
            )
        return junction

    def _read_line(
        self, command: str, tokens: Iterator[str], line_number: int, with_graphics: bool
    ) -> None:
        if command == "KREUZUNG":
            name = _field(tokens, "junction name")
            stock = _float(tokens, "fuel station volume")
            junction = Junction(name, stock)
            self._junctions.append(junction)
            if name in self._by_name:
                raise ValueError(
                    f"Junction with name {name} already exists. Error at line: {line_number}"
                )
            self._by_name[name] = junction
            if with_graphics:
                x = _int(tokens, "x coordinate")
                y = _int(tokens, "y coordinate")
                self._graphics.draw_crossing(x, y)
        elif command == "STRASSE":
            start_name = _field(tokens, "start junction")
            end_name = _field(tokens, "end junction")
            forward = _field(tokens, "forward road name")
            backward = _field(tokens, "backward road name")
            length = _float(tokens, "length")
            limit = SpeedLimit(_int(tokens, "speed limit"))
            no_overtaking = _int(tokens, "overtaking ban") != 0
            start = self._lookup(start_name, line_number)
            end = self._lookup(end_name, line_number)
            Junction.connect(
                forward, backward, length, start, end, limit, no_overtaking, self._graphics
            )
            if with_graphics:
                count = _int(tokens, "number of points")
                points = [
                    (_int(tokens, "x coordinate"), _int(tokens, "y coordinate"))
                    for _ in range(count)
                ]
                self._graphics.draw_road(forward, backward, length, points)
        elif command == "PKW":
            name = _field(tokens, "name")
            max_speed = _float(tokens, "maximum speed")
            consumption = _float(tokens, "consumption")
            tank_volume = _float(tokens, "tank volume")
            self._place(
                Car(name, max_speed, consumption, tank_volume), tokens, line_number
            )
        elif command == "FAHRRAD":
            name = _field(tokens, "name")
            max_speed = _float(tokens, "maximum speed")
            self._place(Bicycle(name, max_speed), tokens, line_number)
        else:
            raise ValueError(f"Unknown command: {command} at line: {line_number}")

    def _place(self, vehicle: Vehicle, tokens: Iterator[str], line_number: int) -> None:
        start_name = _field(tokens, "start junction")
        start_time = _float(tokens, "start time")
        self._lookup(start_name, line_number).accept(vehicle, start_time)

    def simulate(self) -> None:
        """Advance every junction, and with it every road, to the current time."""
        for junction in self._junctions:
            junction.simulate()