"""Junctions that connect roads, hand vehicles on and sell fuel."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from typing import Any

from .road import Road
from .simobject import SimObject
from .speed_limit import SpeedLimit
from .vehicles import Car

logger = logging.getLogger(__name__)


def _next_field(tokens: Iterator[str], what: str) -> str:
    field = next(tokens, None)
    if field is None:
        raise ValueError(f"missing {what}")
    return field


class Junction(SimObject):
    """A junction with outgoing roads and a fuel station of limited stock."""

    def __init__(self, name: str = "", fuel_station: float = 0.0) -> None:
        super().__init__(name)
        self._roads: list[Road] = []
        self._fuel_station = fuel_station
        self.rng = random.Random()

    @staticmethod
    def connect(
        forward: str,
        backward: str,
        length: float,
        start: Junction,
        end: Junction,
        speed_limit: SpeedLimit = SpeedLimit.MOTORWAY,
        no_overtaking: bool = True,
        graphics: Any = None,
    ) -> tuple[Road, Road]:
        """Build a road from ``start`` to ``end`` and its way back.

        The forward road leaves ``start``, the backward road leaves ``end``;
        each knows the other as its reverse. Returns both roads.
        """
        outward = Road(forward, length, speed_limit, no_overtaking, end, None, graphics)
        inward = Road(backward, length, speed_limit, no_overtaking, start, outward, graphics)
        outward.set_reverse(inward)
        start._roads.append(outward)
        end._roads.append(inward)
        return outward, inward

    @property
    def roads(self) -> list[Road]:
        """Roads leaving this junction, in the order they were connected."""
        return list(self._roads)

    @property
    def fuel_station(self) -> float:
        """Litres of fuel left at the station."""
        return self._fuel_station

    def refuel(self, vehicle: Any) -> float:
        """Fill up a car while the station has fuel; return the litres sold."""
        if vehicle is None or self._fuel_station <= 0:
            return 0.0
        if not isinstance(vehicle, Car):
            return 0.0
        amount = vehicle.refuel()
        print(f"Refuel: {vehicle.name} takes {amount:.2f} litres.")
        self._fuel_station -= amount
        return amount

    def accept(self, vehicle: Any, start_time: float) -> None:
        """Refuel ``vehicle`` and park it on the first road until ``start_time``."""
        if not self._roads:
            return
        self.refuel(vehicle)
        self._roads[0].accept(vehicle, start_time)

    def simulate(self) -> None:
        """Simulate every road leaving the junction."""
        for road in self._roads:
            road.simulate()

    def random_road(self, incoming: Road) -> Road:
        """Pick a road to leave by, avoiding a U-turn unless nothing else is left."""
        back = incoming.reverse
        choices = [road for road in self._roads if road is not back]
        if not choices:
            return back
        return self.rng.choice(choices)

    def read(self, tokens: Iterator[str]) -> None:
        """Read name and fuel station stock from ``tokens``."""
        name = _next_field(tokens, "name")
        stock = _next_field(tokens, "fuel station volume")
        try:
            value = float(stock)
        except ValueError:
            raise ValueError(f"invalid fuel station volume: {stock!r}") from None
        self._name = name
        self._fuel_station = value