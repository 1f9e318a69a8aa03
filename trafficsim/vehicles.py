"""Vehicles: a generic vehicle, cars with a fuel tank, and bicycles."""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from .behaviour import Behaviour, Driving, Parking
from .simobject import CLOCK, SimObject

DEFAULT_TANK_VOLUME = 55.0
# Half the default volume, truncated to whole litres.
DEFAULT_TANK_CONTENTS = 27.0

BICYCLE_LOSS_PER_KM = 0.1 / 20.0
BICYCLE_MIN_SPEED = 12.0

_HEADER_RULE = "-" * 135


def _next_float(tokens: Iterator[str], what: str) -> float:
    field = next(tokens, None)
    if field is None:
        raise ValueError(f"missing {what}")
    try:
        return float(field)
    except ValueError:
        raise ValueError(f"invalid {what}: {field!r}") from None


class Vehicle(SimObject):
    """A vehicle that moves along roads at its maximum speed."""

    def __init__(self, name: str = "", max_speed: float = 0.0) -> None:
        super().__init__(name)
        self._max_speed = abs(max_speed)
        self._total_distance = 0.0
        self._total_time = 0.0
        self._section_distance = 0.0
        self._behaviour: Behaviour | None = None
        self._broken_down = False

    @staticmethod
    def header() -> str:
        """Return the column headings of the vehicle table."""
        columns = (
            f"{'ID':>5}{'Name':>20}{'MaxSpeed':>20}{'TotalDist':>15}"
            f"{'SectionDist':>15}{'TotalTime':>15}{'Time':>15}"
            f"{'TotalFuel':>15}{'Tank':>15}"
        )
        return f"{columns}\n{_HEADER_RULE}"

    @property
    def max_speed(self) -> float:
        return self._max_speed

    @property
    def total_time(self) -> float:
        return self._total_time

    @property
    def time(self) -> float:
        """The simulation time this vehicle was last advanced to."""
        return self._time

    @property
    def behaviour(self) -> Behaviour | None:
        return self._behaviour

    @property
    def road(self) -> Any:
        """The road the vehicle is on, or None."""
        return None if self._behaviour is None else self._behaviour.road

    @property
    def speed(self) -> float:
        """Current speed in km/h."""
        return self._max_speed

    @property
    def total_distance(self) -> float:
        return self._total_distance

    @property
    def section_distance(self) -> float:
        """Distance covered on the current road."""
        return self._section_distance

    @property
    def broken_down(self) -> bool:
        return self._broken_down

    def format(self) -> str:
        return (
            f"{super().format()}{self._max_speed:>20.2f}"
            f"{self._total_distance:>15.2f}{self._section_distance:>15.2f}"
            f"{self._total_time:>15.2f}{self._time:>15.2f}"
        )

    def read(self, tokens: Iterator[str]) -> None:
        """Read name and maximum speed from ``tokens``."""
        name = next(tokens, None)
        if name is None:
            raise ValueError("missing name")
        self._name = name
        self._max_speed = _next_float(tokens, "maximum speed")

    def simulate(self) -> None:
        """Advance to the current time; off-road vehicles drive freely."""
        now = CLOCK.time
        if self._time == now:
            return
        elapsed = now - self._time
        if self._behaviour is None:
            delta = self.speed * elapsed
        else:
            delta = self._behaviour.distance(self, elapsed)
        self._total_distance += delta
        self._section_distance += delta
        self._total_time += elapsed
        self._time = now

    def refuel(self, amount: float = math.inf) -> float:
        """Return the amount taken; a plain vehicle takes no fuel."""
        return 0.0

    def new_road(self, road: Any, start_time: float | None = None) -> None:
        """Put the vehicle on ``road``, parked until ``start_time`` if given."""
        if start_time is None:
            self._behaviour = Driving(road)
        else:
            self._behaviour = Parking(road, start_time)
        self._section_distance = 0.0

    def draw(self, road: Any, graphics: Any) -> None:
        """Show the vehicle on ``graphics``; a plain vehicle is not shown."""

    def assign_from(self, other: Vehicle) -> Vehicle:
        """Copy name (with a ``_copy`` suffix) and maximum speed; keep the id."""
        if other is not self:
            self._name = other._name + "_copy"
            self._max_speed = other._max_speed
        return self

    def __lt__(self, other: Vehicle) -> bool:
        if not isinstance(other, Vehicle):
            return NotImplemented
        return self._total_distance < other._total_distance

    __hash__ = SimObject.__hash__


class Car(Vehicle):
    """A car that burns fuel and stops when its tank is empty."""

    def __init__(
        self,
        name: str = "",
        max_speed: float = 0.0,
        consumption: float = 0.0,
        tank_volume: float | None = None,
    ) -> None:
        super().__init__(name, max_speed)
        self._consumption = consumption
        if tank_volume is None:
            self._tank_volume = DEFAULT_TANK_VOLUME
            self._tank = DEFAULT_TANK_CONTENTS
        else:
            self._tank_volume = tank_volume
            self._tank = tank_volume / 2

    @property
    def consumption(self) -> float:
        """Fuel consumption in litres per 100 km."""
        return self._consumption

    @property
    def tank_volume(self) -> float:
        return self._tank_volume

    @property
    def tank_contents(self) -> float:
        return self._tank

    def refuel(self, amount: float = math.inf) -> float:
        """Add up to ``amount`` litres without overfilling; return what was added."""
        space = self._tank_volume - self._tank
        if amount < space:
            self._tank += amount
        else:
            amount = space
            self._tank = self._tank_volume
        self._broken_down = False
        return amount

    def simulate(self) -> None:
        if self._time == CLOCK.time:
            return
        before = self._total_distance
        super().simulate()
        driven = self._total_distance - before
        self._tank -= self._consumption * driven / 100
        if self._tank < 0:
            self._tank = 0.0
            self._broken_down = True

    def format(self) -> str:
        used = self._total_distance / 100 * self._consumption
        return f"{super().format()}{used:>15.2f}{self._tank:>15.2f}"

    def read(self, tokens: Iterator[str]) -> None:
        """Read name, maximum speed, consumption and tank volume; fill the tank."""
        super().read(tokens)
        self._consumption = _next_float(tokens, "consumption")
        self._tank_volume = _next_float(tokens, "tank volume")
        self._tank = self._tank_volume

    def draw(self, road: Any, graphics: Any) -> None:
        if graphics is None:
            return
        position = self._section_distance / road.length if road.length else 0.0
        graphics.draw_car(self._name, road.name, position, self.speed, self._tank)

    @property
    def speed(self) -> float:
        """Zero with an empty tank, else the maximum speed capped by the road's limit."""
        if self._tank <= 0:
            return 0.0
        road = self.road
        if road is None:
            return self._max_speed
        return min(road.limit, self._max_speed)


class Bicycle(Vehicle):
    """A bicycle whose rider tires: 10 % speed lost per 20 km, never below 12 km/h."""

    def __init__(self, name: str = "", max_speed: float = 0.0) -> None:
        super().__init__(name, max_speed)

    def draw(self, road: Any, graphics: Any) -> None:
        if graphics is None:
            return
        position = self._section_distance / road.length if road.length else 0.0
        graphics.draw_bike(self._name, road.name, position, self.speed)

    @property
    def speed(self) -> float:
        speed = self._max_speed * (1.0 - BICYCLE_LOSS_PER_KM * self._total_distance)
        return max(speed, BICYCLE_MIN_SPEED)