"""A one-way road that carries vehicles towards a junction."""

from __future__ import annotations

import logging
from typing import Any

from .behaviour import DrivingEvent
from .deferred import DeferredList
from .simobject import SimObject
from .speed_limit import SpeedLimit

logger = logging.getLogger(__name__)

_HEADER_RULE = "-" * 72


class Road(SimObject):
    """A road with a length, a speed limit and the vehicles on it."""

    def __init__(
        self,
        name: str = "",
        length: float = 0.0,
        speed_limit: SpeedLimit = SpeedLimit.MOTORWAY,
        no_overtaking: bool = True,
        destination: Any = None,
        reverse: Road | None = None,
        graphics: Any = None,
    ) -> None:
        super().__init__(name)
        self._length = length
        self._speed_limit = speed_limit
        self._no_overtaking = no_overtaking
        self._destination = destination
        self._reverse = reverse
        self._vehicles: DeferredList[Any] = DeferredList()
        self.graphics = graphics

    @staticmethod
    def header() -> str:
        """Return the column headings of the road table."""
        return f"{'ID':>5}{'Name':>20}{'Length':>20} Vehicles\n{_HEADER_RULE}"

    def simulate(self) -> None:
        """Move every vehicle on the road and handle the events they raise."""
        self._vehicles.update()
        for vehicle in self._vehicles:
            try:
                vehicle.simulate()
                vehicle.draw(self, self.graphics)
            except DrivingEvent as event:
                event.handle()
            except Exception:
                logger.exception("error while simulating %s on %s", vehicle.name, self.name)
        self._vehicles.update()

    def format(self) -> str:
        names = ", ".join(vehicle.name for vehicle in self._vehicles)
        return f"{super().format()}{self._length:>20.2f} ({names})"

    @property
    def length(self) -> float:
        return self._length

    @property
    def speed_limit(self) -> SpeedLimit:
        return self._speed_limit

    @property
    def limit(self) -> float:
        """The speed limit in km/h."""
        return self._speed_limit.kmh

    @property
    def no_overtaking(self) -> bool:
        return self._no_overtaking

    @property
    def vehicles(self) -> list[Any]:
        """Vehicles on the road, as of the last applied update."""
        return list(self._vehicles)

    def accept(self, vehicle: Any, start_time: float | None = None) -> None:
        """Take over ``vehicle``: driving at the back, or parked at the front."""
        if vehicle is None:
            return
        vehicle.new_road(self, start_time)
        if start_time is None:
            self._vehicles.push_back(vehicle)
        else:
            self._vehicles.push_front(vehicle)

    def release(self, vehicle: Any) -> Any:
        """Queue ``vehicle``'s removal and return it, or None if it is not here."""
        for candidate in self._vehicles:
            if candidate is not None and candidate == vehicle:
                self._vehicles.erase(candidate)
                return candidate
        return None

    def vehicle_positions(self) -> list[tuple[int, float]]:
        """Return (id, distance on this road) for every vehicle still running."""
        return [
            (vehicle.id, vehicle.section_distance)
            for vehicle in self._vehicles
            if vehicle is not None and not vehicle.broken_down
        ]

    @property
    def destination(self) -> Any:
        """The junction the road leads to, or None."""
        return self._destination

    @property
    def reverse(self) -> Road | None:
        """The road running the opposite way, or None."""
        return self._reverse

    def set_reverse(self, reverse: Road | None) -> None:
        self._reverse = reverse