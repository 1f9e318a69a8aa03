"""How a vehicle moves along a road, and the events that interrupt it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .simobject import CLOCK
from .speed_limit import approximately_equal

# Gap kept to the vehicle ahead when overtaking is forbidden (km).
SAFETY_GAP = 0.5


class Behaviour(ABC):
    """Strategy deciding how far a vehicle moves on its road."""

    def __init__(self, road: Any) -> None:
        self._road = road

    @property
    def road(self) -> Any:
        return self._road

    @abstractmethod
    def distance(self, vehicle: Any, interval: float) -> float:
        """Return how far ``vehicle`` moves within ``interval`` hours."""


class Driving(Behaviour):
    """Drive towards the end of the road without passing it."""

    def distance(self, vehicle: Any, interval: float) -> float:
        road = self._road
        speed = vehicle.speed
        if approximately_equal(road.length, vehicle.section_distance):
            raise EndOfRoad(vehicle, road)
        if road.no_overtaking:
            gap_ahead = -1.0
            for vehicle_id, position in road.vehicle_positions():
                if vehicle_id == vehicle.id:
                    continue
                gap = position - vehicle.section_distance
                if gap > gap_ahead:
                    gap_ahead = gap
            if 0 < gap_ahead < speed * interval:
                return gap_ahead - SAFETY_GAP
        remaining = road.length - vehicle.section_distance
        if remaining < speed * interval:
            return remaining
        return vehicle.speed * interval


class Parking(Behaviour):
    """Stand still until the start time is reached."""

    def __init__(self, road: Any, end_time: float) -> None:
        super().__init__(road)
        self._end_time = end_time

    @property
    def end_time(self) -> float:
        return self._end_time

    def distance(self, vehicle: Any, interval: float) -> float:
        now = CLOCK.time
        if approximately_equal(now, self._end_time) or now > self._end_time:
            raise StartDriving(vehicle, self._road)
        return 0.0


class DrivingEvent(Exception, ABC):
    """An event raised while moving a vehicle, handled by its road."""

    def __init__(self, vehicle: Any, road: Any) -> None:
        super().__init__(f"{type(self).__name__}: {vehicle.name} on {road.name}")
        self.vehicle = vehicle
        self.road = road

    @abstractmethod
    def handle(self) -> None:
        """React to the event."""


class StartDriving(DrivingEvent):
    """A parked vehicle's start time has come: it begins to drive."""

    def handle(self) -> None:
        print(f"\nStart driving on {self.road.name} with vehicle:")
        print(type(self.vehicle).header())
        print(f"{self.vehicle}\n")
        self.road.accept(self.road.release(self.vehicle))


class EndOfRoad(DrivingEvent):
    """A vehicle has reached the end of its road and turns onto another."""

    def handle(self) -> None:
        road = self.road
        print(f"\nEnd of road on {road.name} with vehicle:")
        released = road.release(self.vehicle)
        junction = road.destination
        if released is None or junction is None:
            return
        target = junction.random_road(road)
        junction.refuel(released)
        target.accept(released)
        print(f"TIME: {CLOCK.time:.2f}")
        print(f"JUNCTION: {junction.name}")
        print(f"SWITCH: {road.name} -> {target.name}")
        print("VEHICLE:")
        print(type(self.vehicle).header())
        print(f"{self.vehicle}\n")