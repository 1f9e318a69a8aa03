import pytest

from trafficsim.behaviour import Driving, Parking
from trafficsim.road import Road
from trafficsim.simobject import CLOCK
from trafficsim.speed_limit import SpeedLimit
from trafficsim.vehicles import (
    BICYCLE_MIN_SPEED,
    DEFAULT_TANK_VOLUME,
    Bicycle,
    Car,
    Vehicle,
)


@pytest.fixture(autouse=True)
def _clock():
    CLOCK.reset()
    yield
    CLOCK.reset()


class _Recorder:
    def __init__(self):
        self.calls = []

    def draw_car(self, name, road, rel_position, speed, tank):
        self.calls.append(("car", name, road, rel_position, speed, tank))

    def draw_bike(self, name, road, rel_position, speed):
        self.calls.append(("bike", name, road, rel_position, speed))


def test_negative_max_speed_is_made_positive():
    assert Vehicle("A", -30.0).max_speed == 30.0


def test_vehicle_drives_at_max_speed_on_long_road():
    road = Road("R", 100.0)
    vehicle = Vehicle("A", 40.0)
    road.accept(vehicle)
    CLOCK.advance(1.0)
    road.simulate()
    assert vehicle.total_distance == 40.0
    assert vehicle.section_distance == 40.0
    assert vehicle.total_time == 1.0


def test_vehicle_without_road_drives_freely():
    vehicle = Vehicle("A", 30.0)
    CLOCK.advance(2.0)
    vehicle.simulate()
    assert vehicle.total_distance == 60.0
    assert vehicle.time == 2.0


def test_simulate_twice_at_same_time_is_idempotent():
    vehicle = Vehicle("A", 30.0)
    CLOCK.advance(1.0)
    vehicle.simulate()
    vehicle.simulate()
    assert vehicle.total_distance == 30.0


def test_new_road_selects_behaviour_and_resets_section():
    road = Road("R", 100.0)
    vehicle = Vehicle("A", 10.0)
    vehicle.new_road(road)
    assert isinstance(vehicle.behaviour, Driving)
    vehicle.new_road(road, 3.0)
    assert isinstance(vehicle.behaviour, Parking)
    assert vehicle.section_distance == 0.0
    assert vehicle.road is road


def test_parked_vehicle_waits_then_starts():
    road = Road("R", 100.0)
    vehicle = Vehicle("V", 10.0)
    road.accept(vehicle, 2.0)
    CLOCK.advance(1.0)
    road.simulate()
    assert vehicle.total_distance == 0.0
    assert isinstance(vehicle.behaviour, Parking)
    CLOCK.advance(1.0)
    road.simulate()
    assert isinstance(vehicle.behaviour, Driving)
    assert vehicle.total_distance == 0.0
    CLOCK.advance(1.0)
    road.simulate()
    assert vehicle.total_distance > 0.0
    assert road.vehicles == [vehicle]


def test_plain_vehicle_refuel_takes_nothing():
    assert Vehicle("A", 10.0).refuel(5.0) == 0.0


def test_car_default_tank():
    car = Car("C", 100.0, 5.0)
    assert car.tank_volume == DEFAULT_TANK_VOLUME
    assert car.tank_contents == 27.0


def test_car_with_volume_starts_half_full():
    car = Car("C", 100.0, 5.0, 40.0)
    assert car.tank_contents == 40.0 / 2


def test_car_refuel_partial_and_full():
    car = Car("C", 100.0, 5.0, 40.0)
    start = car.tank_contents
    assert car.refuel(5.0) == 5.0
    assert car.tank_contents == start + 5.0
    space = car.tank_volume - car.tank_contents
    assert car.refuel() == space
    assert car.tank_contents == car.tank_volume
    assert car.refuel(3.0) == 0.0


def test_car_speed_capped_by_urban_limit():
    road = Road("R", 100.0, SpeedLimit.URBAN)
    car = Car("C", 180.0, 5.0, 40.0)
    road.accept(car)
    assert car.speed == SpeedLimit.URBAN.kmh


def test_car_speed_below_limit_uses_max_speed():
    road = Road("R", 100.0, SpeedLimit.MOTORWAY)
    car = Car("C", 180.0, 5.0, 40.0)
    road.accept(car)
    assert car.speed == 180.0


def test_car_burns_fuel_for_distance_driven():
    road = Road("R", 100.0, SpeedLimit.URBAN)
    car = Car("C", 180.0, 10.0, 40.0)
    road.accept(car)
    before = car.tank_contents
    CLOCK.advance(1.0)
    road.simulate()
    assert car.total_distance == SpeedLimit.URBAN.kmh
    assert before - car.tank_contents == pytest.approx(car.consumption * car.total_distance / 100)


def test_car_runs_empty_and_recovers_on_refuel():
    road = Road("R", 1000.0)
    car = Car("C", 100.0, 50.0, 2.0)
    road.accept(car)
    CLOCK.advance(1.0)
    road.simulate()
    assert car.tank_contents == 0.0
    assert car.broken_down
    assert car.speed == 0.0
    assert car.refuel(1.0) == 1.0
    assert not car.broken_down
    assert car.speed == 100.0


def test_bicycle_speed_starts_at_max():
    assert Bicycle("B", 20.0).speed == 20.0


def test_bicycle_slows_down_to_minimum():
    road = Road("R", 1000.0)
    bike = Bicycle("B", 20.0)
    road.accept(bike)
    speeds = []
    for _ in range(10):
        CLOCK.advance(1.0)
        road.simulate()
        speeds.append(bike.speed)
    assert all(a >= b for a, b in zip(speeds, speeds[1:]))
    assert speeds[-1] == BICYCLE_MIN_SPEED


def test_slow_bicycle_never_below_minimum():
    assert Bicycle("B", 5.0).speed == BICYCLE_MIN_SPEED


def test_header_has_rule_line():
    lines = Vehicle.header().splitlines()
    assert len(lines) == 2
    assert lines[1] == "-" * 135
    assert "Name" in lines[0]


def test_vehicle_format_columns():
    vehicle = Vehicle("Bob", 30.0)
    text = vehicle.format()
    assert text.startswith(f"{vehicle.id:>5}{'Bob':>20}")
    assert text.split()[2] == "30.00"
    assert len(text.split()) == 7
    assert str(vehicle) == text


def test_car_format_has_fuel_columns():
    car = Car("C", 100.0, 5.0, 40.0)
    fields = car.format().split()
    assert len(fields) == 9
    assert fields[-1] == "20.00"


def test_vehicle_read():
    vehicle = Vehicle()
    vehicle.read(iter(["X", "33"]))
    assert vehicle.name == "X"
    assert vehicle.max_speed == 33.0


def test_car_read_fills_tank():
    car = Car()
    car.read(iter(["Mini", "180", "5.5", "40"]))
    assert car.name == "Mini"
    assert car.max_speed == 180.0
    assert car.consumption == 5.5
    assert car.tank_volume == 40.0
    assert car.tank_contents == 40.0


def test_read_missing_field_raises():
    with pytest.raises(ValueError):
        Vehicle().read(iter(["X"]))
    with pytest.raises(ValueError):
        Car().read(iter(["X", "100", "5"]))


def test_read_bad_number_raises():
    with pytest.raises(ValueError):
        Vehicle().read(iter(["X", "fast"]))


def test_assign_from_copies_name_and_speed_keeps_id():
    source = Car("Audi", 200.0, 6.5, 50.0)
    target = Vehicle("base")
    original_id = target.id
    target.assign_from(source)
    assert target.name == "Audi_copy"
    assert target.max_speed == 200.0
    assert target.id == original_id


def test_less_than_compares_total_distance():
    slow = Vehicle("S", 10.0)
    fast = Vehicle("F", 50.0)
    CLOCK.advance(1.0)
    slow.simulate()
    fast.simulate()
    assert slow < fast
    assert not fast < slow


def test_car_draws_itself():
    recorder = _Recorder()
    road = Road("R", 100.0, graphics=recorder)
    car = Car("C", 40.0, 5.0, 40.0)
    road.accept(car)
    CLOCK.advance(1.0)
    road.simulate()
    kind, name, road_name, position, speed, tank = recorder.calls[0]
    assert (kind, name, road_name) == ("car", "C", "R")
    assert position == car.section_distance / road.length
    assert speed == car.speed
    assert tank == car.tank_contents


def test_bicycle_draws_itself_and_plain_vehicle_does_not():
    recorder = _Recorder()
    road = Road("R", 100.0, graphics=recorder)
    road.accept(Vehicle("V", 10.0))
    bike = Bicycle("B", 20.0)
    road.accept(bike)
    CLOCK.advance(1.0)
    road.simulate()
    assert len(recorder.calls) == 1
    assert recorder.calls[0][:3] == ("bike", "B", "R")
    assert recorder.calls[0][3] == bike.section_distance / road.length