import pytest

from trafficsim.simobject import CLOCK, SimObject, SimulationClock


class Dummy(SimObject):
    def __init__(self, name=""):
        super().__init__(name)
        self.steps = 0

    def simulate(self):
        self.steps += 1


@pytest.fixture(autouse=True)
def _reset_clock():
    CLOCK.reset()
    yield
    CLOCK.reset()


def test_clock_advance_and_reset():
    clock = SimulationClock()
    assert clock.time == 0.0
    assert clock.advance(0.5) == 0.5
    assert clock.time == 0.5
    clock.reset()
    assert clock.time == 0.0


def test_clock_starts_at_given_time():
    clock = SimulationClock(2.0)
    assert clock.time == 2.0
    clock.advance(1.0)
    assert clock.time == 3.0


def test_shared_clock_is_reset_by_fixture():
    assert CLOCK.time == 0.0
    assert CLOCK.advance(4.0) == 4.0
    assert CLOCK.time == 4.0


def test_ids_are_unique_and_increasing():
    a = Dummy("a")
    b = Dummy("b")
    c = Dummy()
    assert a.id < b.id < c.id
    assert b.id == a.id + 1
    assert SimObject.format(a).split()[0] == str(a.id)
    assert SimObject.format(b).split()[0] == str(b.id)


def test_name_and_default_name():
    assert SimObject.format(Dummy("Weg1")).split()[1] == "Weg1"
    unnamed = Dummy()
    assert unnamed.name == ""
    assert SimObject.format(unnamed).split() == [str(unnamed.id)]


def test_equality_is_by_id():
    a = Dummy("same")
    b = Dummy("same")
    assert SimObject.__eq__(a, a) is True
    assert SimObject.__eq__(a, b) is False
    assert SimObject.__hash__(a) == SimObject.__hash__(a)
    assert len({a, b, a}) == 2


def test_format_row():
    obj = Dummy("Road")
    row = SimObject.format(obj)
    assert len(row) == 25
    assert row.split() == [str(obj.id), "Road"]
    assert SimObject.__str__(obj) == row


def test_read_sets_name_from_tokens():
    obj = Dummy()
    tokens = iter(["Kreuzung1", "1000"])
    SimObject.read(obj, tokens)
    assert obj.name == "Kreuzung1"
    assert next(tokens) == "1000"


def test_read_refuses_when_name_already_set():
    obj = Dummy("named")
    with pytest.raises(ValueError, match="already set"):
        SimObject.read(obj, iter(["other"]))
    assert obj.name == "named"


def test_read_without_tokens_raises():
    with pytest.raises(ValueError):
        SimObject.read(Dummy(), iter([]))


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        SimObject("x")


def test_simulate_is_dispatched():
    obj = Dummy("d")
    before = SimObject.format(obj)
    obj.simulate()
    obj.simulate()
    assert obj.steps == 2
    assert SimObject.format(obj) == before