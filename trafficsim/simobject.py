"""Base class of everything that takes part in the simulation."""

from __future__ import annotations

import itertools
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator

logger = logging.getLogger(__name__)


class SimulationClock:
    """The global simulation time in hours."""

    def __init__(self, time: float = 0.0) -> None:
        self.time = time

    def advance(self, step: float) -> float:
        """Move the clock forward by ``step`` and return the new time."""
        self.time += step
        return self.time

    def reset(self) -> None:
        """Set the clock back to zero."""
        self.time = 0.0


CLOCK = SimulationClock()


class SimObject(ABC):
    """A named simulation object with a unique, increasing id."""

    _ids = itertools.count(1)

    def __init__(self, name: str = "") -> None:
        self._name = name
        self._id = next(SimObject._ids)
        self._time = 0.0
        logger.debug("created simulation object %d %r", self._id, self._name)

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    def format(self) -> str:
        """Return the object as a table row: id and name, right-aligned."""
        return f"{self._id:>5}{self._name:>20}"

    def read(self, tokens: Iterator[str]) -> None:
        """Take the name from the next field of ``tokens``.

        Raises ValueError if the name is already set or no field is left.
        """
        if self._name:
            raise ValueError("object name already set")
        name = next(tokens, None)
        if name is None:
            raise ValueError("missing name")
        self._name = name

    @abstractmethod
    def simulate(self) -> None:
        """Advance this object to the current simulation time."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimObject):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return self.format()