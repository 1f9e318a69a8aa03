"""Road speed limits and a tolerant floating-point comparison."""

from __future__ import annotations

import math
import struct
import sys
from enum import Enum

UNLIMITED_KMH = float(2**31 - 1)


class SpeedLimit(Enum):
    """Speed limit category of a road."""

    URBAN = 1
    COUNTRY_ROAD = 2
    MOTORWAY = 3

    @property
    def kmh(self) -> float:
        """The limit in km/h; a motorway is effectively unlimited."""
        if self is SpeedLimit.URBAN:
            return 50.0
        if self is SpeedLimit.COUNTRY_ROAD:
            return 100.0
        return UNLIMITED_KMH


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def approximately_equal(a: float, b: float, epsilon: float = sys.float_info.epsilon) -> bool:
    """Compare two values at single precision with a relative tolerance."""
    fa = _to_float32(a)
    fb = _to_float32(b)
    fe = _to_float32(epsilon)
    difference = _to_float32(abs(fa - fb))
    return difference <= _to_float32(max(abs(fa), abs(fb)) * fe)