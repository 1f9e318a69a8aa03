"""Discrete-time road traffic simulation with vehicles, roads and junctions."""

__version__ = "0.1.0"
__all__ = [
    "behaviour",
    "cli",
    "deferred",
    "graphics",
    "junction",
    "road",
    "simobject",
    "simulation",
    "speed_limit",
    "vehicles",
]