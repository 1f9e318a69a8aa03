"""Client for the external traffic drawing server.

Messages are plain text commands terminated by ``#`` and sent over TCP.
Invalid drawing requests are reported to the server as a ``msg`` command
and raised as :class:`GraphicsError`. Requests made before the client has
been initialised are ignored and return False.
"""

from __future__ import annotations

import logging
import socket
import string
import subprocess
import time
from collections.abc import Callable, Iterable, Sequence

logger = logging.getLogger(__name__)

DEFAULT_ADDRESS = "127.0.0.1"
DEFAULT_SERVER_COMMAND: tuple[str, ...] = ("java", "-jar", "SimuServer.jar")

MIN_PLAN_SIZE = 100
MAX_PLAN_SIZE = 2000
MAX_ROAD_NAME = 10
MAX_SPEED = 300.0
MAX_TANK = 999.9
CONNECT_ATTEMPTS = 4

_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_-")


class GraphicsError(Exception):
    """A drawing request was rejected or the server could not be reached."""


def sleep_ms(milliseconds: int) -> None:
    """Pause for ``milliseconds``; values outside 1..9999 do not pause."""
    if 0 < milliseconds < 10000:
        time.sleep(milliseconds / 1000.0)


def _dynamic_port() -> str:
    return str(int(time.time()) % 1000 + 8000)


def _first_invalid(name: str) -> int | None:
    return next((index for index, char in enumerate(name) if char not in _NAME_CHARS), None)


class _Socket:
    """A TCP connection whose send errors are ignored."""

    def __init__(self) -> None:
        self._sock: socket.socket | None = None

    def connect(self, address: str, port: str) -> bool:
        try:
            self._sock = socket.create_connection((address, int(port)), timeout=5)
        except (OSError, ValueError):
            self._sock = None
            return False
        return True

    def send(self, message: str) -> None:
        if self._sock is None:
            return
        try:
            self._sock.sendall(message.encode())
        except OSError:
            pass

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None


class GraphicsClient:
    """Draws roads, crossings and vehicles on the drawing server.

    If ``sender`` is given, every message is handed to it instead of a
    socket, and no server is started or connected to. If ``port`` is None
    a port is derived from the current time. ``server_command`` is the
    command that starts the server (the port is appended); None starts
    nothing.
    """

    def __init__(
        self,
        address: str = DEFAULT_ADDRESS,
        port: str | None = None,
        server_command: Sequence[str] | None = DEFAULT_SERVER_COMMAND,
        sender: Callable[[str], object] | None = None,
    ) -> None:
        self.address = address
        self.port = port
        self.server_command = None if server_command is None else tuple(server_command)
        self._sender = sender
        self._socket: _Socket | None = None
        self._server: subprocess.Popen[bytes] | None = None
        self._initialised = False
        self._size_x = 0
        self._size_y = 0
        self._roads: dict[str, int] = {}
        self._time = 0.0
        self.startup_delay_ms = 2000
        self.retry_delay_ms = 300
        self.init_delay_ms = 100
        self.draw_delay_ms = 50

    # -- plumbing -----------------------------------------------------

    def _has_channel(self) -> bool:
        return self._sender is not None or self._socket is not None

    def _send(self, message: str) -> None:
        if self._sender is not None:
            self._sender(message)
        elif self._socket is not None:
            self._socket.send(message)

    def _report(self, message: str, send: bool = True) -> GraphicsError:
        logger.warning("graphics client message: %s", message)
        if send and self._has_channel():
            self._send(f"msg Simuclient MESSAGE: {message}#")
        return GraphicsError(message)

    def _start_server(self, port: str) -> None:
        if self.server_command is None:
            return
        try:
            self._server = subprocess.Popen([*self.server_command, port])
        except OSError as error:
            logger.warning("could not start drawing server: %s", error)

    # -- public interface ---------------------------------------------

    def initialise(self, size_x: int, size_y: int) -> bool:
        """Start and connect to the server and open a plan of the given size."""
        self._initialised = False
        for size in (size_x, size_y):
            if size < MIN_PLAN_SIZE or size > MAX_PLAN_SIZE:
                raise self._report(
                    f"Plan size < {MIN_PLAN_SIZE} or > {MAX_PLAN_SIZE}."
                )
        if self._sender is None:
            port = self.port if self.port is not None else _dynamic_port()
            self._start_server(port)
            sleep_ms(self.startup_delay_ms)
            if self._socket is not None:
                self._socket.close()
                self._socket = None
            connection = _Socket()
            for _ in range(CONNECT_ATTEMPTS):
                if connection.connect(self.address, port):
                    break
                sleep_ms(self.retry_delay_ms)
            else:
                raise self._report(
                    "Connect not possible (firewall?). Graphics output is suppressed.",
                    send=False,
                )
            self._socket = connection
        self._send(f"init {size_x} {size_y}#")
        sleep_ms(self.init_delay_ms)
        self._initialised = True
        self._size_x = size_x
        self._size_y = size_y
        return True

    @property
    def initialised(self) -> bool:
        return self._initialised

    def draw_crossing(self, x: int, y: int) -> bool:
        """Draw a crossing; False if not initialised or ``x`` is off the plan."""
        if not self._initialised:
            return False
        if not 0 < x < self._size_x:
            return False
        if not 0 < y < self._size_y:
            raise self._report("Crossing outside the plan.")
        self._send(f"crossing {x} {y}#")
        return True

    def _check_road_name(self, name: str, new: bool) -> None:
        if not name:
            raise self._report("Road name is empty.")
        position = _first_invalid(name)
        # A disallowed first character is let through; later ones are rejected.
        if position is not None and position > 0:
            raise self._report(
                "Road name may only contain letters, digits, - and _, no blanks."
            )
        if new:
            if len(name) > MAX_ROAD_NAME:
                raise self._report(f"Road name too long (max. {MAX_ROAD_NAME} characters).")
            if name in self._roads:
                raise self._report("Road name already used.")
            self._roads[name] = 0
        elif name in self._roads:
            self._roads[name] += 1
        else:
            raise self._report("Road name is undefined.")

    def draw_road(
        self,
        forward: str,
        backward: str,
        length: float,
        points: Iterable[tuple[int, int]],
    ) -> bool:
        """Draw a two-way road through ``points`` (at least two (x, y) pairs)."""
        points = list(points)
        if not self._initialised:
            return False
        if length < 0:
            raise self._report("Road length below 0.")
        if len(points) < 2:
            raise self._report("At least 2 points are needed for a road.")
        self._check_road_name(forward, True)
        self._check_road_name(backward, True)
        fields = ["street", forward, backward, str(int(length)), str(len(points))]
        for x, y in points:
            if not 0 < x < self._size_x:
                raise self._report("Road point outside the plan or wrong count.")
            if not 0 < y < self._size_y:
                raise self._report("Road point outside the plan.")
            fields.extend((str(x), str(y)))
        self._send(" ".join(fields) + "#")
        return True

    def _draw_vehicle(
        self,
        kind: str,
        name: str,
        road: str,
        rel_position: float,
        speed: float,
        tank: float = 0.0,
    ) -> bool:
        if not self._initialised:
            return False
        if not name:
            raise self._report("Vehicle name is empty.")
        position = _first_invalid(name)
        if position is not None and position > 0:
            raise self._report(
                "Vehicle name may only contain letters, digits, - and _, no blanks."
            )
        if speed < 0.0:
            raise self._report("Speed < 0.")
        if speed > MAX_SPEED:
            raise self._report(f"Cars are no racing cars. Speed > {MAX_SPEED:g} km/h")
        if tank < 0.0:
            raise self._report("Tank < 0.0")
        if tank > MAX_TANK:
            raise self._report("Hidden tanks not allowed. Tank contents only < 1000 l")
        if not 0.0 <= rel_position <= 1.0:
            raise self._report("Relative position outside [0,1].")
        self._check_road_name(road, False)
        message = f"{kind} {name} {road} {rel_position:7.4f} {speed:6.1f}"
        if kind == "sc":
            message += f" {tank:6.1f}"
        self._send(message + "#")
        sleep_ms(self.draw_delay_ms)
        return True

    def draw_car(
        self, name: str, road: str, rel_position: float, speed: float, tank: float
    ) -> bool:
        """Show a car at ``rel_position`` (0..1) along ``road``."""
        return self._draw_vehicle("sc", name, road, rel_position, speed, tank)

    def draw_bike(self, name: str, road: str, rel_position: float, speed: float) -> bool:
        """Show a bicycle at ``rel_position`` (0..1) along ``road``."""
        return self._draw_vehicle("sb", name, road, rel_position, speed)

    def remove_vehicle(self, name: str) -> bool:
        """Take a vehicle off the display; the server needs no message for it."""
        return True

    def set_time(self, time: float) -> None:
        """Show ``time`` as the current simulation time; non-positive values keep the last."""
        if time > 0.0:
            self._time = time
        if self._initialised:
            self._send(f"time {self._time:g}#")

    @property
    def time(self) -> float:
        return self._time

    def close(self) -> None:
        """End the drawing session and drop the connection."""
        if not self._initialised:
            return
        logger.info("graphics client message: simulation finished")
        self._send("close#")
        if self._socket is not None:
            self._socket.close()
            self._socket = None
        self._roads.clear()
        self._initialised = False

    def __enter__(self) -> GraphicsClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()