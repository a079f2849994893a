"""The coordination server: accepts drones, assigns missions, sends heartbeats."""

from __future__ import annotations

import argparse
import json
import random
import select
import socket
import sys
import threading
from typing import Any

from dronerescue.protocol import ProtocolError, encode, handshake_ack, heartbeat
from dronerescue.state import Coordinator

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 12345
BUFFER_SIZE = 1024
TICK = 0.1
HEARTBEAT_TICKS = 100
SURVIVOR_PERIOD = 5.0


def _split_messages(chunk: bytes) -> list[dict[str, Any]]:
    """Read the JSON objects in one received chunk, dropping what cannot be parsed."""
    text = chunk.decode("utf-8", errors="replace")
    decoder = json.JSONDecoder()
    messages = []
    pos = 0
    while True:
        while pos < len(text) and text[pos].isspace():
            pos += 1
        if pos >= len(text):
            break
        try:
            obj, pos = decoder.raw_decode(text, pos)
        except json.JSONDecodeError:
            print(f"Non-JSON message from drone: {text[pos:]}")
            break
        if isinstance(obj, dict):
            messages.append(obj)
    return messages


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class DroneServer:
    """A TCP server that coordinates drones through a Coordinator."""

    def __init__(
        self, coordinator: Coordinator, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT
    ) -> None:
        self.coordinator = coordinator
        self._send_lock = threading.Lock()
        self._rng = random.Random()
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            self._socket.bind((host, port))
            self._socket.listen(10)
        except OSError:
            self._socket.close()
            raise

    @property
    def address(self) -> tuple[str, int]:
        """The (host, port) the server listens on."""
        return self._socket.getsockname()

    def __enter__(self) -> DroneServer:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _send(self, connection: Any, message: dict[str, Any]) -> None:
        with self._send_lock:
            try:
                connection.sendall(encode(message))
            except OSError as exc:
                print(f"send failed: {exc}")

    def handle_message(self, message: dict[str, Any], connection: Any) -> None:
        """Apply one message received from a drone on ``connection``."""
        kind = message.get("type")
        if not isinstance(kind, str):
            return
        if kind == "STATUS_UPDATE":
            drone_id = message.get("drone_id")
            if not isinstance(drone_id, str):
                raise ProtocolError("STATUS_UPDATE without a drone_id")
            location = message.get("location")
            if not isinstance(location, dict):
                location = {}
            status = message.get("status")
            self.coordinator.update_drone(
                drone_id,
                _as_int(location.get("x")),
                _as_int(location.get("y")),
                status if isinstance(status, str) else "",
                connection,
            )
        elif kind == "MISSION_COMPLETE":
            print("MISSION_COMPLETE received")
            mission_id = message.get("mission_id")
            if not isinstance(mission_id, str):
                raise ProtocolError("MISSION_COMPLETE without a mission_id")
            self.coordinator.complete_mission(mission_id, connection)
        print(self.coordinator.report())

    def _handle_safely(self, message: dict[str, Any], connection: Any) -> None:
        try:
            self.handle_message(message, connection)
        except ProtocolError as exc:
            print(f"Bad message from drone: {exc}")

    def handle_drone(self, connection: socket.socket) -> None:
        """Serve one drone connection until it closes."""
        print("New drone connection")
        with connection:
            try:
                chunk = connection.recv(BUFFER_SIZE)
            except OSError:
                return
            if not chunk:
                return
            messages = _split_messages(chunk)
            if messages and messages[0].get("type") == "HANDSHAKE":
                self._send(connection, handshake_ack())
                print("Drone handshake received, ACK sent.")
            for message in messages[1:]:
                self._handle_safely(message, connection)
            while True:
                try:
                    chunk = connection.recv(BUFFER_SIZE)
                except OSError:
                    break
                if not chunk:
                    break
                print(f"Received: {chunk.decode('utf-8', errors='replace')}")
                for message in _split_messages(chunk):
                    self._handle_safely(message, connection)
        print("Drone connection closed")

    def send_heartbeat_to_all(self, now: int | None = None) -> None:
        """Send a HEARTBEAT to every known drone."""
        for connection in self.coordinator.connections():
            self._send(connection, heartbeat(now))

    def dispatch_missions(self, now: int | None = None) -> list[tuple[Any, dict[str, Any]]]:
        """Assign missions and send each to its drone; return the assignments."""
        assignments = self.coordinator.assign_missions(now)
        for drone, message in assignments:
            self._send(drone.connection, message)
            target = message["target"]
            print(f"Mission assigned to drone {drone.id}: Survivor ({target['x']},{target['y']})")
        return assignments

    def _generate_survivors(self, stop: threading.Event) -> None:
        while not stop.is_set():
            self.coordinator.spawn_survivor(self._rng)
            stop.wait(SURVIVOR_PERIOD)

    def serve_forever(self, view: Any = None, stop: threading.Event | None = None) -> None:
        """Run the main loop until ``stop`` is set, redrawing ``view`` each tick."""
        stop = stop or threading.Event()
        threading.Thread(target=self._generate_survivors, args=(stop,), daemon=True).start()
        ticks = 0
        while not stop.is_set():
            if view is not None:
                view.update(*self.coordinator.snapshot())
            self.dispatch_missions()
            readable, _, _ = select.select([self._socket], [], [], TICK)
            if readable:
                try:
                    connection, _ = self._socket.accept()
                except OSError as exc:
                    print(f"accept: {exc}")
                    continue
                threading.Thread(target=self.handle_drone, args=(connection,), daemon=True).start()
            ticks += 1
            if ticks >= HEARTBEAT_TICKS:
                self.send_heartbeat_to_all()
                ticks = 0

    def close(self) -> None:
        """Stop listening."""
        self._socket.close()


def main(argv: list[str] | None = None) -> int:
    """Start the coordination server."""
    parser = argparse.ArgumentParser(description="Emergency drone coordination server.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--headless", action="store_true", help="run without a window")
    args = parser.parse_args(argv)

    print("Server starting")
    coordinator = Coordinator()
    view = None
    if not args.headless:
        from dronerescue.view import View

        view = View()
    try:
        with DroneServer(coordinator, args.host, args.port) as server:
            print(f"Server listening (port {args.port})...")
            server.serve_forever(view)
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        print(f"server: {exc}", file=sys.stderr)
        return 1
    finally:
        if view is not None:
            view.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())