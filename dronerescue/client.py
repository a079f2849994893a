"""A drone that reports its status to the server and flies the missions it is given."""

from __future__ import annotations

import argparse
import json
import socket
import sys
import time
from typing import Any

from dronerescue.protocol import ProtocolError, encode

SERVER_HOST = "127.0.0.1"
SERVER_PORT = 12345
BUFFER_SIZE = 512
MISSION_ID_LIMIT = 31
MAX_SPEED = 30
BATTERY_CAPACITY = 100
PAYLOAD = "medical"
BATTERY = 100
SPEED = 5
COMPLETION_DETAILS = "Delivered aid to survivor."


def _now(now: int | None) -> int:
    return int(time.time()) if now is None else now


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _messages(chunk: bytes) -> list[dict[str, Any]]:
    """The JSON objects in one received chunk; unreadable text is dropped."""
    text = chunk.decode("utf-8", errors="replace")
    decoder = json.JSONDecoder()
    found = []
    pos = 0
    while True:
        while pos < len(text) and text[pos].isspace():
            pos += 1
        if pos >= len(text):
            break
        try:
            obj, pos = decoder.raw_decode(text, pos)
        except json.JSONDecodeError:
            break
        if isinstance(obj, dict):
            found.append(obj)
    return found


class DroneClient:
    """The state of one drone and the messages it sends."""

    def __init__(self, drone_id: str, x: int = 10, y: int = 20) -> None:
        self.drone_id = drone_id
        self.x = x
        self.y = y
        self.status = "idle"
        self.target: tuple[int, int] | None = None
        self.mission_id = ""
        self.skip_status_update = False

    def handshake_message(self) -> dict[str, Any]:
        """The HANDSHAKE announcing this drone and its capabilities."""
        return {
            "type": "HANDSHAKE",
            "drone_id": self.drone_id,
            "capabilities": {
                "max_speed": MAX_SPEED,
                "battery_capacity": BATTERY_CAPACITY,
                "payload": PAYLOAD,
            },
        }

    def status_message(self, now: int | None = None) -> dict[str, Any]:
        """A STATUS_UPDATE with the current position and status."""
        return {
            "type": "STATUS_UPDATE",
            "drone_id": self.drone_id,
            "timestamp": _now(now),
            "location": {"x": self.x, "y": self.y},
            "status": self.status,
            "battery": BATTERY,
            "speed": SPEED,
        }

    def handle_message(self, message: dict[str, Any], now: int | None = None) -> list[dict[str, Any]]:
        """Apply a message from the server; return the replies to send."""
        kind = message.get("type")
        if kind == "ASSIGN_MISSION":
            mission_id = message.get("mission_id")
            if not isinstance(mission_id, str):
                raise ProtocolError("ASSIGN_MISSION without a mission_id")
            target = message.get("target")
            if not isinstance(target, dict):
                target = {}
            tx, ty = _as_int(target.get("x")), _as_int(target.get("y"))
            print(f"New mission assigned! Mission ID: {mission_id}, Target: ({tx},{ty})")
            self.target = (tx, ty)
            self.mission_id = mission_id[:MISSION_ID_LIMIT]
            self.status = "on_mission"
            return []
        if kind == "HEARTBEAT":
            return [
                {
                    "type": "HEARTBEAT_RESPONSE",
                    "drone_id": self.drone_id,
                    "timestamp": _now(now),
                }
            ]
        return []

    def step(self, now: int | None = None) -> list[dict[str, Any]]:
        """Move one cell towards the target; on arrival return the completion messages."""
        if self.status != "on_mission" or self.target is None:
            return []
        tx, ty = self.target
        if tx < 0 or ty < 0:
            return []
        if self.x != tx:
            self.x += 1 if self.x < tx else -1
        if self.y != ty:
            self.y += 1 if self.y < ty else -1
        if (self.x, self.y) != (tx, ty):
            return []

        print(f"Mission complete! Mission ID: {self.mission_id}")
        complete = {
            "type": "MISSION_COMPLETE",
            "drone_id": self.drone_id,
            "mission_id": self.mission_id,
            "timestamp": _now(now),
            "success": True,
            "details": COMPLETION_DETAILS,
        }
        self.status = "idle"
        self.target = None
        self.mission_id = ""
        self.skip_status_update = True
        return [complete, self.status_message(now)]


def run(drone_id: str, host: str = SERVER_HOST, port: int = SERVER_PORT) -> int:
    """Connect to the server and fly missions until the connection fails."""
    drone = DroneClient(drone_id)
    try:
        sock = socket.create_connection((host, port))
    except OSError as exc:
        print(f"connect: {exc}", file=sys.stderr)
        return 1

    with sock:
        print("Connected to server!")
        try:
            sock.sendall(encode(drone.handshake_message()))
        except OSError as exc:
            print(f"send: {exc}", file=sys.stderr)
            return 1
        sock.setblocking(False)
        while True:
            outgoing: list[dict[str, Any]] = []
            if drone.skip_status_update:
                drone.skip_status_update = False
            else:
                outgoing.append(drone.status_message())
            try:
                for message in outgoing:
                    sock.sendall(encode(message))
            except OSError as exc:
                print(f"send: {exc}", file=sys.stderr)
                break

            replies: list[dict[str, Any]] = []
            try:
                chunk = sock.recv(BUFFER_SIZE - 1)
            except BlockingIOError:
                chunk = b""
            except OSError as exc:
                print(f"recv: {exc}", file=sys.stderr)
                break
            for message in _messages(chunk):
                try:
                    replies.extend(drone.handle_message(message))
                except ProtocolError as exc:
                    print(f"Bad message from server: {exc}")
            replies.extend(drone.step())
            try:
                for message in replies:
                    sock.sendall(encode(message))
            except OSError as exc:
                print(f"send: {exc}", file=sys.stderr)
                break
            time.sleep(1)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Start a drone with the id given on the command line."""
    parser = argparse.ArgumentParser(description="Emergency drone client.")
    parser.add_argument("drone_id", nargs="?")
    parser.add_argument("--host", default=SERVER_HOST)
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    args = parser.parse_args(argv)
    if args.drone_id is None:
        print(f"Usage: {parser.prog} DRONE_ID")
        return 1
    try:
        return run(args.drone_id, args.host, args.port)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())