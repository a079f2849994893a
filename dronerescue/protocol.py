"""JSON messages exchanged between the coordination server and its drones."""

from __future__ import annotations

import json
import time
from typing import Any

SESSION_ID = "S123"
STATUS_UPDATE_INTERVAL = 5
HEARTBEAT_INTERVAL = 10
MISSION_LIFETIME = 600
MISSION_PRIORITY = "high"
MISSION_CHECKSUM = "a1b2c3"


class ProtocolError(ValueError):
    """Raised when a message cannot be read or lacks a required field."""


def _now(now: int | None) -> int:
    return int(time.time()) if now is None else now


def encode(message: dict[str, Any]) -> bytes:
    """Serialise a message to the bytes sent on the wire."""
    return json.dumps(message).encode("utf-8")


def decode(data: bytes | str) -> dict[str, Any]:
    """Parse one message; raise ProtocolError unless it is a JSON object."""
    try:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        message = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ProtocolError(f"malformed message: {exc}") from exc
    if not isinstance(message, dict):
        raise ProtocolError("message is not a JSON object")
    return message


def handshake_ack(session_id: str = SESSION_ID) -> dict[str, Any]:
    """The server's answer to a drone's HANDSHAKE."""
    return {
        "type": "HANDSHAKE_ACK",
        "session_id": session_id,
        "config": {
            "status_update_interval": STATUS_UPDATE_INTERVAL,
            "heartbeat_interval": HEARTBEAT_INTERVAL,
        },
    }


def heartbeat(now: int | None = None) -> dict[str, Any]:
    """A HEARTBEAT message stamped with ``now`` (current time if omitted)."""
    return {"type": "HEARTBEAT", "timestamp": _now(now)}


def assign_mission(mission_id: str, x: int, y: int, now: int | None = None) -> dict[str, Any]:
    """An ASSIGN_MISSION message sending a drone to (x, y)."""
    return {
        "type": "ASSIGN_MISSION",
        "mission_id": mission_id,
        "priority": MISSION_PRIORITY,
        "target": {"x": x, "y": y},
        "expiry": _now(now) + MISSION_LIFETIME,
        "checksum": MISSION_CHECKSUM,
    }


def mission_id_for(index: int) -> str:
    """The mission id naming the survivor at ``index``."""
    return f"M{index:03d}"