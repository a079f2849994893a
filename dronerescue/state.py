"""Shared server state: survivors on the grid and connected drones."""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field, replace
from typing import Any

from dronerescue.protocol import assign_mission, mission_id_for

MAP_WIDTH = 75
MAP_HEIGHT = 50
MAX_SURVIVORS = 100
MAX_DRONES = 100
DRONE_ID_LIMIT = 31
STATUS_LIMIT = 15
_FAR_AWAY = 1_000_000


@dataclass
class SurvivorSpot:
    """A survivor on the grid, waiting until ``helped``."""

    x: int
    y: int
    helped: bool = False
    assigned: bool = False


@dataclass
class DroneInfo:
    """What the server knows about a connected drone."""

    id: str
    x: int
    y: int
    status: str
    connection: Any = field(default=None, repr=False, compare=False)
    target_x: int = 0
    target_y: int = 0
    has_target: bool = False


class Coordinator:
    """Survivors and drones, guarded by one lock."""

    def __init__(
        self,
        width: int = MAP_WIDTH,
        height: int = MAP_HEIGHT,
        max_survivors: int = MAX_SURVIVORS,
        max_drones: int = MAX_DRONES,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid map size {width}x{height}")
        if max_survivors > width * height:
            raise ValueError("more survivors allowed than the map has cells")
        self.width = width
        self.height = height
        self.max_survivors = max_survivors
        self.max_drones = max_drones
        self._survivors: list[SurvivorSpot] = []
        self._drones: list[DroneInfo] = []
        self._lock = threading.RLock()

    def spawn_survivor(self, rng: random.Random | None = None) -> SurvivorSpot | None:
        """Place a survivor on a free cell; None once the limit is reached."""
        rng = rng or random.Random()
        with self._lock:
            if len(self._survivors) >= self.max_survivors:
                return None
            occupied = {(s.x, s.y) for s in self._survivors}
            while True:
                x, y = rng.randrange(self.width), rng.randrange(self.height)
                if (x, y) not in occupied:
                    break
            spot = SurvivorSpot(x, y)
            self._survivors.append(spot)
            return replace(spot)

    def update_drone(
        self, drone_id: str, x: int, y: int, status: str, connection: Any
    ) -> DroneInfo | None:
        """Record a drone's position and status, registering it if new.

        Returns the drone's record, or None when it is new and the fleet is full.
        """
        drone_id = drone_id[:DRONE_ID_LIMIT]
        status = status[:STATUS_LIMIT]
        with self._lock:
            drone = next((d for d in self._drones if d.id == drone_id), None)
            if drone is not None:
                drone.x, drone.y, drone.status = x, y, status
            elif len(self._drones) < self.max_drones:
                drone = DroneInfo(drone_id, x, y, status, connection)
                self._drones.append(drone)
            else:
                return None
            return replace(drone)

    def complete_mission(self, mission_id: str, connection: Any) -> SurvivorSpot | None:
        """Mark the mission's survivor helped and free the reporting drone.

        Returns the helped survivor, or None when the mission id is unknown.
        """
        with self._lock:
            helped = None
            for index, spot in enumerate(self._survivors):
                if mission_id_for(index) == mission_id:
                    spot.helped = True
                    spot.assigned = False
                    helped = replace(spot)
                    break
            for drone in self._drones:
                if drone.connection is connection:
                    drone.has_target = False
                    break
            return helped

    def assign_missions(self, now: int | None = None) -> list[tuple[DroneInfo, dict[str, Any]]]:
        """Give each idle, untargeted drone its closest waiting survivor.

        Returns each assigned drone with the mission message meant for it.
        """
        assignments = []
        with self._lock:
            for drone in self._drones:
                if drone.status != "idle" or drone.has_target:
                    continue
                closest, best = None, _FAR_AWAY
                for index, spot in enumerate(self._survivors):
                    if spot.helped or spot.assigned:
                        continue
                    dist = (drone.x - spot.x) ** 2 + (drone.y - spot.y) ** 2
                    if dist < best:
                        closest, best = index, dist
                if closest is None:
                    continue
                spot = self._survivors[closest]
                message = assign_mission(mission_id_for(closest), spot.x, spot.y, now)
                drone.status = "on_mission"
                spot.assigned = True
                drone.target_x, drone.target_y = spot.x, spot.y
                drone.has_target = True
                assignments.append((replace(drone), message))
        return assignments

    def snapshot(self) -> tuple[list[SurvivorSpot], list[DroneInfo]]:
        """Copies of the survivors and drones, in order."""
        with self._lock:
            return [replace(s) for s in self._survivors], [replace(d) for d in self._drones]

    def connections(self) -> list[Any]:
        """The connection of every known drone."""
        with self._lock:
            return [d.connection for d in self._drones]

    def report(self) -> str:
        """A human-readable listing of drones and survivors."""
        survivors, drones = self.snapshot()
        lines = ["---- Drones ----"]
        lines += [
            f"ID: {d.id} | Location: ({d.x}, {d.y}) | Status: {d.status}" for d in drones
        ]
        lines.append("-----------------------")
        lines.append("---- Survivors ----")
        lines += [
            f"Survivor {i}: ({s.x}, {s.y}) - {'HELPED' if s.helped else 'WAITING'}"
            for i, s in enumerate(survivors)
        ]
        lines.append("-------------------------")
        return "\n".join(lines)