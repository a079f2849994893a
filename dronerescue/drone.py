"""Drones and the worker loop that carries out their missions."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass


class DroneStatus(enum.Enum):
    IDLE = "idle"
    MOVING = "moving"
    ON_MISSION = "on_mission"


@dataclass
class Drone:
    """A drone; ``assigned_survivor_id`` is None when it has no mission."""

    id: int
    x: float
    y: float
    status: DroneStatus = DroneStatus.IDLE
    assigned_survivor_id: int | None = None

    def assign(self, survivor_id: int) -> None:
        """Send the drone on a mission to the given survivor."""
        self.status = DroneStatus.ON_MISSION
        self.assigned_survivor_id = survivor_id

    def finish_mission(self) -> None:
        """Return the drone to idle with no assignment."""
        self.status = DroneStatus.IDLE
        self.assigned_survivor_id = None


def run_drone(
    drone: Drone,
    stop: threading.Event,
    mission_time: float = 2.0,
    poll_interval: float = 0.1,
) -> None:
    """Carry out missions as they are assigned until ``stop`` is set."""
    while not stop.is_set():
        if drone.status is DroneStatus.ON_MISSION:
            print(f"Drone {drone.id} rescuing survivor {drone.assigned_survivor_id}")
            stop.wait(mission_time)
            drone.finish_mission()
        stop.wait(poll_interval)