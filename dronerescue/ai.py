"""Mission assignment: the oldest waiting survivor goes to the nearest idle drone."""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Iterable

from dronerescue.drone import Drone, DroneStatus
from dronerescue.safelist import ThreadSafeList
from dronerescue.survivor import Survivor


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(x1 - x2, y1 - y2)


def oldest_waiting_survivor(survivors: Iterable[Survivor]) -> Survivor | None:
    """The first survivor in order that has not been rescued, or None."""
    return next((s for s in survivors if s.is_active()), None)


def nearest_idle_drone(drones: Iterable[Drone], x: float, y: float) -> Drone | None:
    """The idle drone closest to (x, y); the earliest one wins a tie."""
    idle = [d for d in drones if d.status is DroneStatus.IDLE]
    if not idle:
        return None
    return min(idle, key=lambda d: distance(d.x, d.y, x, y))


def assign_oldest_survivor(
    drones: ThreadSafeList, survivors: ThreadSafeList, now: int | None = None
) -> tuple[Drone, Survivor] | None:
    """Pair the oldest waiting survivor with the nearest idle drone.

    Returns the pair that was assigned, or None when nothing could be.
    """
    with survivors.locked() as items:
        survivor = oldest_waiting_survivor(items)
    if survivor is None:
        return None

    with drones.locked() as fleet:
        drone = nearest_idle_drone(fleet, survivor.x, survivor.y)
        if drone is None:
            return None
        drone.assign(survivor.id)
        print(
            f"AI: Drone {drone.id} -> Survivor {survivor.id} "
            f"({survivor.x:.1f},{survivor.y:.1f})"
        )
        with survivors.locked():
            survivor.mark_rescued(int(time.time()) if now is None else now)
    return drone, survivor


def run_ai_controller(
    drones: ThreadSafeList,
    survivors: ThreadSafeList,
    stop: threading.Event,
    interval: float = 0.2,
) -> None:
    """Assign missions every ``interval`` seconds until ``stop`` is set."""
    while not stop.is_set():
        assign_oldest_survivor(drones, survivors)
        stop.wait(interval)