"""Survivors waiting for rescue and a background generator for them."""

from __future__ import annotations

import random
import threading
import time
from dataclasses import dataclass

from dronerescue.safelist import ThreadSafeList

AREA_WIDTH = 800
AREA_HEIGHT = 600


@dataclass
class Survivor:
    """A person to be rescued; ``rescued_at`` is 0 while still waiting."""

    id: int
    x: float
    y: float
    created_at: int
    rescued_at: int = 0

    def is_active(self) -> bool:
        """True while the survivor has not been rescued."""
        return self.rescued_at == 0

    def mark_rescued(self, when: int | None = None) -> None:
        """Record the rescue time (now if not given)."""
        self.rescued_at = int(time.time()) if when is None else when


def make_random_survivor(
    survivor_id: int, rng: random.Random | None = None, now: int | None = None
) -> Survivor:
    """Create a survivor at a random spot within the rescue area."""
    rng = rng or random.Random()
    return Survivor(
        id=survivor_id,
        x=float(rng.randrange(AREA_WIDTH)),
        y=float(rng.randrange(AREA_HEIGHT)),
        created_at=int(time.time()) if now is None else now,
    )


def run_survivor_generator(
    survivors: ThreadSafeList,
    stop: threading.Event,
    rng: random.Random | None = None,
) -> None:
    """Append a new survivor every 2 to 5 seconds until ``stop`` is set."""
    rng = rng or random.Random()
    next_id = 1
    while not stop.is_set():
        survivor = make_random_survivor(next_id, rng)
        next_id += 1
        survivors.append(survivor)
        print(f"Survivor generated: id={survivor.id}")
        stop.wait(rng.randint(2, 5))