import threading
import time

from dronerescue.ai import (
    assign_oldest_survivor,
    distance,
    nearest_idle_drone,
    oldest_waiting_survivor,
    run_ai_controller,
)
from dronerescue.drone import Drone, DroneStatus
from dronerescue.safelist import ThreadSafeList
from dronerescue.survivor import Survivor


def _list(*items):
    result = ThreadSafeList()
    for item in items:
        result.append(item)
    return result


def test_distance_pythagorean():
    assert distance(0, 0, 3, 4) == 5.0


def test_distance_is_symmetric_and_zero_on_same_point():
    assert distance(1.5, 2.5, 7.0, -3.0) == distance(7.0, -3.0, 1.5, 2.5)
    assert distance(4.0, 4.0, 4.0, 4.0) == 0.0


def test_oldest_waiting_skips_rescued():
    first = Survivor(id=1, x=0.0, y=0.0, created_at=0, rescued_at=5)
    second = Survivor(id=2, x=1.0, y=1.0, created_at=1)
    third = Survivor(id=3, x=2.0, y=2.0, created_at=2)
    assert oldest_waiting_survivor([first, second, third]) is second


def test_oldest_waiting_none_when_all_rescued():
    s = Survivor(id=1, x=0.0, y=0.0, created_at=0, rescued_at=5)
    assert oldest_waiting_survivor([s]) is None


def test_nearest_idle_ignores_busy_drones():
    busy = Drone(id=1, x=10.0, y=10.0, status=DroneStatus.ON_MISSION)
    far = Drone(id=2, x=500.0, y=500.0)
    near = Drone(id=3, x=20.0, y=20.0)
    assert nearest_idle_drone([busy, far, near], 10.0, 10.0) is near


def test_nearest_idle_tie_goes_to_first():
    a = Drone(id=1, x=0.0, y=10.0)
    b = Drone(id=2, x=10.0, y=0.0)
    assert nearest_idle_drone([a, b], 0.0, 0.0) is a


def test_nearest_idle_none_without_idle_drones():
    busy = Drone(id=1, x=0.0, y=0.0, status=DroneStatus.MOVING)
    assert nearest_idle_drone([busy], 0.0, 0.0) is None


def test_assign_pairs_oldest_with_nearest():
    near = Drone(id=7, x=100.0, y=100.0)
    far = Drone(id=8, x=700.0, y=500.0)
    oldest = Survivor(id=1, x=110.0, y=90.0, created_at=0)
    newer = Survivor(id=2, x=690.0, y=510.0, created_at=1)
    drones, survivors = _list(near, far), _list(oldest, newer)

    result = assign_oldest_survivor(drones, survivors, now=1234)

    assert result == (near, oldest)
    assert near.status is DroneStatus.ON_MISSION
    assert near.assigned_survivor_id == oldest.id
    assert oldest.rescued_at == 1234
    assert far.status is DroneStatus.IDLE
    assert newer.is_active()


def test_assign_without_idle_drone_leaves_survivor_waiting():
    busy = Drone(id=1, x=0.0, y=0.0, status=DroneStatus.ON_MISSION)
    s = Survivor(id=1, x=0.0, y=0.0, created_at=0)
    assert assign_oldest_survivor(_list(busy), _list(s), now=10) is None
    assert s.is_active()


def test_assign_without_waiting_survivor():
    d = Drone(id=1, x=0.0, y=0.0)
    s = Survivor(id=1, x=0.0, y=0.0, created_at=0, rescued_at=3)
    assert assign_oldest_survivor(_list(d), _list(s)) is None
    assert d.status is DroneStatus.IDLE


def test_controller_thread_assigns_until_stopped():
    drones = _list(Drone(id=1, x=0.0, y=0.0), Drone(id=2, x=50.0, y=50.0))
    survivors = _list(
        Survivor(id=1, x=1.0, y=1.0, created_at=0),
        Survivor(id=2, x=49.0, y=49.0, created_at=1),
    )
    stop = threading.Event()
    thread = threading.Thread(
        target=run_ai_controller, args=(drones, survivors, stop, 0.01)
    )
    thread.start()
    deadline = time.monotonic() + 5
    while any(s.is_active() for s in survivors) and time.monotonic() < deadline:
        time.sleep(0.01)
    stop.set()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert not any(s.is_active() for s in survivors)
    assert sorted(d.assigned_survivor_id for d in drones) == [1, 2]