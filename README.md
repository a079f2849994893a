# dronerescue

A small emergency-response simulation. A coordination server places survivors
at random free cells of a 75 by 50 grid. Drones connect to it over TCP, report
where they are and what they are doing, and receive rescue missions. Each idle
drone without a target is sent to the closest survivor who is still waiting and
not yet assigned. A pygame window shows the whole scene.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the simulation

Start the server first:

```
dronerescue-server
```

Options:

- `--host` (default `0.0.0.0`) and `--port` (default `12345`) set where it listens.
- `--headless` runs without opening a window.

The server adds a survivor every 5 seconds, up to 100. It checks for new
connections and assigns missions about every 100 ms, and sends a `HEARTBEAT` to
every known drone about every 10 seconds. After each message from a drone it
prints a listing of drones and survivors. Stop it with Ctrl+C.

Then start one or more drones in other terminals, each with its own identifier:

```
dronerescue-client D1
dronerescue-client D2
```

The client takes the same `--host` (default `127.0.0.1`) and `--port`
(default `12345`) options. A drone starts at cell (10, 20). It sends a `HANDSHAKE`,
then a `STATUS_UPDATE` once a second. When the server sends `ASSIGN_MISSION`,
the drone moves one step per second toward the target, on each axis at once. On
arrival it sends `MISSION_COMPLETE` followed by an idle `STATUS_UPDATE`, and
then skips the next regular update. It answers each `HEARTBEAT` with a
`HEARTBEAT_RESPONSE`.

## The map

- Blue circle: a drone, labelled with its identifier
- Red square: a survivor who is waiting for help, labelled `S1`, `S2`, ...
- Gray square: a survivor who has been helped
- Green line: an active mission, from a drone to its target

Labels and the legend are drawn with the DejaVu Sans Bold font at
`/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf`. If that file is missing,
the map is drawn without any text.

## Using the pieces as a library

- `dronerescue.state.Coordinator` holds the survivors (`SurvivorSpot`) and
  drones (`DroneInfo`) behind one lock. It provides `spawn_survivor`,
  `update_drone`, `complete_mission`, `assign_missions`, `snapshot`,
  `connections` and `report`, and does no networking.
- `dronerescue.protocol` builds and parses the JSON messages: `encode`,
  `decode` (raises `ProtocolError`), `handshake_ack`, `heartbeat`,
  `assign_mission` and `mission_id_for`. A mission id names a survivor by its
  index, for example `M000`.
- `dronerescue.server.DroneServer` carries these messages over sockets. It is
  a context manager, its `address` gives the bound host and port, and
  `serve_forever(view, stop)` runs until the `threading.Event` is set.
- `dronerescue.client.DroneClient` holds one drone's state and builds its
  messages. `handle_message` and `step` return the replies to send, and
  `dronerescue.client.run` connects it to a server.
- `dronerescue.view` draws the scene with pygame (`View`) and offers the pixel
  helpers `in_bounds`, `cell_rect`, `cell_center`, `survivor_color` and
  `circle_points`.

There is also a separate, thread-based model that runs within one process:

- `dronerescue.safelist.ThreadSafeList` is an ordered list in which every
  operation holds one lock.
- `dronerescue.survivor` has `Survivor`, `make_random_survivor` and
  `run_survivor_generator`, which adds a survivor every 2 to 5 seconds on an
  800 by 600 area.
- `dronerescue.drone` has `Drone`, `DroneStatus` and `run_drone`.
- `dronerescue.grid.Grid` is a map of cells, each with its own survivor list.
- `dronerescue.ai` pairs the oldest waiting survivor with the nearest idle
  drone (`assign_oldest_survivor`, `run_ai_controller`).

## What it does not do

- The thread-based model has no command and no window. You run it from
  your own code.
- The server never forgets a drone. A drone stays listed after it disconnects,
  and heartbeat responses are not checked.
- The map window does not react to being closed. Stop the server from the
  terminal.
- Nothing is saved. All state is lost when the server stops.