"""A window showing the grid, its survivors, the drones and their missions."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from dronerescue.state import DroneInfo, SurvivorSpot

WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 800
GRID_SIZE = 16
GRID_WIDTH = WINDOW_WIDTH // GRID_SIZE
GRID_HEIGHT = WINDOW_HEIGHT // GRID_SIZE
TITLE = "Emergency Drone Coordination"
FONT_PATH = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"
FONT_SIZE = 16

Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)
BLUE: Color = (0, 100, 255, 255)
RED: Color = (220, 0, 0, 255)
SURVIVOR_RED: Color = (200, 0, 0, 255)
GREEN: Color = (0, 200, 0, 255)
GRAY: Color = (128, 128, 128, 255)

LEGEND = (
    ("Blue Circle: Drone", BLUE),
    ("Red Square: Survivor (waiting)", RED),
    ("Gray Square: Survivor (rescued)", GRAY),
    ("Green Line: Active Mission", GREEN),
)


def in_bounds(x: int, y: int) -> bool:
    """True when grid cell (x, y) lies inside the window."""
    return 0 <= x < GRID_WIDTH and 0 <= y < GRID_HEIGHT


def cell_rect(x: int, y: int) -> tuple[int, int, int, int]:
    """The pixel rectangle (left, top, width, height) of grid cell (x, y)."""
    return (x * GRID_SIZE, y * GRID_SIZE, GRID_SIZE, GRID_SIZE)


def cell_center(x: int, y: int) -> tuple[int, int]:
    """The pixel at the centre of grid cell (x, y)."""
    half = GRID_SIZE // 2
    return (x * GRID_SIZE + half, y * GRID_SIZE + half)


def survivor_color(helped: bool) -> Color:
    """Gray for a helped survivor, red for one still waiting."""
    return GRAY if helped else SURVIVOR_RED


def circle_points(cx: int, cy: int, radius: int) -> Iterator[tuple[int, int]]:
    """The pixels of a filled circle of ``radius`` centred on (cx, cy)."""
    for w in range(radius * 2):
        dx = radius - w
        for h in range(radius * 2):
            dy = radius - h
            if dx * dx + dy * dy <= radius * radius:
                yield (cx + dx, cy + dy)


class View:
    """A pygame window that redraws the whole scene on every update."""

    def __init__(self) -> None:
        import pygame

        self._pygame = pygame
        pygame.init()
        pygame.font.init()
        try:
            self._font: Any = pygame.font.Font(FONT_PATH, FONT_SIZE)
        except (OSError, FileNotFoundError):
            self._font = None
        self._screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(TITLE)

    def _text(self, x: int, y: int, text: str, color: Color) -> None:
        if self._font is None:
            return
        surface = self._font.render(text, False, color)
        self._screen.blit(surface, (x, y))

    def _grid(self) -> None:
        draw = self._pygame.draw
        for x in range(0, WINDOW_WIDTH + 1, GRID_SIZE):
            draw.line(self._screen, BLACK, (x, 0), (x, WINDOW_HEIGHT))
        for y in range(0, WINDOW_HEIGHT + 1, GRID_SIZE):
            draw.line(self._screen, BLACK, (0, y), (WINDOW_WIDTH, y))

    def _survivors(self, survivors: Sequence[SurvivorSpot]) -> None:
        for number, spot in enumerate(survivors, start=1):
            if not in_bounds(spot.x, spot.y):
                continue
            color = survivor_color(spot.helped)
            rect = cell_rect(spot.x, spot.y)
            self._screen.fill(color, self._pygame.Rect(rect))
            self._text(rect[0] + 2, rect[1] - 18, f"S{number}", color)

    def _drones(self, drones: Sequence[DroneInfo]) -> None:
        half = GRID_SIZE // 2
        for drone in drones:
            if not in_bounds(drone.x, drone.y):
                continue
            cx, cy = cell_center(drone.x, drone.y)
            for point in circle_points(cx, cy, half):
                self._screen.set_at(point, BLUE)
            self._text(cx - half, cy + half, drone.id, BLUE)
            if drone.has_target and in_bounds(drone.target_x, drone.target_y):
                self._pygame.draw.line(
                    self._screen,
                    GREEN,
                    (cx, cy),
                    cell_center(drone.target_x, drone.target_y),
                )

    def _panel(self, survivor_count: int, drone_count: int) -> None:
        self._text(20, 20, f"Drones: {drone_count}   Survivors: {survivor_count}", BLACK)
        self._text(20, 50, "Legend:", BLACK)
        for row, (label, color) in enumerate(LEGEND):
            self._text(40, 70 + 20 * row, label, color)

    def update(self, survivors: Sequence[SurvivorSpot], drones: Sequence[DroneInfo]) -> None:
        """Redraw the grid, survivors, drones, missions and legend."""
        self._pygame.event.pump()
        self._screen.fill(WHITE)
        self._grid()
        self._survivors(survivors)
        self._drones(drones)
        self._panel(len(survivors), len(drones))
        self._pygame.display.flip()

    def close(self) -> None:
        """Close the window."""
        self._pygame.quit()