"""A rectangular map of cells, each holding the survivors found there."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from dronerescue.safelist import ThreadSafeList


@dataclass(frozen=True)
class Coord:
    x: int
    y: int


@dataclass
class MapCell:
    coord: Coord
    survivors: ThreadSafeList = field(default_factory=ThreadSafeList)


class Grid:
    """A ``height`` by ``width`` map; cell (row, col) has coord (row, col)."""

    def __init__(self, height: int, width: int) -> None:
        if height < 0 or width < 0:
            raise ValueError(f"invalid map size {height}x{width}")
        self.height = height
        self.width = width
        self._rows = [
            [MapCell(Coord(row, col)) for col in range(width)] for row in range(height)
        ]
        print(f"Map initialized: {height}x{width}")

    def cell(self, row: int, col: int) -> MapCell:
        """Return the cell at ``row``, ``col``; raise IndexError outside the map."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"cell ({row}, {col}) outside {self.height}x{self.width} map")
        return self._rows[row][col]

    def cells(self) -> Iterator[MapCell]:
        """Yield every cell, row by row."""
        for row in self._rows:
            yield from row

    def clear(self) -> None:
        """Drop the survivors held in every cell."""
        for cell in self.cells():
            cell.survivors.clear()
        print("Map destroyed")