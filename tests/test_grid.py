import pytest

from dronerescue.grid import Coord, Grid
from dronerescue.survivor import Survivor


def test_cells_carry_their_coordinates():
    grid = Grid(40, 30)
    assert grid.cell(0, 0).coord == Coord(0, 0)
    assert grid.cell(39, 29).coord == Coord(39, 29)
    assert grid.cell(7, 3).coord == Coord(7, 3)


def test_cells_iterates_row_major():
    grid = Grid(3, 4)
    coords = [c.coord for c in grid.cells()]
    assert len(coords) == 3 * 4
    assert coords == sorted(coords, key=lambda c: (c.x, c.y))
    assert len(set(coords)) == len(coords)


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (40, 0), (0, 30)])
def test_cell_outside_raises(row, col):
    grid = Grid(40, 30)
    with pytest.raises(IndexError):
        grid.cell(row, col)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Grid(-1, 5)


def test_cell_survivor_lists_are_independent():
    grid = Grid(2, 2)
    grid.cell(0, 1).survivors.append(Survivor(id=1, x=0.0, y=1.0, created_at=0))
    assert len(grid.cell(0, 1).survivors) == 1
    assert len(grid.cell(1, 0).survivors) == 0


def test_clear_empties_every_cell():
    grid = Grid(2, 3)
    for i, cell in enumerate(grid.cells()):
        cell.survivors.append(Survivor(id=i, x=0.0, y=0.0, created_at=0))
    grid.clear()
    assert all(len(c.survivors) == 0 for c in grid.cells())