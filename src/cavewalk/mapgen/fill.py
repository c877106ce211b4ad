# src/cavewalk/mapgen/fill.py
from ..grid import Grid
from ..tiles import CellState


def fill_empty(grid: Grid) -> int:
    """
    Re-write every remaining empty cell as empty so the sink sees the full
    map bounds. State does not change, so running it twice is the same as once.
    """
    n = 0
    for x in range(grid.width):
        for y in range(grid.height):
            if grid.get(x, y) == CellState.EMPTY:
                grid.set(x, y, CellState.EMPTY)
                n += 1
    return n
