# src/cavewalk/mapgen/walls.py
# Wall phase: ring every floor cell with walls on its 8 neighbours.

import logging
from typing import Generator, List, Tuple

from ..grid import Grid
from ..tiles import CellState, DIRECTIONS
from ..timing import Pause, StepPacing

logger = logging.getLogger(__name__)


def surround_walls(grid: Grid, pacing: StepPacing = StepPacing()) -> Generator[Pause, None, int]:
    """
    Single pass, top row first (y = height-1 down to 0), left to right.
    Floor cells are always interior, so their neighbours are in range.
    Yields after each floor cell that placed at least one wall; returns the
    number of walls placed.
    """
    walls = 0
    for y in range(grid.height - 1, -1, -1):
        for x in range(grid.width):
            if grid.get(x, y) != CellState.FLOOR:
                continue
            placed = False
            for dx, dy in DIRECTIONS:
                nx, ny = x + dx, y + dy
                if grid.get(nx, ny) == CellState.EMPTY:
                    grid.set(nx, ny, CellState.WALL)
                    walls += 1
                    placed = True
            if placed:
                yield pacing.request()
    logger.debug("placed %d walls", walls)
    return walls


def unwalled_floor_cells(grid: Grid) -> List[Tuple[int, int]]:
    """Floor cells that still have an empty 8-neighbour."""
    out = []
    for x, y, v in grid.cells():
        if v != CellState.FLOOR:
            continue
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if grid.in_bounds(nx, ny) and grid.get(nx, ny) == CellState.EMPTY:
                out.append((x, y))
                break
    return out
