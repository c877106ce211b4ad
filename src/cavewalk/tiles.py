# Cell states and the direction table shared by walkers and the wall scan.

from enum import IntEnum


class CellState(IntEnum):
    EMPTY = 0
    FLOOR = 1
    WALL = 2


# y grows upward, so UP is +1.
UP = (0, 1)
DOWN = (0, -1)
LEFT = (-1, 0)
RIGHT = (1, 0)

# Cardinals first: walkers only ever draw from the first four entries,
# the diagonals are used by the wall scan.
DIRECTIONS = (
    UP, DOWN, LEFT, RIGHT,
    (1, 1), (1, -1), (-1, 1), (-1, -1),
)
CARDINALS = DIRECTIONS[:4]

_GLYPHS = {
    CellState.EMPTY: " ",
    CellState.FLOOR: ".",
    CellState.WALL: "#",
}

def is_filled(state: int) -> bool:
    return state != CellState.EMPTY

def glyph_for(state: int) -> str:
    return _GLYPHS[CellState(state)]
