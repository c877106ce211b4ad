from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import InvalidConfig, OutOfBounds
from .render.sink import RendererSink
from .tiles import CellState, glyph_for

MIN_SIDE = 3  # clamping walkers to [1, dim-2] needs a one-cell border


@dataclass
class Grid:
    """
    Dense row-major cell buffer plus a running count of non-empty cells.

    Every committed write is forwarded to ``sink`` (if any) in write order.
    ``filled_count`` is maintained on each ``set`` and never recomputed.
    """
    width: int
    height: int
    sink: Optional[RendererSink] = None
    buf: List[int] = field(init=False, repr=False, default_factory=list)
    filled_count: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.width < MIN_SIDE or self.height < MIN_SIDE:
            raise InvalidConfig(
                f"grid must be at least {MIN_SIDE}x{MIN_SIDE}, got {self.width}x{self.height}"
            )
        self.buf = [CellState.EMPTY] * (self.width * self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def idx(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise OutOfBounds((x, y), self.width, self.height)
        return y * self.width + x

    def get(self, x: int, y: int) -> CellState:
        return self.buf[self.idx(x, y)]

    def set(self, x: int, y: int, state: CellState) -> None:
        i = self.idx(x, y)
        prev = self.buf[i]
        if prev == CellState.EMPTY and state != CellState.EMPTY:
            self.filled_count += 1
        elif prev != CellState.EMPTY and state == CellState.EMPTY:
            self.filled_count -= 1
        self.buf[i] = state
        if self.sink is not None:
            self.sink.on_cell_changed((x, y), state)

    def filled_fraction(self) -> float:
        return self.filled_count / self.area

    def count(self, state: CellState) -> int:
        return sum(1 for v in self.buf if v == state)

    def cells(self) -> List[Tuple[int, int, CellState]]:
        return [(i % self.width, i // self.width, v) for i, v in enumerate(self.buf)]

    def as_matrix(self) -> List[List[CellState]]:
        # [y][x], y = 0 is the bottom row
        out = []
        for y in range(self.height):
            out.append(self.buf[y * self.width:(y + 1) * self.width])
        return out

    def to_ascii(self) -> str:
        # Top row first since y grows upward.
        rows = []
        for y in range(self.height - 1, -1, -1):
            rows.append("".join(glyph_for(self.get(x, y)) for x in range(self.width)))
        return "\n".join(rows)
