from dataclasses import dataclass
from typing import Tuple

from .tiles import CARDINALS

A = 16807
M = 0x7FFFFFFF  # 2^31-1

def pm_next(state: int) -> int:
    return (state * A) % M

def low16_signed_abs(x32: int) -> int:
    w = x32 & 0xFFFF
    if w & 0x8000:
        w = -((~w + 1) & 0xFFFF)
    return abs(w)

@dataclass
class PMRandom:
    """
    Park–Miller minimal standard generator.

    The one random stream a generation run consumes. Callers inject it so a
    seed fully determines the map; nothing in the package reaches for a
    process-wide generator.
    """
    state: int

    def __post_init__(self) -> None:
        if not (0 < self.state < M):
            raise ValueError(f"PMRandom state must be in 1..{M - 1}, got {self.state}")

    @classmethod
    def from_seed(cls, seed: int) -> "PMRandom":
        # 0 is a fixed point of the recurrence, so fold into 1..M-1.
        return cls(1 + (seed % (M - 1)))

    def next32(self) -> int:
        self.state = pm_next(self.state)
        return self.state

    def bounded(self, n: int) -> int:
        assert n > 0
        w = low16_signed_abs(self.next32())
        return (w % n) + 1

    def value(self) -> float:
        # Open interval (0, 1): `value() <= 0.0` never fires, `<= 1.0` always does.
        return self.next32() / M

    def direction(self) -> Tuple[int, int]:
        return CARDINALS[self.bounded(len(CARDINALS)) - 1]
