# src/cavewalk/mapgen/walkers.py
# Walker population and the two stepping policies.

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from ..config import WalkerChance, WalkerPolicy
from ..grid import Grid
from ..rng import PMRandom

logger = logging.getLogger(__name__)

XY = Tuple[int, int]


@dataclass
class Walker:
    position: XY
    direction: XY
    # Per-walker override of the pool probabilities; inherited by duplicates.
    chance: Optional[WalkerChance] = None


def clamp(v: int, lo: int, hi: int) -> int:
    return lo if v < lo else hi if v > hi else v


class WalkerPool:
    """
    Ordered walker population.

    ``step`` moves every walker exactly once. The pool never drops below one
    walker and never grows past ``max_walker_count``; positions stay inside
    ``[1, width-2] x [1, height-2]`` so every walker has a full 8-neighbourhood.
    """

    def __init__(
        self,
        walkers: List[Walker],
        width: int,
        height: int,
        max_walker_count: int,
        chance: WalkerChance,
        policy: WalkerPolicy = WalkerPolicy.PER_WALKER_COMBINED,
    ):
        if not walkers:
            raise ValueError("a walker pool needs at least one walker")
        self.walkers = list(walkers)
        self.width = width
        self.height = height
        self.max_walker_count = max_walker_count
        self.chance = chance
        self.policy = policy

    @classmethod
    def seeded(
        cls,
        grid: Grid,
        rng: PMRandom,
        max_walker_count: int,
        chance: WalkerChance,
        policy: WalkerPolicy = WalkerPolicy.PER_WALKER_COMBINED,
    ) -> "WalkerPool":
        center = (grid.width // 2, grid.height // 2)
        first = Walker(center, rng.direction())
        return cls([first], grid.width, grid.height, max_walker_count, chance, policy)

    def __len__(self) -> int:
        return len(self.walkers)

    def __iter__(self) -> Iterator[Walker]:
        return iter(self.walkers)

    def positions(self) -> List[XY]:
        return [w.position for w in self.walkers]

    def _chance(self, w: Walker) -> WalkerChance:
        return w.chance if w.chance is not None else self.chance

    def is_frozen(self) -> bool:
        """
        True when no decision can fire any more: nobody can redirect, the
        pool can neither grow nor shrink. A step then only moves walkers.
        """
        chances = [self._chance(w) for w in self.walkers]
        if any(c.redirect > 0 for c in chances):
            return False
        if len(self.walkers) < self.max_walker_count and any(c.duplicate > 0 for c in chances):
            return False
        if len(self.walkers) > 1 and any(c.die > 0 for c in chances):
            return False
        return True

    def _move(self, w: Walker) -> None:
        x = clamp(w.position[0] + w.direction[0], 1, self.width - 2)
        y = clamp(w.position[1] + w.direction[1], 1, self.height - 2)
        w.position = (x, y)

    def _spawn(self, parent: Walker, rng: PMRandom) -> Walker:
        return Walker(parent.position, rng.direction(), parent.chance)

    def step(self, rng: PMRandom, visit: Callable[[Walker], bool]) -> bool:
        """
        Advance the population one step.

        ``visit`` is called with each walker before that walker's decisions
        are drawn; it returns True when it changed something. Returns True if
        any visit did.
        """
        if self.policy is WalkerPolicy.STAGED_PASSES:
            return self._step_staged(rng, visit)
        return self._step_combined(rng, visit)

    def _step_combined(self, rng: PMRandom, visit: Callable[[Walker], bool]) -> bool:
        changed = False
        # Reverse order so removing index i leaves the unvisited prefix intact;
        # spawned walkers are appended past i and wait for the next step.
        for i in range(len(self.walkers) - 1, -1, -1):
            w = self.walkers[i]
            if visit(w):
                changed = True
            c = self._chance(w)
            if rng.value() <= c.redirect:
                w.direction = rng.direction()
            if rng.value() <= c.duplicate and len(self.walkers) < self.max_walker_count:
                self.walkers.append(self._spawn(w, rng))
            if rng.value() <= c.die and len(self.walkers) > 1:
                del self.walkers[i]
            else:
                self._move(w)
        return changed

    def _step_staged(self, rng: PMRandom, visit: Callable[[Walker], bool]) -> bool:
        changed = False
        for w in self.walkers:
            if visit(w):
                changed = True

        # at most one removal per step
        if len(self.walkers) > 1:
            for i, w in enumerate(self.walkers):
                if rng.value() <= self._chance(w).die:
                    del self.walkers[i]
                    break

        acting = list(self.walkers)
        for w in acting:
            if rng.value() <= self._chance(w).redirect:
                w.direction = rng.direction()
        for w in acting:
            if rng.value() <= self._chance(w).duplicate and len(self.walkers) < self.max_walker_count:
                self.walkers.append(self._spawn(w, rng))
        for w in acting:
            self._move(w)
        return changed
