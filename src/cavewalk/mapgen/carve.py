# src/cavewalk/mapgen/carve.py
# Floor phase: step the walker pool until the filled fraction reaches the target.

import logging
from typing import Generator, Optional

from ..grid import Grid
from ..rng import PMRandom
from ..tiles import CellState
from ..timing import Pause, StepPacing
from .walkers import Walker, WalkerPool

logger = logging.getLogger(__name__)


def interior_area(grid: Grid) -> int:
    """Cells a walker can ever stand on."""
    return (grid.width - 2) * (grid.height - 2)


def carve_floors(
    grid: Grid,
    pool: WalkerPool,
    rng: PMRandom,
    fill_percentage: float,
    pacing: StepPacing = StepPacing(),
    max_steps: Optional[int] = None,
) -> Generator[Pause, None, int]:
    """
    Yield ``pacing.request()`` after every pool step that turned a cell into
    floor. Stops once ``grid.filled_fraction() >= fill_percentage``.

    Three guards end the phase early with a warning instead of spinning
    forever: every interior cell is already floor (target above what walkers
    can reach), a frozen pool took a step that moved nobody, or ``max_steps``
    pool steps have run. Returns the step count.
    """
    capacity = interior_area(grid)
    floors = 0

    def visit(w: Walker) -> bool:
        nonlocal floors
        x, y = w.position
        if grid.get(x, y) == CellState.FLOOR:
            return False
        grid.set(x, y, CellState.FLOOR)
        floors += 1
        return True

    steps = 0
    while grid.filled_fraction() < fill_percentage:
        if floors >= capacity:
            logger.warning(
                "fill target %.3f unreachable on %dx%d: interior fully carved at %.3f",
                fill_percentage, grid.width, grid.height, grid.filled_fraction(),
            )
            break
        if max_steps is not None and steps >= max_steps:
            logger.warning(
                "carve stopped after %d steps at %.3f of %.3f target",
                steps, grid.filled_fraction(), fill_percentage,
            )
            break
        before = pool.positions() if pool.is_frozen() else None
        changed = pool.step(rng, visit)
        steps += 1
        if changed:
            yield pacing.request()
        elif before is not None and pool.positions() == before:
            # every walker is pinned against the clamp and nothing can redirect it
            logger.warning(
                "carve stalled after %d steps at %.3f of %.3f target: walkers pinned at %s",
                steps, grid.filled_fraction(), fill_percentage, before,
            )
            break

    logger.debug("carved %d floor cells in %d steps, %d walkers left", floors, steps, len(pool))
    return steps
