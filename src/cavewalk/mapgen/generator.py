# src/cavewalk/mapgen/generator.py
# Run pipeline: reset -> carve floors -> surround with walls -> optional empty fill.

import logging
from contextlib import closing
from dataclasses import dataclass
from typing import Generator, Iterator, Optional

from ..config import GeneratorConfig
from ..grid import Grid
from ..render.sink import NullSink, RendererSink
from ..rng import PMRandom
from ..timing import Pause
from .carve import carve_floors
from .fill import fill_empty
from .walls import surround_walls
from .walkers import WalkerPool

logger = logging.getLogger(__name__)

IDLE, FLOORS, WALLS, EMPTY, DONE = "idle", "floors", "walls", "empty", "done"


@dataclass
class GenerationStats:
    carve_steps: int = 0
    floors: int = 0
    walls: int = 0
    empties: int = 0
    pauses: int = 0


class RandomWalkGenerator:
    """
    Steppable random-walk cave generator.

    ``start()`` returns an iterator of pause requests; the host resumes it
    whenever it sees fit (see ``cavewalk.timing``). Calling ``start()`` again
    closes the previous run's iterator first, so a stale suspension can never
    write into the new grid.
    """

    def __init__(self, config: GeneratorConfig, rng: Optional[PMRandom] = None,
                 sink: Optional[RendererSink] = None):
        self.config = config.validate()
        self.rng = rng if rng is not None else PMRandom.from_seed(config.seed or 0)
        self.sink = sink if sink is not None else NullSink()
        self.grid: Optional[Grid] = None
        self.pool: Optional[WalkerPool] = None
        self.phase = IDLE
        self.stats = GenerationStats()
        self.runs = 0
        self._active: Optional[Generator[Pause, None, None]] = None

    def start(self) -> Iterator[Pause]:
        if self._active is not None:
            self._active.close()
            self._active = None
        cfg = self.config
        self.runs += 1
        self.sink.on_reset()
        self.grid = Grid(cfg.width, cfg.height, sink=self.sink)
        self.pool = WalkerPool.seeded(
            self.grid, self.rng, cfg.max_walker_count, cfg.chance, cfg.policy
        )
        self.stats = GenerationStats()
        self.phase = IDLE
        logger.info(
            "run %d: %dx%d fill=%.2f walkers<=%d policy=%s",
            self.runs, cfg.width, cfg.height, cfg.fill_percentage,
            cfg.max_walker_count, cfg.policy.value,
        )
        self._active = self._counted(self._run(self.grid, self.pool))
        return self._active

    def _run(self, grid: Grid, pool: WalkerPool) -> Generator[Pause, None, None]:
        cfg = self.config
        try:
            self.phase = FLOORS
            self.stats.carve_steps = yield from carve_floors(
                grid, pool, self.rng, cfg.fill_percentage, cfg.floor_pacing, cfg.max_carve_steps
            )
            self.stats.floors = grid.filled_count

            self.phase = WALLS
            self.stats.walls = yield from surround_walls(grid, cfg.wall_pacing)

            if cfg.fill_empty_at_end:
                self.phase = EMPTY
                self.stats.empties = fill_empty(grid)
        except GeneratorExit:
            logger.debug("run %d cancelled during %s", self.runs, self.phase)
            raise
        self.phase = DONE
        logger.info(
            "run %d done: %d floors, %d walls, %d steps, %d pauses",
            self.runs, self.stats.floors, self.stats.walls,
            self.stats.carve_steps, self.stats.pauses,
        )

    def _counted(self, run: Generator[Pause, None, None]) -> Generator[Pause, None, None]:
        # closing the wrapper closes the run, and yield from closes the phase
        with closing(run):
            for pause in run:
                self.stats.pauses += 1
                yield pause

    def generate(self) -> Grid:
        """Run to completion, ignoring pauses."""
        for _ in self.start():
            pass
        return self.grid


def generate_map(config: GeneratorConfig, seed: Optional[int] = None,
                 sink: Optional[RendererSink] = None) -> Grid:
    if seed is None:
        seed = config.seed or 0
    return RandomWalkGenerator(config, PMRandom.from_seed(seed), sink).generate()
