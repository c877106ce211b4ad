# tests/test_generator.py
import logging

import pytest

from cavewalk.config import GeneratorConfig, WalkerChance, WalkerPolicy
from cavewalk.errors import InvalidConfig
from cavewalk.grid import Grid
from cavewalk.mapgen.generator import RandomWalkGenerator, generate_map
from cavewalk.mapgen.walls import unwalled_floor_cells
from cavewalk.render.sink import RecordingSink
from cavewalk.rng import PMRandom
from cavewalk.tiles import CellState
from cavewalk.timing import FrameStepper

POLICIES = [WalkerPolicy.PER_WALKER_COMBINED, WalkerPolicy.STAGED_PASSES]

def cave_config(**kw):
    base = dict(width=24, height=18, max_walker_count=6, fill_percentage=0.35,
                chance=WalkerChance(0.5, 0.1, 0.05))
    base.update(kw)
    return GeneratorConfig(**base)

def run_once(cfg, seed):
    sink = RecordingSink()
    gen = RandomWalkGenerator(cfg, PMRandom.from_seed(seed), sink)
    pauses = list(gen.start())
    return gen, sink, pauses

@pytest.mark.parametrize("policy", POLICIES)
def test_same_seed_same_map_and_events(policy):
    cfg = cave_config(policy=policy)
    a, sink_a, pauses_a = run_once(cfg, 1234)
    b, sink_b, pauses_b = run_once(cfg, 1234)
    assert a.grid.buf == b.grid.buf
    assert sink_a.events == sink_b.events
    assert pauses_a == pauses_b
    assert a.stats == b.stats

def test_policies_and_seeds_change_the_map():
    a, _, _ = run_once(cave_config(), 1)
    b, _, _ = run_once(cave_config(), 2)
    c, _, _ = run_once(cave_config(policy=WalkerPolicy.STAGED_PASSES), 1)
    assert a.grid.buf != b.grid.buf
    assert a.grid.buf != c.grid.buf

@pytest.mark.parametrize("policy", POLICIES)
def test_finished_map_properties(policy):
    cfg = cave_config(policy=policy)
    gen, sink, pauses = run_once(cfg, 99)
    g = gen.grid
    assert gen.phase == "done"
    assert gen.stats.floors / g.area >= cfg.fill_percentage
    assert unwalled_floor_cells(g) == []
    assert g.filled_count == g.count(CellState.FLOOR) + g.count(CellState.WALL)
    assert gen.stats.walls == g.count(CellState.WALL)
    assert gen.stats.pauses == len(pauses)
    # floor on the outer rim would need a neighbour outside the grid
    for x, y, v in g.cells():
        if v == CellState.FLOOR:
            assert 1 <= x <= g.width - 2 and 1 <= y <= g.height - 2

    # monotonic: floors stay floors, walls only replace empty cells
    state = {}
    for pos, st in sink.events:
        prev = state.get(pos, CellState.EMPTY)
        if prev == CellState.FLOOR:
            pytest.fail(f"floor at {pos} rewritten as {st!r}")
        if st == CellState.WALL:
            assert prev == CellState.EMPTY
        state[pos] = st

def test_invariants_hold_at_every_pause():
    cfg = cave_config(chance=WalkerChance(0.5, 0.4, 0.3), max_walker_count=4)
    gen = RandomWalkGenerator(cfg, PMRandom.from_seed(5))
    for _ in gen.start():
        if gen.phase != "floors":
            continue
        assert 1 <= len(gen.pool) <= cfg.max_walker_count
        for x, y in gen.pool.positions():
            assert 1 <= x <= cfg.width - 2 and 1 <= y <= cfg.height - 2

def test_reset_comes_before_any_write():
    class OrderSink(RecordingSink):
        def on_reset(self):
            self.events.append(("reset", None))
            self.resets += 1

    sink = OrderSink()
    gen = RandomWalkGenerator(cave_config(), PMRandom.from_seed(3), sink)
    gen.generate()
    assert sink.events[0] == ("reset", None)
    assert sink.resets == 1

def test_fill_empty_at_end():
    cfg = cave_config(fill_empty_at_end=True)
    gen, sink, _ = run_once(cfg, 17)
    g = gen.grid
    empties = g.count(CellState.EMPTY)
    assert empties > 0
    assert gen.stats.empties == empties
    tail = sink.events[-empties:]
    assert all(st == CellState.EMPTY for _, st in tail)

    plain, _, _ = run_once(cave_config(), 17)
    assert plain.grid.buf == g.buf

def test_restart_cancels_previous_run():
    sink = RecordingSink()
    gen = RandomWalkGenerator(cave_config(), PMRandom.from_seed(8), sink)
    first = gen.start()
    for _ in range(5):
        next(first)
    old_grid = gen.grid
    old_filled = old_grid.filled_count

    second = gen.start()
    assert sink.resets == 2
    assert gen.grid is not old_grid
    with pytest.raises(StopIteration):
        next(first)
    assert old_grid.filled_count == old_filled

    for _ in second:
        pass
    # every recorded event belongs to the second run
    replay = Grid(gen.grid.width, gen.grid.height)
    for (x, y), st in sink.events:
        replay.set(x, y, st)
    assert replay.buf == gen.grid.buf
    assert gen.runs == 2

def test_zero_fill_finishes_without_pauses():
    gen, sink, pauses = run_once(cave_config(fill_percentage=0.0), 1)
    assert pauses == []
    assert sink.events == []
    assert gen.grid.filled_count == 0
    assert gen.stats.carve_steps == 0
    assert gen.phase == "done"

def test_invalid_config_fails_before_reset():
    sink = RecordingSink()
    with pytest.raises(InvalidConfig):
        RandomWalkGenerator(cave_config(fill_percentage=1.5), sink=sink)
    assert sink.resets == 0

def test_generate_map_uses_config_seed():
    cfg = cave_config(seed=42)
    a = generate_map(cfg)
    b = generate_map(cfg, seed=42)
    c = RandomWalkGenerator(cfg).generate()
    assert a.buf == b.buf == c.buf

def test_still_walker_config_terminates():
    # one walker, no randomness: it walks into the clamp and stays there
    cfg = GeneratorConfig(5, 5, 1, 0.2, WalkerChance(0, 0, 0))
    gen = RandomWalkGenerator(cfg)
    grid = gen.generate()
    assert gen.phase == "done"
    assert 1 <= grid.count(CellState.FLOOR) < 5
    assert unwalled_floor_cells(grid) == []

    stepper = FrameStepper(RandomWalkGenerator(cfg).start())
    frames = 0
    while stepper.update(1 / 60):
        frames += 1
        assert frames < 100
    assert stepper.done


@pytest.mark.parametrize("phase", ["floors", "walls"])
def test_restart_closes_the_running_phase(phase, caplog):
    gen = RandomWalkGenerator(cave_config(), PMRandom.from_seed(3))
    first = gen.start()
    while gen.phase != phase:
        next(first)
    next(first)
    pauses = gen.stats.pauses

    with caplog.at_level(logging.DEBUG, logger="cavewalk"):
        gen.start()
    assert f"run 1 cancelled during {phase}" in caplog.text
    assert pauses > 0
    assert gen.stats.pauses == 0
    with pytest.raises(StopIteration):
        next(first)
