import logging

import pytest

from cavewalk.config import GeneratorConfig, WalkerChance
from cavewalk.log_utils import TopicFormatter
from cavewalk.mapgen.generator import RandomWalkGenerator
from cavewalk.mapgen.walls import unwalled_floor_cells
from cavewalk.rng import PMRandom
from cavewalk.timing import FrameStepper, Seconds, StepPacing, Ticks, run_blocking

def test_pacing_requests():
    assert StepPacing().request() == Ticks(0)
    assert StepPacing("ticks", ticks=4).request() == Ticks(4)
    assert StepPacing("seconds", seconds=0.05).request() == Seconds(0.05)
    # seconds with no duration falls back to the tick count
    assert StepPacing("seconds", seconds=0.0, ticks=2).request() == Ticks(2)

def test_frame_stepper_spends_ticks_and_seconds():
    stepper = FrameStepper(iter([Ticks(2), Seconds(0.05), Ticks(0)]))
    assert stepper.update(0.02) is True     # picks up Ticks(2)
    assert stepper.update(0.02) is True     # 1 tick left
    assert stepper.update(0.02) is True     # 0 ticks left
    assert stepper.update(0.02) is True     # picks up Seconds(0.05)
    assert stepper.update(0.02) is True
    assert stepper.update(0.02) is True
    assert stepper.update(0.02) is False    # time's up, Ticks(0) resumes at once, run ends
    assert stepper.done and stepper.pauses == 3
    assert stepper.update(0.02) is False

def test_frame_stepper_drives_a_real_run():
    cfg = GeneratorConfig(width=16, height=12, fill_percentage=0.3,
                          chance=WalkerChance(0.5, 0.1, 0.05),
                          floor_pacing=StepPacing("ticks", ticks=1))
    gen = RandomWalkGenerator(cfg, PMRandom.from_seed(3))
    stepper = FrameStepper(gen.start())
    frames = 0
    while stepper.update(1 / 60):
        frames += 1
        assert frames < 100000
    assert gen.phase == "done"
    assert stepper.pauses == gen.stats.pauses
    assert frames > 0
    assert unwalled_floor_cells(gen.grid) == []

def test_run_blocking_sleeps_per_pause():
    slept = []
    seen = []
    n = run_blocking(iter([Ticks(3), Seconds(0.25), Ticks(0)]),
                     sleep=slept.append, tick_seconds=0.1, on_pause=seen.append)
    assert n == 3
    assert slept == [pytest.approx(0.3), 0.25]
    assert seen == [Ticks(3), Seconds(0.25), Ticks(0)]

def test_topic_formatter_prefixes_every_line():
    rec = logging.LogRecord("cavewalk.mapgen.carve", logging.WARNING, __file__, 1,
                            "line one\nline two", None, None)
    out = TopicFormatter().format(rec).split("\n")
    assert out == ["WARNI:carve   : line one", "WARNI:carve   : line two"]
