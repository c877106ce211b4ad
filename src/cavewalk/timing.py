# src/cavewalk/timing.py
"""
Step pacing: the pause requests generation phases yield, and two small
schedulers that honour them (frame-driven for pygame hosts, blocking for the
CLI). The generator itself never looks at a clock.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union

SECONDS = "seconds"
TICKS = "ticks"
PACING_KINDS = (SECONDS, TICKS)


@dataclass(frozen=True)
class Seconds:
    value: float


@dataclass(frozen=True)
class Ticks:
    count: int


Pause = Union[Seconds, Ticks]


@dataclass(frozen=True)
class StepPacing:
    """How long a phase asks to pause after a step that changed the grid."""
    kind: str = TICKS
    seconds: float = 0.0
    ticks: int = 0

    def request(self) -> Pause:
        # A seconds pacing with no duration falls back to ticks, like the
        # original wait-time setting did.
        if self.kind == SECONDS and self.seconds > 0:
            return Seconds(self.seconds)
        return Ticks(self.ticks)


class FrameStepper:
    """
    Drives a run from a fixed-rate frame loop.

    Each ``update(dt)`` call spends one frame: a pending ``Ticks(n)`` burns
    one of its n frames, a pending ``Seconds(s)`` burns ``dt`` seconds. Once
    nothing is pending the generator is resumed until its next non-zero
    pause (``Ticks(0)`` resumes within the same frame).
    """

    def __init__(self, steps: Iterator[Pause]):
        self.steps = steps
        self.done = False
        self.pauses = 0
        self._ticks_left = 0
        self._seconds_left = 0.0

    def _waiting(self) -> bool:
        return self._ticks_left > 0 or self._seconds_left > 0

    def update(self, dt: float) -> bool:
        if self.done:
            return False
        if self._ticks_left > 0:
            self._ticks_left -= 1
            return True
        if self._seconds_left > 0:
            self._seconds_left -= dt
            if self._seconds_left > 0:
                return True
            self._seconds_left = 0.0
        while not self._waiting():
            try:
                pause = next(self.steps)
            except StopIteration:
                self.done = True
                return False
            self.pauses += 1
            if isinstance(pause, Seconds):
                self._seconds_left = pause.value
            else:
                self._ticks_left = pause.count
        return True


def run_blocking(
    steps: Iterator[Pause],
    sleep: Callable[[float], None] = time.sleep,
    tick_seconds: float = 1 / 60,
    on_pause: Optional[Callable[[Pause], None]] = None,
) -> int:
    """
    Drain a run on the calling thread, sleeping for each pause.
    Ticks are converted with ``tick_seconds``. Returns the number of pauses.
    """
    n = 0
    for pause in steps:
        n += 1
        if on_pause is not None:
            on_pause(pause)
        if isinstance(pause, Seconds):
            delay = pause.value
        else:
            delay = pause.count * tick_seconds
        if delay > 0:
            sleep(delay)
    return n
