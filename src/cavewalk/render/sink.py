# src/cavewalk/render/sink.py
"""
Renderer sink contract. The generator reports each committed cell write
through ``on_cell_changed`` in write order, and calls ``on_reset`` once at
the start of every run before any write.
"""

from __future__ import annotations

from typing import List, Protocol, Tuple

from ..tiles import CellState

XY = Tuple[int, int]


class RendererSink(Protocol):
    def on_cell_changed(self, position: XY, state: CellState) -> None: ...

    def on_reset(self) -> None: ...


class NullSink:
    def on_cell_changed(self, position: XY, state: CellState) -> None:
        pass

    def on_reset(self) -> None:
        pass


class RecordingSink:
    """Keeps every event; handy for tests and determinism checks."""

    def __init__(self):
        self.events: List[Tuple[XY, CellState]] = []
        self.resets = 0

    def on_cell_changed(self, position: XY, state: CellState) -> None:
        self.events.append((position, state))

    def on_reset(self) -> None:
        self.resets += 1
        self.events.clear()
