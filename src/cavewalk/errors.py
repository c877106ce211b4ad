# src/cavewalk/errors.py
from typing import Tuple


class CavewalkError(Exception):
    """Base class for everything the generator raises on purpose."""


class OutOfBounds(CavewalkError, IndexError):
    def __init__(self, pos: Tuple[int, int], width: int, height: int):
        self.pos = pos
        self.width = width
        self.height = height
        super().__init__(f"position {pos} outside grid {width}x{height}")


class InvalidConfig(CavewalkError, ValueError):
    """Raised once, before generation starts, for out-of-range settings."""
