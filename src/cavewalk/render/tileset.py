# src/cavewalk/render/tileset.py
from __future__ import annotations
import os
import pygame
from functools import lru_cache
from typing import Optional, Tuple

from ..tiles import CellState

ASSET_DIR = os.path.join("assets", "tiles")

_NAMES = {
    CellState.EMPTY: "empty",
    CellState.FLOOR: "floor",
    CellState.WALL: "wall",
}

_COLORS = {
    CellState.EMPTY: ( 20,  20,  28, 255),
    CellState.FLOOR: (196, 170, 120, 255),
    CellState.WALL:  ( 80,  80,  80, 255),
}

def _path_candidates(asset_dir: str, state: CellState) -> Tuple[str, ...]:
    name = _NAMES[state]
    return (
        os.path.join(asset_dir, f"{name}.png"),
        os.path.join(asset_dir, f"tile_{int(state)}.png"),
    )

class Tileset:
    """
    Cached tile surfaces per cell state:
      - Looks for floor.png / wall.png / empty.png (or tile_<n>.png) in asset_dir
      - Falls back to a flat colour
      - Returns pygame.Surface of exactly (tile_size, tile_size)
    """
    def __init__(self, tile_size: int, asset_dir: str = ASSET_DIR):
        self.tile_size = tile_size
        self.asset_dir = asset_dir

    @lru_cache(maxsize=16)
    def get(self, state: CellState) -> pygame.Surface:
        state = CellState(state)
        for p in _path_candidates(self.asset_dir, state):
            if os.path.exists(p):
                img = pygame.image.load(p).convert_alpha()
                if img.get_size() != (self.tile_size, self.tile_size):
                    img = pygame.transform.scale(img, (self.tile_size, self.tile_size))
                return img
        img = pygame.Surface((self.tile_size, self.tile_size), pygame.SRCALPHA)
        img.fill(_COLORS[state])
        return img


class SurfaceSink:
    """
    Renderer sink that paints each changed cell onto a pygame surface.
    Grid y grows upward, screen y grows downward, so rows are flipped.
    """
    def __init__(self, surface: pygame.Surface, tileset: Tileset, height: int,
                 background: Optional[Tuple[int, int, int]] = (0, 0, 0)):
        self.surface = surface
        self.tileset = tileset
        self.height = height
        self.background = background
        self.changes = 0

    def on_reset(self) -> None:
        self.changes = 0
        if self.background is not None:
            self.surface.fill(self.background)

    def on_cell_changed(self, position: Tuple[int, int], state: CellState) -> None:
        x, y = position
        t = self.tileset.tile_size
        self.surface.blit(self.tileset.get(state), (x * t, (self.height - 1 - y) * t))
        self.changes += 1
