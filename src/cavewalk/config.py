"""
Generator configuration.

Everything is validated once, before a run starts; a bad value raises
InvalidConfig and nothing is generated.
"""

import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from numbers import Real
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .errors import InvalidConfig
from .timing import PACING_KINDS, StepPacing


class WalkerPolicy(str, Enum):
    # Each walker draws redirect/duplicate/die/move in one visit.
    PER_WALKER_COMBINED = "per_walker_combined"
    # One sweep over the pool per decision kind.
    STAGED_PASSES = "staged_passes"


@dataclass(frozen=True)
class WalkerChance:
    redirect: float = 0.0
    duplicate: float = 0.0
    die: float = 0.0


@dataclass(frozen=True)
class GeneratorConfig:
    width: int = 30
    height: int = 30
    max_walker_count: int = 10
    fill_percentage: float = 0.4
    chance: WalkerChance = field(default_factory=WalkerChance)
    policy: WalkerPolicy = WalkerPolicy.PER_WALKER_COMBINED
    fill_empty_at_end: bool = False
    floor_pacing: StepPacing = field(default_factory=StepPacing)
    wall_pacing: StepPacing = field(default_factory=StepPacing)
    seed: Optional[int] = None
    # Safety net for parameter sets that can stall short of the target.
    max_carve_steps: Optional[int] = None

    def validate(self) -> "GeneratorConfig":
        _check_int("width", self.width)
        _check_int("height", self.height)
        _check_int("max_walker_count", self.max_walker_count)
        if self.width < 3 or self.height < 3:
            raise InvalidConfig(f"width and height must be >= 3, got {self.width}x{self.height}")
        if self.max_walker_count < 1:
            raise InvalidConfig(f"max_walker_count must be >= 1, got {self.max_walker_count}")
        _check_unit("fill_percentage", self.fill_percentage)
        if not isinstance(self.chance, WalkerChance):
            raise InvalidConfig(f"chance must be a WalkerChance, got {self.chance!r}")
        _check_unit("chance.redirect", self.chance.redirect)
        _check_unit("chance.duplicate", self.chance.duplicate)
        _check_unit("chance.die", self.chance.die)
        if not isinstance(self.policy, WalkerPolicy):
            raise InvalidConfig(f"unknown walker policy {self.policy!r}")
        if not isinstance(self.fill_empty_at_end, bool):
            raise InvalidConfig(f"fill_empty_at_end must be true or false, got {self.fill_empty_at_end!r}")
        _check_pacing("floor_pacing", self.floor_pacing)
        _check_pacing("wall_pacing", self.wall_pacing)
        if self.seed is not None:
            _check_int("seed", self.seed)
        if self.max_carve_steps is not None:
            _check_int("max_carve_steps", self.max_carve_steps)
            if self.max_carve_steps < 1:
                raise InvalidConfig(f"max_carve_steps must be >= 1, got {self.max_carve_steps}")
        return self

    def with_overrides(self, **changes: Any) -> "GeneratorConfig":
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GeneratorConfig":
        """Build from plain nested data, e.g. a parsed JSON file."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidConfig(f"unknown config keys: {', '.join(sorted(unknown))}")
        kw: Dict[str, Any] = dict(data)
        try:
            if "chance" in kw and isinstance(kw["chance"], Mapping):
                kw["chance"] = WalkerChance(**kw["chance"])
            if "policy" in kw:
                kw["policy"] = WalkerPolicy(kw["policy"])
            for key in ("floor_pacing", "wall_pacing"):
                if key in kw and isinstance(kw[key], Mapping):
                    kw[key] = StepPacing(**kw[key])
        except (TypeError, ValueError) as e:
            raise InvalidConfig(str(e)) from e
        return cls(**kw).validate()


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_real(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def _check_int(name: str, v: Any) -> None:
    if not _is_int(v):
        raise InvalidConfig(f"{name} must be an integer, got {v!r}")


def _check_unit(name: str, v: Any) -> None:
    if not _is_real(v):
        raise InvalidConfig(f"{name} must be a number, got {v!r}")
    if not (0.0 <= v <= 1.0):
        raise InvalidConfig(f"{name} must be in [0, 1], got {v}")


def _check_pacing(name: str, p: StepPacing) -> None:
    if not isinstance(p, StepPacing):
        raise InvalidConfig(f"{name} must be a StepPacing, got {p!r}")
    if not _is_real(p.seconds) or not _is_int(p.ticks):
        raise InvalidConfig(f"{name} needs numeric seconds and integer ticks, got {p!r}")
    if p.kind not in PACING_KINDS:
        raise InvalidConfig(f"{name}.kind must be one of {PACING_KINDS}, got {p.kind!r}")
    if p.seconds < 0 or p.ticks < 0:
        raise InvalidConfig(f"{name} magnitudes must be >= 0")


def load_config(path: Union[str, Path]) -> GeneratorConfig:
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfig(f"{path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfig(f"{path}: expected a JSON object")
    return GeneratorConfig.from_mapping(data)
