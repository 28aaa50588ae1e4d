# models.py
from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple, Tuple
import numpy as np

from .config import DEFAULT_WORLD_SPAN

GridCell = Tuple[int, int]   # (row, col)


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class MapCalibration:
    x_multiplier: float
    y_multiplier: float
    x_scalar_to_add: float
    y_scalar_to_add: float

    def __post_init__(self):
        # both multipliers divide in the inverse transform
        if self.x_multiplier == 0 or self.y_multiplier == 0:
            raise ValueError("calibration multipliers must be non-zero")


@dataclass(frozen=True)
class Callout:
    name: str
    region: str
    normalized_x: float
    normalized_y: float

    @property
    def label(self) -> str:
        return f"{self.region} {self.name}"


@dataclass(frozen=True)
class MapConfig:
    key: str
    display_name: str
    uuid: str
    calibration: MapCalibration
    callouts: Tuple[Callout, ...] = ()
    world_span: float = DEFAULT_WORLD_SPAN
    image_url: str = ""


@dataclass
class NavGrid:
    map_name: str
    grid_size: int
    walkable: np.ndarray      # (N,N) bool, read-only

    def is_walkable(self, row: int, col: int) -> bool:
        if 0 <= row < self.grid_size and 0 <= col < self.grid_size:
            return bool(self.walkable[row, col])
        return False

    @property
    def walkable_ratio(self) -> float:
        return float(self.walkable.mean())


@dataclass(frozen=True)
class PlayableBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def clamp(self, x: float, y: float) -> Point:
        return Point(max(self.min_x, min(self.max_x, x)),
                     max(self.min_y, min(self.max_y, y)))


@dataclass(frozen=True)
class GhostValidation:
    point: Point
    was_adjusted: bool
