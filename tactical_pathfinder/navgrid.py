# navgrid.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol
import numpy as np

from .maps import normalize_map_name
from .models import NavGrid

logger = logging.getLogger(__name__)


class NavGridFormatError(ValueError):
    """Raised when an asset cannot be read as a square walkability grid."""


# region Parsing
def nav_grid_from_array(map_name: str, arr, grid_size: Optional[int] = None) -> NavGrid:
    """Validate a 0/1 (or bool) array and freeze it as a NavGrid."""
    a = np.asarray(arr)
    if a.ndim != 2 or a.size == 0 or a.shape[0] != a.shape[1]:
        raise NavGridFormatError(f"{map_name}: expected a non-empty square grid, got shape {a.shape}")
    if grid_size is not None and grid_size != a.shape[0]:
        raise NavGridFormatError(f"{map_name}: gridSize {grid_size} does not match {a.shape[0]} rows")
    walkable = np.ascontiguousarray(a != 0, dtype=bool)
    walkable.flags.writeable = False
    return NavGrid(map_name=normalize_map_name(map_name), grid_size=int(a.shape[0]), walkable=walkable)


def nav_grid_from_json(map_name: str, doc: Mapping) -> NavGrid:
    try:
        rows = doc["grid"]
    except (KeyError, TypeError) as e:
        raise NavGridFormatError(f"{map_name}: missing 'grid'") from e
    if not isinstance(rows, list) or not rows or not all(isinstance(r, list) for r in rows):
        raise NavGridFormatError(f"{map_name}: 'grid' must be a list of rows")
    if len({len(r) for r in rows}) != 1:
        raise NavGridFormatError(f"{map_name}: ragged or empty grid")
    try:
        arr = np.array(rows, dtype=np.uint8)
    except (TypeError, ValueError) as e:
        raise NavGridFormatError(f"{map_name}: non-numeric cells: {e}") from e
    return nav_grid_from_array(map_name, arr, doc.get("gridSize"))


def nav_grid_to_json(grid: NavGrid) -> dict:
    return {
        "mapName": grid.map_name,
        "gridSize": grid.grid_size,
        "grid": grid.walkable.astype(np.uint8).tolist(),
    }
# endregion

# region Asset Sources
class AssetSource(Protocol):
    def load(self, map_name: str) -> Optional[NavGrid]: ...


class MemoryAssetSource:
    """Grids already resident in memory, keyed by map name."""

    def __init__(self, grids: Mapping[str, object]):
        self._grids = {normalize_map_name(k): v for k, v in grids.items()}

    def load(self, map_name: str) -> Optional[NavGrid]:
        arr = self._grids.get(normalize_map_name(map_name))
        if arr is None:
            return None
        if isinstance(arr, NavGrid):
            return arr
        return nav_grid_from_array(map_name, arr)


class DirectoryAssetSource:
    """Pre-baked `<map>.npy` or `<map>.json` files under one directory."""

    def __init__(self, root):
        self.root = Path(root)

    def load(self, map_name: str) -> Optional[NavGrid]:
        key = normalize_map_name(map_name)
        npy = self.root / f"{key}.npy"
        if npy.is_file():
            try:
                arr = np.load(npy, allow_pickle=False)
            except (OSError, EOFError, ValueError) as e:
                raise NavGridFormatError(f"{npy}: {e}") from e
            return nav_grid_from_array(key, arr)
        js = self.root / f"{key}.json"
        if js.is_file():
            with open(js, encoding="utf-8") as f:
                try:
                    doc = json.load(f)
                except ValueError as e:
                    # JSONDecodeError and UnicodeDecodeError
                    raise NavGridFormatError(f"{js}: {e}") from e
            if not isinstance(doc, dict):
                raise NavGridFormatError(f"{js}: expected a JSON object")
            return nav_grid_from_json(key, doc)
        return None


def save_nav_grid(grid: NavGrid, directory, fmt: str = "npy") -> Path:
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    if fmt == "npy":
        out = out_dir / f"{grid.map_name}.npy"
        np.save(out, grid.walkable.astype(np.uint8))
    elif fmt == "json":
        out = out_dir / f"{grid.map_name}.json"
        with open(out, "w") as f:
            json.dump(nav_grid_to_json(grid), f)
    else:
        raise ValueError(f"unknown nav grid format: {fmt}")
    return out
# endregion

# region Store
class NavigationGridStore:
    """
    Lazily loads one walkability grid per map and keeps it for the process
    lifetime. A None result is normal for maps without baked data; consumers
    treat it as "everything is walkable".
    """

    def __init__(self, asset_source: Optional[AssetSource] = None):
        self._source = asset_source
        self._cache: Dict[str, Optional[NavGrid]] = {}

    def init(self, asset_source: AssetSource) -> "NavigationGridStore":
        self._source = asset_source
        self._cache.clear()
        return self

    def get(self, map_name: str) -> Optional[NavGrid]:
        key = normalize_map_name(map_name)
        if key in self._cache:
            return self._cache[key]
        grid = None
        if self._source is not None:
            try:
                grid = self._source.load(key)
            except NavGridFormatError as e:
                logger.warning("Ignoring nav grid for %s: %s", key, e)
        if grid is None:
            logger.info("No nav grid for map %r; treating it as open ground", key)
        else:
            logger.debug("Loaded nav grid %s (%dx%d, %.1f%% walkable)",
                         key, grid.grid_size, grid.grid_size, 100.0 * grid.walkable_ratio)
        self._cache[key] = grid
        return grid

    get_grid = get

    def loaded_maps(self):
        return sorted(k for k, v in self._cache.items() if v is not None)
# endregion
