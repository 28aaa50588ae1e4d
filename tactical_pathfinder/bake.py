# bake.py — build walkability grids from minimap images
import io
import logging
import math
from typing import Dict, Iterable, Optional

import numpy as np
import requests
from PIL import Image

from .config import (
    BAKE_BRIGHTNESS, BAKE_DILATION_RADIUS, BAKE_PROCESS_SIZE, BAKE_WALL_FRACTION,
    DOWNLOAD_TIMEOUT, GRID_SIZE,
)
from .maps import MapCoordinateRegistry
from .models import MapConfig, NavGrid
from .navgrid import nav_grid_from_array, save_nav_grid

logger = logging.getLogger(__name__)


class NavGridBakeError(RuntimeError):
    pass


# region Download
def download_minimap(url: str, timeout: float = DOWNLOAD_TIMEOUT) -> Image.Image:
    try:
        r = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise NavGridBakeError(f"Minimap download failed: {e}") from e
    if r.status_code != 200:
        raise NavGridBakeError(f"Minimap download failed: HTTP {r.status_code} for {url}")
    try:
        img = Image.open(io.BytesIO(r.content))
        img.load()
    except (OSError, Image.DecompressionBombError) as e:
        raise NavGridBakeError(f"Minimap at {url} is not a readable image: {e}") from e
    return img
# endregion

# region Image -> Mask
def dilate_walls(walkable: np.ndarray, radius: int) -> np.ndarray:
    """Grow wall regions by `radius` pixels (passes of a 5x5 box)."""
    wall = ~walkable
    H, W = wall.shape
    for _ in range(int(math.ceil(radius / 2))):
        padded = np.pad(wall, 2, mode="constant", constant_values=False)
        grown = np.zeros_like(wall)
        for dy in range(5):
            for dx in range(5):
                grown |= padded[dy:dy + H, dx:dx + W]
        wall = grown
    return ~wall


def downsample_walls(walkable: np.ndarray, grid_size: int, wall_fraction: float) -> np.ndarray:
    """A cell is a wall when more than `wall_fraction` of its pixels are walls."""
    P = walkable.shape[0]
    if P < grid_size:
        raise ValueError(f"process size {P} is smaller than grid size {grid_size}")
    edges = np.floor(np.arange(grid_size) * (P / grid_size)).astype(np.int64)
    wall = (~walkable).astype(np.int64)
    sums = np.add.reduceat(np.add.reduceat(wall, edges, axis=0), edges, axis=1)
    sizes = np.diff(np.append(edges, P))
    counts = np.outer(sizes, sizes)
    return (sums / counts) <= wall_fraction


def bake_walkability(
    image: Image.Image,
    grid_size: int = GRID_SIZE,
    process_size: int = BAKE_PROCESS_SIZE,
    brightness: int = BAKE_BRIGHTNESS,
    dilation_radius: int = BAKE_DILATION_RADIUS,
    wall_fraction: float = BAKE_WALL_FRACTION,
) -> np.ndarray:
    """Bright pixels are floor, dark pixels are walls or void."""
    gray = image.convert("L").resize((process_size, process_size), Image.Resampling.BILINEAR)
    mask = np.asarray(gray, dtype=np.uint8) > brightness
    if dilation_radius > 0:
        mask = dilate_walls(mask, dilation_radius)
    return downsample_walls(mask, grid_size, wall_fraction)
# endregion

# region Maps
def bake_map(cfg: MapConfig, image: Optional[Image.Image] = None, **kw) -> NavGrid:
    if image is None:
        logger.info("Downloading %s minimap...", cfg.key)
        image = download_minimap(cfg.image_url)
    grid = nav_grid_from_array(cfg.key, bake_walkability(image, **kw))
    logger.info("Baked %s: %dx%d, %.1f%% walkable",
                cfg.key, grid.grid_size, grid.grid_size, 100.0 * grid.walkable_ratio)
    return grid


def bake_all(
    out_dir,
    registry: Optional[MapCoordinateRegistry] = None,
    maps: Optional[Iterable[str]] = None,
    fmt: str = "npy",
    **kw,
) -> Dict[str, str]:
    """Bake and save every requested map; a failing map is logged and skipped."""
    registry = registry or MapCoordinateRegistry()
    written: Dict[str, str] = {}
    for name in (maps or registry.map_names()):
        cfg = registry.get(name)
        if cfg is None:
            logger.error("Unknown map %r, skipping", name)
            continue
        try:
            grid = bake_map(cfg, **kw)
        except NavGridBakeError as e:
            logger.error("Could not bake %s: %s", cfg.key, e)
            continue
        written[cfg.key] = str(save_nav_grid(grid, out_dir, fmt))
    return written
# endregion
