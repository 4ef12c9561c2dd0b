"""
Small lakes on the mainland and islands inside open ocean.

Lakes are grown from a random empty seed cell into 1-4 water cells.
Islands work the other way round: they are grown inside a large water body
by clearing water cells back to empty, and are land-filled later by biome
diffusion.
"""

from dataclasses import dataclass
from typing import Dict, List

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .biomes import WATER, BiomeKind
from .grid import NEIGHBORS_4, Region, WorkingGrid

logger = structlog.get_logger()


@dataclass(frozen=True)
class IslandProfile:
    """Size limits for one class of island."""

    min_size: int
    size_range: int  # size = min_size + randint(size_range)
    min_available: int  # water cells the body must still hold
    margin: int  # half-width of the interior test window


ISLAND_PROFILES: Dict[str, IslandProfile] = {
    "large": IslandProfile(min_size=200, size_range=401, min_available=250, margin=8),
    "tiny": IslandProfile(min_size=15, size_range=20, min_available=20, margin=3),
}


def _window_counts(mask: np.ndarray, margin: int) -> np.ndarray:
    """Number of set cells within ``margin`` (Chebyshev) of every cell, clipped to the grid."""
    height, width = mask.shape
    table = np.zeros((height + 1, width + 1), dtype=np.int64)
    table[1:, 1:] = np.cumsum(np.cumsum(mask.astype(np.int64), axis=0), axis=1)

    ys = np.arange(height)
    xs = np.arange(width)
    y0 = np.clip(ys - margin, 0, height)[:, np.newaxis]
    y1 = np.clip(ys + margin + 1, 0, height)[:, np.newaxis]
    x0 = np.clip(xs - margin, 0, width)[np.newaxis, :]
    x1 = np.clip(xs + margin + 1, 0, width)[np.newaxis, :]

    return table[y1, x1] - table[y0, x1] - table[y1, x0] + table[y0, x0]


class WaterFeaturePlacer:
    """Places lakes and islands on a working grid."""

    def __init__(self, prng: AleaPRNG, lake_margin: int = 3, max_attempts: int = 50):
        self.prng = prng
        self.lake_margin = lake_margin
        self.max_attempts = max_attempts

    def place_lakes(self, grid: WorkingGrid, count: int) -> List[Region]:
        """Place up to ``count`` lakes. Lakes that find no room are skipped."""
        lakes = []
        for _ in range(count):
            lake = self.place_lake(grid)
            if lake:
                lakes.append(lake)

        if len(lakes) < count:
            logger.debug("Some lakes could not be placed", requested=count, placed=len(lakes))
        return lakes

    def place_lake(self, grid: WorkingGrid) -> Region:
        """
        Grow one lake of 1-4 cells from a random empty cell.

        Returns:
            Lake cells, or an empty list when no empty cell was found in
            ``max_attempts`` tries
        """
        margin = self.lake_margin
        span_x = grid.width - margin * 2
        span_y = grid.height - margin * 2
        if span_x <= 0 or span_y <= 0:
            return []

        for _ in range(self.max_attempts):
            x = margin + self.prng.randint(span_x)
            y = margin + self.prng.randint(span_y)
            if not grid.is_empty(x, y):
                continue

            target = 1 + self.prng.randint(4)
            lake = [(x, y)]
            grid.set(x, y, WATER)

            while len(lake) < target:
                candidates = [
                    (nx, ny)
                    for cx, cy in lake
                    for nx, ny in grid.neighbors(cx, cy, NEIGHBORS_4)
                    if margin <= nx < grid.width - margin
                    and margin <= ny < grid.height - margin
                    and grid.is_empty(nx, ny)
                ]
                if not candidates:
                    break
                nx, ny = self.prng.choice(candidates)
                grid.set(nx, ny, WATER)
                lake.append((nx, ny))

            return lake

        return []

    def place_island(self, grid: WorkingGrid, water_body: Region, size_type: str = "large") -> Region:
        """
        Grow an island inside ``water_body`` by clearing water cells to empty.

        The seed is a random interior cell: one where at least half of the
        surrounding window is still water from this body. Growth repeatedly
        clears a random water cell 4-adjacent to the island; cells touching
        several island cells are proportionally more likely.

        Returns:
            Cleared cells, or an empty list when the body has no room
        """
        profile = ISLAND_PROFILES[size_type]

        available = np.zeros((grid.height, grid.width), dtype=bool)
        water_mask = grid.kind_mask(BiomeKind.WATER)
        for x, y in water_body:
            available[y, x] = water_mask[y, x]

        if np.count_nonzero(available) < profile.min_available:
            return []

        window = (profile.margin * 2 + 1) ** 2
        interior = available & (_window_counts(available, profile.margin) >= window * 0.5)
        interior_cells = [(x, y) for x, y in water_body if interior[y, x]]
        if len(interior_cells) < 4:
            return []

        seed = self.prng.choice(interior_cells)
        size = profile.min_size + self.prng.randint(profile.size_range)

        island = [seed]
        grid.clear(*seed)
        frontier = self._water_neighbors(grid, *seed)

        while len(island) < size and frontier:
            index = self.prng.randint(len(frontier))
            x, y = frontier[index]
            frontier[index] = frontier[-1]
            frontier.pop()

            # Entries go stale once another island step clears them
            if grid.kind(x, y) != BiomeKind.WATER:
                continue

            grid.clear(x, y)
            island.append((x, y))
            frontier.extend(self._water_neighbors(grid, x, y))

        return island

    @staticmethod
    def _water_neighbors(grid: WorkingGrid, x: int, y: int) -> Region:
        return [
            (nx, ny)
            for nx, ny in grid.neighbors(x, y, NEIGHBORS_4)
            if grid.kind(nx, ny) == BiomeKind.WATER
        ]
