"""
Landmass and water body detection on a finished grid.

This module handles:
- 4-connected labelling of landmasses (everything but water and deep water)
- 4-connected labelling of water bodies, split into ocean and lake
- Spawn point selection on the largest landmass
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .biomes import WATER_KINDS, BiomeKind
from .grid import Coordinate, Region, TileGrid, flood_fill_regions

logger = structlog.get_logger()

# Biome kinds a player prefers to spawn on
SPAWN_KINDS = (BiomeKind.PLAINS, BiomeKind.BEACH)


@dataclass
class Landmass:
    """A maximal 4-connected region of non-water tiles."""

    id: int
    tiles: Region
    is_mainland: bool = False

    def __len__(self) -> int:
        return len(self.tiles)


@dataclass
class WaterBody:
    """A maximal 4-connected region of water tiles."""

    id: int
    tiles: Region
    type: str  # "ocean" when touching the grid edge, else "lake"

    def __len__(self) -> int:
        return len(self.tiles)


class ConnectivityAnalyzer:
    """Labels regions of a finished grid and picks spawn points."""

    def __init__(self, grid: TileGrid, prng: AleaPRNG, spawn_kinds: Iterable[BiomeKind] = SPAWN_KINDS):
        self.grid = grid
        self.prng = prng
        self.spawn_kinds = tuple(spawn_kinds)

        # Region ids per cell, 0 where the cell belongs to no region of that type
        self.landmass_ids = np.zeros((grid.height, grid.width), dtype=np.int32)
        self.water_body_ids = np.zeros((grid.height, grid.width), dtype=np.int32)

        self.landmasses: List[Landmass] = []
        self.water_bodies: List[WaterBody] = []
        self.mainland: Optional[Landmass] = None

        self._label()

    def _label(self):
        water = self.grid.kind_mask(*WATER_KINDS)

        for i, tiles in enumerate(flood_fill_regions(~water), start=1):
            self.landmasses.append(Landmass(id=i, tiles=tiles))
            for x, y in tiles:
                self.landmass_ids[y, x] = i

        if self.landmasses:
            # max() keeps the first of equally large landmasses
            self.mainland = max(self.landmasses, key=len)
            self.mainland.is_mainland = True

        for i, tiles in enumerate(flood_fill_regions(water), start=1):
            body_type = "ocean" if any(self._on_edge(x, y) for x, y in tiles) else "lake"
            self.water_bodies.append(WaterBody(id=i, tiles=tiles, type=body_type))
            for x, y in tiles:
                self.water_body_ids[y, x] = i

        logger.info(
            "Labelled regions",
            landmasses=len(self.landmasses),
            water_bodies=len(self.water_bodies),
            mainland_tiles=len(self.mainland) if self.mainland else 0,
        )

    def _on_edge(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.grid.width - 1 or y == self.grid.height - 1

    def find_spawn_point(self) -> Coordinate:
        """
        Pick a spawn coordinate on the mainland.

        Preference order: a mainland tile of a spawn kind, any mainland
        tile, then the grid centre when the world has no land at all.
        """
        if self.mainland is None:
            logger.warning("No land in world, spawning at centre")
            return self.grid.width // 2, self.grid.height // 2

        preferred = [
            (x, y) for x, y in self.mainland.tiles if self.grid.kind_at(x, y) in self.spawn_kinds
        ]
        if preferred:
            return self.prng.choice(preferred)
        return self.prng.choice(self.mainland.tiles)

    def landmass_at(self, x: int, y: int) -> Optional[Landmass]:
        landmass_id = int(self.landmass_ids[y, x])
        return self.landmasses[landmass_id - 1] if landmass_id else None

    def water_body_at(self, x: int, y: int) -> Optional[WaterBody]:
        body_id = int(self.water_body_ids[y, x])
        return self.water_bodies[body_id - 1] if body_id else None
