"""
Ocean and mainland classification.

This module handles:
- Noise field generation and bay carving
- Water/mainland classification with a blended square/circular distance
- Island placement inside large ocean bodies
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .biomes import WATER, BiomeKind
from .grid import Region, WorkingGrid, flood_fill_regions
from .noise import NoiseField
from .water_features import WaterFeaturePlacer

logger = structlog.get_logger()

# Water bodies larger than this get islands
ISLAND_BODY_THRESHOLD = 500

# Weights of square (Chebyshev) and circular distance in the coastline test
SQUARE_WEIGHT = 0.6
CIRCULAR_WEIGHT = 0.4

# Fraction of the mainland radius that always stays land, whatever the bays do
CORE_FRACTION = 0.5


@dataclass
class CoastlineResult:
    """What the carver did to the grid."""

    water_cells: int
    bays: int
    islands: List[Region] = field(default_factory=list)
    noise: Optional[NoiseField] = None


class CoastlineCarver:
    """Turns everything outside a noisy mainland outline into water."""

    def __init__(
        self,
        width: int,
        height: int,
        prng: AleaPRNG,
        mainland_size: Optional[float] = None,
        placer: Optional[WaterFeaturePlacer] = None,
    ):
        """
        Initialize the carver.

        Args:
            width: Grid width
            height: Grid height
            prng: Random source shared with the rest of the pipeline
            mainland_size: Mainland diameter; defaults to min(width, height) - 5
            placer: Island grower; one sharing ``prng`` is created if omitted
        """
        self.width = width
        self.height = height
        self.prng = prng
        self.land_size = mainland_size if mainland_size is not None else min(width, height) - 5
        self.half_land = self.land_size / 2
        self.center = (width / 2, height / 2)
        self.placer = placer or WaterFeaturePlacer(prng)

    def carve(self, grid: WorkingGrid) -> CoastlineResult:
        """Mark ocean cells as water, then grow islands in large bodies."""
        noise = NoiseField.generate(self.width, self.height, self.prng)

        bay_count = 2 + self.prng.randint(3)
        for _ in range(bay_count):
            noise.carve_bay(self.center, self.half_land, self.prng)

        water_mask = self.water_mask(noise)
        water_cells = grid.fill(water_mask, WATER)

        islands = self.place_islands(grid)

        logger.info(
            "Carved coastline",
            water_cells=water_cells,
            bays=bay_count,
            islands=len(islands),
            half_land=self.half_land,
        )
        return CoastlineResult(water_cells=water_cells, bays=bay_count, islands=islands, noise=noise)

    def water_mask(self, noise: NoiseField) -> np.ndarray:
        """
        Cells whose noise-adjusted distance from the centre exceeds half the
        mainland size. The mainland core never becomes water, so bays can
        cut deep inlets but never split the centre off.
        """
        center_x, center_y = self.center
        ys, xs = np.mgrid[0 : self.height, 0 : self.width]
        dist_x = np.abs(xs - center_x)
        dist_y = np.abs(ys - center_y)

        square = np.maximum(dist_x, dist_y)
        circular = np.sqrt(dist_x * dist_x + dist_y * dist_y)
        dist = square * SQUARE_WEIGHT + circular * CIRCULAR_WEIGHT

        core = dist <= self.half_land * CORE_FRACTION
        return ((dist - noise.values) > self.half_land) & ~core

    def place_islands(self, grid: WorkingGrid) -> List[Region]:
        """Add 1-2 large and 1-2 tiny islands to every water body over the threshold."""
        islands = []
        for body in flood_fill_regions(grid.kind_mask(BiomeKind.WATER)):
            if len(body) <= ISLAND_BODY_THRESHOLD:
                continue

            large_count = 1 + self.prng.randint(2)
            tiny_count = 1 + self.prng.randint(2)

            for size_type, count in (("large", large_count), ("tiny", tiny_count)):
                for _ in range(count):
                    island = self.placer.place_island(grid, body, size_type)
                    if island:
                        islands.append(island)

        return islands
