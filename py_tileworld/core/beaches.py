"""Beach placement around water."""

import structlog

from .biomes import BEACH, BiomeKind
from .grid import Region, WorkingGrid, count_neighbors

logger = structlog.get_logger()


class BeachSurrounder:
    """Marks every empty cell touching water (8-neighborhood) as beach."""

    def surround(self, grid: WorkingGrid) -> Region:
        """
        Single pass over the grid; must run after all water is placed and
        before land growth.

        Returns:
            Coordinates that became beach, row-major
        """
        near_water = count_neighbors(grid.kind_mask(BiomeKind.WATER)) > 0
        beach_mask = near_water & grid.empty_mask()
        grid.fill(beach_mask, BEACH)

        beaches = [(int(x), int(y)) for y, x in zip(*beach_mask.nonzero())]
        logger.info("Placed beaches", beach_cells=len(beaches))
        return beaches
