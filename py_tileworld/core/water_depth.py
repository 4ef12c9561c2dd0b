"""Deep water classification."""

import structlog

from .biomes import DEEP_WATER, BiomeKind
from .grid import WorkingGrid, count_neighbors

logger = structlog.get_logger()


class WaterDepthClassifier:
    """Promotes water cells enclosed by water to deep water."""

    def classify(self, grid: WorkingGrid) -> int:
        """
        One pass, not repeated to a fixpoint.

        Every water cell whose 8 neighbors are water, deep water or off-grid
        becomes deep water. Neighbor states come from the grid as it was
        before the pass, so the result does not depend on visiting order.

        Returns:
            Number of promoted cells
        """
        water = grid.kind_mask(BiomeKind.WATER)
        wet = grid.kind_mask(BiomeKind.WATER, BiomeKind.DEEP_WATER)

        enclosed = water & (count_neighbors(wet, pad=True) == 8)
        promoted = grid.fill(enclosed, DEEP_WATER)

        logger.info("Classified deep water", promoted=promoted)
        return promoted
