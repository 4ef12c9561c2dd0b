"""
Magical lake placement.

A magical lake must sit in a clearing: every in-bounds neighbor is forest.
Natural clearings are used when the grown forests provide one; otherwise a
spot is forced and its neighbors are turned into forest.
"""

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .biomes import FOREST, MAGICAL_LAKE, BiomeKind, BiomeVariant
from .grid import NEIGHBORS_8, Region, WorkingGrid, count_neighbors

logger = structlog.get_logger()

# Kinds a magical lake may never replace
PROTECTED_KINDS = (BiomeKind.WATER, BiomeKind.DEEP_WATER, BiomeKind.BEACH)

# Kinds a forced clearing may never touch
WET_KINDS = (BiomeKind.WATER, BiomeKind.DEEP_WATER)

# Worlds narrower than this in either dimension never get a forced feature
MIN_WORLD_SIZE = 11


class SpecialFeaturePlacer:
    """Places a rare feature that must be fully encircled by another biome."""

    def __init__(
        self,
        prng: AleaPRNG,
        feature: BiomeVariant = MAGICAL_LAKE,
        surround: BiomeVariant = FOREST,
        extra_chance: float = 0.01,
        force_margin: int = 3,
        min_world_size: int = MIN_WORLD_SIZE,
    ):
        self.prng = prng
        self.feature = feature
        self.surround = surround
        self.extra_chance = extra_chance
        self.force_margin = force_margin
        self.min_world_size = min_world_size

    def place(self, grid: WorkingGrid) -> Region:
        """
        Place the feature on a fully populated working grid.

        Returns:
            Cells converted to the feature (empty when there is no clearing
            and the world is too small or has no dry inland cell)
        """
        candidates = self.find_clearings(grid)
        if candidates:
            placed = self._place_natural(grid, candidates)
            logger.info("Placed magical lakes in clearings", placed=len(placed), clearings=len(candidates))
            return placed

        if min(grid.width, grid.height) < self.min_world_size:
            logger.info("World too small for a forced magical lake", width=grid.width, height=grid.height)
            return []

        placed = self._place_forced(grid)
        logger.info("Forced magical lake placement", placed=len(placed))
        return placed

    def find_clearings(self, grid: WorkingGrid) -> Region:
        """Interior cells (outer ring excluded) whose 8 neighbors are all the surround kind."""
        kinds = grid.kind_map()
        surrounded = count_neighbors(kinds == int(self.surround.kind)) == 8
        open_ground = ~np.isin(kinds, [int(k) for k in PROTECTED_KINDS])

        interior = np.zeros_like(surrounded)
        interior[1:-1, 1:-1] = True

        mask = surrounded & open_ground & interior
        return [(int(x), int(y)) for y, x in np.argwhere(mask)]

    def _place_natural(self, grid: WorkingGrid, candidates: Region) -> Region:
        self.prng.shuffle(candidates)
        first = candidates[0]
        grid.set(*first, self.feature)
        placed = [first]

        for x, y in candidates[1:]:
            if not self.prng.chance(self.extra_chance):
                continue
            # An adjacent feature would break the other one's clearing
            if any(grid.get(nx, ny) == self.feature for nx, ny in grid.neighbors(x, y)):
                continue
            grid.set(x, y, self.feature)
            placed.append((x, y))

        return placed

    def _place_forced(self, grid: WorkingGrid) -> Region:
        """
        Convert one inland cell and turn all of its neighbors into forest.

        Candidates must be open ground with no water neighbor. Sheltered
        cells, with no beach neighbor either, are preferred; otherwise the
        beach around the chosen cell becomes forest too. The margin starts
        at ``force_margin`` and shrinks toward the edge until a candidate is
        found.
        """
        protected = grid.kind_mask(*PROTECTED_KINDS)
        open_ground = ~protected
        dry = open_ground & (count_neighbors(grid.kind_mask(*WET_KINDS)) == 0)
        sheltered = open_ground & (count_neighbors(protected) == 0)

        for margin in range(self.force_margin, 0, -1):
            band = self._band(grid, margin)
            for pool in (sheltered & band, dry & band):
                if pool.any():
                    candidates = [(int(x), int(y)) for y, x in np.argwhere(pool)]
                    return [self._clear_around(grid, *self.prng.choice(candidates), margin=margin)]

        logger.warning("No dry inland cell available for a magical lake")
        return []

    def _clear_around(self, grid: WorkingGrid, x: int, y: int, margin: int):
        grid.set(x, y, self.feature)

        beaches = 0
        for nx, ny in grid.neighbors(x, y, NEIGHBORS_8):
            if grid.kind(nx, ny) == BiomeKind.BEACH:
                beaches += 1
            grid.set(nx, ny, self.surround)

        if beaches or margin < self.force_margin:
            logger.debug("Forced clearing outside preferred spot", x=x, y=y, margin=margin, beaches=beaches)
        return x, y

    @staticmethod
    def _band(grid: WorkingGrid, margin: int) -> np.ndarray:
        """Cells at least ``margin`` cells away from every edge."""
        band = np.zeros((grid.height, grid.width), dtype=bool)
        band[margin : grid.height - margin, margin : grid.width - margin] = True
        return band
