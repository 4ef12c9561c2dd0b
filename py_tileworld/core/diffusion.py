"""
Land biome diffusion.

Scatters weighted-random land biomes over the empty cells, then grows them
outward: each empty cell copies the biome of a random filled neighbor until
the grid is full. Water and beach are never copied; a cell next to them
rolls a fresh land biome instead.
"""

import structlog

from .alea_prng import AleaPRNG
from .biomes import BiomeCatalog, BiomeKind
from .grid import NEIGHBORS_8, WorkingGrid

logger = structlog.get_logger()

# Neighbor kinds that trigger a fresh roll instead of a copy
NON_SPREADING_KINDS = frozenset({BiomeKind.WATER, BiomeKind.BEACH})


class BiomeDiffuser:
    """Fills every empty cell of a working grid with a land biome."""

    def __init__(self, catalog: BiomeCatalog, prng: AleaPRNG):
        self.catalog = catalog
        self.prng = prng

    def run(self, grid: WorkingGrid) -> int:
        """Seed then grow. Returns the number of growth passes."""
        self.seed(grid)
        return self.grow(grid)

    def seed(self, grid: WorkingGrid) -> int:
        """
        Drop ``max(3, width * height // 20)`` random seeds.

        A seed landing on a filled cell is wasted, not retried.

        Returns:
            Number of cells actually seeded
        """
        seed_count = max(3, (grid.width * grid.height) // 20)
        seeded = 0
        for _ in range(seed_count):
            x = self.prng.randint(grid.width)
            y = self.prng.randint(grid.height)
            if grid.is_empty(x, y):
                grid.set(x, y, self.catalog.sample(self.prng))
                seeded += 1

        logger.debug("Seeded land biomes", attempts=seed_count, seeded=seeded)
        return seeded

    def grow(self, grid: WorkingGrid) -> int:
        """
        Grow biomes until no empty cell remains.

        Each pass visits the empty cells in shuffled order; cells filled
        earlier in a pass are visible to later ones. A pass that fills
        nothing means the remaining cells have no filled neighbor, so they
        are all given a random land biome.

        Returns:
            Number of passes
        """
        empty = grid.empty_cells()
        passes = 0

        while empty:
            passes += 1
            self.prng.shuffle(empty)

            for x, y in empty:
                filled = [
                    (nx, ny)
                    for nx, ny in grid.neighbors(x, y, NEIGHBORS_8)
                    if not grid.is_empty(nx, ny)
                ]
                if not filled:
                    continue

                neighbor = grid.get(*self.prng.choice(filled))
                if neighbor.kind in NON_SPREADING_KINDS:
                    grid.set(x, y, self.catalog.sample(self.prng))
                else:
                    grid.set(x, y, neighbor)

            remaining = grid.empty_cells()
            if len(remaining) == len(empty):
                for x, y in remaining:
                    grid.set(x, y, self.catalog.sample(self.prng))
                logger.debug("Force-filled isolated cells", cells=len(remaining))
                break
            empty = remaining

        logger.info("Grew land biomes", passes=passes)
        return passes
