"""
World generation pipeline.

Runs every stage in order on one working grid and one random source:

1. Coastline and islands (optional)
2. Small lakes
3. Beaches around all water
4. Land biome seeding and growth
5. Magical lake placement
6. Deep water classification

and freezes the result into a read-only ``TileGrid``.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

import structlog

from .alea_prng import AleaPRNG
from .beaches import BeachSurrounder
from .biomes import BiomeCatalog, EntryLike
from .coastline import CoastlineCarver
from .diffusion import BiomeDiffuser
from .grid import TileGrid, WorkingGrid
from .special_features import SpecialFeaturePlacer
from .water_depth import WaterDepthClassifier
from .water_features import WaterFeaturePlacer
from ..utils.random import resolve_prng

logger = structlog.get_logger()


@dataclass
class WorldConfig:
    """Configuration for world generation."""

    width: int
    height: int
    biomes: Union[BiomeCatalog, Sequence[EntryLike]] = field(default_factory=list)
    has_ocean: bool = False
    lake_count: int = 0
    mainland_size: Optional[float] = None
    seed: Optional[Union[str, int]] = None

    def catalog(self) -> BiomeCatalog:
        return BiomeCatalog.coerce(self.biomes)

    def validate(self) -> None:
        """Raise ValueError for configurations the pipeline cannot honour."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"World dimensions must be positive, got {self.width}x{self.height}")
        if self.lake_count < 0:
            raise ValueError(f"Lake count must be non-negative, got {self.lake_count}")
        if self.mainland_size is not None and self.mainland_size <= 0:
            raise ValueError(f"Mainland size must be positive, got {self.mainland_size}")
        self.catalog().validate_land()


class WorldGenerator:
    """
    Generates one finished tile grid.

    This is the only writer of the grid; nothing mutates it after
    ``generate()`` returns.
    """

    def __init__(self, config: WorldConfig, prng: Optional[AleaPRNG] = None):
        """
        Initialize the generator.

        Args:
            config: World configuration
            prng: Random source; defaults to one seeded from ``config.seed``,
                or the process-wide source when no seed is given
        """
        config.validate()
        self.config = config
        self.catalog = config.catalog()
        self.prng = resolve_prng(prng, config.seed)

    def generate(self) -> TileGrid:
        config = self.config
        logger.info(
            "Generating world",
            width=config.width,
            height=config.height,
            has_ocean=config.has_ocean,
            lake_count=config.lake_count,
            seed=config.seed,
        )

        grid = WorkingGrid(config.width, config.height)
        placer = WaterFeaturePlacer(self.prng)

        if config.has_ocean:
            CoastlineCarver(
                config.width,
                config.height,
                self.prng,
                mainland_size=config.mainland_size,
                placer=placer,
            ).carve(grid)

        lakes = placer.place_lakes(grid, config.lake_count)
        logger.info("Placed lakes", requested=config.lake_count, placed=len(lakes))

        BeachSurrounder().surround(grid)
        BiomeDiffuser(self.catalog, self.prng).run(grid)
        SpecialFeaturePlacer(self.prng).place(grid)
        WaterDepthClassifier().classify(grid)

        tiles = grid.freeze()
        logger.info("World generated", biomes=tiles.biome_counts())
        return tiles
