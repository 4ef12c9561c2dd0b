"""Consumer-facing world object."""

from typing import Dict, Iterator, List, Optional, Sequence, Union

from .alea_prng import AleaPRNG
from .biomes import BiomeCatalog, EntryLike
from .connectivity import ConnectivityAnalyzer, Landmass, WaterBody
from .grid import Coordinate, Tile, TileGrid
from .world_generator import WorldConfig, WorldGenerator
from ..utils.random import resolve_prng


class World:
    """
    A generated world.

    The grid is generated once in the constructor and never modified.
    Renderers, movement and combat code read it through ``get_tile`` and
    ``find_spawn_point``.
    """

    def __init__(
        self,
        width: int,
        height: int,
        biomes: Union[BiomeCatalog, Sequence[EntryLike]],
        has_ocean: bool = False,
        lake_count: int = 0,
        mainland_size: Optional[float] = None,
        seed: Optional[Union[str, int]] = None,
        prng: Optional[AleaPRNG] = None,
    ):
        self.config = WorldConfig(
            width=width,
            height=height,
            biomes=biomes,
            has_ocean=has_ocean,
            lake_count=lake_count,
            mainland_size=mainland_size,
            seed=seed,
        )
        self.prng = resolve_prng(prng, seed)
        self.grid: TileGrid = WorldGenerator(self.config, prng=self.prng).generate()
        self._analyzer: Optional[ConnectivityAnalyzer] = None

    @classmethod
    def from_config(cls, config: WorldConfig, prng: Optional[AleaPRNG] = None) -> "World":
        return cls(
            width=config.width,
            height=config.height,
            biomes=config.biomes,
            has_ocean=config.has_ocean,
            lake_count=config.lake_count,
            mainland_size=config.mainland_size,
            seed=config.seed,
            prng=prng,
        )

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def analyzer(self) -> ConnectivityAnalyzer:
        """Region labelling, computed on first use."""
        if self._analyzer is None:
            self._analyzer = ConnectivityAnalyzer(self.grid, self.prng)
        return self._analyzer

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        """Tile at (x, y) with its region ids, or None when out of bounds."""
        if not self.grid.in_bounds(x, y):
            return None

        landmass_id = int(self.analyzer.landmass_ids[y, x])
        water_body_id = int(self.analyzer.water_body_ids[y, x])
        return Tile(
            biome=self.grid.biome_at(x, y),
            x=x,
            y=y,
            landmass_id=landmass_id or None,
            water_body_id=water_body_id or None,
        )

    def find_spawn_point(self) -> Coordinate:
        """A coordinate on the largest landmass, preferring plains and beach."""
        return self.analyzer.find_spawn_point()

    @property
    def tiles(self) -> Iterator[List[Tile]]:
        return self.grid.rows()

    @property
    def landmasses(self) -> List[Landmass]:
        return self.analyzer.landmasses

    @property
    def mainland(self) -> Optional[Landmass]:
        return self.analyzer.mainland

    @property
    def water_bodies(self) -> List[WaterBody]:
        return self.analyzer.water_bodies

    def biome_counts(self) -> Dict[str, int]:
        return self.grid.biome_counts()
