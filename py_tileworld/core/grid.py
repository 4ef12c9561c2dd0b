"""
Tile grids used during and after generation.

Generation works on a mutable ``WorkingGrid`` whose cells may be empty.
``WorkingGrid.freeze()`` publishes a read-only ``TileGrid`` and refuses to do
so while any cell is still empty, so every ``TileGrid`` is fully populated.

Both grids store one small integer per cell indexing into a palette of
``BiomeVariant`` objects, with ``EMPTY`` (-1) marking unfilled cells.
"""

from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .biomes import BiomeKind, BiomeVariant

EMPTY = -1

# Kind value reported for empty cells by kind maps
NO_KIND = -1

Coordinate = Tuple[int, int]
Region = List[Coordinate]

# (dx, dy) offsets
NEIGHBORS_4 = ((0, -1), (0, 1), (-1, 0), (1, 0))
NEIGHBORS_8 = NEIGHBORS_4 + ((-1, -1), (1, -1), (-1, 1), (1, 1))


class IncompleteGridError(RuntimeError):
    """Raised when freezing a grid that still has empty cells."""


@dataclass(frozen=True)
class Tile:
    """A filled cell of a finished grid."""

    biome: BiomeVariant
    x: int
    y: int
    landmass_id: Optional[int] = None
    water_body_id: Optional[int] = None


def count_neighbors(mask: np.ndarray, pad: bool = False) -> np.ndarray:
    """
    Count, for every cell, how many of its 8 neighbors are set in ``mask``.

    Off-grid neighbors count as ``pad``. All counts are taken from the mask
    as passed in, so callers acting on the result see a consistent snapshot.
    """
    height, width = mask.shape
    padded = np.pad(mask.astype(np.int8), 1, mode="constant", constant_values=int(pad))
    counts = np.zeros((height, width), dtype=np.int8)
    for dx, dy in NEIGHBORS_8:
        counts += padded[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width]
    return counts


def flood_fill_regions(mask: np.ndarray) -> List[Region]:
    """
    Split the set cells of ``mask`` into 4-connected regions.

    Regions are discovered in row-major order of their first cell.
    """
    height, width = mask.shape
    visited = np.zeros((height, width), dtype=bool)
    regions = []

    for y, x in np.argwhere(mask):
        y, x = int(y), int(x)
        if visited[y, x]:
            continue

        region = []
        queue = deque([(x, y)])
        visited[y, x] = True

        while queue:
            cx, cy = queue.popleft()
            region.append((cx, cy))

            for dx, dy in NEIGHBORS_4:
                nx, ny = cx + dx, cy + dy
                if 0 <= nx < width and 0 <= ny < height and mask[ny, nx] and not visited[ny, nx]:
                    visited[ny, nx] = True
                    queue.append((nx, ny))

        regions.append(region)

    return regions


class _PaletteGrid:
    """Shared read access for grids storing palette ids."""

    cells: np.ndarray
    palette: List[BiomeVariant]

    @property
    def width(self) -> int:
        return self.cells.shape[1]

    @property
    def height(self) -> int:
        return self.cells.shape[0]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def neighbors(
        self, x: int, y: int, offsets: Sequence[Coordinate] = NEIGHBORS_8
    ) -> Iterator[Coordinate]:
        """Yield in-bounds neighbor coordinates of (x, y)."""
        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield nx, ny

    def kind_map(self) -> np.ndarray:
        """Array of ``BiomeKind`` values per cell, ``NO_KIND`` where empty."""
        # EMPTY (-1) indexes the trailing sentinel
        lookup = np.array([int(b.kind) for b in self.palette] + [NO_KIND], dtype=np.int8)
        return lookup[self.cells]

    def kind_mask(self, *kinds: BiomeKind) -> np.ndarray:
        """Boolean mask of cells whose biome kind is one of ``kinds``."""
        return np.isin(self.kind_map(), [int(k) for k in kinds])


class WorkingGrid(_PaletteGrid):
    """Mutable, partially filled grid owned by the generator."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.cells = np.full((height, width), EMPTY, dtype=np.int16)
        self.palette: List[BiomeVariant] = []
        self._ids: Dict[BiomeVariant, int] = {}

    def biome_id(self, biome: BiomeVariant) -> int:
        """Palette id of ``biome``, registering it on first use."""
        biome_id = self._ids.get(biome)
        if biome_id is None:
            biome_id = len(self.palette)
            self.palette.append(biome)
            self._ids[biome] = biome_id
        return biome_id

    def is_empty(self, x: int, y: int) -> bool:
        return self.cells[y, x] == EMPTY

    def get(self, x: int, y: int) -> Optional[BiomeVariant]:
        biome_id = self.cells[y, x]
        return None if biome_id == EMPTY else self.palette[biome_id]

    def kind(self, x: int, y: int) -> Optional[BiomeKind]:
        biome = self.get(x, y)
        return None if biome is None else biome.kind

    def set(self, x: int, y: int, biome: BiomeVariant) -> None:
        self.cells[y, x] = self.biome_id(biome)

    def clear(self, x: int, y: int) -> None:
        self.cells[y, x] = EMPTY

    def fill(self, mask: np.ndarray, biome: BiomeVariant) -> int:
        """Assign ``biome`` to every cell set in ``mask``. Returns the count."""
        self.cells[mask] = self.biome_id(biome)
        return int(np.count_nonzero(mask))

    def empty_mask(self) -> np.ndarray:
        return self.cells == EMPTY

    def empty_cells(self) -> Region:
        """Empty cells in row-major order."""
        return [(int(x), int(y)) for y, x in np.argwhere(self.cells == EMPTY)]

    def count_empty(self) -> int:
        return int(np.count_nonzero(self.cells == EMPTY))

    def freeze(self) -> "TileGrid":
        """Publish the finished grid. Every cell must be filled."""
        empty = self.count_empty()
        if empty:
            raise IncompleteGridError(f"Cannot freeze grid with {empty} empty cells")
        return TileGrid(self.cells, self.palette)


class TileGrid(_PaletteGrid):
    """Finished, fully populated, read-only grid."""

    def __init__(self, cells: np.ndarray, palette: Sequence[BiomeVariant]):
        if np.any(cells == EMPTY):
            raise IncompleteGridError("TileGrid cannot hold empty cells")
        self.cells = cells.copy()
        self.cells.setflags(write=False)
        self.palette = list(palette)

    def biome_at(self, x: int, y: int) -> BiomeVariant:
        return self.palette[self.cells[y, x]]

    def kind_at(self, x: int, y: int) -> BiomeKind:
        return self.biome_at(x, y).kind

    def tile(self, x: int, y: int) -> Optional[Tile]:
        """Tile at (x, y), or None when out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return Tile(self.biome_at(x, y), x, y)

    def rows(self) -> Iterator[List[Tile]]:
        """Iterate rows of tiles, top to bottom."""
        for y in range(self.height):
            yield [Tile(self.biome_at(x, y), x, y) for x in range(self.width)]

    def biome_counts(self) -> Dict[str, int]:
        """Number of tiles per biome name, in palette order."""
        ids, counts = np.unique(self.cells, return_counts=True)
        by_id = dict(zip(ids.tolist(), counts.tolist()))
        return {biome.name: by_id.get(i, 0) for i, biome in enumerate(self.palette) if by_id.get(i)}

    def to_bytes(self) -> bytes:
        """Stable byte encoding of the grid: biome names per palette id, then cells."""
        header = "\n".join(biome.name for biome in self.palette).encode("utf-8")
        shape = f"{self.width}x{self.height}\n".encode("ascii")
        return shape + header + b"\n\n" + self.cells.astype("<i2").tobytes()
