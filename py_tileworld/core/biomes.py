"""
Biome variants and the weighted biome registry.

This module implements:
- The closed set of biome kinds used for all terrain checks
- Immutable biome variants with display attributes and spawn tables
- BiomeCatalog, the weighted registry sampled during land growth
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .alea_prng import AleaPRNG
from .mobs import BIRD, GOPHER, Mob, SpawnEntry
from ..utils.random import roulette


class BiomeKind(IntEnum):
    """Kind tag carried by every biome variant. Terrain checks compare these."""

    WATER = 0
    DEEP_WATER = 1
    BEACH = 2
    FOREST = 3
    MAGICAL_LAKE = 4
    PLAINS = 5
    OTHER = 6


# Kinds treated as open water by flood fills and spawn selection
WATER_KINDS = frozenset({BiomeKind.WATER, BiomeKind.DEEP_WATER})

# Kinds a land registry may contain
LAND_KINDS = frozenset({BiomeKind.FOREST, BiomeKind.PLAINS, BiomeKind.OTHER})


@dataclass(frozen=True)
class BiomeVariant:
    """A named terrain category."""

    name: str
    color: str  # display color, "#rrggbb"
    description: str
    kind: BiomeKind = BiomeKind.OTHER
    native_mobs: Tuple[SpawnEntry, ...] = field(default=())

    @property
    def is_water(self) -> bool:
        return self.kind in WATER_KINDS

    @property
    def is_land(self) -> bool:
        return self.kind in LAND_KINDS

    def random_mob(self, prng: AleaPRNG) -> Optional[Mob]:
        """Pick a native creature by weight, or None when nothing lives here."""
        if not self.native_mobs:
            return None
        return roulette([(entry.mob, entry.weight) for entry in self.native_mobs], prng)


WATER = BiomeVariant(
    name="Water",
    color="#1e90ff",
    description="Deep blue waters, either vast ocean or tranquil lake.",
    kind=BiomeKind.WATER,
)

DEEP_WATER = BiomeVariant(
    name="Deep Water",
    color="#0a4a7a",
    description="Fathomless depths where no swimmer dares venture.",
    kind=BiomeKind.DEEP_WATER,
)

BEACH = BiomeVariant(
    name="Beach",
    color="#c2b280",
    description="Sandy shores where land meets water.",
    kind=BiomeKind.BEACH,
)

FOREST = BiomeVariant(
    name="Forest",
    color="#228b22",
    description="Dense woodland filled with tall trees and wildlife.",
    kind=BiomeKind.FOREST,
)

MAGICAL_LAKE = BiomeVariant(
    name="Magical Lake",
    color="#c91ea4",
    description=(
        "A mystical body of water hidden deep within the forest, "
        "shimmering with arcane energy."
    ),
    kind=BiomeKind.MAGICAL_LAKE,
)

PLAINS = BiomeVariant(
    name="Plains",
    color="#7ec850",
    description="A vast expanse of flat land with tall grasses and few trees.",
    kind=BiomeKind.PLAINS,
    native_mobs=(SpawnEntry(GOPHER, 50), SpawnEntry(BIRD, 50)),
)

MOUNTAINS = BiomeVariant(
    name="Mountains",
    color="#888888",
    description="A rugged terrain with high peaks and steep cliffs.",
    kind=BiomeKind.OTHER,
)

# Built-in variants by display name
BIOMES = {
    biome.name: biome
    for biome in (WATER, DEEP_WATER, BEACH, FOREST, MAGICAL_LAKE, PLAINS, MOUNTAINS)
}


@dataclass(frozen=True)
class BiomeEntry:
    """A biome variant with its spawn weight."""

    biome: BiomeVariant
    weight: float


EntryLike = Union[BiomeEntry, Tuple[BiomeVariant, float]]


class BiomeCatalog:
    """
    Weighted registry of land biomes.

    Entries keep registration order, which decides roulette ties and the
    fallback entry.
    """

    def __init__(self, entries: Optional[Iterable[EntryLike]] = None):
        self.entries: List[BiomeEntry] = []
        for entry in entries or ():
            if isinstance(entry, BiomeEntry):
                self.add(entry.biome, entry.weight)
            else:
                biome, weight = entry
                self.add(biome, weight)

    @classmethod
    def coerce(cls, biomes: Union["BiomeCatalog", Sequence[EntryLike]]) -> "BiomeCatalog":
        """Accept a catalog or a sequence of entries / (variant, weight) pairs."""
        if isinstance(biomes, BiomeCatalog):
            return biomes
        return cls(biomes)

    def add(self, biome: BiomeVariant, weight: float) -> "BiomeCatalog":
        """Register ``biome`` with ``weight``. Returns self for chaining."""
        if weight < 0:
            raise ValueError(f"Biome weight must be non-negative, got {weight} for {biome.name}")
        self.entries.append(BiomeEntry(biome, weight))
        return self

    @property
    def total_weight(self) -> float:
        return sum(entry.weight for entry in self.entries)

    @property
    def biomes(self) -> List[BiomeVariant]:
        return [entry.biome for entry in self.entries]

    def validate_land(self) -> None:
        """Raise ValueError unless this catalog can drive land growth."""
        if not self.entries:
            raise ValueError("Biome catalog is empty")
        if self.total_weight <= 0:
            raise ValueError("Biome catalog total weight must be positive")

        invalid = [entry.biome.name for entry in self.entries if not entry.biome.is_land]
        if invalid:
            raise ValueError(f"Land biome catalog contains non-land biomes: {', '.join(invalid)}")

    def sample(self, prng: AleaPRNG) -> BiomeVariant:
        """Roulette-wheel pick of a biome variant."""
        return roulette([(entry.biome, entry.weight) for entry in self.entries], prng)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __repr__(self) -> str:
        parts = ", ".join(f"{e.biome.name}={e.weight}" for e in self.entries)
        return f"BiomeCatalog({parts})"
