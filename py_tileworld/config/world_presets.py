"""
Named world presets.

Each preset bundles a land biome registry with the world shape options it
was tuned for.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.biomes import FOREST, MOUNTAINS, PLAINS, BiomeVariant
from ..core.world_generator import WorldConfig


@dataclass(frozen=True)
class WorldPreset:
    """A reusable world configuration."""

    name: str
    description: str
    width: int
    height: int
    biomes: Tuple[Tuple[BiomeVariant, float], ...]
    has_ocean: bool = False
    lake_count: int = 0
    mainland_size: Optional[float] = None

    def to_config(self, **overrides) -> WorldConfig:
        """Build a WorldConfig, replacing any field given in ``overrides`` (None is ignored)."""
        values = {
            "width": self.width,
            "height": self.height,
            "biomes": list(self.biomes),
            "has_ocean": self.has_ocean,
            "lake_count": self.lake_count,
            "mainland_size": self.mainland_size,
            "seed": None,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return WorldConfig(**values)


PRESETS: Dict[str, WorldPreset] = {
    "default": WorldPreset(
        name="default",
        description="Island mainland with a few lakes",
        width=30,
        height=30,
        biomes=((PLAINS, 50), (MOUNTAINS, 15), (FOREST, 35)),
        has_ocean=True,
        lake_count=4,
    ),
    "meadow": WorldPreset(
        name="meadow",
        description="Small landlocked plains",
        width=10,
        height=10,
        biomes=((PLAINS, 1),),
    ),
    "woodland": WorldPreset(
        name="woodland",
        description="Landlocked forest country dotted with ponds",
        width=40,
        height=40,
        biomes=((FOREST, 70), (PLAINS, 25), (MOUNTAINS, 5)),
        lake_count=8,
    ),
    "archipelago": WorldPreset(
        name="archipelago",
        description="Compact mainland in a wide ocean with offshore islands",
        width=64,
        height=64,
        biomes=((PLAINS, 45), (FOREST, 40), (MOUNTAINS, 15)),
        has_ocean=True,
        lake_count=3,
        mainland_size=30,
    ),
    "continent": WorldPreset(
        name="continent",
        description="Large mainland filling most of the map",
        width=96,
        height=96,
        biomes=((PLAINS, 40), (FOREST, 35), (MOUNTAINS, 25)),
        has_ocean=True,
        lake_count=12,
    ),
}


def get_preset(name: str) -> WorldPreset:
    """Look up a preset by name."""
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown preset '{name}'. Available: {', '.join(list_presets())}") from None


def list_presets() -> List[str]:
    return sorted(PRESETS)
