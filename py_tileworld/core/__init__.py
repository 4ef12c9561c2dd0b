"""
Core world generation functionality.
"""

from .alea_prng import AleaPRNG
from .biomes import (
    BiomeKind, BiomeVariant, BiomeEntry, BiomeCatalog, BIOMES,
    WATER, DEEP_WATER, BEACH, FOREST, MAGICAL_LAKE, PLAINS, MOUNTAINS,
)
from .grid import Tile, TileGrid, WorkingGrid, IncompleteGridError
from .connectivity import ConnectivityAnalyzer, Landmass, WaterBody
from .world_generator import WorldConfig, WorldGenerator
from .world import World

__all__ = ['AleaPRNG',
           'BiomeKind', 'BiomeVariant', 'BiomeEntry', 'BiomeCatalog', 'BIOMES',
           'WATER', 'DEEP_WATER', 'BEACH', 'FOREST', 'MAGICAL_LAKE', 'PLAINS', 'MOUNTAINS',
           'Tile', 'TileGrid', 'WorkingGrid', 'IncompleteGridError',
           'ConnectivityAnalyzer', 'Landmass', 'WaterBody',
           'WorldConfig', 'WorldGenerator', 'World']
