"""
Procedural tile world generation for tile-based exploration games.
"""

from .core import (
    World, WorldConfig, WorldGenerator, BiomeCatalog, BiomeEntry, BiomeKind,
    BiomeVariant, AleaPRNG, Tile,
)

__version__ = "0.1.0"

__all__ = ['World', 'WorldConfig', 'WorldGenerator', 'BiomeCatalog', 'BiomeEntry',
           'BiomeKind', 'BiomeVariant', 'AleaPRNG', 'Tile', '__version__']
