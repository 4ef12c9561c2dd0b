"""
Configuration modules for world generation.
"""

from .config import Settings, settings
from .world_presets import PRESETS, WorldPreset, get_preset, list_presets

__all__ = ['Settings', 'settings', 'PRESETS', 'WorldPreset', 'get_preset', 'list_presets']
