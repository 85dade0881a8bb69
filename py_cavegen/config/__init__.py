"""
Configuration modules for cave generation.
"""

from .cave_presets import get_preset, list_presets, PRESETS
from .config import Settings, settings

__all__ = ['get_preset', 'list_presets', 'PRESETS', 'Settings', 'settings']
