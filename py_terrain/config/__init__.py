"""
Configuration modules for river generation.
"""

from .river_presets import RiverPreset, get_preset, list_presets, TEMPLATES
from .settings import Settings, settings

__all__ = ['RiverPreset', 'get_preset', 'list_presets', 'TEMPLATES', 'Settings', 'settings']
