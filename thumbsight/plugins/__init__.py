"""
ThumbSight Plugin Architecture

Plugins are Python files dropped into a plugin directory. They register
themselves against the capability they need and are wired into thumbnail
handles whose backend satisfies it.
"""

from .base import PluginRecord, ThumbPlugin
from .loader import PluginLoader
from .registry import CapabilityRegistry, get_registry

__all__ = [
    'PluginRecord',
    'ThumbPlugin',
    'PluginLoader',
    'CapabilityRegistry',
    'get_registry'
]
