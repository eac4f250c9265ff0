"""
Base plugin classes and interfaces for the ThumbSight plugin system.

Defines the plugin record kept by the registry and the contract that
plugin classes implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..capabilities import ALL, ANY_TOKENS, token_value


@dataclass
class PluginRecord:
    """Registry entry for a plugin."""
    name: str
    implementation: str
    activated: bool = False
    plugin_class: Optional[type] = field(default=None, repr=False, compare=False)

    def supports(self, capability: str) -> bool:
        """
        Check whether this plugin can be wired into a backend.

        Args:
            capability: Capability value of the backend

        Returns:
            True if the plugin's required implementation matches
        """
        if self.implementation in ANY_TOKENS or self.implementation == ALL:
            return True
        return self.implementation == capability

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary."""
        return {
            'name': self.name,
            'implementation': self.implementation,
            'activated': self.activated
        }


class ThumbPlugin(ABC):
    """
    Base class for ThumbSight plugins.

    Subclasses defined in a plugin file are registered automatically when
    the file is loaded. ``name`` must be unique across plugins and
    ``implementation`` names the capability the plugin needs ("any", "n/a"
    and "all" are accepted).
    """

    name: str = ""
    implementation: str = "any"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.thumb = None

    @classmethod
    def required_implementation(cls) -> str:
        return token_value(cls.implementation)

    @abstractmethod
    def attach(self, thumb) -> None:
        """
        Wire the plugin into a thumbnail handle.

        Args:
            thumb: ThumbBase instance the plugin extends
        """
        pass
