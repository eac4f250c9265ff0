"""
ThumbSight: thumbnail backend negotiation

Detects which image backends the running interpreter can use, picks one
for each thumbnail request, and extends itself with plugins loaded from a
directory.
"""

__version__ = "0.1.0"

from .config import load_config
from .capabilities import Capability
from .exceptions import (
    ThumbSightError, UnresolvedBackendNameError, UnavailableBackendError, ImageFileError
)
from .factory import Backend, ThumbFactory, create
from .plugins import CapabilityRegistry, ThumbPlugin, get_registry

__all__ = [
    "load_config",
    "Capability",
    "Backend",
    "ThumbFactory",
    "create",
    "CapabilityRegistry",
    "ThumbPlugin",
    "get_registry",
    "ThumbSightError",
    "UnresolvedBackendNameError",
    "UnavailableBackendError",
    "ImageFileError",
]
