"""
Backend capabilities for ThumbSight

A capability is a backend implementation family whose runtime support may or
may not be present. Support is detected by probing for the library each
family is built on.
"""

import importlib.util
from enum import Enum
from typing import Callable, Dict, Union


class Capability(Enum):
    """Backend implementation families known to ThumbSight."""
    PILLOW = "pillow"    # Raster backend built on Pillow
    OPENCV = "opencv"    # OpenCV backend


# Sentinel tokens, usable as a plugin's required implementation
ANY = "any"
NOT_APPLICABLE = "n/a"
ALL = "all"

ANY_TOKENS = frozenset([ANY, NOT_APPLICABLE])

CapabilityToken = Union[Capability, str]


def module_probe(module_name: str) -> Callable[[], bool]:
    """
    Build a probe that reports whether a module can be imported

    Args:
        module_name: Top level module the capability depends on

    Returns:
        Callable returning True when the module is installed
    """
    def probe() -> bool:
        return importlib.util.find_spec(module_name) is not None
    probe.__name__ = f"probe_{module_name}"
    return probe


DEFAULT_PROBES: Dict[str, Callable[[], bool]] = {
    Capability.PILLOW.value: module_probe("PIL"),
    Capability.OPENCV.value: module_probe("cv2"),
}


def token_value(token: CapabilityToken) -> str:
    """Normalize a capability or sentinel to its string value."""
    if isinstance(token, Capability):
        return token.value
    return str(token)
