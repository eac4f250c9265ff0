"""
Thumbnail factory for ThumbSight

Picks the backend that services a thumbnail request. The requested
implementation is used when its capability is present, otherwise the
Pillow baseline, otherwise the request fails.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, Union

from .backends import OpenCVThumb, PillowThumb, ThumbBase
from .capabilities import Capability
from .config import get_config_value
from .exceptions import UnavailableBackendError, UnresolvedBackendNameError
from .plugins.registry import CapabilityRegistry
from .utils.logging import StructuredLogger

logger = StructuredLogger(__name__)


class Backend(Enum):
    """Thumbnail implementations the factory can build."""
    PILLOW = "pillow"
    OPENCV = "opencv"


IMPLEMENTATION_MAP: Dict[Backend, Tuple[Capability, Type[ThumbBase]]] = {
    Backend.PILLOW: (Capability.PILLOW, PillowThumb),
    Backend.OPENCV: (Capability.OPENCV, OpenCVThumb),
}

BASELINE_BACKEND = Backend.PILLOW

DEFAULT_IMPLEMENTATION = "pillow"
DEFAULT_PLUGIN_PATH = "thumb_plugins/"


def resolve_backend(name: Union[str, Backend]) -> Backend:
    """
    Map an implementation name onto a Backend.

    Raises:
        UnresolvedBackendNameError: If the name is not a known implementation
    """
    if isinstance(name, Backend):
        return name
    try:
        return Backend(name)
    except ValueError:
        raise UnresolvedBackendNameError(name) from None


class ThumbFactory:
    """
    Builds thumbnail handles for the best available backend.

    The registry is injected so tests can run against isolated capability
    sets; by default the process-wide registry is used.
    """

    def __init__(self,
                 registry: Optional[CapabilityRegistry] = None,
                 plugin_path: Optional[str] = None,
                 default_implementation: Optional[str] = None,
                 plugin_configs: Optional[Dict[str, Dict[str, Any]]] = None):
        """
        Initialize the factory

        Args:
            registry: Capability registry, defaults to the process-wide one
            plugin_path: Directory to load plugins from
            default_implementation: Backend used when a request names none
            plugin_configs: Per-plugin configuration keyed by plugin name
        """
        self._registry = registry
        self.plugin_path = plugin_path if plugin_path is not None else DEFAULT_PLUGIN_PATH
        self.default_implementation = default_implementation or DEFAULT_IMPLEMENTATION
        self.plugin_configs = plugin_configs or {}

    @classmethod
    def from_config(cls, config: Dict[str, Any],
                    registry: Optional[CapabilityRegistry] = None) -> 'ThumbFactory':
        """Build a factory from the 'thumbnails' config section."""
        return cls(
            registry=registry,
            plugin_path=get_config_value(config, 'thumbnails.plugin_path', DEFAULT_PLUGIN_PATH),
            default_implementation=get_config_value(
                config, 'thumbnails.default_implementation', DEFAULT_IMPLEMENTATION
            ),
            plugin_configs=get_config_value(config, 'thumbnails.plugins', {}),
        )

    @property
    def registry(self) -> CapabilityRegistry:
        if self._registry is None:
            self._registry = CapabilityRegistry.get_instance()
        return self._registry

    def create(self, filename: Optional[str] = None,
               implementation: Optional[Union[str, Backend]] = None) -> ThumbBase:
        """
        Create a thumbnail handle

        Args:
            filename: Path of the source image [optional]
            implementation: Backend to request, defaults to the configured one

        Returns:
            Handle for the requested backend, or the baseline backend

        Raises:
            UnresolvedBackendNameError: If the implementation name is unknown
            UnavailableBackendError: If neither requested nor baseline backend is usable
        """
        registry = self.registry
        registry.load_plugins(self.plugin_path)

        requested = resolve_backend(implementation or self.default_implementation)
        capability, _ = IMPLEMENTATION_MAP[requested]

        if registry.is_available(capability):
            logger.debug("Using requested thumbnail implementation",
                         implementation=requested.value, filename=filename)
            return self._build(requested, filename)

        baseline_capability, _ = IMPLEMENTATION_MAP[BASELINE_BACKEND]
        if registry.is_available(baseline_capability):
            logger.warning("Requested implementation unavailable, falling back",
                           requested=requested.value, fallback=BASELINE_BACKEND.value)
            return self._build(BASELINE_BACKEND, filename)

        raise UnavailableBackendError(
            "You must have either Pillow or OpenCV installed to use ThumbSight"
        )

    def _build(self, backend: Backend, filename: Optional[str]) -> ThumbBase:
        capability, thumb_class = IMPLEMENTATION_MAP[backend]
        plugins = self.registry.plugins_for(capability)
        return thumb_class(filename, plugins=plugins, registry=self.registry,
                           plugin_configs=self.plugin_configs)


def create(filename: Optional[str] = None,
           implementation: Optional[Union[str, Backend]] = None,
           plugin_path: Optional[str] = None,
           registry: Optional[CapabilityRegistry] = None) -> ThumbBase:
    """
    Create a thumbnail handle with a one-off factory

    Args:
        filename: Path of the source image [optional]
        implementation: Backend to request, defaults to pillow
        plugin_path: Plugin directory, defaults to thumb_plugins/
        registry: Capability registry, defaults to the process-wide one

    Returns:
        Thumbnail handle
    """
    factory = ThumbFactory(registry=registry, plugin_path=plugin_path)
    return factory.create(filename, implementation)
