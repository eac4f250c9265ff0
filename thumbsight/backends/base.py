"""
Base thumbnail handle shared by all ThumbSight backends.
"""

import os
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, NoReturn, Optional, Tuple

from ..exceptions import ImageFileError

logger = logging.getLogger(__name__)


class ThumbBase(ABC):
    """
    Thumbnail handle bound to a source image.

    Construction only records the source path; the image is opened on the
    first call to ``load``. Plugins compatible with the backend are
    instantiated and attached when the handle is built.
    """

    implementation: str = ""

    def __init__(self, filename: Optional[str] = None,
                 plugins: Optional[Iterable] = None,
                 registry=None,
                 plugin_configs: Optional[Dict[str, Dict[str, Any]]] = None):
        """
        Initialize the handle.

        Args:
            filename: Path to the source image
            plugins: PluginRecord objects to wire into this handle
            registry: CapabilityRegistry notified of activated plugins
            plugin_configs: Per-plugin configuration keyed by plugin name
        """
        self.filename = str(filename) if filename else None
        self.plugins: Dict[str, Any] = {}
        self.has_error = False
        self.error_message: Optional[str] = None
        self._image = None

        plugin_configs = plugin_configs or {}
        for record in plugins or []:
            self._attach_plugin(record, registry, plugin_configs.get(record.name))

    def _attach_plugin(self, record, registry, config: Optional[Dict[str, Any]] = None) -> None:
        if record.plugin_class is None:
            return

        try:
            plugin = record.plugin_class(config)
            plugin.thumb = self
            plugin.attach(self)
        except Exception as e:
            logger.error(f"Failed to attach plugin {record.name} to {self.implementation} thumb: {e}")
            return

        self.plugins[record.name] = plugin
        if registry is not None:
            registry.activate_plugin(record.name)

    def load(self):
        """
        Open the source image with the backend library.

        Returns:
            Backend-specific image object

        Raises:
            ImageFileError: If the source is missing or cannot be decoded
        """
        if self._image is not None:
            return self._image

        if not self.filename:
            self._trigger_error("No image file given")

        path = Path(self.filename)
        if not path.is_file() or not os.access(path, os.R_OK):
            self._trigger_error(f"Image file not found: {self.filename}")

        try:
            self._image = self._open(path)
        except ImageFileError as e:
            self._trigger_error(str(e))
        except Exception as e:
            self._trigger_error(f"Could not open {self.filename}: {e}")

        logger.debug(f"Loaded {self.filename} with {self.implementation}")
        return self._image

    @property
    def dimensions(self) -> Tuple[int, int]:
        """(width, height) of the source image."""
        return self._size(self.load())

    def _trigger_error(self, message: str) -> NoReturn:
        self.has_error = True
        self.error_message = message
        raise ImageFileError(message)

    @abstractmethod
    def _open(self, path: Path):
        """Decode the image at path."""
        pass

    @abstractmethod
    def _size(self, image) -> Tuple[int, int]:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(filename={self.filename!r})"
