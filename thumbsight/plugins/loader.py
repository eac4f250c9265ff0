"""
Plugin loader for the ThumbSight plugin system.

Executes plugin files from a directory and hands what they define to the
registry. Each physical file is executed at most once per loader.
"""

import os
import logging
import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Dict, List, Optional, Set

from .base import ThumbPlugin

logger = logging.getLogger(__name__)


class PluginLoader:
    """
    Loads plugin modules from the filesystem.

    A plugin module may define a ``register(registry)`` function and/or
    ``ThumbPlugin`` subclasses. Both are registered after the module runs.
    """

    PLUGIN_SUFFIX = ".py"
    REGISTER_HOOK = "register"

    def __init__(self):
        self._loaded: Set[str] = set()
        self._modules: Dict[str, ModuleType] = {}

    @property
    def loaded_paths(self) -> List[str]:
        """Paths of every file executed so far."""
        return sorted(self._loaded)

    def is_loaded(self, path: str) -> bool:
        return self._key(path) in self._loaded

    def list_entries(self, plugin_path: str) -> List[str]:
        """
        List candidate plugin files in a directory.

        Args:
            plugin_path: Directory to scan

        Returns:
            Full paths in directory listing order
        """
        entries = []
        for item in os.listdir(plugin_path):
            item_path = os.path.join(plugin_path, item)

            if not os.path.isfile(item_path):
                logger.debug(f"Skipping non-regular entry: {item_path}")
                continue
            if not item.endswith(self.PLUGIN_SUFFIX) or item.startswith(('_', '.')):
                logger.debug(f"Skipping non-plugin file: {item_path}")
                continue

            entries.append(item_path)
        return entries

    def load_file(self, path: str, registry) -> bool:
        """
        Execute a plugin file and register what it provides.

        Args:
            path: Plugin file path
            registry: CapabilityRegistry receiving the registrations

        Returns:
            True if the file was executed by this call, False if it had
            already been loaded
        """
        key = self._key(path)
        if key in self._loaded:
            return False
        self._loaded.add(key)

        module = self._exec_module(key)
        if module is None:
            return True

        self._modules[key] = module
        self._register_module(module, registry)
        return True

    def get_module(self, path: str) -> Optional[ModuleType]:
        return self._modules.get(self._key(path))

    def _key(self, path: str) -> str:
        return str(Path(path).resolve())

    def _exec_module(self, path: str) -> Optional[ModuleType]:
        module_name = f"thumbsight_plugin_{Path(path).stem}"
        try:
            spec = importlib.util.spec_from_file_location(module_name, path)
            if not spec or not spec.loader:
                logger.warning(f"Cannot build import spec for plugin {path}")
                return None

            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
            logger.debug(f"Loaded plugin file {path}")
            return module

        except Exception as e:
            logger.error(f"Failed to load plugin {path}: {e}")
            return None

    def _register_module(self, module: ModuleType, registry) -> None:
        hook = getattr(module, self.REGISTER_HOOK, None)
        if callable(hook):
            try:
                hook(registry)
            except Exception as e:
                logger.error(f"Plugin register hook in {module.__name__} failed: {e}")

        for plugin_class in self.find_plugin_classes(module):
            registry.register_plugin(
                plugin_class.name,
                plugin_class.required_implementation(),
                plugin_class=plugin_class
            )

    @staticmethod
    def find_plugin_classes(module: ModuleType) -> List[type]:
        """Find ThumbPlugin subclasses defined in a module."""
        classes = []
        for name in dir(module):
            obj = getattr(module, name)
            if (isinstance(obj, type) and
                    issubclass(obj, ThumbPlugin) and
                    obj is not ThumbPlugin and
                    obj.__module__ == module.__name__):
                if not obj.name:
                    logger.warning(f"Plugin class {obj.__name__} has no name, skipping")
                    continue
                classes.append(obj)
        return classes
