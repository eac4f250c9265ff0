"""
Capability registry for ThumbSight.

Tracks which backend implementations the running interpreter supports and
which plugins have been registered against them. One registry normally
serves the whole process (see ``CapabilityRegistry.get_instance``), but
isolated instances can be built with explicit probes.
"""

import os
import logging
import threading
from typing import Callable, Dict, List, Optional

from ..capabilities import (
    ALL, ANY_TOKENS, DEFAULT_PROBES, CapabilityToken, token_value
)
from .base import PluginRecord
from .loader import PluginLoader

logger = logging.getLogger(__name__)


class CapabilityRegistry:
    """
    Availability map plus plugin registry.

    Availability is probed once at construction and never refreshed.
    Mutating operations are serialized by a re-entrant lock, since plugin
    files call ``register_plugin`` while ``load_plugins`` holds it.
    """

    _instance: Optional['CapabilityRegistry'] = None
    _instance_lock = threading.Lock()

    def __init__(self,
                 probes: Optional[Dict[str, Callable[[], bool]]] = None,
                 loader: Optional[PluginLoader] = None):
        """
        Initialize the registry and probe the runtime.

        Args:
            probes: Mapping of capability value to probe callable.
                Defaults to one probe per ``Capability`` member.
            loader: Plugin loader used by ``load_plugins``
        """
        self._lock = threading.RLock()
        self._registry: Dict[str, PluginRecord] = {}
        self._probes = dict(DEFAULT_PROBES if probes is None else probes)
        self._implementations: Dict[str, bool] = {name: False for name in self._probes}
        self.loader = loader or PluginLoader()

        self._probe_implementations()

    @classmethod
    def get_instance(cls) -> 'CapabilityRegistry':
        """Get the process-wide registry, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the process-wide registry. Intended for tests."""
        with cls._instance_lock:
            cls._instance = None

    def _probe_implementations(self) -> None:
        with self._lock:
            for name, loaded in self._implementations.items():
                if loaded:
                    continue

                try:
                    self._implementations[name] = bool(self._probes[name]())
                except Exception as e:
                    logger.warning(f"Probe for {name} implementation failed: {e}")
                    self._implementations[name] = False

            available = [name for name, ok in self._implementations.items() if ok]
            logger.debug(f"Available implementations: {available or 'none'}")

    def get_implementations(self) -> Dict[str, bool]:
        """Copy of the availability map."""
        return dict(self._implementations)

    def is_available(self, implementation: CapabilityToken) -> bool:
        """
        Check whether an implementation is usable.

        "any" and "n/a" are always available; "all" requires every known
        implementation (and holds for an empty map). Unknown names are
        reported as unavailable.

        Args:
            implementation: Capability or sentinel token

        Returns:
            True if the implementation can be used
        """
        token = token_value(implementation)

        if token in ANY_TOKENS:
            return True

        if token == ALL:
            return all(self._implementations.values())

        return self._implementations.get(token, False)

    def register_plugin(self, plugin_name: str, implementation: CapabilityToken,
                        plugin_class: Optional[type] = None) -> bool:
        """
        Register a plugin if its name is free and its implementation is available.

        Args:
            plugin_name: Unique plugin name
            implementation: Capability the plugin requires, or a sentinel
            plugin_class: Optional ThumbPlugin subclass wired into handles

        Returns:
            True if the plugin was added
        """
        token = token_value(implementation)

        with self._lock:
            if plugin_name in self._registry:
                logger.debug(f"Plugin {plugin_name} already registered")
                return False

            if not self.is_available(token):
                logger.info(f"Plugin {plugin_name} requires unavailable implementation {token}")
                return False

            self._registry[plugin_name] = PluginRecord(
                name=plugin_name,
                implementation=token,
                plugin_class=plugin_class
            )

        logger.info(f"Registered plugin: {plugin_name} ({token})")
        return True

    def load_plugins(self, plugin_path: str) -> List[str]:
        """
        Load every plugin file in a directory.

        Files already loaded are skipped. A missing or unreadable directory
        loads nothing and is not an error, plugins being optional.

        Args:
            plugin_path: Plugin directory

        Returns:
            Paths loaded by this call
        """
        if plugin_path.endswith(('/', os.sep)) and len(plugin_path) > 1:
            plugin_path = plugin_path[:-1]

        try:
            entries = self.loader.list_entries(plugin_path)
        except OSError as e:
            logger.debug(f"Plugin directory {plugin_path} not readable: {e}")
            return []

        loaded = []
        with self._lock:
            for entry in entries:
                if self.loader.load_file(entry, self):
                    loaded.append(entry)

        if loaded:
            logger.info(f"Loaded {len(loaded)} plugin file(s) from {plugin_path}")
        return loaded

    def get_plugin(self, plugin_name: str) -> Optional[PluginRecord]:
        return self._registry.get(plugin_name)

    def get_plugins(self) -> List[PluginRecord]:
        """All plugin records in registration order."""
        with self._lock:
            return list(self._registry.values())

    def plugins_for(self, capability: CapabilityToken) -> List[PluginRecord]:
        """
        Plugins that can be wired into a backend of the given capability.

        Args:
            capability: Backend capability

        Returns:
            Matching plugin records
        """
        value = token_value(capability)
        return [record for record in self.get_plugins() if record.supports(value)]

    def activate_plugin(self, plugin_name: str) -> bool:
        """
        Mark a plugin as wired into a thumbnail handle.

        Args:
            plugin_name: Registered plugin name

        Returns:
            False if no such plugin is registered
        """
        with self._lock:
            record = self._registry.get(plugin_name)
            if record is None:
                return False
            record.activated = True
        return True

    def __contains__(self, plugin_name: str) -> bool:
        return plugin_name in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __bool__(self) -> bool:
        # An empty registry is still a registry
        return True


def get_registry() -> CapabilityRegistry:
    """Get the process-wide capability registry."""
    return CapabilityRegistry.get_instance()
