"""
Shared fixtures for ThumbSight tests.
"""

import textwrap

import numpy as np
import pytest
from PIL import Image

from thumbsight.plugins.registry import CapabilityRegistry


def _probes(pillow: bool, opencv: bool):
    return {
        'pillow': lambda: pillow,
        'opencv': lambda: opencv,
    }


@pytest.fixture
def make_registry():
    """Build an isolated registry with fixed availability."""
    def _make(pillow: bool = True, opencv: bool = True) -> CapabilityRegistry:
        return CapabilityRegistry(probes=_probes(pillow, opencv))
    return _make


@pytest.fixture
def registry(make_registry):
    return make_registry()


@pytest.fixture(autouse=True)
def reset_process_registry():
    """Keep the process-wide registry from leaking between tests."""
    CapabilityRegistry.reset_instance()
    yield
    CapabilityRegistry.reset_instance()


class PluginDir:
    """Plugin directory that tests write plugin files into."""

    def __init__(self, path):
        self.path = path

    def write(self, filename: str, source: str):
        target = self.path / filename
        target.write_text(textwrap.dedent(source))
        return target

    def __str__(self):
        return str(self.path)


@pytest.fixture
def plugin_dir(tmp_path):
    directory = tmp_path / "thumb_plugins"
    directory.mkdir()
    return PluginDir(directory)


@pytest.fixture
def sample_image(tmp_path):
    """Small RGB PNG on disk."""
    path = tmp_path / "sample.png"
    pixels = np.zeros((48, 64, 3), dtype=np.uint8)
    pixels[:, :32] = (255, 0, 0)
    Image.fromarray(pixels).save(path)
    return path
