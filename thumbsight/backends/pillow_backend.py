"""
Pillow thumbnail backend
"""

from pathlib import Path
from typing import Tuple

from ..capabilities import Capability
from .base import ThumbBase


class PillowThumb(ThumbBase):
    """Raster backend built on Pillow."""

    implementation = Capability.PILLOW.value

    def _open(self, path: Path):
        from PIL import Image

        image = Image.open(path)
        image.load()
        return image

    def _size(self, image) -> Tuple[int, int]:
        return image.size
