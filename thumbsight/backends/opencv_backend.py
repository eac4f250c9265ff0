"""
OpenCV thumbnail backend
"""

from pathlib import Path
from typing import Tuple

from ..capabilities import Capability
from ..exceptions import ImageFileError
from .base import ThumbBase


class OpenCVThumb(ThumbBase):
    """Backend built on OpenCV, images held as numpy arrays."""

    implementation = Capability.OPENCV.value

    def _open(self, path: Path):
        import cv2

        image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        # cv2.imread signals decode failure with None rather than raising
        if image is None:
            raise ImageFileError(f"OpenCV could not decode {path}")
        return image

    def _size(self, image) -> Tuple[int, int]:
        height, width = image.shape[:2]
        return width, height
