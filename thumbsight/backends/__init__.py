"""
Thumbnail backends for ThumbSight.

Concrete backends import their image library lazily so the package can be
imported, and capabilities probed, without every library installed.
"""

from .base import ThumbBase
from .opencv_backend import OpenCVThumb
from .pillow_backend import PillowThumb

__all__ = ['ThumbBase', 'OpenCVThumb', 'PillowThumb']
