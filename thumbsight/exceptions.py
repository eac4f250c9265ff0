"""
Exceptions raised by ThumbSight
"""


class ThumbSightError(Exception):
    """Base exception for ThumbSight."""
    pass


class UnresolvedBackendNameError(ThumbSightError):
    """Raised when a requested backend name is not a known implementation."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown thumbnail implementation: {name!r}")


class UnavailableBackendError(ThumbSightError):
    """Raised when neither the requested nor the baseline backend can run."""
    pass


class ImageFileError(ThumbSightError):
    """Raised when a backend cannot open its source image."""
    pass
