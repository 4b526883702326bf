"""Camera module for primary ray generation.

Components:
    base: Camera interface and look-at placement
    orthogonal: Parallel projection camera
    pinhole: Perspective (pinhole) camera

Ray generation uses normalized screen coordinates:
    u in [0, 1]: left to right across the image
    v in [0, 1]: bottom to top across the image
"""

from .base import Camera, look_at
from .orthogonal import OrthogonalCamera
from .pinhole import PerspectiveCamera

__all__ = [
    "Camera",
    "look_at",
    "OrthogonalCamera",
    "PerspectiveCamera",
]
