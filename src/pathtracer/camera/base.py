"""Camera interface and look-at placement.

Cameras live in a canonical frame: they look along +x, the screen spans the
y-z plane and +z is up. Screen coordinates (u, v) run from (0, 0) at the
bottom-left corner to (1, 1) at the top-right corner. A camera's
transformation moves this canonical frame into the world.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from src.pathtracer.core.geometry import Point, Vec
from src.pathtracer.core.ray import Ray
from src.pathtracer.core.transform import Transform


class Camera(ABC):
    """Base class for cameras.

    Attributes:
        aspect_ratio: Screen width divided by height.
        transformation: Camera-to-world transform.
    """

    def __init__(
        self, aspect_ratio: float = 1.0, transformation: Transform | None = None
    ) -> None:
        """Create a camera.

        Raises:
            ValueError: If ``aspect_ratio`` is not positive.
        """
        if aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
        self.aspect_ratio = aspect_ratio
        self.transformation = transformation if transformation is not None else Transform()

    @abstractmethod
    def fire_ray(self, u: float, v: float) -> Ray:
        """Return the world-space ray through screen point (u, v)."""


def look_at(
    lookfrom: tuple[float, float, float],
    lookat: tuple[float, float, float],
    vup: tuple[float, float, float] = (0.0, 0.0, 1.0),
) -> Transform:
    """Build a camera transformation from a position and a target.

    The canonical camera axes map to: +x towards ``lookat``, +z along the
    component of ``vup`` orthogonal to the view direction, and +y to the
    left of the image.

    Args:
        lookfrom: Camera position in world space.
        lookat: Point the camera looks at.
        vup: Approximate up direction.

    Returns:
        The camera-to-world transformation.

    Raises:
        ValueError: If the view direction is zero or parallel to ``vup``.
    """
    forward = Vec(*lookat) - Vec(*lookfrom)
    if forward.squared_norm() == 0.0:
        raise ValueError("lookfrom and lookat must be different points")
    forward = forward.normalize()

    left = Vec(*vup).cross(forward)
    if left.squared_norm() == 0.0:
        raise ValueError(f"vup {vup} is parallel to the view direction")
    left = left.normalize()
    up = forward.cross(left)

    origin = Point(*lookfrom)
    m = np.array(
        [
            [forward.x, left.x, up.x, origin.x],
            [forward.y, left.y, up.y, origin.y],
            [forward.z, left.z, up.z, origin.z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transform(m)
