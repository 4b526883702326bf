"""Pinhole camera model for perspective projection ray generation.

All rays start at the eye, placed at distance ``screen_distance`` behind the
screen. The screen sits at x = 0 and spans [-1, 1] vertically, so the
vertical field of view is ``2 * atan(1 / screen_distance)``.

Example:
    >>> camera = PerspectiveCamera.from_fov(
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ...     transformation=look_at((-3.0, 0.0, 1.0), (0.0, 0.0, 0.0)),
    ... )
    >>> ray = camera.fire_ray(0.5, 0.5)  # Ray through the image centre
"""

from __future__ import annotations

import math

from src.pathtracer.camera.base import Camera
from src.pathtracer.core.geometry import Point, Vec
from src.pathtracer.core.ray import Ray
from src.pathtracer.core.transform import Transform


class PerspectiveCamera(Camera):
    """A pinhole camera.

    Attributes:
        screen_distance: Distance between the eye and the screen.
    """

    def __init__(
        self,
        screen_distance: float = 1.0,
        aspect_ratio: float = 1.0,
        transformation: Transform | None = None,
    ) -> None:
        """Create a pinhole camera.

        Raises:
            ValueError: If ``screen_distance`` or ``aspect_ratio`` is not
                positive.
        """
        super().__init__(aspect_ratio, transformation)
        if screen_distance <= 0.0:
            raise ValueError(f"screen_distance must be positive, got {screen_distance}")
        self.screen_distance = screen_distance

    @classmethod
    def from_fov(
        cls,
        vfov: float,
        aspect_ratio: float = 1.0,
        transformation: Transform | None = None,
    ) -> PerspectiveCamera:
        """Create a camera from its vertical field of view in degrees.

        Raises:
            ValueError: If ``vfov`` is not in (0, 180).
        """
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {vfov}")
        distance = 1.0 / math.tan(math.radians(vfov) / 2.0)
        return cls(distance, aspect_ratio, transformation)

    def fire_ray(self, u: float, v: float) -> Ray:
        origin = Point(-self.screen_distance, 0.0, 0.0)
        direction = Vec(
            self.screen_distance,
            (1.0 - 2.0 * u) * self.aspect_ratio,
            2.0 * v - 1.0,
        )
        return self.transformation.apply_to_ray(Ray(origin=origin, direction=direction))

    def aperture_deg(self) -> float:
        """Vertical field of view in degrees."""
        return 2.0 * math.degrees(math.atan(1.0 / self.screen_distance))
