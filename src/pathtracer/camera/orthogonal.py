"""Orthogonal (parallel projection) camera."""

from __future__ import annotations

from src.pathtracer.camera.base import Camera
from src.pathtracer.core.geometry import VEC_X, Point
from src.pathtracer.core.ray import Ray


class OrthogonalCamera(Camera):
    """A camera whose rays are all parallel to +x.

    The screen is the square [-1, 1] in z, widened to ``aspect_ratio`` in y,
    placed at x = -1.
    """

    def fire_ray(self, u: float, v: float) -> Ray:
        origin = Point(-1.0, (1.0 - 2.0 * u) * self.aspect_ratio, 2.0 * v - 1.0)
        return self.transformation.apply_to_ray(Ray(origin=origin, direction=VEC_X))
