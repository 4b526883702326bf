"""The infinite plane z = 0 of object space.

For CSG purposes the plane bounds the half-space z < 0, which counts as its
inside. Surface coordinates repeat with period 1 along x and y, so a
checkered pigment tiles the plane.
"""

from __future__ import annotations

import math

from src.pathtracer.core.geometry import Normal, Point, Vec2D
from src.pathtracer.core.ray import Ray
from src.pathtracer.geometry.shape import Primitive

# Rays this close to parallel with the plane never hit it
PARALLEL_EPSILON = 1e-5


class Plane(Primitive):
    """The xy plane of object space, with normal +z."""

    def _local_roots(self, ray: Ray) -> list[float]:
        if abs(ray.direction.z) < PARALLEL_EPSILON:
            return []
        return [-ray.origin.z / ray.direction.z]

    def _local_normal(self, point: Point) -> Normal:
        return Normal(0.0, 0.0, 1.0)

    def _local_uv(self, point: Point) -> Vec2D:
        return Vec2D(point.x - math.floor(point.x), point.y - math.floor(point.y))

    def _local_is_inside(self, point: Point) -> bool:
        return point.z < 0.0
