"""Unit sphere centred at the origin of its object space.

Scale and translate it with the shape's transformation to get spheres of any
radius and position.

Surface coordinates:
    u = atan2(y, x) / 2pi, wrapped into [0, 1)
    v = acos(z) / pi
"""

from __future__ import annotations

import math

from src.pathtracer.core.geometry import Normal, Point, Vec2D
from src.pathtracer.core.ray import Ray
from src.pathtracer.geometry.shape import Primitive, azimuth_u, solve_quadratic


class Sphere(Primitive):
    """A sphere of radius 1 centred at the object-space origin."""

    def _local_roots(self, ray: Ray) -> list[float]:
        origin = ray.origin.to_vec()
        a = ray.direction.squared_norm()
        b = 2.0 * origin.dot(ray.direction)
        c = origin.squared_norm() - 1.0
        return solve_quadratic(a, b, c)

    def _local_normal(self, point: Point) -> Normal:
        return Normal(point.x, point.y, point.z)

    def _local_uv(self, point: Point) -> Vec2D:
        z = max(-1.0, min(1.0, point.z))
        return Vec2D(azimuth_u(point.x, point.y), math.acos(z) / math.pi)

    def _local_is_inside(self, point: Point) -> bool:
        return point.to_vec().squared_norm() < 1.0
