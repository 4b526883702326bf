"""Closed cylinders and cones aligned with the object-space z axis.

Both solids span 0 <= z <= 1 and have radius 1 at z = 0. The cylinder keeps
radius 1 up to its top cap; the cone narrows to its apex at (0, 0, 1).

Surface coordinates:
    lateral surface: u = azimuth / 2pi, v = z
    caps: the unit disc projected onto the unit square
"""

from __future__ import annotations

import math

from src.pathtracer.core.geometry import Normal, Point, Vec2D
from src.pathtracer.core.ray import Ray
from src.pathtracer.geometry.shape import Primitive, azimuth_u, solve_quadratic

# Roots closer than this are the same crossing (e.g. through a rim)
_DUPLICATE_ROOT_EPSILON = 1e-9


def _cap_roots(ray: Ray, height: float, radius: float) -> list[float]:
    if ray.direction.z == 0.0:
        return []
    t = (height - ray.origin.z) / ray.direction.z
    x = ray.origin.x + t * ray.direction.x
    y = ray.origin.y + t * ray.direction.y
    return [t] if x * x + y * y <= radius * radius else []


def _merge_roots(roots: list[float]) -> list[float]:
    merged: list[float] = []
    for t in sorted(roots):
        if not merged or t - merged[-1] > _DUPLICATE_ROOT_EPSILON:
            merged.append(t)
    return merged


def _disc_uv(point: Point) -> Vec2D:
    return Vec2D(
        min(max((point.x + 1.0) / 2.0, 0.0), 1.0),
        min(max((point.y + 1.0) / 2.0, 0.0), 1.0),
    )


class Cylinder(Primitive):
    """Cylinder of radius 1 between z = 0 and z = 1, closed by two caps."""

    def _local_roots(self, ray: Ray) -> list[float]:
        ox, oy, oz = ray.origin.x, ray.origin.y, ray.origin.z
        dx, dy, dz = ray.direction.x, ray.direction.y, ray.direction.z

        roots = []
        if dx != 0.0 or dy != 0.0:
            a = dx * dx + dy * dy
            b = 2.0 * (ox * dx + oy * dy)
            c = ox * ox + oy * oy - 1.0
            roots = [t for t in solve_quadratic(a, b, c) if 0.0 <= oz + t * dz <= 1.0]

        roots += _cap_roots(ray, 0.0, 1.0)
        roots += _cap_roots(ray, 1.0, 1.0)
        return _merge_roots(roots)

    def _on_cap(self, point: Point) -> int:
        """Return -1 for the bottom cap, 1 for the top cap, 0 for the side."""
        side_distance = abs(math.hypot(point.x, point.y) - 1.0)
        bottom_distance = abs(point.z)
        top_distance = abs(point.z - 1.0)
        if side_distance <= min(bottom_distance, top_distance):
            return 0
        return -1 if bottom_distance < top_distance else 1

    def _local_normal(self, point: Point) -> Normal:
        cap = self._on_cap(point)
        if cap == 0:
            return Normal(point.x, point.y, 0.0)
        return Normal(0.0, 0.0, float(cap))

    def _local_uv(self, point: Point) -> Vec2D:
        if self._on_cap(point) == 0:
            return Vec2D(azimuth_u(point.x, point.y), min(max(point.z, 0.0), 1.0))
        return _disc_uv(point)

    def _local_is_inside(self, point: Point) -> bool:
        return 0.0 < point.z < 1.0 and point.x * point.x + point.y * point.y < 1.0


class Cone(Primitive):
    """Cone with base radius 1 at z = 0 and apex at z = 1, closed by its base."""

    def _local_roots(self, ray: Ray) -> list[float]:
        ox, oy, oz = ray.origin.x, ray.origin.y, ray.origin.z
        dx, dy, dz = ray.direction.x, ray.direction.y, ray.direction.z

        # x^2 + y^2 = (1 - z)^2
        k = 1.0 - oz
        a = dx * dx + dy * dy - dz * dz
        b = 2.0 * (ox * dx + oy * dy + k * dz)
        c = ox * ox + oy * oy - k * k
        roots = [t for t in solve_quadratic(a, b, c) if 0.0 <= oz + t * dz <= 1.0]

        roots += _cap_roots(ray, 0.0, 1.0)
        return _merge_roots(roots)

    def _on_base(self, point: Point) -> bool:
        side_distance = abs(math.hypot(point.x, point.y) - (1.0 - point.z)) / math.sqrt(2.0)
        return abs(point.z) < side_distance

    def _local_normal(self, point: Point) -> Normal:
        if self._on_base(point):
            return Normal(0.0, 0.0, -1.0)
        radial = math.hypot(point.x, point.y)
        if radial == 0.0:
            # Apex
            return Normal(0.0, 0.0, 1.0)
        # Gradient of x^2 + y^2 - (1 - z)^2, scaled by 1 / (2 r)
        return Normal(point.x / radial, point.y / radial, 1.0)

    def _local_uv(self, point: Point) -> Vec2D:
        if self._on_base(point):
            return _disc_uv(point)
        return Vec2D(azimuth_u(point.x, point.y), min(max(point.z, 0.0), 1.0))

    def _local_is_inside(self, point: Point) -> bool:
        if not 0.0 < point.z < 1.0:
            return False
        radius = 1.0 - point.z
        return point.x * point.x + point.y * point.y < radius * radius
