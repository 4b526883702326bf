"""Shape base classes and the hit record they produce.

Every shape answers four questions about a world-space ray or point:

    - ray_intersection(): nearest hit, or None
    - ray_intersection_list(): every hit along the ray, sorted by t
    - is_point_inside(): containment test used by the CSG combinators
    - quick_ray_intersection(): boolean hit test used for shadow rays

Primitive shapes (sphere, plane, box, cylinder, cone) own a Transform and a
Material and do their math in object space. Subclasses of Primitive only
provide the object-space root finding, normal, UV and containment rules; the
base class handles the mapping between world and object space.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.pathtracer.core.geometry import EPSILON, Normal, Point, Vec2D
from src.pathtracer.core.ray import Ray
from src.pathtracer.core.transform import Transform
from src.pathtracer.materials.material import Material

if TYPE_CHECKING:
    from src.pathtracer.geometry.csg import CSGDifference, CSGIntersection, CSGUnion


@dataclass(frozen=True)
class HitRecord:
    """An intersection between a ray and a shape.

    Hit records order by ``t``, nearest first.

    Attributes:
        world_point: Hit position in world space.
        normal: Unit surface normal in world space, facing the incoming ray.
        surface_point: (u, v) coordinates used for pigment lookup.
        t: Ray parameter of the hit.
        ray: The world-space ray that produced the hit.
        shape: The primitive that was hit (its material shades the hit).
    """

    world_point: Point
    normal: Normal
    surface_point: Vec2D
    t: float
    ray: Ray
    shape: Shape | None = field(default=None, compare=False, repr=False)

    def __lt__(self, other: HitRecord) -> bool:
        return self.t < other.t

    def is_close(self, other: HitRecord | None, epsilon: float = EPSILON) -> bool:
        """Compare every geometric field within epsilon."""
        if other is None:
            return False
        return (
            self.world_point.is_close(other.world_point, epsilon)
            and self.normal.is_close(other.normal, epsilon)
            and self.surface_point.is_close(other.surface_point, epsilon)
            and abs(self.t - other.t) < epsilon
            and self.ray.is_close(other.ray, epsilon)
        )


class Shape(ABC):
    """Anything that can be intersected by a ray.

    Shapes combine with ``+`` (union), ``-`` (difference) and ``*``
    (intersection).
    """

    @abstractmethod
    def ray_intersection_list(self, ray: Ray) -> list[HitRecord]:
        """Return all hits with ``tmin < t < tmax``, sorted by ``t``.

        An empty list means the ray misses the shape.
        """

    @abstractmethod
    def is_point_inside(self, point: Point) -> bool:
        """Return True if the world-space point lies strictly inside."""

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        """Return the nearest hit with ``tmin < t < tmax``, or None."""
        hits = self.ray_intersection_list(ray)
        return hits[0] if hits else None

    def quick_ray_intersection(self, ray: Ray) -> bool:
        """Return True if the ray hits the shape anywhere in its range."""
        return bool(self.ray_intersection_list(ray))

    def __add__(self, other: Shape) -> CSGUnion:
        from src.pathtracer.geometry.csg import CSGUnion

        return CSGUnion(self, other)

    def __sub__(self, other: Shape) -> CSGDifference:
        from src.pathtracer.geometry.csg import CSGDifference

        return CSGDifference(self, other)

    def __mul__(self, other: Shape) -> CSGIntersection:
        from src.pathtracer.geometry.csg import CSGIntersection

        return CSGIntersection(self, other)


class Primitive(Shape):
    """A shape defined in object space and placed by a transformation.

    Attributes:
        transformation: Object-to-world transform.
        material: Surface material.
    """

    def __init__(
        self,
        transformation: Transform | None = None,
        material: Material | None = None,
    ) -> None:
        self.transformation = transformation if transformation is not None else Transform()
        self.material = material if material is not None else Material()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transformation={self.transformation!r})"

    # -- object space hooks -------------------------------------------------

    @abstractmethod
    def _local_roots(self, ray: Ray) -> list[float]:
        """Return ascending ray parameters where the object-space ray
        crosses the surface, without range filtering."""

    @abstractmethod
    def _local_normal(self, point: Point) -> Normal:
        """Outward normal at an object-space surface point."""

    @abstractmethod
    def _local_uv(self, point: Point) -> Vec2D:
        """Surface coordinates of an object-space surface point."""

    @abstractmethod
    def _local_is_inside(self, point: Point) -> bool:
        """Containment test in object space."""

    # -- world space API ----------------------------------------------------

    def _make_hit(self, world_ray: Ray, local_ray: Ray, t: float) -> HitRecord:
        local_point = local_ray.at(t)
        normal = self._local_normal(local_point)
        if normal.dot(local_ray.direction) > 0.0:
            normal = -normal

        return HitRecord(
            world_point=self.transformation.apply_to_point(local_point),
            normal=self.transformation.apply_to_normal(normal).normalize(),
            surface_point=self._local_uv(local_point),
            t=t,
            ray=world_ray,
            shape=self,
        )

    def ray_intersection_list(self, ray: Ray) -> list[HitRecord]:
        local_ray = self.transformation.inverse().apply_to_ray(ray)
        return [
            self._make_hit(ray, local_ray, t)
            for t in self._local_roots(local_ray)
            if ray.tmin < t < ray.tmax
        ]

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        local_ray = self.transformation.inverse().apply_to_ray(ray)
        for t in self._local_roots(local_ray):
            if ray.tmin < t < ray.tmax:
                return self._make_hit(ray, local_ray, t)
        return None

    def quick_ray_intersection(self, ray: Ray) -> bool:
        local_ray = self.transformation.inverse().apply_to_ray(ray)
        return any(ray.tmin < t < ray.tmax for t in self._local_roots(local_ray))

    def is_point_inside(self, point: Point) -> bool:
        return self._local_is_inside(self.transformation.inverse().apply_to_point(point))


def solve_quadratic(a: float, b: float, c: float) -> list[float]:
    """Real roots of ``a t^2 + b t + c = 0`` in ascending order.

    Uses the numerically stable form that avoids cancellation between ``-b``
    and the square root. Tangent rays (zero discriminant) count as misses.
    """
    if a == 0.0:
        if b == 0.0:
            return []
        return [-c / b]

    delta = b * b - 4.0 * a * c
    if delta <= 0.0:
        return []

    sqrt_delta = math.sqrt(delta)
    # q = -(b + sign(b) * sqrt(delta)) / 2 is never zero when delta > 0
    q = -0.5 * (b + sqrt_delta) if b >= 0.0 else -0.5 * (b - sqrt_delta)
    t1, t2 = q / a, c / q
    return [t1, t2] if t1 <= t2 else [t2, t1]


def azimuth_u(x: float, y: float) -> float:
    """Map the azimuth of (x, y) into [0, 1)."""
    u = math.atan2(y, x) / (2.0 * math.pi)
    return u + 1.0 if u < 0.0 else u
