"""Constructive solid geometry combinators.

A CSG node combines exactly two shapes (primitives or other CSG nodes). It
keeps a hit from one child only when that hit lies on the boundary of the
combined solid, which is decided with the other child's containment test:

    ===============  ===========================  ===========================
    operation        hit on A is kept when        hit on B is kept when
    ===============  ===========================  ===========================
    union            not inside B                 not inside A
    difference A-B   not inside B                 inside A
    intersection     inside B                     inside A
    ===============  ===========================  ===========================

The kept hits are merged and sorted by ``t``; ties keep A's hits first. The
nearest hit is simply the first element of that list. Hits keep a reference
to the primitive that produced them, so shading uses the child's material.
CSG nodes have no transformation or material of their own.

Both children are always queried: a child with no hits along the ray may
still contain the whole ray (an unbounded plane, or a short shadow segment),
so its containment test decides the fate of the other child's hits.

Example:
    >>> lens = Sphere(translation(Vec(0.5, 0.0, 0.0))) * Sphere(
    ...     translation(Vec(-0.5, 0.0, 0.0))
    ... )
    >>> lens.is_point_inside(Point(0.25, 0.0, 0.0))
    True
"""

from __future__ import annotations

from src.pathtracer.core.geometry import Point
from src.pathtracer.core.ray import Ray
from src.pathtracer.geometry.shape import HitRecord, Shape


def _sorted_by_t(hits: list[HitRecord]) -> list[HitRecord]:
    return sorted(hits, key=lambda hit: hit.t)


class CSGShape(Shape):
    """Base class of the binary CSG nodes.

    Attributes:
        shape_a: First operand.
        shape_b: Second operand.
    """

    def __init__(self, shape_a: Shape, shape_b: Shape) -> None:
        """Create a CSG node.

        Raises:
            TypeError: If either operand is not a Shape.
        """
        for name, operand in (("shape_a", shape_a), ("shape_b", shape_b)):
            if not isinstance(operand, Shape):
                raise TypeError(
                    f"{type(self).__name__} {name} must be a Shape, "
                    f"got {type(operand).__name__}"
                )
        self.shape_a = shape_a
        self.shape_b = shape_b

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.shape_a!r}, {self.shape_b!r})"


class CSGUnion(CSGShape):
    """Points inside either operand."""

    def ray_intersection_list(self, ray: Ray) -> list[HitRecord]:
        hits_a = self.shape_a.ray_intersection_list(ray)
        hits_b = self.shape_b.ray_intersection_list(ray)

        legal = [h for h in hits_a if not self.shape_b.is_point_inside(h.world_point)]
        legal += [h for h in hits_b if not self.shape_a.is_point_inside(h.world_point)]
        return _sorted_by_t(legal)

    def is_point_inside(self, point: Point) -> bool:
        return self.shape_a.is_point_inside(point) or self.shape_b.is_point_inside(point)

    def quick_ray_intersection(self, ray: Ray) -> bool:
        return self.shape_a.quick_ray_intersection(
            ray
        ) or self.shape_b.quick_ray_intersection(ray)


class CSGDifference(CSGShape):
    """Points inside ``shape_a`` but not inside ``shape_b``."""

    def ray_intersection_list(self, ray: Ray) -> list[HitRecord]:
        hits_a = self.shape_a.ray_intersection_list(ray)
        hits_b = self.shape_b.ray_intersection_list(ray)

        legal = [h for h in hits_a if not self.shape_b.is_point_inside(h.world_point)]
        legal += [h for h in hits_b if self.shape_a.is_point_inside(h.world_point)]
        return _sorted_by_t(legal)

    def is_point_inside(self, point: Point) -> bool:
        return self.shape_a.is_point_inside(point) and not self.shape_b.is_point_inside(
            point
        )


class CSGIntersection(CSGShape):
    """Points inside both operands."""

    def ray_intersection_list(self, ray: Ray) -> list[HitRecord]:
        hits_a = self.shape_a.ray_intersection_list(ray)
        hits_b = self.shape_b.ray_intersection_list(ray)

        legal = [h for h in hits_a if self.shape_b.is_point_inside(h.world_point)]
        legal += [h for h in hits_b if self.shape_a.is_point_inside(h.world_point)]
        return _sorted_by_t(legal)

    def is_point_inside(self, point: Point) -> bool:
        return self.shape_a.is_point_inside(point) and self.shape_b.is_point_inside(point)
