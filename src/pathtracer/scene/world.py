"""Scene container: shapes, point lights and closest-hit queries.

The world is filled once while building a scene and is read-only during
rendering, so worker processes can each hold a copy without coordination.
Closest-hit search is a brute-force scan over every shape.

Example:
    >>> world = World()
    >>> world.add_shape(Sphere(translation(Vec(0.0, 0.0, -5.0))))
    >>> hit = world.ray_intersection(Ray(Point(), Vec(0.0, 0.0, -1.0)))
    >>> hit.t
    4.0
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.pathtracer.core.color import WHITE, Color
from src.pathtracer.core.geometry import Point
from src.pathtracer.core.ray import Ray
from src.pathtracer.geometry.shape import HitRecord, Shape

# Gap (in world units) left at both ends of a visibility segment
VISIBILITY_EPSILON = 1e-3


@dataclass
class PointLight:
    """An ideal point light source.

    Attributes:
        position: Light position in world space.
        color: Emitted color.
        linear_radius: When positive, radiance falls off as
            ``(linear_radius / distance) ** 2``.
    """

    position: Point
    color: Color = WHITE
    linear_radius: float = 0.0


@dataclass
class World:
    """A collection of shapes and point lights.

    Attributes:
        shapes: Shapes in insertion order.
        point_lights: Light sources used by the point-light renderer.
    """

    shapes: list[Shape] = field(default_factory=list)
    point_lights: list[PointLight] = field(default_factory=list)

    def add_shape(self, shape: Shape) -> None:
        """Append a shape.

        Raises:
            TypeError: If ``shape`` is not a Shape.
        """
        if not isinstance(shape, Shape):
            raise TypeError(f"Expected a Shape, got {type(shape).__name__}")
        self.shapes.append(shape)

    def add_light(self, light: PointLight) -> None:
        self.point_lights.append(light)

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        """Return the nearest hit over all shapes, or None.

        On equal ``t`` the shape added first wins.
        """
        closest: HitRecord | None = None
        for shape in self.shapes:
            hit = shape.ray_intersection(ray)
            if hit is None:
                continue
            if closest is None or hit.t < closest.t:
                closest = hit
        return closest

    def is_point_visible(self, point: Point, observer_pos: Point) -> bool:
        """Return True if no shape blocks the segment between two points.

        Args:
            point: Point to look at (e.g. a light position).
            observer_pos: Point looking (e.g. a surface hit).
        """
        direction = point - observer_pos
        distance = direction.norm()
        if distance == 0.0:
            return True

        margin = VISIBILITY_EPSILON / distance
        ray = Ray(
            origin=observer_pos,
            direction=direction,
            tmin=margin,
            tmax=1.0 - margin,
        )
        return not any(shape.quick_ray_intersection(ray) for shape in self.shapes)
