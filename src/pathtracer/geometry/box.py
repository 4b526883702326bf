"""Axis-aligned box in object space, intersected with the slab method.

Surface coordinates lay the six faces out as an unfolded cube (a 4x3 cross):

        +z
    -x  -y  +x  +y
        -z

so every face gets its own region of the unit square.
"""

from __future__ import annotations

import math

from src.pathtracer.core.geometry import Normal, Point, Vec2D
from src.pathtracer.core.ray import Ray
from src.pathtracer.core.transform import Transform
from src.pathtracer.geometry.shape import Primitive
from src.pathtracer.materials.material import Material

DEFAULT_MIN_POINT = Point(-1.0, -1.0, -1.0)
DEFAULT_MAX_POINT = Point(1.0, 1.0, 1.0)

# (column, row) of each face in the unfolded cube layout
_FACE_CELLS = {
    (0, False): (0, 1),
    (1, False): (1, 1),
    (0, True): (2, 1),
    (1, True): (3, 1),
    (2, True): (1, 2),
    (2, False): (1, 0),
}


class Box(Primitive):
    """Axis-aligned box between two corner points.

    Attributes:
        min_point: Corner with the smallest coordinates.
        max_point: Corner with the largest coordinates.
    """

    def __init__(
        self,
        min_point: Point = DEFAULT_MIN_POINT,
        max_point: Point = DEFAULT_MAX_POINT,
        transformation: Transform | None = None,
        material: Material | None = None,
    ) -> None:
        """Create a box.

        The corners may be given in any order; they are sorted per axis.

        Raises:
            ValueError: If the box is flat along some axis.
        """
        super().__init__(transformation, material)
        lo = Point(
            min(min_point.x, max_point.x),
            min(min_point.y, max_point.y),
            min(min_point.z, max_point.z),
        )
        hi = Point(
            max(min_point.x, max_point.x),
            max(min_point.y, max_point.y),
            max(min_point.z, max_point.z),
        )
        if lo.x == hi.x or lo.y == hi.y or lo.z == hi.z:
            raise ValueError(f"Box corners {min_point} and {max_point} span no volume")
        self.min_point = lo
        self.max_point = hi

    def _local_roots(self, ray: Ray) -> list[float]:
        origin = (ray.origin.x, ray.origin.y, ray.origin.z)
        direction = (ray.direction.x, ray.direction.y, ray.direction.z)
        lo = (self.min_point.x, self.min_point.y, self.min_point.z)
        hi = (self.max_point.x, self.max_point.y, self.max_point.z)

        t_near, t_far = -math.inf, math.inf
        for axis in range(3):
            if direction[axis] == 0.0:
                # Parallel to this slab: either always inside it or never
                if not lo[axis] <= origin[axis] <= hi[axis]:
                    return []
                continue
            t0 = (lo[axis] - origin[axis]) / direction[axis]
            t1 = (hi[axis] - origin[axis]) / direction[axis]
            if t0 > t1:
                t0, t1 = t1, t0
            t_near = max(t_near, t0)
            t_far = min(t_far, t1)

        if t_near >= t_far:
            return []
        return [t_near, t_far]

    def _nearest_face(self, point: Point) -> tuple[int, bool]:
        coords = (point.x, point.y, point.z)
        lo = (self.min_point.x, self.min_point.y, self.min_point.z)
        hi = (self.max_point.x, self.max_point.y, self.max_point.z)

        best = (0, False)
        best_distance = math.inf
        for axis in range(3):
            for is_max, bound in ((False, lo[axis]), (True, hi[axis])):
                distance = abs(coords[axis] - bound)
                if distance < best_distance:
                    best_distance = distance
                    best = (axis, is_max)
        return best

    def _local_normal(self, point: Point) -> Normal:
        axis, is_max = self._nearest_face(point)
        components = [0.0, 0.0, 0.0]
        components[axis] = 1.0 if is_max else -1.0
        return Normal(*components)

    def _local_uv(self, point: Point) -> Vec2D:
        axis, is_max = self._nearest_face(point)
        size = (
            self.max_point.x - self.min_point.x,
            self.max_point.y - self.min_point.y,
            self.max_point.z - self.min_point.z,
        )
        x = min(max((point.x - self.min_point.x) / size[0], 0.0), 1.0)
        y = min(max((point.y - self.min_point.y) / size[1], 0.0), 1.0)
        z = min(max((point.z - self.min_point.z) / size[2], 0.0), 1.0)

        if axis == 0:
            a, b = (1.0 - y, z) if is_max else (y, z)
        elif axis == 1:
            a, b = (1.0 - x, z) if is_max else (x, z)
        else:
            a, b = (x, y) if is_max else (x, 1.0 - y)

        col, row = _FACE_CELLS[(axis, is_max)]
        return Vec2D((col + a) / 4.0, (row + b) / 3.0)

    def _local_is_inside(self, point: Point) -> bool:
        return (
            self.min_point.x < point.x < self.max_point.x
            and self.min_point.y < point.y < self.max_point.y
            and self.min_point.z < point.z < self.max_point.z
        )
