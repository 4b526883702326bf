"""Ray data structure and direction helpers used by shapes and BRDFs.

Example:
    >>> ray = Ray(origin=Point(0.0, 0.0, 0.0), direction=Vec(0.0, 0.0, -1.0))
    >>> ray.at(5.0)
    Point(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.pathtracer.core.geometry import EPSILON, Normal, Point, Vec

if TYPE_CHECKING:
    from src.pathtracer.core.pcg import PCG
    from src.pathtracer.core.transform import Transform

# Minimum ray parameter for primary rays, avoids self-intersection
DEFAULT_TMIN = 1e-5
# Scattered rays start further from the surface to hide float error
SCATTER_TMIN = 1e-3


@dataclass(frozen=True)
class Ray:
    """A half-line with an admissible parameter interval.

    Attributes:
        origin: Starting point of the ray.
        direction: Direction vector. Not required to be normalized.
        tmin: Smallest admissible parameter (exclusive).
        tmax: Largest admissible parameter (exclusive).
        depth: Number of bounces that produced this ray.
    """

    origin: Point = Point()
    direction: Vec = Vec(1.0, 0.0, 0.0)
    tmin: float = DEFAULT_TMIN
    tmax: float = math.inf
    depth: int = 0

    def at(self, t: float) -> Point:
        """Return the point ``origin + t * direction``."""
        return self.origin + self.direction * t

    def transform(self, transformation: Transform) -> Ray:
        """Return this ray mapped through ``transformation``."""
        return transformation.apply_to_ray(self)

    def is_close(self, other: Ray, epsilon: float = EPSILON) -> bool:
        return self.origin.is_close(other.origin, epsilon) and self.direction.is_close(
            other.direction, epsilon
        )


def reflect(direction: Vec, normal: Normal) -> Vec:
    """Mirror ``direction`` about ``normal``.

    Args:
        direction: Incoming direction (pointing towards the surface).
        normal: Unit surface normal.

    Returns:
        The reflected direction, ``d - 2 (d·n) n``.
    """
    n = normal.to_vec()
    return direction - n * (2.0 * direction.dot(n))


def sample_cosine_hemisphere(pcg: PCG, normal: Normal) -> Vec:
    """Sample a direction with cosine-weighted density around ``normal``.

    Uses ``cos θ = sqrt(ξ1)`` and ``φ = 2π ξ2`` in the orthonormal basis built
    from the normal, so the pdf is ``cos θ / π``.

    Args:
        pcg: Random number generator; two floats are consumed.
        normal: Unit normal defining the hemisphere.

    Returns:
        A unit direction in the hemisphere of ``normal``.
    """
    e1, e2, e3 = normal.create_onb_from_z()
    cos_theta_sq = pcg.random_float()
    cos_theta = math.sqrt(cos_theta_sq)
    sin_theta = math.sqrt(1.0 - cos_theta_sq)
    phi = 2.0 * math.pi * pcg.random_float()

    return (
        e1 * (math.cos(phi) * sin_theta)
        + e2 * (math.sin(phi) * sin_theta)
        + e3 * cos_theta
    )
