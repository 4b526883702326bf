"""Bidirectional reflectance distribution functions.

Each BRDF can be evaluated for a pair of directions (used by the point-light
renderer) and can sample one outgoing ray (used by the path tracer).

The diffuse BRDF is:
    f_r(wi, wo) = pigment(uv) * reflectance / pi

Scattered directions are drawn with pdf cos(theta) / pi, so the cosine term
of the rendering equation cancels and the path tracer multiplies only by the
pigment color.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from src.pathtracer.core.color import BLACK, WHITE, Color
from src.pathtracer.core.geometry import Normal, Point, Vec, Vec2D
from src.pathtracer.core.pcg import PCG
from src.pathtracer.core.ray import SCATTER_TMIN, Ray, reflect, sample_cosine_hemisphere
from src.pathtracer.materials.pigment import Pigment, UniformPigment

# Default angular tolerance of a mirror: 0.1 degrees
DEFAULT_SPECULAR_THRESHOLD = math.pi / 1800.0


class BRDF(ABC):
    """Base class for BRDFs.

    Attributes:
        pigment: Albedo of the surface.
    """

    def __init__(self, pigment: Pigment | None = None) -> None:
        self.pigment = pigment if pigment is not None else UniformPigment(WHITE)

    @abstractmethod
    def eval(self, normal: Normal, in_dir: Vec, out_dir: Vec, uv: Vec2D) -> Color:
        """Return the reflected radiance factor for the given directions."""

    @abstractmethod
    def scatter_ray(
        self,
        pcg: PCG,
        incoming_dir: Vec,
        interaction_point: Point,
        normal: Normal,
        depth: int,
    ) -> Ray:
        """Sample one outgoing ray leaving ``interaction_point``.

        Args:
            pcg: Random number generator of the calling worker.
            incoming_dir: Direction of the ray that hit the surface.
            interaction_point: World-space hit point.
            normal: Surface normal, oriented against the incoming ray.
            depth: Depth assigned to the new ray.

        Returns:
            The scattered ray.
        """


class DiffuseBRDF(BRDF):
    """Ideal Lambertian reflector."""

    def __init__(self, pigment: Pigment | None = None, reflectance: float = 1.0) -> None:
        super().__init__(pigment)
        self.reflectance = reflectance

    def eval(self, normal: Normal, in_dir: Vec, out_dir: Vec, uv: Vec2D) -> Color:
        return self.pigment.get_color(uv) * (self.reflectance / math.pi)

    def scatter_ray(
        self,
        pcg: PCG,
        incoming_dir: Vec,
        interaction_point: Point,
        normal: Normal,
        depth: int,
    ) -> Ray:
        direction = sample_cosine_hemisphere(pcg, normal.normalize())
        return Ray(
            origin=interaction_point,
            direction=direction,
            tmin=SCATTER_TMIN,
            tmax=math.inf,
            depth=depth,
        )


class SpecularBRDF(BRDF):
    """Perfect mirror.

    ``scatter_ray`` is deterministic and never draws from the generator.
    """

    def __init__(
        self,
        pigment: Pigment | None = None,
        threshold_angle_rad: float = DEFAULT_SPECULAR_THRESHOLD,
    ) -> None:
        super().__init__(pigment)
        self.threshold_angle_rad = threshold_angle_rad

    def eval(self, normal: Normal, in_dir: Vec, out_dir: Vec, uv: Vec2D) -> Color:
        n = normal.normalize()
        # Both directions may point either way, only the angle to the normal line counts
        theta_in = math.acos(min(1.0, abs(n.dot(in_dir.normalize()))))
        theta_out = math.acos(min(1.0, abs(n.dot(out_dir.normalize()))))

        if abs(theta_in - theta_out) < self.threshold_angle_rad:
            return self.pigment.get_color(uv)
        return BLACK

    def scatter_ray(
        self,
        pcg: PCG,
        incoming_dir: Vec,
        interaction_point: Point,
        normal: Normal,
        depth: int,
    ) -> Ray:
        direction = reflect(incoming_dir.normalize(), normal.normalize())
        return Ray(
            origin=interaction_point,
            direction=direction,
            tmin=SCATTER_TMIN,
            tmax=math.inf,
            depth=depth,
        )
