"""Renderers: functions from a ray to the radiance it carries.

Every renderer is a callable ``renderer(ray) -> Color`` bound to a World.
The ImageTracer calls it once per camera sample.

Available renderers:
    - OnOffRenderer: a fixed color where any shape is hit (debugging)
    - FlatRenderer: pigment plus emission at the nearest hit (debugging)
    - PointLightRenderer: direct lighting from point lights with shadows
    - PathTracer: Monte Carlo solution of the rendering equation

The path tracer recurses over scattered rays. At each hit it adds the
emitted radiance and, for every scattered ray, the incoming radiance
weighted by the pigment color. Because the BRDFs importance-sample the
cosine term, no explicit cos(theta) / pdf factor appears. After
``russian_roulette_limit`` bounces (never reached with the default depth) a
path survives with probability
``p = min(max(r, g, b), max_survival_probability)`` and its contribution is
divided by ``p``, which keeps the estimator unbiased.

Example:
    >>> tracer = PathTracer(world, pcg=PCG(), num_of_rays=4, max_depth=4)
    >>> color = tracer(Ray(Point(-1.0, 0.0, 0.0), Vec(1.0, 0.0, 0.0)))
"""

from __future__ import annotations

import copy
import math
from abc import ABC, abstractmethod

from src.pathtracer.core.color import BLACK, WHITE, Color
from src.pathtracer.core.pcg import PCG
from src.pathtracer.core.ray import Ray
from src.pathtracer.scene.world import World

# =============================================================================
# Rendering Constants
# =============================================================================

# Default number of scattered rays per hit
DEFAULT_NUM_OF_RAYS = 10

# Default maximum ray depth; deeper rays carry no radiance
DEFAULT_MAX_DEPTH = 2

# Default depth from which Russian roulette may terminate paths. It lies above
# DEFAULT_MAX_DEPTH, so the default path tracer never plays roulette; raise
# max_depth above this limit to enable it.
DEFAULT_RUSSIAN_ROULETTE_LIMIT = 3

# Russian roulette survival probability cap
MAX_SURVIVAL_PROBABILITY = 0.99


class Renderer(ABC):
    """Base class for renderers.

    Attributes:
        world: Scene to render.
        background_color: Radiance of rays that hit nothing.
    """

    def __init__(self, world: World, background_color: Color = BLACK) -> None:
        self.world = world
        self.background_color = background_color

    def __call__(self, ray: Ray) -> Color:
        return self.compute_radiance(ray)

    @abstractmethod
    def compute_radiance(self, ray: Ray) -> Color:
        """Return the radiance travelling back along ``ray``."""

    def with_pcg(self, pcg: PCG) -> Renderer:
        """Return a renderer that draws random numbers from ``pcg``.

        Deterministic renderers return themselves.
        """
        return self


class OnOffRenderer(Renderer):
    """Paint ``color`` where a ray hits anything, background elsewhere."""

    def __init__(
        self, world: World, background_color: Color = BLACK, color: Color = WHITE
    ) -> None:
        super().__init__(world, background_color)
        self.color = color

    def compute_radiance(self, ray: Ray) -> Color:
        return self.color if self.world.ray_intersection(ray) else self.background_color


class FlatRenderer(Renderer):
    """Pigment plus emission of the nearest hit, with no lighting."""

    def compute_radiance(self, ray: Ray) -> Color:
        hit = self.world.ray_intersection(ray)
        if hit is None:
            return self.background_color

        material = hit.shape.material
        return material.brdf.pigment.get_color(
            hit.surface_point
        ) + material.emitted_radiance.get_color(hit.surface_point)


class PointLightRenderer(Renderer):
    """Direct illumination from the world's point lights.

    Attributes:
        ambient_color: Radiance added to every hit regardless of lights.
    """

    def __init__(
        self,
        world: World,
        background_color: Color = BLACK,
        ambient_color: Color = Color(0.1, 0.1, 0.1),
    ) -> None:
        super().__init__(world, background_color)
        self.ambient_color = ambient_color

    def compute_radiance(self, ray: Ray) -> Color:
        hit = self.world.ray_intersection(ray)
        if hit is None:
            return self.background_color

        material = hit.shape.material
        uv = hit.surface_point
        result = self.ambient_color

        for light in self.world.point_lights:
            if not self.world.is_point_visible(light.position, hit.world_point):
                continue

            to_light = light.position - hit.world_point
            distance = to_light.norm()
            in_dir = to_light / distance
            cos_theta = max(0.0, hit.normal.dot(in_dir))

            if light.linear_radius > 0.0:
                distance_factor = (light.linear_radius / distance) ** 2
            else:
                distance_factor = 1.0

            emitted = material.emitted_radiance.get_color(uv)
            brdf_color = material.brdf.eval(hit.normal, in_dir, -ray.direction, uv)
            result = result + (emitted + brdf_color) * light.color * (
                cos_theta * distance_factor
            )

        return result


class PathTracer(Renderer):
    """Monte Carlo path tracer with optional Russian roulette.

    Roulette only runs for rays with ``depth >= russian_roulette_limit`` that
    are still within ``max_depth``. With the default values (depth 2, limit 3)
    it is off and paths are cut only by ``max_depth``.

    Attributes:
        pcg: Random number generator owned by this renderer.
        num_of_rays: Scattered rays sampled at each hit.
        max_depth: Rays deeper than this return black.
        russian_roulette_limit: Depth from which paths may be terminated.
        max_survival_probability: Upper bound of the survival probability.
    """

    def __init__(
        self,
        world: World,
        background_color: Color = BLACK,
        pcg: PCG | None = None,
        num_of_rays: int = DEFAULT_NUM_OF_RAYS,
        max_depth: int = DEFAULT_MAX_DEPTH,
        russian_roulette_limit: int = DEFAULT_RUSSIAN_ROULETTE_LIMIT,
        max_survival_probability: float = MAX_SURVIVAL_PROBABILITY,
    ) -> None:
        """Create a path tracer.

        Raises:
            ValueError: If a parameter is out of range.
        """
        super().__init__(world, background_color)
        if num_of_rays < 1:
            raise ValueError(f"num_of_rays must be >= 1, got {num_of_rays}")
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        if russian_roulette_limit < 0:
            raise ValueError(
                f"russian_roulette_limit must be >= 0, got {russian_roulette_limit}"
            )
        if not 0.0 < max_survival_probability <= 1.0:
            raise ValueError(
                "max_survival_probability must be in (0, 1], "
                f"got {max_survival_probability}"
            )
        self.pcg = pcg if pcg is not None else PCG()
        self.num_of_rays = num_of_rays
        self.max_depth = max_depth
        self.russian_roulette_limit = russian_roulette_limit
        self.max_survival_probability = max_survival_probability

    def with_pcg(self, pcg: PCG) -> PathTracer:
        clone = copy.copy(self)
        clone.pcg = pcg
        return clone

    def compute_radiance(self, ray: Ray) -> Color:
        if ray.depth > self.max_depth:
            return BLACK

        hit = self.world.ray_intersection(ray)
        if hit is None:
            return self.background_color

        material = hit.shape.material
        hit_color = material.brdf.pigment.get_color(hit.surface_point)
        emitted = material.emitted_radiance.get_color(hit.surface_point)
        hit_color_lum = hit_color.max_component()

        if ray.depth >= self.russian_roulette_limit:
            survival = min(max(hit_color_lum, 0.0), self.max_survival_probability)
            if self.pcg.random_float() >= survival:
                return emitted
            hit_color = hit_color / survival

        if hit_color_lum <= 0.0:
            return emitted

        cum_radiance = BLACK
        for _ in range(self.num_of_rays):
            new_ray = material.brdf.scatter_ray(
                pcg=self.pcg,
                incoming_dir=ray.direction,
                interaction_point=hit.world_point,
                normal=hit.normal,
                depth=ray.depth + 1,
            )
            cum_radiance = cum_radiance + hit_color * self.compute_radiance(new_ray)

        return emitted + cum_radiance * (1.0 / self.num_of_rays)


def is_finite_color(color: Color) -> bool:
    """Return True if no component is NaN or infinite."""
    return all(math.isfinite(c) for c in (color.r, color.g, color.b))
