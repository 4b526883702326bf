"""Render configuration shared by the example scripts.

RenderConfig gathers every tunable of a render (image size, sampling,
renderer parameters, tone mapping and output paths) so that a render can be
described by a plain dictionary, e.g. one loaded from JSON.

Example:
    >>> config = RenderConfig.from_dict({"width": 320, "height": 240, "renderer": "flat"})
    >>> config.validate()
    >>> renderer = config.create_renderer(world)
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any

from src.pathtracer.core.color import Color
from src.pathtracer.core.integrator import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_NUM_OF_RAYS,
    DEFAULT_RUSSIAN_ROULETTE_LIMIT,
    MAX_SURVIVAL_PROBABILITY,
    FlatRenderer,
    OnOffRenderer,
    PathTracer,
    PointLightRenderer,
    Renderer,
)
from src.pathtracer.core.pcg import PCG
from src.pathtracer.scene.world import World


class RendererKind(str, Enum):
    """Renderers selectable from a configuration."""

    ONOFF = "onoff"
    FLAT = "flat"
    POINTLIGHT = "pointlight"
    PATHTRACER = "pathtracer"


@dataclass
class RenderConfig:
    """Configuration for a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Rays per pixel; rounded down to a perfect square
            for stratified sampling (0 or 1 means one ray per pixel).
        renderer: Which renderer to use.
        num_of_rays: Path tracer rays per hit.
        max_depth: Path tracer maximum depth.
        russian_roulette_limit: Depth at which Russian roulette starts.
        max_survival_probability: Russian roulette survival cap.
        background: Background color as an (r, g, b) triple.
        seed: Master seed for the per-row generators (None for one shared
            generator).
        init_seq: Sequence id of the shared generator when no seed is given.
        workers: Number of worker processes.
        luminosity: Average luminosity used for tone mapping (None to
            compute it from the image).
        factor: Tone mapping normalization factor.
        gamma: Display gamma of the LDR output.
        pfm_output: Path of the HDR output.
        png_output: Path of the LDR output.
    """

    width: int = 640
    height: int = 480
    samples_per_pixel: int = 0
    renderer: RendererKind = RendererKind.PATHTRACER
    num_of_rays: int = DEFAULT_NUM_OF_RAYS
    max_depth: int = DEFAULT_MAX_DEPTH
    russian_roulette_limit: int = DEFAULT_RUSSIAN_ROULETTE_LIMIT
    max_survival_probability: float = MAX_SURVIVAL_PROBABILITY
    background: tuple[float, float, float] = (0.0, 0.0, 0.0)
    seed: int | None = 42
    init_seq: int = 54
    workers: int = 1
    luminosity: float | None = None
    factor: float = 0.2
    gamma: float = 1.0
    pfm_output: str = "output.pfm"
    png_output: str = "output.png"

    def __post_init__(self) -> None:
        self.renderer = RendererKind(self.renderer)
        self.background = tuple(self.background)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def samples_per_side(self) -> int:
        """Side of the stratification grid (0 for a single centred ray)."""
        if self.samples_per_pixel <= 1:
            return 0
        return math.isqrt(self.samples_per_pixel)

    def validate(self) -> None:
        """Check every value.

        Raises:
            ValueError: If a value is out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel < 0:
            raise ValueError(
                f"samples_per_pixel must be >= 0, got {self.samples_per_pixel}"
            )
        if self.num_of_rays < 1:
            raise ValueError(f"num_of_rays must be >= 1, got {self.num_of_rays}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.russian_roulette_limit < 0:
            raise ValueError(
                f"russian_roulette_limit must be >= 0, got {self.russian_roulette_limit}"
            )
        if not 0.0 < self.max_survival_probability <= 1.0:
            raise ValueError(
                "max_survival_probability must be in (0, 1], "
                f"got {self.max_survival_probability}"
            )
        if len(self.background) != 3:
            raise ValueError(f"background must have 3 components, got {self.background}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.workers > 1 and self.seed is None:
            raise ValueError("A seed is required when rendering with several workers")
        if self.luminosity is not None and self.luminosity <= 0.0:
            raise ValueError(f"luminosity must be positive, got {self.luminosity}")
        if self.factor <= 0.0:
            raise ValueError(f"factor must be positive, got {self.factor}")
        if self.gamma <= 0.0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")

    def create_renderer(self, world: World) -> Renderer:
        """Instantiate the configured renderer for ``world``."""
        background = Color(*self.background)

        if self.renderer is RendererKind.ONOFF:
            return OnOffRenderer(world, background)
        if self.renderer is RendererKind.FLAT:
            return FlatRenderer(world, background)
        if self.renderer is RendererKind.POINTLIGHT:
            return PointLightRenderer(world, background)
        return PathTracer(
            world,
            background,
            pcg=PCG(self.seed if self.seed is not None else 42, self.init_seq),
            num_of_rays=self.num_of_rays,
            max_depth=self.max_depth,
            russian_roulette_limit=self.russian_roulette_limit,
            max_survival_probability=self.max_survival_probability,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration to a dictionary (for JSON serialization)."""
        data = asdict(self)
        data["renderer"] = self.renderer.value
        data["background"] = list(self.background)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Build a configuration from a dictionary.

        Raises:
            ValueError: If the dictionary holds unknown keys or an unknown
                renderer name.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)
