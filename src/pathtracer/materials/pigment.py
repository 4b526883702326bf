"""Pigments: functions from surface (u, v) coordinates to colors.

A pigment supplies the spatially varying albedo of a BRDF or the emitted
radiance of a material. Pigments are pure and stateless, so one instance can
be shared by many materials.

Example:
    >>> checker = CheckeredPigment(WHITE, BLACK, num_of_steps=4)
    >>> checker.get_color(Vec2D(0.1, 0.1))
    Color(r=1.0, g=1.0, b=1.0)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from src.pathtracer.core.color import WHITE, Color
from src.pathtracer.core.geometry import Vec2D
from src.pathtracer.core.hdr_image import HdrImage


class Pigment(ABC):
    """Base class for pigments."""

    @abstractmethod
    def get_color(self, uv: Vec2D) -> Color:
        """Return the color at surface coordinates ``uv``."""

    def __call__(self, uv: Vec2D) -> Color:
        return self.get_color(uv)


class UniformPigment(Pigment):
    """The same color everywhere."""

    def __init__(self, color: Color = WHITE) -> None:
        self.color = color

    def __repr__(self) -> str:
        return f"UniformPigment({self.color!r})"

    def get_color(self, uv: Vec2D) -> Color:
        return self.color


class CheckeredPigment(Pigment):
    """A checkerboard of two colors over the unit square.

    Attributes:
        color1: Color of the cell containing (0, 0).
        color2: The alternate color.
        num_of_steps: Number of cells along each side.
    """

    def __init__(self, color1: Color, color2: Color, num_of_steps: int = 10) -> None:
        """Create a checkerboard pigment.

        Raises:
            ValueError: If ``num_of_steps`` is smaller than 1.
        """
        if num_of_steps < 1:
            raise ValueError(f"num_of_steps must be >= 1, got {num_of_steps}")
        self.color1 = color1
        self.color2 = color2
        self.num_of_steps = num_of_steps

    def get_color(self, uv: Vec2D) -> Color:
        int_u = math.floor(uv.u * self.num_of_steps)
        int_v = math.floor(uv.v * self.num_of_steps)
        return self.color1 if (int_u + int_v) % 2 == 0 else self.color2


class ImagePigment(Pigment):
    """Texture lookup into an HDR image with bilinear filtering.

    ``u`` runs along the columns and ``v`` along the rows, so (0, 0) maps to
    pixel (0, 0) and (1, 1) to the last pixel. Coordinates outside [0, 1]
    are clamped to the border texels.
    """

    def __init__(self, image: HdrImage) -> None:
        if image.width == 0 or image.height == 0:
            raise ValueError("ImagePigment requires a non-empty image")
        self.image = image

    def get_color(self, uv: Vec2D) -> Color:
        width, height = self.image.width, self.image.height
        x = min(max(uv.u, 0.0), 1.0) * (width - 1)
        y = min(max(uv.v, 0.0), 1.0) * (height - 1)

        col0, row0 = int(x), int(y)
        col1, row1 = min(col0 + 1, width - 1), min(row0 + 1, height - 1)
        fx, fy = x - col0, y - row0

        pixels = self.image.pixels
        top = pixels[row0, col0] * (1.0 - fx) + pixels[row0, col1] * fx
        bottom = pixels[row1, col0] * (1.0 - fx) + pixels[row1, col1] * fx
        r, g, b = top * (1.0 - fy) + bottom * fy
        return Color(float(r), float(g), float(b))
