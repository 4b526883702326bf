"""RGB color type used for radiance and pigments.

Colors are unbounded linear RGB triples; tone mapping into the displayable
range happens only when an image is exported.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.pathtracer.core.geometry import EPSILON, are_close


@dataclass(frozen=True)
class Color:
    """A linear RGB color.

    Attributes:
        r: Red component.
        g: Green component.
        b: Blue component.
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: Color) -> Color:
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other: Color | float) -> Color:
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        return Color(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Color:
        return Color(self.r / scalar, self.g / scalar, self.b / scalar)

    def is_close(self, other: Color, epsilon: float = EPSILON) -> bool:
        return (
            are_close(self.r, other.r, epsilon)
            and are_close(self.g, other.g, epsilon)
            and are_close(self.b, other.b, epsilon)
        )

    def luminosity(self) -> float:
        """Return the lightness (max + min) / 2 of the color."""
        return (max(self.r, self.g, self.b) + min(self.r, self.g, self.b)) / 2.0

    def max_component(self) -> float:
        return max(self.r, self.g, self.b)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
