"""Material: a BRDF plus an emission pigment."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.pathtracer.core.color import BLACK
from src.pathtracer.materials.brdf import BRDF, DiffuseBRDF
from src.pathtracer.materials.pigment import Pigment, UniformPigment


@dataclass
class Material:
    """Surface appearance shared by any number of shapes.

    Attributes:
        brdf: How the surface reflects light (default diffuse white).
        emitted_radiance: Light emitted by the surface (default black).
    """

    brdf: BRDF = field(default_factory=DiffuseBRDF)
    emitted_radiance: Pigment = field(default_factory=lambda: UniformPigment(BLACK))
