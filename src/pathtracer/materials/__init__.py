"""Materials module: pigments, BRDFs and materials.

Components:
    pigment: Uniform, checkered and image-mapped albedo
    brdf: Diffuse (Lambertian) and specular (mirror) BRDFs
    material: A BRDF paired with an emission pigment

Each BRDF provides:
    - eval(): Reflected radiance factor for a pair of directions
    - scatter_ray(): Sample one outgoing ray for the path tracer
"""

from .brdf import BRDF, DiffuseBRDF, SpecularBRDF
from .material import Material
from .pigment import CheckeredPigment, ImagePigment, Pigment, UniformPigment

__all__ = [
    # Pigments
    "Pigment",
    "UniformPigment",
    "CheckeredPigment",
    "ImagePigment",
    # BRDFs
    "BRDF",
    "DiffuseBRDF",
    "SpecularBRDF",
    # Material
    "Material",
]
