"""Core rendering module.

Components:
    geometry: Point, Vec, Normal and Vec2D value types
    color: Linear RGB colors
    transform: Affine transformations with cached inverses
    ray: Rays and direction sampling helpers
    pcg: PCG32 random number generator
    hdr_image: HDR pixel buffer with PFM input/output
    integrator: On/off, flat, point-light and path-tracing renderers
    image_tracer: Pixel loop turning camera rays into an image
    config: Render configuration

The renderers and the image tracer depend on the scene and camera packages,
so they are imported from their own modules rather than re-exported here.
"""

from .color import BLACK, WHITE, Color
from .geometry import ORIGIN, VEC_X, VEC_Y, VEC_Z, Normal, Point, Vec, Vec2D, are_close
from .hdr_image import HdrImage, InvalidPfmFileFormat
from .pcg import PCG
from .ray import Ray, reflect, sample_cosine_hemisphere
from .transform import (
    Transform,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    translation,
)

__all__ = [
    "Color",
    "BLACK",
    "WHITE",
    "Point",
    "Vec",
    "Normal",
    "Vec2D",
    "VEC_X",
    "VEC_Y",
    "VEC_Z",
    "ORIGIN",
    "are_close",
    "HdrImage",
    "InvalidPfmFileFormat",
    "PCG",
    "Ray",
    "reflect",
    "sample_cosine_hemisphere",
    "Transform",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
]
