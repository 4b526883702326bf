"""Geometry module for shape primitives and CSG.

Components:
    shape: Shape interface, Primitive base class and HitRecord
    sphere: Unit sphere
    plane: Infinite plane z = 0
    box: Axis-aligned box
    cylinder: Closed cylinder and cone
    csg: Union, difference and intersection of two shapes
"""

from .box import Box
from .csg import CSGDifference, CSGIntersection, CSGShape, CSGUnion
from .cylinder import Cone, Cylinder
from .plane import Plane
from .shape import HitRecord, Primitive, Shape
from .sphere import Sphere

__all__ = [
    "Shape",
    "Primitive",
    "HitRecord",
    "Sphere",
    "Plane",
    "Box",
    "Cylinder",
    "Cone",
    "CSGShape",
    "CSGUnion",
    "CSGDifference",
    "CSGIntersection",
]
