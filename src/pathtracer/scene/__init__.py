"""Scene module for world assembly.

Components:
    world: Shape and light container with closest-hit queries
    demo: Ready-made demo scenes
"""

from .demo import SCENES, DemoScene, create_demo_scene, csg_showcase_shape
from .world import PointLight, World

__all__ = [
    "World",
    "PointLight",
    "DemoScene",
    "SCENES",
    "create_demo_scene",
    "csg_showcase_shape",
]
