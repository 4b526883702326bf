"""Demo scenes used by the example scripts and the integration tests.

Every factory returns a DemoScene: a populated World plus a default camera
placement. All scenes use +z as the up direction, and the default camera
looks along +x from the negative x side.

Available scenes:
    - spheres: small spheres on the vertices of a cube
    - csg: the classic CSG example (a rounded box minus three cylinders)
    - shapes: cylinder and cone over a checkered ground
    - cornell: Cornell box with an area light, a diffuse and a mirror sphere
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field

from src.pathtracer.camera.base import look_at
from src.pathtracer.core.color import BLACK, WHITE, Color
from src.pathtracer.core.geometry import Point, Vec
from src.pathtracer.core.transform import (
    Transform,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    translation,
)
from src.pathtracer.geometry.box import Box
from src.pathtracer.geometry.csg import CSGUnion
from src.pathtracer.geometry.cylinder import Cone, Cylinder
from src.pathtracer.geometry.plane import Plane
from src.pathtracer.geometry.shape import Shape
from src.pathtracer.geometry.sphere import Sphere
from src.pathtracer.materials.brdf import DiffuseBRDF, SpecularBRDF
from src.pathtracer.materials.material import Material
from src.pathtracer.materials.pigment import CheckeredPigment, UniformPigment
from src.pathtracer.scene.world import PointLight, World

# =============================================================================
# Palette
# =============================================================================

SKY_BLUE = Color(0.53, 0.81, 0.92)
GROUND_LIGHT = Color(0.3, 0.5, 0.1)
GROUND_DARK = Color(0.1, 0.2, 0.5)
CSG_BOX_COLOR = Color(0.8, 0.55, 0.2)
CSG_CYLINDER_COLOR = Color(0.2, 0.45, 0.8)
CHECKER_A = Color(0.1, 0.1, 0.8)
CHECKER_B = Color(0.9, 0.8, 0.1)

# Wall colors (normalized RGB values matching original Cornell box measurements)
RED_WALL_ALBEDO = Color(0.65, 0.05, 0.05)
GREEN_WALL_ALBEDO = Color(0.12, 0.45, 0.15)
WHITE_WALL_ALBEDO = Color(0.73, 0.73, 0.73)
DIFFUSE_SPHERE_ALBEDO = Color(0.73, 0.73, 0.73)
MIRROR_SPHERE_ALBEDO = Color(0.95, 0.93, 0.88)
LIGHT_INTENSITY = 15.0

# Radius of the sky sphere surrounding the outdoor scenes
SKY_RADIUS = 500.0


@dataclass
class DemoScene:
    """A world together with a default camera placement.

    Attributes:
        name: Scene identifier.
        world: Shapes and lights.
        camera_transform: Camera-to-world transformation.
        description: One-line summary.
    """

    name: str
    world: World
    camera_transform: Transform = field(default_factory=Transform)
    description: str = ""


def default_camera_transform(angle_deg: float = 0.0) -> Transform:
    """Camera two units behind the origin, slightly raised and tilted down,
    rotated by ``angle_deg`` around the z axis."""
    return (
        rotation_z(math.radians(angle_deg))
        * translation(Vec(-2.0, 0.0, 0.5))
        * rotation_y(math.radians(15.0))
    )


def _sky() -> Sphere:
    material = Material(
        brdf=DiffuseBRDF(UniformPigment(BLACK)),
        emitted_radiance=UniformPigment(SKY_BLUE),
    )
    return Sphere(scaling(SKY_RADIUS), material)


def _ground(z: float = -1.0) -> Plane:
    material = Material(brdf=DiffuseBRDF(CheckeredPigment(GROUND_LIGHT, GROUND_DARK, 4)))
    return Plane(translation(Vec(0.0, 0.0, z)), material)


def create_spheres_scene() -> DemoScene:
    """Ten small white spheres: one on each vertex of a cube plus two more
    that break the symmetry."""
    world = World()
    for x in (-0.5, 0.5):
        for y in (-0.5, 0.5):
            for z in (-0.5, 0.5):
                world.add_shape(Sphere(translation(Vec(x, y, z)) * scaling(0.1)))

    world.add_shape(Sphere(translation(Vec(0.0, 0.0, -0.5)) * scaling(0.1)))
    world.add_shape(Sphere(translation(Vec(0.0, 0.5, 0.0)) * scaling(0.1)))
    world.add_light(PointLight(Point(-30.0, 30.0, 30.0), WHITE))

    return DemoScene(
        name="spheres",
        world=world,
        camera_transform=default_camera_transform(),
        description="Spheres on the vertices of a cube",
    )


def csg_showcase_shape(transformation: Transform | None = None) -> Shape:
    """The rounded box minus three orthogonal cylinders.

    (sphere of radius 1.35 ∩ cube of side 2) − (x-cylinder ∪ y-cylinder ∪
    z-cylinder), each cylinder of radius 0.7 and length 2.5.

    Args:
        transformation: Extra transformation applied to every part.
    """
    outer = transformation if transformation is not None else Transform()

    box_material = Material(brdf=DiffuseBRDF(UniformPigment(CSG_BOX_COLOR)))
    cylinder_material = Material(brdf=DiffuseBRDF(UniformPigment(CSG_CYLINDER_COLOR)))

    rounded_box = Sphere(outer * scaling(1.35), box_material) * Box(
        transformation=outer, material=box_material
    )

    cylinder_z = translation(Vec(0.0, 0.0, -1.25)) * scaling(Vec(0.7, 0.7, 2.5))
    cylinders = CSGUnion(
        Cylinder(outer * rotation_y(math.pi / 2) * cylinder_z, cylinder_material)
        + Cylinder(outer * rotation_x(-math.pi / 2) * cylinder_z, cylinder_material),
        Cylinder(outer * cylinder_z, cylinder_material),
    )
    return rounded_box - cylinders


def create_csg_scene() -> DemoScene:
    """The CSG showcase shape under a sky, above a checkered ground."""
    world = World()
    world.add_shape(_sky())
    world.add_shape(_ground(-1.0))
    world.add_shape(
        csg_showcase_shape(rotation_z(math.radians(30.0)) * scaling(0.5))
    )
    world.add_light(PointLight(Point(-5.0, 5.0, 10.0), WHITE))

    return DemoScene(
        name="csg",
        world=world,
        camera_transform=default_camera_transform(),
        description="Rounded box minus three cylinders",
    )


def create_shapes_scene() -> DemoScene:
    """A checkered cylinder and cone over a checkered ground."""
    checkered = Material(brdf=DiffuseBRDF(CheckeredPigment(CHECKER_A, CHECKER_B, 8)))

    world = World()
    world.add_shape(_sky())
    world.add_shape(_ground(-1.0))
    world.add_shape(
        Cylinder(translation(Vec(0.5, 1.0, -1.0)) * scaling(Vec(0.4, 0.4, 1.0)), checkered)
    )
    world.add_shape(
        Cone(translation(Vec(0.5, -0.8, -1.0)) * scaling(Vec(0.5, 0.5, 1.2)), checkered)
    )
    world.add_light(PointLight(Point(-5.0, 5.0, 10.0), WHITE))

    return DemoScene(
        name="shapes",
        world=world,
        camera_transform=default_camera_transform(),
        description="Cylinder and cone over a checkered plane",
    )


def create_cornell_box_scene(light_intensity: float = LIGHT_INTENSITY) -> DemoScene:
    """Cornell box spanning x, y in [-1, 1] and z in [0, 2].

    The walls are infinite planes, so the box is open towards the camera:
    red wall on the left (+y), green wall on the right (-y), white floor,
    ceiling and back wall, a flat emitting box under the ceiling and two
    spheres on the floor, one diffuse and one mirror.

    Args:
        light_intensity: Emitted radiance of the ceiling light.
    """
    red = Material(brdf=DiffuseBRDF(UniformPigment(RED_WALL_ALBEDO)))
    green = Material(brdf=DiffuseBRDF(UniformPigment(GREEN_WALL_ALBEDO)))
    white = Material(brdf=DiffuseBRDF(UniformPigment(WHITE_WALL_ALBEDO)))
    light = Material(
        brdf=DiffuseBRDF(UniformPigment(WHITE)),
        emitted_radiance=UniformPigment(WHITE * light_intensity),
    )

    world = World()
    world.add_shape(Plane(Transform(), white))
    world.add_shape(Plane(translation(Vec(0.0, 0.0, 2.0)), white))
    world.add_shape(Plane(translation(Vec(1.0, 0.0, 0.0)) * rotation_y(math.pi / 2), white))
    world.add_shape(Plane(translation(Vec(0.0, 1.0, 0.0)) * rotation_x(math.pi / 2), red))
    world.add_shape(Plane(translation(Vec(0.0, -1.0, 0.0)) * rotation_x(math.pi / 2), green))
    world.add_shape(
        Box(Point(-0.25, -0.25, 1.96), Point(0.25, 0.25, 1.99), material=light)
    )

    world.add_shape(
        Sphere(
            translation(Vec(0.3, 0.45, 0.4)) * scaling(0.4),
            Material(brdf=DiffuseBRDF(UniformPigment(DIFFUSE_SPHERE_ALBEDO))),
        )
    )
    world.add_shape(
        Sphere(
            translation(Vec(0.1, -0.5, 0.4)) * scaling(0.4),
            Material(brdf=SpecularBRDF(UniformPigment(MIRROR_SPHERE_ALBEDO))),
        )
    )
    world.add_light(PointLight(Point(0.0, 0.0, 1.9), WHITE))

    return DemoScene(
        name="cornell",
        world=world,
        camera_transform=look_at((-3.5, 0.0, 1.0), (0.0, 0.0, 1.0)),
        description="Cornell box with a diffuse and a mirror sphere",
    )


SCENES: dict[str, Callable[[], DemoScene]] = {
    "spheres": create_spheres_scene,
    "csg": create_csg_scene,
    "shapes": create_shapes_scene,
    "cornell": create_cornell_box_scene,
}


def create_demo_scene(name: str) -> DemoScene:
    """Build a demo scene by name.

    Raises:
        ValueError: If the name is unknown.
    """
    try:
        factory = SCENES[name]
    except KeyError:
        raise ValueError(
            f"Unknown scene {name!r}, expected one of {sorted(SCENES)}"
        ) from None
    return factory()
