"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: a generator with
the reference seed, a unit sphere and a couple of small worlds.
"""

import pytest


@pytest.fixture
def pcg():
    """A generator with the default (42, 54) seed."""
    from src.pathtracer.core.pcg import PCG

    return PCG()


@pytest.fixture
def unit_sphere():
    """Unit sphere at the origin with the default material."""
    from src.pathtracer.geometry.sphere import Sphere

    return Sphere()


@pytest.fixture
def two_sphere_world():
    """World with unit spheres centred at x = 2 and x = 8."""
    from src.pathtracer.core.geometry import Vec
    from src.pathtracer.core.transform import translation
    from src.pathtracer.geometry.sphere import Sphere
    from src.pathtracer.scene.world import World

    world = World()
    world.add_shape(Sphere(translation(Vec(2.0, 0.0, 0.0))))
    world.add_shape(Sphere(translation(Vec(8.0, 0.0, 0.0))))
    return world


@pytest.fixture
def centred_sphere_world():
    """World with a small white sphere in front of a canonical camera."""
    from src.pathtracer.core.color import WHITE
    from src.pathtracer.core.transform import scaling
    from src.pathtracer.geometry.sphere import Sphere
    from src.pathtracer.materials.brdf import DiffuseBRDF
    from src.pathtracer.materials.material import Material
    from src.pathtracer.materials.pigment import UniformPigment
    from src.pathtracer.scene.world import World

    world = World()
    world.add_shape(
        Sphere(scaling(0.2), Material(brdf=DiffuseBRDF(UniformPigment(WHITE))))
    )
    return world
