"""Unit tests for ImageTracer.

Tests cover:
- Pixel to screen coordinate mapping
- Full image coverage and stratified sampling
- Reproducible seeded rendering, serial and with worker processes
- Argument validation and progress reporting
"""

import logging
import math

import numpy as np
import pytest

from src.pathtracer.core.color import Color
from src.pathtracer.core.integrator import Renderer


class ConstantRenderer(Renderer):
    """Counts its calls and returns a fixed color."""

    def __init__(self, world, color):
        super().__init__(world)
        self.color = color
        self.calls = 0

    def compute_radiance(self, ray):
        self.calls += 1
        return self.color


def make_tracer(width=4, height=2, **kwargs):
    from src.pathtracer.camera.pinhole import PerspectiveCamera
    from src.pathtracer.core.hdr_image import HdrImage
    from src.pathtracer.core.image_tracer import ImageTracer

    image = HdrImage(width, height)
    camera = PerspectiveCamera(aspect_ratio=width / height)
    return ImageTracer(image, camera, **kwargs)


def emitting_sphere_world():
    from src.pathtracer.core.geometry import Vec
    from src.pathtracer.core.transform import scaling, translation
    from src.pathtracer.geometry.plane import Plane
    from src.pathtracer.geometry.sphere import Sphere
    from src.pathtracer.materials.brdf import DiffuseBRDF
    from src.pathtracer.materials.material import Material
    from src.pathtracer.materials.pigment import UniformPigment
    from src.pathtracer.scene.world import World

    world = World()
    world.add_shape(
        Sphere(
            translation(Vec(1.0, 0.0, 0.0)) * scaling(0.5),
            Material(
                brdf=DiffuseBRDF(UniformPigment(Color(0.5, 0.5, 0.5))),
                emitted_radiance=UniformPigment(Color(1.0, 0.8, 0.6)),
            ),
        )
    )
    world.add_shape(
        Plane(
            translation(Vec(0.0, 0.0, -0.5)),
            Material(brdf=DiffuseBRDF(UniformPigment(Color(0.7, 0.7, 0.7)))),
        )
    )
    return world


class TestFireRay:
    """Tests for ImageTracer.fire_ray."""

    def test_pixel_offsets(self):
        """Test the same screen point reached from two pixels."""
        tracer = make_tracer()

        ray1 = tracer.fire_ray(0, 0, u_pixel=2.5, v_pixel=1.5)
        ray2 = tracer.fire_ray(2, 1, u_pixel=0.5, v_pixel=0.5)
        assert ray1.is_close(ray2)

    def test_image_corners(self):
        """Test row 0 is the top of the image and column 0 its left side."""
        from src.pathtracer.core.geometry import Point

        tracer = make_tracer()

        top_left = tracer.fire_ray(0, 0, u_pixel=0.0, v_pixel=0.0)
        assert top_left.at(1.0).is_close(Point(0.0, 2.0, 1.0))

        bottom_right = tracer.fire_ray(3, 1, u_pixel=1.0, v_pixel=1.0)
        assert bottom_right.at(1.0).is_close(Point(0.0, -2.0, -1.0))

    def test_invalid_arguments(self):
        """Test negative sampling and empty images are rejected."""
        from src.pathtracer.camera.orthogonal import OrthogonalCamera
        from src.pathtracer.core.hdr_image import HdrImage
        from src.pathtracer.core.image_tracer import ImageTracer

        with pytest.raises(ValueError):
            make_tracer(samples_per_side=-1)
        with pytest.raises(ValueError):
            ImageTracer(HdrImage(0, 3), OrthogonalCamera())


class TestFireAllRays:
    """Tests for ImageTracer.fire_all_rays."""

    def test_image_coverage(self):
        """Test every pixel receives the renderer color."""
        from src.pathtracer.scene.world import World

        tracer = make_tracer()
        color = Color(1.0, 2.0, 3.0)
        tracer.fire_all_rays(ConstantRenderer(World(), color))

        for row in range(tracer.image.height):
            for col in range(tracer.image.width):
                assert tracer.image.get_pixel(col, row).is_close(color)

    def test_stratified_sampling(self):
        """Test n x n rays per pixel are averaged."""
        from src.pathtracer.scene.world import World

        tracer = make_tracer(width=3, height=2, samples_per_side=3)
        renderer = ConstantRenderer(World(), Color(0.5, 0.25, 1.0))
        tracer.fire_all_rays(renderer)

        assert renderer.calls == 3 * 2 * 9
        np.testing.assert_allclose(tracer.image.pixels[..., 0], 0.5, rtol=1e-6)
        np.testing.assert_allclose(tracer.image.pixels[..., 2], 1.0, rtol=1e-6)

    def test_progress_callback(self):
        """Test the callback runs once per row."""
        from src.pathtracer.scene.world import World

        tracer = make_tracer(width=2, height=3)
        progress = []
        tracer.fire_all_rays(
            ConstantRenderer(World(), Color()),
            callback=lambda done, total: progress.append((done, total)),
        )
        assert progress == [(1, 3), (2, 3), (3, 3)]

    def test_non_finite_color_is_logged(self, caplog):
        """Test NaN radiance produces a warning."""
        from src.pathtracer.scene.world import World

        tracer = make_tracer(width=1, height=1)
        with caplog.at_level(logging.WARNING, logger="src.pathtracer.core.image_tracer"):
            tracer.fire_all_rays(ConstantRenderer(World(), Color(math.nan, 0.0, 0.0)))
        assert "Non-finite radiance" in caplog.text

    def test_seeded_render_is_reproducible(self):
        """Test two seeded renders of a random scene are identical."""
        from src.pathtracer.core.integrator import PathTracer

        images = []
        for _ in range(2):
            tracer = make_tracer(width=4, height=3, samples_per_side=2, seed=7)
            tracer.fire_all_rays(PathTracer(emitting_sphere_world(), num_of_rays=2, max_depth=2))
            images.append(tracer.image.pixels.copy())

        np.testing.assert_array_equal(images[0], images[1])
        assert images[0].any()

    def test_invalid_workers(self):
        """Test worker counts below one, and several workers without a seed."""
        from src.pathtracer.scene.world import World

        renderer = ConstantRenderer(World(), Color())
        with pytest.raises(ValueError):
            make_tracer(seed=1).fire_all_rays(renderer, workers=0)
        with pytest.raises(ValueError):
            make_tracer().fire_all_rays(renderer, workers=2)

    def test_parallel_matches_serial(self):
        """Test worker processes produce exactly the serial image."""
        from src.pathtracer.core.integrator import PathTracer

        serial = make_tracer(width=4, height=3, samples_per_side=2, seed=11)
        serial.fire_all_rays(PathTracer(emitting_sphere_world(), num_of_rays=2, max_depth=2))

        parallel = make_tracer(width=4, height=3, samples_per_side=2, seed=11)
        progress = []
        parallel.fire_all_rays(
            PathTracer(emitting_sphere_world(), num_of_rays=2, max_depth=2),
            callback=lambda done, total: progress.append(done),
            workers=2,
        )

        np.testing.assert_array_equal(serial.image.pixels, parallel.image.pixels)
        assert progress == [1, 2, 3]
