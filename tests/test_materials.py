"""Unit tests for pigments, BRDFs and materials."""

import math

import pytest


class TestPigments:
    """Tests for UniformPigment, CheckeredPigment and ImagePigment."""

    def test_uniform(self):
        """Test a uniform pigment ignores the coordinates."""
        from src.pathtracer.core.color import Color
        from src.pathtracer.core.geometry import Vec2D
        from src.pathtracer.materials.pigment import UniformPigment

        color = Color(1.0, 2.0, 3.0)
        pigment = UniformPigment(color)
        for u, v in [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0), (0.3, 0.7)]:
            assert pigment.get_color(Vec2D(u, v)).is_close(color)
        assert pigment(Vec2D(0.5, 0.5)).is_close(color)

    def test_checkered(self):
        """Test the four cells of a 2x2 checkerboard."""
        from src.pathtracer.core.color import Color
        from src.pathtracer.core.geometry import Vec2D
        from src.pathtracer.materials.pigment import CheckeredPigment

        color1 = Color(1.0, 2.0, 3.0)
        color2 = Color(10.0, 20.0, 30.0)
        pigment = CheckeredPigment(color1, color2, num_of_steps=2)

        assert pigment.get_color(Vec2D(0.25, 0.25)).is_close(color1)
        assert pigment.get_color(Vec2D(0.75, 0.25)).is_close(color2)
        assert pigment.get_color(Vec2D(0.25, 0.75)).is_close(color2)
        assert pigment.get_color(Vec2D(0.75, 0.75)).is_close(color1)

    def test_checkered_rejects_zero_steps(self):
        """Test a checkerboard needs at least one cell."""
        from src.pathtracer.core.color import BLACK, WHITE
        from src.pathtracer.materials.pigment import CheckeredPigment

        with pytest.raises(ValueError):
            CheckeredPigment(WHITE, BLACK, num_of_steps=0)

    def test_image_corners(self):
        """Test the unit square corners map to the image corners."""
        from src.pathtracer.core.color import Color
        from src.pathtracer.core.geometry import Vec2D
        from src.pathtracer.core.hdr_image import HdrImage
        from src.pathtracer.materials.pigment import ImagePigment

        image = HdrImage(2, 2)
        image.set_pixel(0, 0, Color(1.0, 2.0, 3.0))
        image.set_pixel(1, 0, Color(2.0, 3.0, 1.0))
        image.set_pixel(0, 1, Color(2.0, 1.0, 3.0))
        image.set_pixel(1, 1, Color(3.0, 2.0, 1.0))
        pigment = ImagePigment(image)

        assert pigment.get_color(Vec2D(0.0, 0.0)).is_close(Color(1.0, 2.0, 3.0))
        assert pigment.get_color(Vec2D(1.0, 0.0)).is_close(Color(2.0, 3.0, 1.0))
        assert pigment.get_color(Vec2D(0.0, 1.0)).is_close(Color(2.0, 1.0, 3.0))
        assert pigment.get_color(Vec2D(1.0, 1.0)).is_close(Color(3.0, 2.0, 1.0))
        assert pigment.get_color(Vec2D(0.5, 0.5)).is_close(Color(2.0, 2.0, 2.0))

    def test_image_clamps_outside_coordinates(self):
        """Test coordinates outside [0, 1] use the border texels."""
        from src.pathtracer.core.color import Color
        from src.pathtracer.core.geometry import Vec2D
        from src.pathtracer.core.hdr_image import HdrImage
        from src.pathtracer.materials.pigment import ImagePigment

        image = HdrImage(2, 1)
        image.set_pixel(0, 0, Color(1.0, 1.0, 1.0))
        image.set_pixel(1, 0, Color(5.0, 5.0, 5.0))
        pigment = ImagePigment(image)

        assert pigment.get_color(Vec2D(-3.0, 0.5)).is_close(Color(1.0, 1.0, 1.0))
        assert pigment.get_color(Vec2D(7.0, 0.5)).is_close(Color(5.0, 5.0, 5.0))

    def test_image_requires_pixels(self):
        """Test an empty image is rejected."""
        from src.pathtracer.core.hdr_image import HdrImage
        from src.pathtracer.materials.pigment import ImagePigment

        with pytest.raises(ValueError):
            ImagePigment(HdrImage(0, 0))


class TestDiffuseBRDF:
    """Tests for DiffuseBRDF."""

    def test_eval(self):
        """Test the Lambertian value pigment * reflectance / pi."""
        from src.pathtracer.core.color import Color
        from src.pathtracer.core.geometry import Normal, Vec, Vec2D
        from src.pathtracer.materials.brdf import DiffuseBRDF
        from src.pathtracer.materials.pigment import UniformPigment

        brdf = DiffuseBRDF(UniformPigment(Color(0.5, 1.0, 2.0)), reflectance=0.5)
        value = brdf.eval(Normal(0.0, 0.0, 1.0), Vec(1.0, 0.0, 1.0), Vec(0.0, 1.0, 1.0), Vec2D())
        expected = Color(0.25 / math.pi, 0.5 / math.pi, 1.0 / math.pi)
        assert value.is_close(expected)

    def test_scatter_ray(self, pcg):
        """Test scattered rays leave the surface into the normal hemisphere."""
        from src.pathtracer.core.geometry import Normal, Point, Vec
        from src.pathtracer.core.ray import SCATTER_TMIN
        from src.pathtracer.materials.brdf import DiffuseBRDF

        brdf = DiffuseBRDF()
        normal = Normal(0.0, 1.0, 0.0)
        origin = Point(1.0, 2.0, 3.0)
        for _ in range(100):
            ray = brdf.scatter_ray(pcg, Vec(0.0, -1.0, 0.0), origin, normal, depth=3)
            assert ray.origin.is_close(origin)
            assert ray.direction.dot(normal) >= 0.0
            assert ray.direction.is_normalized()
            assert ray.tmin == SCATTER_TMIN
            assert ray.depth == 3


class TestSpecularBRDF:
    """Tests for SpecularBRDF."""

    def test_scatter_ray_mirrors_direction(self, pcg):
        """Test the reflected direction and that no random number is used."""
        from src.pathtracer.core.geometry import Normal, Point, Vec
        from src.pathtracer.materials.brdf import SpecularBRDF

        state_before = pcg.state
        ray = SpecularBRDF().scatter_ray(
            pcg, Vec(1.0, 0.0, -1.0), Point(0.0, 0.0, 0.0), Normal(0.0, 0.0, 1.0), depth=1
        )

        assert ray.direction.is_close(Vec(1.0, 0.0, 1.0).normalize())
        assert ray.depth == 1
        assert pcg.state == state_before

    def test_eval(self):
        """Test only equal angles reflect the pigment."""
        from src.pathtracer.core.color import BLACK, Color
        from src.pathtracer.core.geometry import Normal, Vec, Vec2D
        from src.pathtracer.materials.brdf import SpecularBRDF
        from src.pathtracer.materials.pigment import UniformPigment

        color = Color(0.9, 0.8, 0.7)
        brdf = SpecularBRDF(UniformPigment(color))
        normal = Normal(0.0, 0.0, 1.0)

        assert brdf.eval(normal, Vec(1.0, 0.0, 1.0), Vec(-1.0, 0.0, 1.0), Vec2D()).is_close(color)
        assert brdf.eval(normal, Vec(1.0, 0.0, 1.0), Vec(0.0, 0.0, 1.0), Vec2D()).is_close(BLACK)


class TestMaterial:
    """Tests for Material."""

    def test_defaults(self):
        """Test a default material is white, diffuse and not emitting."""
        from src.pathtracer.core.color import BLACK, WHITE
        from src.pathtracer.core.geometry import Vec2D
        from src.pathtracer.materials.brdf import DiffuseBRDF
        from src.pathtracer.materials.material import Material

        material = Material()
        assert isinstance(material.brdf, DiffuseBRDF)
        assert material.brdf.pigment.get_color(Vec2D()).is_close(WHITE)
        assert material.emitted_radiance.get_color(Vec2D()).is_close(BLACK)

    def test_shapes_share_material(self):
        """Test one material can be attached to several shapes."""
        from src.pathtracer.geometry.plane import Plane
        from src.pathtracer.geometry.sphere import Sphere
        from src.pathtracer.materials.material import Material

        material = Material()
        assert Sphere(material=material).material is Plane(material=material).material
