"""Unit tests for cameras and camera placement.

Tests cover:
- Orthogonal and perspective ray generation at the screen corners
- Camera transformations
- Field of view helpers
- look_at placement
"""

import math

import pytest


class TestOrthogonalCamera:
    """Tests for OrthogonalCamera."""

    def test_corner_rays(self):
        """Test rays through the four screen corners."""
        from src.pathtracer.camera.orthogonal import OrthogonalCamera
        from src.pathtracer.core.geometry import Point

        camera = OrthogonalCamera(aspect_ratio=2.0)

        ray1 = camera.fire_ray(0.0, 0.0)
        ray2 = camera.fire_ray(1.0, 0.0)
        ray3 = camera.fire_ray(0.0, 1.0)
        ray4 = camera.fire_ray(1.0, 1.0)

        # All rays are parallel
        assert ray1.direction.cross(ray2.direction).squared_norm() == pytest.approx(0.0)
        assert ray1.direction.cross(ray3.direction).squared_norm() == pytest.approx(0.0)
        assert ray1.direction.cross(ray4.direction).squared_norm() == pytest.approx(0.0)

        assert ray1.at(1.0).is_close(Point(0.0, 2.0, -1.0))
        assert ray2.at(1.0).is_close(Point(0.0, -2.0, -1.0))
        assert ray3.at(1.0).is_close(Point(0.0, 2.0, 1.0))
        assert ray4.at(1.0).is_close(Point(0.0, -2.0, 1.0))

    def test_transformation(self):
        """Test the camera transformation moves every ray."""
        from src.pathtracer.camera.orthogonal import OrthogonalCamera
        from src.pathtracer.core.geometry import Point, Vec
        from src.pathtracer.core.transform import rotation_z, translation

        transformation = translation(Vec(0.0, -2.0, 0.0)) * rotation_z(math.pi / 2)
        camera = OrthogonalCamera(transformation=transformation)

        ray = camera.fire_ray(0.5, 0.5)
        assert ray.at(1.0).is_close(Point(0.0, -2.0, 0.0))

    def test_invalid_aspect_ratio(self):
        """Test a non-positive aspect ratio is rejected."""
        from src.pathtracer.camera.orthogonal import OrthogonalCamera

        with pytest.raises(ValueError):
            OrthogonalCamera(aspect_ratio=0.0)


class TestPerspectiveCamera:
    """Tests for PerspectiveCamera."""

    def test_corner_rays(self):
        """Test every ray starts at the eye and crosses the screen corners."""
        from src.pathtracer.camera.pinhole import PerspectiveCamera
        from src.pathtracer.core.geometry import Point

        camera = PerspectiveCamera(screen_distance=1.0, aspect_ratio=2.0)

        ray1 = camera.fire_ray(0.0, 0.0)
        ray2 = camera.fire_ray(1.0, 0.0)
        ray3 = camera.fire_ray(0.0, 1.0)
        ray4 = camera.fire_ray(1.0, 1.0)

        eye = Point(-1.0, 0.0, 0.0)
        for ray in (ray1, ray2, ray3, ray4):
            assert ray.origin.is_close(eye)

        assert ray1.at(1.0).is_close(Point(0.0, 2.0, -1.0))
        assert ray2.at(1.0).is_close(Point(0.0, -2.0, -1.0))
        assert ray3.at(1.0).is_close(Point(0.0, 2.0, 1.0))
        assert ray4.at(1.0).is_close(Point(0.0, -2.0, 1.0))

    def test_transformation(self):
        """Test the camera transformation moves every ray."""
        from src.pathtracer.camera.pinhole import PerspectiveCamera
        from src.pathtracer.core.geometry import Point, Vec
        from src.pathtracer.core.transform import rotation_z, translation

        transformation = translation(Vec(0.0, -2.0, 0.0)) * rotation_z(math.pi / 2)
        camera = PerspectiveCamera(transformation=transformation)

        ray = camera.fire_ray(0.5, 0.5)
        assert ray.at(1.0).is_close(Point(0.0, -2.0, 0.0))

    def test_field_of_view(self):
        """Test the conversion between screen distance and aperture."""
        from src.pathtracer.camera.pinhole import PerspectiveCamera

        assert PerspectiveCamera(screen_distance=1.0).aperture_deg() == pytest.approx(90.0)

        camera = PerspectiveCamera.from_fov(90.0, aspect_ratio=1.5)
        assert camera.screen_distance == pytest.approx(1.0)
        assert camera.aspect_ratio == 1.5

        narrow = PerspectiveCamera.from_fov(30.0)
        assert narrow.aperture_deg() == pytest.approx(30.0)

    @pytest.mark.parametrize("vfov", [0.0, 180.0, -10.0])
    def test_invalid_field_of_view(self, vfov):
        """Test apertures outside (0, 180) are rejected."""
        from src.pathtracer.camera.pinhole import PerspectiveCamera

        with pytest.raises(ValueError):
            PerspectiveCamera.from_fov(vfov)

    def test_invalid_screen_distance(self):
        """Test a non-positive screen distance is rejected."""
        from src.pathtracer.camera.pinhole import PerspectiveCamera

        with pytest.raises(ValueError):
            PerspectiveCamera(screen_distance=0.0)


class TestLookAt:
    """Tests for look_at."""

    def test_along_x_is_a_translation(self):
        """Test a camera looking along +x is only moved."""
        from src.pathtracer.camera.base import look_at
        from src.pathtracer.core.geometry import Vec
        from src.pathtracer.core.transform import translation

        transformation = look_at((-3.5, 0.0, 1.0), (0.0, 0.0, 1.0))
        assert transformation.is_close(translation(Vec(-3.5, 0.0, 1.0)))
        assert transformation.is_consistent()

    def test_central_ray_reaches_target(self):
        """Test the ray through the screen centre passes through the target."""
        from src.pathtracer.camera.base import look_at
        from src.pathtracer.camera.pinhole import PerspectiveCamera
        from src.pathtracer.core.geometry import Point, Vec

        camera = PerspectiveCamera(transformation=look_at((0.0, -5.0, 0.0), (0.0, 0.0, 0.0)))
        ray = camera.fire_ray(0.5, 0.5)

        assert ray.direction.normalize().is_close(Vec(0.0, 1.0, 0.0))
        assert ray.at(6.0).is_close(Point(0.0, 0.0, 0.0))

    def test_up_stays_up(self):
        """Test the top of the screen points towards +z."""
        from src.pathtracer.camera.base import look_at
        from src.pathtracer.camera.orthogonal import OrthogonalCamera

        camera = OrthogonalCamera(transformation=look_at((0.0, -5.0, 0.0), (0.0, 0.0, 0.0)))
        top = camera.fire_ray(0.5, 1.0).origin
        bottom = camera.fire_ray(0.5, 0.0).origin
        assert top.z > bottom.z

    def test_degenerate_inputs(self):
        """Test coincident points and a vertical view with a vertical up."""
        from src.pathtracer.camera.base import look_at

        with pytest.raises(ValueError):
            look_at((1.0, 1.0, 1.0), (1.0, 1.0, 1.0))
        with pytest.raises(ValueError):
            look_at((0.0, 0.0, 5.0), (0.0, 0.0, 0.0))
