"""Unit tests for the geometric value types.

Tests cover:
- Vector and point arithmetic
- Dot and cross products, norms and normalization
- Orthonormal bases built from a normal
- Color arithmetic and luminosity
"""

import math

import pytest


class TestVec:
    """Tests for Vec arithmetic."""

    def test_addition_and_subtraction(self):
        """Test component-wise addition and subtraction."""
        from src.pathtracer.core.geometry import Vec

        a = Vec(1.0, 2.0, 3.0)
        b = Vec(4.0, 6.0, 8.0)
        assert (a + b).is_close(Vec(5.0, 8.0, 11.0))
        assert (b - a).is_close(Vec(3.0, 4.0, 5.0))

    def test_scalar_product(self):
        """Test multiplication by a scalar on both sides and negation."""
        from src.pathtracer.core.geometry import Vec

        a = Vec(1.0, 2.0, 3.0)
        assert (a * 2.0).is_close(Vec(2.0, 4.0, 6.0))
        assert (2.0 * a).is_close(Vec(2.0, 4.0, 6.0))
        assert (-a).is_close(Vec(-1.0, -2.0, -3.0))

    def test_dot_and_cross(self):
        """Test dot and cross products."""
        from src.pathtracer.core.geometry import Vec

        a = Vec(1.0, 2.0, 3.0)
        b = Vec(4.0, 6.0, 8.0)
        assert abs(a.dot(b) - 40.0) < 1e-5
        assert a.cross(b).is_close(Vec(-2.0, 4.0, -2.0))
        assert b.cross(a).is_close(Vec(2.0, -4.0, 2.0))

    def test_norm(self):
        """Test squared norm, norm and normalization."""
        from src.pathtracer.core.geometry import Vec

        a = Vec(1.0, 2.0, 3.0)
        assert abs(a.squared_norm() - 14.0) < 1e-5
        assert abs(a.norm() - math.sqrt(14.0)) < 1e-5
        assert a.normalize().is_normalized()
        assert not a.is_normalized()

    def test_normalize_zero_vector_raises(self):
        """Test that a zero vector cannot be normalized."""
        from src.pathtracer.core.geometry import Vec

        with pytest.raises(ValueError):
            Vec().normalize()

    def test_is_close_tolerance(self):
        """Test approximate comparison."""
        from src.pathtracer.core.geometry import Vec

        assert Vec(1.0, 2.0, 3.0).is_close(Vec(1.0, 2.0, 3.000001))
        assert not Vec(1.0, 2.0, 3.0).is_close(Vec(1.0, 2.0, 3.1))


class TestPoint:
    """Tests for Point arithmetic."""

    def test_point_minus_point_is_vec(self):
        """Test that the difference of two points is a vector."""
        from src.pathtracer.core.geometry import Point, Vec

        diff = Point(4.0, 6.0, 8.0) - Point(1.0, 2.0, 3.0)
        assert isinstance(diff, Vec)
        assert diff.is_close(Vec(3.0, 4.0, 5.0))

    def test_point_plus_and_minus_vec(self):
        """Test translating a point by a vector."""
        from src.pathtracer.core.geometry import Point, Vec

        p = Point(1.0, 2.0, 3.0)
        v = Vec(4.0, 6.0, 8.0)
        assert (p + v).is_close(Point(5.0, 8.0, 11.0))
        moved = p - v
        assert isinstance(moved, Point)
        assert moved.is_close(Point(-3.0, -4.0, -5.0))

    def test_scalar_product(self):
        """Test scaling a point."""
        from src.pathtracer.core.geometry import Point

        assert (Point(1.0, 2.0, 3.0) * 2.0).is_close(Point(2.0, 4.0, 6.0))


class TestNormal:
    """Tests for Normal helpers."""

    def test_negation_and_dot(self):
        """Test negation and dot product with a vector."""
        from src.pathtracer.core.geometry import Normal, Vec

        n = Normal(0.0, 0.0, 1.0)
        assert (-n).is_close(Normal(0.0, 0.0, -1.0))
        assert abs(n.dot(Vec(1.0, 2.0, 3.0)) - 3.0) < 1e-5

    def test_normalize(self):
        """Test normal normalization."""
        from src.pathtracer.core.geometry import Normal

        n = Normal(3.0, 0.0, 4.0).normalize()
        assert n.is_close(Normal(0.6, 0.0, 0.8))


class TestOrthonormalBasis:
    """Tests for the orthonormal basis construction."""

    def test_basis_is_orthonormal(self, pcg):
        """Test random normals produce right-handed orthonormal bases."""
        from src.pathtracer.core.geometry import Normal

        for _ in range(100):
            normal = Normal(
                pcg.random_float() * 2.0 - 1.0,
                pcg.random_float() * 2.0 - 1.0,
                pcg.random_float() * 2.0 - 1.0,
            ).normalize()
            e1, e2, e3 = normal.create_onb_from_z()

            assert e3.is_close(normal.to_vec())
            assert abs(e1.squared_norm() - 1.0) < 1e-5
            assert abs(e2.squared_norm() - 1.0) < 1e-5
            assert abs(e3.squared_norm() - 1.0) < 1e-5
            assert abs(e1.dot(e2)) < 1e-5
            assert abs(e2.dot(e3)) < 1e-5
            assert abs(e3.dot(e1)) < 1e-5
            assert e1.cross(e2).is_close(e3)

    def test_basis_for_negative_z(self):
        """Test the basis around -z, the branch where sign flips."""
        from src.pathtracer.core.geometry import Vec

        e1, e2, e3 = Vec(0.0, 0.0, -1.0).create_onb_from_z()
        assert abs(e1.dot(e2)) < 1e-5
        assert e1.cross(e2).is_close(e3)


class TestColor:
    """Tests for Color arithmetic."""

    def test_arithmetic(self):
        """Test sum, difference, product and scaling."""
        from src.pathtracer.core.color import Color

        a = Color(1.0, 2.0, 3.0)
        b = Color(5.0, 7.0, 9.0)
        assert (a + b).is_close(Color(6.0, 9.0, 12.0))
        assert (b - a).is_close(Color(4.0, 5.0, 6.0))
        assert (a * b).is_close(Color(5.0, 14.0, 27.0))
        assert (a * 2.0).is_close(Color(2.0, 4.0, 6.0))
        assert (2.0 * a).is_close(Color(2.0, 4.0, 6.0))
        assert (b / 2.0).is_close(Color(2.5, 3.5, 4.5))

    def test_luminosity(self):
        """Test luminosity is the mean of the extreme components."""
        from src.pathtracer.core.color import Color

        assert abs(Color(1.0, 2.0, 3.0).luminosity() - 2.0) < 1e-5
        assert abs(Color(9.0, 5.0, 7.0).luminosity() - 7.0) < 1e-5

    def test_max_component(self):
        """Test the largest component."""
        from src.pathtracer.core.color import Color

        assert Color(0.2, 0.9, 0.4).max_component() == 0.9
