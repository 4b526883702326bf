"""Affine transformations stored as a matrix together with its inverse.

A Transform carries both the 4x4 matrix ``m`` and its inverse ``invm`` so that
shapes can map rays into object space and hits back into world space without
ever inverting a matrix at render time. Composition keeps the pair in sync:
``(A * B).invm == B.invm @ A.invm``.

Matrices are row-major and act on column vectors, so ``A * B`` applies ``B``
first.

Example:
    >>> t = translation(Vec(1.0, 0.0, 0.0)) * rotation_z(math.pi / 2)
    >>> t * Point(1.0, 0.0, 0.0)
    Point(x=1.0, y=1.0, z=0.0)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, overload

import numpy as np
import numpy.typing as npt

from src.pathtracer.core.geometry import EPSILON, Normal, Point, Vec

if TYPE_CHECKING:
    from src.pathtracer.core.ray import Ray

Matrix4 = npt.NDArray[np.float64]

IDENTITY_MATRIX: Matrix4 = np.identity(4, dtype=np.float64)


def _as_matrix(values: npt.ArrayLike, name: str) -> Matrix4:
    matrix = np.array(values, dtype=np.float64)
    if matrix.shape != (4, 4):
        raise ValueError(f"{name} must be a 4x4 matrix, got shape {matrix.shape}")
    return matrix


class Transform:
    """An invertible affine transformation.

    Attributes:
        m: The 4x4 transformation matrix.
        invm: The inverse of ``m``. Not verified on construction; use
            ``is_consistent`` in tests.
    """

    __slots__ = ("m", "invm", "_rows", "_inv_rows")

    def __init__(
        self,
        m: npt.ArrayLike | None = None,
        invm: npt.ArrayLike | None = None,
    ) -> None:
        """Create a transform from a matrix and its inverse.

        Args:
            m: 4x4 matrix (default identity).
            invm: Inverse of ``m``. When omitted it is computed with
                ``numpy.linalg.inv``.

        Raises:
            ValueError: If a matrix is not 4x4 or ``m`` is singular.
        """
        self.m = IDENTITY_MATRIX.copy() if m is None else _as_matrix(m, "m")
        if invm is None:
            try:
                invm = np.linalg.inv(self.m)
            except np.linalg.LinAlgError as exc:
                raise ValueError("Transformation matrix is singular") from exc
        self.invm = _as_matrix(invm, "invm")
        # Plain nested lists are much faster than numpy for scalar access
        self._rows: list[list[float]] = self.m.tolist()
        self._inv_rows: list[list[float]] = self.invm.tolist()

    def __repr__(self) -> str:
        return f"Transform(m={self._rows!r})"

    @overload
    def __mul__(self, other: Transform) -> Transform: ...

    @overload
    def __mul__(self, other: Point) -> Point: ...

    @overload
    def __mul__(self, other: Vec) -> Vec: ...

    @overload
    def __mul__(self, other: Normal) -> Normal: ...

    @overload
    def __mul__(self, other: Ray) -> Ray: ...

    def __mul__(self, other):
        if isinstance(other, Transform):
            return self.compose(other)
        if isinstance(other, Point):
            return self.apply_to_point(other)
        if isinstance(other, Vec):
            return self.apply_to_vector(other)
        if isinstance(other, Normal):
            return self.apply_to_normal(other)
        from src.pathtracer.core.ray import Ray

        if isinstance(other, Ray):
            return self.apply_to_ray(other)
        return NotImplemented

    def compose(self, other: Transform) -> Transform:
        """Return the transform that applies ``other`` and then ``self``."""
        return Transform(self.m @ other.m, other.invm @ self.invm)

    def inverse(self) -> Transform:
        """Return the inverse transform by swapping the stored matrices."""
        return Transform(self.invm, self.m)

    def apply_to_point(self, p: Point) -> Point:
        r = self._rows
        x = r[0][0] * p.x + r[0][1] * p.y + r[0][2] * p.z + r[0][3]
        y = r[1][0] * p.x + r[1][1] * p.y + r[1][2] * p.z + r[1][3]
        z = r[2][0] * p.x + r[2][1] * p.y + r[2][2] * p.z + r[2][3]
        w = r[3][0] * p.x + r[3][1] * p.y + r[3][2] * p.z + r[3][3]
        if w == 1.0:
            return Point(x, y, z)
        return Point(x / w, y / w, z / w)

    def apply_to_vector(self, v: Vec) -> Vec:
        r = self._rows
        return Vec(
            r[0][0] * v.x + r[0][1] * v.y + r[0][2] * v.z,
            r[1][0] * v.x + r[1][1] * v.y + r[1][2] * v.z,
            r[2][0] * v.x + r[2][1] * v.y + r[2][2] * v.z,
        )

    def apply_to_normal(self, n: Normal) -> Normal:
        """Transform a normal with the transpose of the inverse matrix."""
        r = self._inv_rows
        return Normal(
            r[0][0] * n.x + r[1][0] * n.y + r[2][0] * n.z,
            r[0][1] * n.x + r[1][1] * n.y + r[2][1] * n.z,
            r[0][2] * n.x + r[1][2] * n.y + r[2][2] * n.z,
        )

    def apply_to_ray(self, ray: Ray) -> Ray:
        """Transform origin and direction, keeping tmin, tmax and depth."""
        from src.pathtracer.core.ray import Ray

        return Ray(
            origin=self.apply_to_point(ray.origin),
            direction=self.apply_to_vector(ray.direction),
            tmin=ray.tmin,
            tmax=ray.tmax,
            depth=ray.depth,
        )

    def is_close(self, other: Transform, epsilon: float = EPSILON) -> bool:
        """Return True if both matrices and inverses match within epsilon."""
        return bool(
            np.allclose(self.m, other.m, rtol=0.0, atol=epsilon)
            and np.allclose(self.invm, other.invm, rtol=0.0, atol=epsilon)
        )

    def is_consistent(self, epsilon: float = EPSILON) -> bool:
        """Check that ``m @ invm`` is the identity. Intended for tests."""
        return bool(
            np.allclose(self.m @ self.invm, IDENTITY_MATRIX, rtol=0.0, atol=epsilon)
        )


def translation(vec: Vec) -> Transform:
    """Translation by ``vec``."""
    m = np.array(
        [
            [1.0, 0.0, 0.0, vec.x],
            [0.0, 1.0, 0.0, vec.y],
            [0.0, 0.0, 1.0, vec.z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    invm = np.array(
        [
            [1.0, 0.0, 0.0, -vec.x],
            [0.0, 1.0, 0.0, -vec.y],
            [0.0, 0.0, 1.0, -vec.z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transform(m, invm)


def scaling(factor: Vec | float) -> Transform:
    """Scaling along the axes, either uniform or per-axis.

    Args:
        factor: A single scale factor or a Vec of per-axis factors.

    Raises:
        ValueError: If any factor is zero.
    """
    if isinstance(factor, Vec):
        sx, sy, sz = factor.x, factor.y, factor.z
    else:
        sx = sy = sz = float(factor)
    if sx == 0.0 or sy == 0.0 or sz == 0.0:
        raise ValueError(f"Scale factors must be non-zero, got ({sx}, {sy}, {sz})")
    m = np.diag([sx, sy, sz, 1.0])
    invm = np.diag([1.0 / sx, 1.0 / sy, 1.0 / sz, 1.0])
    return Transform(m, invm)


def rotation_x(angle_rad: float) -> Transform:
    """Counter-clockwise rotation about the x axis."""
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.array(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transform(m, m.T.copy())


def rotation_y(angle_rad: float) -> Transform:
    """Counter-clockwise rotation about the y axis."""
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.array(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transform(m, m.T.copy())


def rotation_z(angle_rad: float) -> Transform:
    """Counter-clockwise rotation about the z axis."""
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = np.array(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return Transform(m, m.T.copy())
