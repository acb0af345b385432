# SPDX-License-Identifier: MIT
"""Transform utilities for skeleton scene data."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from spine_scene_importer.errors import DegenerateTransformError

Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]  # (x, y, z, w)

IDENTITY_ROTATION: Quaternion = (0.0, 0.0, 0.0, 1.0)


def quaternion_multiply(q1: Quaternion, q2: Quaternion) -> Quaternion:
    """Multiply two quaternions (x, y, z, w format).

    Args:
        q1: First quaternion
        q2: Second quaternion

    Returns:
        Product quaternion
    """
    x1, y1, z1, w1 = q1
    x2, y2, z2, w2 = q2

    return (
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
    )


def quaternion_conjugate(q: Quaternion) -> Quaternion:
    """Conjugate of a quaternion (the inverse for unit quaternions)."""
    x, y, z, w = q
    return (-x, -y, -z, w)


def quaternion_from_axis_angle(axis: Vector3, radians: float) -> Quaternion:
    """Build a unit quaternion rotating ``radians`` about ``axis``."""
    ax, ay, az = axis
    length = math.sqrt(ax * ax + ay * ay + az * az)
    if length == 0.0:
        return IDENTITY_ROTATION
    s = math.sin(radians * 0.5) / length
    return (ax * s, ay * s, az * s, math.cos(radians * 0.5))


def z_angle_quaternion(degrees: float) -> Quaternion:
    """Rotation of ``degrees`` about +Z; all source rotations are planar."""
    return quaternion_from_axis_angle((0.0, 0.0, 1.0), math.radians(degrees))


def rotate_point(rotation: Quaternion, p: Vector3) -> Vector3:
    """Rotate ``p`` by conjugation, ``q * p * q^-1``.

    The point is normalized into a pure quaternion before the product, so
    its original length is recorded up front and restored afterwards.
    """
    length = math.sqrt(p[0] * p[0] + p[1] * p[1] + p[2] * p[2])
    if length == 0.0:
        return (0.0, 0.0, 0.0)

    qp = (p[0] / length, p[1] / length, p[2] / length, 0.0)

    x, y, z, w = rotation
    norm_sq = x * x + y * y + z * z + w * w
    inverse = (-x / norm_sq, -y / norm_sq, -z / norm_sq, w / norm_sq)

    rx, ry, rz, _ = quaternion_multiply(quaternion_multiply(rotation, qp), inverse)
    return (rx * length, ry * length, rz * length)


@dataclass(frozen=True)
class Transform:
    """Decomposed transform with position, rotation, and non-uniform scale.

    Points are scaled, then rotated, then translated. Composition never
    rotates the scale, so combining rotation with non-uniform scale cannot
    introduce shear.
    """

    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Quaternion = IDENTITY_ROTATION
    scale: Vector3 = (1.0, 1.0, 1.0)

    @classmethod
    def identity(cls) -> Transform:
        """Create an identity transform."""
        return cls(
            position=(0.0, 0.0, 0.0),
            rotation=IDENTITY_ROTATION,
            scale=(1.0, 1.0, 1.0),
        )

    @classmethod
    def from_z_angle(cls, degrees: float) -> Transform:
        """Create a pure rotation of ``degrees`` about +Z."""
        return cls(rotation=z_angle_quaternion(degrees))

    def with_z_angle(self, degrees: float) -> Transform:
        """Copy of this transform with its rotation replaced by a Z rotation."""
        return Transform(
            position=self.position,
            rotation=z_angle_quaternion(degrees),
            scale=self.scale,
        )

    def apply(self, point: Vector3) -> Vector3:
        """Map a point through this transform (scale, rotate, translate)."""
        sx, sy, sz = self.scale
        scaled = (point[0] * sx, point[1] * sy, point[2] * sz)
        rx, ry, rz = rotate_point(self.rotation, scaled)
        px, py, pz = self.position
        return (rx + px, ry + py, rz + pz)

    def compose(self, other: Transform) -> Transform:
        """Return ``self`` o ``other``, i.e. ``other`` expressed in this frame.

        Args:
            other: Transform local to this one

        Returns:
            Combined transform
        """
        scale = (
            self.scale[0] * other.scale[0],
            self.scale[1] * other.scale[1],
            self.scale[2] * other.scale[2],
        )
        return Transform(
            position=self.apply(other.position),
            rotation=quaternion_multiply(self.rotation, other.rotation),
            scale=scale,
        )

    def invert(self) -> Transform:
        """Return the inverse transform.

        The translation is found by mapping the negated position through the
        reciprocal-scale, conjugated-rotation transform being built.

        Raises:
            DegenerateTransformError: if any scale component is zero or the
                reciprocal is not finite
        """
        if any(s == 0.0 or not math.isfinite(s) for s in self.scale):
            raise DegenerateTransformError(
                f"Cannot invert transform with scale {self.scale}"
            )
        scale = (1.0 / self.scale[0], 1.0 / self.scale[1], 1.0 / self.scale[2])
        if not all(math.isfinite(s) for s in scale):
            raise DegenerateTransformError(
                f"Cannot invert transform with scale {self.scale}"
            )

        partial = Transform(
            position=(0.0, 0.0, 0.0),
            rotation=quaternion_conjugate(self.rotation),
            scale=scale,
        )
        px, py, pz = self.position
        return Transform(
            position=partial.apply((-px, -py, -pz)),
            rotation=partial.rotation,
            scale=scale,
        )

    def to_matrix(self) -> np.ndarray:
        """Homogeneous 4x4 matrix that maps points the way ``apply`` does.

        Each column is the image of a scaled unit axis, so the matrix is
        T @ R @ S without building the three factors separately.
        """
        matrix = np.eye(4, dtype=np.float64)
        for axis, factor in enumerate(self.scale):
            basis = [0.0, 0.0, 0.0]
            basis[axis] = factor
            matrix[:3, axis] = rotate_point(self.rotation, tuple(basis))
        matrix[:3, 3] = self.position
        return matrix
