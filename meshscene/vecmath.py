"""Three-component vectors, 4x4 transform matrices and related helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

_SINGULAR_EPSILON = 1e-12


@dataclass(frozen=True)
class Vec3:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: object) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, factor: object) -> Vec3:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> Vec3:
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return Vec3(self.x / divisor, self.y / divisor, self.z / divisor)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def normalized(self) -> Vec3:
        """Return a unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return Vec3()
        return self / length

    def is_null(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


class Mat4:
    """An immutable 4x4 matrix acting on column vectors.

    The building methods (translate, rotate, ...) return a new matrix equal to
    this one multiplied on the right by the corresponding transform.
    """

    __slots__ = ("_m",)

    def __init__(self, values=None) -> None:
        matrix = np.identity(4) if values is None else np.array(values, dtype=float)
        if matrix.shape != (4, 4):
            raise ValueError(f"a 4x4 matrix is required, got shape {matrix.shape}")
        matrix.flags.writeable = False
        self._m = matrix

    @classmethod
    def identity(cls) -> Mat4:
        return cls()

    @property
    def values(self) -> np.ndarray:
        """A writable copy of the matrix entries, indexed [row, column]."""
        return self._m.copy()

    def __getitem__(self, key: tuple[int, int]) -> float:
        return float(self._m[key])

    def __matmul__(self, other: object) -> Mat4:
        if not isinstance(other, Mat4):
            return NotImplemented
        return Mat4(self._m @ other._m)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mat4):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join(str(list(row)) for row in self._m.tolist())
        return f"Mat4([{rows}])"

    def _then(self, values: np.ndarray) -> Mat4:
        return Mat4(self._m @ values)

    def translate(self, offset: Vec3) -> Mat4:
        t = np.identity(4)
        t[:3, 3] = tuple(offset)
        return self._then(t)

    def rotate(self, angle: float, axis: Vec3) -> Mat4:
        """Rotate by ``angle`` degrees counter-clockwise about ``axis``."""
        if angle in (90.0, -270.0):
            s, c = 1.0, 0.0
        elif angle in (-90.0, 270.0):
            s, c = -1.0, 0.0
        elif angle in (180.0, -180.0):
            s, c = 0.0, -1.0
        else:
            radians = math.radians(angle)
            s, c = math.sin(radians), math.cos(radians)
        a = np.array(tuple(axis.normalized()))
        x, y, z = a
        skew = np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])
        r = np.identity(4)
        r[:3, :3] = c * np.identity(3) + (1.0 - c) * np.outer(a, a) + s * skew
        return self._then(r)

    def scale(self, factors: Vec3) -> Mat4:
        return self._then(np.diag([factors.x, factors.y, factors.z, 1.0]))

    def ortho(
        self,
        left: float,
        right: float,
        bottom: float,
        top: float,
        near_plane: float,
        far_plane: float,
    ) -> Mat4:
        """Apply an orthographic projection; a degenerate box leaves the matrix unchanged."""
        if left == right or bottom == top or near_plane == far_plane:
            return self
        width = right - left
        height = top - bottom
        clip = far_plane - near_plane
        o = np.array(
            [
                [2.0 / width, 0.0, 0.0, -(left + right) / width],
                [0.0, 2.0 / height, 0.0, -(top + bottom) / height],
                [0.0, 0.0, -2.0 / clip, -(near_plane + far_plane) / clip],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )
        return self._then(o)

    def perspective(
        self, fov: float, aspect_ratio: float, near_plane: float, far_plane: float
    ) -> Mat4:
        """Apply a perspective projection with a vertical field of view in degrees.

        Degenerate parameters leave the matrix unchanged.
        """
        if near_plane == far_plane or aspect_ratio == 0.0:
            return self
        half = math.radians(fov / 2.0)
        sine = math.sin(half)
        if sine == 0.0:
            return self
        cotan = math.cos(half) / sine
        clip = far_plane - near_plane
        p = np.array(
            [
                [cotan / aspect_ratio, 0.0, 0.0, 0.0],
                [0.0, cotan, 0.0, 0.0],
                [0.0, 0.0, -(near_plane + far_plane) / clip, -(2.0 * near_plane * far_plane) / clip],
                [0.0, 0.0, -1.0, 0.0],
            ]
        )
        return self._then(p)

    def map(self, point: Vec3) -> Vec3:
        """Transform a point, dividing by the resulting w where it is not 1."""
        x, y, z, w = self.transform4(point.x, point.y, point.z, 1.0)
        if w == 1.0:
            return Vec3(x, y, z)
        return Vec3(x / w, y / w, z / w)

    def map_vector(self, vector: Vec3) -> Vec3:
        """Transform a direction with the upper 3x3 part only."""
        x, y, z = self._m[:3, :3] @ np.array(tuple(vector))
        return Vec3(float(x), float(y), float(z))

    def transform4(self, x: float, y: float, z: float, w: float) -> tuple[float, float, float, float]:
        rx, ry, rz, rw = self._m @ np.array([x, y, z, w], dtype=float)
        return float(rx), float(ry), float(rz), float(rw)

    def inverted(self) -> Mat4:
        if abs(np.linalg.det(self._m)) <= _SINGULAR_EPSILON:
            raise ValueError("matrix is not invertible")
        return Mat4(np.linalg.inv(self._m))


def radians_to_degrees(radians: float) -> float:
    return radians * 180.0 / math.pi


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def cross_product(vector_a: Vec3, vector_b: Vec3) -> Vec3:
    return vector_a.cross(vector_b)


def dot_product(vector_a: Vec3, vector_b: Vec3) -> float:
    return vector_a.dot(vector_b)


def make_translation_matrix(translation: Vec3) -> Mat4:
    return Mat4.identity().translate(translation)


def make_rotation_matrix(angle: float, axis: Vec3) -> Mat4:
    return Mat4.identity().rotate(angle, axis)


def make_scale_matrix(scale: Vec3) -> Mat4:
    return Mat4.identity().scale(scale)


def make_transform_matrix(translation: Vec3, angle: float, axis: Vec3, scale: Vec3) -> Mat4:
    """Translation, then rotation, then scale, composed into one matrix."""
    return Mat4.identity().translate(translation).rotate(angle, axis).scale(scale)


def make_orthographic_matrix(
    left: float,
    right: float,
    bottom: float,
    top: float,
    near_plane: float,
    far_plane: float,
) -> Mat4:
    return Mat4.identity().ortho(left, right, bottom, top, near_plane, far_plane)


def make_perspective_matrix(
    fov: float, aspect_ratio: float, near_plane: float, far_plane: float
) -> Mat4:
    return Mat4.identity().perspective(fov, aspect_ratio, near_plane, far_plane)