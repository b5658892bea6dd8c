"""Operations on point lists and vertex lists."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from .mesh import MeshVertex
from .vecmath import Vec3


def scale_points(points: Iterable[Vec3], factor: float) -> list[Vec3]:
    return [point * factor for point in points]


def translate_points(points: Iterable[Vec3], translation: Vec3) -> list[Vec3]:
    return [point + translation for point in points]


def merge_points(points_a: Iterable[Vec3], points_b: Iterable[Vec3]) -> list[Vec3]:
    """Concatenate two point lists; no index bookkeeping is involved."""
    return [*points_a, *points_b]


def compute_normals(vertices: Sequence[MeshVertex], indices: Sequence[int]) -> list[MeshVertex]:
    """Vertices with normals averaged from the unit normals of the triangles using them.

    Vertices used by no triangle get a zero normal. A trailing incomplete triangle
    is ignored.
    """
    sums = [Vec3()] * len(vertices)
    it = iter(indices)
    for triangle in zip(it, it, it):
        for index in triangle:
            if not 0 <= index < len(vertices):
                raise IndexError(f"vertex index {index} out of range")
        a, b, c = triangle
        p0, p1, p2 = (vertices[i].position for i in triangle)
        normal = (p1 - p0).cross(p2 - p0).normalized()
        for index in triangle:
            sums[index] = sums[index] + normal
    return [replace(v, normal=total.normalized()) for v, total in zip(vertices, sums)]


def center_points(points: Sequence[Vec3]) -> list[Vec3]:
    """Shift the points so the centre of their bounding box lies at the origin."""
    if not points:
        return []
    xs, ys, zs = zip(*(tuple(p) for p in points))
    center = Vec3(
        (min(xs) + max(xs)) * 0.5,
        (min(ys) + max(ys)) * 0.5,
        (min(zs) + max(zs)) * 0.5,
    )
    return translate_points(points, -center)


def remove_duplicate_points(points: Iterable[Vec3], tolerance: float = 1e-5) -> list[Vec3]:
    """Keep the first of every group of points closer than ``tolerance`` to a kept one."""
    limit = tolerance * tolerance
    uniques: list[Vec3] = []
    for point in points:
        if all((point - kept).length_squared() >= limit for kept in uniques):
            uniques.append(point)
    return uniques