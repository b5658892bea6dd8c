"""Mesh types: vertices with attributes, index lists and primitive kinds."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from itertools import islice
from typing import ClassVar, Iterable, Iterator, Sequence

from .vecmath import Mat4, Vec3


class DrawPrimitiveType(Enum):
    POINTS = "points"
    LINES = "lines"
    TRIANGLES = "triangles"
    QUADS = "quads"


@dataclass(frozen=True)
class MeshVertex:
    position: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    color: Vec3 = field(default_factory=Vec3)
    tex_coord: Vec3 = field(default_factory=Vec3)
    tangent: Vec3 = field(default_factory=Vec3)
    bitangent: Vec3 = field(default_factory=Vec3)

    def to_dict(self) -> dict[str, list[float]]:
        return {f.name: list(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> MeshVertex:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown vertex attributes: {sorted(unknown)}")
        return cls(**{name: Vec3(*map(float, value)) for name, value in data.items()})


def _index_groups(indices: Sequence[int], size: int) -> Iterator[tuple[int, ...]]:
    """Consecutive complete groups of ``size`` indices."""
    it = iter(indices)
    return zip(*[it] * size)


class Mesh(ABC):
    """Common state and queries shared by all mesh kinds."""

    default_draw_type: ClassVar[DrawPrimitiveType]

    def __init__(
        self,
        vertices: Iterable[MeshVertex] = (),
        indices: Iterable[int] = (),
        draw_type: DrawPrimitiveType | None = None,
        animation_step: float = 0.0,
    ) -> None:
        self.vertices: list[MeshVertex] = list(vertices)
        self.indices: list[int] = list(indices)
        self._draw_type = self.default_draw_type
        if draw_type is not None:
            self.draw_type = draw_type
        self.animation_step = float(animation_step)

    @property
    def draw_type(self) -> DrawPrimitiveType:
        return self._draw_type

    @draw_type.setter
    def draw_type(self, value: DrawPrimitiveType) -> None:
        value = DrawPrimitiveType(value)
        self._check_draw_type(value)
        self._draw_type = value

    def _check_draw_type(self, value: DrawPrimitiveType) -> None:
        """Hook for mesh kinds that accept only some primitive types."""

    def bounding_box(self) -> tuple[Vec3, Vec3]:
        """The (minimum, maximum) corners; both zero for an empty mesh."""
        if not self.vertices:
            return Vec3(), Vec3()
        xs, ys, zs = zip(*(tuple(v.position) for v in self.vertices))
        return Vec3(min(xs), min(ys), min(zs)), Vec3(max(xs), max(ys), max(zs))

    def clear(self) -> None:
        self.vertices.clear()
        self.indices.clear()

    def has_valid_geometry(self) -> bool:
        return bool(self.vertices) and bool(self.indices)

    def is_closed(self) -> bool:
        return False

    def dimension(self) -> int:
        """0 when empty, 2 when every vertex lies on z = 0, otherwise 3."""
        if not self.vertices:
            return 0
        flat = all(abs(v.position.z) < 1e-6 for v in self.vertices)
        return 2 if flat else 3

    def has_normals(self) -> bool:
        return any(not v.normal.is_null() for v in self.vertices)

    @abstractmethod
    def apply_transform(self, matrix: Mat4) -> None:
        """Transform every vertex in place."""

    def sample_points(self, count: int = 100) -> list[Vec3]:
        return []

    def _centroid(self, group: tuple[int, ...]) -> Vec3:
        total = sum((self.vertices[i].position for i in group), Vec3())
        return total / len(group)

    def _sample_centroids(self, group_size: int, limit: int | None) -> list[Vec3]:
        if len(self.indices) < group_size or not self.vertices:
            return []
        centroids = (self._centroid(g) for g in _index_groups(self.indices, group_size))
        return list(islice(centroids, limit))

    def _transform_with_normals(self, matrix: Mat4) -> None:
        self.vertices = [
            replace(
                v,
                position=matrix.map(v.position),
                normal=matrix.map_vector(v.normal).normalized(),
            )
            for v in self.vertices
        ]

    def to_json(self) -> str:
        return json.dumps(
            {
                "draw_type": self.draw_type.value,
                "animation_step": self.animation_step,
                "vertices": [v.to_dict() for v in self.vertices],
                "indices": list(self.indices),
            }
        )

    @classmethod
    def from_json(cls, text: str) -> Mesh:
        """Build a mesh of this kind from the output of :meth:`to_json`."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("mesh JSON must be an object")
        try:
            vertices = [MeshVertex.from_dict(v) for v in data.get("vertices", [])]
            indices = [int(i) for i in data.get("indices", [])]
            draw_type = DrawPrimitiveType(data.get("draw_type", cls.default_draw_type.value))
            animation_step = float(data.get("animation_step", 0.0))
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"malformed mesh JSON: {exc}") from exc
        if any(i < 0 for i in indices):
            raise ValueError("indices must not be negative")
        return cls(vertices, indices, draw_type, animation_step)


class TriMesh(Mesh):
    """A mesh drawn as triangles."""

    default_draw_type = DrawPrimitiveType.TRIANGLES

    def _check_draw_type(self, value: DrawPrimitiveType) -> None:
        if value is not DrawPrimitiveType.TRIANGLES:
            raise ValueError("TriMesh only supports DrawPrimitiveType.TRIANGLES")

    def apply_transform(self, matrix: Mat4) -> None:
        self._transform_with_normals(matrix)

    def sample_points(self, count: int = 100) -> list[Vec3]:
        """Triangle centroids, at most ``count`` of them (no limit if negative)."""
        return self._sample_centroids(3, None if count < 0 else count)


class QuadMesh(Mesh):
    """A mesh drawn as quadrilaterals."""

    default_draw_type = DrawPrimitiveType.QUADS

    def apply_transform(self, matrix: Mat4) -> None:
        self._transform_with_normals(matrix)

    def sample_points(self, count: int = 100) -> list[Vec3]:
        """Quad centres; at least one is returned, no limit if ``count`` is negative."""
        return self._sample_centroids(4, None if count < 0 else max(count, 1))


class LineMesh(Mesh):
    """A mesh drawn as line segments."""

    default_draw_type = DrawPrimitiveType.LINES

    def apply_transform(self, matrix: Mat4) -> None:
        self.vertices = [replace(v, position=matrix.map(v.position)) for v in self.vertices]

    def sample_points(self, count: int = 100) -> list[Vec3]:
        """Segment midpoints; at least one is returned, no limit if ``count`` is negative."""
        return self._sample_centroids(2, None if count < 0 else max(count, 1))