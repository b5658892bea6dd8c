"""Factories for common triangle, quad and line meshes."""

from __future__ import annotations

import math
from typing import Iterable, Iterator

from .mesh import DrawPrimitiveType, LineMesh, Mesh, MeshVertex, QuadMesh, TriMesh
from .vecmath import Vec3

_UP = Vec3(0.0, 0.0, 1.0)
_TRI_GRID_COLOR = Vec3(0.8, 0.8, 0.8)
_QUAD_GRID_COLOR = Vec3(0.7, 0.7, 0.7)
_YELLOW = Vec3(1.0, 1.0, 0.0)
_WHITE = Vec3(1.0, 1.0, 1.0)

_FACE_COLORS = (
    Vec3(1.0, 0.0, 0.0),
    Vec3(0.0, 1.0, 0.0),
    Vec3(0.0, 0.0, 1.0),
    Vec3(1.0, 1.0, 0.0),
    Vec3(1.0, 0.0, 1.0),
    Vec3(0.0, 1.0, 1.0),
)

_FACE_NORMALS = (
    Vec3(0.0, 0.0, 1.0),
    Vec3(0.0, 0.0, -1.0),
    Vec3(-1.0, 0.0, 0.0),
    Vec3(1.0, 0.0, 0.0),
    Vec3(0.0, 1.0, 0.0),
    Vec3(0.0, -1.0, 0.0),
)

_S = 0.5
# Four corners per face, in the order front, back, left, right, top, bottom.
_CUBE_FACES = (
    (Vec3(-_S, -_S, _S), Vec3(_S, -_S, _S), Vec3(_S, _S, _S), Vec3(-_S, _S, _S)),
    (Vec3(_S, -_S, -_S), Vec3(-_S, -_S, -_S), Vec3(-_S, _S, -_S), Vec3(_S, _S, -_S)),
    (Vec3(-_S, -_S, -_S), Vec3(-_S, -_S, _S), Vec3(-_S, _S, _S), Vec3(-_S, _S, -_S)),
    (Vec3(_S, -_S, _S), Vec3(_S, -_S, -_S), Vec3(_S, _S, -_S), Vec3(_S, _S, _S)),
    (Vec3(-_S, _S, _S), Vec3(_S, _S, _S), Vec3(_S, _S, -_S), Vec3(-_S, _S, -_S)),
    (Vec3(-_S, -_S, -_S), Vec3(_S, -_S, -_S), Vec3(_S, -_S, _S), Vec3(-_S, -_S, _S)),
)


def _grid_vertices(rows: int, cols: int, size: float, color: Vec3) -> list[MeshVertex]:
    if rows < 2 or cols < 2:
        raise ValueError(f"a grid needs at least 2 rows and 2 columns, got {rows}x{cols}")
    half = size * 0.5
    dx = size / (cols - 1)
    dy = size / (rows - 1)
    return [
        MeshVertex(Vec3(-half + c * dx, -half + r * dy, 0.0), _UP, color)
        for r in range(rows)
        for c in range(cols)
    ]


def _grid_cells(rows: int, cols: int) -> Iterator[tuple[int, int, int, int]]:
    """Yield (i0, i1, i2, i3): bottom-left, bottom-right, top-left, top-right."""
    for r in range(rows - 1):
        for c in range(cols - 1):
            i0 = r * cols + c
            yield i0, i0 + 1, i0 + cols, i0 + cols + 1


def build_tri_grid_mesh(rows: int, cols: int, size: float) -> TriMesh:
    """A square grid of ``rows`` x ``cols`` vertices on the XY plane, two triangles per cell."""
    vertices = _grid_vertices(rows, cols, size, _TRI_GRID_COLOR)
    indices = [
        index
        for i0, i1, i2, i3 in _grid_cells(rows, cols)
        for index in (i0, i2, i1, i1, i2, i3)
    ]
    return TriMesh(vertices, indices, DrawPrimitiveType.TRIANGLES)


def build_tri_ground_plane_mesh(size: float, resolution: int) -> TriMesh:
    return build_tri_grid_mesh(resolution, resolution, size)


def build_arrow_mesh(radius: float, height: float, segments: int) -> TriMesh:
    """A cone with its base on z = 0 and its tip at (0, 0, height), without a base cap."""
    tip = Vec3(0.0, 0.0, height)
    vertices: list[MeshVertex] = []
    for i in range(segments):
        theta1 = i / segments * 2.0 * math.pi
        theta2 = (i + 1) / segments * 2.0 * math.pi
        vertices.extend(
            (
                MeshVertex(tip, color=_YELLOW),
                MeshVertex(
                    Vec3(radius * math.cos(theta1), radius * math.sin(theta1), 0.0),
                    color=_YELLOW,
                ),
                MeshVertex(
                    Vec3(radius * math.cos(theta2), radius * math.sin(theta2), 0.0),
                    color=_YELLOW,
                ),
            )
        )
    return TriMesh(vertices, range(len(vertices)), DrawPrimitiveType.TRIANGLES)


def build_cube_mesh() -> TriMesh:
    """A unit cube centred on the origin, each face with its own normal and colour."""
    vertices = [
        MeshVertex(position, normal, color)
        for corners, normal, color in zip(_CUBE_FACES, _FACE_NORMALS, _FACE_COLORS)
        for position in corners
    ]
    indices = [
        base + offset
        for base in range(0, len(vertices), 4)
        for offset in (0, 1, 2, 0, 2, 3)
    ]
    return TriMesh(vertices, indices, DrawPrimitiveType.TRIANGLES)


def build_sphere_mesh(stacks: int, slices: int) -> TriMesh:
    """A unit sphere around the origin with latitude/longitude tessellation."""
    if stacks < 1 or slices < 1:
        raise ValueError(f"a sphere needs at least one stack and slice, got {stacks}x{slices}")
    vertices: list[MeshVertex] = []
    for i in range(stacks + 1):
        v = i / stacks
        phi = v * math.pi
        for j in range(slices + 1):
            u = j / slices
            theta = u * 2.0 * math.pi
            position = Vec3(
                math.sin(phi) * math.cos(theta),
                math.cos(phi),
                math.sin(phi) * math.sin(theta),
            )
            vertices.append(MeshVertex(position, position.normalized(), Vec3(1.0 - u, v, u)))

    indices: list[int] = []
    for i in range(stacks):
        row1 = i * (slices + 1)
        row2 = (i + 1) * (slices + 1)
        for j in range(slices):
            indices.extend(
                (row1 + j, row2 + j, row2 + j + 1, row1 + j, row2 + j + 1, row1 + j + 1)
            )
    return TriMesh(vertices, indices, DrawPrimitiveType.TRIANGLES)


def build_quad_grid_mesh(rows: int, cols: int, size: float) -> QuadMesh:
    """A square grid of ``rows`` x ``cols`` vertices on the XY plane, one quad per cell."""
    vertices = _grid_vertices(rows, cols, size, _QUAD_GRID_COLOR)
    indices = [
        index
        for i0, i1, i2, i3 in _grid_cells(rows, cols)
        for index in (i0, i1, i3, i2)
    ]
    return QuadMesh(vertices, indices, DrawPrimitiveType.QUADS)


def build_quad_ground_plane_mesh(size: float, resolution: int) -> QuadMesh:
    return build_quad_grid_mesh(resolution, resolution, size)


def build_z_facing_quad(width: float, height: float) -> QuadMesh:
    """A single white quad on z = 0, centred on the origin, facing +Z."""
    w = width * 0.5
    h = height * 0.5
    corners = (Vec3(-w, -h, 0.0), Vec3(w, -h, 0.0), Vec3(w, h, 0.0), Vec3(-w, h, 0.0))
    vertices = [MeshVertex(corner, _UP, _WHITE) for corner in corners]
    return QuadMesh(vertices, range(4), DrawPrimitiveType.QUADS)


def build_cube_face_mesh() -> QuadMesh:
    """The six faces of a unit cube as quads, one colour per face and no normals."""
    vertices = [
        MeshVertex(position, color=color)
        for corners, color in zip(_CUBE_FACES, _FACE_COLORS)
        for position in corners
    ]
    return QuadMesh(vertices, range(len(vertices)), DrawPrimitiveType.QUADS)


def build_axis_lines(length: float) -> LineMesh:
    """Red X, green Y and blue Z axis segments from the origin."""
    axes = (
        (Vec3(length, 0.0, 0.0), Vec3(1.0, 0.0, 0.0)),
        (Vec3(0.0, length, 0.0), Vec3(0.0, 1.0, 0.0)),
        (Vec3(0.0, 0.0, length), Vec3(0.0, 0.0, 1.0)),
    )
    vertices = [
        vertex
        for end, color in axes
        for vertex in (MeshVertex(Vec3(), color=color), MeshVertex(end, color=color))
    ]
    return LineMesh(vertices, range(len(vertices)), DrawPrimitiveType.LINES)


def build_polyline_mesh(points: Iterable[Vec3], color: Vec3) -> LineMesh:
    """Segments joining consecutive points, all in one colour."""
    vertices = [MeshVertex(point, color=color) for point in points]
    indices = [index for i in range(len(vertices) - 1) for index in (i, i + 1)]
    return LineMesh(vertices, indices, DrawPrimitiveType.LINES)


def build_normal_lines(mesh: Mesh, scale: float = 0.1) -> LineMesh:
    """One yellow segment per vertex of ``mesh``, along its normal, ``scale`` long."""
    vertices: list[MeshVertex] = []
    for vertex in mesh.vertices:
        start = vertex.position
        end = start + vertex.normal.normalized() * scale
        vertices.append(MeshVertex(start, color=_YELLOW))
        vertices.append(MeshVertex(end, color=_YELLOW))
    return LineMesh(vertices, range(len(vertices)), DrawPrimitiveType.LINES)