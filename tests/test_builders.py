import math

import pytest

from meshscene.builders import (
    build_arrow_mesh,
    build_axis_lines,
    build_cube_face_mesh,
    build_cube_mesh,
    build_normal_lines,
    build_polyline_mesh,
    build_quad_grid_mesh,
    build_quad_ground_plane_mesh,
    build_sphere_mesh,
    build_tri_grid_mesh,
    build_tri_ground_plane_mesh,
    build_z_facing_quad,
)
from meshscene.mesh import DrawPrimitiveType
from meshscene.vecmath import Vec3


def _close(a, b, tol=1e-9):
    return tuple(a) == pytest.approx(tuple(b), abs=tol)


@pytest.mark.parametrize("rows,cols,size", [(2, 2, 1.0), (3, 5, 4.0), (10, 10, 40.0)])
def test_tri_grid_counts_and_extent(rows, cols, size):
    mesh = build_tri_grid_mesh(rows, cols, size)
    assert len(mesh.vertices) == rows * cols
    assert len(mesh.indices) == (rows - 1) * (cols - 1) * 6
    assert max(mesh.indices) < len(mesh.vertices)
    low, high = mesh.bounding_box()
    assert _close(low, Vec3(-size / 2, -size / 2, 0.0))
    assert _close(high, Vec3(size / 2, size / 2, 0.0))
    assert mesh.draw_type is DrawPrimitiveType.TRIANGLES
    assert mesh.dimension() == 2
    assert all(v.normal == Vec3(0.0, 0.0, 1.0) for v in mesh.vertices)


def test_tri_ground_plane_is_square_grid():
    plane = build_tri_ground_plane_mesh(6.0, 4)
    grid = build_tri_grid_mesh(4, 4, 6.0)
    assert plane.vertices == grid.vertices
    assert plane.indices == grid.indices


@pytest.mark.parametrize("rows,cols", [(1, 3), (3, 1), (0, 0)])
def test_grid_too_small_raises(rows, cols):
    with pytest.raises(ValueError):
        build_tri_grid_mesh(rows, cols, 1.0)
    with pytest.raises(ValueError):
        build_quad_grid_mesh(rows, cols, 1.0)


def test_arrow_structure():
    radius, height, segments = 0.5, 2.0, 12
    mesh = build_arrow_mesh(radius, height, segments)
    assert len(mesh.vertices) == 3 * segments
    assert mesh.indices == list(range(3 * segments))
    tips = mesh.vertices[0::3]
    assert all(v.position == Vec3(0.0, 0.0, height) for v in tips)
    rim = [v for i, v in enumerate(mesh.vertices) if i % 3]
    for v in rim:
        assert v.position.z == 0.0
        assert v.position.length() == pytest.approx(radius)
    assert not mesh.has_normals()


def test_arrow_without_segments_is_empty():
    mesh = build_arrow_mesh(1.0, 1.0, 0)
    assert mesh.vertices == []
    assert not mesh.has_valid_geometry()


def test_cube_mesh_normals_match_winding():
    mesh = build_cube_mesh()
    assert len(mesh.vertices) == 24
    assert len(mesh.indices) == 36
    low, high = mesh.bounding_box()
    assert low == Vec3(-0.5, -0.5, -0.5)
    assert high == Vec3(0.5, 0.5, 0.5)
    it = iter(mesh.indices)
    for a, b, c in zip(it, it, it):
        pa, pb, pc = (mesh.vertices[i].position for i in (a, b, c))
        face_normal = (pb - pa).cross(pc - pa).normalized()
        for i in (a, b, c):
            assert _close(face_normal, mesh.vertices[i].normal)


@pytest.mark.parametrize("stacks,slices", [(1, 3), (8, 16)])
def test_sphere_structure(stacks, slices):
    mesh = build_sphere_mesh(stacks, slices)
    assert len(mesh.vertices) == (stacks + 1) * (slices + 1)
    assert len(mesh.indices) == stacks * slices * 6
    assert max(mesh.indices) < len(mesh.vertices)
    for v in mesh.vertices:
        assert v.position.length() == pytest.approx(1.0)
        assert _close(v.normal, v.position)
    assert _close(mesh.vertices[0].position, Vec3(0.0, 1.0, 0.0))


@pytest.mark.parametrize("stacks,slices", [(0, 4), (4, 0)])
def test_sphere_degenerate_raises(stacks, slices):
    with pytest.raises(ValueError):
        build_sphere_mesh(stacks, slices)


def test_quad_grid_structure():
    rows, cols, size = 4, 3, 2.0
    mesh = build_quad_grid_mesh(rows, cols, size)
    assert len(mesh.vertices) == rows * cols
    assert len(mesh.indices) == (rows - 1) * (cols - 1) * 4
    assert mesh.draw_type is DrawPrimitiveType.QUADS
    low, high = mesh.bounding_box()
    assert _close(low, Vec3(-size / 2, -size / 2, 0.0))
    assert _close(high, Vec3(size / 2, size / 2, 0.0))
    assert len(mesh.sample_points(100)) == (rows - 1) * (cols - 1)


def test_quad_ground_plane_is_square_grid():
    plane = build_quad_ground_plane_mesh(3.0, 5)
    grid = build_quad_grid_mesh(5, 5, 3.0)
    assert plane.vertices == grid.vertices
    assert plane.indices == grid.indices


def test_z_facing_quad():
    width, height = 4.0, 2.0
    mesh = build_z_facing_quad(width, height)
    assert mesh.indices == [0, 1, 2, 3]
    low, high = mesh.bounding_box()
    assert low == Vec3(-width / 2, -height / 2, 0.0)
    assert high == Vec3(width / 2, height / 2, 0.0)
    assert mesh.sample_points(10) == [Vec3()]


def test_cube_face_mesh():
    mesh = build_cube_face_mesh()
    assert len(mesh.vertices) == 24
    assert mesh.indices == list(range(24))
    assert not mesh.has_normals()
    face_colors = []
    for start in range(0, 24, 4):
        colors = {v.color for v in mesh.vertices[start:start + 4]}
        assert len(colors) == 1
        face_colors.append(colors.pop())
    assert len(set(face_colors)) == 6
    assert all(_close(c, Vec3()) for c in mesh.sample_points(10)) is False


def test_axis_lines():
    length = 5.0
    mesh = build_axis_lines(length)
    assert mesh.indices == list(range(6))
    assert mesh.vertices[1].position == Vec3(length, 0.0, 0.0)
    assert mesh.vertices[3].position == Vec3(0.0, length, 0.0)
    assert mesh.vertices[5].position == Vec3(0.0, 0.0, length)
    assert mesh.vertices[0].color == Vec3(1.0, 0.0, 0.0)
    low, high = mesh.bounding_box()
    assert low == Vec3()
    assert high == Vec3(length, length, length)


def test_polyline_mesh():
    points = [Vec3(0.0, 0.0, 0.0), Vec3(1.0, 2.0, 0.0), Vec3(3.0, 1.0, 0.0)]
    color = Vec3(1.0, 0.0, 0.0)
    mesh = build_polyline_mesh(points, color)
    assert [v.position for v in mesh.vertices] == points
    assert all(v.color == color for v in mesh.vertices)
    assert mesh.indices == [0, 1, 1, 2]


@pytest.mark.parametrize("points", [[], [Vec3(1.0, 1.0, 0.0)]])
def test_polyline_without_segments(points):
    mesh = build_polyline_mesh(points, Vec3())
    assert mesh.indices == []
    assert len(mesh.vertices) == len(points)


def test_normal_lines_follow_normals():
    cube = build_cube_mesh()
    scale = 0.25
    lines = build_normal_lines(cube, scale)
    assert len(lines.vertices) == 2 * len(cube.vertices)
    assert lines.indices == list(range(2 * len(cube.vertices)))
    for vertex, start, end in zip(cube.vertices, lines.vertices[0::2], lines.vertices[1::2]):
        assert start.position == vertex.position
        assert _close(end.position - start.position, vertex.normal * scale)


def test_normal_lines_default_scale():
    cube = build_cube_mesh()
    lines = build_normal_lines(cube)
    start, end = lines.vertices[0], lines.vertices[1]
    assert (end.position - start.position).length() == pytest.approx(0.1)
    assert math.isclose(start.color.z, 0.0)