"""An interactive scene: camera state, click picking and an editable polyline."""

from __future__ import annotations

import math
from enum import Flag, auto

from .builders import build_axis_lines, build_polyline_mesh, build_tri_ground_plane_mesh
from .mesh import LineMesh, TriMesh
from .vecmath import Mat4, Vec3

_FIELD_OF_VIEW = 45.0
_NEAR_PLANE = 0.1
_FAR_PLANE = 100.0
_MIN_ZOOM = 2.0
_MAX_ZOOM = 100.0
_WHEEL_STEP = 120.0
_ROTATE_SPEED = 0.5
_PAN_SPEED = 0.01
_PARALLEL_EPSILON = 1e-6
_POLYLINE_COLOR = Vec3(1.0, 0.0, 0.0)
_X_AXIS = Vec3(1.0, 0.0, 0.0)
_Y_AXIS = Vec3(0.0, 1.0, 0.0)


class MouseButton(Flag):
    NONE = 0
    LEFT = auto()
    RIGHT = auto()
    MIDDLE = auto()


class SceneViewport:
    """A 3D view of a ground plane, coordinate axes and a polyline drawn by clicking.

    Left clicks add points on the z = 0 plane to the polyline, a middle-button drag
    orbits the camera, a right-button drag pans it, the wheel zooms, and Escape
    clears the polyline.
    """

    def __init__(self, width: int = 800, height: int = 600) -> None:
        self.width = 1
        self.height = 1
        self.resize(width, height)

        self.ground_mesh: TriMesh = build_tri_ground_plane_mesh(40.0, 100)
        self.axis_mesh: LineMesh = build_axis_lines(5.0)
        self.polyline_mesh: LineMesh = LineMesh()
        self.polyline_points: list[Vec3] = []

        self.rotation_x = 45.0
        self.rotation_y = -45.0
        self.zoom = 20.0
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.last_mouse_pos: tuple[int, int] = (0, 0)
        self.needs_redraw = True

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.needs_redraw = True

    def projection_matrix(self) -> Mat4:
        aspect = self.width / self.height
        return Mat4.identity().perspective(_FIELD_OF_VIEW, aspect, _NEAR_PLANE, _FAR_PLANE)

    def view_matrix(self) -> Mat4:
        return (
            Mat4.identity()
            .translate(Vec3(self.pan_x, self.pan_y, -self.zoom))
            .rotate(self.rotation_x, _X_AXIS)
            .rotate(self.rotation_y, _Y_AXIS)
        )

    def mvp(self) -> Mat4:
        """Projection times view; the model transform is the identity."""
        return self.projection_matrix() @ self.view_matrix()

    def map_click_to_plane(self, screen_x: float, screen_y: float) -> Vec3:
        """Intersect the ray under a screen position with the z = 0 plane.

        A ray parallel to the plane gives a vector of NaNs.
        """
        ndc_x = 2.0 * screen_x / self.width - 1.0
        ndc_y = 1.0 - 2.0 * screen_y / self.height
        inverse = self.mvp().inverted()

        near = _unproject(inverse, ndc_x, ndc_y, -1.0)
        far = _unproject(inverse, ndc_x, ndc_y, 1.0)
        direction = (far - near).normalized()

        if abs(direction.z) < _PARALLEL_EPSILON:
            return Vec3(math.nan, math.nan, math.nan)
        t = -near.z / direction.z
        return near + direction * t

    def mouse_press(self, x: float, y: float, button: MouseButton) -> Vec3 | None:
        """Handle a button press; a left click returns the point added to the polyline."""
        self.last_mouse_pos = (int(x), int(y))
        if button is not MouseButton.LEFT:
            return None
        point = self.map_click_to_plane(x, y)
        self.polyline_points.append(point)
        self.polyline_mesh = build_polyline_mesh(self.polyline_points, _POLYLINE_COLOR)
        self.needs_redraw = True
        return point

    def mouse_move(self, x: float, y: float, buttons: MouseButton) -> None:
        last_x, last_y = self.last_mouse_pos
        dx = int(x - last_x)
        dy = int(y - last_y)
        if MouseButton.MIDDLE in buttons:
            self.rotation_x += dy * _ROTATE_SPEED
            self.rotation_y += dx * _ROTATE_SPEED
        elif MouseButton.RIGHT in buttons:
            self.pan_x += dx * _PAN_SPEED
            self.pan_y -= dy * _PAN_SPEED
        self.last_mouse_pos = (int(x), int(y))
        self.needs_redraw = True

    def wheel(self, angle_delta: float) -> None:
        """Zoom by wheel notches of 120 units, keeping the distance within [2, 100]."""
        self.zoom -= angle_delta / _WHEEL_STEP
        self.zoom = min(max(self.zoom, _MIN_ZOOM), _MAX_ZOOM)
        self.needs_redraw = True

    def key_press(self, key: str) -> bool:
        """Handle a key by name; returns whether the viewport used it."""
        if key == "Escape":
            self.clear_polyline()
            return True
        return False

    def clear_polyline(self) -> None:
        self.polyline_points.clear()
        self.polyline_mesh.clear()
        self.needs_redraw = True


def _unproject(inverse: Mat4, ndc_x: float, ndc_y: float, ndc_z: float) -> Vec3:
    x, y, z, w = inverse.transform4(ndc_x, ndc_y, ndc_z, 1.0)
    return Vec3(x / w, y / w, z / w)