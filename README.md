# meshscene

A small geometry toolkit for building and inspecting 3D meshes, together
with the state model of an interactive scene: a camera you can orbit, pan
and zoom, and a polyline that grows as you click on the ground plane.

## Modules

### `meshscene.vecmath`

- `Vec3`: an immutable 3D vector with `+`, `-`, unary `-`, scalar `*` and
  `/`, iteration over `x, y, z`, and `length()`, `length_squared()`,
  `normalized()` (the zero vector stays zero), `is_null()`, `dot()` and
  `cross()`.
- `Mat4`: an immutable 4x4 matrix acting on column vectors. `translate`,
  `rotate` (angle in degrees about an axis), `scale`, `ortho` and
  `perspective` each return a new matrix multiplied on the right by that
  transform; degenerate `ortho`/`perspective` parameters leave the matrix
  unchanged. `map()` transforms a point (with division by `w`),
  `map_vector()` a direction, `transform4()` a homogeneous 4-tuple, and
  `inverted()` raises `ValueError` for a singular matrix. Matrices compose
  with `@`; `values` gives a copy of the entries.
- Helpers: `radians_to_degrees`, `degrees_to_radians`, `cross_product`,
  `dot_product`, `make_translation_matrix`, `make_rotation_matrix`,
  `make_scale_matrix`, `make_transform_matrix` (translate, then rotate,
  then scale), `make_orthographic_matrix`, `make_perspective_matrix`.

### `meshscene.mesh`

- `DrawPrimitiveType`: `POINTS`, `LINES`, `TRIANGLES`, `QUADS`.
- `MeshVertex`: position, normal, colour, texture coordinate, tangent and
  bitangent, all `Vec3`.
- `TriMesh`, `QuadMesh`, `LineMesh`: meshes holding `vertices`, `indices`,
  a `draw_type` and an `animation_step`. `TriMesh` accepts only
  `TRIANGLES` and raises `ValueError` otherwise. Every mesh offers
  `bounding_box()`, `clear()`, `has_valid_geometry()`, `is_closed()`,
  `dimension()` (0 when empty, 2 when all vertices lie on z = 0, else 3),
  `has_normals()`, `apply_transform(matrix)`, `sample_points(count)`
  (triangle centroids, quad centres or segment midpoints), and
  `to_json()` / `from_json(text)` for a round trip through JSON.
  Triangle and quad meshes transform normals too; line meshes transform
  positions only.

### `meshscene.builders`

- Triangle meshes: `build_tri_grid_mesh`, `build_tri_ground_plane_mesh`,
  `build_arrow_mesh` (a cone), `build_cube_mesh`, `build_sphere_mesh`.
- Quad meshes: `build_quad_grid_mesh`, `build_quad_ground_plane_mesh`,
  `build_z_facing_quad`, `build_cube_face_mesh`.
- Line meshes: `build_axis_lines` (red X, green Y, blue Z),
  `build_polyline_mesh`, `build_normal_lines` (one segment per vertex
  along its normal).

Grids need at least 2 rows and 2 columns and spheres at least one stack
and one slice; otherwise `ValueError` is raised.

### `meshscene.meshutils`

Functions returning new lists: `scale_points`, `translate_points`,
`merge_points`, `center_points` (bounding-box centre moved to the
origin), `remove_duplicate_points` (with a tolerance) and
`compute_normals` (vertex normals averaged from the unit normals of the
triangles that use each vertex).

### `meshscene.viewport`

`SceneViewport` holds a ground plane, coordinate axes and a clicked
polyline, plus camera state. `projection_matrix()`, `view_matrix()` and
`mvp()` give the matrices for drawing; `map_click_to_plane(x, y)` casts
a ray through a screen position onto z = 0 (NaNs when the ray is
parallel). Input is fed in through `mouse_press(x, y, button)` (a left
click adds a point and returns it), `mouse_move(x, y, buttons)` (middle
button orbits, right button pans), `wheel(angle_delta)` (120 units per
notch, distance kept within 2..100), `key_press(key)` (`"Escape"` clears
the polyline) and `clear_polyline()`. Buttons are `MouseButton` flags.
`needs_redraw` is set whenever the state changes.

## Examples

```python
from meshscene.builders import build_sphere_mesh

sphere = build_sphere_mesh(16, 32)
low, high = sphere.bounding_box()
print(sphere.dimension())           # 3
centres = sphere.sample_points(10)  # up to ten triangle centroids
```

```python
from meshscene.builders import build_cube_mesh
from meshscene.vecmath import Vec3, make_transform_matrix

cube = build_cube_mesh()
matrix = make_transform_matrix(Vec3(1, 0, 0), 45.0, Vec3(0, 0, 1), Vec3(2, 2, 2))
cube.apply_transform(matrix)
```

```python
from meshscene.meshutils import center_points, remove_duplicate_points
from meshscene.vecmath import Vec3

points = [Vec3(0, 0, 0), Vec3(2, 2, 2), Vec3(2, 2, 2)]
centred = center_points(remove_duplicate_points(points, 1e-5))
```

```python
from meshscene.viewport import MouseButton, SceneViewport

view = SceneViewport(800, 600)
point = view.mouse_press(400, 300, MouseButton.LEFT)  # adds a point on z = 0
view.wheel(120)                                       # zoom in one notch
view.key_press("Escape")                              # clear the polyline
```

## What it does not do

There is no window, no GPU rendering and no shaders. `SceneViewport`
keeps the scene and camera state and computes the matrices and picked
points; drawing the meshes and delivering mouse and keyboard events is
left to whatever display code you connect it to. There is no command-line
program.

## Running the tests

Install with the `test` extra and run `pytest`.