import numpy as np
import numpy as np
import pytest
import pytest
from src.scene.mesh import FLOATS_PER_VERTEX, Mesh, create_cube, face
from src.scene.mesh import FLOATS_PER_VERTEX, Mesh, create_cube, face
from tests._utils.arrays import assert_close
from tests._utils.arrays import assert_close

class TestCube:
    def test_counts(self):
#   def test_counts(self):
        cube = create_cube()
#       cube = create_cube()
        assert cube.vertex_count == 24
#       assert cube.vertex_count == 24
        assert cube.index_count == 36
#       assert cube.index_count == 36
        assert cube.vertices.shape == (24, FLOATS_PER_VERTEX)
#       assert cube.vertices.shape == (24, FLOATS_PER_VERTEX)
        assert cube.submeshes == [{"index_offset": 0, "index_count": 36, "primitive": "triangles"}]
#       assert cube.submeshes == [{"index_offset": 0, "index_count": 36, "primitive": "triangles"}]

    def test_bounds(self):
#   def test_bounds(self):
        min_bounds, max_bounds = create_cube(size=2.0).bounding_box()
#       min_bounds, max_bounds = create_cube(size=2.0).bounding_box()
        assert_close(min_bounds, (-1.0, -1.0, -1.0))
#       assert_close(min_bounds, (-1.0, -1.0, -1.0))
        assert_close(max_bounds, (1.0, 1.0, 1.0))
#       assert_close(max_bounds, (1.0, 1.0, 1.0))

    def test_offset_center(self):
#   def test_offset_center(self):
        min_bounds, max_bounds = create_cube(size=1.0, center=(2.0, 0.0, -1.0)).bounding_box()
#       min_bounds, max_bounds = create_cube(size=1.0, center=(2.0, 0.0, -1.0)).bounding_box()
        assert_close(min_bounds, (1.5, -0.5, -1.5))
#       assert_close(min_bounds, (1.5, -0.5, -1.5))
        assert_close(max_bounds, (2.5, 0.5, -0.5))
#       assert_close(max_bounds, (2.5, 0.5, -0.5))

    def test_triangles_wind_counter_clockwise_outward(self):
#   def test_triangles_wind_counter_clockwise_outward(self):
        cube = create_cube()
#       cube = create_cube()
        for triangle in cube.indices.reshape(-1, 3):
#       for triangle in cube.indices.reshape(-1, 3):
            v0, v1, v2 = (cube.vertices[i, 0:3] for i in triangle)
#           v0, v1, v2 = (cube.vertices[i, 0:3] for i in triangle)
            normal = cube.vertices[triangle[0], 3:6]
#           normal = cube.vertices[triangle[0], 3:6]
            assert np.dot(np.cross(v1 - v0, v2 - v0), normal) > 0.0
#           assert np.dot(np.cross(v1 - v0, v2 - v0), normal) > 0.0

    def test_bounding_box_is_a_copy(self):
#   def test_bounding_box_is_a_copy(self):
        cube = create_cube()
#       cube = create_cube()
        min_bounds, _ = cube.bounding_box()
#       min_bounds, _ = cube.bounding_box()
        min_bounds[0] = 10.0
#       min_bounds[0] = 10.0
        assert cube.min_bounds[0] == pytest.approx(-0.5)
#       assert cube.min_bounds[0] == pytest.approx(-0.5)

class TestMeshValidation:
    def test_empty_vertices(self):
#   def test_empty_vertices(self):
        with pytest.raises(ValueError):
#       with pytest.raises(ValueError):
            Mesh(vertices=np.zeros((0, FLOATS_PER_VERTEX)), indices=np.zeros(0))
#           Mesh(vertices=np.zeros((0, FLOATS_PER_VERTEX)), indices=np.zeros(0))

    def test_partial_triangle(self):
#   def test_partial_triangle(self):
        quad = face((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0, 0, 1))
#       quad = face((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0, 0, 1))
        with pytest.raises(ValueError):
#       with pytest.raises(ValueError):
            Mesh(vertices=quad, indices=np.array([0, 1]))
#           Mesh(vertices=quad, indices=np.array([0, 1]))

    def test_index_out_of_range(self):
#   def test_index_out_of_range(self):
        quad = face((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0, 0, 1))
#       quad = face((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0, 0, 1))
        with pytest.raises(ValueError):
#       with pytest.raises(ValueError):
            Mesh(vertices=quad, indices=np.array([0, 1, 4]))
#           Mesh(vertices=quad, indices=np.array([0, 1, 4]))
