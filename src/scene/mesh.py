import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
from src.core.common_types import vec3f32, SubmeshDescriptor
from src.core.common_types import vec3f32, SubmeshDescriptor

# Interleaved vertex layout shared with the instanced vertex shader: position (3f) + normal (3f).
VERTEX_FORMAT: str = "3f 3f"
VERTEX_ATTRIBUTES: tuple[str, str] = ("inVertexLocalPosition", "inVertexLocalNormal")
FLOATS_PER_VERTEX: int = 6

class Mesh:
    """
    CPU-side indexed triangle mesh handed to the rendering backend.
#   CPU-side indexed triangle mesh handed to the rendering backend.
    The simulation only ever reads its axis-aligned bounding box (to derive the picking sphere),
#   The simulation only ever reads its axis-aligned bounding box (to derive the picking sphere),
    the vertex/index/submesh data is opaque to it.
#   the vertex/index/submesh data is opaque to it.
    """
    def __init__(self, vertices: npt.NDArray[np.float32], indices: npt.NDArray[np.uint32], submeshes: list[SubmeshDescriptor] | None = None) -> None:
#   def __init__(self, vertices: npt.NDArray[np.float32], indices: npt.NDArray[np.uint32], submeshes: list[SubmeshDescriptor] | None = None) -> None:
        self.vertices: npt.NDArray[np.float32] = np.ascontiguousarray(vertices, dtype=np.float32).reshape(-1, FLOATS_PER_VERTEX)
#       self.vertices: npt.NDArray[np.float32] = np.ascontiguousarray(vertices, dtype=np.float32).reshape(-1, FLOATS_PER_VERTEX)
        self.indices: npt.NDArray[np.uint32] = np.ascontiguousarray(indices, dtype=np.uint32).reshape(-1)
#       self.indices: npt.NDArray[np.uint32] = np.ascontiguousarray(indices, dtype=np.uint32).reshape(-1)
        if len(self.vertices) == 0:
#       if len(self.vertices) == 0:
            raise ValueError("Mesh has no vertices")
#           raise ValueError("Mesh has no vertices")
        if len(self.indices) % 3 != 0:
#       if len(self.indices) % 3 != 0:
            raise ValueError(f"Index count {len(self.indices)} is not a multiple of 3")
#           raise ValueError(f"Index count {len(self.indices)} is not a multiple of 3")
        if len(self.indices) and int(self.indices.max()) >= len(self.vertices):
#       if len(self.indices) and int(self.indices.max()) >= len(self.vertices):
            raise ValueError("Mesh index refers past the end of the vertex buffer")
#           raise ValueError("Mesh index refers past the end of the vertex buffer")

        self.submeshes: list[SubmeshDescriptor] = submeshes if submeshes is not None else [
#       self.submeshes: list[SubmeshDescriptor] = submeshes if submeshes is not None else [
            SubmeshDescriptor(index_offset=0, index_count=len(self.indices), primitive="triangles"),
#           SubmeshDescriptor(index_offset=0, index_count=len(self.indices), primitive="triangles"),
        ]
#       ]

        positions: npt.NDArray[np.float32] = self.vertices[:, 0:3]
#       positions: npt.NDArray[np.float32] = self.vertices[:, 0:3]
        self.min_bounds: npt.NDArray[np.float32] = positions.min(axis=0)
#       self.min_bounds: npt.NDArray[np.float32] = positions.min(axis=0)
        self.max_bounds: npt.NDArray[np.float32] = positions.max(axis=0)
#       self.max_bounds: npt.NDArray[np.float32] = positions.max(axis=0)
        pass
#       pass

    @property
#   @property
    def vertex_count(self) -> int:
#   def vertex_count(self) -> int:
        return len(self.vertices)
#       return len(self.vertices)

    @property
#   @property
    def index_count(self) -> int:
#   def index_count(self) -> int:
        return len(self.indices)
#       return len(self.indices)

    def bounding_box(self) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.float32]]:
#   def bounding_box(self) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.float32]]:
        return self.min_bounds.copy(), self.max_bounds.copy()
#       return self.min_bounds.copy(), self.max_bounds.copy()

def face(vertex0: vec3f32, vertex1: vec3f32, vertex2: vec3f32, vertex3: vec3f32, face_normal: vec3f32) -> npt.NDArray[np.float32]:
    # Four corners of a quad sharing one flat normal, counter-clockwise seen from the normal side.
#   # Four corners of a quad sharing one flat normal, counter-clockwise seen from the normal side.
    return np.array([
#   return np.array([
        [*vertex0, *face_normal],
#       [*vertex0, *face_normal],
        [*vertex1, *face_normal],
#       [*vertex1, *face_normal],
        [*vertex2, *face_normal],
#       [*vertex2, *face_normal],
        [*vertex3, *face_normal],
#       [*vertex3, *face_normal],
    ], dtype=np.float32)
#   ], dtype=np.float32)

def create_cube(size: float = 1.0, center: vec3f32 = (0.0, 0.0, 0.0)) -> Mesh:
    # Axis-aligned cube with flat-shaded faces (24 vertices, 12 triangles).
#   # Axis-aligned cube with flat-shaded faces (24 vertices, 12 triangles).
    # Stands in for a loaded model: asset loading lives outside the simulator.
#   # Stands in for a loaded model: asset loading lives outside the simulator.
    h: float = size / 2.0
#   h: float = size / 2.0
    cx, cy, cz = center
#   cx, cy, cz = center

    def corner(x: float, y: float, z: float) -> vec3f32:
#   def corner(x: float, y: float, z: float) -> vec3f32:
        return (cx + x * h, cy + y * h, cz + z * h)
#       return (cx + x * h, cy + y * h, cz + z * h)

    faces: list[npt.NDArray[np.float32]] = [
#   faces: list[npt.NDArray[np.float32]] = [
        face(corner(-1, -1,  1), corner( 1, -1,  1), corner( 1,  1,  1), corner(-1,  1,  1), ( 0.0,  0.0,  1.0)), # Front
#       face(corner(-1, -1,  1), corner( 1, -1,  1), corner( 1,  1,  1), corner(-1,  1,  1), ( 0.0,  0.0,  1.0)), # Front
        face(corner( 1, -1, -1), corner(-1, -1, -1), corner(-1,  1, -1), corner( 1,  1, -1), ( 0.0,  0.0, -1.0)), # Back
#       face(corner( 1, -1, -1), corner(-1, -1, -1), corner(-1,  1, -1), corner( 1,  1, -1), ( 0.0,  0.0, -1.0)), # Back
        face(corner(-1,  1,  1), corner( 1,  1,  1), corner( 1,  1, -1), corner(-1,  1, -1), ( 0.0,  1.0,  0.0)), # Top
#       face(corner(-1,  1,  1), corner( 1,  1,  1), corner( 1,  1, -1), corner(-1,  1, -1), ( 0.0,  1.0,  0.0)), # Top
        face(corner(-1, -1, -1), corner( 1, -1, -1), corner( 1, -1,  1), corner(-1, -1,  1), ( 0.0, -1.0,  0.0)), # Bottom
#       face(corner(-1, -1, -1), corner( 1, -1, -1), corner( 1, -1,  1), corner(-1, -1,  1), ( 0.0, -1.0,  0.0)), # Bottom
        face(corner( 1, -1,  1), corner( 1, -1, -1), corner( 1,  1, -1), corner( 1,  1,  1), ( 1.0,  0.0,  0.0)), # Right
#       face(corner( 1, -1,  1), corner( 1, -1, -1), corner( 1,  1, -1), corner( 1,  1,  1), ( 1.0,  0.0,  0.0)), # Right
        face(corner(-1, -1, -1), corner(-1, -1,  1), corner(-1,  1,  1), corner(-1,  1, -1), (-1.0,  0.0,  0.0)), # Left
#       face(corner(-1, -1, -1), corner(-1, -1,  1), corner(-1,  1,  1), corner(-1,  1, -1), (-1.0,  0.0,  0.0)), # Left
    ]
#   ]

    indices: list[int] = []
#   indices: list[int] = []
    for face_index in range(len(faces)):
#   for face_index in range(len(faces)):
        base: int = face_index * 4
#       base: int = face_index * 4
        # Two triangles per quad: (0, 1, 2) and (2, 3, 0)
#       # Two triangles per quad: (0, 1, 2) and (2, 3, 0)
        indices.extend([base + 0, base + 1, base + 2, base + 2, base + 3, base + 0])
#       indices.extend([base + 0, base + 1, base + 2, base + 2, base + 3, base + 0])

    return Mesh(
#   return Mesh(
        vertices=np.concatenate(faces),
#       vertices=np.concatenate(faces),
        indices=np.array(indices, dtype=np.uint32),
#       indices=np.array(indices, dtype=np.uint32),
    )
#   )
