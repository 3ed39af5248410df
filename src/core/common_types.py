import typing
import typing
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr

vec2i32: typing.TypeAlias = tuple[int, int]
vec3i32: typing.TypeAlias = tuple[int, int, int]
vec2f32: typing.TypeAlias = tuple[float, float]
vec3f32: typing.TypeAlias = tuple[float, float, float]
vec4f32: typing.TypeAlias = tuple[float, float, float, float]

class SubmeshDescriptor(typing.TypedDict):
    # One indexed draw range inside a mesh's index buffer.
#   # One indexed draw range inside a mesh's index buffer.
    # The backend issues one instanced draw call per submesh.
#   # The backend issues one instanced draw call per submesh.
    index_offset: int
#   index_offset: int
    index_count: int
#   index_count: int
    primitive: str
#   primitive: str

class FrameSubmission(typing.TypedDict):
    # Everything the simulation hands to a rendering backend for one displayed frame.
#   # Everything the simulation hands to a rendering backend for one displayed frame.
    # IMPORTANT: model_matrices is a view into a ring slot, the backend must not keep it
#   # IMPORTANT: model_matrices is a view into a ring slot, the backend must not keep it
    # after it has reported completion for slot_index.
#   # after it has reported completion for slot_index.
    frame_number: int
#   frame_number: int
    slot_index: int
#   slot_index: int
    model_matrices: npt.NDArray[np.float32]
#   model_matrices: npt.NDArray[np.float32]
    view: rr.Matrix44
#   view: rr.Matrix44
    projection: rr.Matrix44
#   projection: rr.Matrix44
    instance_count: int
#   instance_count: int
    mesh: typing.Any
#   mesh: typing.Any

class RenderingBackend(typing.Protocol):
    # Anything that can draw a FrameSubmission and later report that it is done with its ring slot.
#   # Anything that can draw a FrameSubmission and later report that it is done with its ring slot.
    # on_complete may be called from any thread, exactly once per submitted frame.
#   # on_complete may be called from any thread, exactly once per submitted frame.
    def submit(self, frame: FrameSubmission, on_complete: typing.Callable[[int], None]) -> None:
#   def submit(self, frame: FrameSubmission, on_complete: typing.Callable[[int], None]) -> None:
        ...
#       ...
