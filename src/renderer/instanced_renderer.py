import argparse
import argparse
import moderngl as mgl
import moderngl as mgl
import moderngl_window as mglw
import moderngl_window as mglw
from moderngl_window.context.base import KeyModifiers
from moderngl_window.context.base import KeyModifiers
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pathlib as pl
import pathlib as pl
import typing
import typing
from src.core.common_types import vec2i32, vec4f32, FrameSubmission
from src.core.common_types import vec2i32, vec4f32, FrameSubmission
from src.renderer.frame_ring import DEFAULT_RING_SIZE
from src.renderer.frame_ring import DEFAULT_RING_SIZE
from src.renderer.shader_compiler import load_shader_source
from src.renderer.shader_compiler import load_shader_source
from src.scene.mesh import Mesh, VERTEX_FORMAT, VERTEX_ATTRIBUTES
from src.scene.mesh import Mesh, VERTEX_FORMAT, VERTEX_ATTRIBUTES
from src.scene.simulation import SceneSimulation
from src.scene.simulation import SceneSimulation

class InstancedSceneRenderer(mglw.WindowConfig): # type: ignore[name-defined, misc]
    # OpenGL rendering backend for the scene simulation.
#   # OpenGL rendering backend for the scene simulation.
    # Frame flow:
#   # Frame flow:
    # 1. Release the slot drawn last frame (it has been swapped to the screen since).
#   # 1. Release the slot drawn last frame (it has been swapped to the screen since).
    # 2. Let the simulation acquire the next slot and write this frame's model matrices into it.
#   # 2. Let the simulation acquire the next slot and write this frame's model matrices into it.
    # 3. Upload that slot into its own instance buffer and draw every submesh instanced.
#   # 3. Upload that slot into its own instance buffer and draw every submesh instanced.
    # Each ring slot owns a GPU instance buffer + VAO, so a buffer is never rewritten while it is in flight.
#   # Each ring slot owns a GPU instance buffer + VAO, so a buffer is never rewritten while it is in flight.
    gl_version: vec2i32 = (3, 3)
#   gl_version: vec2i32 = (3, 3)
    title: str = "Instanced Scene: Triple-Buffered Transforms + Ray Picking"
#   title: str = "Instanced Scene: Triple-Buffered Transforms + Ray Picking"
    window_size: vec2i32 = (800, 600)
#   window_size: vec2i32 = (800, 600)
    aspect_ratio: float | None = None
#   aspect_ratio: float | None = None
    resizable: bool = True
#   resizable: bool = True
    resource_dir: pl.Path = (pl.Path(__file__).parent.parent.parent / "shaders").resolve(strict=False)
#   resource_dir: pl.Path = (pl.Path(__file__).parent.parent.parent / "shaders").resolve(strict=False)

    clear_color: vec4f32 = (0.0, 0.5, 1.0, 1.0)
#   clear_color: vec4f32 = (0.0, 0.5, 1.0, 1.0)
    instance_count: int = 5
#   instance_count: int = 5
    ring_size: int = DEFAULT_RING_SIZE
#   ring_size: int = DEFAULT_RING_SIZE
    orbit_speed: float = 0.0
#   orbit_speed: float = 0.0

    @classmethod
#   @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
#   def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--instances", type=int, default=cls.instance_count, help="Number of instances in the scene")
#       parser.add_argument("--instances", type=int, default=cls.instance_count, help="Number of instances in the scene")
        parser.add_argument("--seed", type=int, default=None, help="Seed for the initial instance placement")
#       parser.add_argument("--seed", type=int, default=None, help="Seed for the initial instance placement")
        parser.add_argument("--ring-size", type=int, default=cls.ring_size, help="Frames the CPU may run ahead of the GPU")
#       parser.add_argument("--ring-size", type=int, default=cls.ring_size, help="Frames the CPU may run ahead of the GPU")
        parser.add_argument("--orbit-speed", type=float, default=cls.orbit_speed, help="Camera orbit speed in radians per second")
#       parser.add_argument("--orbit-speed", type=float, default=cls.orbit_speed, help="Camera orbit speed in radians per second")
        pass
#       pass

    def __init__(self, **kwargs: dict[str, typing.Any]) -> None:
#   def __init__(self, **kwargs: dict[str, typing.Any]) -> None:
        super().__init__(**kwargs)
#       super().__init__(**kwargs)

        # -----------------------------
#       # -----------------------------
        # 1. Scene
#       # 1. Scene
        # -----------------------------
#       # -----------------------------
        # argv is only set when launched through mglw.run_window_config, otherwise use the class defaults.
#       # argv is only set when launched through mglw.run_window_config, otherwise use the class defaults.
        args: argparse.Namespace | None = self.argv
#       args: argparse.Namespace | None = self.argv
        width, height = self.wnd.size
#       width, height = self.wnd.size
        self.simulation: SceneSimulation = SceneSimulation.create(
#       self.simulation: SceneSimulation = SceneSimulation.create(
            instance_count=getattr(args, "instances", self.instance_count),
#           instance_count=getattr(args, "instances", self.instance_count),
            seed=getattr(args, "seed", None),
#           seed=getattr(args, "seed", None),
            ring_size=getattr(args, "ring_size", self.ring_size),
#           ring_size=getattr(args, "ring_size", self.ring_size),
            viewport_size=(width, height),
#           viewport_size=(width, height),
            orbit_speed=getattr(args, "orbit_speed", self.orbit_speed),
#           orbit_speed=getattr(args, "orbit_speed", self.orbit_speed),
            # OpenGL clips depth to [-1, 1]; window Y grows downwards.
#           # OpenGL clips depth to [-1, 1]; window Y grows downwards.
            zero_to_one=False,
#           zero_to_one=False,
            flip_y=True,
#           flip_y=True,
        )
#       )
        self.picked_instance: int = -1
#       self.picked_instance: int = -1
        self.pending_completion: tuple[int, typing.Callable[[int], None]] | None = None
#       self.pending_completion: tuple[int, typing.Callable[[int], None]] | None = None

        # -----------------------------
#       # -----------------------------
        # 2. Shader Program
#       # 2. Shader Program
        # -----------------------------
#       # -----------------------------
        self.program_instanced: mgl.Program = self.ctx.program(
#       self.program_instanced: mgl.Program = self.ctx.program(
              vertex_shader=load_shader_source(self.resource_dir / "instanced_vs.glsl"),
#             vertex_shader=load_shader_source(self.resource_dir / "instanced_vs.glsl"),
            fragment_shader=load_shader_source(self.resource_dir / "instanced_fs.glsl"),
#           fragment_shader=load_shader_source(self.resource_dir / "instanced_fs.glsl"),
        )
#       )

        # -----------------------------
#       # -----------------------------
        # 3. Mesh + Per-Slot Instance Buffers
#       # 3. Mesh + Per-Slot Instance Buffers
        # -----------------------------
#       # -----------------------------
        mesh: Mesh = self.simulation.mesh
#       mesh: Mesh = self.simulation.mesh
        self.vbo_mesh: mgl.Buffer = self.ctx.buffer(mesh.vertices.tobytes())
#       self.vbo_mesh: mgl.Buffer = self.ctx.buffer(mesh.vertices.tobytes())
        self.ibo_mesh: mgl.Buffer = self.ctx.buffer(mesh.indices.tobytes())
#       self.ibo_mesh: mgl.Buffer = self.ctx.buffer(mesh.indices.tobytes())

        matrix_bytes_per_slot: int = len(self.simulation.store) * 16 * 4
#       matrix_bytes_per_slot: int = len(self.simulation.store) * 16 * 4
        self.instance_buffers: list[mgl.Buffer] = []
#       self.instance_buffers: list[mgl.Buffer] = []
        self.vaos: list[mgl.VertexArray] = []
#       self.vaos: list[mgl.VertexArray] = []
        for _ in range(self.simulation.ring.size):
#       for _ in range(self.simulation.ring.size):
            vbo_instances: mgl.Buffer = self.ctx.buffer(reserve=matrix_bytes_per_slot, dynamic=True)
#           vbo_instances: mgl.Buffer = self.ctx.buffer(reserve=matrix_bytes_per_slot, dynamic=True)
            vao: mgl.VertexArray = self.ctx.vertex_array(
#           vao: mgl.VertexArray = self.ctx.vertex_array(
                self.program_instanced,
#               self.program_instanced,
                [
#               [
                    (self.vbo_mesh, VERTEX_FORMAT, *VERTEX_ATTRIBUTES),
#                   (self.vbo_mesh, VERTEX_FORMAT, *VERTEX_ATTRIBUTES),
                    (vbo_instances, "16f/i", "inInstanceTransformModel"),
#                   (vbo_instances, "16f/i", "inInstanceTransformModel"),
                ],
#               ],
                index_buffer=self.ibo_mesh,
#               index_buffer=self.ibo_mesh,
                index_element_size=4,
#               index_element_size=4,
            )
#           )
            self.instance_buffers.append(vbo_instances)
#           self.instance_buffers.append(vbo_instances)
            self.vaos.append(vao)
#           self.vaos.append(vao)

        # Depth test keeps the nearer fragment (lower depth), matching the projection's depth mapping.
#       # Depth test keeps the nearer fragment (lower depth), matching the projection's depth mapping.
        self.ctx.enable(mgl.DEPTH_TEST | mgl.CULL_FACE)
#       self.ctx.enable(mgl.DEPTH_TEST | mgl.CULL_FACE)
        self.ctx.depth_func = "<"
#       self.ctx.depth_func = "<"
        print(f"[INIT] {len(self.simulation.store)} instances, {self.simulation.ring.size} frame slots, {self.simulation.bounding_sphere}")
#       print(f"[INIT] {len(self.simulation.store)} instances, {self.simulation.ring.size} frame slots, {self.simulation.bounding_sphere}")
        pass
#       pass

    def submit(self, frame: FrameSubmission, on_complete: typing.Callable[[int], None]) -> None:
#   def submit(self, frame: FrameSubmission, on_complete: typing.Callable[[int], None]) -> None:
        slot_index: int = frame["slot_index"]
#       slot_index: int = frame["slot_index"]
        model_matrices: npt.NDArray[np.float32] = np.ascontiguousarray(frame["model_matrices"], dtype=np.float32)
#       model_matrices: npt.NDArray[np.float32] = np.ascontiguousarray(frame["model_matrices"], dtype=np.float32)
        self.instance_buffers[slot_index].write(model_matrices.tobytes())
#       self.instance_buffers[slot_index].write(model_matrices.tobytes())

        view_projection: npt.NDArray[np.float32] = np.asarray(self.simulation.view_projection(), dtype=np.float32)
#       view_projection: npt.NDArray[np.float32] = np.asarray(self.simulation.view_projection(), dtype=np.float32)
        self.program_instanced["uViewProjection"].write(view_projection.tobytes())
#       self.program_instanced["uViewProjection"].write(view_projection.tobytes())
        self.program_instanced["uPickedInstance"].value = self.picked_instance
#       self.program_instanced["uPickedInstance"].value = self.picked_instance

        self.ctx.clear(*self.clear_color, depth=1.0)
#       self.ctx.clear(*self.clear_color, depth=1.0)
        mesh: Mesh = frame["mesh"]
#       mesh: Mesh = frame["mesh"]
        for submesh in mesh.submeshes:
#       for submesh in mesh.submeshes:
            self.vaos[slot_index].render(
#           self.vaos[slot_index].render(
                mode=mgl.TRIANGLES,
#               mode=mgl.TRIANGLES,
                vertices=submesh["index_count"],
#               vertices=submesh["index_count"],
                first=submesh["index_offset"],
#               first=submesh["index_offset"],
                instances=frame["instance_count"],
#               instances=frame["instance_count"],
            )
#           )

        # Completion is reported once this frame has been presented, i.e. at the start of the next one.
#       # Completion is reported once this frame has been presented, i.e. at the start of the next one.
        self.pending_completion = (slot_index, on_complete)
#       self.pending_completion = (slot_index, on_complete)
        pass
#       pass

    def complete_pending_frame(self) -> None:
#   def complete_pending_frame(self) -> None:
        if self.pending_completion is None:
#       if self.pending_completion is None:
            return
#           return
        slot_index, on_complete = self.pending_completion
#       slot_index, on_complete = self.pending_completion
        self.pending_completion = None
#       self.pending_completion = None
        on_complete(slot_index)
#       on_complete(slot_index)
        pass
#       pass

    def on_render(self, time: float, frame_time: float) -> None:
#   def on_render(self, time: float, frame_time: float) -> None:
        self.complete_pending_frame()
#       self.complete_pending_frame()
        self.simulation.step(max(frame_time, 0.0), self)
#       self.simulation.step(max(frame_time, 0.0), self)
        pass
#       pass

    def on_resize(self, width: int, height: int) -> None:
#   def on_resize(self, width: int, height: int) -> None:
        if width > 0 and height > 0:
#       if width > 0 and height > 0:
            self.simulation.set_viewport(width, height)
#           self.simulation.set_viewport(width, height)
        pass
#       pass

    def on_mouse_press_event(self, x: int, y: int, button: int) -> None:
#   def on_mouse_press_event(self, x: int, y: int, button: int) -> None:
        hit: int | None = self.simulation.pick((float(x), float(y)))
#       hit: int | None = self.simulation.pick((float(x), float(y)))
        self.picked_instance = hit if hit is not None else -1
#       self.picked_instance = hit if hit is not None else -1
        if hit is None:
#       if hit is None:
            print(f"[PICK] ({x}, {y}) -> miss")
#           print(f"[PICK] ({x}, {y}) -> miss")
        else:
#       else:
            print(f"[PICK] ({x}, {y}) -> instance {hit} {self.simulation.store[hit]}")
#           print(f"[PICK] ({x}, {y}) -> instance {hit} {self.simulation.store[hit]}")
        pass
#       pass

    def on_key_event(self, key: typing.Any, action: typing.Any, modifiers: KeyModifiers) -> None:
#   def on_key_event(self, key: typing.Any, action: typing.Any, modifiers: KeyModifiers) -> None:
        if action == self.wnd.keys.ACTION_PRESS:
#       if action == self.wnd.keys.ACTION_PRESS:
            if key == self.wnd.keys.C:
#           if key == self.wnd.keys.C:
                self.picked_instance = -1
#               self.picked_instance = -1
            pass
#           pass
        pass
#       pass

    def on_close(self) -> None:
#   def on_close(self) -> None:
        print(f"[CLOSE] frames: {self.simulation.frame_number}")
#       print(f"[CLOSE] frames: {self.simulation.frame_number}")
        self.complete_pending_frame()
#       self.complete_pending_frame()
        self.simulation.ring.wait_until_idle()
#       self.simulation.ring.wait_until_idle()
        pass
#       pass
