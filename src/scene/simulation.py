import math
import math
import numpy as np
import numpy as np
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr
from src.core import linalg
from src.core import linalg
from src.core.common_types import vec2f32, vec3f32, FrameSubmission, RenderingBackend
from src.core.common_types import vec2f32, vec3f32, FrameSubmission, RenderingBackend
from src.core.errors import ConfigurationError
from src.core.errors import ConfigurationError
from src.renderer.frame_ring import FrameBufferRing, DEFAULT_RING_SIZE
from src.renderer.frame_ring import FrameBufferRing, DEFAULT_RING_SIZE
from src.scene.camera import Camera
from src.scene.camera import Camera
from src.scene.instances import InstanceStore, DEFAULT_ANGULAR_SPEED
from src.scene.instances import InstanceStore, DEFAULT_ANGULAR_SPEED
from src.scene.mesh import Mesh, create_cube
from src.scene.mesh import Mesh, create_cube
from src.scene.picking import BoundingSphere, Picker
from src.scene.picking import BoundingSphere, Picker
from src.scene.transform_updater import TransformUpdater
from src.scene.transform_updater import TransformUpdater

class SceneSimulation:
    # Per-frame driver: acquire a ring slot -> advance instances into it -> refresh the camera -> hand the
#   # Per-frame driver: acquire a ring slot -> advance instances into it -> refresh the camera -> hand the
    # frame to a backend, which releases the slot when it is done. Single-threaded apart from that release.
#   # frame to a backend, which releases the slot when it is done. Single-threaded apart from that release.
    def __init__(
#   def __init__(
        self,
#       self,
        store: InstanceStore,
#       store: InstanceStore,
        camera: Camera,
#       camera: Camera,
        mesh: Mesh,
#       mesh: Mesh,
        ring_size: int = DEFAULT_RING_SIZE,
#       ring_size: int = DEFAULT_RING_SIZE,
        viewport_size: vec2f32 = (800, 600),
#       viewport_size: vec2f32 = (800, 600),
        flip_y: bool = False,
#       flip_y: bool = False,
    ) -> None:
#   ) -> None:
        self.store: InstanceStore = store
#       self.store: InstanceStore = store
        self.camera: Camera = camera
#       self.camera: Camera = camera
        self.mesh: Mesh = mesh
#       self.mesh: Mesh = mesh
        self.viewport_size: vec2f32 = viewport_size
#       self.viewport_size: vec2f32 = viewport_size
        self.set_viewport(*viewport_size)
#       self.set_viewport(*viewport_size)

        self.updater: TransformUpdater = TransformUpdater(store)
#       self.updater: TransformUpdater = TransformUpdater(store)
        self.ring: FrameBufferRing = FrameBufferRing(instance_count=len(store), size=ring_size)
#       self.ring: FrameBufferRing = FrameBufferRing(instance_count=len(store), size=ring_size)

        # Derived once per mesh.
#       # Derived once per mesh.
        min_bounds, max_bounds = mesh.bounding_box()
#       min_bounds, max_bounds = mesh.bounding_box()
        self.bounding_sphere: BoundingSphere = BoundingSphere.from_bounding_box(min_bounds, max_bounds)
#       self.bounding_sphere: BoundingSphere = BoundingSphere.from_bounding_box(min_bounds, max_bounds)
        self.picker: Picker = Picker(self.bounding_sphere, flip_y=flip_y)
#       self.picker: Picker = Picker(self.bounding_sphere, flip_y=flip_y)

        self.frame_number: int = 0
#       self.frame_number: int = 0
        self.view_matrix: rr.Matrix44 = camera.get_view_matrix()
#       self.view_matrix: rr.Matrix44 = camera.get_view_matrix()
        self.projection_matrix: rr.Matrix44 = camera.get_projection_matrix()
#       self.projection_matrix: rr.Matrix44 = camera.get_projection_matrix()
        pass
#       pass

    @classmethod
#   @classmethod
    def create(
#   def create(
        cls,
#       cls,
        instance_count: int = 1,
#       instance_count: int = 1,
        seed: np.random.Generator | int | None = None,
#       seed: np.random.Generator | int | None = None,
        ring_size: int = DEFAULT_RING_SIZE,
#       ring_size: int = DEFAULT_RING_SIZE,
        viewport_size: vec2f32 = (800, 600),
#       viewport_size: vec2f32 = (800, 600),
        eye_position: vec3f32 = (0.0, 0.0, 5.0),
#       eye_position: vec3f32 = (0.0, 0.0, 5.0),
        fov: float = math.pi / 2.0,
#       fov: float = math.pi / 2.0,
        near: float = 0.1,
#       near: float = 0.1,
        far: float = 100.0,
#       far: float = 100.0,
        orbit_speed: float = 0.0,
#       orbit_speed: float = 0.0,
        angular_speed: float = DEFAULT_ANGULAR_SPEED,
#       angular_speed: float = DEFAULT_ANGULAR_SPEED,
        zero_to_one: bool = True,
#       zero_to_one: bool = True,
        flip_y: bool = False,
#       flip_y: bool = False,
        mesh: Mesh | None = None,
#       mesh: Mesh | None = None,
    ) -> "SceneSimulation":
#   ) -> "SceneSimulation":
        # Reference scene: random cubes in [-3.5, 3.5]^3 spinning at 3 rad/s, seen from (0, 0, 5).
#       # Reference scene: random cubes in [-3.5, 3.5]^3 spinning at 3 rad/s, seen from (0, 0, 5).
        width, height = viewport_size
#       width, height = viewport_size
        if width <= 0 or height <= 0:
#       if width <= 0 or height <= 0:
            raise ConfigurationError(f"Viewport must have a positive size, got {width}x{height}")
#           raise ConfigurationError(f"Viewport must have a positive size, got {width}x{height}")
        store: InstanceStore = InstanceStore.random(count=instance_count, rng=seed, angular_speed=angular_speed)
#       store: InstanceStore = InstanceStore.random(count=instance_count, rng=seed, angular_speed=angular_speed)
        camera: Camera = Camera(
#       camera: Camera = Camera(
            position=eye_position,
#           position=eye_position,
            look_at=(0.0, 0.0, 0.0),
#           look_at=(0.0, 0.0, 0.0),
            up=(0.0, 1.0, 0.0),
#           up=(0.0, 1.0, 0.0),
            aspect_ratio=width / height,
#           aspect_ratio=width / height,
            fov=fov,
#           fov=fov,
            near=near,
#           near=near,
            far=far,
#           far=far,
            orbit_speed=orbit_speed,
#           orbit_speed=orbit_speed,
            zero_to_one=zero_to_one,
#           zero_to_one=zero_to_one,
        )
#       )
        return cls(
#       return cls(
            store=store,
#           store=store,
            camera=camera,
#           camera=camera,
            mesh=mesh if mesh is not None else create_cube(),
#           mesh=mesh if mesh is not None else create_cube(),
            ring_size=ring_size,
#           ring_size=ring_size,
            viewport_size=viewport_size,
#           viewport_size=viewport_size,
            flip_y=flip_y,
#           flip_y=flip_y,
        )
#       )

    def set_viewport(self, width: float, height: float) -> None:
#   def set_viewport(self, width: float, height: float) -> None:
        self.camera.set_viewport(width, height)
#       self.camera.set_viewport(width, height)
        self.camera.validate()
#       self.camera.validate()
        self.viewport_size = (width, height)
#       self.viewport_size = (width, height)
        pass
#       pass

    def produce_frame(self, delta_time: float) -> FrameSubmission:
#   def produce_frame(self, delta_time: float) -> FrameSubmission:
        # Blocks here while every ring slot is still with the backend.
#       # Blocks here while every ring slot is still with the backend.
        slot_index: int = self.ring.acquire_next_slot()
#       slot_index: int = self.ring.acquire_next_slot()
        try:
#       try:
            self.updater.update(delta_time, self.ring.slot(slot_index))
#           self.updater.update(delta_time, self.ring.slot(slot_index))
            self.camera.update(delta_time)
#           self.camera.update(delta_time)
        except Exception:
#       except Exception:
            # Nothing will be submitted for this slot, give it straight back.
#           # Nothing will be submitted for this slot, give it straight back.
            self.ring.release(slot_index)
#           self.ring.release(slot_index)
            raise
#           raise

        self.view_matrix = self.camera.get_view_matrix()
#       self.view_matrix = self.camera.get_view_matrix()
        self.projection_matrix = self.camera.get_projection_matrix()
#       self.projection_matrix = self.camera.get_projection_matrix()
        self.frame_number += 1
#       self.frame_number += 1
        return FrameSubmission(
#       return FrameSubmission(
            frame_number=self.frame_number,
#           frame_number=self.frame_number,
            slot_index=slot_index,
#           slot_index=slot_index,
            model_matrices=self.ring.slot(slot_index)[: len(self.store)],
#           model_matrices=self.ring.slot(slot_index)[: len(self.store)],
            view=self.view_matrix,
#           view=self.view_matrix,
            projection=self.projection_matrix,
#           projection=self.projection_matrix,
            instance_count=len(self.store),
#           instance_count=len(self.store),
            mesh=self.mesh,
#           mesh=self.mesh,
        )
#       )

    def complete_frame(self, slot_index: int) -> None:
#   def complete_frame(self, slot_index: int) -> None:
        self.ring.release(slot_index)
#       self.ring.release(slot_index)
        pass
#       pass

    def step(self, delta_time: float, backend: RenderingBackend) -> FrameSubmission:
#   def step(self, delta_time: float, backend: RenderingBackend) -> FrameSubmission:
        frame: FrameSubmission = self.produce_frame(delta_time)
#       frame: FrameSubmission = self.produce_frame(delta_time)
        backend.submit(frame, self.complete_frame)
#       backend.submit(frame, self.complete_frame)
        return frame
#       return frame

    def pick(self, window_coordinate: vec2f32) -> int | None:
#   def pick(self, window_coordinate: vec2f32) -> int | None:
        # Synchronous, reads the live camera and instance state, never waits on the ring.
#       # Synchronous, reads the live camera and instance state, never waits on the ring.
        return self.picker.pick(window_coordinate, self.viewport_size, self.camera, self.store)
#       return self.picker.pick(window_coordinate, self.viewport_size, self.camera, self.store)

    def view_projection(self) -> rr.Matrix44:
#   def view_projection(self) -> rr.Matrix44:
        return linalg.multiply(self.projection_matrix, self.view_matrix)
#       return linalg.multiply(self.projection_matrix, self.view_matrix)
