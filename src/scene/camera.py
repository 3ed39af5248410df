import math
import math
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr
from src.core import linalg
from src.core import linalg
from src.core.common_types import vec3f32
from src.core.common_types import vec3f32
from src.core.errors import ConfigurationError
from src.core.errors import ConfigurationError

class Camera:
    # A fixed or orbiting camera that owns the state for rasterization (View/Projection matrices)
#   # A fixed or orbiting camera that owns the state for rasterization (View/Projection matrices)
    # and for picking (the eye position rays start from).
#   # and for picking (the eye position rays start from).
    # Uses a Right-Handed Coordinate System (Y-Up, -Z Forward).
#   # Uses a Right-Handed Coordinate System (Y-Up, -Z Forward).
    def __init__(
#   def __init__(
        self,
#       self,
        position: vec3f32 = (0.0, 0.0, 5.0),
#       position: vec3f32 = (0.0, 0.0, 5.0),
        look_at: vec3f32 = (0.0, 0.0, 0.0),
#       look_at: vec3f32 = (0.0, 0.0, 0.0),
        up: vec3f32 = (0.0, 1.0, 0.0),
#       up: vec3f32 = (0.0, 1.0, 0.0),
        aspect_ratio: float = 1.0,
#       aspect_ratio: float = 1.0,
        fov: float = math.pi / 2.0,
#       fov: float = math.pi / 2.0,
        near: float = 0.1,
#       near: float = 0.1,
        far: float = 100.0,
#       far: float = 100.0,
        orbit_speed: float = 0.0,
#       orbit_speed: float = 0.0,
        zero_to_one: bool = True,
#       zero_to_one: bool = True,
    ) -> None:
#   ) -> None:
        self.look_from: rr.Vector3 = rr.Vector3(np.array(position, dtype=np.float64))
#       self.look_from: rr.Vector3 = rr.Vector3(np.array(position, dtype=np.float64))
        self.look_at: rr.Vector3 = rr.Vector3(np.array(look_at, dtype=np.float64))
#       self.look_at: rr.Vector3 = rr.Vector3(np.array(look_at, dtype=np.float64))
        self.view_up: rr.Vector3 = rr.Vector3(np.array(up, dtype=np.float64))
#       self.view_up: rr.Vector3 = rr.Vector3(np.array(up, dtype=np.float64))
        self.aspect_ratio: float = aspect_ratio
#       self.aspect_ratio: float = aspect_ratio
        self.fov: float = fov # radians
#       self.fov: float = fov # radians
        self.near: float = near
#       self.near: float = near
        self.far: float = far
#       self.far: float = far
        self.orbit_speed: float = orbit_speed # radians per second around the target, about +Y
#       self.orbit_speed: float = orbit_speed # radians per second around the target, about +Y
        self.zero_to_one: bool = zero_to_one
#       self.zero_to_one: bool = zero_to_one

        # Orbiting rotates the initial eye offset instead of accumulating small steps,
#       # Orbiting rotates the initial eye offset instead of accumulating small steps,
        # so the orbit radius never drifts.
#       # so the orbit radius never drifts.
        self.orbit_angle: float = 0.0
#       self.orbit_angle: float = 0.0
        self.orbit_offset: npt.NDArray[np.float64] = np.asarray(self.look_from) - np.asarray(self.look_at)
#       self.orbit_offset: npt.NDArray[np.float64] = np.asarray(self.look_from) - np.asarray(self.look_at)

        self.validate()
#       self.validate()
        pass
#       pass

    def validate(self) -> None:
#   def validate(self) -> None:
        # Everything downstream (rendering, picking) depends on these, so fail scene setup instead of degrading.
#       # Everything downstream (rendering, picking) depends on these, so fail scene setup instead of degrading.
        if not (0.0 < self.fov < math.pi):
#       if not (0.0 < self.fov < math.pi):
            raise ConfigurationError(f"Field of view must be inside (0, pi) radians, got {self.fov}")
#           raise ConfigurationError(f"Field of view must be inside (0, pi) radians, got {self.fov}")
        if self.near <= 0.0:
#       if self.near <= 0.0:
            raise ConfigurationError(f"Near plane must be positive, got {self.near}")
#           raise ConfigurationError(f"Near plane must be positive, got {self.near}")
        if self.far <= self.near:
#       if self.far <= self.near:
            raise ConfigurationError(f"Far plane ({self.far}) must be beyond near plane ({self.near})")
#           raise ConfigurationError(f"Far plane ({self.far}) must be beyond near plane ({self.near})")
        if self.aspect_ratio <= 0.0 or not math.isfinite(self.aspect_ratio):
#       if self.aspect_ratio <= 0.0 or not math.isfinite(self.aspect_ratio):
            raise ConfigurationError(f"Aspect ratio must be positive, got {self.aspect_ratio}")
#           raise ConfigurationError(f"Aspect ratio must be positive, got {self.aspect_ratio}")

        forward: npt.NDArray[np.float64] = np.asarray(self.look_at) - np.asarray(self.look_from)
#       forward: npt.NDArray[np.float64] = np.asarray(self.look_at) - np.asarray(self.look_from)
        if linalg.length(forward) == 0.0:
#       if linalg.length(forward) == 0.0:
            raise ConfigurationError("Camera position and look-at target coincide")
#           raise ConfigurationError("Camera position and look-at target coincide")
        if linalg.length(np.cross(forward, np.asarray(self.view_up))) == 0.0:
#       if linalg.length(np.cross(forward, np.asarray(self.view_up))) == 0.0:
            raise ConfigurationError("Camera up vector is parallel to the viewing direction")
#           raise ConfigurationError("Camera up vector is parallel to the viewing direction")

        # Picking inverts both, so prove they are invertible now.
#       # Picking inverts both, so prove they are invertible now.
        linalg.inverse(self.get_view_matrix())
#       linalg.inverse(self.get_view_matrix())
        linalg.inverse(self.get_projection_matrix())
#       linalg.inverse(self.get_projection_matrix())
        pass
#       pass

    def set_viewport(self, width: float, height: float) -> None:
#   def set_viewport(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
#       if width <= 0 or height <= 0:
            raise ConfigurationError(f"Viewport must have a positive size, got {width}x{height}")
#           raise ConfigurationError(f"Viewport must have a positive size, got {width}x{height}")
        self.aspect_ratio = width / height
#       self.aspect_ratio = width / height
        pass
#       pass

    def update(self, frame_time: float) -> None:
#   def update(self, frame_time: float) -> None:
        if self.orbit_speed == 0.0:
#       if self.orbit_speed == 0.0:
            return
#           return
        self.orbit_angle = math.fmod(self.orbit_angle + self.orbit_speed * frame_time, 2.0 * math.pi)
#       self.orbit_angle = math.fmod(self.orbit_angle + self.orbit_speed * frame_time, 2.0 * math.pi)
        offset: rr.Vector4 = linalg.transform_vector(linalg.rotation_y(self.orbit_angle), [*self.orbit_offset, 0.0])
#       offset: rr.Vector4 = linalg.transform_vector(linalg.rotation_y(self.orbit_angle), [*self.orbit_offset, 0.0])
        self.look_from = rr.Vector3(np.asarray(self.look_at) + np.asarray(offset)[:3])
#       self.look_from = rr.Vector3(np.asarray(self.look_at) + np.asarray(offset)[:3])
        pass
#       pass

    def get_view_matrix(self) -> rr.Matrix44:
#   def get_view_matrix(self) -> rr.Matrix44:
        return linalg.look_at(
#       return linalg.look_at(
            eye=self.look_from,
#           eye=self.look_from,
            target=self.look_at,
#           target=self.look_at,
            up=self.view_up,
#           up=self.view_up,
        )
#       )

    def get_projection_matrix(self) -> rr.Matrix44:
#   def get_projection_matrix(self) -> rr.Matrix44:
        return linalg.perspective_projection(
#       return linalg.perspective_projection(
            fov_radians=self.fov,
#           fov_radians=self.fov,
            aspect_ratio=self.aspect_ratio,
#           aspect_ratio=self.aspect_ratio,
            near=self.near,
#           near=self.near,
            far=self.far,
#           far=self.far,
            zero_to_one=self.zero_to_one,
#           zero_to_one=self.zero_to_one,
        )
#       )

    def get_eye_position(self) -> rr.Vector3:
#   def get_eye_position(self) -> rr.Vector3:
        return rr.Vector3(np.array(self.look_from, dtype=np.float64))
#       return rr.Vector3(np.array(self.look_from, dtype=np.float64))
