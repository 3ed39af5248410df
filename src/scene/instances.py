import math
import math
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr
import typing
import typing
from src.core.common_types import vec3f32
from src.core.common_types import vec3f32
from src.core.errors import ConfigurationError
from src.core.errors import ConfigurationError

TWO_PI: float = 2.0 * math.pi
DEFAULT_ANGULAR_SPEED: float = 3.0 # radians per second
DEFAULT_TRANSLATION_EXTENT: float = 3.5
DEFAULT_ROTATION_AXIS: vec3f32 = (0.0, 1.0, 0.0)

class Instance:
    # Per-instance animation state. The index inside the owning InstanceStore is the handle,
#   # Per-instance animation state. The index inside the owning InstanceStore is the handle,
    # nothing outside the store keeps a reference to the object itself across frames.
#   # nothing outside the store keeps a reference to the object itself across frames.
    def __init__(
#   def __init__(
        self,
#       self,
        translation: vec3f32 | npt.ArrayLike,
#       translation: vec3f32 | npt.ArrayLike,
        rotation_angle: float = 0.0,
#       rotation_angle: float = 0.0,
        rotation_axis: vec3f32 | npt.ArrayLike = DEFAULT_ROTATION_AXIS,
#       rotation_axis: vec3f32 | npt.ArrayLike = DEFAULT_ROTATION_AXIS,
        velocity: vec3f32 | npt.ArrayLike = (0.0, 0.0, 0.0),
#       velocity: vec3f32 | npt.ArrayLike = (0.0, 0.0, 0.0),
        angular_speed: float = DEFAULT_ANGULAR_SPEED,
#       angular_speed: float = DEFAULT_ANGULAR_SPEED,
    ) -> None:
#   ) -> None:
        self.translation: rr.Vector3 = rr.Vector3(np.array(translation, dtype=np.float64))
#       self.translation: rr.Vector3 = rr.Vector3(np.array(translation, dtype=np.float64))
        self.rotation_angle: float = float(rotation_angle)
#       self.rotation_angle: float = float(rotation_angle)
        self.rotation_axis: rr.Vector3 = rr.Vector3(np.array(rotation_axis, dtype=np.float64))
#       self.rotation_axis: rr.Vector3 = rr.Vector3(np.array(rotation_axis, dtype=np.float64))
        self.velocity: rr.Vector3 = rr.Vector3(np.array(velocity, dtype=np.float64))
#       self.velocity: rr.Vector3 = rr.Vector3(np.array(velocity, dtype=np.float64))
        self.angular_speed: float = float(angular_speed)
#       self.angular_speed: float = float(angular_speed)
        if not np.any(self.rotation_axis):
#       if not np.any(self.rotation_axis):
            raise ValueError("Instance rotation axis must have non-zero length")
#           raise ValueError("Instance rotation axis must have non-zero length")
        pass
#       pass

    def __repr__(self) -> str:
#   def __repr__(self) -> str:
        t: rr.Vector3 = self.translation
#       t: rr.Vector3 = self.translation
        return f"Instance(translation=({t[0]:.3f}, {t[1]:.3f}, {t[2]:.3f}), rotation_angle={self.rotation_angle:.3f})"
#       return f"Instance(translation=({t[0]:.3f}, {t[1]:.3f}, {t[2]:.3f}), rotation_angle={self.rotation_angle:.3f})"

class InstanceStore:
    """
    Owned, indexable collection of Instance objects.
#   Owned, indexable collection of Instance objects.
    The instance count is fixed when the store is built and instances are never removed during a session.
#   The instance count is fixed when the store is built and instances are never removed during a session.
    """
    def __init__(self, instances: typing.Iterable[Instance]) -> None:
#   def __init__(self, instances: typing.Iterable[Instance]) -> None:
        self._instances: list[Instance] = list(instances)
#       self._instances: list[Instance] = list(instances)
        if not self._instances:
#       if not self._instances:
            raise ConfigurationError("A scene needs at least one instance")
#           raise ConfigurationError("A scene needs at least one instance")
        pass
#       pass

    @classmethod
#   @classmethod
    def random(
#   def random(
        cls,
#       cls,
        count: int,
#       count: int,
        rng: np.random.Generator | int | None = None,
#       rng: np.random.Generator | int | None = None,
        extent: float = DEFAULT_TRANSLATION_EXTENT,
#       extent: float = DEFAULT_TRANSLATION_EXTENT,
        rotation_axis: vec3f32 = DEFAULT_ROTATION_AXIS,
#       rotation_axis: vec3f32 = DEFAULT_ROTATION_AXIS,
        angular_speed: float = DEFAULT_ANGULAR_SPEED,
#       angular_speed: float = DEFAULT_ANGULAR_SPEED,
    ) -> "InstanceStore":
#   ) -> "InstanceStore":
        # The generator is injected (or built from a seed) so a given seed always yields the same scene.
#       # The generator is injected (or built from a seed) so a given seed always yields the same scene.
        if count < 1:
#       if count < 1:
            raise ConfigurationError(f"Instance count must be at least 1, got {count}")
#           raise ConfigurationError(f"Instance count must be at least 1, got {count}")
        generator: np.random.Generator = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
#       generator: np.random.Generator = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

        instances: list[Instance] = []
#       instances: list[Instance] = []
        for _ in range(count):
#       for _ in range(count):
            translation: npt.NDArray[np.float64] = generator.uniform(-extent, extent, size=3)
#           translation: npt.NDArray[np.float64] = generator.uniform(-extent, extent, size=3)
            rotation_angle: float = float(generator.uniform(0.0, TWO_PI))
#           rotation_angle: float = float(generator.uniform(0.0, TWO_PI))
            instances.append(Instance(
#           instances.append(Instance(
                translation=translation,
#               translation=translation,
                rotation_angle=rotation_angle,
#               rotation_angle=rotation_angle,
                rotation_axis=rotation_axis,
#               rotation_axis=rotation_axis,
                angular_speed=angular_speed,
#               angular_speed=angular_speed,
            ))
#           ))
        return cls(instances)
#       return cls(instances)

    def __len__(self) -> int:
#   def __len__(self) -> int:
        return len(self._instances)
#       return len(self._instances)

    def __getitem__(self, index: int) -> Instance:
#   def __getitem__(self, index: int) -> Instance:
        return self._instances[index]
#       return self._instances[index]

    def __iter__(self) -> typing.Iterator[Instance]:
#   def __iter__(self) -> typing.Iterator[Instance]:
        return iter(self._instances)
#       return iter(self._instances)

    def rotation_angles(self) -> npt.NDArray[np.float64]:
#   def rotation_angles(self) -> npt.NDArray[np.float64]:
        return np.array([instance.rotation_angle for instance in self._instances], dtype=np.float64)
#       return np.array([instance.rotation_angle for instance in self._instances], dtype=np.float64)

    def translations(self) -> npt.NDArray[np.float64]:
#   def translations(self) -> npt.NDArray[np.float64]:
        return np.array([np.asarray(instance.translation) for instance in self._instances], dtype=np.float64)
#       return np.array([np.asarray(instance.translation) for instance in self._instances], dtype=np.float64)
