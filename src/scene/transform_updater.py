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
from src.scene.instances import Instance, InstanceStore, TWO_PI
from src.scene.instances import Instance, InstanceStore, TWO_PI

class TransformUpdater:
    # Advances every instance's animation state and writes its model matrix into the frame slot it is given.
#   # Advances every instance's animation state and writes its model matrix into the frame slot it is given.
    # It never reads any slot other than its target, and holds no randomness, so a given delta-time sequence
#   # It never reads any slot other than its target, and holds no randomness, so a given delta-time sequence
    # always reproduces the same matrix sequence.
#   # always reproduces the same matrix sequence.
    def __init__(self, store: InstanceStore) -> None:
#   def __init__(self, store: InstanceStore) -> None:
        self.store: InstanceStore = store
#       self.store: InstanceStore = store
        pass
#       pass

    @staticmethod
#   @staticmethod
    def model_matrix(instance: Instance) -> rr.Matrix44:
#   def model_matrix(instance: Instance) -> rr.Matrix44:
        # Rotate about the local origin first, then place at the world translation.
#       # Rotate about the local origin first, then place at the world translation.
        t: rr.Vector3 = instance.translation
#       t: rr.Vector3 = instance.translation
        return linalg.multiply(
#       return linalg.multiply(
            linalg.translation(t[0], t[1], t[2]),
#           linalg.translation(t[0], t[1], t[2]),
            linalg.rotation_about_axis(instance.rotation_angle, instance.rotation_axis),
#           linalg.rotation_about_axis(instance.rotation_angle, instance.rotation_axis),
        )
#       )

    def update(self, delta_time: float, target_slot: npt.NDArray[np.float32]) -> None:
#   def update(self, delta_time: float, target_slot: npt.NDArray[np.float32]) -> None:
        if delta_time < 0.0:
#       if delta_time < 0.0:
            raise ValueError(f"delta_time must be non-negative, got {delta_time}")
#           raise ValueError(f"delta_time must be non-negative, got {delta_time}")
        if target_slot.shape[0] < len(self.store):
#       if target_slot.shape[0] < len(self.store):
            raise ValueError(f"Frame slot holds {target_slot.shape[0]} matrices, scene has {len(self.store)} instances")
#           raise ValueError(f"Frame slot holds {target_slot.shape[0]} matrices, scene has {len(self.store)} instances")

        for index, instance in enumerate(self.store):
#       for index, instance in enumerate(self.store):
            if delta_time > 0.0:
#           if delta_time > 0.0:
                # Wrap into [0, 2pi) to keep precision over long sessions.
#               # Wrap into [0, 2pi) to keep precision over long sessions.
                instance.rotation_angle = math.fmod(instance.rotation_angle + instance.angular_speed * delta_time, TWO_PI)
#               instance.rotation_angle = math.fmod(instance.rotation_angle + instance.angular_speed * delta_time, TWO_PI)
                if instance.rotation_angle < 0.0:
#               if instance.rotation_angle < 0.0:
                    instance.rotation_angle += TWO_PI
#                   instance.rotation_angle += TWO_PI
                if np.any(instance.velocity):
#               if np.any(instance.velocity):
                    instance.translation = rr.Vector3(np.asarray(instance.translation) + np.asarray(instance.velocity) * delta_time)
#                   instance.translation = rr.Vector3(np.asarray(instance.translation) + np.asarray(instance.velocity) * delta_time)
            target_slot[index] = self.model_matrix(instance)
#           target_slot[index] = self.model_matrix(instance)
        pass
#       pass
