"""
Shared fixtures: a seeded scene and the reference camera.
"""
import math
import math
import numpy as np
import numpy as np
import pytest
import pytest
from src.scene.camera import Camera
from src.scene.camera import Camera
from src.scene.instances import InstanceStore
from src.scene.instances import InstanceStore

@pytest.fixture()
def seeded_store() -> InstanceStore:
    return InstanceStore.random(count=5, rng=np.random.default_rng(12345))
#   return InstanceStore.random(count=5, rng=np.random.default_rng(12345))

@pytest.fixture()
def reference_camera() -> Camera:
    # Eye at (0, 0, 5) looking at the origin, 90 degree fov, square viewport.
#   # Eye at (0, 0, 5) looking at the origin, 90 degree fov, square viewport.
    return Camera(position=(0.0, 0.0, 5.0), look_at=(0.0, 0.0, 0.0), up=(0.0, 1.0, 0.0), aspect_ratio=1.0, fov=math.pi / 2.0, near=0.1, far=100.0)
#   return Camera(position=(0.0, 0.0, 5.0), look_at=(0.0, 0.0, 0.0), up=(0.0, 1.0, 0.0), aspect_ratio=1.0, fov=math.pi / 2.0, near=0.1, far=100.0)
