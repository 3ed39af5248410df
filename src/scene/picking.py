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
from src.core.common_types import vec2f32, vec3f32
from src.core.common_types import vec2f32, vec3f32
from src.scene.camera import Camera
from src.scene.camera import Camera
from src.scene.instances import InstanceStore
from src.scene.instances import InstanceStore
from src.scene.transform_updater import TransformUpdater
from src.scene.transform_updater import TransformUpdater

class BoundingSphere:
    # Cheap stand-in for a mesh's geometry when picking. Immutable once built.
#   # Cheap stand-in for a mesh's geometry when picking. Immutable once built.
    def __init__(self, center: vec3f32 | npt.ArrayLike, radius: float) -> None:
#   def __init__(self, center: vec3f32 | npt.ArrayLike, radius: float) -> None:
        if radius < 0.0:
#       if radius < 0.0:
            raise ValueError(f"Bounding sphere radius must be non-negative, got {radius}")
#           raise ValueError(f"Bounding sphere radius must be non-negative, got {radius}")
        self._center: rr.Vector3 = rr.Vector3(np.array(center, dtype=np.float64))
#       self._center: rr.Vector3 = rr.Vector3(np.array(center, dtype=np.float64))
        self._center.flags.writeable = False
#       self._center.flags.writeable = False
        self._radius: float = float(radius)
#       self._radius: float = float(radius)
        pass
#       pass

    @property
#   @property
    def center(self) -> rr.Vector3:
#   def center(self) -> rr.Vector3:
        return self._center
#       return self._center

    @property
#   @property
    def radius(self) -> float:
#   def radius(self) -> float:
        return self._radius
#       return self._radius

    @classmethod
#   @classmethod
    def from_bounding_box(cls, min_bounds: vec3f32 | npt.ArrayLike, max_bounds: vec3f32 | npt.ArrayLike) -> "BoundingSphere":
#   def from_bounding_box(cls, min_bounds: vec3f32 | npt.ArrayLike, max_bounds: vec3f32 | npt.ArrayLike) -> "BoundingSphere":
        # Sphere around an axis-aligned box: centred on the box, reaching its corners.
#       # Sphere around an axis-aligned box: centred on the box, reaching its corners.
        min_corner: npt.NDArray[np.float64] = np.asarray(min_bounds, dtype=np.float64)
#       min_corner: npt.NDArray[np.float64] = np.asarray(min_bounds, dtype=np.float64)
        max_corner: npt.NDArray[np.float64] = np.asarray(max_bounds, dtype=np.float64)
#       max_corner: npt.NDArray[np.float64] = np.asarray(max_bounds, dtype=np.float64)
        center: npt.NDArray[np.float64] = (max_corner + min_corner) * 0.5
#       center: npt.NDArray[np.float64] = (max_corner + min_corner) * 0.5
        return cls(center=center, radius=linalg.length(center - min_corner))
#       return cls(center=center, radius=linalg.length(center - min_corner))

    def transformed(self, model_matrix: npt.ArrayLike) -> "BoundingSphere":
#   def transformed(self, model_matrix: npt.ArrayLike) -> "BoundingSphere":
        # Move the sphere into world space. The radius grows with the largest axis scale so the
#       # Move the sphere into world space. The radius grows with the largest axis scale so the
        # sphere still encloses the mesh under a non-uniform model matrix.
#       # sphere still encloses the mesh under a non-uniform model matrix.
        matrix: npt.NDArray[np.float64] = np.asarray(model_matrix, dtype=np.float64)
#       matrix: npt.NDArray[np.float64] = np.asarray(model_matrix, dtype=np.float64)
        center: rr.Vector4 = linalg.transform_vector(matrix, [*self._center, 1.0])
#       center: rr.Vector4 = linalg.transform_vector(matrix, [*self._center, 1.0])
        scale: float = float(np.max(np.linalg.norm(matrix[0:3, 0:3], axis=1)))
#       scale: float = float(np.max(np.linalg.norm(matrix[0:3, 0:3], axis=1)))
        return BoundingSphere(center=np.asarray(center)[:3], radius=self._radius * scale)
#       return BoundingSphere(center=np.asarray(center)[:3], radius=self._radius * scale)

    def __repr__(self) -> str:
#   def __repr__(self) -> str:
        c: rr.Vector3 = self._center
#       c: rr.Vector3 = self._center
        return f"BoundingSphere(center=({c[0]:.3f}, {c[1]:.3f}, {c[2]:.3f}), radius={self._radius:.3f})"
#       return f"BoundingSphere(center=({c[0]:.3f}, {c[1]:.3f}, {c[2]:.3f}), radius={self._radius:.3f})"

class Ray:
    # Built per pick event, never stored across frames.
#   # Built per pick event, never stored across frames.
    def __init__(self, origin: vec3f32 | npt.ArrayLike, direction: vec3f32 | npt.ArrayLike) -> None:
#   def __init__(self, origin: vec3f32 | npt.ArrayLike, direction: vec3f32 | npt.ArrayLike) -> None:
        self.origin: rr.Vector3 = rr.Vector3(np.array(origin, dtype=np.float64))
#       self.origin: rr.Vector3 = rr.Vector3(np.array(origin, dtype=np.float64))
        self.direction: rr.Vector3 = linalg.normalize(np.asarray(direction, dtype=np.float64))
#       self.direction: rr.Vector3 = linalg.normalize(np.asarray(direction, dtype=np.float64))
        pass
#       pass

    def point_at(self, t: float) -> rr.Vector3:
#   def point_at(self, t: float) -> rr.Vector3:
        return rr.Vector3(np.asarray(self.origin) + np.asarray(self.direction) * t)
#       return rr.Vector3(np.asarray(self.origin) + np.asarray(self.direction) * t)

    def __repr__(self) -> str:
#   def __repr__(self) -> str:
        o: rr.Vector3 = self.origin
#       o: rr.Vector3 = self.origin
        d: rr.Vector3 = self.direction
#       d: rr.Vector3 = self.direction
        return f"Ray(origin=({o[0]:.3f}, {o[1]:.3f}, {o[2]:.3f}), direction=({d[0]:.3f}, {d[1]:.3f}, {d[2]:.3f}))"
#       return f"Ray(origin=({o[0]:.3f}, {o[1]:.3f}, {o[2]:.3f}), direction=({d[0]:.3f}, {d[1]:.3f}, {d[2]:.3f}))"

def inverse_viewport(window_coordinate: vec2f32, viewport_size: vec2f32, depth: float, flip_y: bool = False) -> rr.Vector4:
    # Window pixels -> normalized device coordinates on the given depth plane (0 = near, 1 = far).
#   # Window pixels -> normalized device coordinates on the given depth plane (0 = near, 1 = far).
    width, height = viewport_size
#   width, height = viewport_size
    inverse_viewport_transform: rr.Matrix44 = linalg.inverse(linalg.viewport_transform(width, height, flip_y=flip_y))
#   inverse_viewport_transform: rr.Matrix44 = linalg.inverse(linalg.viewport_transform(width, height, flip_y=flip_y))
    x, y = window_coordinate
#   x, y = window_coordinate
    return linalg.transform_vector(inverse_viewport_transform, [x, y, depth, 1.0])
#   return linalg.transform_vector(inverse_viewport_transform, [x, y, depth, 1.0])

def unproject(
    window_coordinate: vec2f32,
#   window_coordinate: vec2f32,
    viewport_size: vec2f32,
#   viewport_size: vec2f32,
    view: npt.ArrayLike,
#   view: npt.ArrayLike,
    projection: npt.ArrayLike,
#   projection: npt.ArrayLike,
    depth: float = 1.0,
#   depth: float = 1.0,
    flip_y: bool = False,
#   flip_y: bool = False,
) -> rr.Vector3:
    """
    Unit world-space direction from the eye through a window coordinate.
#   Unit world-space direction from the eye through a window coordinate.
    inverse viewport -> inverse projection (with perspective divide) -> inverse view.
#   inverse viewport -> inverse projection (with perspective divide) -> inverse view.
    """
    ndc_point: rr.Vector4 = inverse_viewport(window_coordinate, viewport_size, depth, flip_y=flip_y)
#   ndc_point: rr.Vector4 = inverse_viewport(window_coordinate, viewport_size, depth, flip_y=flip_y)

    eye_point: npt.NDArray[np.float64] = np.asarray(linalg.transform_vector(linalg.inverse(projection), ndc_point))
#   eye_point: npt.NDArray[np.float64] = np.asarray(linalg.transform_vector(linalg.inverse(projection), ndc_point))
    if abs(eye_point[3]) > 1.0e-12:
#   if abs(eye_point[3]) > 1.0e-12:
        eye_point = eye_point / eye_point[3]
#       eye_point = eye_point / eye_point[3]

    # The eye sits at the eye-space origin, so the point is also the direction (w = 0 drops the translation).
#   # The eye sits at the eye-space origin, so the point is also the direction (w = 0 drops the translation).
    eye_direction: list[float] = [eye_point[0], eye_point[1], eye_point[2], 0.0]
#   eye_direction: list[float] = [eye_point[0], eye_point[1], eye_point[2], 0.0]
    world_direction: rr.Vector4 = linalg.transform_vector(linalg.inverse(view), eye_direction)
#   world_direction: rr.Vector4 = linalg.transform_vector(linalg.inverse(view), eye_direction)
    return linalg.normalize(np.asarray(world_direction)[:3])
#   return linalg.normalize(np.asarray(world_direction)[:3])

def ray_from_window(window_coordinate: vec2f32, viewport_size: vec2f32, camera: Camera, depth: float = 1.0, flip_y: bool = False) -> Ray:
    direction: rr.Vector3 = unproject(
#   direction: rr.Vector3 = unproject(
        window_coordinate=window_coordinate,
#       window_coordinate=window_coordinate,
        viewport_size=viewport_size,
#       viewport_size=viewport_size,
        view=camera.get_view_matrix(),
#       view=camera.get_view_matrix(),
        projection=camera.get_projection_matrix(),
#       projection=camera.get_projection_matrix(),
        depth=depth,
#       depth=depth,
        flip_y=flip_y,
#       flip_y=flip_y,
    )
#   )
    return Ray(origin=camera.get_eye_position(), direction=direction)
#   return Ray(origin=camera.get_eye_position(), direction=direction)

def ray_sphere_distance(ray: Ray, sphere: BoundingSphere) -> float | None:
    """
    Distance along the ray to the first sphere surface in front of its origin, or None on a miss.
#   Distance along the ray to the first sphere surface in front of its origin, or None on a miss.
    Solves t^2 + b*t + c = 0 (direction is unit length, so the quadratic term is 1):
#   Solves t^2 + b*t + c = 0 (direction is unit length, so the quadratic term is 1):
    b = 2 * d . (o - c_s), c = |o - c_s|^2 - r^2
#   b = 2 * d . (o - c_s), c = |o - c_s|^2 - r^2
    If the smaller root is behind the origin the larger one is tried, so a ray starting inside the
#   If the smaller root is behind the origin the larger one is tried, so a ray starting inside the
    sphere counts as a hit.
#   sphere counts as a hit.
    """
    offset: npt.NDArray[np.float64] = np.asarray(ray.origin) - np.asarray(sphere.center)
#   offset: npt.NDArray[np.float64] = np.asarray(ray.origin) - np.asarray(sphere.center)
    b: float = 2.0 * linalg.dot(ray.direction, offset)
#   b: float = 2.0 * linalg.dot(ray.direction, offset)
    c: float = linalg.dot(offset, offset) - sphere.radius * sphere.radius
#   c: float = linalg.dot(offset, offset) - sphere.radius * sphere.radius

    discriminant: float = b * b - 4.0 * c
#   discriminant: float = b * b - 4.0 * c
    if discriminant < 0.0:
#   if discriminant < 0.0:
        return None
#       return None

    root: float = math.sqrt(discriminant)
#   root: float = math.sqrt(discriminant)
    t0: float = (-b - root) / 2.0
#   t0: float = (-b - root) / 2.0
    if t0 >= 0.0:
#   if t0 >= 0.0:
        return t0
#       return t0
    t1: float = (-b + root) / 2.0
#   t1: float = (-b + root) / 2.0
    if t1 >= 0.0:
#   if t1 >= 0.0:
        return t1
#       return t1
    # Both roots behind the origin: the sphere is behind the ray.
#   # Both roots behind the origin: the sphere is behind the ray.
    return None
#   return None

def ray_sphere_intersection(ray: Ray, sphere: BoundingSphere) -> bool:
    return ray_sphere_distance(ray, sphere) is not None
#   return ray_sphere_distance(ray, sphere) is not None

class Picker:
    # Picks the nearest instance whose world-space bounding sphere a window-coordinate ray hits.
#   # Picks the nearest instance whose world-space bounding sphere a window-coordinate ray hits.
    # Stateless between calls: every pick reads the live camera and instance state.
#   # Stateless between calls: every pick reads the live camera and instance state.
    def __init__(self, bounding_sphere: BoundingSphere, flip_y: bool = False) -> None:
#   def __init__(self, bounding_sphere: BoundingSphere, flip_y: bool = False) -> None:
        self.bounding_sphere: BoundingSphere = bounding_sphere
#       self.bounding_sphere: BoundingSphere = bounding_sphere
        self.flip_y: bool = flip_y
#       self.flip_y: bool = flip_y
        pass
#       pass

    def pick(self, window_coordinate: vec2f32, viewport_size: vec2f32, camera: Camera, store: InstanceStore) -> int | None:
#   def pick(self, window_coordinate: vec2f32, viewport_size: vec2f32, camera: Camera, store: InstanceStore) -> int | None:
        ray: Ray = ray_from_window(window_coordinate, viewport_size, camera, flip_y=self.flip_y)
#       ray: Ray = ray_from_window(window_coordinate, viewport_size, camera, flip_y=self.flip_y)
        return self.pick_ray(ray, store)
#       return self.pick_ray(ray, store)

    def pick_ray(self, ray: Ray, store: InstanceStore) -> int | None:
#   def pick_ray(self, ray: Ray, store: InstanceStore) -> int | None:
        nearest_index: int | None = None
#       nearest_index: int | None = None
        nearest_distance: float = math.inf
#       nearest_distance: float = math.inf
        for index, instance in enumerate(store):
#       for index, instance in enumerate(store):
            sphere: BoundingSphere = self.bounding_sphere.transformed(TransformUpdater.model_matrix(instance))
#           sphere: BoundingSphere = self.bounding_sphere.transformed(TransformUpdater.model_matrix(instance))
            distance: float | None = ray_sphere_distance(ray, sphere)
#           distance: float | None = ray_sphere_distance(ray, sphere)
            if distance is not None and distance < nearest_distance:
#           if distance is not None and distance < nearest_distance:
                nearest_index = index
#               nearest_index = index
                nearest_distance = distance
#               nearest_distance = distance
        return nearest_index
#       return nearest_index
