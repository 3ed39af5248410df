import math
import math
import numpy as np
import numpy as np
import numpy.typing as npt
import numpy.typing as npt
import pyrr as rr # type: ignore[import-untyped]
import pyrr as rr
from src.core.common_types import vec3f32
from src.core.common_types import vec3f32
from src.core.errors import SingularMatrixError
from src.core.errors import SingularMatrixError

# Every matrix here uses pyrr's memory layout: a point is a ROW vector multiplied on the LEFT (v @ M),
# which is the transpose of the textbook column-vector form. Consequences:
# - the translation lives in the last row
# - multiply(A, B, C) reads like the math (A * B * C): C is applied to the vertex first, A last
# The layout matches what a column-major GPU uniform expects, so the arrays can be uploaded as-is.

# Past this condition number an inverse is all rounding error.
SINGULAR_CONDITION: float = 1.0 / float(np.finfo(np.float64).eps)

def _frozen(values: npt.ArrayLike) -> rr.Matrix44:
    # Library matrices are value types: hand out read-only arrays so nobody edits a shared projection in place.
#   # Library matrices are value types: hand out read-only arrays so nobody edits a shared projection in place.
    matrix: rr.Matrix44 = rr.Matrix44(np.array(values, dtype=np.float64))
#   matrix: rr.Matrix44 = rr.Matrix44(np.array(values, dtype=np.float64))
    matrix.flags.writeable = False
#   matrix.flags.writeable = False
    return matrix
#   return matrix

def identity() -> rr.Matrix44:
    return _frozen(np.identity(4))
#   return _frozen(np.identity(4))

def translation(tx: float, ty: float, tz: float) -> rr.Matrix44:
    return _frozen(rr.Matrix44.from_translation([tx, ty, tz]))
#   return _frozen(rr.Matrix44.from_translation([tx, ty, tz]))

def non_uniform_scale(sx: float, sy: float) -> rr.Matrix44:
    return _frozen(rr.Matrix44.from_scale([sx, sy, 1.0]))
#   return _frozen(rr.Matrix44.from_scale([sx, sy, 1.0]))

def rotation_x(radians: float) -> rr.Matrix44:
    c: float = math.cos(radians)
#   c: float = math.cos(radians)
    s: float = math.sin(radians)
#   s: float = math.sin(radians)
    return _frozen([
#   return _frozen([
        [1.0, 0.0, 0.0, 0.0],
#       [1.0, 0.0, 0.0, 0.0],
        [0.0,   c,   s, 0.0],
#       [0.0,   c,   s, 0.0],
        [0.0,  -s,   c, 0.0],
#       [0.0,  -s,   c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
#       [0.0, 0.0, 0.0, 1.0],
    ])
#   ])

def rotation_y(radians: float) -> rr.Matrix44:
    c: float = math.cos(radians)
#   c: float = math.cos(radians)
    s: float = math.sin(radians)
#   s: float = math.sin(radians)
    return _frozen([
#   return _frozen([
        [  c, 0.0,  -s, 0.0],
#       [  c, 0.0,  -s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
#       [0.0, 1.0, 0.0, 0.0],
        [  s, 0.0,   c, 0.0],
#       [  s, 0.0,   c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
#       [0.0, 0.0, 0.0, 1.0],
    ])
#   ])

def rotation_z(radians: float) -> rr.Matrix44:
    c: float = math.cos(radians)
#   c: float = math.cos(radians)
    s: float = math.sin(radians)
#   s: float = math.sin(radians)
    return _frozen([
#   return _frozen([
        [  c,   s, 0.0, 0.0],
#       [  c,   s, 0.0, 0.0],
        [ -s,   c, 0.0, 0.0],
#       [ -s,   c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
#       [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
#       [0.0, 0.0, 0.0, 1.0],
    ])
#   ])

def rotation_about_axis(radians: float, axis: vec3f32 | npt.ArrayLike) -> rr.Matrix44:
    """
    Right-handed rotation about an arbitrary axis through the origin.
#   Right-handed rotation about an arbitrary axis through the origin.
    A positive angle turns counter-clockwise when looking from the tip of the axis toward the origin.
#   A positive angle turns counter-clockwise when looking from the tip of the axis toward the origin.
    """
    k: npt.NDArray[np.float64] = np.asarray(axis, dtype=np.float64)
#   k: npt.NDArray[np.float64] = np.asarray(axis, dtype=np.float64)
    norm: float = float(np.linalg.norm(k))
#   norm: float = float(np.linalg.norm(k))
    if norm == 0.0:
#   if norm == 0.0:
        raise ValueError("Rotation axis must have non-zero length")
#       raise ValueError("Rotation axis must have non-zero length")
    k = k / norm
#   k = k / norm

    # Rodrigues: R = cos * I + sin * [k]x + (1 - cos) * k k^T (column-vector form).
#   # Rodrigues: R = cos * I + sin * [k]x + (1 - cos) * k k^T (column-vector form).
    # Row-vector layout stores R^T, and [k]x is skew-symmetric, so only the sign of the sine term flips.
#   # Row-vector layout stores R^T, and [k]x is skew-symmetric, so only the sign of the sine term flips.
    c: float = math.cos(radians)
#   c: float = math.cos(radians)
    s: float = math.sin(radians)
#   s: float = math.sin(radians)
    cross_product_matrix: npt.NDArray[np.float64] = np.array([
#   cross_product_matrix: npt.NDArray[np.float64] = np.array([
        [  0.0, -k[2],  k[1]],
#       [  0.0, -k[2],  k[1]],
        [ k[2],   0.0, -k[0]],
#       [ k[2],   0.0, -k[0]],
        [-k[1],  k[0],   0.0],
#       [-k[1],  k[0],   0.0],
    ])
#   ])
    block: npt.NDArray[np.float64] = c * np.identity(3) - s * cross_product_matrix + (1.0 - c) * np.outer(k, k)
#   block: npt.NDArray[np.float64] = c * np.identity(3) - s * cross_product_matrix + (1.0 - c) * np.outer(k, k)

    matrix: npt.NDArray[np.float64] = np.identity(4)
#   matrix: npt.NDArray[np.float64] = np.identity(4)
    matrix[0:3, 0:3] = block
#   matrix[0:3, 0:3] = block
    return _frozen(matrix)
#   return _frozen(matrix)

def perspective_projection(fov_radians: float, aspect_ratio: float, near: float, far: float, zero_to_one: bool = True) -> rr.Matrix44:
    """
    Symmetric right-handed perspective frustum (camera looks down -Z).
#   Symmetric right-handed perspective frustum (camera looks down -Z).
    With zero_to_one the eye-space depth -near maps to 0 and -far maps to 1, so the nearer fragment has the
#   With zero_to_one the eye-space depth -near maps to 0 and -far maps to 1, so the nearer fragment has the
    LOWER depth value and a "less" depth test keeps it. zero_to_one=False produces the OpenGL [-1, 1] range.
#   LOWER depth value and a "less" depth test keeps it. zero_to_one=False produces the OpenGL [-1, 1] range.
    fov_radians must not be 0 or pi and near must differ from far; callers validate that (see Camera).
#   fov_radians must not be 0 or pi and near must differ from far; callers validate that (see Camera).
    """
    if not zero_to_one:
#   if not zero_to_one:
        return _frozen(rr.Matrix44.perspective_projection(
#       return _frozen(rr.Matrix44.perspective_projection(
            fovy=math.degrees(fov_radians),
#           fovy=math.degrees(fov_radians),
            aspect=aspect_ratio,
#           aspect=aspect_ratio,
            near=near,
#           near=near,
            far=far,
#           far=far,
            dtype=np.float64,
#           dtype=np.float64,
        ))
#       ))

    # pyrr only builds the OpenGL depth range, so the [0, 1] variant is written out.
#   # pyrr only builds the OpenGL depth range, so the [0, 1] variant is written out.
    tan_half_fov: float = math.tan(fov_radians / 2.0)
#   tan_half_fov: float = math.tan(fov_radians / 2.0)
    z_range: float = near - far
#   z_range: float = near - far

    matrix: npt.NDArray[np.float64] = np.zeros((4, 4))
#   matrix: npt.NDArray[np.float64] = np.zeros((4, 4))
    matrix[0][0] = 1.0 / (tan_half_fov * aspect_ratio)
#   matrix[0][0] = 1.0 / (tan_half_fov * aspect_ratio)
    matrix[1][1] = 1.0 / tan_half_fov
#   matrix[1][1] = 1.0 / tan_half_fov
    matrix[2][3] = -1.0
#   matrix[2][3] = -1.0
    matrix[2][2] = far / z_range
#   matrix[2][2] = far / z_range
    matrix[3][2] = (far * near) / z_range
#   matrix[3][2] = (far * near) / z_range
    return _frozen(matrix)
#   return _frozen(matrix)

def look_at(eye: vec3f32 | npt.ArrayLike, target: vec3f32 | npt.ArrayLike, up: vec3f32 | npt.ArrayLike) -> rr.Matrix44:
    return _frozen(rr.Matrix44.look_at(
#   return _frozen(rr.Matrix44.look_at(
        eye=np.asarray(eye, dtype=np.float64),
#       eye=np.asarray(eye, dtype=np.float64),
        target=np.asarray(target, dtype=np.float64),
#       target=np.asarray(target, dtype=np.float64),
        up=np.asarray(up, dtype=np.float64),
#       up=np.asarray(up, dtype=np.float64),
    ))
#   ))

def viewport_transform(width: float, height: float, flip_y: bool = False) -> rr.Matrix44:
    # NDC [-1, 1] -> window pixels: halve (optionally flipping Y for top-left origin windows),
#   # NDC [-1, 1] -> window pixels: halve (optionally flipping Y for top-left origin windows),
    # shift the origin to the corner, then stretch to the viewport size.
#   # shift the origin to the corner, then stretch to the viewport size.
    flip: rr.Matrix44 = non_uniform_scale(0.5, -0.5 if flip_y else 0.5)
#   flip: rr.Matrix44 = non_uniform_scale(0.5, -0.5 if flip_y else 0.5)
    origin_translation: rr.Matrix44 = translation(0.5, 0.5, 0.0)
#   origin_translation: rr.Matrix44 = translation(0.5, 0.5, 0.0)
    viewport_scale: rr.Matrix44 = non_uniform_scale(width, height)
#   viewport_scale: rr.Matrix44 = non_uniform_scale(width, height)
    return multiply(viewport_scale, origin_translation, flip)
#   return multiply(viewport_scale, origin_translation, flip)

def multiply(*matrices: npt.ArrayLike) -> rr.Matrix44:
    # multiply(A, B, C) == A * B * C in math order; in row-vector layout that is C @ B @ A.
#   # multiply(A, B, C) == A * B * C in math order; in row-vector layout that is C @ B @ A.
    if not matrices:
#   if not matrices:
        return identity()
#       return identity()
    result: npt.NDArray[np.float64] = np.asarray(matrices[-1], dtype=np.float64)
#   result: npt.NDArray[np.float64] = np.asarray(matrices[-1], dtype=np.float64)
    for matrix in reversed(matrices[:-1]):
#   for matrix in reversed(matrices[:-1]):
        result = result @ np.asarray(matrix, dtype=np.float64)
#       result = result @ np.asarray(matrix, dtype=np.float64)
    return _frozen(result)
#   return _frozen(result)

def inverse(matrix: npt.ArrayLike) -> rr.Matrix44:
    # A singular camera/projection/viewport matrix is a configuration error, never an identity fallback.
#   # A singular camera/projection/viewport matrix is a configuration error, never an identity fallback.
    values: npt.NDArray[np.float64] = np.asarray(matrix, dtype=np.float64)
#   values: npt.NDArray[np.float64] = np.asarray(matrix, dtype=np.float64)
    # Scale-relative test: a tiny determinant alone does not make a matrix singular (scale(1e-4) is invertible).
#   # Scale-relative test: a tiny determinant alone does not make a matrix singular (scale(1e-4) is invertible).
    condition: float = float(np.linalg.cond(values)) if np.all(np.isfinite(values)) else math.inf
#   condition: float = float(np.linalg.cond(values)) if np.all(np.isfinite(values)) else math.inf
    if not math.isfinite(condition) or condition > SINGULAR_CONDITION:
#   if not math.isfinite(condition) or condition > SINGULAR_CONDITION:
        raise SingularMatrixError(float(np.linalg.det(values)))
#       raise SingularMatrixError(float(np.linalg.det(values)))
    return _frozen(np.linalg.inv(values))
#   return _frozen(np.linalg.inv(values))

def transform_vector(matrix: npt.ArrayLike, vector: npt.ArrayLike) -> rr.Vector4:
    # w = 1 transforms a point, w = 0 a direction (translation ignored).
#   # w = 1 transforms a point, w = 0 a direction (translation ignored).
    return rr.Vector4(np.asarray(vector, dtype=np.float64) @ np.asarray(matrix, dtype=np.float64))
#   return rr.Vector4(np.asarray(vector, dtype=np.float64) @ np.asarray(matrix, dtype=np.float64))

def vector3(x: float, y: float, z: float) -> rr.Vector3:
    return rr.Vector3([x, y, z], dtype=np.float64)
#   return rr.Vector3([x, y, z], dtype=np.float64)

def vector4(x: float, y: float, z: float, w: float) -> rr.Vector4:
    return rr.Vector4([x, y, z, w], dtype=np.float64)
#   return rr.Vector4([x, y, z, w], dtype=np.float64)

def dot(a: npt.ArrayLike, b: npt.ArrayLike) -> float:
    return float(rr.vector.dot(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)))
#   return float(rr.vector.dot(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)))

def length(vector: npt.ArrayLike) -> float:
    return float(rr.vector.length(np.asarray(vector, dtype=np.float64)))
#   return float(rr.vector.length(np.asarray(vector, dtype=np.float64)))

def normalize(vector: npt.ArrayLike) -> rr.Vector3 | rr.Vector4:
    values: npt.NDArray[np.float64] = np.asarray(vector, dtype=np.float64)
#   values: npt.NDArray[np.float64] = np.asarray(vector, dtype=np.float64)
    if length(values) == 0.0:
#   if length(values) == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
#       raise ValueError("Cannot normalize a zero-length vector")
    normalized: npt.NDArray[np.float64] = rr.vector.normalize(values)
#   normalized: npt.NDArray[np.float64] = rr.vector.normalize(values)
    if values.shape == (4,):
#   if values.shape == (4,):
        return rr.Vector4(normalized)
#       return rr.Vector4(normalized)
    return rr.Vector3(normalized)
#   return rr.Vector3(normalized)

def is_identity(matrix: npt.ArrayLike, tolerance: float = 1.0e-6) -> bool:
    return bool(np.allclose(np.asarray(matrix, dtype=np.float64), np.identity(4), atol=tolerance))
#   return bool(np.allclose(np.asarray(matrix, dtype=np.float64), np.identity(4), atol=tolerance))
