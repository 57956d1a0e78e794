# rivermesh/math.py
import math

import numpy as np

from rivermesh.types import Scalar, Vector3


# -- Vector Math --
def magnitude_vec(v: Vector3) -> Scalar:
    return math.hypot(*v)


def norm_vec(v: Vector3) -> Vector3:
    """Unit vector along v. The zero vector is returned as is."""
    mag = magnitude_vec(v)
    if mag == 0:
        return v
    return v / mag


def cross_vec3(a: Vector3, b: Vector3) -> Vector3:
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


# -- Batched (numpy) Math --
def lerp_array(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Element-wise lerp over matching arrays."""
    return a + (b - a) * t


def normalize_rows(v: np.ndarray) -> np.ndarray:
    """
    Normalize each row of an (N, K) array.
    Zero rows are returned unchanged, matching norm_vec().
    """
    lengths = np.linalg.norm(v, axis=1, keepdims=True)
    return v / np.where(lengths == 0.0, 1.0, lengths)
