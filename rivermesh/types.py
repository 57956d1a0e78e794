# rivermesh/types.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, NewType, TypeAlias

import numpy as np

EntityId = NewType("EntityId", int)

Scalar: TypeAlias = float


@dataclass(frozen=True, slots=True)
class Vector3:
    """Immutable point or direction. Rails lie in XY, +Z is up."""

    x: Scalar
    y: Scalar
    z: Scalar

    @staticmethod
    def from_array(arr: Any) -> Vector3:
        return Vector3(float(arr[0]), float(arr[1]), float(arr[2]))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __iter__(self) -> Iterator[Scalar]:
        return iter((self.x, self.y, self.z))

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: Scalar) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: Scalar) -> Vector3:
        if scalar == 0.0:
            raise ZeroDivisionError("Vector3 divided by zero")
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)


AXIS_Z = Vector3(0.0, 0.0, 1.0)
