"""Narrow capability interfaces between river generation and its host."""
from __future__ import annotations

from typing import Any, Callable, Protocol, Type, TypeVar, runtime_checkable

import numpy as np

from rivermesh.assets.types import MeshData

E = TypeVar("E")


@runtime_checkable
class PathSource(Protocol):
    """Turns a rail name into an ordered, closed loop of 3D points."""

    def positions(self, name: str, step_size: float) -> np.ndarray:
        """Sample the named rail roughly every `step_size` units.

        Returns:
            (n, 3) array. The last point is not a copy of the first.
        """
        ...


@runtime_checkable
class MeshSink(Protocol):
    """Materializes generated buffers into something a renderer can draw."""

    def create(self, mesh_id: str, data: MeshData, *, label: str = "") -> Any:
        ...

    def replace(self, mesh_id: str, data: MeshData, *, label: str = "") -> Any:
        ...

    def release(self, mesh_id: str) -> None:
        """Free the mesh; unknown ids are ignored."""
        ...


@runtime_checkable
class ChangeNotifier(Protocol):
    """Delivers "this rail changed" notifications to listeners."""

    def subscribe(self, event_type: Type[E], listener: Callable[[E], None]) -> None:
        ...


class NormalTangentPass(Protocol):
    """Fills the normal and tangent fields of a vertex buffer in place."""

    def __call__(self, vertices: np.ndarray, indices: np.ndarray) -> None:
        ...
