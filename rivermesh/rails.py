# rivermesh/rails.py
"""
Closed rails built from RailNode control points placed in the world.
RailManager is the PathSource used by the river system.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from rivermesh.core.world import World
from rivermesh.types import Vector3

logger = logging.getLogger(__name__)

# Dense samples per control segment before arc-length resampling.
SAMPLES_PER_SEGMENT = 32


@dataclass(frozen=True)
class RailNode:
    """One control point of a named rail. Nodes are joined in `order`."""

    rail_name: str
    order: int
    position: Vector3


def catmull_rom_segment(
    p0: np.ndarray,
    p1: np.ndarray,
    p2: np.ndarray,
    p3: np.ndarray,
    t: np.ndarray,
    alpha: float = 0.5,
) -> np.ndarray:
    """Centripetal Catmull-Rom interpolation between p1 and p2 at each t."""

    def knot(a: np.ndarray, b: np.ndarray) -> float:
        return max(float(np.linalg.norm(b - a)), 1e-6) ** alpha

    t01 = knot(p0, p1)
    t12 = knot(p1, p2)
    t23 = knot(p2, p3)

    m1 = p2 - p1 + t12 * ((p1 - p0) / t01 - (p2 - p0) / (t01 + t12))
    m2 = p2 - p1 + t12 * ((p3 - p2) / t23 - (p3 - p1) / (t12 + t23))
    a = 2.0 * (p1 - p2) + m1 + m2
    b = -3.0 * (p1 - p2) - 2.0 * m1 - m2

    t = np.asarray(t, dtype=np.float64)[:, None]
    return a * t**3 + b * t**2 + m1 * t + p1


class Rail:
    """A closed spline through an ordered loop of control points."""

    def __init__(self, name: str, control_points: np.ndarray) -> None:
        points = np.asarray(control_points, dtype=np.float64).reshape(-1, 3)
        if len(points) < 3:
            raise ValueError(
                f"Rail '{name}' needs at least 3 control points, got {len(points)}"
            )
        self.name = name
        self.control_points = points

    def dense_points(self) -> np.ndarray:
        pts = self.control_points
        n = len(pts)
        t = np.linspace(0.0, 1.0, SAMPLES_PER_SEGMENT, endpoint=False)

        segments = [
            catmull_rom_segment(
                pts[(i - 1) % n], pts[i], pts[(i + 1) % n], pts[(i + 2) % n], t
            )
            for i in range(n)
        ]
        return np.concatenate(segments, axis=0)

    def length(self) -> float:
        dense = self.dense_points()
        closed = np.vstack([dense, dense[:1]])
        return float(np.linalg.norm(np.diff(closed, axis=0), axis=1).sum())

    def positions(self, step_size: float) -> np.ndarray:
        """
        Resample the loop at (close to) `step_size` arc-length spacing.

        The spacing is adjusted so the samples divide the loop evenly; the
        first point is the first control point and the loop is not closed
        with a duplicate.
        """
        if step_size <= 0.0:
            raise ValueError(f"step_size must be positive, got {step_size}")

        dense = self.dense_points()
        closed = np.vstack([dense, dense[:1]])

        seg_lengths = np.linalg.norm(np.diff(closed, axis=0), axis=1)
        cumulative = np.concatenate([[0.0], np.cumsum(seg_lengths)])
        total = cumulative[-1]

        count = max(2, int(round(total / step_size)))
        distances = np.arange(count) * (total / count)

        return np.column_stack(
            [np.interp(distances, cumulative, closed[:, k]) for k in range(3)]
        )


class RailManager:
    """Looks rails up by name from the RailNode components in a World."""

    def __init__(self, world: World) -> None:
        self._world = world

    def rail_names(self) -> List[str]:
        return sorted({node.rail_name for _, node in self._world.join(RailNode)})

    def get_rail_from_components(self, name: str, world: World) -> Rail:
        nodes = sorted(
            (node for _, node in world.join(RailNode) if node.rail_name == name),
            key=lambda node: node.order,
        )
        if not nodes:
            raise KeyError(f"No rail named '{name}'")

        return Rail(name, np.array([tuple(node.position) for node in nodes]))

    def positions(self, name: str, step_size: float) -> np.ndarray:
        track = self.get_rail_from_components(name, self._world).positions(
            step_size
        )
        logger.debug(
            "Sampled rail '%s' into %d points (step %.3f)", name, len(track), step_size
        )
        return track
