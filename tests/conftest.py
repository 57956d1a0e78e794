import math
from typing import List

import numpy as np
import pytest

from rivermesh.config import RiverBankContour, RiverConfig
from rivermesh.core.world import World


def make_contours(count: int, spacing: float = 4.0) -> List[RiverBankContour]:
    """Evenly spaced, non-overlapping contours ordered left to right."""
    contours = []
    for j in range(count):
        center = (j - (count - 1) / 2.0) * spacing
        contours.append(
            RiverBankContour(
                x_min=center - 0.5,
                x_max=center + 0.5,
                z_min=0.0,
                z_max=abs(center) * 0.1,
            )
        )
    return contours


def circle_path(count: int, radius: float = 50.0, z: float = 0.0) -> np.ndarray:
    """Counter-clockwise loop in the XY plane, without a closing duplicate."""
    angles = np.arange(count) * (2.0 * math.pi / count)
    return np.column_stack(
        [radius * np.cos(angles), radius * np.sin(angles), np.full(count, z)]
    )


class FakeBuffer:
    def __init__(self, data: bytes):
        self.data = data
        self.released = False

    def release(self) -> None:
        self.released = True


class FakeGL:
    """Stands in for a moderngl.Context; records uploads."""

    def __init__(self):
        self.buffers: List[FakeBuffer] = []
        self.vertex_arrays = []

    def buffer(self, data: bytes) -> FakeBuffer:
        buf = FakeBuffer(data)
        self.buffers.append(buf)
        return buf

    def vertex_array(self, program, content, **kwargs):
        vao = (program, content, kwargs)
        self.vertex_arrays.append(vao)
        return vao


@pytest.fixture
def world():
    """Returns a fresh World instance for each test."""
    return World()


@pytest.fixture
def contours():
    return make_contours(8)


@pytest.fixture
def river_config():
    return RiverConfig(
        spline_stepsize=5.0,
        track_height=0.5,
        texture_tile_size=4.0,
        river_index=3,
        banks=make_contours(8),
    )


@pytest.fixture
def fake_gl():
    return FakeGL()
