# rivermesh/river/sampler.py
from __future__ import annotations

from typing import Sequence

import numpy as np

from rivermesh.config import RiverBankContour
from rivermesh.math import lerp_array


class ContourOffsetSampler:
    """
    Draws the (side, up) offset of every bank contour for one rail sample.

    side == distance along the lateral track normal
    up   == distance along the world up axis

    Ranges with min > max are not checked; they simply lerp backwards.
    """

    def __init__(self, contours: Sequence[RiverBankContour]) -> None:
        self.num_contours = len(contours)

        self._mins = np.array(
            [(c.x_min, c.z_min) for c in contours], dtype=np.float64
        ).reshape(self.num_contours, 2)
        self._maxs = np.array(
            [(c.x_max, c.z_max) for c in contours], dtype=np.float64
        ).reshape(self.num_contours, 2)

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        """
        Returns an (num_contours, 2) array of offsets.
        Draw order is u0, v0, u1, v1, ... so a given seed always yields the
        same offsets along the rail.
        """
        t = rng.random((self.num_contours, 2))
        return lerp_array(self._mins, self._maxs, t)


def sample_offsets(
    contours: Sequence[RiverBankContour], rng: np.random.Generator
) -> np.ndarray:
    return ContourOffsetSampler(contours).sample(rng)
