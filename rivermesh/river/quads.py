# rivermesh/river/quads.py
from __future__ import annotations

from typing import List

import numpy as np

NUM_INDICES_PER_QUAD = 6


def make_quad(indices: List[int], base_index: int, off1: int, off2: int) -> None:
    """
    Append two triangles joining vertex pair (off1, off1 + 1) to the pair
    (off2, off2 + 1). Winding is fixed: (a, a+1, b), (b, a+1, b+1).
    """
    a = base_index + off1
    b = base_index + off2

    indices.append(a)
    indices.append(a + 1)
    indices.append(b)

    indices.append(b)
    indices.append(a + 1)
    indices.append(b + 1)


def river_indices(segment_count: int) -> np.ndarray:
    """One quad per segment; river vertices are stored two per rail sample."""
    indices: List[int] = []
    for i in range(segment_count - 1):
        make_quad(indices, 2 * i, 0, 2)
    return np.array(indices, dtype=np.uint16)


def bank_indices(
    segment_count: int, num_contours: int, river_index: int
) -> np.ndarray:
    """
    One quad per adjacent contour pair per segment, skipping the river gap.

    Case when num_contours = 8, and river_index = 3:

     0___1___2___3   4___5___6___7
     | _/| _/| _/|   | _/| _/| _/|
     |/__|/__|/__|   |/__|/__|/__|
     8   9  10  11  12  13  14  15
    """
    indices: List[int] = []
    for i in range(segment_count - 1):
        for j in range(num_contours - 1):
            if j == river_index:
                continue
            make_quad(indices, i * num_contours, j, num_contours + j)
    return np.array(indices, dtype=np.uint16)
