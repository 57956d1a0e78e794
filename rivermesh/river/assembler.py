# rivermesh/river/assembler.py
"""
Builds the river surface strip and the surrounding bank surface from a
closed rail and the configured bank contours.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import ArrayLike

from rivermesh.assets.types import MeshData, VertexLayout
from rivermesh.config import RiverBankContour, RiverConfig, validate_contours
from rivermesh.geometry.tangents import compute_normals_tangents
from rivermesh.interfaces import NormalTangentPass
from rivermesh.math import cross_vec3, norm_vec
from rivermesh.river.quads import NUM_INDICES_PER_QUAD, bank_indices, river_indices
from rivermesh.river.sampler import ContourOffsetSampler
from rivermesh.types import AXIS_Z, Vector3

logger = logging.getLogger(__name__)

VERTEX_DTYPE = np.dtype(
    [
        ("position", np.float32, (3,)),
        ("texcoord", np.float32, (2,)),
        ("normal", np.float32, (3,)),
        ("tangent", np.float32, (4,)),
    ]
)

VERTEX_LAYOUT = VertexLayout(
    attributes=["in_pos", "in_uv", "in_normal", "in_tangent"],
    format="3f 2f 3f 4f",
    stride_bytes=VERTEX_DTYPE.itemsize,
)

PLACEHOLDER_NORMAL = (0.0, 1.0, 0.0)
PLACEHOLDER_TANGENT = (1.0, 0.0, 0.0, 1.0)

# Forward nudge applied to vertices that would fold back on a tight corner.
CORNER_EPSILON = 0.000001

# Indices are 16-bit.
MAX_INDEXED_VERTICES = 1 << 16

SEED_MASK = 0xFFFFFFFF


@dataclass
class MeshBuffers:
    """Vertex and index buffers for one generated mesh."""

    vertices: np.ndarray  # VERTEX_DTYPE
    indices: np.ndarray  # uint16, triangle list

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def index_count(self) -> int:
        return len(self.indices)

    def to_mesh_data(self) -> MeshData:
        """Pack into the byte payload the mesh sink uploads."""
        positions = self.vertices["position"]
        lo = tuple(float(c) for c in positions.min(axis=0))
        hi = tuple(float(c) for c in positions.max(axis=0))

        return MeshData(
            vertices=self.vertices.tobytes(),
            vertex_layout=VERTEX_LAYOUT,
            aabb=(lo, hi),
            indices=self.indices.astype("<u2").tobytes(),
            index_count=self.index_count,
            index_element_size=2,
        )


def _empty_vertices(count: int) -> np.ndarray:
    verts = np.zeros(count, dtype=VERTEX_DTYPE)
    verts["normal"] = PLACEHOLDER_NORMAL
    verts["tangent"] = PLACEHOLDER_TANGENT
    return verts


def assemble(
    path: ArrayLike,
    contours: Sequence[RiverBankContour],
    river_index: int,
    track_height: float,
    texture_tile_count: float,
    rng_seed: int,
    normal_tangent_pass: Optional[NormalTangentPass] = compute_normals_tangents,
) -> Tuple[MeshBuffers, MeshBuffers]:
    """
    Generate the river and bank meshes for a closed rail.

    Args:
        path: (segment_count, 3) rail samples. The sample after the last one
            wraps back to the first.
        contours: Bank contours, ordered left to right.
        river_index: Contour forming the river's left edge; the next contour
            forms its right edge.
        track_height: Offset of every vertex along the world up axis.
        texture_tile_count: Times the texture repeats around the whole loop.
        rng_seed: Seed for the bank offsets. Same seed, same mesh.
        normal_tangent_pass: Run over the bank buffers before returning.
            None leaves the placeholder normals and tangents in place.

    Returns:
        (river_mesh, bank_mesh)

    Raises:
        ValueError: If the contours, river index or rail cannot form a mesh.
        RuntimeError: If the produced buffers do not have the expected sizes.
    """
    track = np.asarray(path, dtype=np.float64).reshape(-1, 3)

    num_bank_contours = len(contours)
    validate_contours(contours, river_index)

    segment_count = len(track)
    if segment_count < 2:
        raise ValueError(
            f"A river rail needs at least 2 samples, got {segment_count}"
        )

    num_bank_quads = num_bank_contours - 2
    river_vert_max = segment_count * 2
    river_index_max = (segment_count - 1) * NUM_INDICES_PER_QUAD
    bank_vert_max = segment_count * num_bank_contours
    bank_index_max = (segment_count - 1) * NUM_INDICES_PER_QUAD * num_bank_quads

    if bank_vert_max > MAX_INDEXED_VERTICES:
        raise ValueError(
            f"{segment_count} rail samples x {num_bank_contours} contours "
            f"exceeds {MAX_INDEXED_VERTICES} vertices; increase the step size"
        )

    logger.debug(
        "Assembling river: %d segments, %d contours, river index %d, seed %d",
        segment_count,
        num_bank_contours,
        river_index,
        rng_seed,
    )

    # Seeds wrap to 32 bits, so any int (negative included) is accepted.
    rng = np.random.default_rng(rng_seed & SEED_MASK)
    sampler = ContourOffsetSampler(contours)

    up = AXIS_Z.to_array()

    bank_verts = _empty_vertices(bank_vert_max)
    river_verts = _empty_vertices(river_vert_max)
    bank_pos = bank_verts["position"]
    bank_tc = bank_verts["texcoord"]

    # The texture is stretched from the side of the river to the far end of
    # the bank. The river splits the contours into two independent banks.
    contour_ids = np.arange(num_bank_contours)
    left_bank = contour_ids <= river_index
    bank_start = np.where(left_bank, 0, river_index + 1)
    bank_end = np.where(left_bank, river_index, num_bank_contours - 1)

    for i in range(segment_count):
        # River track is circular.
        prev_i = segment_count - 1 if i == 0 else i - 1

        track_delta = track[i] - track[prev_i]
        track_normal = norm_vec(
            cross_vec3(Vector3.from_array(track_delta), AXIS_Z)
        ).to_array()
        track_position = track[i] + track_height * up

        texture_v = texture_tile_count * i / segment_count

        offsets = sampler.sample(rng)
        side = offsets[:, 0]
        lift = offsets[:, 1]

        row = slice(i * num_bank_contours, (i + 1) * num_bank_contours)
        bank_pos[row] = (
            track_position
            + side[:, None] * track_normal
            + lift[:, None] * up
        )

        bank_width = side[bank_start] - side[bank_end]
        # A zero-width bank yields nan u; callers must avoid single-contour banks.
        with np.errstate(divide="ignore", invalid="ignore"):
            bank_tc[row, 0] = (side - side[bank_end]) / bank_width
        bank_tc[row, 1] = texture_v

        # Ensure vertices don't go behind previous vertices on the inside of
        # a tight corner.
        if i > 0:
            prev_row = slice(row.start - num_bank_contours, row.start)
            prev_pos = bank_pos[prev_row].astype(np.float64)
            vert_delta = bank_pos[row].astype(np.float64) - prev_pos
            backwards = (vert_delta @ track_delta) <= 0.0
            if np.any(backwards):
                rows = row.start + np.flatnonzero(backwards)
                bank_pos[rows] = prev_pos[backwards] + CORNER_EPSILON * track_delta

        # Force the beginning and end to line up in their geometry.
        if i == segment_count - 1:
            bank_pos[row] = bank_pos[:num_bank_contours]

        # The river shares the two middle vertices of the bank, with its own
        # texture coordinates spanning edge to edge.
        river_vert = row.start + river_index
        river_verts["position"][2 * i] = bank_pos[river_vert]
        river_verts["position"][2 * i + 1] = bank_pos[river_vert + 1]
        river_verts["texcoord"][2 * i] = (0.0, texture_v)
        river_verts["texcoord"][2 * i + 1] = (1.0, texture_v)

    river_idx = river_indices(segment_count)
    bank_idx = bank_indices(segment_count, num_bank_contours, river_index)

    # Make sure we produced exactly as much data as expected.
    if (
        len(river_verts) != river_vert_max
        or len(river_idx) != river_index_max
        or len(bank_verts) != bank_vert_max
        or len(bank_idx) != bank_index_max
    ):
        raise RuntimeError(
            "River buffers have unexpected sizes: "
            f"river {len(river_verts)}/{len(river_idx)} "
            f"(expected {river_vert_max}/{river_index_max}), "
            f"bank {len(bank_verts)}/{len(bank_idx)} "
            f"(expected {bank_vert_max}/{bank_index_max})"
        )

    if normal_tangent_pass is not None:
        normal_tangent_pass(bank_verts, bank_idx)

    return (
        MeshBuffers(vertices=river_verts, indices=river_idx),
        MeshBuffers(vertices=bank_verts, indices=bank_idx),
    )


def assemble_river(
    config: RiverConfig,
    path: ArrayLike,
    rng_seed: int,
    normal_tangent_pass: Optional[NormalTangentPass] = compute_normals_tangents,
) -> Tuple[MeshBuffers, MeshBuffers]:
    """assemble() with the cross-section taken from a RiverConfig."""
    return assemble(
        path,
        config.banks,
        config.river_index,
        config.track_height,
        config.texture_tile_size,
        rng_seed,
        normal_tangent_pass=normal_tangent_pass,
    )
