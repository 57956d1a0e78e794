# rivermesh/geometry/tangents.py
import numpy as np

from rivermesh.math import normalize_rows


def compute_normals_tangents(vertices: np.ndarray, indices: np.ndarray) -> None:
    """
    Overwrite the "normal" and "tangent" fields of a vertex buffer in place.

    Normals are the area-weighted average of the face normals around each
    vertex. Tangents follow the texture U direction, orthogonalized against
    the normal, with the bitangent handedness stored in w (+1 or -1).

    Vertices not referenced by any triangle keep a zero normal and get the
    fallback tangent (1, 0, 0, 1).
    """
    tris = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    n_verts = len(vertices)

    pos = vertices["position"].astype(np.float64)
    uv = vertices["texcoord"].astype(np.float64)

    p0 = pos[tris[:, 0]]
    p1 = pos[tris[:, 1]]
    p2 = pos[tris[:, 2]]
    e1 = p1 - p0
    e2 = p2 - p0

    face_normals = np.cross(e1, e2)

    normals = np.zeros((n_verts, 3), dtype=np.float64)
    for k in range(3):
        np.add.at(normals, tris[:, k], face_normals)

    normals = normalize_rows(normals)

    # Per-face texture space directions.
    duv1 = uv[tris[:, 1]] - uv[tris[:, 0]]
    duv2 = uv[tris[:, 2]] - uv[tris[:, 0]]
    det = duv1[:, 0] * duv2[:, 1] - duv2[:, 0] * duv1[:, 1]

    # Faces with a degenerate UV mapping contribute nothing.
    valid = np.abs(det) > 1e-12
    r = np.zeros_like(det)
    r[valid] = 1.0 / det[valid]

    sdir = (e1 * duv2[:, 1, None] - e2 * duv1[:, 1, None]) * r[:, None]
    tdir = (e2 * duv1[:, 0, None] - e1 * duv2[:, 0, None]) * r[:, None]
    sdir[~valid] = 0.0
    tdir[~valid] = 0.0

    tan1 = np.zeros((n_verts, 3), dtype=np.float64)
    tan2 = np.zeros((n_verts, 3), dtype=np.float64)
    for k in range(3):
        np.add.at(tan1, tris[:, k], sdir)
        np.add.at(tan2, tris[:, k], tdir)

    # Gram-Schmidt: t = normalize(t - n * dot(n, t))
    tangents = tan1 - normals * np.sum(normals * tan1, axis=1, keepdims=True)
    tlen = np.linalg.norm(tangents, axis=1, keepdims=True)
    degenerate = tlen[:, 0] < 1e-12
    tangents = tangents / np.where(degenerate[:, None], 1.0, tlen)
    tangents[degenerate] = (1.0, 0.0, 0.0)

    handedness = np.where(
        np.sum(np.cross(normals, tan1) * tan2, axis=1) < 0.0, -1.0, 1.0
    )

    vertices["normal"] = normals
    vertices["tangent"][:, :3] = tangents
    vertices["tangent"][:, 3] = handedness
