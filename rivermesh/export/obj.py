# rivermesh/export/obj.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from rivermesh.river.assembler import MeshBuffers

logger = logging.getLogger(__name__)


def export_obj(buffers: MeshBuffers, path: Union[str, Path], name: str = "mesh") -> Path:
    """
    Write a generated mesh as Wavefront OBJ.

    Every vertex carries its own position, texcoord and normal, so the face
    entries reuse one index for all three (f a/a/a b/b/b c/c/c).
    """
    path = Path(path)
    verts = buffers.vertices
    tris = buffers.indices.reshape(-1, 3)

    lines = [f"# {buffers.vertex_count} vertices, {len(tris)} triangles", f"o {name}"]
    lines.extend("v {:.6f} {:.6f} {:.6f}".format(*p) for p in verts["position"])
    lines.extend("vt {:.6f} {:.6f}".format(*uv) for uv in verts["texcoord"])
    lines.extend("vn {:.6f} {:.6f} {:.6f}".format(*n) for n in verts["normal"])

    for a, b, c in tris.astype(int) + 1:
        lines.append(f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}")

    path.write_text("\n".join(lines) + "\n")
    logger.info("Wrote %s (%d vertices, %d triangles)", path, buffers.vertex_count, len(tris))
    return path
