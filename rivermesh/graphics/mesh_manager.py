# rivermesh/graphics/mesh_manager.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, NewType, Optional

import moderngl

from rivermesh.assets.types import MeshData, VertexLayout

logger = logging.getLogger(__name__)

MeshId = NewType("MeshId", str)


@dataclass(slots=True)
class MeshHandle:
    """GPU-side mesh representation."""

    vbo: moderngl.Buffer
    ibo: Optional[moderngl.Buffer]
    vertex_layout: VertexLayout
    index_count: int
    index_element_size: int
    mode: int
    label: str
    data: MeshData


class MeshManager:
    """Uploads generated meshes and caches them by id."""

    def __init__(self, gl: moderngl.Context) -> None:
        self._gl = gl
        self._meshes: Dict[MeshId, MeshHandle] = {}

    def __contains__(self, mesh_id: str) -> bool:
        return mesh_id in self._meshes

    def create(self, mesh_id: str, data: MeshData, *, label: str = "") -> MeshHandle:
        """Upload a mesh and store it under mesh_id."""
        if mesh_id in self._meshes:
            raise KeyError(f"Mesh '{mesh_id}' already exists")

        vbo = self._gl.buffer(data.vertices)

        ibo: Optional[moderngl.Buffer] = None
        if data.indices is not None:
            ibo = self._gl.buffer(data.indices)

        handle = MeshHandle(
            vbo=vbo,
            ibo=ibo,
            vertex_layout=data.vertex_layout,
            index_count=data.index_count,
            index_element_size=data.index_element_size,
            mode=moderngl.TRIANGLES,
            label=label or str(mesh_id),
            data=data,
        )

        self._meshes[MeshId(mesh_id)] = handle
        return handle

    def replace(self, mesh_id: str, data: MeshData, *, label: str = "") -> MeshHandle:
        """Release any existing buffers for mesh_id and upload new ones."""
        self.release(mesh_id)
        return self.create(mesh_id, data, label=label)

    def release(self, mesh_id: str) -> None:
        handle = self._meshes.pop(MeshId(mesh_id), None)
        if handle is None:
            return

        handle.vbo.release()
        if handle.ibo is not None:
            handle.ibo.release()
        logger.debug("Released mesh '%s'", mesh_id)

    def get(self, mesh_id: str) -> MeshHandle:
        """Retrieve an existing mesh handle."""
        try:
            return self._meshes[MeshId(mesh_id)]
        except KeyError:
            raise KeyError(f"Mesh '{mesh_id}' not found")

    def vertex_array(
        self, mesh_id: str, program: moderngl.Program
    ) -> moderngl.VertexArray:
        """Build a VAO binding this mesh's attributes to the program."""
        mesh = self.get(mesh_id)
        layout = mesh.vertex_layout
        content = [(mesh.vbo, layout.format, *layout.attributes)]

        return self._gl.vertex_array(
            program,
            content,
            index_buffer=mesh.ibo,
            index_element_size=mesh.index_element_size,
            mode=mesh.mode,
        )
