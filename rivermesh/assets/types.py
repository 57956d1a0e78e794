# rivermesh/assets/types.py
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

Aabb = Tuple[Tuple[float, float, float], Tuple[float, float, float]]


@dataclass(frozen=True)
class VertexLayout:
    """Attribute names and the matching moderngl format string."""

    attributes: Sequence[str]  # shader inputs, in buffer order
    format: str  # e.g. "3f 2f 3f 4f"
    stride_bytes: int


@dataclass(frozen=True)
class MeshData:
    """Interleaved vertex bytes and uint16 indices, ready for a MeshSink."""

    vertices: bytes
    vertex_layout: VertexLayout
    aabb: Aabb
    indices: Optional[bytes] = None
    index_count: int = 0
    index_element_size: int = 2


@dataclass(frozen=True)
class TextureData:
    data: bytes
    width: int
    height: int
    components: int


@dataclass(frozen=True)
class ShaderSource:
    source: str
    path: str
    stage: Optional[str] = None  # "vertex", "fragment" or None for .glsl


@dataclass(frozen=True)
class MaterialDef:
    """
    Material description loaded from YAML. Shader and texture paths are
    relative to the asset root.
    """

    name: str
    shader: str
    textures: Dict[str, str] = field(default_factory=dict)
    uniforms: Dict[str, float] = field(default_factory=dict)
