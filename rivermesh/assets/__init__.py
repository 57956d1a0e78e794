from rivermesh.assets.handle import AssetHandle, AssetId
from rivermesh.assets.registry import AssetRegistry, AssetState
from rivermesh.assets.server import AssetServer
from rivermesh.assets.types import (
    MaterialDef,
    MeshData,
    ShaderSource,
    TextureData,
    VertexLayout,
)

__all__ = [
    "AssetHandle",
    "AssetId",
    "AssetRegistry",
    "AssetServer",
    "AssetState",
    "MaterialDef",
    "MeshData",
    "ShaderSource",
    "TextureData",
    "VertexLayout",
]
