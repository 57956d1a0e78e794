# rivermesh/assets/handle.py
import hashlib
from dataclasses import dataclass
from typing import NewType

AssetId = NewType("AssetId", int)


def asset_id_for(path: str) -> AssetId:
    """Stable id for a path relative to the asset root."""
    digest = hashlib.sha256(path.replace("\\", "/").encode("utf-8")).digest()
    return AssetId(int.from_bytes(digest[:8], "big"))


@dataclass(frozen=True)
class AssetHandle:
    """
    What a RenderMesh stores instead of the asset itself. The data may
    still be loading; look it up in the AssetRegistry by id.
    """

    id: AssetId
    path: str

    @classmethod
    def for_path(cls, path: str) -> "AssetHandle":
        return cls(asset_id_for(path), path)
