from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from rivermesh.assets.handle import AssetHandle
from rivermesh.types import EntityId, Vector3


class RenderPass(IntEnum):
    OPAQUE = 0
    ALPHA = 1


@dataclass
class RiverData:
    """
    Per-river state. Only rail_name and random_seed are persisted; the bank
    entity is recreated on load.
    """

    rail_name: str = ""
    random_seed: int = 0
    bank: Optional[EntityId] = None


@dataclass
class RenderMesh:
    mesh_id: str
    material: Optional[AssetHandle] = None
    shader: Optional[AssetHandle] = None
    ignore_culling: bool = False
    pass_mask: int = 1 << RenderPass.OPAQUE


@dataclass
class ChildOf:
    """
    Marks this entity as a child of another, so it moves with its parent.
    """

    parent: EntityId
    offset: Vector3 = Vector3(0.0, 0.0, 0.0)
