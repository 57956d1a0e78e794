# rivermesh/assets/registry.py
from enum import Enum
from typing import Any, Dict, Optional

from rivermesh.assets.handle import AssetId


class AssetState(Enum):
    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


class AssetRegistry:
    """CPU-side data of loaded assets plus the reason any load failed."""

    def __init__(self) -> None:
        self._storage: Dict[AssetId, Any] = {}
        self._errors: Dict[AssetId, str] = {}

    def store(self, asset_id: AssetId, data: Any) -> None:
        self._errors.pop(asset_id, None)
        self._storage[asset_id] = data

    def fail(self, asset_id: AssetId, reason: str) -> None:
        self._storage.pop(asset_id, None)
        self._errors[asset_id] = reason

    def get(self, asset_id: AssetId) -> Optional[Any]:
        return self._storage.get(asset_id)

    def error(self, asset_id: AssetId) -> Optional[str]:
        return self._errors.get(asset_id)

    def state(self, asset_id: AssetId) -> AssetState:
        if asset_id in self._storage:
            return AssetState.LOADED
        if asset_id in self._errors:
            return AssetState.FAILED
        return AssetState.PENDING

    def __contains__(self, asset_id: AssetId) -> bool:
        return asset_id in self._storage

    def clear(self) -> None:
        self._storage.clear()
        self._errors.clear()
