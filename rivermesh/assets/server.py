# rivermesh/assets/server.py
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from queue import Empty, Queue
from typing import Any, Dict, List, Optional, Tuple

from rivermesh.assets.handle import AssetHandle, AssetId
from rivermesh.assets.importers.base import AssetImporter
from rivermesh.assets.importers.material import MaterialImporter
from rivermesh.assets.importers.shader import ShaderImporter
from rivermesh.assets.importers.texture import TextureImporter
from rivermesh.assets.registry import AssetRegistry

logger = logging.getLogger(__name__)

# (asset id, data or None, error message or None)
_LoadResult = Tuple[AssetId, Optional[Any], Optional[str]]


class AssetServer:
    """
    Loads river materials, shaders and textures off the main thread.

    load() returns a handle immediately; update() moves finished loads into
    the registry and must be called from the thread that owns the registry.
    """

    def __init__(self, asset_root: Path, max_workers: int = 2) -> None:
        self.root = Path(asset_root)
        self.registry = AssetRegistry()

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="AssetWorker"
        )
        self._results: "Queue[_LoadResult]" = Queue()
        self._handles: Dict[str, AssetHandle] = {}

        self._importers: Dict[str, AssetImporter] = {}
        for importer in (TextureImporter(), ShaderImporter(), MaterialImporter()):
            self.register_importer(importer)

    def register_importer(self, importer: AssetImporter) -> None:
        for ext in importer.extensions:
            self._importers[ext.lower()] = importer

    def load(self, path: str) -> AssetHandle:
        handle = self._handles.get(path)
        if handle is not None:
            return handle

        handle = AssetHandle.for_path(path)
        self._handles[path] = handle
        self._executor.submit(self._worker_load, handle.id, self.root / path)
        return handle

    def _worker_load(self, asset_id: AssetId, full_path: Path) -> None:
        try:
            importer = self._importers.get(full_path.suffix.lower())
            if importer is None:
                raise ValueError(f"No importer for {full_path.suffix}")
            self._results.put((asset_id, importer.import_file(full_path), None))
        except Exception as e:
            logger.exception("Failed to load %s", full_path)
            self._results.put((asset_id, None, str(e)))

    def update(self) -> List[AssetId]:
        """Return the ids that finished loading successfully since last call."""
        loaded: List[AssetId] = []
        while True:
            try:
                asset_id, data, error = self._results.get_nowait()
            except Empty:
                break

            if error is not None:
                self.registry.fail(asset_id, error)
            else:
                self.registry.store(asset_id, data)
                loaded.append(asset_id)

        return loaded

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
