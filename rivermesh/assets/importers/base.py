# rivermesh/assets/importers/base.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Tuple


class AssetImporter(ABC):
    # Lowercase file suffixes this importer handles, e.g. (".png", ".jpg").
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def import_file(self, path: Path) -> Any:
        """Runs on an asset worker thread; must not touch the GL context."""
