# rivermesh/assets/importers/shader.py
from pathlib import Path

from rivermesh.assets.importers.base import AssetImporter
from rivermesh.assets.types import ShaderSource

_STAGES = {".vert": "vertex", ".frag": "fragment"}


class ShaderImporter(AssetImporter):
    extensions = (".vert", ".frag", ".glsl")

    def import_file(self, path: Path) -> ShaderSource:
        source = path.read_text(encoding="utf-8")
        if not source.strip():
            raise ValueError(f"Shader is empty: {path}")

        # .glsl files hold either stage; the program decides.
        stage = _STAGES.get(path.suffix.lower())
        return ShaderSource(source=source, path=str(path), stage=stage)
