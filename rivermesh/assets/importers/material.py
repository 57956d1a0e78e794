# rivermesh/assets/importers/material.py
from pathlib import Path

import yaml

from rivermesh.assets.importers.base import AssetImporter
from rivermesh.assets.types import MaterialDef


class MaterialImporter(AssetImporter):
    """
    Reads a material description such as:

        name: river
        shader: shaders/river.vert
        textures:
          diffuse: textures/water.png
        uniforms:
          flow_speed: 0.4
    """

    extensions = (".yaml", ".yml")

    def import_file(self, path: Path) -> MaterialDef:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Material file is not a mapping: {path}")
        if "shader" not in data:
            raise ValueError(f"Material has no shader: {path}")

        return MaterialDef(
            name=str(data.get("name", path.stem)),
            shader=str(data["shader"]),
            textures={str(k): str(v) for k, v in (data.get("textures") or {}).items()},
            uniforms={
                str(k): float(v) for k, v in (data.get("uniforms") or {}).items()
            },
        )
