# rivermesh/assets/importers/texture.py
from pathlib import Path

from PIL import Image

from rivermesh.assets.importers.base import AssetImporter
from rivermesh.assets.types import TextureData


class TextureImporter(AssetImporter):
    """Water and ground textures. Always decoded to RGBA8."""

    extensions = (".png", ".jpg", ".jpeg")

    def import_file(self, path: Path) -> TextureData:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")

        # Banks tile along V around the whole loop; OpenGL wants the bottom
        # row first.
        rgba = rgba.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        return TextureData(
            data=rgba.tobytes(), width=rgba.width, height=rgba.height, components=4
        )
