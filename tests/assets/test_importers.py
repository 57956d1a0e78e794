import pytest
from PIL import Image

from rivermesh.assets.importers.material import MaterialImporter
from rivermesh.assets.importers.shader import ShaderImporter
from rivermesh.assets.importers.texture import TextureImporter
from rivermesh.assets.types import MaterialDef, ShaderSource, TextureData


def test_material_importer(tmp_path):
    f = tmp_path / "river.mat.yaml"
    f.write_text(
        "name: river\n"
        "shader: shaders/river.vert\n"
        "textures:\n"
        "  diffuse: textures/water.png\n"
        "uniforms:\n"
        "  flow_speed: 0.4\n"
    )

    material = MaterialImporter().import_file(f)

    assert isinstance(material, MaterialDef)
    assert material.name == "river"
    assert material.shader == "shaders/river.vert"
    assert material.textures == {"diffuse": "textures/water.png"}
    assert material.uniforms == {"flow_speed": pytest.approx(0.4)}


def test_material_importer_defaults_name_to_file(tmp_path):
    f = tmp_path / "ground.yaml"
    f.write_text("shader: shaders/textured_opaque.vert\n")

    material = MaterialImporter().import_file(f)

    assert material.name == "ground"
    assert material.textures == {}
    assert material.uniforms == {}


@pytest.mark.parametrize(
    "content, message",
    [
        ("- just\n- a list\n", "not a mapping"),
        ("name: broken\n", "no shader"),
    ],
)
def test_material_importer_rejects(tmp_path, content, message):
    f = tmp_path / "bad.yaml"
    f.write_text(content)

    with pytest.raises(ValueError, match=message):
        MaterialImporter().import_file(f)


def test_texture_importer_flips_rows(tmp_path):
    # Top row red, bottom row blue.
    img = Image.new("RGB", (3, 2), color="red")
    for x in range(3):
        img.putpixel((x, 1), (0, 0, 255))
    f = tmp_path / "bank.png"
    img.save(f)

    tex = TextureImporter().import_file(f)

    assert isinstance(tex, TextureData)
    assert (tex.width, tex.height, tex.components) == (3, 2, 4)
    assert len(tex.data) == 3 * 2 * 4
    # First row in the buffer is the image's bottom row.
    assert tex.data[:4] == bytes((0, 0, 255, 255))
    assert tex.data[-4:] == bytes((255, 0, 0, 255))


@pytest.mark.parametrize(
    "name, stage",
    [("river.vert", "vertex"), ("river.frag", "fragment"), ("common.glsl", None)],
)
def test_shader_importer(tmp_path, name, stage):
    code = "#version 330 core\nin vec3 in_pos;\nvoid main() {}"
    f = tmp_path / name
    f.write_text(code)

    shader = ShaderImporter().import_file(f)

    assert isinstance(shader, ShaderSource)
    assert shader.source == code
    assert shader.path == str(f)
    assert shader.stage == stage


def test_shader_importer_rejects_empty(tmp_path):
    f = tmp_path / "empty.vert"
    f.write_text("  \n")

    with pytest.raises(ValueError, match="empty"):
        ShaderImporter().import_file(f)
