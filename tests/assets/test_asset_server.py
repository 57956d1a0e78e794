from rivermesh.assets.handle import AssetHandle
from rivermesh.assets.importers.shader import ShaderImporter
from rivermesh.assets.registry import AssetState
from rivermesh.assets.server import AssetServer
from rivermesh.assets.types import MaterialDef, ShaderSource


def test_load_material_in_background(tmp_path):
    (tmp_path / "materials").mkdir()
    (tmp_path / "materials" / "river.mat.yaml").write_text(
        "shader: shaders/river.vert\n"
    )

    server = AssetServer(asset_root=tmp_path)
    handle = server.load("materials/river.mat.yaml")

    assert isinstance(handle, AssetHandle)
    assert handle.path == "materials/river.mat.yaml"

    server.shutdown(wait=True)
    loaded = server.update()

    assert loaded == [handle.id]
    material = server.registry.get(handle.id)
    assert isinstance(material, MaterialDef)
    assert material.shader == "shaders/river.vert"


def test_same_path_same_handle(tmp_path):
    (tmp_path / "river.vert").write_text("void main() {}")
    server = AssetServer(asset_root=tmp_path)

    h1 = server.load("river.vert")
    h2 = server.load("river.vert")
    server.shutdown()

    assert h1 is h2


def test_failed_load_is_logged_and_recorded(tmp_path, caplog):
    server = AssetServer(asset_root=tmp_path)

    handle = server.load("missing.frag")
    server.shutdown(wait=True)

    assert server.update() == []
    assert server.registry.state(handle.id) is AssetState.FAILED
    assert "Failed to load" in caplog.text


def test_unknown_extension(tmp_path):
    (tmp_path / "notes.txt").write_text("hello")
    server = AssetServer(asset_root=tmp_path)

    handle = server.load("notes.txt")
    server.shutdown(wait=True)
    server.update()

    assert server.registry.error(handle.id) == "No importer for .txt"


def test_register_importer(tmp_path):
    class ComputeShaderImporter(ShaderImporter):
        extensions = (".comp",)

    (tmp_path / "flow.comp").write_text("void main() {}")
    server = AssetServer(asset_root=tmp_path)
    server.register_importer(ComputeShaderImporter())

    handle = server.load("flow.comp")
    server.shutdown(wait=True)
    server.update()

    shader = server.registry.get(handle.id)
    assert isinstance(shader, ShaderSource)
    assert shader.stage is None
