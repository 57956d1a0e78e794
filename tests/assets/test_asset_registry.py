from rivermesh.assets.handle import AssetHandle, AssetId, asset_id_for
from rivermesh.assets.registry import AssetRegistry, AssetState
from rivermesh.assets.types import ShaderSource


def test_asset_ids_are_stable():
    assert asset_id_for("shaders/river.vert") == asset_id_for("shaders/river.vert")
    assert asset_id_for("shaders/river.vert") == asset_id_for("shaders\\river.vert")
    assert asset_id_for("shaders/river.vert") != asset_id_for("shaders/river.frag")
    assert 0 <= asset_id_for("x") < 2**64

    handle = AssetHandle.for_path("materials/river.mat.yaml")
    assert handle.id == asset_id_for("materials/river.mat.yaml")


def test_store_replaces_previous_data():
    registry = AssetRegistry()
    asset_id = AssetId(42)

    registry.store(asset_id, ShaderSource("void main() {}", "a.vert"))
    registry.store(asset_id, ShaderSource("// v2", "a.vert"))

    assert asset_id in registry
    assert registry.get(asset_id).source == "// v2"
    assert registry.state(asset_id) is AssetState.LOADED


def test_failure_is_recorded():
    registry = AssetRegistry()
    asset_id = AssetId(7)

    assert registry.state(asset_id) is AssetState.PENDING

    registry.fail(asset_id, "missing file")
    assert registry.state(asset_id) is AssetState.FAILED
    assert registry.error(asset_id) == "missing file"
    assert asset_id not in registry

    # A later successful reload clears the error.
    registry.store(asset_id, "ground")
    assert registry.state(asset_id) is AssetState.LOADED
    assert registry.error(asset_id) is None


def test_clear():
    registry = AssetRegistry()
    registry.store(AssetId(1), "ground")
    registry.fail(AssetId(2), "broken")

    registry.clear()

    assert registry.state(AssetId(1)) is AssetState.PENDING
    assert registry.state(AssetId(2)) is AssetState.PENDING
