import pytest

from rivermesh.serializer import RiverDef, Serializer


def test_river_def_packing():
    data = Serializer.serialize_river_def(RiverDef("east_loop", 1234))

    assert data[:4] == (1234).to_bytes(4, "big")
    assert data[4:6] == (9).to_bytes(2, "big")
    assert data[6:] == b"east_loop"
    assert Serializer.deserialize_river_def(data) == RiverDef("east_loop", 1234)


def test_empty_rail_name():
    data = Serializer.serialize_river_def(RiverDef("", 7))
    assert len(data) == 6
    assert Serializer.deserialize_river_def(data) == RiverDef("", 7)


def test_unicode_rail_name():
    river_def = RiverDef("río", 3)
    data = Serializer.serialize_river_def(river_def)
    assert Serializer.deserialize_river_def(data) == river_def


@pytest.mark.parametrize("data", [b"", b"\x00\x00\x00\x01\x00\x05abc"])
def test_truncated_record(data):
    with pytest.raises(ValueError, match="truncated"):
        Serializer.deserialize_river_def(data)


def test_negative_seed_is_stored_as_unsigned():
    data = Serializer.serialize_river_def(RiverDef("east", -1))

    assert data[:4] == b"\xff\xff\xff\xff"
    assert Serializer.deserialize_river_def(data) == RiverDef("east", 0xFFFFFFFF)
