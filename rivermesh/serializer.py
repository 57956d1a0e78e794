import struct
from dataclasses import dataclass


@dataclass(frozen=True)
class RiverDef:
    """The persisted part of a river: which rail it follows and its seed."""

    rail_name: str = ""
    random_seed: int = 0


class Serializer:
    """
    Packs RiverDef records to raw bytes.
    Format: [seed: u32] [name length: u16] [name: utf-8]

    Seeds are stored modulo 2**32, the same reduction the generator applies,
    so a negative seed reloads as a different int that builds the same mesh.
    """

    _header_struct = struct.Struct("!IH")

    @classmethod
    def serialize_river_def(cls, river_def: RiverDef) -> bytes:
        name = river_def.rail_name.encode("utf-8")
        if len(name) > 0xFFFF:
            raise ValueError(f"Rail name too long: {len(name)} bytes")
        seed = river_def.random_seed & 0xFFFFFFFF
        header = cls._header_struct.pack(seed, len(name))
        return header + name

    @classmethod
    def deserialize_river_def(cls, data: bytes) -> RiverDef:
        if len(data) < cls._header_struct.size:
            raise ValueError("River record is truncated")

        seed, name_len = cls._header_struct.unpack(data[: cls._header_struct.size])
        start = cls._header_struct.size
        name = data[start : start + name_len]
        if len(name) != name_len:
            raise ValueError("River record is truncated")

        return RiverDef(rail_name=name.decode("utf-8"), random_seed=seed)
