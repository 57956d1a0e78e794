# rivermesh/systems/river.py
from __future__ import annotations

import logging
from typing import List, Optional

from rivermesh.assets.server import AssetServer
from rivermesh.components import ChildOf, RenderMesh, RenderPass, RiverData
from rivermesh.config import RiverConfig
from rivermesh.core.events import RailChanged
from rivermesh.core.world import World
from rivermesh.interfaces import MeshSink, PathSource
from rivermesh.river.assembler import MeshBuffers, assemble_river
from rivermesh.serializer import RiverDef, Serializer
from rivermesh.types import EntityId

logger = logging.getLogger(__name__)


def river_mesh_id(eid: EntityId) -> str:
    return f"river.{eid}.surface"


def bank_mesh_id(eid: EntityId) -> str:
    return f"river.{eid}.bank"


class RiverSystem:
    """
    Owns every entity with RiverData: builds their meshes when they are
    added and rebuilds them whenever a rail they follow changes.

    Resources read from the world:
        RiverConfig  - cross-section and material settings
        PathSource   - samples rails by name
        MeshSink     - receives the generated buffers
        AssetServer  - optional; loads materials and shaders
    """

    def __init__(self) -> None:
        self._world: Optional[World] = None

    def init(self, world: World) -> None:
        self._world = world
        world.subscribe(RailChanged, self.on_rail_changed)

    def shutdown(self) -> None:
        if self._world is not None:
            self._world.unsubscribe(RailChanged, self.on_rail_changed)
            self._world = None

    def add_river(self, world: World, river_def: RiverDef) -> EntityId:
        eid = world.create_entity(
            RiverData(
                rail_name=river_def.rail_name,
                random_seed=river_def.random_seed,
            )
        )
        try:
            self.create_river_mesh(world, eid)
        except Exception:
            # A river whose meshes failed to build is not kept.
            self.remove_river(world, eid)
            raise
        return eid

    def add_from_raw_data(self, world: World, raw_data: bytes) -> EntityId:
        return self.add_river(world, Serializer.deserialize_river_def(raw_data))

    def export_raw_data(self, world: World, eid: EntityId) -> Optional[bytes]:
        data = world.component(eid, RiverData)
        if data is None:
            return None
        return Serializer.serialize_river_def(
            RiverDef(rail_name=data.rail_name, random_seed=data.random_seed)
        )

    def rivers(self, world: World) -> List[EntityId]:
        return [eid for eid, _ in world.join(RiverData)]

    def create_river_mesh(self, world: World, eid: EntityId) -> None:
        """Generate the river and bank meshes and attach them for rendering."""
        river = world.get_resource(RiverConfig)
        path_source = world.get_resource(PathSource)
        mesh_sink = world.get_resource(MeshSink)
        assets = world.try_resource(AssetServer)

        river_data = world.component(eid, RiverData)
        if river_data is None:
            raise KeyError(f"Entity {eid} has no RiverData")

        track = path_source.positions(river_data.rail_name, river.spline_stepsize)
        river_mesh, bank_mesh = assemble_river(river, track, river_data.random_seed)

        logger.info(
            "Generated river %s on rail '%s': %d river / %d bank vertices",
            eid,
            river_data.rail_name,
            river_mesh.vertex_count,
            bank_mesh.vertex_count,
        )

        self._upload(mesh_sink, river_mesh_id(eid), river_mesh, "River")
        self._upload(mesh_sink, bank_mesh_id(eid), bank_mesh, "River bank")

        # Never cull the river or its banks.
        world.add_component(
            eid,
            RenderMesh(
                mesh_id=river_mesh_id(eid),
                material=assets.load(river.material) if assets else None,
                shader=assets.load(river.shader) if assets else None,
                ignore_culling=True,
                pass_mask=1 << RenderPass.OPAQUE,
            ),
        )

        if river_data.bank is None or not world.exists(river_data.bank):
            # The bank is a child of the river so it always moves with it.
            river_data.bank = world.create_entity(ChildOf(parent=eid))

        world.add_component(
            river_data.bank,
            RenderMesh(
                mesh_id=bank_mesh_id(eid),
                material=assets.load(river.bank_material) if assets else None,
                shader=assets.load(river.bank_shader) if assets else None,
                ignore_culling=True,
                pass_mask=1 << RenderPass.OPAQUE,
            ),
        )

    def remove_river(self, world: World, eid: EntityId) -> None:
        if not world.has(eid, RiverData):
            return

        mesh_sink = world.try_resource(MeshSink)
        if mesh_sink is not None:
            mesh_sink.release(river_mesh_id(eid))
            mesh_sink.release(bank_mesh_id(eid))

        river_data = world.component(eid, RiverData)
        if river_data.bank is not None:
            world.delete_entity(river_data.bank)
        world.delete_entity(eid)

    def on_rail_changed(self, event: RailChanged) -> None:
        if self._world is None:
            return
        world = self._world

        for eid, river_data in list(world.join(RiverData)):
            if event.rail_name is None or river_data.rail_name == event.rail_name:
                self.create_river_mesh(world, eid)

    def _upload(
        self, sink: MeshSink, mesh_id: str, buffers: MeshBuffers, label: str
    ) -> None:
        sink.replace(mesh_id, buffers.to_mesh_data(), label=label)
