from __future__ import annotations

from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from rivermesh.core.events import EventManager
from rivermesh.core.resources import ResourceManager
from rivermesh.types import EntityId

T = TypeVar("T")
Ev = TypeVar("Ev")


class World:
    """
    Entity/component storage plus the global resources and events.

    Components are stored per type in insertion order, so queries are
    deterministic. An entity may hold at most one component of each type.
    """

    def __init__(self) -> None:
        self._next_id: int = 1

        # ECS data
        self._entities: Dict[EntityId, set[Type[Any]]] = {}
        self._components: Dict[Type[Any], Dict[EntityId, Any]] = {}

        # Managers
        self._resource_manager = ResourceManager()
        self._event_manager = EventManager()

    # RESOURCE MANAGEMENT
    def add_resource(self, resource: Any, as_type: Type[Any] | None = None) -> None:
        """Register a global resource (e.g. RiverConfig, a PathSource)."""
        self._resource_manager.add(resource, as_type)

    def get_resource(self, resource_type: Type[T]) -> T:
        """Retrieve a resource. Raises KeyError if missing."""
        return self._resource_manager.get(resource_type)

    def try_resource(self, resource_type: Type[T]) -> T | None:
        """Retrieve a resource or returns None."""
        return self._resource_manager.try_get(resource_type)

    def remove_resource(self, resource_type: Type[Any]) -> None:
        self._resource_manager.remove(resource_type)

    # EVENT MANAGEMENT
    def emit_event(self, event: Any) -> None:
        """Queues an event signal and notifies subscribers."""
        self._event_manager.emit(event)

    def get_events(self, event_type: Type[Ev]) -> List[Ev]:
        """Consumes and returns all events of the given type."""
        return self._event_manager.get(event_type)

    def subscribe(
        self, event_type: Type[Ev], listener: Callable[[Ev], None]
    ) -> None:
        self._event_manager.subscribe(event_type, listener)

    def unsubscribe(
        self, event_type: Type[Ev], listener: Callable[[Ev], None]
    ) -> None:
        self._event_manager.unsubscribe(event_type, listener)

    # ENTITY MANAGEMENT
    def create_entity(self, *components: Any) -> EntityId:
        """Creates an entity, optionally with starting components."""
        eid = EntityId(self._next_id)
        self._next_id += 1
        self._entities[eid] = set()

        for c in components:
            self.add_component(eid, c)

        return eid

    def delete_entity(self, eid: EntityId) -> None:
        types = self._entities.pop(eid, None)
        if types is None:
            return
        for t in types:
            del self._components[t][eid]

    def exists(self, eid: EntityId) -> bool:
        return eid in self._entities

    # COMPONENT MANAGEMENT
    def add_component(self, eid: EntityId, component: Any) -> None:
        """Attach a component, replacing any existing one of the same type."""
        if eid not in self._entities:
            raise KeyError(f"Entity {eid} does not exist.")

        comp_type = type(component)
        self._components.setdefault(comp_type, {})[eid] = component
        self._entities[eid].add(comp_type)

    def remove_component(self, eid: EntityId, component_type: Type[Any]) -> None:
        types = self._entities.get(eid)
        if not types or component_type not in types:
            return
        types.discard(component_type)
        del self._components[component_type][eid]

    def mutate_component(self, eid: EntityId, component: Any) -> None:
        """
        Update an EXISTING component with a new instance.
        """
        if eid not in self._entities:
            raise KeyError(f"Entity {eid} does not exist.")

        comp_type = type(component)
        if comp_type not in self._entities[eid]:
            raise KeyError(
                f"Entity {eid} cannot mutate {comp_type.__name__}: Component missing. "
                "Use world.add_component() to attach new components."
            )
        self._components[comp_type][eid] = component

    def component(self, eid: EntityId, component_type: Type[T]) -> Optional[T]:
        return self._components.get(component_type, {}).get(eid)

    def has(self, eid: EntityId, component_type: Type[Any]) -> bool:
        types = self._entities.get(eid)
        return bool(types) and component_type in types

    # QUERIES
    def join(self, *component_types: Type[Any]) -> Iterator[Tuple[Any, ...]]:
        """
        Yields (eid, comp1, comp2, ...) for every entity holding all of the
        given component types.
        """
        if not component_types:
            return

        first, *rest = component_types
        for eid, comp in list(self._components.get(first, {}).items()):
            others = []
            for t in rest:
                other = self._components.get(t, {}).get(eid)
                if other is None:
                    break
                others.append(other)
            else:
                yield (eid, comp, *others)
