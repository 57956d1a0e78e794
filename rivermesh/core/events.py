import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")


class Event:
    """Base class for all Events."""

    pass


@dataclass(frozen=True)
class RailChanged(Event):
    """
    Emitted by editors when a rail's control points were moved.
    rail_name None means "some rail changed" and refreshes every river.
    """

    rail_name: Optional[str] = None


class EventManager:
    """
    Forwards events immediately to the listeners subscribed to the event's
    exact type. Events nobody listens to are queued for systems that poll
    with get().
    """

    def __init__(self):
        self._queues: Dict[Type[Any], List[Any]] = defaultdict(list)
        self._listeners: Dict[Type[Any], List[Callable[[Any], None]]] = (
            defaultdict(list)
        )

    def subscribe(self, event_type: Type[E], listener: Callable[[E], None]) -> None:
        if listener not in self._listeners[event_type]:
            self._listeners[event_type].append(listener)

    def unsubscribe(
        self, event_type: Type[E], listener: Callable[[E], None]
    ) -> None:
        if listener in self._listeners.get(event_type, []):
            self._listeners[event_type].remove(listener)

    def emit(self, event: Any) -> None:
        event_type = type(event)

        listeners = list(self._listeners.get(event_type, []))
        if not listeners:
            self._queues[event_type].append(event)
            return

        logger.debug(
            "Dispatching %s to %d listener(s)", event_type.__name__, len(listeners)
        )
        for listener in listeners:
            listener(event)

    def get(self, event_type: Type[E]) -> List[E]:
        if event_type in self._queues:
            events = self._queues[event_type]
            self._queues[event_type] = []
            return events
        return []
