# rivermesh/core/resources.py
import logging
from typing import Any, Dict, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceManager:
    """
    World-wide singletons keyed by type. Hosts register implementations
    under the interface the river system looks up, e.g.

        resources.add(rail_manager, as_type=PathSource)
    """

    def __init__(self) -> None:
        self._resources: Dict[Type[Any], Any] = {}

    def add(self, resource: Any, as_type: Type[Any] | None = None) -> None:
        key = as_type or type(resource)
        if key in self._resources:
            logger.debug("Replacing resource %s", key.__name__)
        self._resources[key] = resource

    def remove(self, resource_type: Type[Any]) -> None:
        self._resources.pop(resource_type, None)

    def get(self, resource_type: Type[T]) -> T:
        try:
            return self._resources[resource_type]
        except KeyError:
            raise KeyError(f"Resource not found: {resource_type.__name__}") from None

    def try_get(self, resource_type: Type[T]) -> T | None:
        return self._resources.get(resource_type)
