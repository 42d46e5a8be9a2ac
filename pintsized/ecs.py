"""Entities, components and systems, tied together by a manager."""

from __future__ import annotations

import abc
from typing import Optional, TypeVar


class Entity:
    """A bare identity; ids come from a counter shared by all entities."""

    _next_id = 0

    __slots__ = ("_id",)

    def __init__(self) -> None:
        self._id = Entity._next_id
        Entity._next_id += 1

    @property
    def id(self) -> int:
        return self._id

    @classmethod
    def clear_entities(cls) -> None:
        """Restart id numbering from zero."""
        Entity._next_id = 0

    def __repr__(self) -> str:
        return f"Entity(id={self._id})"


class Component:
    """Base class for data attached to entities."""


class System(abc.ABC):
    """Base class for logic that runs once per frame."""

    @abc.abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the system by ``delta_time`` seconds."""


C = TypeVar("C", bound=Component)
S = TypeVar("S", bound=System)


class ECSManager:
    """Owns entities, their components keyed by component type, and systems."""

    def __init__(self) -> None:
        self._entities: list[Entity] = []
        self._components: dict[type, dict[int, Component]] = {}
        self._systems: list[System] = []

    @property
    def entities(self) -> list[Entity]:
        return list(self._entities)

    @property
    def systems(self) -> list[System]:
        return list(self._systems)

    def create_entity(self) -> Entity:
        entity = Entity()
        self._entities.append(entity)
        return entity

    def destroy_entity(self, entity: Entity) -> None:
        """Drop every component of ``entity`` and forget the entity."""
        for components in self._components.values():
            components.pop(entity.id, None)
        if entity in self._entities:
            self._entities.remove(entity)

    def add_component(self, entity: Entity, component: C) -> C:
        if not isinstance(component, Component):
            raise TypeError("component must be derived from Component")
        self._components.setdefault(type(component), {})[entity.id] = component
        return component

    def remove_component(self, entity: Entity, kind: type[Component]) -> None:
        self._check_component_type(kind)
        self._components.get(kind, {}).pop(entity.id, None)

    def get_component(self, entity: Entity, kind: type[C]) -> Optional[C]:
        self._check_component_type(kind)
        return self._components.get(kind, {}).get(entity.id)  # type: ignore[return-value]

    def get_components(self, kind: type[C]) -> dict[int, C]:
        """Return a mapping of entity id to component of type ``kind``."""
        self._check_component_type(kind)
        return dict(self._components.get(kind, {}))  # type: ignore[arg-type]

    def has_component(self, entity: Entity, kind: type[Component]) -> bool:
        self._check_component_type(kind)
        return entity.id in self._components.get(kind, {})

    def add_system(self, system: S) -> S:
        if not isinstance(system, System):
            raise TypeError("system must be derived from System")
        self._systems.append(system)
        return system

    def remove_system(self, kind: type[System]) -> None:
        """Remove the first system that is an instance of ``kind``."""
        for index, system in enumerate(self._systems):
            if isinstance(system, kind):
                del self._systems[index]
                return

    def update(self, delta_time: float) -> None:
        for system in self._systems:
            system.update(delta_time)

    @staticmethod
    def _check_component_type(kind: type) -> None:
        if not (isinstance(kind, type) and issubclass(kind, Component)):
            raise TypeError("component type must be derived from Component")