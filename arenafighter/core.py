"""Entity, component and archetype bookkeeping."""

from __future__ import annotations

from typing import Any, Generic, Iterable, TypeVar

from .components import Component, ComponentType

EntityID = int
ArchetypeID = int
ComponentID = int

MAX_ENTITIES = 100000

T = TypeVar("T")


class ECSError(Exception):
    """Base class of errors raised by the entity system."""


class TooManyEntitiesError(ECSError):
    """Raised when no more entity ids can be handed out."""


class EntityOutOfRangeError(ECSError):
    """Raised when an entity id lies outside the valid range."""


class ComponentNotFoundError(ECSError, LookupError):
    """Raised when a component is not stored for an entity."""


class ComponentSlice(Generic[T]):
    """Densely packed components of one kind, indexed by entity."""

    def __init__(self) -> None:
        self.data: list[T] = []
        self.entity_map: dict[EntityID, int] = {}
        self._owners: list[EntityID] = []

    def add(self, entity: EntityID, component: T) -> None:
        """Store a component for an entity, replacing any earlier one."""
        index = self.entity_map.get(entity)
        if index is not None:
            self.data[index] = component
            return
        self.data.append(component)
        self._owners.append(entity)
        self.entity_map[entity] = len(self.data) - 1

    def get(self, entity: EntityID) -> T:
        """Return the component stored for an entity."""
        try:
            return self.data[self.entity_map[entity]]
        except KeyError:
            raise ComponentNotFoundError("Component not found") from None

    def remove(self, entity: EntityID) -> None:
        """Drop an entity's component by moving the last one into its slot."""
        index = self.entity_map.pop(entity, None)
        if index is None:
            return
        last = len(self.data) - 1
        if index != last:
            moved = self._owners[last]
            self.data[index] = self.data[last]
            self._owners[index] = moved
            self.entity_map[moved] = index
        self.data.pop()
        self._owners.pop()

    def __contains__(self, entity: object) -> bool:
        return entity in self.entity_map

    def __len__(self) -> int:
        return len(self.data)


class ComponentField:
    """One component slice for each storable component kind."""

    def __init__(self) -> None:
        self.positions: ComponentSlice[Any] = ComponentSlice()
        self.sprites: ComponentSlice[Any] = ComponentSlice()
        self._slices = {
            ComponentType.POSITION: self.positions,
            ComponentType.SPRITE: self.sprites,
        }

    def add_component(self, entity: EntityID, component: Component) -> None:
        """Store a component in the slice for its kind; other kinds are ignored."""
        target = self._slices.get(component.component_type())
        if target is not None:
            target.add(entity, component)

    def remove_component(self, entity: EntityID, component: Component) -> None:
        """Remove an entity's component of the given component's kind."""
        target = self._slices.get(component.component_type())
        if target is not None:
            target.remove(entity)

    def get_component(
        self, entity: EntityID, component_id: ComponentID, component_type: ComponentType
    ) -> Component:
        """Return the entity's component of the given kind."""
        target = self._slices.get(component_type)
        if target is None:
            raise ComponentNotFoundError("Default type error, no components found")
        try:
            return target.get(entity)
        except ComponentNotFoundError:
            raise ComponentNotFoundError("Component Not Found") from None


class ComponentManager:
    """Hands out component ids and keeps the indexes over components."""

    def __init__(self) -> None:
        self._next_id = 0
        self.component_index: dict[ComponentID, list[ArchetypeID]] = {}
        self.component_id_index: dict[ComponentID, Component] = {}
        self.components_by_type: dict[ComponentType, list[ComponentID]] = {}
        self.component_id_type: dict[ComponentID, ComponentType] = {}
        self.field = ComponentField()

    def create_component_id(self) -> ComponentID:
        """Return a fresh component id."""
        self._next_id += 1
        return self._next_id

    def register_components(
        self, entity: EntityID, components: Iterable[Component]
    ) -> list[ComponentID]:
        """Give each component an id, index it and store it for the entity."""
        components = list(components)
        ids = []
        for component in components:
            component_id = self.create_component_id()
            kind = component.component_type()
            self.component_id_index[component_id] = component
            self.components_by_type.setdefault(kind, []).append(component_id)
            self.component_id_type[component_id] = kind
            ids.append(component_id)
        for component in components:
            self.field.add_component(entity, component)
        return ids

    def get_component_by_id(
        self,
        entity: EntityID,
        component_ids: Iterable[ComponentID],
        component_type: ComponentType,
    ) -> Component | None:
        """Return the first of the entity's components of a kind, or None."""
        for component_id in component_ids:
            if self.component_id_type.get(component_id, ComponentType.VOID) == component_type:
                try:
                    return self.field.get_component(entity, component_id, component_type)
                except ComponentNotFoundError:
                    return None
        return None


class EntityManager:
    """Hands out entity ids and maps entities to their components."""

    def __init__(self) -> None:
        self.entity_index: dict[EntityID, list[ComponentID]] = {}
        self.component_index: dict[ComponentID, EntityID] = {}
        self._next_id = 0

    def create_entity(self) -> EntityID:
        """Return a fresh entity id."""
        if self._next_id >= MAX_ENTITIES:
            raise TooManyEntitiesError("Too many Entities!")
        self._next_id += 1
        return self._next_id

    def register_components(
        self, entity: EntityID, component_ids: Iterable[ComponentID]
    ) -> None:
        """Record which components belong to an entity."""
        component_ids = list(component_ids)
        self.entity_index[entity] = component_ids
        for component_id in component_ids:
            self.component_index[component_id] = entity

    def destroy_entity(
        self, entity: EntityID, component_manager: ComponentManager
    ) -> None:
        """Remove an entity and its stored components."""
        if entity >= MAX_ENTITIES:
            raise EntityOutOfRangeError("Entity out of range!")
        for component_id in self.entity_index.get(entity, []):
            kind = component_manager.component_id_type.get(component_id, ComponentType.VOID)
            component = component_manager.field.get_component(entity, component_id, kind)
            component_manager.field.remove_component(entity, component)
            self.component_index.pop(component_id, None)
        self.entity_index.pop(entity, None)

    def get_entity(self, component_id: ComponentID) -> EntityID:
        """Return the entity owning a component, or 0 if none does."""
        return self.component_index.get(component_id, 0)


class ArchetypeManager:
    """Groups entities by the set of component kinds they carry."""

    def __init__(self) -> None:
        self.archetype_index: dict[ArchetypeID, list[EntityID]] = {}
        self.archetype_definitions: dict[ArchetypeID, list[ComponentType]] = {}
        self._next_id = 0

    def create_archetype_id(self) -> ArchetypeID:
        """Return a fresh archetype id."""
        self._next_id += 1
        return self._next_id

    def get_set_archetype(
        self, components: Iterable[Component], component_manager: ComponentManager
    ) -> ArchetypeID:
        """Return the archetype for these components' kinds, creating it if new."""
        signature = sorted(component.component_type() for component in components)
        for archetype_id, definition in self.archetype_definitions.items():
            definition.sort()
            if definition == signature:
                return archetype_id
        archetype_id = self.create_archetype_id()
        self.archetype_definitions[archetype_id] = signature
        return archetype_id