"""Sparse-set storage of one component type."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

from ignition.errors import (
    ComponentNotFound,
    EntityBoundToNonExistingComponent,
    EntityNotBoundToComponent,
    EntityNotFound,
    LifeError,
)

logger = logging.getLogger(__name__)


def _swap(items: list, first: int, second: int) -> None:
    items[first], items[second] = items[second], items[first]


def _swap_remove(items: list, index: int) -> Any:
    if not 0 <= index < len(items):
        raise IndexError(f"swap_remove index {index} out of range")
    last = items.pop()
    if index == len(items):
        return last
    removed = items[index]
    items[index] = last
    return removed


@dataclass
class ComponentPool:
    """Components of one type, packed densely and indexed by entity.

    ``sparse_array`` maps an entity to its component index (-1 for none),
    ``packed_array`` maps a component index back to its entity, and the
    first ``num_components`` components are the enabled ones.
    """

    num_components: int = 0
    sparse_array: list[int] = field(default_factory=list)
    packed_array: list[int] = field(default_factory=list)
    component_array: list[Any] = field(default_factory=list)
    type_name: str = field(default="component", compare=False)

    @classmethod
    def empty(cls) -> ComponentPool:
        """Return a pool holding no components."""
        return cls()

    # Creation

    def assign_component(self, entity: int, component: Any) -> None:
        """Bind a component to an entity, replacing any it already has."""
        if self.has_component(entity):
            try:
                index = self._component_index(entity)
            except LifeError as error:
                logger.warning("%s", error)
                return
            self.component_array[index] = component
        else:
            self.add_entity_to_sparse_array(entity, self.num_components, self.sparse_array)
            self.packed_array.append(entity)
            self.component_array.append(component)
            self.num_components += 1

    @staticmethod
    def add_entity_to_sparse_array(entity: int, value: int, sparse_array: list[int]) -> None:
        """Store ``value`` for ``entity``, growing the array as needed."""
        ComponentPool.prolong_sparse_array(entity, sparse_array)
        sparse_array[entity] = value

    @staticmethod
    def prolong_sparse_array(entity: int, sparse_array: list[int]) -> None:
        """Pad the sparse array with -1 so that ``entity`` is a valid index."""
        missing = entity + 1 - len(sparse_array)
        if missing > 0:
            sparse_array.extend([-1] * missing)

    def create_empty_entity(self) -> None:
        """Append an entity without a component."""
        self.sparse_array.append(-1)

    # Removal

    def take_entity(self, entity: int) -> Any:
        """Remove the entity's component from the pool and return it."""
        component = self.component_id(entity)
        last_index = self.packed_array[-1]

        self.num_components -= 1
        self.sparse_array[last_index] = component
        self.sparse_array[entity] = -1

        _swap_remove(self.packed_array, component)
        return _swap_remove(self.component_array, component)

    def delete_entity(self, entity: int) -> None:
        """Remove the entity's component, logging a warning if there is none."""
        try:
            self.take_entity(entity)
        except LifeError as error:
            logger.warning("%s", error)

    # Access

    def get(self, entity: int) -> Any:
        """Return the component bound to the entity."""
        return self.component_array[self._component_index(entity)]

    def _component_index(self, entity: int) -> int:
        index = self.component_id(entity)
        if index >= len(self.component_array):
            raise EntityBoundToNonExistingComponent(self.type_name, entity)
        return index

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the enabled components."""
        return iter(self.component_array[: self.num_components])

    def __len__(self) -> int:
        return self.num_components

    # Lookups and swaps

    def has_component(self, entity: int) -> bool:
        """Return True if the entity has a component in this pool."""
        return 0 <= entity < len(self.sparse_array) and self.sparse_array[entity] != -1

    def entity_id(self, component_id: int) -> int:
        """Return the entity owning the component at ``component_id``."""
        if not 0 <= component_id < len(self.packed_array):
            raise ComponentNotFound(self.type_name, component_id)
        return self.packed_array[component_id]

    def component_id(self, entity_id: int) -> int:
        """Return the component index of the entity."""
        if not 0 <= entity_id < len(self.sparse_array):
            raise EntityNotFound(self.type_name, entity_id)
        index = self.sparse_array[entity_id]
        if index == -1:
            raise EntityNotBoundToComponent(self.type_name, entity_id)
        return index

    def swap_entities(self, entity: int, entity_destination: int) -> None:
        """Exchange the components of two entities."""
        try:
            component = self.component_id(entity)
            component_destination = self.component_id(entity_destination)
        except LifeError as error:
            logger.warning("%s", error)
            return
        self.swap(entity, entity_destination, component, component_destination)

    def swap_components(self, component: int, component_destination: int) -> None:
        """Exchange two component slots together with their entities."""
        try:
            entity = self.entity_id(component)
            entity_destination = self.entity_id(component_destination)
        except LifeError as error:
            logger.warning("%s", error)
            return
        self.swap(entity, entity_destination, component, component_destination)

    def swap(
        self,
        entity: int,
        entity_destination: int,
        component: int,
        component_destination: int,
    ) -> None:
        """Swap sparse entries of two entities and packed entries of two slots."""
        _swap(self.sparse_array, entity, entity_destination)
        _swap(self.packed_array, component, component_destination)
        _swap(self.component_array, component, component_destination)

    # Enabling and disabling

    def toggle_entity(self, entity: int) -> None:
        """Disable the entity's component if it is active, enable it otherwise."""
        if self.is_disabled(entity):
            self.disable_entity(entity)
        else:
            self.enable_entity(entity)

    def disable_entity(self, entity: int) -> None:
        """Move the component to the end of the active region and shrink it."""
        self.move_to_back(entity)
        self.num_components -= 1

    def enable_entity(self, entity: int) -> None:
        """Grow the active region and move the component to its end."""
        self.num_components += 1
        self.move_to_back(entity)

    def is_disabled(self, entity: int) -> bool:
        """Return True when the entity's component index is below ``num_components``."""
        index = self.sparse_array[entity]
        return 0 <= index < self.num_components

    def move_to_back(self, entity: int) -> None:
        """Swap the entity's component into the last active slot."""
        try:
            component = self.component_id(entity)
            component_destination = self.num_components - 1
            entity_destination = self.entity_id(component_destination)
        except LifeError as error:
            logger.warning("%s", error)
            return
        self.swap(entity, entity_destination, component, component_destination)