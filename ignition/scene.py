"""Entities and the component pools they are bound to."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ignition.errors import Downcast, LifeError, NoComponentPool
from ignition.pool import ComponentPool

logger = logging.getLogger(__name__)


class ComponentPools:
    """One component pool for each registered component type."""

    def __init__(self, component_types: Iterable[type] = ()) -> None:
        self.pools: dict[type, ComponentPool] = {
            component_type: ComponentPool(type_name=component_type.__name__)
            for component_type in component_types
        }

    def pool(self, component_type: type) -> ComponentPool:
        """Return the pool holding components of ``component_type``."""
        name = component_type.__name__
        try:
            pool = self.pools[component_type]
        except KeyError:
            raise NoComponentPool(name) from None
        if pool.type_name != name:
            raise Downcast(name)
        return pool

    def delete_entity(self, entity: int) -> None:
        """Remove the entity's component from every pool."""
        for pool in self.pools.values():
            pool.delete_entity(entity)

    def __contains__(self, component_type: object) -> bool:
        return component_type in self.pools


class Scene:
    """Hands out entity ids and stores their components by type.

    ``available_entities[0]`` is the next fresh id; the ids after it are
    recycled ones, reused last-in first-out.
    """

    def __init__(self, component_types: Iterable[type] = ()) -> None:
        self.available_entities: list[int] = [0]
        self.component_pools = ComponentPools(component_types)

    # Access

    def get(self, component_type: type) -> ComponentPool:
        """Return the pool of ``component_type``."""
        return self.component_pools.pool(component_type)

    def get_component(self, component_type: type, entity: int) -> Any:
        """Return the entity's component of ``component_type``."""
        return self.get(component_type).get(entity)

    def take_component(self, component_type: type, entity: int) -> Any:
        """Remove the entity's component of ``component_type`` and return it."""
        return self.get(component_type).take_entity(entity)

    def get_current_entity(self) -> int:
        """Return the id that was most recently made available."""
        return self.available_entities[-1]

    # Creation

    def entity(self) -> int:
        """Return a new entity id, reusing a deleted one when there is one."""
        if len(self.available_entities) == 1:
            return self.generate_new_entity()
        return self.use_recycled_entity()

    def generate_new_entity(self) -> int:
        """Return a never-used id."""
        entity = self.available_entities[0]
        self.available_entities[0] += 1
        return entity

    def use_recycled_entity(self) -> int:
        """Return the most recently deleted id."""
        return self.available_entities.pop()

    def component(self, entity: int, component: Any) -> None:
        """Bind ``component`` to the entity in the pool of its type."""
        try:
            pool = self.get(type(component))
        except LifeError as error:
            logger.warning("%s", error)
            return
        pool.assign_component(entity, component)

    # Removal

    def delete(self, entity: int) -> None:
        """Delete the entity and recycle its id."""
        self.available_entities.append(entity)
        self.delete_entity_from_each_component_pool(entity)

    def delete_entity_from_each_component_pool(self, entity: int) -> None:
        """Remove the entity's components from every pool."""
        self.component_pools.delete_entity(entity)

    # Enabling and disabling

    def toggle(self, component_type: type, entity: int) -> None:
        """Flip whether the entity's component of ``component_type`` is active."""
        self.get(component_type).toggle_entity(entity)

    def enable(self, component_type: type, entity: int) -> None:
        """Make the entity's component of ``component_type`` active."""
        self.get(component_type).enable_entity(entity)

    def disable(self, component_type: type, entity: int) -> None:
        """Make the entity's component of ``component_type`` inactive."""
        self.get(component_type).disable_entity(entity)

    def component_exists(self, component_type: type, entity: int) -> bool:
        """Return True if the entity has a component of ``component_type``."""
        return self.get(component_type).has_component(entity)