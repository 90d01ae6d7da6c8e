"""
Entity-Component Store
=======================
Integer entity IDs with one component dictionary per component type.

Queries yield entities in creation order so that every system walks
actors in the same sequence each frame.
"""

from typing import Dict, Set, Type, TypeVar, Optional, Iterator, Tuple, Any


C = TypeVar('C')


class World:
    """
    Holds every live actor and its components.

    Entities are integer IDs. Components are stored in dictionaries
    keyed by entity ID, with one dict per component type.
    """

    def __init__(self):
        self._next_entity_id: int = 0
        self._entities: Set[int] = set()
        self._components: Dict[Type, Dict[int, Any]] = {}
        self._dead_entities: Set[int] = set()  # Marked for removal

    def create_entity(self) -> int:
        """Create a new entity and return its ID."""
        entity_id = self._next_entity_id
        self._next_entity_id += 1
        self._entities.add(entity_id)
        return entity_id

    def destroy_entity(self, entity_id: int) -> None:
        """Mark an entity for destruction (processed by process_dead_entities)."""
        self._dead_entities.add(entity_id)

    def process_dead_entities(self) -> None:
        """Remove all entities marked for destruction."""
        for entity_id in self._dead_entities:
            if entity_id in self._entities:
                self._entities.remove(entity_id)
                for component_store in self._components.values():
                    component_store.pop(entity_id, None)
        self._dead_entities.clear()

    def clear(self) -> None:
        """Drop every entity immediately. IDs keep counting up."""
        self._entities.clear()
        self._components.clear()
        self._dead_entities.clear()

    def add_component(self, entity_id: int, component: Any) -> None:
        """Add (or replace) a component on an entity."""
        component_type = type(component)
        if component_type not in self._components:
            self._components[component_type] = {}
        self._components[component_type][entity_id] = component

    def get_component(self, entity_id: int, component_type: Type[C]) -> Optional[C]:
        """Get a component for an entity, or None if not found."""
        if component_type in self._components:
            return self._components[component_type].get(entity_id)
        return None

    def has_component(self, entity_id: int, component_type: Type) -> bool:
        """Check if an entity has a specific component."""
        if component_type in self._components:
            return entity_id in self._components[component_type]
        return False

    def query(self, *component_types: Type) -> Iterator[Tuple[Any, ...]]:
        """
        Query for all entities that have ALL specified component types.

        Yields tuples of (entity_id, component1, component2, ...) in
        the order the first component type was attached.
        """
        if not component_types:
            return

        stores = []
        for component_type in component_types:
            store = self._components.get(component_type)
            if store is None:
                return
            stores.append(store)

        # Snapshot keys so systems may destroy entities mid-iteration
        for entity_id in list(stores[0].keys()):
            if entity_id in self._dead_entities:
                continue
            if not all(entity_id in store for store in stores[1:]):
                continue
            yield (entity_id,) + tuple(store[entity_id] for store in stores)

    def get_entities_with(self, *component_types: Type) -> Iterator[int]:
        """Get all entity IDs that have all specified components."""
        for result in self.query(*component_types):
            yield result[0]

    def count(self, *component_types: Type) -> int:
        """Number of live entities carrying all the given components."""
        return sum(1 for _ in self.query(*component_types))

    def is_alive(self, entity_id: int) -> bool:
        """Check if an entity is alive (exists and not marked for death)."""
        return entity_id in self._entities and entity_id not in self._dead_entities
