"""World - per-subsystem component storage, queries and lifecycle hooks."""

from __future__ import annotations

from typing import Any, Callable, Iterator, TypeVar, cast

from tinsel.types import DeadEntityError, EntityId

T = TypeVar("T")

# Called as hook(world, entity_id, component).
HookCallback = Callable[["World", EntityId, Any], None]

_ATTACH = "attach"
_DETACH = "detach"


class World:
    """Entities are bare ids; each one usually stands for a whole subsystem
    (a particle layer, an ornament group, the camera) rather than a single
    particle, so stores stay small and queries are cheap.
    """

    def __init__(self) -> None:
        self._stores: dict[type, dict[EntityId, Any]] = {}
        self._living: set[EntityId] = set()
        self._counter = 0
        self._hooks: dict[str, dict[type, list[HookCallback]]] = {
            _ATTACH: {},
            _DETACH: {},
        }

    def _fire(self, kind: str, entity_id: EntityId, component: Any) -> None:
        for callback in tuple(self._hooks[kind].get(type(component), ())):
            callback(self, entity_id, component)

    def _require_alive(self, entity_id: EntityId, action: str) -> None:
        if entity_id not in self._living:
            raise DeadEntityError(entity_id, f"Cannot {action}: entity {entity_id} is not alive")

    # -- Entities --

    def spawn(self) -> EntityId:
        entity_id = self._counter
        self._counter += 1
        self._living.add(entity_id)
        return entity_id

    def despawn(self, entity_id: EntityId) -> None:
        """Remove an entity, firing detach hooks for each component. Unknown ids are ignored."""
        if entity_id not in self._living:
            return
        self._living.remove(entity_id)
        removed = [
            store.pop(entity_id)
            for store in self._stores.values()
            if entity_id in store
        ]
        for component in removed:
            self._fire(_DETACH, entity_id, component)

    def clear(self) -> None:
        """Despawn every entity in spawn order."""
        for entity_id in sorted(self._living):
            self.despawn(entity_id)

    def entities(self) -> frozenset[EntityId]:
        return frozenset(self._living)

    def alive(self, entity_id: EntityId) -> bool:
        return entity_id in self._living

    # -- Components --

    def attach(self, entity_id: EntityId, component: Any) -> None:
        """Store ``component`` under its type. A component it replaces is detached first."""
        ctype = type(component)
        self._require_alive(entity_id, f"attach {ctype.__name__}")
        store = self._stores.setdefault(ctype, {})
        previous = store.get(entity_id)
        store[entity_id] = component
        if previous is not None and previous is not component:
            self._fire(_DETACH, entity_id, previous)
        self._fire(_ATTACH, entity_id, component)

    def detach(self, entity_id: EntityId, component_type: type) -> None:
        component = self._stores.get(component_type, {}).pop(entity_id, None)
        if component is not None:
            self._fire(_DETACH, entity_id, component)

    def get(self, entity_id: EntityId, component_type: type[T]) -> T:
        self._require_alive(entity_id, f"read {component_type.__name__}")
        try:
            return cast(T, self._stores[component_type][entity_id])
        except KeyError:
            raise KeyError(
                f"Entity {entity_id} has no {component_type.__name__} component"
            ) from None

    def has(self, entity_id: EntityId, component_type: type) -> bool:
        return entity_id in self._living and entity_id in self._stores.get(component_type, {})

    def query(self, *ctypes: type) -> Iterator[tuple[EntityId, tuple[Any, ...]]]:
        """Yield ``(eid, components)`` for entities holding every given type.

        Entities are visited in spawn order so a frame's output is stable.
        """
        if not ctypes:
            return
        stores = [self._stores.get(ctype) for ctype in ctypes]
        if any(store is None for store in stores):
            return
        matching = set(self._living)
        for store in stores:
            matching.intersection_update(store)
        for entity_id in sorted(matching):
            if entity_id not in self._living:
                continue
            yield entity_id, tuple(store[entity_id] for store in stores)

    # -- Lifecycle hooks --

    def on_attach(self, ctype: type, callback: HookCallback) -> None:
        self._hooks[_ATTACH].setdefault(ctype, []).append(callback)

    def on_detach(self, ctype: type, callback: HookCallback) -> None:
        self._hooks[_DETACH].setdefault(ctype, []).append(callback)

    def off_attach(self, ctype: type, callback: HookCallback) -> None:
        self._unhook(_ATTACH, ctype, callback)

    def off_detach(self, ctype: type, callback: HookCallback) -> None:
        self._unhook(_DETACH, ctype, callback)

    def _unhook(self, kind: str, ctype: type, callback: HookCallback) -> None:
        callbacks = self._hooks[kind].get(ctype)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)
