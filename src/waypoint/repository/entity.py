# SPDX-License-Identifier: MIT

import logging
from typing import Any, Callable, Mapping, Optional, cast

from waypoint import time
from waypoint.errors import IdGenerationError, NotFoundError
from waypoint.model.entity_id import EntityId, generate_unique_entity_id
from waypoint.model.result import Result, SyncOutcome
from waypoint.store.codec import EntityCodec
from waypoint.store.sync import SyncEngine

logger = logging.getLogger(__name__)

PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


class EntityRepository[T]:
    """
    CRUD over one collection persisted through the SyncEngine.

    Every mutation reads the whole collection, changes it in memory and writes
    the whole collection back while holding the entry type's writer lock.
    Subclasses add cascades by overriding ``_after_delete``.
    """

    def __init__(
        self,
        engine: SyncEngine,
        entry_type: str,
        codec: EntityCodec[T],
        label: str,
        template: Callable[[], dict[str, Any]],
        timestamped: bool = True,
    ) -> None:
        self._engine = engine
        self.entry_type = entry_type
        self.codec = codec
        self.label = label
        self._template = template
        self.timestamped = timestamped

    async def get_all(self) -> Result[list[T]]:
        entities = await self._engine.read_collection(self.entry_type, self.codec)
        return Result.ok(entities)

    async def get(self, id: EntityId) -> Result[T]:
        entities = await self._engine.read_collection(self.entry_type, self.codec)
        try:
            return Result.ok(entities[self._index_of(entities, id)])
        except NotFoundError as e:
            return Result.fail(str(e))

    async def create(self, data: Mapping[str, Any]) -> Result[T]:
        async with self._engine.writer(self.entry_type, self.codec) as writer:
            entities = await writer.read()
            try:
                entity_id = generate_unique_entity_id(
                    {cast(Mapping[str, Any], entity)["id"] for entity in entities}
                )
            except IdGenerationError:
                logger.exception("Error creating %s", self.label)
                return Result.fail(f"Failed to create {self.label.lower()}")

            entity = self.__new_entity(entity_id, data)
            entities.append(entity)
            outcome = await writer.write(entities)

        return Result.ok(entity, outcome)

    async def update(self, id: EntityId, updates: Mapping[str, Any]) -> Result[T]:
        def apply(entity: dict[str, Any]) -> None:
            for key, value in updates.items():
                if key not in PROTECTED_FIELDS:
                    entity[key] = value

        return await self._modify_one(id, apply)

    async def delete(self, id: EntityId) -> Result[None]:
        async with self._engine.writer(self.entry_type, self.codec) as writer:
            entities = await writer.read()
            remaining = [entity for entity in entities if self.__id(entity) != id]
            if len(remaining) == len(entities):
                return Result.fail(str(NotFoundError(self.label, id)))
            outcome = await writer.write(remaining)

        cascade_outcome = await self._after_delete([id])
        if cascade_outcome is not None:
            outcome = outcome.merge(cascade_outcome)
        return Result.ok(outcome=outcome)

    async def remove_where(
        self, predicate: Callable[[T], bool]
    ) -> Optional[SyncOutcome]:
        """Hard-delete every matching entity, cascading to its dependents."""
        async with self._engine.writer(self.entry_type, self.codec) as writer:
            entities = await writer.read()
            removed_ids = [self.__id(entity) for entity in entities if predicate(entity)]
            if not removed_ids:
                return None
            outcome = await writer.write(
                [entity for entity in entities if not predicate(entity)]
            )

        logger.info("Removed %d dependent %s entries", len(removed_ids), self.entry_type)
        cascade_outcome = await self._after_delete(removed_ids)
        if cascade_outcome is not None:
            outcome = outcome.merge(cascade_outcome)
        return outcome

    async def modify_where(
        self, predicate: Callable[[T], bool], change: Callable[[dict[str, Any]], None]
    ) -> Optional[SyncOutcome]:
        """Apply ``change`` to every matching entity; writes only if any matched."""
        async with self._engine.writer(self.entry_type, self.codec) as writer:
            entities = await writer.read()
            matched = 0
            for entity in entities:
                if predicate(entity):
                    change(cast(dict[str, Any], entity))
                    self.__touch(cast(dict[str, Any], entity))
                    matched += 1
            if matched == 0:
                return None
            logger.info("Updated %d dependent %s entries", matched, self.entry_type)
            return await writer.write(entities)

    async def _modify_one(
        self, id: EntityId, change: Callable[[dict[str, Any]], None]
    ) -> Result[T]:
        async with self._engine.writer(self.entry_type, self.codec) as writer:
            entities = await writer.read()
            try:
                index = self._index_of(entities, id)
            except NotFoundError as e:
                return Result.fail(str(e))

            entity = cast(dict[str, Any], entities[index])
            change(entity)
            self.__touch(entity)
            outcome = await writer.write(entities)

        return Result.ok(cast(T, entity), outcome)

    async def _after_delete(self, ids: list[EntityId]) -> Optional[SyncOutcome]:
        return None

    def _index_of(self, entities: list[T], id: EntityId) -> int:
        for index, entity in enumerate(entities):
            if self.__id(entity) == id:
                return index
        raise NotFoundError(self.label, id)

    def __id(self, entity: T) -> EntityId:
        return cast(Mapping[str, Any], entity)["id"]

    def __new_entity(self, entity_id: EntityId, data: Mapping[str, Any]) -> T:
        entity: dict[str, Any] = self._template()
        entity.update(data)
        entity["id"] = entity_id
        if self.timestamped:
            now = time.now_utc()
            entity["created_at"] = now
            entity["updated_at"] = now
        return cast(T, entity)

    def __touch(self, entity: dict[str, Any]) -> None:
        if not self.timestamped:
            return
        now = time.now_utc()
        previous = entity.get("updated_at")
        # never move updated_at backwards, even if the clock does
        entity["updated_at"] = now if previous is None or now >= previous else previous
