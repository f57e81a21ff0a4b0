# SPDX-License-Identifier: MIT

"""
Dual-backend store: a local cache that is always written and a remote record
store that is authoritative whenever an authenticated session exists.

Reads prefer the remote and fall back to the cache when the remote fails,
returns nothing, or there is no session. Writes commit to the cache first and
then replace every remote record of the entry type with the new collection.
Failures never propagate out of this module; they are logged and reported
through ``SyncOutcome``.
"""

import asyncio
import json
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from waypoint.errors import RemoteError, SerializationError
from waypoint.model.entity_id import generate_entity_id
from waypoint.model.record import Record
from waypoint.model.result import SyncOutcome
from waypoint.store.cache import LocalCache
from waypoint.store.codec import EntityCodec
from waypoint.store.remote import RemoteStore

logger = logging.getLogger(__name__)


class CollectionWriter[T]:
    """Read/write access to one collection while its writer lock is held."""

    def __init__(self, engine: "SyncEngine", entry_type: str, codec: EntityCodec[T]):
        self._engine = engine
        self.entry_type = entry_type
        self.codec = codec

    async def read(self) -> list[T]:
        return await self._engine._read_collection(self.entry_type, self.codec)

    async def write(self, collection: list[T]) -> SyncOutcome:
        return await self._engine._write_collection(
            self.entry_type, collection, self.codec
        )


class SyncEngine:
    def __init__(
        self,
        cache: LocalCache,
        remote: RemoteStore,
        legacy_entry_types: Optional[dict[str, str]] = None,
    ) -> None:
        self.cache = cache
        self.remote = remote
        self.legacy_entry_types = dict(legacy_entry_types or {})
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    # === Collections ===

    async def read_collection[T](self, entry_type: str, codec: EntityCodec[T]) -> list[T]:
        async with self._locks[entry_type]:
            return await self._read_collection(entry_type, codec)

    async def write_collection[T](
        self, entry_type: str, collection: list[T], codec: EntityCodec[T]
    ) -> SyncOutcome:
        async with self._locks[entry_type]:
            return await self._write_collection(entry_type, collection, codec)

    @asynccontextmanager
    async def writer[T](
        self, entry_type: str, codec: EntityCodec[T]
    ) -> AsyncIterator[CollectionWriter[T]]:
        """Hold the entry type's lock across a whole read-modify-write cycle."""
        async with self._locks[entry_type]:
            yield CollectionWriter(self, entry_type, codec)

    async def _read_collection[T](self, entry_type: str, codec: EntityCodec[T]) -> list[T]:
        if await self._has_session():
            try:
                records = await self.remote.select_by_type(entry_type)
            except RemoteError as e:
                logger.warning("Remote error retrieving %s: %s", entry_type, e)
            else:
                if records:
                    logger.debug(
                        "Retrieved %d items for %s from remote", len(records), entry_type
                    )
                    raw_items, entities = self.__parse_records(entry_type, records, codec)
                    self.cache.put(entry_type, raw_items)
                    return entities
                logger.debug("Remote has no %s entries, using cache", entry_type)

        entities = self.__decode_all(entry_type, self.__cached_collection(entry_type), codec)
        logger.debug("Retrieved %d items for %s from cache", len(entities), entry_type)
        return entities

    async def _write_collection[T](
        self, entry_type: str, collection: list[T], codec: EntityCodec[T]
    ) -> SyncOutcome:
        try:
            raw_items = [codec.encode(entity) for entity in collection]
        except SerializationError as e:
            # Neither backend is written
            logger.error("Could not serialize %s collection: %s", entry_type, e)
            return SyncOutcome(cache_ok=False)
        cache_ok = self.cache.put(entry_type, raw_items)

        if not await self._has_session():
            logger.info("No session, %s saved only to cache", entry_type)
            return SyncOutcome(cache_ok=cache_ok)

        remote_ok = True
        try:
            await self.remote.delete_by_type(entry_type)
        except RemoteError as e:
            logger.warning("Error deleting existing %s entries: %s", entry_type, e)
            remote_ok = False

        if raw_items:
            try:
                records: list[Record] = [
                    {
                        "id": generate_entity_id(),
                        "entry_type": entry_type,
                        "content": json.dumps(raw),
                    }
                    for raw in raw_items
                ]
                await self.remote.insert_many(records)
            except (RemoteError, TypeError, ValueError) as e:
                logger.warning("Error storing %s data in remote: %s", entry_type, e)
                remote_ok = False
            else:
                logger.debug(
                    "Saved %d %s items to remote", len(raw_items), entry_type
                )

        return SyncOutcome(cache_ok=cache_ok, remote_ok=remote_ok)

    # === Scalar content ===

    async def read_scalar(self, entry_type: str) -> str:
        async with self._locks[entry_type]:
            if await self._has_session():
                try:
                    records = await self.remote.select_by_type(entry_type)
                except RemoteError as e:
                    logger.warning("Remote error retrieving %s content: %s", entry_type, e)
                else:
                    content = records[0].get("content") if records else None
                    if isinstance(content, str):
                        self.cache.put_scalar(entry_type, content)
                        return content
                    if records:
                        logger.warning(
                            "Unreadable %s record from remote, using cache", entry_type
                        )

            self.__migrate_legacy_key(entry_type)
            return self.cache.get_scalar(entry_type)

    async def write_scalar(self, entry_type: str, content: str) -> SyncOutcome:
        async with self._locks[entry_type]:
            cache_ok = self.cache.put_scalar(entry_type, content)

            if not await self._has_session():
                logger.info("No session, %s saved only to cache", entry_type)
                return SyncOutcome(cache_ok=cache_ok)

            try:
                await self.remote.upsert_scalar(entry_type, content)
            except RemoteError as e:
                logger.warning("Error storing %s content in remote: %s", entry_type, e)
                return SyncOutcome(cache_ok=cache_ok, remote_ok=False)
            return SyncOutcome(cache_ok=cache_ok, remote_ok=True)

    # === Internals ===

    async def _has_session(self) -> bool:
        try:
            return await self.remote.has_session()
        except RemoteError as e:
            logger.warning("Could not determine remote session: %s", e)
            return False

    def __cached_collection(self, entry_type: str) -> list[Any]:
        self.__migrate_legacy_key(entry_type)
        return self.cache.get(entry_type)

    def __migrate_legacy_key(self, entry_type: str) -> None:
        """
        Copy a legacy alias blob to ``entry_type`` the first time it is read.

        The condition is that the new key has never been written, not that it
        reads as empty. A collection the user emptied stays empty instead of
        being refilled from the alias.
        """
        legacy_key = self.legacy_entry_types.get(entry_type)
        if legacy_key is None or self.cache.has(entry_type):
            return
        if not self.cache.get_item(legacy_key):
            return
        if self.cache.copy(legacy_key, entry_type):
            logger.info("Migrated cached %s data to %s", legacy_key, entry_type)

    def __parse_records[T](
        self, entry_type: str, records: list[Record], codec: EntityCodec[T]
    ) -> tuple[list[Any], list[T]]:
        raw_items: list[Any] = []
        entities: list[T] = []
        for record in records:
            try:
                raw = json.loads(record.get("content"))  # type: ignore[arg-type]
                entity = codec.decode(raw)
            except (
                json.JSONDecodeError,
                TypeError,
                AttributeError,
                SerializationError,
            ) as e:
                logger.warning(
                    "Skipping unreadable %s record %s: %s", entry_type, record.get("id"), e
                )
                continue
            raw_items.append(raw)
            entities.append(entity)
        return raw_items, entities

    def __decode_all[T](
        self, entry_type: str, raw_items: list[Any], codec: EntityCodec[T]
    ) -> list[T]:
        entities: list[T] = []
        for raw in raw_items:
            try:
                entities.append(codec.decode(raw))
            except SerializationError as e:
                logger.warning("Skipping unreadable cached %s entry: %s", entry_type, e)
        return entities
