# SPDX-License-Identifier: MIT

from typing import Optional

from waypoint.model.entity_id import EntityId
from waypoint.model.entry_type import EntryType
from waypoint.model.result import SyncOutcome
from waypoint.model.tag import Tag
from waypoint.repository.entity import EntityRepository
from waypoint.repository.task import TaskRepository
from waypoint.store.codec import EntityCodec, typed_dict_fields
from waypoint.store.sync import SyncEngine
from waypoint.template.tag import get_tag_template

TAG_CODEC: EntityCodec[Tag] = EntityCodec("tag", typed_dict_fields(Tag))


class TagRepository(EntityRepository[Tag]):
    def __init__(self, engine: SyncEngine, tasks: TaskRepository) -> None:
        super().__init__(
            engine,
            EntryType.TAGS,
            TAG_CODEC,
            label="Tag",
            template=get_tag_template,
            timestamped=False,
        )
        self._tasks = tasks

    async def _after_delete(self, ids: list[EntityId]) -> Optional[SyncOutcome]:
        outcome: Optional[SyncOutcome] = None
        for tag_id in ids:
            stripped = await self._tasks.remove_tag(tag_id)
            if stripped is not None:
                outcome = stripped if outcome is None else outcome.merge(stripped)
        return outcome
