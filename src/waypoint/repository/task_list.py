# SPDX-License-Identifier: MIT

from typing import Optional

from waypoint.model.entity_id import EntityId
from waypoint.model.entry_type import EntryType
from waypoint.model.result import SyncOutcome
from waypoint.model.task import INBOX_LIST_ID
from waypoint.model.task_list import TaskList
from waypoint.repository.entity import EntityRepository
from waypoint.repository.task import TaskRepository
from waypoint.store.codec import EntityCodec, typed_dict_fields
from waypoint.store.sync import SyncEngine
from waypoint.template.task_list import get_task_list_template

TASK_LIST_CODEC: EntityCodec[TaskList] = EntityCodec(
    "list", typed_dict_fields(TaskList)
)


class TaskListRepository(EntityRepository[TaskList]):
    def __init__(self, engine: SyncEngine, tasks: TaskRepository) -> None:
        super().__init__(
            engine,
            EntryType.CUSTOM_LISTS,
            TASK_LIST_CODEC,
            label="List",
            template=get_task_list_template,
            timestamped=False,
        )
        self._tasks = tasks

    async def _after_delete(self, ids: list[EntityId]) -> Optional[SyncOutcome]:
        # Tasks of a deleted list move to the inbox, they are never deleted
        outcome: Optional[SyncOutcome] = None
        for list_id in ids:
            moved = await self._tasks.reassign_list(list_id, INBOX_LIST_ID)
            if moved is not None:
                outcome = moved if outcome is None else outcome.merge(moved)
        return outcome
