# SPDX-License-Identifier: MIT

from typing import Any, Optional

from waypoint.model.entity_id import EntityId
from waypoint.model.entry_type import EntryType
from waypoint.model.result import Result, SyncOutcome
from waypoint.model.task import INBOX_LIST_ID, Task
from waypoint.repository.entity import EntityRepository
from waypoint.store.codec import EntityCodec, typed_dict_fields
from waypoint.store.sync import SyncEngine
from waypoint.template.task import get_task_template

TASK_CODEC: EntityCodec[Task] = EntityCodec(
    "task",
    typed_dict_fields(Task),
    datetime_fields=("created_at", "updated_at", "due_date", "start_date"),
)


class TaskRepository(EntityRepository[Task]):
    def __init__(self, engine: SyncEngine) -> None:
        super().__init__(
            engine,
            EntryType.TASKS,
            TASK_CODEC,
            label="Task",
            template=get_task_template,
        )

    async def toggle_completion(self, id: EntityId) -> Result[Task]:
        def toggle(task: dict[str, Any]) -> None:
            task["completed"] = not task.get("completed", False)

        return await self._modify_one(id, toggle)

    async def get_by_list(self, list_id: EntityId) -> Result[list[Task]]:
        result = await self.get_all()
        tasks = result.data or []
        return Result.ok([task for task in tasks if task.get("list_id") == list_id])

    async def reassign_list(
        self, from_list_id: EntityId, to_list_id: EntityId = INBOX_LIST_ID
    ) -> Optional[SyncOutcome]:
        def move(task: dict[str, Any]) -> None:
            task["list_id"] = to_list_id

        return await self.modify_where(
            lambda task: task.get("list_id") == from_list_id, move
        )

    async def remove_tag(self, tag_id: EntityId) -> Optional[SyncOutcome]:
        def strip(task: dict[str, Any]) -> None:
            task["tags"] = [tag for tag in task["tags"] if tag != tag_id]

        return await self.modify_where(
            lambda task: tag_id in (task.get("tags") or []), strip
        )
