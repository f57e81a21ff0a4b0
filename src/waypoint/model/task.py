# SPDX-License-Identifier: MIT

from typing import Literal, NotRequired, Optional, TypedDict

import pendulum

from waypoint.model.entity_id import EntityId

type Priority = Literal["high", "medium", "low", "none"]

INBOX_LIST_ID: EntityId = "inbox"


class Task(TypedDict):
    id: EntityId
    title: str
    completed: bool
    priority: Priority
    list_id: EntityId
    notes: NotRequired[Optional[str]]
    due_date: NotRequired[Optional[pendulum.DateTime]]
    start_date: NotRequired[Optional[pendulum.DateTime]]
    goal_id: NotRequired[Optional[EntityId]]
    is_action: NotRequired[bool]
    tags: NotRequired[Optional[list[EntityId]]]
    recurring: NotRequired[bool]
    recurring_pattern: NotRequired[Optional[str]]
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime
