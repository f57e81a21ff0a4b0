# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

from waypoint.model.entity_id import EntityId


class TaskList(TypedDict):
    id: EntityId
    name: str
    color: NotRequired[Optional[str]]
    icon: NotRequired[Optional[str]]
