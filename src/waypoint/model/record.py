# SPDX-License-Identifier: MIT

from typing import TypedDict

from waypoint.model.entity_id import EntityId


class Record(TypedDict):
    id: EntityId
    entry_type: str
    content: str
