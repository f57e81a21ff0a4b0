# SPDX-License-Identifier: MIT

from typing import TypedDict

from waypoint.model.entity_id import EntityId


class Tag(TypedDict):
    id: EntityId
    name: str
    color: str
