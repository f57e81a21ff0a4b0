# SPDX-License-Identifier: MIT

import uuid
from typing import Container

from waypoint.errors import IdGenerationError

type EntityId = str

MAX_ID_ATTEMPTS = 8


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())


def generate_unique_entity_id(existing_ids: Container[EntityId]) -> EntityId:
    for _ in range(MAX_ID_ATTEMPTS):
        entity_id = generate_entity_id()
        if entity_id not in existing_ids:
            return entity_id
    raise IdGenerationError(
        f"could not generate a unique id after {MAX_ID_ATTEMPTS} attempts"
    )
