# SPDX-License-Identifier: MIT

from typing import Optional

from waypoint.model.entity_id import EntityId
from waypoint.model.tag import Tag

SHORT_ID_LENGTH = 8

PRIORITY_COLORS = {
    "high": "red",
    "medium": "yellow",
    "low": "green",
    "none": "grey50",
}

STATUS_COLORS = {
    "not_started": "grey50",
    "in_progress": "deep_sky_blue1",
    "completed": "green",
    "abandoned": "red",
}


def short_id(id: EntityId) -> str:
    return id[:SHORT_ID_LENGTH]


def colored(text: str, color: Optional[str]) -> str:
    if not color:
        return text
    return f"[{color}]{text}[/{color}]"


def format_tags(tag_ids: Optional[list[EntityId]], tags: list[Tag]) -> str:
    """Render tag ids as their colored names, falling back to the short id."""
    if not tag_ids:
        return ""
    by_id = {tag["id"]: tag for tag in tags}
    rendered = []
    for tag_id in tag_ids:
        tag = by_id.get(tag_id)
        if tag is None:
            rendered.append(short_id(tag_id))
        else:
            rendered.append(colored(tag["name"], tag.get("color")))
    return ", ".join(rendered)
