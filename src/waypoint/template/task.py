# SPDX-License-Identifier: MIT

from typing import Any

from waypoint.model.task import INBOX_LIST_ID


def get_task_template() -> dict[str, Any]:
    return {
        "title": "",
        "completed": False,
        "priority": "none",
        "list_id": INBOX_LIST_ID,
        "notes": None,
        "due_date": None,
        "start_date": None,
        "goal_id": None,
        "is_action": False,
        "tags": None,
        "recurring": False,
        "recurring_pattern": None,
    }
