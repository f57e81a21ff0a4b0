# SPDX-License-Identifier: MIT

from typing import Any


def get_task_list_template() -> dict[str, Any]:
    return {
        "name": "",
        "color": None,
        "icon": None,
    }
