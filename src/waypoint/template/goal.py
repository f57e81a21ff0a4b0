# SPDX-License-Identifier: MIT

from typing import Any


def get_three_year_goal_template() -> dict[str, Any]:
    return {
        "title": "",
        "description": None,
        "start_date": None,
        "end_date": None,
        "status": "not_started",
        "icon": None,
        "vision_id": None,
    }


def get_ninety_day_target_template() -> dict[str, Any]:
    return {
        "title": "",
        "description": None,
        "start_date": None,
        "end_date": None,
        "status": "not_started",
        "icon": None,
    }


def get_plan_template() -> dict[str, Any]:
    return {
        "title": "",
        "description": None,
        "start_date": None,
        "end_date": None,
        "status": "not_started",
    }
