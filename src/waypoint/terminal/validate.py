# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from waypoint.model.goal import GOAL_STATUSES

PRIORITIES = ("high", "medium", "low", "none")


def validate_priority(priority: Optional[str]) -> Optional[str]:
    if priority is None:
        return None
    if priority.lower() not in PRIORITIES:
        raise typer.BadParameter(f"Priority must be one of: {', '.join(PRIORITIES)}")
    return priority.lower()


def validate_status(status: Optional[str]) -> Optional[str]:
    if status is None:
        return None
    normalized = status.lower().replace("-", "_")
    if normalized not in GOAL_STATUSES:
        raise typer.BadParameter(f"Status must be one of: {', '.join(GOAL_STATUSES)}")
    return normalized


def validate_log_level(log_level: Optional[str]) -> Optional[str]:
    if log_level is None:
        return None
    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise typer.BadParameter("Log level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
    return log_level.upper()
