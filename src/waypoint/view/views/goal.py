# SPDX-License-Identifier: MIT

from typing import Any, Mapping, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from waypoint.time import datetime_to_display_local_date_str_optional
from waypoint.view.views.header import header
from waypoint.view.views.util import STATUS_COLORS, colored, short_id


def goals_view(
    report_name: str,
    entries: list[Mapping[str, Any]],
    parent_field: Optional[str] = None,
) -> None:
    """
    Render three-year goals, ninety-day targets or plans.

    All three share their shape; ``parent_field`` names the column that links
    an entry to its parent, if any.
    """
    header(report_name)

    goals_table = Table(box=box.SIMPLE)
    goals_table.add_column("id")
    goals_table.add_column("status")
    goals_table.add_column("title")
    goals_table.add_column("start")
    goals_table.add_column("end")
    if parent_field is not None:
        goals_table.add_column("parent")

    for entry in entries:
        status = entry.get("status", "not_started")
        row = [
            short_id(entry["id"]),
            colored(status, STATUS_COLORS.get(status)),
            entry["title"],
            datetime_to_display_local_date_str_optional(entry.get("start_date")) or "",
            datetime_to_display_local_date_str_optional(entry.get("end_date")) or "",
        ]
        if parent_field is not None:
            parent_id = entry.get(parent_field)
            row.append(short_id(parent_id) if parent_id else "")
        goals_table.add_row(*row)

    console = Console()
    console.print(goals_table)
