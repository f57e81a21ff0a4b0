# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from waypoint.model.task import INBOX_LIST_ID, Task
from waypoint.model.task_list import TaskList
from waypoint.view.views.header import header
from waypoint.view.views.util import colored, short_id


def lists_view(lists: list[TaskList], tasks: list[Task] = []) -> None:
    header("lists")

    open_counts: dict[str, int] = {}
    for task in tasks:
        if not task["completed"]:
            open_counts[task["list_id"]] = open_counts.get(task["list_id"], 0) + 1

    lists_table = Table(box=box.SIMPLE)
    lists_table.add_column("id")
    lists_table.add_column("name")
    lists_table.add_column("icon")
    lists_table.add_column("open")

    lists_table.add_row(
        INBOX_LIST_ID, "Inbox", "", str(open_counts.get(INBOX_LIST_ID, 0))
    )
    for task_list in lists:
        lists_table.add_row(
            short_id(task_list["id"]),
            colored(task_list["name"], task_list.get("color")),
            task_list.get("icon") or "",
            str(open_counts.get(task_list["id"], 0)),
        )

    console = Console()
    console.print(lists_table)
