# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from waypoint.model.tag import Tag
from waypoint.model.task import Task
from waypoint.model.task_list import TaskList
from waypoint.time import datetime_to_display_local_date_str_optional
from waypoint.view.views.header import header
from waypoint.view.views.util import PRIORITY_COLORS, colored, format_tags, short_id


def task_state(task: Task) -> str:
    return "X" if task["completed"] else " "


def tasks_view(
    report_name: str,
    tasks: list[Task],
    lists: list[TaskList] = [],
    tags: list[Tag] = [],
) -> None:
    header(report_name)

    list_names = {task_list["id"]: task_list["name"] for task_list in lists}

    tasks_table = Table(box=box.SIMPLE)
    tasks_table.add_column("id")
    tasks_table.add_column("state")
    tasks_table.add_column("priority")
    tasks_table.add_column("title")
    tasks_table.add_column("list")
    tasks_table.add_column("due")
    tasks_table.add_column("tags")

    for task in tasks:
        priority = task.get("priority", "none")
        tasks_table.add_row(
            short_id(task["id"]),
            task_state(task),
            colored(priority, PRIORITY_COLORS.get(priority)),
            task["title"],
            list_names.get(task["list_id"], task["list_id"]),
            datetime_to_display_local_date_str_optional(task.get("due_date")) or "",
            format_tags(task.get("tags"), tags),
        )

    console = Console()
    console.print(tasks_table)


def single_task_view(task: Task, tags: list[Tag] = []) -> None:
    header(f"task {short_id(task['id'])}")

    task_table = Table(box=box.SIMPLE, show_header=False)
    task_table.add_column("field", style="cyan")
    task_table.add_column("value")

    task_table.add_row("id", task["id"])
    task_table.add_row("title", task["title"])
    task_table.add_row("completed", "yes" if task["completed"] else "no")
    task_table.add_row("priority", task.get("priority", "none"))
    task_table.add_row("list", task["list_id"])
    task_table.add_row(
        "start", datetime_to_display_local_date_str_optional(task.get("start_date")) or ""
    )
    task_table.add_row(
        "due", datetime_to_display_local_date_str_optional(task.get("due_date")) or ""
    )
    task_table.add_row("tags", format_tags(task.get("tags"), tags))
    task_table.add_row("notes", task.get("notes") or "")

    console = Console()
    console.print(task_table)
