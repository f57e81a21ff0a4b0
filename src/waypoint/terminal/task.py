# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import pendulum
import typer
from rich import print

from waypoint.model.entity_id import EntityId
from waypoint.model.tag import Tag
from waypoint.model.task import INBOX_LIST_ID, Task
from waypoint.model.task_list import TaskList
from waypoint.repository.registry import Repositories
from waypoint.terminal.custom_typer import AliasedTyperGroup
from waypoint.terminal.parse import DATETIME_HELP, open_editor_for_text, parse_datetime
from waypoint.terminal.session import (
    resolve_id,
    resolve_named_id,
    run,
    unwrap,
)
from waypoint.terminal.validate import validate_priority
from waypoint.view.views import task as task_report
from waypoint.view.views.util import short_id

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2, "none": 3}


def _resolve_list_id(lists: list[TaskList], value: str) -> EntityId:
    if value.lower() == INBOX_LIST_ID:
        return INBOX_LIST_ID
    return resolve_named_id(lists, value, "List")


def _resolve_tag_ids(tags: list[Tag], values: list[str]) -> list[EntityId]:
    tag_ids: list[EntityId] = []
    for value in values:
        tag_id = resolve_named_id(tags, value, "Tag")
        if tag_id not in tag_ids:
            tag_ids.append(tag_id)
    return tag_ids


@app.command("add, a", no_args_is_help=True)
def add(
    title: str,
    list_name: Annotated[
        Optional[str],
        typer.Option("--list", "-l", help="list name or id, defaults to inbox"),
    ] = None,
    priority: Annotated[
        Optional[str],
        typer.Option(
            "--priority",
            "-p",
            callback=validate_priority,
            help="valid input: high, medium, low, none",
        ),
    ] = None,
    due: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--due", "-u", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="tag name or id, accepts multiple tag options"),
    ] = None,
) -> None:
    async def _add(repos: Repositories) -> tuple[Task, list[Tag]]:
        data: dict[str, Any] = {"title": title}
        if list_name is not None:
            lists = unwrap(await repos.lists.get_all())
            data["list_id"] = _resolve_list_id(lists, list_name)
        if priority is not None:
            data["priority"] = priority
        if due is not None:
            data["due_date"] = due
        if start is not None:
            data["start_date"] = start
        if notes is not None:
            data["notes"] = notes

        all_tags = unwrap(await repos.tags.get_all())
        if tags:
            data["tags"] = _resolve_tag_ids(all_tags, tags)

        task = unwrap(await repos.tasks.create(data))
        return task, all_tags

    task, all_tags = run(_add)
    task_report.single_task_view(task, all_tags)


@app.command("ls")
def ls(
    list_name: Annotated[
        Optional[str], typer.Option("--list", "-l", help="list name or id")
    ] = None,
    tag: Annotated[Optional[str], typer.Option("--tag", "-t")] = None,
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="include completed tasks")
    ] = False,
) -> None:
    async def _ls(
        repos: Repositories,
    ) -> tuple[list[Task], list[TaskList], list[Tag]]:
        lists = unwrap(await repos.lists.get_all())
        all_tags = unwrap(await repos.tags.get_all())
        if list_name is not None:
            tasks = unwrap(
                await repos.tasks.get_by_list(_resolve_list_id(lists, list_name))
            )
        else:
            tasks = unwrap(await repos.tasks.get_all())

        if tag is not None:
            tag_id = resolve_named_id(all_tags, tag, "Tag")
            tasks = [task for task in tasks if tag_id in (task.get("tags") or [])]
        if not show_all:
            tasks = [task for task in tasks if not task["completed"]]
        return tasks, lists, all_tags

    tasks, lists, all_tags = run(_ls)
    tasks = sorted(
        tasks,
        key=lambda task: (
            task["completed"],
            PRIORITY_ORDER.get(task.get("priority", "none"), 3),
        ),
    )
    task_report.tasks_view("tasks", tasks, lists, all_tags)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-ti")] = None,
    list_name: Annotated[
        Optional[str], typer.Option("--list", "-l", help="list name or id")
    ] = None,
    priority: Annotated[
        Optional[str],
        typer.Option(
            "--priority",
            "-p",
            callback=validate_priority,
            help="valid input: high, medium, low, none",
        ),
    ] = None,
    due: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--due", "-u", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    remove_due: Annotated[bool, typer.Option("--remove-due", "-ru")] = False,
    start: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--start", "-s", parser=parse_datetime, help=DATETIME_HELP),
    ] = None,
    remove_start: Annotated[bool, typer.Option("--remove-start", "-rs")] = False,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
    edit_notes: Annotated[
        bool, typer.Option("--edit-notes", "-en", help="edit notes in $EDITOR")
    ] = False,
    add_tags: Annotated[
        Optional[list[str]], typer.Option("--add-tag", "-t")
    ] = None,
    remove_tags: Annotated[
        Optional[list[str]], typer.Option("--remove-tag", "-rt")
    ] = None,
) -> None:
    async def _modify(repos: Repositories) -> tuple[Task, list[Tag]]:
        tasks = unwrap(await repos.tasks.get_all())
        task_id = resolve_id(tasks, id, "Task")
        task = next(task for task in tasks if task["id"] == task_id)

        updates: dict[str, Any] = {}
        if title is not None:
            updates["title"] = title
        if list_name is not None:
            lists = unwrap(await repos.lists.get_all())
            updates["list_id"] = _resolve_list_id(lists, list_name)
        if priority is not None:
            updates["priority"] = priority
        if due is not None:
            updates["due_date"] = due
        if remove_due:
            updates["due_date"] = None
        if start is not None:
            updates["start_date"] = start
        if remove_start:
            updates["start_date"] = None
        if notes is not None:
            updates["notes"] = notes
        if edit_notes:
            updates["notes"] = open_editor_for_text(task.get("notes"))

        all_tags = unwrap(await repos.tags.get_all())
        if add_tags or remove_tags:
            task_tags = list(task.get("tags") or [])
            for tag_id in _resolve_tag_ids(all_tags, add_tags or []):
                if tag_id not in task_tags:
                    task_tags.append(tag_id)
            removed = _resolve_tag_ids(all_tags, remove_tags or [])
            updates["tags"] = [tag_id for tag_id in task_tags if tag_id not in removed]

        return unwrap(await repos.tasks.update(task_id, updates)), all_tags

    task, all_tags = run(_modify)
    task_report.single_task_view(task, all_tags)


@app.command("done, d", no_args_is_help=True)
def done(id: str) -> None:
    """Toggle a task between completed and open."""

    async def _done(repos: Repositories) -> Task:
        tasks = unwrap(await repos.tasks.get_all())
        return unwrap(await repos.tasks.toggle_completion(resolve_id(tasks, id, "Task")))

    task = run(_done)
    state = "completed" if task["completed"] else "reopened"
    print(f"[green]Task {short_id(task['id'])} {state}[/green]")


@app.command("delete, del", no_args_is_help=True)
def delete(id: str) -> None:
    async def _delete(repos: Repositories) -> EntityId:
        tasks = unwrap(await repos.tasks.get_all())
        task_id = resolve_id(tasks, id, "Task")
        unwrap(await repos.tasks.delete(task_id))
        return task_id

    task_id = run(_delete)
    print(f"[green]Deleted task {short_id(task_id)}[/green]")
