# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import typer
from rich import print

from waypoint.model.entity_id import EntityId
from waypoint.model.task import INBOX_LIST_ID, Task
from waypoint.model.task_list import TaskList
from waypoint.repository.registry import Repositories
from waypoint.terminal.custom_typer import AliasedTyperGroup
from waypoint.terminal.session import fail, resolve_named_id, run, unwrap
from waypoint.view.views import task_list as task_list_report
from waypoint.view.views.util import short_id

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _resolve(lists: list[TaskList], value: str) -> EntityId:
    if value.lower() == INBOX_LIST_ID:
        fail("The inbox cannot be changed")
    return resolve_named_id(lists, value, "List")


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    color: Annotated[
        Optional[str], typer.Option("--color", "-c", help="color name or hex like #0EA5E9")
    ] = None,
    icon: Annotated[Optional[str], typer.Option("--icon", "-i")] = None,
) -> None:
    async def _add(repos: Repositories) -> TaskList:
        data: dict[str, Any] = {"name": name}
        if color is not None:
            data["color"] = color
        if icon is not None:
            data["icon"] = icon
        return unwrap(await repos.lists.create(data))

    task_list = run(_add)
    print(f"[green]Created list {task_list['name']} ({short_id(task_list['id'])})[/green]")


@app.command("ls")
def ls() -> None:
    async def _ls(repos: Repositories) -> tuple[list[TaskList], list[Task]]:
        return (
            unwrap(await repos.lists.get_all()),
            unwrap(await repos.tasks.get_all()),
        )

    lists, tasks = run(_ls)
    task_list_report.lists_view(lists, tasks)


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: Annotated[str, typer.Argument(help="list name or id")],
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-c")] = None,
    remove_color: Annotated[bool, typer.Option("--remove-color", "-rc")] = False,
    icon: Annotated[Optional[str], typer.Option("--icon", "-i")] = None,
) -> None:
    async def _modify(repos: Repositories) -> TaskList:
        list_id = _resolve(unwrap(await repos.lists.get_all()), id)
        updates: dict[str, Any] = {}
        if name is not None:
            updates["name"] = name
        if color is not None:
            updates["color"] = color
        if remove_color:
            updates["color"] = None
        if icon is not None:
            updates["icon"] = icon
        return unwrap(await repos.lists.update(list_id, updates))

    task_list = run(_modify)
    print(f"[green]Updated list {task_list['name']} ({short_id(task_list['id'])})[/green]")


@app.command("delete, del", no_args_is_help=True)
def delete(id: Annotated[str, typer.Argument(help="list name or id")]) -> None:
    """Delete a list. Its tasks move to the inbox."""

    async def _delete(repos: Repositories) -> EntityId:
        list_id = _resolve(unwrap(await repos.lists.get_all()), id)
        unwrap(await repos.lists.delete(list_id))
        return list_id

    list_id = run(_delete)
    print(f"[green]Deleted list {short_id(list_id)}[/green]")
