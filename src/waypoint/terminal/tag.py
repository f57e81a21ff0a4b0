# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import typer
from rich import print

from waypoint.model.entity_id import EntityId
from waypoint.model.tag import Tag
from waypoint.repository.registry import Repositories
from waypoint.terminal.custom_typer import AliasedTyperGroup
from waypoint.terminal.session import resolve_named_id, run, unwrap
from waypoint.view.views import tag as tag_report
from waypoint.view.views.util import colored, short_id

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    color: Annotated[
        Optional[str],
        typer.Option("--color", "-c", help="hex color, random when omitted"),
    ] = None,
) -> None:
    async def _add(repos: Repositories) -> Tag:
        data: dict[str, Any] = {"name": name}
        if color is not None:
            data["color"] = color
        return unwrap(await repos.tags.create(data))

    tag = run(_add)
    print(f"Created tag {colored(tag['name'], tag['color'])} ({short_id(tag['id'])})")


@app.command("ls")
def ls() -> None:
    async def _ls(repos: Repositories) -> list[Tag]:
        return unwrap(await repos.tags.get_all())

    tag_report.tags_view(run(_ls))


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: Annotated[str, typer.Argument(help="tag name or id")],
    name: Annotated[Optional[str], typer.Option("--name", "-n")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-c")] = None,
) -> None:
    async def _modify(repos: Repositories) -> Tag:
        tag_id = resolve_named_id(unwrap(await repos.tags.get_all()), id, "Tag")
        updates: dict[str, Any] = {}
        if name is not None:
            updates["name"] = name
        if color is not None:
            updates["color"] = color
        return unwrap(await repos.tags.update(tag_id, updates))

    tag = run(_modify)
    print(f"Updated tag {colored(tag['name'], tag['color'])} ({short_id(tag['id'])})")


@app.command("delete, del", no_args_is_help=True)
def delete(id: Annotated[str, typer.Argument(help="tag name or id")]) -> None:
    """Delete a tag and remove it from every task."""

    async def _delete(repos: Repositories) -> EntityId:
        tag_id = resolve_named_id(unwrap(await repos.tags.get_all()), id, "Tag")
        unwrap(await repos.tags.delete(tag_id))
        return tag_id

    tag_id = run(_delete)
    print(f"[green]Deleted tag {short_id(tag_id)}[/green]")
