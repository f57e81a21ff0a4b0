# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich import print

from waypoint.repository.registry import Repositories
from waypoint.terminal.custom_typer import AliasedTyperGroup
from waypoint.terminal.parse import open_editor_for_text
from waypoint.terminal.session import run, unwrap
from waypoint.view.views import notepad as notepad_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, s")
def show() -> None:
    async def _show(repos: Repositories) -> str:
        return unwrap(await repos.notepad.get_content())

    notepad_report.notepad_view(run(_show))


@app.command("set")
def set(
    text: Annotated[
        Optional[str], typer.Argument(help="new content, opens $EDITOR when omitted")
    ] = None,
) -> None:
    """Replace the notepad content."""

    async def _current(repos: Repositories) -> str:
        return unwrap(await repos.notepad.get_content())

    content = text
    if content is None:
        content = open_editor_for_text(run(_current)) or ""

    async def _save(repos: Repositories) -> None:
        unwrap(await repos.notepad.save_content(content))

    run(_save)
    print("[green]Notepad saved[/green]")


@app.command("append, a", no_args_is_help=True)
def append(text: str) -> None:
    async def _append(repos: Repositories) -> None:
        current = unwrap(await repos.notepad.get_content())
        content = f"{current}\n{text}" if current else text
        unwrap(await repos.notepad.save_content(content))

    run(_append)
    print("[green]Notepad saved[/green]")


@app.command("clear")
def clear() -> None:
    async def _clear(repos: Repositories) -> None:
        unwrap(await repos.notepad.save_content(""))

    run(_clear)
    print("[green]Notepad cleared[/green]")
