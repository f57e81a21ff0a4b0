# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from waypoint.terminal import configuration, goal, notepad, tag, task, task_list
from waypoint.terminal.custom_typer import OrderedAliasedTyperGroup
from waypoint.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Waypoint - tasks, lists and long-range goals in the CLI",
    no_args_is_help=True,
)
app.add_typer(task.app, name="task, t")
app.add_typer(task_list.app, name="list, l")
app.add_typer(tag.app, name="tag, tg")
app.add_typer(goal.goal_app, name="goal, g")
app.add_typer(goal.target_app, name="target, tr")
app.add_typer(goal.plan_app, name="plan, p")
app.add_typer(notepad.app, name="notepad, n")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    Waypoint - tasks, lists and long-range goals in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
