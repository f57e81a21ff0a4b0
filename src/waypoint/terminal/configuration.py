# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from waypoint import configuration
from waypoint.repository.configuration import CONFIGURATION_REPO
from waypoint.terminal.custom_typer import AliasedTyperGroup
from waypoint.terminal.validate import validate_log_level

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("log_level", config["log_level"])
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("config_file", str(configuration.APP_CONFIG_PATH))

    console.print(table)


@app.command("set, s", no_args_is_help=True)
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", "-d", help="directory holding the local cache"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", "-rd", help="use the default data directory"),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", "-l", callback=validate_log_level),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--hide-header"),
    ] = None,
) -> None:
    """Update configuration settings. Changes apply to the next invocation."""
    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        log_level=log_level,
        show_header=show_header,
    )
    CONFIGURATION_REPO.flush()
    view()
