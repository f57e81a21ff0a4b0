# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from waypoint.model.tag import Tag
from waypoint.view.views.header import header
from waypoint.view.views.util import colored, short_id


def tags_view(tags: list[Tag]) -> None:
    header("tags")

    tags_table = Table(box=box.SIMPLE)
    tags_table.add_column("id")
    tags_table.add_column("tag")
    tags_table.add_column("color")

    for tag in tags:
        tags_table.add_row(
            short_id(tag["id"]), colored(tag["name"], tag["color"]), tag["color"]
        )

    console = Console()
    console.print(tags_table)
