# SPDX-License-Identifier: MIT

from rich.console import Console
from rich.padding import Padding
from rich.text import Text

from waypoint.view.views.header import header


def notepad_view(content: str) -> None:
    header("notepad")

    console = Console()
    if not content.strip():
        console.print(Padding("[grey50]empty[/grey50]", (0, 1)))
        return
    console.print(Padding(Text(content), (0, 1)))
