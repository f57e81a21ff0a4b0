# SPDX-License-Identifier: MIT

import os
import re
import subprocess
import tempfile
from typing import Optional

import pendulum
import typer

from waypoint.time import datetime_from_local_date_str

DATETIME_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


def parse_datetime(datetime_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    """Parse a date given on the command line into a UTC datetime at local midnight."""
    if datetime_param is None:
        return None

    datetime = str(datetime_param).strip().lower()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", datetime):
        try:
            return datetime_from_local_date_str(datetime)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", datetime):
        return pendulum.today().add(days=int(datetime)).in_tz("UTC")

    if datetime in ("today", "t"):
        return pendulum.today().in_tz("UTC")
    if datetime in ("yesterday", "y"):
        return pendulum.yesterday().in_tz("UTC")
    if datetime in ("tomorrow", "o"):
        return pendulum.tomorrow().in_tz("UTC")
    raise typer.BadParameter("Incorrect date format")


def open_editor_for_text(initial_text: Optional[str] = None) -> Optional[str]:
    """
    Open the user's preferred editor on a temporary file.
    Returns the edited text with trailing newlines removed, or None if empty.
    """
    editor = os.environ.get("EDITOR", "nano")

    with tempfile.NamedTemporaryFile(mode="w+", suffix=".md") as tf:
        if initial_text is not None:
            tf.write(initial_text)
            tf.flush()

        subprocess.run([editor, tf.name], check=True)
        tf.seek(0)
        text = tf.read()
        if not text.strip():
            return None
        return text.rstrip("\n")
