# SPDX-License-Identifier: MIT

import os
import re
import subprocess
import tempfile
from typing import Optional

import pendulum
import typer

from worklog.model.task_status import TASK_STATUSES
from worklog.time import date_from_value, today


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = str(date_param).strip()

    # Match YYYY-MM-DD format
    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_value(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return today().add(days=int(date))

    if date == "today" or date == "t":
        return today()
    if date == "yesterday" or date == "y":
        return today().subtract(days=1)
    raise typer.BadParameter("Incorrect date format")


def parse_month(month_param: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Parse a month in YYYY-MM format.

    Returns:
        Tuple of (year, month) or None if month_param is None

    Raises:
        typer.BadParameter: If the format is invalid or the month is out of range
    """
    if month_param is None:
        return None

    month_match = re.match(r"^(\d{4})-(\d{1,2})$", month_param.strip())
    if not month_match:
        raise typer.BadParameter(
            f"Month must be in YYYY-MM format (e.g., 2024-01), got '{month_param}'"
        )

    year = int(month_match.group(1))
    month = int(month_match.group(2))
    if month < 1 or month > 12:
        raise typer.BadParameter(f"Month must be between 1 and 12, got {month}")

    return (year, month)


def parse_status(status_param: str) -> str:
    """
    Match a task status case-insensitively, accepting '-' or '_' for spaces.

    "done", "in-progress" and "Wait_Review" all resolve to a known status.
    """
    normalized = re.sub(r"[-_\s]+", " ", status_param.strip()).lower()
    for status in TASK_STATUSES:
        if status.lower() == normalized:
            return status
    raise typer.BadParameter(
        f"Unknown status '{status_param}', expected one of: {', '.join(TASK_STATUSES)}"
    )


def open_editor_for_text(initial_text: Optional[str] = None) -> Optional[str]:
    """
    Open the user's preferred editor on a YAML document.
    Returns the edited text, or None if the document was emptied.
    """
    # Get the editor from environment, default to nano
    editor = os.environ.get("EDITOR", "nano")

    with tempfile.NamedTemporaryFile(mode="w+", suffix=".yaml") as tf:
        if initial_text is not None:
            tf.write(initial_text)
            tf.flush()

        subprocess.run([editor, tf.name], check=True)
        # Editors may replace the file rather than write through our handle
        with open(tf.name) as edited:
            text = edited.read()
        if not text.strip():
            return None
        return text
