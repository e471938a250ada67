# SPDX-License-Identifier: MIT

"""Display state shared by the report views, held in context variables."""

from contextvars import ContextVar

# Whether reports print the worklog header, on by default
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()
