# SPDX-License-Identifier: MIT

import logging
from pathlib import Path
from typing import Optional, TypedDict

from rich.console import Console
from rich.logging import RichHandler
from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "worklog"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_DAILY_LOGS_PATH: Path = DATA_PATH / "daily-logs.yaml"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_SUMMARY_TOP_N = 5
DEFAULT_HEATMAP_DAYS = 35


class Configuration(TypedDict):
    show_header: bool
    data_path: Optional[str]
    log_level: str
    summary_top_n: int
    heatmap_days: int


def get_default_configuration() -> Configuration:
    return {
        "show_header": True,
        "data_path": None,
        "log_level": DEFAULT_LOG_LEVEL,
        "summary_top_n": DEFAULT_SUMMARY_TOP_N,
        "heatmap_days": DEFAULT_HEATMAP_DAYS,
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before the
    log repository is instantiated.
    """
    global DATA_PATH, DATA_DAILY_LOGS_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting)
        DATA_DAILY_LOGS_PATH = DATA_PATH / "daily-logs.yaml"


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure the worklog logger to write to stderr through rich."""
    root = logging.getLogger(APP_NAME)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Repeated calls (tests, nested invocations) must not stack handlers
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
