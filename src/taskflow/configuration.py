# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "taskflow"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_TASKS_PATH: Path = DATA_PATH / "tasks.yaml"
LOG_PATH: Path = DATA_PATH / "taskflow.log"


class Configuration(TypedDict):
    data_path: Optional[str]
    default_sort_mode: str
    overdue_check_interval_seconds: float
    overdue_initial_delay_seconds: float
    seed_sample_tasks: bool
    log_level: str


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "default_sort_mode": "priority",
        "overdue_check_interval_seconds": 60.0,
        "overdue_initial_delay_seconds": 5.0,
        "seed_sample_tasks": True,
        "log_level": "WARNING",
    }


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before the task
    store is instantiated.
    """
    global DATA_PATH, DATA_TASKS_PATH, LOG_PATH

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting).expanduser()
        DATA_TASKS_PATH = DATA_PATH / "tasks.yaml"
        LOG_PATH = DATA_PATH / "taskflow.log"
