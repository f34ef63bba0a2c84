# SPDX-License-Identifier: MIT

import logging

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from taskflow import configuration
from taskflow.logging_setup import setup_logging
from taskflow.model.alert import AlertSink
from taskflow.model.task import Priority, TaskDraft
from taskflow.repository.configuration import CONFIGURATION_REPO
from taskflow.repository.storage import YamlTaskStorage
from taskflow.repository.task import TaskStore
from taskflow.service.scheduler import Scheduler

logger = logging.getLogger(__name__)

SAMPLE_TASKS: list[TaskDraft] = [
    {
        "title": "Welcome to taskflow!",
        "description": "This is your first task. You can edit, complete, or delete it to get started.",
        "priority": Priority.MEDIUM,
        "category": "personal",
    },
    {
        "title": "Review quarterly reports",
        "description": "Analyze Q3 performance metrics and prepare summary for stakeholders",
        "priority": Priority.HIGH,
        "category": "work",
    },
    {
        "title": "Plan weekend activities",
        "description": "Research local events and make reservations",
        "priority": Priority.LOW,
        "category": "personal",
    },
]


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    config = CONFIGURATION_REPO.get_config()
    setup_logging(
        log_file=configuration.LOG_PATH,
        console_level=config["log_level"],
    )
    CONFIGURATION_REPO.flush()


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(
            dump(dict(config), Dumper=Dumper, sort_keys=False)
        )


def open_task_store(alert: AlertSink, scheduler: Scheduler) -> TaskStore:
    """
    Create the task store over the configured tasks file.

    On first run (no tasks file yet) the store is seeded with sample tasks
    when the configuration asks for it.
    """
    config = CONFIGURATION_REPO.get_config()
    first_run = not configuration.DATA_TASKS_PATH.is_file()

    store = TaskStore(
        YamlTaskStorage(configuration.DATA_TASKS_PATH),
        alert,
        scheduler,
        sort_mode=config["default_sort_mode"],
    )
    if first_run and config["seed_sample_tasks"]:
        seed_sample_tasks(store)
    return store


def seed_sample_tasks(store: TaskStore) -> int:
    if store.get_statistics()["total"] > 0:
        return 0
    for draft in SAMPLE_TASKS:
        store.create(draft, notify=False)
    logger.info("Seeded %s sample tasks", len(SAMPLE_TASKS))
    return len(SAMPLE_TASKS)
