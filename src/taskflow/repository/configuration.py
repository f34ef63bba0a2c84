# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from taskflow import configuration
from taskflow.exceptions import ConfigurationError
from taskflow.model.filter import SORT_MODES

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        try:
            raw = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)
        except (OSError, YAMLError) as exc:
            raise ConfigurationError(
                f"could not read {configuration.APP_CONFIG_PATH}"
            ) from exc

        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"{configuration.APP_CONFIG_PATH} does not hold a mapping"
            )

        # Back-fill keys added after the file was first written
        defaults = configuration.get_default_configuration()
        for key, value in defaults.items():
            if key not in raw:
                raw[key] = value
                self.is_dirty = True
                logger.info("Configuration migration: added key %s", key)

        self._config = raw  # type: ignore[assignment]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(
            dump(dict(config), Dumper=Dumper, sort_keys=False)
        )

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        default_sort_mode: Optional[str] = None,
        overdue_check_interval_seconds: Optional[float] = None,
        overdue_initial_delay_seconds: Optional[float] = None,
        seed_sample_tasks: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> None:
        if default_sort_mode is not None and default_sort_mode not in SORT_MODES:
            raise ConfigurationError(f"unknown sort mode: {default_sort_mode}")
        if log_level is not None and log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"unknown log level: {log_level}")

        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if default_sort_mode is not None:
            self.config["default_sort_mode"] = default_sort_mode
        if overdue_check_interval_seconds is not None:
            self.config["overdue_check_interval_seconds"] = (
                overdue_check_interval_seconds
            )
        if overdue_initial_delay_seconds is not None:
            self.config["overdue_initial_delay_seconds"] = (
                overdue_initial_delay_seconds
            )
        if seed_sample_tasks is not None:
            self.config["seed_sample_tasks"] = seed_sample_tasks
        if log_level is not None:
            self.config["log_level"] = log_level.upper()


CONFIGURATION_REPO = ConfigurationRepository()
