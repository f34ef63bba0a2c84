# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from taskflow.exceptions import ConfigurationError
from taskflow.repository.configuration import CONFIGURATION_REPO
from taskflow.terminal.custom_typer import AliasedTyperGroup
from taskflow.terminal.validate import validate_sort_mode
from taskflow.view.header import header

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, s")
def show() -> None:
    header("config")

    config_table = Table(box=box.SIMPLE)
    config_table.add_column("key")
    config_table.add_column("value")
    for key, value in CONFIGURATION_REPO.get_config().items():
        config_table.add_row(key, str(value))

    console = Console()
    console.print(config_table)


@app.command("set", no_args_is_help=True)
def set_config(
    data_path: Annotated[Optional[str], typer.Option("--data-path")] = None,
    remove_data_path: Annotated[bool, typer.Option("--remove-data-path")] = False,
    default_sort_mode: Annotated[
        Optional[str],
        typer.Option("--default-sort-mode", callback=validate_sort_mode),
    ] = None,
    overdue_check_interval_seconds: Annotated[
        Optional[float], typer.Option("--overdue-check-interval", min=1.0)
    ] = None,
    overdue_initial_delay_seconds: Annotated[
        Optional[float], typer.Option("--overdue-initial-delay", min=0.0)
    ] = None,
    seed_sample_tasks: Annotated[
        Optional[bool], typer.Option("--seed-sample-tasks/--no-seed-sample-tasks")
    ] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level")] = None,
) -> None:
    try:
        CONFIGURATION_REPO.update_config(
            data_path=data_path,
            remove_data_path=remove_data_path,
            default_sort_mode=default_sort_mode,
            overdue_check_interval_seconds=overdue_check_interval_seconds,
            overdue_initial_delay_seconds=overdue_initial_delay_seconds,
            seed_sample_tasks=seed_sample_tasks,
            log_level=log_level,
        )
    except ConfigurationError as e:
        raise typer.BadParameter(str(e))
    CONFIGURATION_REPO.flush()
    show()
