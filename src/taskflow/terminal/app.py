# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from taskflow import state as app_state
from taskflow.terminal import configuration, task
from taskflow.terminal.custom_typer import OrderedAliasedTyperGroup
from taskflow.terminal.report import list_tasks, stats
from taskflow.terminal.watch import watch

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="taskflow - personal task tracking in the CLI",
    no_args_is_help=True,
)
app.add_typer(task.app, name="task, t")
app.add_typer(configuration.app, name="config, c")
app.command(name="list, ls")(list_tasks)
app.command(name="stats, st")(stats)
app.command(name="watch, w")(watch)


@app.callback()
def main_callback(
    pace_alerts: Annotated[
        bool,
        typer.Option(
            "--pace-alerts",
            help="Wait out follow-up alert delays instead of showing them at once",
        ),
    ] = False,
) -> None:
    """
    taskflow - personal task tracking in the CLI

    Global options that apply to all commands.
    """
    if pace_alerts:
        app_state.set_pace_alerts(True)


def run() -> None:
    app()
