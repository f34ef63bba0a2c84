# SPDX-License-Identifier: MIT

from rich.console import Console

from taskflow.model.alert import Severity

SEVERITY_COLORS = {
    Severity.SUCCESS: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
    Severity.INFO: "cyan",
}

console = Console()


def print_alert(message: str, severity: str) -> None:
    color = SEVERITY_COLORS.get(severity, "white")
    console.print(f" [{color}]●[/{color}] {message}", highlight=False)
