# SPDX-License-Identifier: MIT

from taskflow.initialize import initialize
from taskflow.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
