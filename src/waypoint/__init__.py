# SPDX-License-Identifier: MIT

from waypoint.cleanup import register_cleanup
from waypoint.initialize import initialize
from waypoint.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
