"""Roll Dice - Console Application Entrypoint."""

from __future__ import annotations

import logging
import sys

from src.config.settings import configure_logging, get_settings
from src.console.menu import Menu
from src.probgen.base import seeded_source

logger = logging.getLogger(__name__)

_INSTRUCTIONS = """\
Select the menu option using the associated
integer. Additionally, an empty input
indicates you are 'done' while executing an
operation, returning execution to the main menu
"""


def main() -> int:
    """Run the interactive menu on stdin/stdout."""
    settings = get_settings()
    configure_logging(settings)
    logger.debug("Starting with seed %s", settings.seed)

    print("--------------- Welcome ---------------")
    print(_INSTRUCTIONS)

    menu = Menu(
        stdin=sys.stdin,
        write=print,
        source=seeded_source(settings.seed),
        settings=settings,
    )
    menu.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
