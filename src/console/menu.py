"""
Roll Dice - Console Menu

Registered menu options and the main prompt loop. Each option keeps
prompting until the user enters an empty line, then control returns to
the menu. A request for exactly one flip or roll shows the single result
instead of a frequency table. Errors raised by an option are reported and
the option prompts again.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, TextIO

from src.config.settings import Settings
from src.console.inputs import process_input_int, process_input_str
from src.games.session import ShutTheBoxSession
from src.probgen.base import RandomSource
from src.probgen.events import (
    VALID_DICE_TYPES_LABEL,
    CoinFlip,
    DiceRoll,
    flip_single_coin,
    format_single_roll,
    roll_single_die,
    validate_and_execute,
)

logger = logging.getLogger(__name__)

ERR_UNSUPPORTED = "Unsupported option"
SYNTAX_ERR_EXPECTED_INT = "Syntax error: expected integer"

EXIT = 0
FLIP_COINS = 1
ROLL_DICE = 2
SHUT_THE_BOX = 3


@dataclass(frozen=True)
class MenuOption:
    """
    A numbered menu entry.

    Attributes:
        number: Option number typed by the user
        name: Label shown in the menu
        process: Runs one prompt/execute cycle; returns True when the user is done
    """
    number: int
    name: str
    process: Callable[[], bool]


class Menu:
    """Main menu over a text input stream."""

    def __init__(
        self,
        stdin: TextIO,
        write: Callable[[str], None],
        source: RandomSource,
        settings: Settings,
    ) -> None:
        self._stdin = stdin
        self._write = write
        self._source = source
        self._settings = settings
        self.options: dict[int, MenuOption] = {}
        self.register_options()

    def register_options(self) -> None:
        """Register all menu options, keyed by option number."""
        for option in (
            MenuOption(EXIT, "Exit", self._exit),
            MenuOption(FLIP_COINS, "Flip Coins", self._flip_coins),
            MenuOption(ROLL_DICE, "Roll Dice", self._roll_dice),
            MenuOption(SHUT_THE_BOX, "Shut the Box", self._shut_the_box),
        ):
            self.options[option.number] = option

    def display_options(self) -> None:
        lines = ["\n\nPlease enter the option number\n\nRegistered Options:\n"]
        for number in sorted(self.options):
            lines.append(f"\t{number}) {self.options[number].name}")
        self._write("\n".join(lines))

    def run_option(self, number: int) -> bool:
        """
        Run the selected option until the user is done with it.

        Returns:
            True if the program should exit

        Raises:
            ValueError: If the option number is not registered
        """
        option = self.options.get(number)
        if option is None:
            raise ValueError(ERR_UNSUPPORTED)

        logger.debug("Running option %d (%s)", number, option.name)
        done = False
        while not done:
            try:
                done = option.process()
            except ValueError as exc:
                self._write(str(exc))

        return number == EXIT

    def run(self) -> None:
        """Prompt for options until Exit is chosen or input runs out."""
        try:
            while True:
                self.display_options()
                try:
                    _, number = process_input_int(self._stdin)
                except ValueError:
                    self._write(SYNTAX_ERR_EXPECTED_INT)
                    continue

                try:
                    if self.run_option(number):
                        return
                except ValueError as exc:
                    self._write(str(exc))
        except EOFError:
            logger.debug("Input closed, leaving menu")

    # -- Options ---------------------------------------------------------

    def _exit(self) -> bool:
        self._write("Exiting now ...")
        time.sleep(self._settings.exit_delay)
        return True

    def _read_int(self, prompt: str) -> tuple[bool, int]:
        self._write(prompt)
        try:
            return process_input_int(self._stdin)
        except ValueError:
            raise ValueError(SYNTAX_ERR_EXPECTED_INT) from None

    def _flip_coins(self) -> bool:
        done, flips = self._read_int("Please enter the number of coin flips:")
        if done:
            return True
        if flips == 1:
            self._write(format_single_roll(flip_single_coin(self._source)))
        else:
            self._write(validate_and_execute(CoinFlip(flips), self._source))
        return False

    def _roll_dice(self) -> bool:
        done, sides = self._read_int(
            f"Please select the number of dice sides {VALID_DICE_TYPES_LABEL}:"
        )
        if done:
            return True
        done, rolls = self._read_int("Please enter the number of dice rolls:")
        if done:
            return True
        if rolls == 1:
            self._write(format_single_roll(roll_single_die(sides, self._source)))
        else:
            self._write(validate_and_execute(DiceRoll(rolls, sides), self._source))
        return False

    def _shut_the_box(self) -> bool:
        done, count = self._read_int("Please enter the number of players:")
        if done:
            return True
        if count < 1:
            raise ValueError(f"Player count must be positive, got {count}.")

        players = []
        for position in range(1, count + 1):
            self._write(f"Please enter the name of player {position}:")
            done, name = process_input_str(self._stdin)
            if done:
                return True
            players.append(name)

        session = ShutTheBoxSession(
            players,
            read_line=lambda: self._stdin.readline(),
            write=self._write,
            source=self._source,
        )
        session.run()
        return True
