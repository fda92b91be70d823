"""
Roll Dice - Shut the Box Session

Interactive driver for a game of Shut the Box. Each call to ``step``
handles one phase of the turn state machine:

    AWAITING_ROLL -> ROLL_COMPUTED -> LOSS_CHECK -> AWAITING_MOVE
        -> MOVE_VALIDATED -> WIN_CHECK -> AWAITING_ROLL | GAME_END

A lost round or a won round hands play to the next player on a fresh
board. An empty input line at any prompt ends the game.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Callable, Sequence

from src.games.shut_the_box import BoxState, ShutTheBoxEngine, ShutTheBoxError
from src.probgen.base import RandomSource, seeded_source
from src.probgen.events import format_single_roll

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Phases of a Shut the Box turn."""
    AWAITING_ROLL = auto()
    ROLL_COMPUTED = auto()
    LOSS_CHECK = auto()
    AWAITING_MOVE = auto()
    MOVE_VALIDATED = auto()
    WIN_CHECK = auto()
    GAME_END = auto()


class ShutTheBoxSession:
    """Runs Shut the Box rounds over injected line input and text output.

    Args:
        players: Player names in turn order
        read_line: Returns the next raw input line ("" when the user is done)
        write: Receives display text
        source: Random source for the dice (defaults to a seeded generator)
    """

    def __init__(
        self,
        players: Sequence[str],
        read_line: Callable[[], str],
        write: Callable[[str], None],
        source: RandomSource | None = None,
    ) -> None:
        self.state = BoxState.new(players)
        self.phase = TurnPhase.AWAITING_ROLL
        self.target: int | None = None
        self.rolls: tuple[int, ...] = ()
        self.winners: list[str] = []
        self._read_line = read_line
        self._write = write
        self._source = source if source is not None else seeded_source()
        self._handlers: dict[TurnPhase, Callable[[], TurnPhase]] = {
            TurnPhase.AWAITING_ROLL: self._roll,
            TurnPhase.ROLL_COMPUTED: self._announce_target,
            TurnPhase.LOSS_CHECK: self._check_loss,
            TurnPhase.AWAITING_MOVE: self._await_move,
            TurnPhase.MOVE_VALIDATED: self._show_move,
            TurnPhase.WIN_CHECK: self._check_win,
        }

    def run(self) -> BoxState:
        """Play until the game ends and return the final state."""
        while self.phase is not TurnPhase.GAME_END:
            self.step()
        return self.state

    def step(self) -> TurnPhase:
        """Handle the current phase and move to the next one."""
        if self.phase is TurnPhase.GAME_END:
            return self.phase
        self.phase = self._handlers[self.phase]()
        return self.phase

    # -- Phases ----------------------------------------------------------

    def _roll(self) -> TurnPhase:
        self._write(f"\n\n{self.state.display()}\n")
        self.rolls = ShutTheBoxEngine.roll_dice(self._source)
        for value in self.rolls:
            self._write(format_single_roll(value))
        self.target = sum(self.rolls)
        return TurnPhase.ROLL_COMPUTED

    def _announce_target(self) -> TurnPhase:
        self._write(f"\nTarget sum is '{self.target}'.")
        return TurnPhase.LOSS_CHECK

    def _check_loss(self) -> TurnPhase:
        if ShutTheBoxEngine.solution_exists(self.state, self.target):
            return TurnPhase.AWAITING_MOVE

        player = self.state.current_player
        logger.info("No solution for target %d, %s loses the round", self.target, player)
        self._write(
            f"\nSorry {player}, there is no possible solution. Next players turn\n"
        )
        self.state = self.state.next_turn()
        return TurnPhase.AWAITING_ROLL

    def _await_move(self) -> TurnPhase:
        self._write(f"Target sum is '{self.target}'. Please enter open slots together:")
        move = self._read_line().strip()
        if not move:
            self._write("Stopping current operation")
            return TurnPhase.GAME_END

        try:
            self.state = ShutTheBoxEngine.apply_move(self.state, move, self.target)
        except ShutTheBoxError as exc:
            self._write(str(exc))
            self._write(self.state.display())
            return TurnPhase.AWAITING_MOVE

        return TurnPhase.MOVE_VALIDATED

    def _show_move(self) -> TurnPhase:
        self._write(self.state.display())
        return TurnPhase.WIN_CHECK

    def _check_win(self) -> TurnPhase:
        if not self.state.is_shut:
            return TurnPhase.AWAITING_ROLL

        player = self.state.current_player
        self.winners.append(player)
        logger.info("%s shut the box", player)
        self._write(f"\n\n{player}, you have won!\n\n>>>> !!! Congratulations !!! <<<<\n")

        if not self._continue_playing():
            return TurnPhase.GAME_END

        self.state = self.state.next_turn()
        return TurnPhase.AWAITING_ROLL

    def _continue_playing(self) -> bool:
        """Ask until the player answers y or n; an empty line means no."""
        while True:
            self._write("Would you like to keep playing? [y/n]")
            answer = self._read_line().strip()
            if not answer:
                self._write("Stopping current operation")
                return False
            if answer == "y":
                return True
            if answer == "n":
                return False
            self._write("Input error: expected 'y' or 'n'")
