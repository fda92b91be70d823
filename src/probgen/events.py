"""
Roll Dice - Event Type Adapters

Coin flips and dice rolls on top of the probabilistic event engine. Each
adapter fixes its outcome alphabet, adds its own validation, and renders
the resulting frequency table for the console.

Validation is two-phase: the generic event count check runs first, then
the adapter-specific check. Execution only happens when both pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from src.probgen.base import FrequencyTable, RandomSource
from src.probgen.engine import generate_probabilistic_event, single_event
from src.probgen.validators import (
    VALID_DICE_TYPES,
    validate_dice_type,
    validate_event_count,
)

HEADS = "Heads"
TAILS = "Tails"

D6 = 6

VALID_DICE_TYPES_LABEL = "(" + ", ".join(str(v) for v in sorted(VALID_DICE_TYPES)) + ")"


def possible_dice_values(num_sides: int) -> tuple[str, ...]:
    """Stringified face values 1..num_sides."""
    return tuple(str(value) for value in range(1, num_sides + 1))


@dataclass(frozen=True)
class CoinFlip:
    """
    A batch of coin flips.

    Attributes:
        event_count: Number of coin flips
    """
    event_count: int

    OUTCOMES: ClassVar[tuple[str, str]] = (HEADS, TAILS)

    def validate(self) -> None:
        """Heads and Tails are implied; nothing coin-specific to check."""

    def execute(self, source: RandomSource | None = None) -> FrequencyTable:
        return generate_probabilistic_event(self.event_count, self.OUTCOMES, source)

    def display(self, table: FrequencyTable) -> str:
        """
        Render coin flip results. Example:

            (H) :  49.882126% : 61572
            (T) :  50.117874% : 61863
        """
        return (
            f"(H) : {table.percent(HEADS):10f}% : {table[HEADS]}\n"
            f"(T) : {table.percent(TAILS):10f}% : {table[TAILS]}\n"
        )


@dataclass(frozen=True)
class DiceRoll:
    """
    A batch of rolls of a single die.

    Attributes:
        event_count: Number of dice rolls
        num_sides: Number of sides on the die (4, 6, 10, 12 or 20)
    """
    event_count: int
    num_sides: int

    def validate(self) -> None:
        validate_dice_type(self.num_sides)

    def execute(self, source: RandomSource | None = None) -> FrequencyTable:
        return generate_probabilistic_event(
            self.event_count, possible_dice_values(self.num_sides), source
        )

    def display(self, table: FrequencyTable) -> str:
        """Render one line per face value, ascending, including unseen faces."""
        lines = []
        for label in possible_dice_values(self.num_sides):
            lines.append(
                f"{'[' + label + ']':<4} : {table.percent(label):10f}% : {table[label]}"
            )
        return "\n".join(lines) + "\n"


ProbEventType = CoinFlip | DiceRoll


def validate_and_execute(
    event: ProbEventType,
    source: RandomSource | None = None,
) -> str:
    """
    Validate an event request, run it, and render the result table.

    Args:
        event: CoinFlip or DiceRoll request
        source: Random source (defaults to a freshly seeded generator)

    Returns:
        Display text for the frequency table

    Raises:
        InvalidEventCount: If the event count is not positive
        InvalidDiceType: If a dice roll names an unsupported die
    """
    validate_event_count(event.event_count, allow_zero=False)
    event.validate()
    table = event.execute(source)
    return event.display(table)


def roll_single_die(num_sides: int = D6, source: RandomSource | None = None) -> int:
    """Roll one die and return its face value."""
    validate_dice_type(num_sides)
    face = single_event(possible_dice_values(num_sides), source)
    return int(face)


def flip_single_coin(source: RandomSource | None = None) -> str:
    """Flip one coin and return Heads or Tails."""
    return single_event(CoinFlip.OUTCOMES, source)


def format_single_roll(value: int | str) -> str:
    """Display text for a single die or coin result, e.g. ``Rolled: [4]``."""
    return f"Rolled: [{value}]"
