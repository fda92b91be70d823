"""
Roll Dice - Input Validation Utilities

Provides validation functions for probability generator inputs. All
validators either return validated data or raise a descriptive
ProbGenError (a ValueError subclass).
"""

from typing import Sequence

from src.probgen.base import InvalidDiceType, InvalidEventCount, InvalidPossibilities

VALID_DICE_TYPES: frozenset[int] = frozenset({4, 6, 10, 12, 20})


def validate_event_count(count: int, allow_zero: bool = True) -> int:
    """
    Validate the number of events to generate.

    Args:
        count: Number of events
        allow_zero: Whether zero events are acceptable

    Returns:
        Validated count

    Raises:
        InvalidEventCount: If count is not an integer, negative, or zero
            where a positive count is required
    """
    if not isinstance(count, int) or isinstance(count, bool):
        raise InvalidEventCount(count, allow_zero=allow_zero)

    if count < 0 or (count == 0 and not allow_zero):
        raise InvalidEventCount(count, allow_zero=allow_zero)

    return count


def validate_outcomes(outcomes: Sequence[str]) -> tuple[str, ...]:
    """
    Validate and normalize an outcome alphabet.

    Args:
        outcomes: Ordered sequence of outcome labels

    Returns:
        Outcomes as a tuple

    Raises:
        InvalidPossibilities: If there are no outcomes
    """
    outcomes_tuple = tuple(outcomes)
    if not outcomes_tuple:
        raise InvalidPossibilities()
    return outcomes_tuple


def valid_dice_type(sides: int) -> bool:
    """True if ``sides`` is a supported dice type."""
    return sides in VALID_DICE_TYPES


def validate_dice_type(sides: int) -> int:
    """
    Validate the number of sides on a die.

    Raises:
        InvalidDiceType: If sides is not one of 4, 6, 10, 12, 20
    """
    if not valid_dice_type(sides):
        raise InvalidDiceType(sides, VALID_DICE_TYPES)
    return sides
