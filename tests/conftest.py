"""
Roll Dice - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import io
from typing import Callable, Sequence

import pytest

from src.config.settings import Settings
from src.probgen.base import ReplaySource


# =============================================================================
# RANDOM SOURCES
# =============================================================================

# Replayed against two outcomes: 0,1,1,0,1,0 -> Heads x3, Tails x3
SIX_FLIP_SEQUENCE = (0, 3, 5, 22, 7, 4)


@pytest.fixture
def six_flip_sequence() -> tuple[int, ...]:
    return SIX_FLIP_SEQUENCE


@pytest.fixture
def replay() -> Callable[[Sequence[int]], ReplaySource]:
    """Factory for deterministic random sources."""
    return ReplaySource


@pytest.fixture
def dice_source() -> Callable[..., ReplaySource]:
    """
    Factory for a source that rolls the given D6 faces in order.

    Faces are 1-based; the replayed index is face - 1.
    """
    def _make(*faces: int) -> ReplaySource:
        return ReplaySource([face - 1 for face in faces])
    return _make


# =============================================================================
# SHUT THE BOX BOARDS
# =============================================================================

@pytest.fixture
def board_displays() -> dict[str, tuple[str, int]]:
    """
    Board displays with their bitsets.

    Returns:
        Dict mapping name to (display, bitset)
    """
    return {
        "open": ("[1][2][3][4][5][6][7][8][9]", 0b111111111),
        "shut": ("[_][_][_][_][_][_][_][_][_]", 0),
        "only_six": ("[_][_][_][_][_][6][_][_][_]", 0b000100000),
        "one_four_seven_closed": ("[_][2][3][_][5][6][_][8][9]", 0b110110110),
        "only_nine": ("[_][_][_][_][_][_][_][_][9]", 0b100000000),
        "low_three": ("[1][2][3][_][_][_][_][_][_]", 0b000000111),
    }


# =============================================================================
# CONSOLE
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and .env files."""
    return Settings(_env_file=None, exit_delay=0)


@pytest.fixture
def scripted_input() -> Callable[..., io.StringIO]:
    """Factory for an input stream with one line per argument."""
    def _make(*lines: str) -> io.StringIO:
        return io.StringIO("".join(f"{line}\n" for line in lines))
    return _make


@pytest.fixture
def output() -> list[str]:
    """Collects everything written to the console."""
    return []
