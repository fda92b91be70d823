"""
Roll Dice Games.

Shut the Box: board bitset helpers, the subset-sum solver, move
validation, and the interactive round driver.
"""

from src.games.session import ShutTheBoxSession, TurnPhase
from src.games.shut_the_box import (
    BoxState,
    InvalidDigit,
    NotEqualTarget,
    ShutTheBoxEngine,
    ShutTheBoxError,
    SlotAlreadyClosed,
    target_sum_exists,
)

__all__ = [
    # Data Classes
    "BoxState",
    # Enums
    "TurnPhase",
    # Engines
    "ShutTheBoxEngine",
    "ShutTheBoxSession",
    # Errors
    "ShutTheBoxError",
    "InvalidDigit",
    "NotEqualTarget",
    "SlotAlreadyClosed",
    # Solver
    "target_sum_exists",
]
