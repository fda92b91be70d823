"""
Roll Dice Probability Generator.

Random event generation and aggregation with a pluggable random source.
Coin flips and dice rolls are built on top of the same engine.
"""

from src.probgen.base import (
    FrequencyTable,
    InvalidDiceType,
    InvalidEventCount,
    InvalidPossibilities,
    InvalidSourceIndex,
    ProbGenError,
    RandomSource,
    RandomSourceExhausted,
    ReplaySource,
    percent,
    seeded_source,
)
from src.probgen.engine import (
    ProbabilisticEvent,
    generate_probabilistic_event,
    single_event,
)
from src.probgen.events import (
    CoinFlip,
    DiceRoll,
    flip_single_coin,
    roll_single_die,
    validate_and_execute,
)

__all__ = [
    # Data Classes
    "FrequencyTable",
    "ProbabilisticEvent",
    "ReplaySource",
    # Event Types
    "CoinFlip",
    "DiceRoll",
    # Errors
    "ProbGenError",
    "InvalidDiceType",
    "InvalidEventCount",
    "InvalidPossibilities",
    "InvalidSourceIndex",
    "RandomSourceExhausted",
    # Functions
    "RandomSource",
    "flip_single_coin",
    "generate_probabilistic_event",
    "percent",
    "roll_single_die",
    "seeded_source",
    "single_event",
    "validate_and_execute",
]
