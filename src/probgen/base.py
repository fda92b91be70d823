"""
Roll Dice - Probability Generator Base Classes

Data structures, error types, and random sources shared by the
probabilistic event engine and the event type adapters. A random source
is any callable mapping "number of outcomes N" to an index in [0, N).
"""

import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Sequence

RandomSource = Callable[[int], int]


# =============================================================================
# ERRORS
# =============================================================================

class ProbGenError(ValueError):
    """Base class for probability generator errors."""


class InvalidEventCount(ProbGenError):
    """Event count is negative, or not positive where one is required."""

    def __init__(self, count: int, *, allow_zero: bool = True) -> None:
        self.count = count
        requirement = "a non-negative" if allow_zero else "a positive"
        super().__init__(
            f"Invalid number of events {count}: must be {requirement} integer."
        )


class InvalidPossibilities(ProbGenError):
    """Outcome alphabet is empty."""

    def __init__(self) -> None:
        super().__init__(
            "Invalid number of possibilities: must have at least one possible outcome."
        )


class InvalidDiceType(ProbGenError):
    """Number of dice sides is not a supported dice type."""

    def __init__(self, sides: int, valid: Iterable[int]) -> None:
        self.sides = sides
        options = ", ".join(str(v) for v in sorted(valid))
        super().__init__(f"Invalid dice type {sides}: must be one of ({options}).")


class InvalidSourceIndex(ProbGenError):
    """A random source returned an index outside [0, N)."""

    def __init__(self, index: int, num_outcomes: int) -> None:
        self.index = index
        self.num_outcomes = num_outcomes
        super().__init__(
            f"Random source returned {index}, expected a value in [0, {num_outcomes})."
        )


class RandomSourceExhausted(RuntimeError):
    """A replay source has no more values to hand out."""


# =============================================================================
# RANDOM SOURCES
# =============================================================================

def seeded_source(seed: int | None = None) -> RandomSource:
    """Production random source backed by its own ``random.Random``.

    Args:
        seed: Seed for reproducible sequences (None = system entropy)

    Returns:
        Callable returning an index in [0, num_outcomes)
    """
    rng = random.Random(seed)
    return rng.randrange


class ReplaySource:
    """
    Deterministic random source replaying a fixed integer sequence.

    Each value is reduced modulo the requested number of outcomes, so
    ``ReplaySource([0, 3, 5])`` against two outcomes yields 0, 1, 1.
    """

    def __init__(self, values: Sequence[int]) -> None:
        self._values = tuple(values)
        self._position = 0

    def __call__(self, num_outcomes: int) -> int:
        if self._position >= len(self._values):
            raise RandomSourceExhausted(
                f"Replay sequence exhausted after {len(self._values)} values."
            )
        value = self._values[self._position]
        self._position += 1
        return value % num_outcomes

    @property
    def remaining(self) -> int:
        """Number of values not yet replayed."""
        return len(self._values) - self._position


# =============================================================================
# FREQUENCY TABLE
# =============================================================================

def percent(count: int, total: int) -> float:
    """Share of ``count`` in ``total`` as a percentage.

    A zero total yields NaN; callers reject zero totals before display.
    """
    if total == 0:
        return float("nan")
    return 100.0 * count / total


@dataclass(frozen=True)
class FrequencyTable(Mapping):
    """
    Immutable aggregate of outcome label -> occurrence count.

    Attributes:
        counts: Read-only mapping of observed labels to counts
        total: Number of events the table was built from
    """
    counts: Mapping[str, int] = field(default_factory=dict)
    total: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))

    def __getitem__(self, label: str) -> int:
        # Unobserved labels count as zero
        return self.counts.get(label, 0)

    def __iter__(self) -> Iterator[str]:
        return iter(self.counts)

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, label: object) -> bool:
        return label in self.counts

    def percent(self, label: str) -> float:
        """Percentage of events that resolved to ``label``."""
        return percent(self[label], self.total)
