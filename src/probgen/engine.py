"""
Roll Dice - Probabilistic Event Engine

Turns a pluggable random source into frequency tables over an arbitrary
outcome set. Events are generated by a producer thread and aggregated by
the calling thread over a single rendezvous channel: each event is handed
off and accepted before the next one is drawn.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from src.probgen.base import (
    FrequencyTable,
    InvalidSourceIndex,
    RandomSource,
    seeded_source,
)
from src.probgen.validators import validate_event_count, validate_outcomes

logger = logging.getLogger(__name__)

# Marks the end of the event stream on the channel
_STREAM_END = object()


@dataclass(frozen=True)
class ProbabilisticEvent:
    """
    A batch of independent draws from a fixed outcome alphabet.

    Attributes:
        event_count: Number of independent trials to run
        outcomes: Ordered, non-empty tuple of outcome labels
        source: Random source mapping N to an index in [0, N)
    """
    event_count: int
    outcomes: tuple[str, ...]
    source: RandomSource = field(default_factory=seeded_source)

    def __post_init__(self) -> None:
        """Validate the event count and normalize outcomes to a tuple.

        Raises:
            InvalidEventCount: If event_count is negative
            InvalidPossibilities: If outcomes is empty
        """
        validate_event_count(self.event_count, allow_zero=True)
        object.__setattr__(self, "outcomes", validate_outcomes(self.outcomes))

    def draw(self) -> str:
        """Draw a single outcome label from the random source."""
        num_outcomes = len(self.outcomes)
        index = self.source(num_outcomes)
        if not 0 <= index < num_outcomes:
            raise InvalidSourceIndex(index, num_outcomes)
        return self.outcomes[index]

    def produce_events(self, channel: queue.Queue) -> None:
        """Put ``event_count`` draws on the channel, then the end marker.

        Blocks after every event until the consumer has accepted it.
        """
        try:
            for _ in range(self.event_count):
                channel.put(self.draw())
                channel.join()
        finally:
            channel.put(_STREAM_END)

    def consume_events(self, channel: queue.Queue) -> FrequencyTable:
        """Aggregate events from the channel until the end marker arrives."""
        counts: Counter[str] = Counter()
        while True:
            event = channel.get()
            if event is _STREAM_END:
                channel.task_done()
                break
            counts[event] += 1
            channel.task_done()
        return FrequencyTable(counts=counts, total=sum(counts.values()))

    def compute_probability(self) -> FrequencyTable:
        """Run the producer/consumer pipeline and return the aggregate table.

        Raises:
            Exception: Whatever the random source raised while producing
        """
        channel: queue.Queue = queue.Queue(maxsize=1)
        failures: list[BaseException] = []

        def _produce() -> None:
            try:
                self.produce_events(channel)
            except Exception as exc:
                failures.append(exc)

        producer = threading.Thread(
            target=_produce,
            daemon=True,
            name=f"probgen-{len(self.outcomes)}x{self.event_count}",
        )
        producer.start()
        table = self.consume_events(channel)
        producer.join()

        if failures:
            raise failures[0]
        return table


def generate_probabilistic_event(
    event_count: int,
    outcomes: Sequence[str],
    source: RandomSource | None = None,
) -> FrequencyTable:
    """
    Given the number of events and the possible outcomes, return a table
    of results.

    Example:
        events 3 over ("heads", "tails") drawing heads, tails, heads
        returns {"heads": 2, "tails": 1}

    Args:
        event_count: Number of events taking place (zero allowed)
        outcomes: All possible outcomes
        source: Random source (defaults to a freshly seeded generator)

    Returns:
        FrequencyTable of outcome label -> occurrence count

    Raises:
        InvalidEventCount: If event_count is negative
        InvalidPossibilities: If outcomes is empty
    """
    validate_event_count(event_count, allow_zero=True)
    outcomes_tuple = validate_outcomes(outcomes)

    event = ProbabilisticEvent(
        event_count=event_count,
        outcomes=outcomes_tuple,
        source=source if source is not None else seeded_source(),
    )
    logger.debug(
        "Generating %d events over %d outcomes", event_count, len(outcomes_tuple)
    )
    table = event.compute_probability()
    logger.debug("Generated %d events: %s", table.total, dict(table.counts))
    return table


def single_event(
    outcomes: Sequence[str],
    source: RandomSource | None = None,
) -> str:
    """Draw exactly one outcome label without building a table.

    Raises:
        InvalidPossibilities: If outcomes is empty
    """
    event = ProbabilisticEvent(
        event_count=1,
        outcomes=validate_outcomes(outcomes),
        source=source if source is not None else seeded_source(),
    )
    return event.draw()
