"""
Roll Dice - Shut the Box Engine

Board representation, subset-sum solver, and move validation for Shut
the Box.

Game Rules:
- Nine slots numbered 1-9 start open
- Each round the player rolls two D6; the target is their sum (2-12)
- If no combination of open slots sums to the target, the round is lost
- Otherwise the player closes open slots whose values sum exactly to the target
- Closing every slot wins the round

The board is a 9-bit integer: bit i set means slot i+1 is open. Because
Python integers are immutable, every helper that "clears" bits returns a
new bitset and never touches the caller's value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import ClassVar, Sequence

from src.probgen.base import RandomSource
from src.probgen.events import D6, roll_single_die

# Total number of slots
SIZE_BOX = 9

# All slots open / all slots closed
OPEN_BOX = (1 << SIZE_BOX) - 1
SHUT_BOX = 0

SLOT_FORMAT = "[{}]"
EMPTY_SLOT = "_"

_DIGITS = "123456789"


# =============================================================================
# ERRORS
# =============================================================================

class ShutTheBoxError(ValueError):
    """Base class for rejected Shut the Box moves."""


class InvalidDigit(ShutTheBoxError):
    """Move is empty or contains something other than a digit 1-9."""

    def __init__(self, value: str | None = None) -> None:
        self.value = value
        super().__init__("Invalid digit input: must be in range [1,9].")


class SlotAlreadyClosed(ShutTheBoxError):
    """Move references a slot that is already closed."""

    def __init__(self, slot: int) -> None:
        self.slot = slot
        super().__init__(f"Slot {slot} is already closed. Please try again.")


class NotEqualTarget(ShutTheBoxError):
    """Move's digits do not add up to the round target."""

    def __init__(self, actual: int, target: int) -> None:
        self.actual = actual
        self.target = target
        super().__init__(f"Input '{actual}' does not add up to target '{target}'.")


# =============================================================================
# BITSET HELPERS
# =============================================================================

def is_bit_set(bitset: int, bit: int) -> bool:
    """True if ``bit`` is on in ``bitset``."""
    return bitset & (1 << bit) != 0


def clear_bit(bitset: int, bit: int) -> int:
    """Return ``bitset`` with ``bit`` turned off."""
    return bitset & ~(1 << bit)


def slot_value(slot: int) -> int:
    """Face value of a 0-based slot index."""
    return slot + 1


def value_slot(value: int) -> int:
    """0-based slot index of a face value."""
    return value - 1


def is_box_empty(bitset: int) -> bool:
    """True if every slot is closed."""
    return bitset == SHUT_BOX


def slot_for_print(bitset: int, slot: int) -> str:
    """Display one slot: ``[4]`` when open, ``[_]`` when closed."""
    label = str(slot_value(slot)) if is_bit_set(bitset, slot) else EMPTY_SLOT
    return SLOT_FORMAT.format(label)


def assemble_slots_to_display(bitset: int) -> str:
    """
    Render the whole board.

    Example:
        0b000100000 -> "[_][_][_][_][_][6][_][_][_]"
    """
    return "".join(slot_for_print(bitset, slot) for slot in range(SIZE_BOX))


def convert_slot_to_bit(display: str, slot: int) -> int:
    """0 if the slot at ``slot`` in a board display is ``[_]``, else 1."""
    # Each slot occupies three characters: "[", label, "]"
    start = slot * 3
    if display[start:start + 3] == SLOT_FORMAT.format(EMPTY_SLOT):
        return 0
    return 1


def convert_slots_to_game_state(display: str) -> int:
    """
    Parse a board display back into a bitset.

    Example:
        "[_][_][_][_][_][6][_][_][_]" -> 32
    """
    bitset = 0
    for slot in range(SIZE_BOX):
        bitset |= convert_slot_to_bit(display, slot) << slot
    return bitset


# =============================================================================
# SOLVER
# =============================================================================

def consume_target(bitset: int, target: int) -> int | None:
    """
    Find one set of open slots summing to ``target``.

    A target equal to an open slot is taken directly. Otherwise the target
    is split into ``low + high`` with ``1 <= low < high``, starting from
    ``(1, target - 1)``, and each half is solved against the slots the
    other half left open. A failed split leaves nothing consumed.

    Args:
        bitset: Open-slot bitset to search
        target: Sum to reach

    Returns:
        The bitset with the witnessing slots cleared, or None if no
        combination of open slots sums to ``target``
    """
    # Targets above 9 have no single slot and always fall through to a split
    if 1 <= target <= SIZE_BOX and is_bit_set(bitset, value_slot(target)):
        return clear_bit(bitset, value_slot(target))

    low, high = 1, target - 1
    while low < high:
        remaining = consume_target(bitset, low)
        if remaining is not None:
            remaining = consume_target(remaining, high)
            if remaining is not None:
                return remaining
        low += 1
        high -= 1

    return None


def target_sum_exists(bitset: int, target: int) -> bool:
    """True if some combination of open slots sums exactly to ``target``."""
    return consume_target(bitset, target) is not None


# =============================================================================
# MOVE VALIDATION
# =============================================================================

def parse_digit(char: str) -> int:
    """Parse one move character as a slot value 1-9.

    Raises:
        InvalidDigit: If the character is not a digit 1-9
    """
    if len(char) != 1 or char not in _DIGITS:
        raise InvalidDigit(char)
    return int(char)


def process_proposed_update(bitset: int, update: str, target: int) -> int:
    """
    Verify a proposed move slot by slot against a working copy of the
    board, then check that the slots add up to the target.

    Args:
        bitset: Current board
        update: Slot values to close as a digit string, e.g. "137"
        target: Required sum of the digits, e.g. 11

    Returns:
        Board with every named slot closed

    Raises:
        InvalidDigit: If update is empty or has a character outside 1-9
        SlotAlreadyClosed: If a named slot is closed, including a slot
            named twice in the same move
        NotEqualTarget: If the digits do not sum to target
    """
    if not update:
        raise InvalidDigit(update)

    working = bitset
    combined = 0
    for char in update:
        value = parse_digit(char)
        slot = value_slot(value)
        if not is_bit_set(working, slot):
            raise SlotAlreadyClosed(value)
        combined += value
        working = clear_bit(working, slot)

    if combined != target:
        raise NotEqualTarget(combined, target)

    return working


# =============================================================================
# GAME STATE
# =============================================================================

@dataclass(frozen=True)
class BoxState:
    """
    Immutable Shut the Box game state.

    Attributes:
        players: Player names in turn order
        slots: Open-slot bitset (bit i set = slot i+1 open)
        current_player_index: Index into players of the active player
    """
    players: tuple[str, ...]
    slots: int = OPEN_BOX
    current_player_index: int = 0

    def __post_init__(self) -> None:
        """Validate players, board, and active player."""
        if not self.players:
            raise ValueError("Shut the Box needs at least one player.")
        if not (SHUT_BOX <= self.slots <= OPEN_BOX):
            raise ValueError(f"Board {self.slots} is not a {SIZE_BOX}-slot bitset.")
        if not (0 <= self.current_player_index < len(self.players)):
            raise ValueError(
                f"Player index {self.current_player_index} is out of range "
                f"for {len(self.players)} players."
            )

    @classmethod
    def new(cls, players: Sequence[str]) -> "BoxState":
        """Fully open board with the first player active."""
        return cls(players=tuple(players))

    @property
    def current_player(self) -> str:
        return self.players[self.current_player_index]

    @property
    def is_shut(self) -> bool:
        return is_box_empty(self.slots)

    def next_player(self) -> "BoxState":
        """Advance to the next player, wrapping after the last one."""
        return replace(
            self,
            current_player_index=(self.current_player_index + 1) % len(self.players),
        )

    def reset(self) -> "BoxState":
        """Reopen every slot."""
        return replace(self, slots=OPEN_BOX)

    def next_turn(self) -> "BoxState":
        """Reopen the board and hand play to the next player."""
        return self.reset().next_player()

    def with_slots(self, slots: int) -> "BoxState":
        return replace(self, slots=slots)

    def display(self) -> str:
        """
        Board for the active player. Example with slots 1, 4, 7 closed:

            Player: p1

            [_][2][3][_][5][6][_][8][9]
        """
        return f"Player: {self.current_player}\n\n{assemble_slots_to_display(self.slots)}"


class ShutTheBoxEngine:
    """
    Stateless engine for Shut the Box turns.

    All methods are class methods operating on immutable BoxState.
    """

    DICE_PER_ROLL: ClassVar[int] = 2
    DIE_FACES: ClassVar[int] = D6

    @classmethod
    def roll_dice(cls, source: RandomSource | None = None) -> tuple[int, ...]:
        """Roll the round's two D6 through the single-draw path."""
        return tuple(
            roll_single_die(cls.DIE_FACES, source) for _ in range(cls.DICE_PER_ROLL)
        )

    @classmethod
    def solution_exists(cls, state: BoxState, target: int) -> bool:
        """True if the open slots on the board can make ``target``."""
        return target_sum_exists(state.slots, target)

    @classmethod
    def apply_move(cls, state: BoxState, move: str, target: int) -> BoxState:
        """
        Close the slots named by ``move``.

        Raises:
            ShutTheBoxError: If the move is rejected; state is unchanged
        """
        return state.with_slots(process_proposed_update(state.slots, move, target))
