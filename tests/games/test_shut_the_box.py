"""
Roll Dice - Shut the Box Engine Tests

Tests for the board bitset helpers, the subset-sum solver, move
validation, and BoxState.
"""

import pytest

from src.games.shut_the_box import (
    EMPTY_SLOT,
    OPEN_BOX,
    SHUT_BOX,
    SIZE_BOX,
    BoxState,
    InvalidDigit,
    NotEqualTarget,
    ShutTheBoxEngine,
    SlotAlreadyClosed,
    assemble_slots_to_display,
    clear_bit,
    consume_target,
    convert_slots_to_game_state,
    is_bit_set,
    is_box_empty,
    process_proposed_update,
    slot_for_print,
    target_sum_exists,
)
from src.probgen.base import ReplaySource

ALL_TARGETS = range(2, 13)


def solvable_targets(bitset: int) -> list[bool]:
    """Solver result for every two-dice target 2-12."""
    return [target_sum_exists(bitset, target) for target in ALL_TARGETS]


# === Bitset Helpers ===


class TestBitset:
    """Tests for bit helpers."""

    def test_open_box_bits(self):
        assert is_bit_set(OPEN_BOX, SIZE_BOX) is False
        for bit in range(SIZE_BOX):
            assert is_bit_set(OPEN_BOX, bit) is True

    def test_shut_box_bits(self):
        for bit in range(SIZE_BOX):
            assert is_bit_set(SHUT_BOX, bit) is False

    def test_clear_each_bit(self):
        bitset = OPEN_BOX
        assert not is_box_empty(bitset)
        for bit in range(SIZE_BOX):
            assert is_bit_set(bitset, bit)
            bitset = clear_bit(bitset, bit)
            assert not is_bit_set(bitset, bit)
        assert is_box_empty(bitset)

    def test_clear_bit_returns_new_value(self):
        original = OPEN_BOX
        cleared = clear_bit(original, 3)
        assert original == OPEN_BOX
        assert cleared == OPEN_BOX - 8


# === Display ===


class TestDisplay:
    """Tests for board display and parsing."""

    def test_slot_for_print_open(self):
        for slot in range(SIZE_BOX):
            assert slot_for_print(OPEN_BOX, slot) == f"[{slot + 1}]"

    def test_slot_for_print_shut(self):
        for slot in range(SIZE_BOX):
            assert slot_for_print(SHUT_BOX, slot) == f"[{EMPTY_SLOT}]"

    def test_known_boards(self, board_displays):
        for display, bitset in board_displays.values():
            assert assemble_slots_to_display(bitset) == display
            assert convert_slots_to_game_state(display) == bitset

    def test_round_trip_every_board(self):
        for bitset in range(OPEN_BOX + 1):
            assert convert_slots_to_game_state(assemble_slots_to_display(bitset)) == bitset


# === Solver ===


class TestTargetSumExists:
    """Tests for the subset-sum solver."""

    def test_open_board_solves_every_target(self):
        assert all(solvable_targets(OPEN_BOX))

    def test_shut_board_solves_nothing(self):
        assert not any(solvable_targets(SHUT_BOX))

    def test_only_six_open(self, board_displays):
        _, bitset = board_displays["only_six"]
        expected = [target == 6 for target in ALL_TARGETS]
        assert solvable_targets(bitset) == expected

    def test_only_nine_open(self, board_displays):
        _, bitset = board_displays["only_nine"]
        expected = [target == 9 for target in ALL_TARGETS]
        assert solvable_targets(bitset) == expected

    def test_low_three_open(self, board_displays):
        # 1, 2, 3 reach every sum 2-6 and nothing above
        _, bitset = board_displays["low_three"]
        expected = [target <= 6 for target in ALL_TARGETS]
        assert solvable_targets(bitset) == expected

    def test_composite_only_targets(self):
        # [1][_][3][_][_][_][_][_][9]: 4 = 1+3, 10 = 1+9, 12 = 3+9
        bitset = convert_slots_to_game_state("[1][_][3][_][_][_][_][_][9]")
        assert [t for t in ALL_TARGETS if target_sum_exists(bitset, t)] == [3, 4, 9, 10, 12]

    def test_three_slot_solution(self):
        # 12 only reachable as 2 + 3 + 7
        bitset = convert_slots_to_game_state("[_][2][3][_][_][_][7][_][_]")
        assert target_sum_exists(bitset, 12) is True
        assert target_sum_exists(bitset, 11) is False

    def test_slots_not_reused(self):
        # 4 would need 2 + 2
        bitset = convert_slots_to_game_state("[_][2][_][_][_][_][_][_][_]")
        assert target_sum_exists(bitset, 4) is False

    def test_matches_brute_force_on_every_board(self):
        for bitset in range(OPEN_BOX + 1):
            open_values = [slot + 1 for slot in range(SIZE_BOX) if is_bit_set(bitset, slot)]
            sums = {0}
            for value in open_values:
                sums |= {s + value for s in sums}
            for target in ALL_TARGETS:
                assert target_sum_exists(bitset, target) == (target in sums)

    def test_caller_bitset_untouched(self):
        bitset = OPEN_BOX
        target_sum_exists(bitset, 12)
        assert bitset == OPEN_BOX


class TestConsumeTarget:
    """Tests for the witness-consuming solver."""

    def test_single_slot_consumed(self):
        assert consume_target(OPEN_BOX, 5) == clear_bit(OPEN_BOX, 4)

    def test_composite_consumes_witness(self):
        remaining = consume_target(OPEN_BOX, 12)
        closed = OPEN_BOX & ~remaining
        closed_values = [slot + 1 for slot in range(SIZE_BOX) if is_bit_set(closed, slot)]
        assert sum(closed_values) == 12
        assert len(closed_values) >= 2

    def test_no_solution_returns_none(self, board_displays):
        _, bitset = board_displays["only_six"]
        assert consume_target(bitset, 7) is None


# === Move Validation ===


class TestProcessProposedUpdate:
    """Tests for process_proposed_update()."""

    def test_closes_named_slots(self):
        result = process_proposed_update(OPEN_BOX, "45", 9)
        assert assemble_slots_to_display(result) == "[1][2][3][_][_][6][7][8][9]"

    def test_mismatch_rejected(self):
        with pytest.raises(NotEqualTarget) as exc_info:
            process_proposed_update(OPEN_BOX, "45", 8)
        assert exc_info.value.actual == 9
        assert exc_info.value.target == 8
        assert str(exc_info.value) == "Input '9' does not add up to target '8'."

    @pytest.mark.parametrize("update", ["", "1a345", "asdf", "-2", "0", "4209", "1 3", "١"])
    def test_invalid_digits(self, update):
        with pytest.raises(InvalidDigit, match=r"\[1,9\]"):
            process_proposed_update(OPEN_BOX, update, 6)

    def test_closed_slot_rejected(self, board_displays):
        _, bitset = board_displays["one_four_seven_closed"]
        with pytest.raises(SlotAlreadyClosed) as exc_info:
            process_proposed_update(bitset, "14", 5)
        assert exc_info.value.slot == 1
        assert "Slot 1 is already closed" in str(exc_info.value)

    def test_duplicate_digit_rejected(self):
        with pytest.raises(SlotAlreadyClosed):
            process_proposed_update(OPEN_BOX, "22", 4)

    def test_closed_slot_checked_before_later_bad_digit(self, board_displays):
        _, bitset = board_displays["one_four_seven_closed"]
        with pytest.raises(SlotAlreadyClosed):
            process_proposed_update(bitset, "4x", 4)

    @pytest.mark.parametrize(
        "update,target",
        [("1", 1), ("145", 10), ("12345", 15), ("4597362", 36)],
    )
    def test_valid_sums(self, update, target):
        result = process_proposed_update(OPEN_BOX, update, target)
        for char in update:
            assert not is_bit_set(result, int(char) - 1)

    def test_sequence_of_moves_shuts_box(self):
        bitset = OPEN_BOX
        steps = [
            ("4", 4, "[1][2][3][_][5][6][7][8][9]"),
            ("17", 8, "[_][2][3][_][5][6][_][8][9]"),
            ("235", 10, "[_][_][_][_][_][6][_][8][9]"),
            ("9", 9, "[_][_][_][_][_][6][_][8][_]"),
            ("8", 8, "[_][_][_][_][_][6][_][_][_]"),
            ("6", 6, "[_][_][_][_][_][_][_][_][_]"),
        ]
        for update, target, display in steps:
            bitset = process_proposed_update(bitset, update, target)
            assert assemble_slots_to_display(bitset) == display
        assert is_box_empty(bitset)


# === Box State ===


class TestBoxState:
    """Tests for BoxState."""

    def test_new_board_open(self):
        state = BoxState.new(["p1", "p2"])
        assert state.slots == OPEN_BOX
        assert state.current_player == "p1"
        assert not state.is_shut

    def test_requires_players(self):
        with pytest.raises(ValueError, match="at least one player"):
            BoxState.new([])

    def test_rejects_wide_bitset(self):
        with pytest.raises(ValueError):
            BoxState(players=("p1",), slots=OPEN_BOX + 1)

    def test_rejects_bad_player_index(self):
        with pytest.raises(ValueError, match="out of range"):
            BoxState(players=("p1",), current_player_index=1)

    def test_rotation_wraps(self):
        state = BoxState.new(["p1", "p2", "p3", "p4"])
        seen = []
        for _ in range(4):
            state = state.next_player()
            seen.append(state.current_player_index)
        assert seen == [1, 2, 3, 0]

    def test_single_player_rotation(self):
        state = BoxState.new(["solo"])
        assert state.next_player().current_player == "solo"

    def test_next_turn_resets_and_advances(self):
        state = BoxState.new(["p1", "p2"]).with_slots(0b1)
        state = state.next_turn()
        assert state.slots == OPEN_BOX
        assert state.current_player == "p2"

    def test_display(self, board_displays):
        display, bitset = board_displays["one_four_seven_closed"]
        state = BoxState.new(["p1"]).with_slots(bitset)
        assert state.display() == f"Player: p1\n\n{display}"

    def test_immutable(self):
        state = BoxState.new(["p1"])
        with pytest.raises(AttributeError):
            state.slots = 0


class TestShutTheBoxEngine:
    """Tests for ShutTheBoxEngine."""

    def test_roll_dice(self, dice_source):
        assert ShutTheBoxEngine.roll_dice(dice_source(3, 5)) == (3, 5)

    def test_roll_dice_range(self):
        for _ in range(100):
            rolls = ShutTheBoxEngine.roll_dice()
            assert len(rolls) == 2
            assert all(1 <= value <= 6 for value in rolls)

    def test_solution_exists_uses_board(self, board_displays):
        _, bitset = board_displays["only_six"]
        state = BoxState.new(["p1"]).with_slots(bitset)
        assert ShutTheBoxEngine.solution_exists(state, 6) is True
        assert ShutTheBoxEngine.solution_exists(state, 7) is False
        assert state.slots == bitset

    def test_apply_move(self):
        state = BoxState.new(["p1"])
        updated = ShutTheBoxEngine.apply_move(state, "45", 9)
        assert updated.slots == convert_slots_to_game_state("[1][2][3][_][_][6][7][8][9]")
        assert state.slots == OPEN_BOX

    def test_apply_move_failure_keeps_state(self):
        state = BoxState.new(["p1"])
        with pytest.raises(NotEqualTarget):
            ShutTheBoxEngine.apply_move(state, "45", 8)
        assert state.slots == OPEN_BOX
