# tests/test_consistency.py
import pytest

from bitsudoku.board import Board
from bitsudoku.candidates import digit_mask, FULL_MASK, LOCK_MASK
from bitsudoku.common import InvalidState
from bitsudoku.consistency import (
    board_complete,
    group_complete,
    is_solution,
    is_valid,
)
from bitsudoku.topology import TOPOLOGY


def test_solved_board_complete(classic_solution):
    entries = Board.load(classic_solution).entries
    assert board_complete(entries)
    assert all(group_complete(entries, g) for g in TOPOLOGY.groups())
    assert is_valid(entries, strict=True)


def test_locked_cells_still_count(classic_solution):
    entries = [e | LOCK_MASK for e in Board.load(classic_solution).entries]
    assert board_complete(entries)


def test_unsolved_group_not_complete(classic):
    entries = Board.load(classic).entries
    assert not group_complete(entries, TOPOLOGY.groups()[0])
    assert not board_complete(entries)


def test_full_group_with_duplicate_raises():
    entries = [FULL_MASK] * 81
    for cell in range(9):
        entries[cell] = digit_mask(cell + 1)
    entries[8] = digit_mask(1)
    with pytest.raises(InvalidState):
        group_complete(entries, TOPOLOGY.groups()[0])


def test_zero_candidates_invalid():
    entries = [FULL_MASK] * 81
    assert is_valid(entries)
    entries[40] = 0
    assert not is_valid(entries)
    entries[40] = LOCK_MASK
    assert not is_valid(entries)


def test_duplicate_singles_invalid():
    entries = [FULL_MASK] * 81
    entries[0] = digit_mask(5)
    entries[80] = digit_mask(5)
    assert is_valid(entries)  # no shared group
    entries[72] = digit_mask(5) | LOCK_MASK  # same column as 0
    assert not is_valid(entries)


def test_strict_validation_needs_every_digit_somewhere():
    entries = [FULL_MASK] * 81
    for cell in range(9):
        entries[cell] &= ~digit_mask(9)
    assert is_valid(entries)
    assert not is_valid(entries, strict=True)


def test_is_solution(classic, classic_solution):
    assert is_solution(classic_solution)
    assert not is_solution(classic)
    assert not is_solution(classic_solution[:80])
    swapped = classic_solution[1] + classic_solution[0] + classic_solution[2:]
    assert not is_solution(swapped)
