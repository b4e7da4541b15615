# tests/test_board.py
import pytest

from bitsudoku.board import Board, make_grid_string
from bitsudoku.candidates import digit_mask, FULL_MASK
from bitsudoku.common import InvalidInput, NoGuessToRevert
from bitsudoku.solver import RuleBasedSolver


def test_load(classic):
    board = Board.load(classic)
    for cell, c in enumerate(classic):
        if c == ".":
            assert board.entries[cell] == FULL_MASK
        else:
            assert board.entries[cell] == digit_mask(int(c))
    assert board.puzzle == classic
    assert board.guess_depth == 0


def test_load_blank_markers():
    board = Board.load("0x." + "1" * 78)
    assert board.entries[:3] == [FULL_MASK] * 3
    assert board.entries[3] == digit_mask(1)


@pytest.mark.parametrize("length", [0, 80, 82])
def test_load_wrong_length(length):
    with pytest.raises(InvalidInput):
        Board.load("." * length)


def test_snapshot_is_independent(classic):
    board = Board.load(classic)
    saved = board.snapshot()
    board.entries[2] = digit_mask(4)
    assert saved[2] == FULL_MASK


def test_pop_with_no_guesses():
    board = Board.load("." * 81)
    with pytest.raises(NoGuessToRevert):
        board.pop_guess()


def test_guess_then_revert_excludes_guess():
    board = Board.load("." * 81)
    before = board.snapshot()
    solver = RuleBasedSolver(board)
    solver.guess()
    assert board.guess_depth == 1
    assert board.entries[0] == digit_mask(1)
    assert solver.num_guesses == 1
    board.pop_guess()
    assert board.guess_depth == 0
    assert board.entries[0] == FULL_MASK & ~digit_mask(1)
    assert board.entries[1:] == before[1:]


def test_guess_picks_fewest_candidates():
    board = Board.load("." * 81)
    board.entries[17] = digit_mask(3) | digit_mask(7)
    board.entries[50] = digit_mask(2) | digit_mask(8)
    RuleBasedSolver(board).guess()
    assert board.entries[17] == digit_mask(3)
    assert board.entries[50] == digit_mask(2) | digit_mask(8)


def test_views(classic):
    board = Board.load(classic)
    assert board.digit_string() == classic
    assert board.value(0) == 5
    assert board.value(2) is None
    assert board.n_unknown_cells() == classic.count(".")


def test_string_layouts(classic):
    board = Board.load(classic)
    lines = str(board).split("\n")
    assert len(lines) == 11
    assert lines[0] == "53. .7. ..."
    assert lines[3] == ""
    assert make_grid_string(classic) == str(board)

    cand_lines = board.candidate_str().split("\n")
    assert len(cand_lines) == 35
    assert all(len(line) == 35 for line in cand_lines)
    # blank top-right cell shows all its candidates
    assert cand_lines[0][32:35] == "123"
