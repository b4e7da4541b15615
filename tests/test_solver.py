# tests/test_solver.py
import pytest

from bitsudoku.board import Board
from bitsudoku.common import InvalidInput, InvalidState
from bitsudoku.consistency import board_complete
from bitsudoku.result import (
    FailureKind,
    STRATEGY_RECURSIVE,
    STRATEGY_RULES,
)
from bitsudoku.solver import (
    RecursiveSolver,
    RuleBasedSolver,
    solve_recursive,
    solve_rules,
    Sudoku,
)

from conftest import HARDEST


def test_classic_rules(classic, classic_solution, check_solution):
    result = solve_rules(classic)
    assert result.solved
    assert result.strategy == STRATEGY_RULES
    assert result.solution == classic_solution
    assert result.error is None
    assert result.puzzle == classic
    assert result.elapsed_ms >= 0
    assert result.stats.calls[0] > 0
    check_solution(classic, result.solution)


def test_classic_strategies_agree(classic, classic_solution):
    rules = solve_rules(classic)
    recursive = solve_recursive(classic)
    assert recursive.solved
    assert recursive.strategy == STRATEGY_RECURSIVE
    assert rules.solution == recursive.solution == classic_solution


def test_board_complete_after_solve(classic):
    board = Board.load(classic)
    result = RuleBasedSolver(board).solve()
    assert result.solved
    assert board_complete(board.entries)
    assert board.guess_depth <= result.guesses


def test_full_board_with_repeat_reverts(classic, classic_solution):
    # Every cell filled, but the top row has two 3s.
    board = Board.load("3" + classic_solution[1:])
    with pytest.raises(InvalidState):
        board_complete(board.entries)
    board.push_guess(Board.load(classic).entries)
    result = RuleBasedSolver(board).solve()
    assert result.solved
    assert result.solution == classic_solution


@pytest.mark.parametrize("length", [80, 82])
def test_wrong_length(length):
    with pytest.raises(InvalidInput):
        Sudoku("." * length)
    with pytest.raises(InvalidInput):
        solve_rules("1" * length)


def test_contradiction_without_guesses(contradictory):
    result = solve_rules(contradictory)
    assert not result.solved
    assert result.solution is None
    assert result.error == FailureKind.NO_GUESS_TO_REVERT
    assert result.iterations == 1
    assert result.guesses == 0
    assert result.stats.calls[0] == 1
    assert contradictory in result.diagnostic
    assert "no more guesses to revert" in result.diagnostic


def test_contradiction_recursive(contradictory):
    result = solve_recursive(contradictory)
    assert not result.solved
    assert result.error == FailureKind.NO_GUESS_TO_REVERT


def test_iteration_limit():
    result = solve_rules("." * 81, max_iterations=1)
    assert not result.solved
    assert result.error == FailureKind.ITERATION_LIMIT_EXCEEDED
    assert result.iterations == 2
    assert result.guesses == 1


def test_empty_puzzle(check_solution):
    puzzle = "." * 81
    result = solve_rules(puzzle)
    assert result.solved
    assert result.guesses > 0
    check_solution(puzzle, result.solution)


def test_strict_validation(classic, classic_solution):
    result = Sudoku(classic).solve(validate_strictly=True)
    assert result.solution == classic_solution


def test_sudoku_facade(classic, classic_solution):
    problem = Sudoku(classic)
    assert not problem.solved
    assert str(problem).startswith("53. .7. ...")
    problem.solve()
    assert problem.solved
    assert str(problem).startswith("534 678 912")
    assert problem.result.summary().startswith("Solved by rules:")


def test_unsolvable_without_repeated_givens():
    # No digit is given twice in a group, but 1-8 in the top row leave only
    # 9 for the last cell, and there is already a 9 below it.
    puzzle = "12345678." + "........9" + "." * 63
    result = Sudoku(puzzle).solve()
    assert not result.solved
    assert result.error == FailureKind.NO_GUESS_TO_REVERT
    assert RecursiveSolver(Board.load(puzzle)).solve().error == \
        FailureKind.NO_GUESS_TO_REVERT


@pytest.mark.parametrize("puzzle", HARDEST)
def test_hardest_rules(puzzle, check_solution):
    result = solve_rules(puzzle)
    assert result.solved
    check_solution(puzzle, result.solution)


@pytest.mark.slow
@pytest.mark.parametrize("puzzle", HARDEST)
def test_hardest_recursive(puzzle, check_solution):
    result = solve_recursive(puzzle)
    assert result.solved
    check_solution(puzzle, result.solution)
