# tests/test_integer_programming.py
from bitsudoku.common import InvalidInput
from bitsudoku.integer_programming import solve_integer_programming
from bitsudoku.result import FailureKind, STRATEGY_INTEGER_PROGRAMMING
from bitsudoku.solver import Sudoku

import pytest


def test_classic(classic, classic_solution):
    result = solve_integer_programming(classic)
    assert result.solved
    assert result.strategy == STRATEGY_INTEGER_PROGRAMMING
    assert result.solution == classic_solution


def test_agrees_with_engine(classic):
    problem = Sudoku(classic)
    assert problem.solve_ip().solution == problem.solve().solution


def test_infeasible(contradictory):
    result = solve_integer_programming(contradictory)
    assert not result.solved
    assert result.error == FailureKind.INFEASIBLE


def test_wrong_length():
    with pytest.raises(InvalidInput):
        solve_integer_programming("." * 80)
