# tests/conftest.py
from typing import Callable

import pytest

from bitsudoku.consistency import is_solution

CLASSIC = (
    "53..7...."
    "6..195..."
    ".98....6."
    "8...6...3"
    "4..8.3..1"
    "7...2...6"
    ".6....28."
    "...419..5"
    "....8..79"
)
CLASSIC_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

HARDEST = [
    "..39.....4...8..36..8...1...4..6..738......1......2.....4.7..686........7.....5..",  # noqa
    "1....6.8....7..1....9.....4.......5..18..5...5..36.8..6.5..8.3.8....3.1.....2....",  # noqa
    "1....6.8....7..1....9.....4.......5..18..5...5..36....6.5..8.3.8....3.1.....2...8",  # noqa
    "....9..5..1.....3...23..7....45...7.8.....2.......64...9..1.....8..6......54....7",  # noqa
    "................12..3..4..5.....6.......7.3..128..........2......9...4...6.15....",  # noqa
    "..3......4...8..36..8...1...4..6..73...9..........2.....4.7..686...2....7..6..5..",  # noqa
    "........9.5.7...2.7.9..2....1.67..5.......4..8....5....7.31....6....7.3..3..6...1",  # noqa
    "......7....71.9...68..7......1.6785.5....3.....8.1.9....6.9.1...4.....9.........2",  # noqa
    ".2.4...8...7.....3.8.237.1.2.1....9..9....8.4...9......1.8...4.5.8..........6....",  # noqa
    ".2.4...8...7.....3.8.237.1.2.1....9..9....8.4...9......1.8...4.5............6...8",  # noqa
]

# Two 5s in the top row.
CONTRADICTORY = "55" + "." * 79


@pytest.fixture
def classic() -> str:
    return CLASSIC


@pytest.fixture
def classic_solution() -> str:
    return CLASSIC_SOLUTION


@pytest.fixture
def contradictory() -> str:
    return CONTRADICTORY


@pytest.fixture
def check_solution() -> Callable[[str, str], None]:
    """
    Asserts that a solution is a full, valid grid agreeing with the givens.
    """
    def _check(puzzle: str, solution: str) -> None:
        assert solution is not None
        assert is_solution(solution)
        for given, answer in zip(puzzle, solution):
            if given in "123456789":
                assert given == answer
    return _check
