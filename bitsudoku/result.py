#!/usr/bin/env python

"""
bitsudoku/result.py

===============================================================================

    Copyright (C) 2019-2019 Rudolf Cardinal (rudolf@pobox.com).

    This is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This software is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this software. If not, see <http://www.gnu.org/licenses/>.

===============================================================================

What a solver hands back to its caller.

"""

from enum import Enum
from typing import Optional

from bitsudoku.board import make_grid_string
from bitsudoku.rules import RuleStats

STRATEGY_RULES = "rules"
STRATEGY_RECURSIVE = "recursive"
STRATEGY_INTEGER_PROGRAMMING = "integer_programming"


class FailureKind(Enum):
    """
    Why a solve didn't work.
    """
    NO_GUESS_TO_REVERT = "no_guess_to_revert"
    ITERATION_LIMIT_EXCEEDED = "iteration_limit_exceeded"
    INFEASIBLE = "infeasible"


class SolveResult(object):
    """
    Outcome of one attempt to solve one puzzle.

    Either ``solved`` is true and ``solution`` is the 81-character answer, or
    ``solved`` is false, ``solution`` is ``None``, and ``error`` and
    ``diagnostic`` say what happened.
    """
    def __init__(self,
                 puzzle: str,
                 strategy: str,
                 solved: bool,
                 solution: Optional[str] = None,
                 elapsed_ms: float = 0.0,
                 guesses: int = 0,
                 iterations: int = 0,
                 stats: Optional[RuleStats] = None,
                 error: Optional[FailureKind] = None,
                 diagnostic: str = "") -> None:
        assert solved == (solution is not None), (
            "A solution must be supplied if and only if solved")
        self.puzzle = puzzle
        self.strategy = strategy
        self.solved = solved
        self.solution = solution
        self.elapsed_ms = elapsed_ms
        self.guesses = guesses
        self.iterations = iterations
        self.stats = stats
        self.error = error
        self.diagnostic = diagnostic

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"puzzle={self.puzzle!r}, strategy={self.strategy!r}, "
            f"solved={self.solved}, elapsed_ms={self.elapsed_ms:.3f}, "
            f"guesses={self.guesses}, iterations={self.iterations}, "
            f"error={self.error})"
        )

    def __bool__(self) -> bool:
        return self.solved

    def solution_str(self) -> str:
        """
        The answer laid out as a grid, or an empty string if unsolved.
        """
        if not self.solved:
            return ""
        return make_grid_string(self.solution)

    def summary(self) -> str:
        """
        Multi-line report, as for the command line.
        """
        if not self.solved:
            return (f"FAILED ({self.error.value if self.error else '?'}) "
                    f"by {self.strategy}:\n{self.diagnostic}")
        lines = [
            f"Solved by {self.strategy}:",
            self.solution_str(),
            f" Time: {self.elapsed_ms:.3f} ms",
            f" Guesses: {self.guesses}",
        ]
        if self.stats is not None:
            lines.append(self.stats.summary())
        return "\n".join(lines)
