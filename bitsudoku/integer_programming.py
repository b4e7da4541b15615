#!/usr/bin/env python

"""
bitsudoku/integer_programming.py

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

**Solves Sudoku by integer programming, as a check on the other solvers.**

You say "here are my constraints; go" and a few milliseconds later you have
a valid answer (or are told there isn't one).

"""

import logging
import time

from mip import BINARY, Constr, Model, Var, xsum

from bitsudoku.board import Board
from bitsudoku.candidates import is_single, lowest_bit
from bitsudoku.common import ALMOST_ONE, N
from bitsudoku.result import (
    FailureKind,
    SolveResult,
    STRATEGY_INTEGER_PROGRAMMING,
)
from bitsudoku.topology import RANK

log = logging.getLogger(__name__)


# =============================================================================
# Functions for mip models
# =============================================================================

def debug_model_constraints(m: Model) -> None:
    """
    Shows constraints for a model.
    """
    if not log.isEnabledFor(logging.DEBUG):
        return
    lines = [f"Constraints in model {m.name!r}:"]
    for c in m.constrs:  # type: Constr
        lines.append(f"{c.name} == {c.expr}")
    log.debug("\n".join(lines))


def debug_model_vars(m: Model) -> None:
    """
    Show the names/values of model variables after fitting.
    """
    if not log.isEnabledFor(logging.DEBUG):
        return
    lines = [f"Variables in model {m.name!r}:"]
    for v in m.vars:  # type: Var
        lines.append(f"{v.name} == {v.x}")
    log.debug("\n".join(lines))


# =============================================================================
# Solve
# =============================================================================

def solve_integer_programming(puzzle: str) -> SolveResult:
    """
    Solves an 81-character puzzle.

    Raises:
        :exc:`bitsudoku.common.InvalidInput` for the wrong length
    """
    board = Board.load(puzzle)
    start = time.perf_counter()
    n = N
    rank = RANK

    m = Model("Sudoku solver")
    m.verbose = 0

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Variables
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    x = [
        [
            [
                m.add_var(f"x(row={r + 1}, col={c + 1}, digit={d + 1})",
                          var_type=BINARY)
                for d in range(n)
            ] for c in range(n)
        ] for r in range(n)
    ]  # index as: x[row_zb][col_zb][digit_zb]

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Constraints
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # One digit per cell
    for r in range(n):
        for c in range(n):
            m += xsum(x[r][c][d] for d in range(n)) == 1, f"cell(r={r},c={c})"
    for d in range(n):
        # One of each digit per row
        for r in range(n):
            m += xsum(x[r][c][d] for c in range(n)) == 1, f"row(r={r},d={d})"
        # One of each digit per column
        for c in range(n):
            m += xsum(x[r][c][d] for r in range(n)) == 1, f"col(c={c},d={d})"
    # One of each digit in each 3x3 box:
    for d in range(n):
        for box_row in range(rank):
            for box_col in range(rank):
                row_base = box_row * rank
                col_base = box_col * rank
                m += xsum(
                    x[row_base + row_offset][col_base + col_offset][d]
                    for row_offset in range(rank)
                    for col_offset in range(rank)
                ) == 1, f"box(b={box_row * rank + box_col},d={d})"
    # Starting values
    for cell, entry in enumerate(board.entries):
        if is_single(entry):
            r, c = divmod(cell, n)
            m += x[r][c][lowest_bit(entry) - 1] == 1

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Solve
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    debug_model_constraints(m)
    status = m.optimize()

    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    # Read out answers
    # ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
    elapsed_ms = 1000 * (time.perf_counter() - start)
    if not m.num_solutions:
        diagnostic = f"Unable to solve by integer programming ({status})\n" \
                     f"{puzzle}"
        log.error(diagnostic)
        return SolveResult(
            puzzle=puzzle,
            strategy=STRATEGY_INTEGER_PROGRAMMING,
            solved=False,
            elapsed_ms=elapsed_ms,
            error=FailureKind.INFEASIBLE,
            diagnostic=diagnostic,
        )
    debug_model_vars(m)
    digits = []
    for r in range(n):
        for c in range(n):
            d_zb = next(d for d in range(n) if x[r][c][d].x > ALMOST_ONE)
            digits.append(str(d_zb + 1))
    log.debug(f"Solved {puzzle} by integer programming in "
              f"{elapsed_ms:.3f} ms")
    return SolveResult(
        puzzle=puzzle,
        strategy=STRATEGY_INTEGER_PROGRAMMING,
        solved=True,
        solution="".join(digits),
        elapsed_ms=elapsed_ms,
    )
