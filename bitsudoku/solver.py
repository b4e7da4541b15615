#!/usr/bin/env python

"""
bitsudoku/solver.py

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

**Solves Sudoku puzzles.**

Two search strategies, sharing the board, rules and checks:

- :class:`RuleBasedSolver` (the normal one). Strategy:

  1.  Apply the elimination rules, cheapest first. Whenever one improves
      things, check the board is still valid and go back to rule 1.

  2.  If no rule helps, guess: pick an unsolved cell with the fewest
      candidates, save the board (minus that guess), and try the lowest
      candidate.

  3.  On a contradiction, restore the last saved board. The guessed digit is
      already gone from the saved copy, so we never make the same guess
      twice.

- :class:`RecursiveSolver`: plain backtracking with only naked-single
  elimination. Much slower; there for cross-checking.

Plus, for a third opinion, integer programming
(:mod:`bitsudoku.integer_programming`).

"""

import logging
import time
from typing import List

from bitsudoku.board import Board
from bitsudoku.candidates import (
    count,
    digit_mask,
    digits,
    FULL_MASK,
    is_single,
    remove,
)
from bitsudoku.common import (
    DEFAULT_MAX_ITERATIONS,
    InvalidState,
    IterationLimitExceeded,
    N,
    N_CELLS,
    NoGuessToRevert,
    SolutionFailure,
)
from bitsudoku.consistency import board_complete, is_valid
from bitsudoku.integer_programming import solve_integer_programming
from bitsudoku.result import (
    FailureKind,
    SolveResult,
    STRATEGY_RECURSIVE,
    STRATEGY_RULES,
)
from bitsudoku.rules import apply_rule, RuleStats, RULES
from bitsudoku.topology import TOPOLOGY

log = logging.getLogger(__name__)


def _ms_since(start: float) -> float:
    return 1000 * (time.perf_counter() - start)


def _fewest_candidates(entries: List[int]) -> int:
    """
    The unsolved cell with the fewest candidates (the first, if there's a
    tie), or -1 if every cell is solved.
    """
    min_bits = N + 1
    best = -1
    for cell, entry in enumerate(entries):
        if not is_single(entry):
            n = count(entry)
            if n < min_bits:
                min_bits = n
                best = cell
    return best


# =============================================================================
# RuleBasedSolver
# =============================================================================

class RuleBasedSolver(object):
    """
    Constraint propagation plus guessing, with backtracking.
    """
    def __init__(self, board: Board, validate_strictly: bool = False,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS) -> None:
        """
        Args:
            board:
                the board to solve; modified in place
            validate_strictly:
                also treat a group in which some digit has nowhere left to go
                as a contradiction (see :func:`is_valid`)
            max_iterations:
                give up after this many propagate/guess steps
        """
        self.board = board
        self.validate_strictly = validate_strictly
        self.max_iterations = max_iterations
        self.stats = RuleStats()
        self.num_guesses = 0
        self.iterations = 0

    def solve(self) -> SolveResult:
        """
        Runs to completion. Never raises for an unsolvable puzzle; the result
        says what went wrong.
        """
        puzzle = self.board.puzzle
        start = time.perf_counter()
        try:
            while not self.complete():
                self.iterations += 1
                if self.iterations > self.max_iterations:
                    raise IterationLimitExceeded(
                        "Could not solve puzzle within iteration limit of "
                        f"{self.max_iterations}")
                try:
                    self.step()
                except InvalidState as e:
                    log.debug(f"Reverting: {e}")
                    self.revert_guess()
        except (NoGuessToRevert, IterationLimitExceeded) as e:
            if isinstance(e, NoGuessToRevert):
                error = FailureKind.NO_GUESS_TO_REVERT
            else:
                error = FailureKind.ITERATION_LIMIT_EXCEEDED
            diagnostic = (
                f"FATAL ERROR IN SOLVE after step {self.iterations} "
                f"guess {self.num_guesses}\n"
                f"{puzzle}\n"
                f"{e}\n"
                f"{self.board.candidate_str()}"
            )
            log.error(diagnostic)
            return SolveResult(
                puzzle=puzzle,
                strategy=STRATEGY_RULES,
                solved=False,
                elapsed_ms=_ms_since(start),
                guesses=self.num_guesses,
                iterations=self.iterations,
                stats=self.stats,
                error=error,
                diagnostic=diagnostic,
            )
        elapsed_ms = _ms_since(start)
        log.debug(f"Solved {puzzle} in {elapsed_ms:.3f} ms with "
                  f"{self.num_guesses} guesses")
        return SolveResult(
            puzzle=puzzle,
            strategy=STRATEGY_RULES,
            solved=True,
            solution=self.board.digit_string(),
            elapsed_ms=elapsed_ms,
            guesses=self.num_guesses,
            iterations=self.iterations,
            stats=self.stats,
        )

    def complete(self) -> bool:
        """
        Are we there yet? A full board with a repeated digit is a dead end,
        so we back out of the last guess.
        """
        try:
            return board_complete(self.board.entries)
        except InvalidState as e:
            log.debug(f"Reverting: {e}")
            self.revert_guess()
            return False

    def step(self) -> None:
        """
        Applies the first rule that does anything; if none does, guesses.
        """
        for index in range(len(RULES)):
            if apply_rule(index, self.board.entries, self.stats):
                if not is_valid(self.board.entries,
                                strict=self.validate_strictly):
                    self.revert_guess()
                return
        self.guess()

    def guess(self) -> None:
        """
        Pick a cell with the minimum number of choices, save the current
        state, and make a guess. The guessed value is removed from the saved
        state, so if we have to revert, we don't guess the same thing.
        """
        self.num_guesses += 1
        entries = self.board.entries
        guess_cell = _fewest_candidates(entries)
        if guess_cell < 0 or count(entries[guess_cell]) == 0:
            raise InvalidState(
                "Reached invalid state in guessing routine - nothing left to "
                "guess")
        options = digits(entries[guess_cell])
        guess_value = options[0]
        guess_mask = digit_mask(guess_value)
        saved = self.board.snapshot()
        saved[guess_cell], _ = remove(saved[guess_cell], guess_mask)
        self.board.push_guess(saved)
        entries[guess_cell] = guess_mask
        log.debug(f"Guess {self.num_guesses} (depth "
                  f"{self.board.guess_depth}, "
                  f"{self.board.n_unknown_cells()} cells unknown): "
                  f"cell {guess_cell} is {guess_value} of {options}")

    def revert_guess(self) -> None:
        """
        If a solution cannot be found, revert to the state before the most
        recent guess.

        Raises:
            :exc:`NoGuessToRevert` if there isn't one
        """
        self.board.pop_guess()


# =============================================================================
# RecursiveSolver
# =============================================================================

class RecursiveSolver(object):
    """
    Depth-first search, using only naked-single elimination.

    Works, but is far slower than :class:`RuleBasedSolver`.
    """
    def __init__(self, board: Board) -> None:
        self.board = board
        self.nodes = 0

    def solve(self) -> SolveResult:
        puzzle = self.board.puzzle
        start = time.perf_counter()
        values = [e & FULL_MASK for e in self.board.entries]
        try:
            self.board.entries = self.recurse(values)
        except SolutionFailure:
            diagnostic = (
                f"FAILED TO SOLVE BY RECURSION after {self.nodes} nodes\n"
                f"{puzzle}"
            )
            log.error(diagnostic)
            return SolveResult(
                puzzle=puzzle,
                strategy=STRATEGY_RECURSIVE,
                solved=False,
                elapsed_ms=_ms_since(start),
                iterations=self.nodes,
                error=FailureKind.NO_GUESS_TO_REVERT,
                diagnostic=diagnostic,
            )
        elapsed_ms = _ms_since(start)
        log.debug(f"Solved {puzzle} by recursion in {elapsed_ms:.3f} ms")
        return SolveResult(
            puzzle=puzzle,
            strategy=STRATEGY_RECURSIVE,
            solved=True,
            solution=self.board.digit_string(),
            elapsed_ms=elapsed_ms,
            iterations=self.nodes,
        )

    def recurse(self, values: List[int]) -> List[int]:
        """
        Solves from ``values`` (which we own).

        Returns: the solved cells

        Raises:
            :exc:`SolutionFailure` at a dead end
        """
        self.nodes += 1
        eliminate_singles(values)

        next_cell = _fewest_candidates(values)
        if next_cell < 0:
            try:
                complete = board_complete(values)
            except InvalidState as e:
                log.debug(f"Dead end: {e}")
                complete = False
            if not complete:
                raise SolutionFailure()
            return values

        for digit in range(1, N + 1):
            if not values[next_cell] & digit_mask(digit):
                continue
            attempt = list(values)
            attempt[next_cell] = digit_mask(digit)
            try:
                return self.recurse(attempt)
            except SolutionFailure:
                pass
        raise SolutionFailure()


def eliminate_singles(values: List[int]) -> None:
    """
    Removes every solved cell's value from its peers, until nothing more
    changes. Nothing is locked. A contradiction shows up as a cell with no
    candidates.
    """
    changed = True
    while changed:
        changed = False
        for cell in range(N_CELLS):
            entry = values[cell]
            if not is_single(entry):
                continue
            for peer in TOPOLOGY.peers(cell):
                values[peer], peer_changed = remove(values[peer], entry)
                changed = peer_changed or changed


# =============================================================================
# Sudoku
# =============================================================================

class Sudoku(object):
    """
    Represents and solves a Sudoku puzzle.
    """

    def __init__(self, puzzle: str,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS) -> None:
        """
        Args:
            puzzle:
                81 characters; ``1``-``9`` for known cells, anything else
                (usually ``.`` or ``0``) for unknown ones
            max_iterations:
                safety limit for :meth:`solve`

        Raises:
            :exc:`bitsudoku.common.InvalidInput` for the wrong length
        """
        Board.load(puzzle)  # check it now
        self.puzzle = puzzle
        self.max_iterations = max_iterations
        self.result = None  # type: SolveResult

    def __str__(self) -> str:
        if self.result is not None and self.result.solved:
            return self.result.solution_str()
        return str(Board.load(self.puzzle))

    @property
    def solved(self) -> bool:
        return self.result is not None and self.result.solved

    def solve(self, validate_strictly: bool = False) -> SolveResult:
        """
        Solves by propagation and guessing.
        """
        solver = RuleBasedSolver(Board.load(self.puzzle),
                                 validate_strictly=validate_strictly,
                                 max_iterations=self.max_iterations)
        self.result = solver.solve()
        return self.result

    def solve_recursive(self) -> SolveResult:
        """
        Solves by plain recursive backtracking.
        """
        self.result = RecursiveSolver(Board.load(self.puzzle)).solve()
        return self.result

    def solve_ip(self) -> SolveResult:
        """
        Solves via integer programming.
        """
        self.result = solve_integer_programming(self.puzzle)
        return self.result


def solve_rules(puzzle: str,
                max_iterations: int = DEFAULT_MAX_ITERATIONS) -> SolveResult:
    """
    Convenience function for :meth:`Sudoku.solve`.
    """
    return Sudoku(puzzle, max_iterations=max_iterations).solve()


def solve_recursive(puzzle: str) -> SolveResult:
    """
    Convenience function for :meth:`Sudoku.solve_recursive`.
    """
    return Sudoku(puzzle).solve_recursive()
