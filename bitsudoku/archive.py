#!/usr/bin/env python

"""
bitsudoku/archive.py

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

**Reading puzzles from files, and solving lots of them.**

Archive files have one puzzle per line, 81 characters each. Lines starting
with ``#`` are comments; any other line that isn't 81 characters long is
ignored.

"""

import logging
from typing import Iterable, List, Optional

from bitsudoku.common import DEFAULT_MAX_ITERATIONS, HASH, N, N_CELLS
from bitsudoku.result import SolveResult, STRATEGY_RECURSIVE, STRATEGY_RULES
from bitsudoku.solver import solve_recursive, solve_rules

log = logging.getLogger(__name__)


# =============================================================================
# Reading
# =============================================================================

def read_puzzle_lines(lines: Iterable[str]) -> List[str]:
    """
    Picks the puzzles out of lines of an archive file.
    """
    puzzles = []  # type: List[str]
    for line in lines:
        if line.startswith(HASH):
            continue
        line = line.strip()
        if len(line) == N_CELLS:
            puzzles.append(line)
    return puzzles


def read_puzzle_file(filename: str) -> List[str]:
    """
    Reads puzzles from an archive file.
    """
    with open(filename, "rt") as f:
        return read_puzzle_lines(f)


def read_puzzle_files(filenames: Iterable[str]) -> List[str]:
    """
    Reads puzzles from several archive files. Files that can't be read are
    skipped, with a warning.
    """
    puzzles = []  # type: List[str]
    for filename in filenames:
        try:
            puzzles.extend(read_puzzle_file(filename))
        except OSError as e:
            log.warning(f"COULD NOT OPEN FILE {filename}: {e}")
    log.info(f"Read {len(puzzles)} puzzles")
    return puzzles


def puzzle_from_text(text: str) -> str:
    """
    Converts a puzzle typed as a grid into an 81-character string.

    - Initial/terminal blank lines are ignored.
    - Lines starting with ``#`` are ignored.
    - Use numbers 1-9 for known cells.
    - ``.`` represents an unknown cell.
    - Spaces are ignored, so blocks may be separated by spaces and blank
      lines, like this:

    .. code-block:: none

        ... ... ...
        ..2 3.1 45.
        .1. ... .6.

        .47 .5. 38.
        ... 7.3 ...
        .36 ... 14.

        .7. ... .9.
        .91 4.5 6..
        ... ..9 ...

    A single line of 81 characters is also fine.
    """
    lines = text.splitlines()
    if not lines:
        raise ValueError("No data")

    # Remove comments
    lines = [line for line in lines if not line.startswith(HASH)]

    lines = ["".join(line.split())
             for line in lines if line.strip()]  # remove blank lines/columns
    if len(lines) == 1 and len(lines[0]) == N_CELLS:
        return lines[0]
    if len(lines) != N:
        raise ValueError(f"Must have {N} active lines; "
                         f"found {len(lines)}, which are:\n"
                         f"{lines}")
    for line in lines:
        if len(line) != N:
            raise ValueError(
                f"Data line has wrong non-blank length: should be {N}, "
                f"but is {len(line)} ({line!r})")
    return "".join(lines)


# =============================================================================
# Solving lots
# =============================================================================

class ArchiveSummary(object):
    """
    Statistics over a batch of solves.
    """
    def __init__(self, results: List[SolveResult]) -> None:
        self.results = results

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def successes(self) -> List[SolveResult]:
        return [r for r in self.results if r.solved]

    @property
    def failures(self) -> List[SolveResult]:
        return [r for r in self.results if not r.solved]

    @property
    def n_solved(self) -> int:
        return len(self.successes)

    @property
    def average_time_ms(self) -> float:
        """
        Over successful solves, divided by the number attempted.
        """
        if not self.results:
            return 0.0
        return sum(r.elapsed_ms for r in self.successes) / self.attempted

    @property
    def average_guesses(self) -> float:
        if not self.results:
            return 0.0
        return sum(r.guesses for r in self.successes) / self.attempted

    @property
    def no_guess_solves(self) -> int:
        return sum(1 for r in self.successes if r.guesses == 0)

    @property
    def max_guesses(self) -> int:
        return max((r.guesses for r in self.successes), default=0)

    @property
    def min_time_ms(self) -> float:
        return min((r.elapsed_ms for r in self.successes), default=0.0)

    @property
    def max_time_ms(self) -> float:
        return max((r.elapsed_ms for r in self.successes), default=0.0)

    def hardest_by_guesses(self, n: int = 10) -> List[SolveResult]:
        return sorted(self.results, key=lambda r: r.guesses,
                      reverse=True)[:n]

    def hardest_by_time(self, n: int = 10) -> List[SolveResult]:
        return sorted(self.results, key=lambda r: r.elapsed_ms,
                      reverse=True)[:n]

    def report(self, n_hardest: int = 10) -> str:
        lines = [
            f"Solved {self.n_solved} of {self.attempted} puzzles, "
            f"average time = {self.average_time_ms:.3f} ms, "
            f"avg guesses = {self.average_guesses:.2f}",
            f"  No-guess solves: {self.no_guess_solves} "
            f"max guesses: {self.max_guesses}",
            f"  Min time {self.min_time_ms:.3f} ms, "
            f"max time {self.max_time_ms:.3f} ms",
            f"{n_hardest} hardest puzzles by guess count",
        ]
        for r in self.hardest_by_guesses(n_hardest):
            lines.append(f"{r.puzzle}: {r.guesses} guesses")
        lines.append(f"{n_hardest} hardest puzzles by solve time")
        for r in self.hardest_by_time(n_hardest):
            lines.append(f"{r.puzzle}: {r.elapsed_ms:.3f} ms")
        failures = self.failures
        if failures:
            lines.append(f"FAILED to solve {len(failures)} puzzles:")
            for r in failures:
                lines.append(r.puzzle)
        return "\n".join(lines)


def solve_all(puzzles: List[str],
              strategy: str = STRATEGY_RULES,
              max_runs: Optional[int] = None,
              max_iterations: int = DEFAULT_MAX_ITERATIONS) -> ArchiveSummary:
    """
    Solves puzzles in order.

    Args:
        puzzles:
            81-character puzzle strings
        strategy:
            ``"rules"`` or ``"recursive"``
        max_runs:
            stop after this many (default: all)
        max_iterations:
            step limit for each rule-based solve

    The recursive strategy stops at the first failure; it's slow, and
    it's there to find faults.
    """
    if strategy == STRATEGY_RULES:
        def solve_one(puzzle: str) -> SolveResult:
            return solve_rules(puzzle, max_iterations=max_iterations)
    elif strategy == STRATEGY_RECURSIVE:
        solve_one = solve_recursive
    else:
        raise ValueError(f"Unknown strategy: {strategy!r}")
    if max_runs is not None:
        puzzles = puzzles[:max_runs]
    results = []  # type: List[SolveResult]
    for i, puzzle in enumerate(puzzles):
        log.debug(f"Puzzle {i + 1} of {len(puzzles)}: {puzzle}")
        result = solve_one(puzzle)
        results.append(result)
        if not result.solved and strategy == STRATEGY_RECURSIVE:
            log.warning(f"Stopping after failure on puzzle {i + 1}")
            break
    return ArchiveSummary(results)
