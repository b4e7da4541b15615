#!/usr/bin/env python

"""
bitsudoku/main.py

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

**Command-line entry point.**

"""

import argparse
import logging
import sys
from typing import List

from cardinal_pythonlib.argparse_func import RawDescriptionArgumentDefaultsHelpFormatter  # noqa
from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger

from bitsudoku.archive import puzzle_from_text, read_puzzle_files, solve_all
from bitsudoku.board import Board
from bitsudoku.common import (
    DEFAULT_MAX_ITERATIONS,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    run_guard,
)
from bitsudoku.consistency import is_solution
from bitsudoku.result import (
    SolveResult,
    STRATEGY_INTEGER_PROGRAMMING,
    STRATEGY_RECURSIVE,
    STRATEGY_RULES,
)
from bitsudoku.solver import Sudoku

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEMO_SUDOKU_1 = """
# Coton 54, Coton Community News Dec 2019-Jan 2020

... ... ...
..2 3.1 45.
.1. ... .6.

.47 .5. 38.
... 7.3 ...
.36 ... 14.

.7. ... .9.
.91 4.5 6..
... ..9 ...
"""

METHODS = [STRATEGY_RULES, STRATEGY_RECURSIVE, STRATEGY_INTEGER_PROGRAMMING]


# =============================================================================
# Helpers
# =============================================================================

def solve_puzzle(puzzle: str, method: str = STRATEGY_RULES,
                 show_candidates: bool = False,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS) -> SolveResult:
    """
    Solves one puzzle, logging the problem and the answer.
    """
    problem = Sudoku(puzzle, max_iterations=max_iterations)
    if show_candidates:
        log.info(f"Solving:\n{Board.load(puzzle).candidate_str()}")
    else:
        log.info(f"Solving:\n{problem}")
    if method == STRATEGY_RULES:
        result = problem.solve()
    elif method == STRATEGY_RECURSIVE:
        result = problem.solve_recursive()
    elif method == STRATEGY_INTEGER_PROGRAMMING:
        result = problem.solve_ip()
    else:
        raise ValueError(f"Unknown method: {method!r}")
    if result.solved:
        verdict = "valid" if is_solution(result.solution) else "NOT VALID"
        log.info(f"Answer ({verdict}):\n{result.summary()}")
    else:
        log.error(result.summary())
    return result


# =============================================================================
# main
# =============================================================================

def main(argv: List[str] = None) -> None:
    """
    Command-line entry point.
    """
    cmd_demo = "demo"
    cmd_solve = "solve"
    cmd_file = "file"
    cmd_archive = "archive"

    help_method = "Solving method"

    parser = argparse.ArgumentParser(
        formatter_class=RawDescriptionArgumentDefaultsHelpFormatter,
        description=(
            f"Solve Sudoku puzzles. Puzzles are 81 characters, with 1-9 for "
            f"known cells and . or 0 for unknown ones. Files may also use "
            f"this format:\n\n"
            f"{DEMO_SUDOKU_1}"
        )
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Be verbose")
    parser.add_argument(
        "--max_iterations", type=int, default=DEFAULT_MAX_ITERATIONS,
        help="Give up after this many propagate/guess steps")
    subparsers = parser.add_subparsers(
        dest="command",
        help="Append --help for more help")

    parser_solve = subparsers.add_parser(
        cmd_solve, help="Solve a puzzle given on the command line")
    parser_solve.add_argument(
        "puzzle", type=str, help="81-character puzzle")
    parser_solve.add_argument(
        "--method", choices=METHODS, default=STRATEGY_RULES, help=help_method)
    parser_solve.add_argument(
        "--candidates", action="store_true",
        help="Show the starting candidates, not just the givens")

    parser_file = subparsers.add_parser(
        cmd_file, help="Solve a puzzle from a file")
    parser_file.add_argument(
        "filename", type=str,
        help="Puzzle filename to read. Must contain text in format as above.")
    parser_file.add_argument(
        "--method", choices=METHODS, default=STRATEGY_RULES, help=help_method)

    parser_archive = subparsers.add_parser(
        cmd_archive,
        help="Solve every puzzle in one or more archive files (one puzzle "
             "per line, # for comments) and report statistics")
    parser_archive.add_argument(
        "filenames", type=str, nargs="+", help="Archive filenames")
    parser_archive.add_argument(
        "--method", choices=[STRATEGY_RULES, STRATEGY_RECURSIVE],
        default=STRATEGY_RULES, help=help_method)
    parser_archive.add_argument(
        "--max_runs", type=int, default=None,
        help="Solve at most this many puzzles")

    _parser_demo = subparsers.add_parser(cmd_demo, help="Run demo")

    args = parser.parse_args(argv)
    main_only_quicksetup_rootlogger(level=logging.DEBUG if args.verbose
                                    else logging.INFO)

    if not args.command:
        print("Must specify command")
        sys.exit(EXIT_FAILURE)

    if args.command == cmd_archive:
        puzzles = read_puzzle_files(args.filenames)
        if not puzzles:
            log.error("No puzzles found")
            sys.exit(EXIT_FAILURE)
        summary = solve_all(puzzles, strategy=args.method,
                            max_runs=args.max_runs,
                            max_iterations=args.max_iterations)
        log.info(f"Summary:\n{summary.report()}")
        sys.exit(EXIT_SUCCESS if not summary.failures else EXIT_FAILURE)

    if args.command == cmd_demo:
        result = solve_puzzle(puzzle_from_text(DEMO_SUDOKU_1),
                              max_iterations=args.max_iterations)
    elif args.command == cmd_solve:
        result = solve_puzzle(args.puzzle, method=args.method,
                              show_candidates=args.candidates,
                              max_iterations=args.max_iterations)
    else:
        log.info(f"Reading {args.filename}")
        with open(args.filename, "rt") as f:
            string_version = f.read()
        result = solve_puzzle(puzzle_from_text(string_version),
                              method=args.method,
                              max_iterations=args.max_iterations)
    sys.exit(EXIT_SUCCESS if result.solved else EXIT_FAILURE)


def cli() -> None:
    """
    Console-script entry point.
    """
    run_guard(main)


# =============================================================================
# Command-line entry point
# =============================================================================

if __name__ == "__main__":
    cli()
