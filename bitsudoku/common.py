#!/usr/bin/env python

"""
bitsudoku/common.py

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

Common constants, exceptions and functions for the Sudoku solver.

"""

import logging
import sys
import traceback
from typing import Callable

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

N = 9
N_CELLS = N * N
N_GROUPS = 3 * N

UNKNOWN = "."
NEWLINE = "\n"
SPACE = " "
HASH = "#"
DISPLAY_UNKNOWN = "·"
DISPLAY_SOLVED = "■"
ALMOST_ONE = 0.99

DEFAULT_MAX_ITERATIONS = 1000000

EXIT_FAILURE = 1
EXIT_SUCCESS = 0


# =============================================================================
# Exceptions
# =============================================================================

class SudokuError(Exception):
    """
    Base class for everything the solver raises.
    """
    pass


class InvalidInput(SudokuError, ValueError):
    """
    The puzzle string was not 81 characters long.
    """
    pass


class InvalidState(SudokuError):
    """
    A group has a value in every cell, but a digit is repeated. Only reachable
    via a bad guess.
    """
    pass


class NoGuessToRevert(SudokuError):
    """
    We needed to back out of a guess, but there wasn't one: the puzzle can't
    be solved.
    """
    pass


class IterationLimitExceeded(SudokuError):
    """
    The propagate/guess loop ran for too long.
    """
    pass


class SolutionFailure(SudokuError):
    """
    Dead end in a recursive search.
    """
    pass


# =============================================================================
# Generic helper functions
# =============================================================================

def run_guard(function: Callable[[], None]) -> None:
    try:
        function()
    except Exception as e:
        log.critical(str(e))
        traceback.print_exc()
        sys.exit(EXIT_FAILURE)
