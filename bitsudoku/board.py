#!/usr/bin/env python

"""
bitsudoku/board.py

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

**Board state: 81 candidate sets, plus a stack of saved boards for
backtracking.**

"""

from typing import List, Optional

from bitsudoku.candidates import (
    digit_mask,
    FULL_MASK,
    has_bit,
    is_single,
    lowest_bit,
)
from bitsudoku.common import (
    DISPLAY_SOLVED,
    DISPLAY_UNKNOWN,
    InvalidInput,
    N,
    N_CELLS,
    NEWLINE,
    NoGuessToRevert,
    SPACE,
    UNKNOWN,
)
from bitsudoku.topology import RANK

Entries = List[int]

DIGITS = "123456789"


class Board(object):
    """
    The mutable state of one puzzle-solving session.

    - :attr:`entries`: 81 candidate bitmasks (see :mod:`bitsudoku.candidates`),
      indexed by cell number.
    - :attr:`guesses`: saved copies of :attr:`entries`, one per active guess.
    """

    def __init__(self, entries: Entries, puzzle: str = "") -> None:
        assert len(entries) == N_CELLS
        self.entries = list(entries)
        self.puzzle = puzzle
        self.guesses = []  # type: List[Entries]

    @classmethod
    def load(cls, digit_string: str) -> "Board":
        """
        Creates a board from an 81-character string. Characters ``1``-``9``
        are givens; anything else (conventionally ``.`` or ``0``) is blank.

        Raises:
            :exc:`InvalidInput` if the string is the wrong length
        """
        if len(digit_string) != N_CELLS:
            raise InvalidInput(
                f"Invalid puzzle size: need {N_CELLS} characters, "
                f"got {len(digit_string)} ({digit_string!r})")
        entries = []  # type: Entries
        for c in digit_string:
            if c in DIGITS:
                entries.append(digit_mask(int(c)))
            else:
                entries.append(FULL_MASK)
        return cls(entries, puzzle=digit_string)

    # -------------------------------------------------------------------------
    # Guess stack
    # -------------------------------------------------------------------------

    def snapshot(self) -> Entries:
        """
        An independent copy of the cells.
        """
        return list(self.entries)

    def push_guess(self, saved: Entries) -> None:
        self.guesses.append(saved)

    def pop_guess(self) -> None:
        """
        Reverts the board to the most recently saved state.

        Raises:
            :exc:`NoGuessToRevert` if there is nothing to go back to
        """
        if not self.guesses:
            raise NoGuessToRevert("Solution failed, no more guesses to revert")
        self.entries = self.guesses.pop()

    @property
    def guess_depth(self) -> int:
        return len(self.guesses)

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def value(self, cell: int) -> Optional[int]:
        """
        The digit in a cell, or ``None`` if it's not solved.
        """
        entry = self.entries[cell]
        return lowest_bit(entry) if is_single(entry) else None

    def n_unknown_cells(self) -> int:
        return sum(1 for e in self.entries if not is_single(e))

    def digit_string(self) -> str:
        """
        81 characters, with :data:`UNKNOWN` for unsolved cells.
        """
        return "".join(
            str(lowest_bit(e)) if is_single(e) else UNKNOWN
            for e in self.entries
        )

    # -------------------------------------------------------------------------
    # String representations
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return make_grid_string(self.digit_string())

    def candidate_str(self) -> str:
        """
        Returns a visual representation of the candidates. Each cell is a
        3x3 block of its possible digits.
        """
        pn = N * (RANK + 1) - 1
        t = RANK

        # Don't use [[SPACE] * pn] * pn; the rows would all be one list.
        strings = [[SPACE for _ in range(pn)] for _ in range(pn)]

        cell_boundaries = ((t + 1) * t - 1, (t + 1) * (t * 2) - 1)
        for r in cell_boundaries:
            for i in range(pn):
                strings[r][i] = "-"
        for c in cell_boundaries:
            for i in range(pn):
                strings[i][c] = "|"
        for r in cell_boundaries:
            for c in cell_boundaries:
                strings[r][c] = "+"

        for cell, entry in enumerate(self.entries):
            row_zb, col_zb = divmod(cell, N)
            cell_solved = is_single(entry)
            for d_zb in range(N):
                y = row_zb * (t + 1) + d_zb // t
                x = col_zb * (t + 1) + d_zb % t
                if has_bit(entry, d_zb + 1):
                    txt = str(d_zb + 1)
                elif cell_solved:
                    txt = DISPLAY_SOLVED
                else:
                    txt = DISPLAY_UNKNOWN
                strings[y][x] = txt
        return NEWLINE.join("".join(line) for line in strings)


def make_grid_string(digit_string: str) -> str:
    """
    Lays out an 81-character puzzle string as nine lines of ``... ... ...``,
    with a blank line between bands of boxes.
    """
    assert len(digit_string) == N_CELLS
    x = ""
    for row_zb in range(N):
        for col_zb in range(N):
            x += digit_string[row_zb * N + col_zb]
            if col_zb % RANK == RANK - 1 and col_zb < N - 1:
                x += SPACE
        if row_zb < N - 1:
            x += NEWLINE
            if row_zb % RANK == RANK - 1:
                x += NEWLINE
    return x
