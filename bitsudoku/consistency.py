#!/usr/bin/env python

"""
bitsudoku/consistency.py

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

**Checks for contradictions and for a finished board.**

There are two levels of check:

- :func:`is_valid` is the "soft" check, run after every rule application.
  ``False`` means "back out of the last guess".

- :func:`group_complete` (and so :func:`board_complete`) is the "hard" check,
  used to see if we've finished. A full group with a repeated digit raises
  :exc:`InvalidState`; the search controller treats that exactly like
  :func:`is_valid` failing.

"""

from typing import Sequence

from bitsudoku.candidates import FULL_MASK, is_single
from bitsudoku.common import InvalidState, N_CELLS
from bitsudoku.topology import TOPOLOGY


def group_complete(entries: Sequence[int], group: Sequence[int]) -> bool:
    """
    Does every cell in the group have a single value?

    XOR-ing the values together gives :data:`FULL_MASK` only if each digit
    appears exactly once.

    Raises:
        :exc:`InvalidState` if the group is full but has a duplicate
    """
    mask = 0
    for cell in group:
        entry = entries[cell]
        if not is_single(entry):
            return False
        mask ^= entry & FULL_MASK
    if mask != FULL_MASK:
        raise InvalidState(
            f"Puzzle has entered an invalid state: group {list(group)} is "
            f"full but has a repeated digit")
    return True


def board_complete(entries: Sequence[int]) -> bool:
    """
    Are all 27 groups complete?

    Raises:
        :exc:`InvalidState`, as for :func:`group_complete`
    """
    return all(group_complete(entries, group) for group in TOPOLOGY.groups())


def is_valid(entries: Sequence[int], strict: bool = False) -> bool:
    """
    Is the board still possibly solvable?

    Not valid if any cell has no candidates left, or if two solved cells in
    a group share a digit.

    Args:
        entries: the cells
        strict: also require that every digit is still a candidate somewhere
            in each group
    """
    for entry in entries:
        if (entry & FULL_MASK) == 0:
            return False
    for group in TOPOLOGY.groups():
        seen = 0
        available = 0
        for cell in group:
            entry = entries[cell] & FULL_MASK
            available |= entry
            if is_single(entry):
                if seen & entry:
                    return False
                seen |= entry
        if strict and available != FULL_MASK:
            return False
    return True


def is_solution(digit_string: str) -> bool:
    """
    Is this 81-character string a correctly filled grid?
    """
    if len(digit_string) != N_CELLS:
        return False
    if any(c not in "123456789" for c in digit_string):
        return False
    entries = [1 << (int(c) - 1) for c in digit_string]
    try:
        return board_complete(entries)
    except InvalidState:
        return False
