#!/usr/bin/env python

"""
bitsudoku/candidates.py

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

**Candidate sets, as bitmasks.**

Each cell of the grid is represented by a plain integer ("entry"):

.. code-block:: none

    bit:     9   8 7 6 5 4 3 2 1 0
    meaning: L   9 8 7 6 5 4 3 2 1

- Bits 0-8: digit ``d`` is still possible iff bit ``d - 1`` is set.
- Bit 9 (L): the lock flag. Set once the cell's single value has been
  eliminated from all its peers. A locked entry can't be changed by
  :func:`remove`.

Digits are genuine (one-based) throughout this module.

"""

from typing import List, Tuple

from bitsudoku.common import N

FULL_MASK = (1 << N) - 1  # 0b111111111
LOCK_MASK = 1 << N  # 0b1000000000


def digit_mask(digit: int) -> int:
    """
    The single-bit entry for a digit (1-9).
    """
    assert 1 <= digit <= N, f"Bad digit: {digit}"
    return 1 << (digit - 1)


def is_locked(entry: int) -> bool:
    return (entry & LOCK_MASK) != 0


def count(entry: int) -> int:
    """
    Number of candidate digits; the lock flag is ignored.
    """
    entry &= FULL_MASK
    n = 0
    while entry:
        entry &= entry - 1
        n += 1
    return n


def has_bit(entry: int, digit: int) -> bool:
    """
    Is this digit (1-9) a candidate?
    """
    return (entry & digit_mask(digit)) != 0


def lowest_bit(entry: int) -> int:
    """
    The smallest candidate digit, or 0 if there are none.
    """
    entry &= FULL_MASK
    if entry == 0:
        return 0
    return (entry & -entry).bit_length()


def is_single(entry: int) -> bool:
    """
    Exactly one candidate, i.e. the cell is solved.
    """
    return count(entry) == 1


def remove(entry: int, mask: int) -> Tuple[int, bool]:
    """
    Removes the digits in ``mask`` from ``entry``.

    Returns: ``new_entry, changed``. Locked entries come back untouched.
    """
    if is_locked(entry):
        return entry, False
    new_entry = entry & ~(mask & FULL_MASK)
    return new_entry, new_entry != entry


def digits(entry: int) -> List[int]:
    """
    Candidate digits, in ascending order.
    """
    return [d for d in range(1, N + 1) if has_bit(entry, d)]
