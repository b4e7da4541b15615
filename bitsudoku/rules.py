#!/usr/bin/env python

"""
bitsudoku/rules.py

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

**Elimination rules.**

Each rule takes the 81 cell entries (a list, modified in place) and returns
"improved?". They are applied cheapest first; see :data:`RULES`.

Sudoku Snake names (http://www.sudokusnake.com/techniques.php):

1.  Naked Singles (and the basic elimination that follows from them).
2.  Hidden Singles, Hidden Singles by Box.
3.  Naked Subsets.
4.  Hidden Subsets.
5.  Pointing (box to line) and Claiming (line to box).

All bit clearing goes through :func:`bitsudoku.candidates.remove`, so a cell
locked by rule 1 is never altered by any rule.

"""

import logging
from typing import Callable, List, Tuple

from bitsudoku.candidates import (
    count,
    FULL_MASK,
    is_locked,
    is_single,
    LOCK_MASK,
    remove,
)
from bitsudoku.common import N, N_CELLS
from bitsudoku.topology import KIND_BOX, TOPOLOGY

log = logging.getLogger(__name__)

Rule = Callable[[List[int]], bool]


# =============================================================================
# Rules
# =============================================================================

def eliminate_naked_singles(entries: List[int]) -> bool:
    """
    If a cell has a single value, that value can be eliminated from every
    other cell in its row, column and box.

    Once that's been done the cell is locked, and skipped from then on.
    """
    changed = False
    for cell in range(N_CELLS):
        entry = entries[cell]
        if is_locked(entry) or not is_single(entry):
            continue
        for peer in TOPOLOGY.peers(cell):
            entries[peer], peer_changed = remove(entries[peer], entry)
            changed = peer_changed or changed
        entries[cell] = entry | LOCK_MASK
    return changed


def find_hidden_singles(entries: List[int]) -> bool:
    """
    If a group has only one place where a given digit can go, it must go
    there.
    """
    changed = False
    for group in TOPOLOGY.groups():
        match_count = [0] * N
        match_cell = [0] * N
        for cell in group:
            entry = entries[cell]
            for d_zb in range(N):
                if entry & (1 << d_zb):
                    match_count[d_zb] += 1
                    match_cell[d_zb] = cell
        for d_zb in range(N):
            if match_count[d_zb] != 1:
                continue
            cell = match_cell[d_zb]
            if not is_single(entries[cell]):
                entries[cell] = 1 << d_zb
                changed = True
    return changed


def eliminate_naked_subsets(entries: List[int]) -> bool:
    """
    If a group has N cells which each have the same N candidates (and no
    others), those N digits can be removed from all the other cells in the
    group.

    Example, with N = 2: two cells in a row are both {4, 8}. One is 4 and the
    other is 8, so nothing else in the row can be 4 or 8.
    """
    changed = False
    for group in TOPOLOGY.groups():
        for i in range(N):
            entry_i = entries[group[i]]
            n_matches = 1  # always matches itself
            for j in range(i + 1, N):
                if entries[group[j]] == entry_i:
                    n_matches += 1
            if n_matches < 2 or count(entry_i) != n_matches:
                continue
            for cell in group:
                if entries[cell] != entry_i:
                    entries[cell], cell_changed = remove(entries[cell],
                                                         entry_i)
                    changed = cell_changed or changed
    return changed


def restrict_hidden_subsets(entries: List[int]) -> bool:
    """
    If N digits in a group are only possible in the same N cells, all other
    candidates can be eliminated from those cells.

    We transpose the group so there's one bitmask per digit, saying which
    positions (0-8) in the group could hold it:

    .. code-block:: none

        digit:  9 8 7 6 5 4 3 2 1
        a       1 1 0 0 0 0 0 1 0   <- can only be 8 or 9
        b       0 0 1 0 0 0 0 0 0
        c       0 0 0 1 1 0 0 1 1
        d       1 1 0 0 1 0 0 0 1   <- can only be 8 or 9
        e       0 0 0 0 1 1 0 1 1
        f       0 0 0 0 0 0 1 0 0
        ...

    A digit column with N bits, repeated for N digits, pins those N digits to
    those N cells. (This is the mirror image of
    :func:`eliminate_naked_subsets`.)
    """
    changed = False
    for group in TOPOLOGY.groups():
        columns = [0] * N
        for pos, cell in enumerate(group):
            entry = entries[cell]
            for d_zb in range(N):
                if entry & (1 << d_zb):
                    columns[d_zb] |= 1 << pos

        for i in range(N):
            column_i = columns[i]
            digits_mask = 1 << i
            n_matches = 1
            for j in range(i + 1, N):
                if columns[j] == column_i:
                    n_matches += 1
                    digits_mask |= 1 << j
            if n_matches < 2 or count(column_i) != n_matches:
                continue
            for pos in range(N):
                if column_i & (1 << pos):
                    cell = group[pos]
                    entries[cell], cell_changed = remove(
                        entries[cell], FULL_MASK & ~digits_mask)
                    changed = cell_changed or changed
    return changed


def eliminate_locked_candidates(entries: List[int]) -> bool:
    """
    If all the possible places for a digit in group J also lie in another
    group K, the digit can be removed from the rest of K.

    - J is a box, K a row or column ("pointing"). E.g. if a 1 can only go in
      the top row of the top-left box, no other cell of the top row can be a
      1.

    - J is a row or column, K a box ("claiming"). E.g.:

      .. code-block:: none

         . . *
         . . *
         . . *
         -----
         . . *
         . . *
         . . *
         -----
         . . *
         . 6 6
         . 6 6

      If the only places for a 6 in the starred column are the bottom two,
      the other two 6s in that box can go.
    """
    changed = False
    groups = TOPOLOGY.groups()
    for d_zb in range(N):
        bit = 1 << d_zb
        for group_id, group in enumerate(groups):
            matches = [cell for cell in group if entries[cell] & bit]
            if len(matches) < 2:
                continue
            if TOPOLOGY.kind_of(group_id) == KIND_BOX:
                rows = set(TOPOLOGY.row_of(cell) for cell in matches)
                cols = set(TOPOLOGY.col_of(cell) for cell in matches)
                if len(rows) == 1:
                    k = rows.pop()
                elif len(cols) == 1:
                    k = cols.pop()
                else:
                    continue
            else:
                boxes = set(TOPOLOGY.box_of(cell) for cell in matches)
                if len(boxes) != 1:
                    continue
                k = boxes.pop()
            k_changed = False
            for cell in groups[k]:
                if cell not in matches:
                    entries[cell], cell_changed = remove(entries[cell], bit)
                    k_changed = cell_changed or k_changed
            if k_changed:
                log.debug(
                    f"{d_zb + 1} in {TOPOLOGY.describe_group(group_id)} is "
                    f"confined to {TOPOLOGY.describe_group(k)}")
                changed = True
    return changed


# Cheapest first.
RULES = (
    eliminate_naked_singles,
    find_hidden_singles,
    eliminate_naked_subsets,
    restrict_hidden_subsets,
    eliminate_locked_candidates,
)  # type: Tuple[Rule, ...]

RULE_NAMES = (
    "naked singles",
    "hidden singles",
    "naked subsets",
    "hidden subsets",
    "locked candidates",
)


# =============================================================================
# Statistics
# =============================================================================

class RuleStats(object):
    """
    How often each rule was tried, and how often it improved the board.
    Informational only.
    """
    def __init__(self) -> None:
        self.calls = [0] * len(RULES)
        self.applies = [0] * len(RULES)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(calls={self.calls}, "
                f"applies={self.applies})")

    def summary(self) -> str:
        return "\n".join(
            f"Rule {i + 1} ({RULE_NAMES[i]}) ratio = "
            f"{self.applies[i]}/{self.calls[i]}"
            for i in range(len(RULES))
        )


def apply_rule(index: int, entries: List[int], stats: RuleStats) -> bool:
    """
    Runs rule ``index`` (0-based, into :data:`RULES`), keeping count.

    Returns: improved?
    """
    improved = RULES[index](entries)
    stats.calls[index] += 1
    if improved:
        stats.applies[index] += 1
        log.debug(f"Rule {index + 1} ({RULE_NAMES[index]}) improved things")
    return improved
