#!/usr/bin/env python

"""
bitsudoku/topology.py

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

**The static layout of a 9x9 grid: rows, columns and boxes.**

Cells are numbered 0-80, row by row. There are 27 "groups" of 9 cells:

- group ids 0-8: rows;
- group ids 9-17: columns;
- group ids 18-26: 3x3 boxes, numbered like this:

.. code-block:: none

    0 1 2
    3 4 5
    6 7 8

The whole thing is built once, into tuples, and shared by every puzzle as
:data:`TOPOLOGY`.

"""

from typing import Generator, Tuple

from bitsudoku.common import N, N_CELLS, N_GROUPS

RANK = 3

ROW_BASE = 0
COL_BASE = N
BOX_BASE = 2 * N

KIND_ROW = "row"
KIND_COL = "column"
KIND_BOX = "box"


# =============================================================================
# Box
# =============================================================================

class Box(object):
    """
    Represents a 3x3 box within the Sudoku grid.
    """
    def __init__(self, box_zb: int) -> None:
        """
        Args:
            box_zb: box number, 0-8
        """
        assert 0 <= box_zb < N, (
            f"box_zb was {box_zb}; must be in range 0 to {N - 1} inclusive"
        )
        self.box_zb = box_zb

    def __str__(self) -> str:
        return f"{{{self.boxrow + 1},{self.boxcol + 1}}}"

    def __repr__(self) -> str:
        return self.__str__()

    @property
    def boxrow(self) -> int:
        """
        Zero-based row number of the box (not its cells).
        """
        return self.box_zb // RANK

    @property
    def boxcol(self) -> int:
        """
        Zero-based column number of the box (not its cells).
        """
        return self.box_zb % RANK

    def top_left_cell(self) -> Tuple[int, int]:
        """
        Returns ``row_zb, col_zb`` for the top-left cell in the box.
        """
        return self.boxrow * RANK, self.boxcol * RANK

    @classmethod
    def containing(cls, cell: int) -> "Box":
        """
        Returns the box containing this cell.
        """
        assert 0 <= cell < N_CELLS
        row_zb, col_zb = divmod(cell, N)
        return cls(RANK * (row_zb // RANK) + col_zb // RANK)

    def gen_cells(self) -> Generator[int, None, None]:
        """
        Generates the cell indices in this box, row by row.
        """
        row_min, col_min = self.top_left_cell()
        for r in range(row_min, row_min + RANK):
            for c in range(col_min, col_min + RANK):
                yield r * N + c


# =============================================================================
# GroupTopology
# =============================================================================

class GroupTopology(object):
    """
    Groups, and the groups that each cell belongs to. Read-only once built.
    """
    def __init__(self) -> None:
        rows = tuple(
            tuple(r * N + c for c in range(N))
            for r in range(N)
        )
        cols = tuple(
            tuple(r * N + c for r in range(N))
            for c in range(N)
        )
        boxes = tuple(
            tuple(Box(b).gen_cells())
            for b in range(N)
        )
        self._groups = rows + cols + boxes  # type: Tuple[Tuple[int, ...], ...]
        self._groups_of = tuple(
            (
                self.row_of(cell),
                self.col_of(cell),
                BOX_BASE + Box.containing(cell).box_zb,
            )
            for cell in range(N_CELLS)
        )  # type: Tuple[Tuple[int, int, int], ...]
        self._peers = tuple(
            tuple(sorted(set(
                other
                for g in self._groups_of[cell]
                for other in self._groups[g]
                if other != cell
            )))
            for cell in range(N_CELLS)
        )  # type: Tuple[Tuple[int, ...], ...]
        assert len(self._groups) == N_GROUPS

    def groups(self) -> Tuple[Tuple[int, ...], ...]:
        """
        All 27 groups (rows, then columns, then boxes), each a tuple of 9 cell
        indices.
        """
        return self._groups

    def groups_of(self, cell: int) -> Tuple[int, int, int]:
        """
        The ``row, column, box`` group ids containing this cell.
        """
        return self._groups_of[cell]

    def peers(self, cell: int) -> Tuple[int, ...]:
        """
        The 20 other cells that share a group with this one.
        """
        return self._peers[cell]

    @staticmethod
    def row_of(cell: int) -> int:
        return ROW_BASE + cell // N

    @staticmethod
    def col_of(cell: int) -> int:
        return COL_BASE + cell % N

    @staticmethod
    def box_of(cell: int) -> int:
        return BOX_BASE + RANK * (cell // (N * RANK)) + (cell % N) // RANK

    @staticmethod
    def kind_of(group_id: int) -> str:
        assert 0 <= group_id < N_GROUPS, f"Bad group id: {group_id}"
        if group_id < COL_BASE:
            return KIND_ROW
        if group_id < BOX_BASE:
            return KIND_COL
        return KIND_BOX

    @classmethod
    def describe_group(cls, group_id: int) -> str:
        """
        For log messages, e.g. ``"row 3"`` or ``"box {2,1}"``.
        """
        kind = cls.kind_of(group_id)
        if kind == KIND_ROW:
            return f"row {group_id - ROW_BASE + 1}"
        if kind == KIND_COL:
            return f"column {group_id - COL_BASE + 1}"
        return f"box {Box(group_id - BOX_BASE)}"


TOPOLOGY = GroupTopology()
