"""
bitsudoku: solves Sudoku puzzles by constraint propagation on candidate
bitmasks, with backtracking.
"""

__version__ = "1.0.0"
