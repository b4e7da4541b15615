# tests/test_archive.py
import pytest

from bitsudoku.archive import (
    puzzle_from_text,
    read_puzzle_file,
    read_puzzle_files,
    read_puzzle_lines,
    solve_all,
)
from bitsudoku.main import DEMO_SUDOKU_1
from bitsudoku.result import FailureKind

from conftest import CLASSIC, CONTRADICTORY


def test_read_puzzle_lines():
    lines = [
        "# a comment that happens to be long enough " + "." * 40 + "\n",
        CLASSIC + "\n",
        "too short\n",
        "\n",
        CONTRADICTORY,
        "." * 82 + "\n",
    ]
    assert read_puzzle_lines(lines) == [CLASSIC, CONTRADICTORY]


def test_read_puzzle_files(tmp_path):
    good = tmp_path / "puzzles.txt"
    good.write_text(f"# header\n{CLASSIC}\n{CLASSIC}\n")
    assert read_puzzle_file(str(good)) == [CLASSIC, CLASSIC]
    missing = tmp_path / "nonexistent.txt"
    assert read_puzzle_files([str(missing), str(good)]) == [CLASSIC, CLASSIC]


def test_puzzle_from_text():
    puzzle = puzzle_from_text(DEMO_SUDOKU_1)
    assert len(puzzle) == 81
    assert puzzle.startswith("." * 11 + "23.145.")
    assert puzzle_from_text(f"\n{CLASSIC}\n") == CLASSIC


@pytest.mark.parametrize("text", ["", "123\n456", ("." * 9 + "\n") * 8 + "."])
def test_puzzle_from_text_bad(text):
    with pytest.raises(ValueError):
        puzzle_from_text(text)


def test_solve_all():
    summary = solve_all([CLASSIC, CONTRADICTORY, "." * 81])
    assert summary.attempted == 3
    assert summary.n_solved == 2
    assert [r.puzzle for r in summary.failures] == [CONTRADICTORY]
    assert summary.failures[0].error == FailureKind.NO_GUESS_TO_REVERT
    assert summary.no_guess_solves == 1
    assert summary.max_guesses > 0
    assert summary.hardest_by_guesses(1)[0].puzzle == "." * 81
    assert len(summary.hardest_by_time(2)) == 2
    report = summary.report(n_hardest=2)
    assert "Solved 2 of 3 puzzles" in report
    assert "FAILED to solve 1 puzzles:" in report
    assert report.endswith(CONTRADICTORY)


def test_solve_all_recursive_stops_at_failure():
    summary = solve_all([CONTRADICTORY, CLASSIC], strategy="recursive")
    assert summary.attempted == 1
    assert summary.n_solved == 0


def test_solve_all_max_runs():
    summary = solve_all([CLASSIC, CLASSIC, CLASSIC], max_runs=2)
    assert summary.attempted == 2


def test_solve_all_bad_strategy():
    with pytest.raises(ValueError):
        solve_all([CLASSIC], strategy="magic")


def test_empty_summary():
    summary = solve_all([])
    assert summary.average_time_ms == 0.0
    assert summary.max_guesses == 0


def test_solve_all_max_iterations():
    summary = solve_all([CLASSIC, "." * 81], max_iterations=1)
    assert summary.n_solved == 0
    assert all(r.error == FailureKind.ITERATION_LIMIT_EXCEEDED
               for r in summary.failures)
