"""
Pytest configuration for local imports and shared boards.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()
import sudoku_book_press.board


SOLVED_BOARD = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"
PUZZLE_BOARD = "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"


#============================================
def relabel(board: str, shift: int) -> str:
	"""
	Rotate digit labels, which keeps a valid sudoku valid.

	Args:
		board: Board string.
		shift: Label rotation 0..8.

	Returns:
		Relabeled board.
	"""
	table = str.maketrans("123456789", "".join(str((d + shift) % 9 + 1) for d in range(9)))
	return board.translate(table)


#============================================
def build_records(count: int) -> list[sudoku_book_press.board.PuzzleRecord]:
	"""
	Build count records, cycling through the nine digit relabelings.
	"""
	records = []
	for index in range(count):
		shift = index % 9
		records.append(
			sudoku_book_press.board.PuzzleRecord(
				board=relabel(PUZZLE_BOARD, shift),
				solution=relabel(SOLVED_BOARD, shift),
			)
		)
	return records


@pytest.fixture
def make_records():
	return build_records


@pytest.fixture
def puzzle_board() -> str:
	return PUZZLE_BOARD


@pytest.fixture
def solved_board() -> str:
	return SOLVED_BOARD
