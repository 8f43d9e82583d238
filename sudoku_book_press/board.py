"""
Board validation and puzzle records.
"""

# Standard Library
import dataclasses

# local repo modules
import sudoku_book_press as sbp
import sudoku_book_press.config
import sudoku_book_press.errors


InputShapeError = sbp.errors.InputShapeError

BOARD_CELLS = sbp.config.BOARD_CELLS
BLANK_MARKER = sbp.config.BLANK_MARKER
DIGITS = sbp.config.DIGITS


#============================================
def validate_board(board: str, allow_blank: bool = True) -> str:
	"""
	Check that a board string is exactly 81 valid symbols.

	Args:
		board: Board string, row-major.
		allow_blank: Whether the blank marker is accepted.

	Returns:
		The board string unchanged.
	"""
	if not isinstance(board, str):
		raise InputShapeError(f"Board must be a string, got {type(board).__name__}")
	if len(board) != BOARD_CELLS:
		raise InputShapeError(f"Board must have {BOARD_CELLS} symbols, got {len(board)}")
	allowed = DIGITS + BLANK_MARKER if allow_blank else DIGITS
	for index, symbol in enumerate(board):
		if symbol not in allowed:
			raise InputShapeError(f"Invalid symbol {symbol!r} at position {index}")
	return board


#============================================
def count_clues(board: str) -> int:
	"""
	Count the non-blank symbols on a board.

	Args:
		board: Board string.

	Returns:
		Number of digits.
	"""
	return sum(1 for symbol in board if symbol != BLANK_MARKER)


@dataclasses.dataclass(frozen=True)
class PuzzleRecord:
	board: str
	solution: str

	def __post_init__(self) -> None:
		validate_board(self.board)
		validate_board(self.solution, allow_blank=False)

	def board_for(self, kind: str) -> str:
		"""
		Select the board drawn for a section kind.

		Args:
			kind: "puzzle" or "solution".

		Returns:
			Board string.
		"""
		if kind == "solution":
			return self.solution
		if kind == "puzzle":
			return self.board
		raise ValueError(f"Unknown section kind: {kind}")
