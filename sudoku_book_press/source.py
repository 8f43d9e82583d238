"""
Puzzle sources: record files, the sqlite puzzle store, and qqwing.
"""

# Standard Library
import pathlib
import sqlite3
import subprocess

# local repo modules
import sudoku_book_press as sbp
import sudoku_book_press.board
import sudoku_book_press.config
import sudoku_book_press.errors


PuzzleRecord = sbp.board.PuzzleRecord
InsufficientDataError = sbp.errors.InsufficientDataError

QQWING_COMMAND = "qqwing"


#============================================
def parse_record_line(line: str) -> PuzzleRecord | None:
	"""
	Parse a "board solution" line.

	Board and solution may be separated by whitespace or a comma. Blank
	lines and lines starting with # are skipped.

	Args:
		line: Text line.

	Returns:
		PuzzleRecord or None for skipped lines.
	"""
	text = line.strip()
	if not text or text.startswith("#"):
		return None
	parts = text.replace(",", " ").split()
	if len(parts) != 2:
		raise sbp.errors.InputShapeError(f"Expected board and solution, got {len(parts)} fields")
	return PuzzleRecord(board=parts[0], solution=parts[1])


#============================================
def read_board_lines(path: pathlib.Path) -> list[str]:
	"""
	Read one-line boards, as printed by qqwing --one-line.

	Args:
		path: Text file path.

	Returns:
		Board strings in file order.
	"""
	boards: list[str] = []
	for line in path.read_text(encoding="utf-8").splitlines():
		text = line.strip()
		if not text or text.startswith("#"):
			continue
		boards.append(text)
	return boards


#============================================
def pair_records(boards: list[str], solutions: list[str]) -> list[PuzzleRecord]:
	if len(boards) != len(solutions):
		raise InsufficientDataError(f"{len(boards)} boards but {len(solutions)} solutions")
	return [PuzzleRecord(board=board, solution=solution) for board, solution in zip(boards, solutions)]


#============================================
def load_records_file(
	path: pathlib.Path,
	solutions_path: pathlib.Path | None = None,
) -> list[PuzzleRecord]:
	"""
	Load puzzle records from text files.

	Args:
		path: Record file, or board file when solutions_path is given.
		solutions_path: Optional file of solutions, one per board line.

	Returns:
		List of PuzzleRecord in file order.
	"""
	if solutions_path is not None:
		return pair_records(read_board_lines(path), read_board_lines(solutions_path))
	records: list[PuzzleRecord] = []
	for line_number, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
		try:
			record = parse_record_line(line)
		except sbp.errors.InputShapeError as exc:
			raise sbp.errors.InputShapeError(f"{path}:{line_number}: {exc}") from exc
		if record is not None:
			records.append(record)
	return records


#============================================
def run_qqwing(args: list[str], input_text: str | None = None, command: str = QQWING_COMMAND) -> list[str]:
	"""
	Run the qqwing generator and return its non-empty output lines.

	Args:
		args: qqwing arguments.
		input_text: Optional stdin text.
		command: Executable name or path.

	Returns:
		Output lines.
	"""
	try:
		result = subprocess.run(
			[command] + args,
			input=input_text,
			capture_output=True,
			text=True,
			check=False,
		)
	except FileNotFoundError as exc:
		raise RuntimeError(f"{command} not found on PATH") from exc
	if result.returncode != 0:
		message = result.stderr.strip() or f"{command} exited with {result.returncode}"
		raise RuntimeError(message)
	return [line.strip() for line in result.stdout.splitlines() if line.strip()]


#============================================
def generate_records(count: int, band: str, command: str = QQWING_COMMAND) -> list[PuzzleRecord]:
	"""
	Generate puzzles with qqwing, then solve them with qqwing.

	Args:
		count: Number of puzzles.
		band: Difficulty band passed to --difficulty.
		command: qqwing executable.

	Returns:
		List of PuzzleRecord.
	"""
	band = sbp.config.normalize_band(band)
	boards = run_qqwing(
		["--generate", str(count), "--one-line", "--difficulty", band],
		command=command,
	)
	solutions = run_qqwing(
		["--solve", "--one-line"],
		input_text="\n".join(boards) + "\n",
		command=command,
	)
	records = pair_records(boards, solutions)
	if len(records) < count:
		raise InsufficientDataError(f"qqwing produced {len(records)} of {count} puzzles")
	return records


#============================================
def table_name(band: str) -> str:
	return f"sudoku_{sbp.config.normalize_band(band)}"


#============================================
def connect_store(path: pathlib.Path) -> sqlite3.Connection:
	"""
	Open the puzzle store.

	Args:
		path: sqlite database path.

	Returns:
		Open connection.
	"""
	return sqlite3.connect(str(path))


#============================================
def ensure_table(conn: sqlite3.Connection, band: str) -> None:
	conn.execute(
		f"CREATE TABLE IF NOT EXISTS {table_name(band)} ("
		"id INTEGER PRIMARY KEY AUTOINCREMENT, "
		"game TEXT NOT NULL UNIQUE, "
		"solution TEXT NOT NULL)"
	)


#============================================
def store_records(conn: sqlite3.Connection, band: str, records: list[PuzzleRecord]) -> int:
	"""
	Insert records into a band table, skipping boards already stored.

	Args:
		conn: Store connection.
		band: Difficulty band.
		records: Records to insert.

	Returns:
		Number of new rows.
	"""
	ensure_table(conn, band)
	inserted = 0
	with conn:
		for record in records:
			cursor = conn.execute(
				f"INSERT OR IGNORE INTO {table_name(band)} (game, solution) VALUES (?, ?)",
				(record.board, record.solution),
			)
			inserted += cursor.rowcount
	return inserted


#============================================
def fetch_records(conn: sqlite3.Connection, band: str, limit: int, offset: int = 0) -> list[PuzzleRecord]:
	"""
	Fetch a contiguous run of records from a band table.

	Args:
		conn: Store connection.
		band: Difficulty band.
		limit: Number of records requested.
		offset: Rows to skip, in insertion order.

	Returns:
		List of exactly limit records.
	"""
	ensure_table(conn, band)
	rows = conn.execute(
		f"SELECT game, solution FROM {table_name(band)} ORDER BY id LIMIT ? OFFSET ?",
		(limit, offset),
	).fetchall()
	if len(rows) < limit:
		raise InsufficientDataError(
			f"{table_name(band)} has {len(rows)} records at offset {offset}, {limit} requested"
		)
	return [PuzzleRecord(board=game, solution=solution) for game, solution in rows]
