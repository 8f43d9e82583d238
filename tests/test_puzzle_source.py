import pathlib
import stat

import pytest

import sudoku_book_press.errors
import sudoku_book_press.source


#============================================
def test_parse_record_line(puzzle_board: str, solved_board: str) -> None:
	record = sudoku_book_press.source.parse_record_line(f"{puzzle_board} {solved_board}\n")
	assert record.board == puzzle_board
	assert record.solution == solved_board
	record = sudoku_book_press.source.parse_record_line(f"{puzzle_board},{solved_board}")
	assert record.solution == solved_board
	assert sudoku_book_press.source.parse_record_line("   ") is None
	assert sudoku_book_press.source.parse_record_line("# volume 1") is None
	with pytest.raises(sudoku_book_press.errors.InputShapeError):
		sudoku_book_press.source.parse_record_line(puzzle_board)


#============================================
def test_load_records_file(tmp_path: pathlib.Path, make_records) -> None:
	records = make_records(3)
	path = tmp_path / "records.txt"
	lines = ["# board solution"] + [f"{r.board} {r.solution}" for r in records]
	path.write_text("\n".join(lines) + "\n", encoding="utf-8")
	assert sudoku_book_press.source.load_records_file(path) == records


#============================================
def test_load_records_file_reports_line(tmp_path: pathlib.Path, puzzle_board: str) -> None:
	path = tmp_path / "records.txt"
	path.write_text(f"{puzzle_board} {puzzle_board[:40]}\n", encoding="utf-8")
	with pytest.raises(sudoku_book_press.errors.InputShapeError, match="records.txt:1"):
		sudoku_book_press.source.load_records_file(path)


#============================================
def test_load_paired_files(tmp_path: pathlib.Path, make_records) -> None:
	records = make_records(2)
	boards = tmp_path / "boards.txt"
	solutions = tmp_path / "solutions.txt"
	boards.write_text("\n".join(r.board for r in records) + "\n", encoding="utf-8")
	solutions.write_text("\n".join(r.solution for r in records) + "\n", encoding="utf-8")
	assert sudoku_book_press.source.load_records_file(boards, solutions) == records

	solutions.write_text(records[0].solution + "\n", encoding="utf-8")
	with pytest.raises(sudoku_book_press.errors.InsufficientDataError):
		sudoku_book_press.source.load_records_file(boards, solutions)


#============================================
def test_store_round_trip(tmp_path: pathlib.Path, make_records) -> None:
	conn = sudoku_book_press.source.connect_store(tmp_path / "sudoku.db")
	records = make_records(5)
	assert sudoku_book_press.source.store_records(conn, "easy", records) == 5
	assert sudoku_book_press.source.store_records(conn, "easy", records[:2]) == 0
	assert sudoku_book_press.source.fetch_records(conn, "easy", 3, 2) == records[2:5]
	with pytest.raises(sudoku_book_press.errors.InsufficientDataError):
		sudoku_book_press.source.fetch_records(conn, "easy", 4, 2)
	with pytest.raises(sudoku_book_press.errors.InsufficientDataError):
		sudoku_book_press.source.fetch_records(conn, "expert", 1)
	conn.close()


#============================================
def test_table_name_rejects_unknown_band() -> None:
	assert sudoku_book_press.source.table_name("Expert") == "sudoku_expert"
	with pytest.raises(ValueError):
		sudoku_book_press.source.table_name("easy; DROP TABLE x")


#============================================
def write_fake_qqwing(tmp_path: pathlib.Path, board: str, solution: str) -> pathlib.Path:
	"""
	Write a stand-in qqwing that prints fixed boards and solutions.
	"""
	script = tmp_path / "qqwing"
	script.write_text(
		"#!/bin/sh\n"
		"if [ \"$1\" = \"--generate\" ]; then\n"
		"  i=0\n"
		"  while [ $i -lt \"$2\" ]; do echo " + board + "; i=$((i+1)); done\n"
		"else\n"
		"  while read line; do [ -n \"$line\" ] && echo " + solution + "; done\n"
		"fi\n",
		encoding="utf-8",
	)
	script.chmod(script.stat().st_mode | stat.S_IXUSR)
	return script


#============================================
def test_generate_records(tmp_path: pathlib.Path, puzzle_board: str, solved_board: str) -> None:
	script = write_fake_qqwing(tmp_path, puzzle_board, solved_board)
	records = sudoku_book_press.source.generate_records(3, "easy", command=str(script))
	assert len(records) == 3
	assert all(record.board == puzzle_board for record in records)
	assert all(record.solution == solved_board for record in records)


#============================================
def test_missing_generator(tmp_path: pathlib.Path) -> None:
	with pytest.raises(RuntimeError):
		sudoku_book_press.source.generate_records(1, "easy", command=str(tmp_path / "missing"))
