import argparse
import json
import pathlib

import pytest

import sudoku_book_press.cli
import sudoku_book_press.config


#============================================
def write_records(path: pathlib.Path, records: list) -> pathlib.Path:
	lines = [f"{record.board} {record.solution}" for record in records]
	path.write_text("\n".join(lines) + "\n", encoding="utf-8")
	return path


#============================================
def test_parse_tiles() -> None:
	layout = sudoku_book_press.cli.parse_tiles("2x3")
	assert (layout.nx, layout.ny) == (2, 3)
	assert sudoku_book_press.cli.parse_tiles("1X2").capacity == 2
	for value in ("2", "0x3", "axb", "2x3x4"):
		with pytest.raises(argparse.ArgumentTypeError):
			sudoku_book_press.cli.parse_tiles(value)


#============================================
def test_build_config_single_band() -> None:
	args = sudoku_book_press.cli.parse_args(
		["-r", "records.txt", "-d", "Easy", "-n", "10", "--puzzle-tiles", "2x1", "-o", "L"]
	)
	config = sudoku_book_press.cli.build_config(args)
	assert config.bands == ("easy",)
	assert config.band_counts == {"easy": 10}
	assert config.orientation == "L"
	layout = config.band_layouts["easy"]
	assert (layout.puzzles.nx, layout.puzzles.ny) == (2, 1)
	# landscape default for solutions
	assert (layout.solutions.nx, layout.solutions.ny) == (3, 2)


#============================================
def test_build_config_mix() -> None:
	args = sudoku_book_press.cli.parse_args(["-b", "sudoku.db", "-m", "-v", "2"])
	config = sudoku_book_press.cli.build_config(args)
	assert config.bands == sudoku_book_press.config.BANDS
	assert config.band_counts == {"simple": 50, "easy": 50, "intermediate": 150, "expert": 300}
	assert config.volume == 2
	assert config.label == "mix"


#============================================
def test_parse_args_requires_source() -> None:
	with pytest.raises(SystemExit):
		sudoku_book_press.cli.parse_args(["-n", "4"])
	with pytest.raises(SystemExit):
		sudoku_book_press.cli.parse_args(["-r", "records.txt", "-m"])
	with pytest.raises(SystemExit):
		sudoku_book_press.cli.parse_args(["-r", "records.txt", "-d", "hard"])


#============================================
def test_run_pipeline_writes_book(tmp_path: pathlib.Path, make_records) -> None:
	records_path = write_records(tmp_path / "records.txt", make_records(4))
	output_path = tmp_path / "book.pdf"
	args = sudoku_book_press.cli.parse_args(
		["-r", str(records_path), "-d", "easy", "-n", "4", "--output", str(output_path)]
	)
	assert sudoku_book_press.cli.run_pipeline(args) == 0
	assert output_path.exists()
	manifest = json.loads((tmp_path / "book.pdf.json").read_text(encoding="utf-8"))
	assert manifest["band_counts"] == {"easy": 4}
	assert [section["kind"] for section in manifest["sections"]] == ["puzzle", "solution"]
	# title, 2 puzzle pages, title, 1 solution page
	assert manifest["pages"] == 1 + 2 + 1 + 1


#============================================
def test_run_pipeline_dry_run(tmp_path: pathlib.Path, make_records, capsys) -> None:
	records_path = write_records(tmp_path / "records.txt", make_records(4))
	args = sudoku_book_press.cli.parse_args(
		["-r", str(records_path), "-n", "4", "--dry-run", "--output-dir", str(tmp_path / "out")]
	)
	assert sudoku_book_press.cli.run_pipeline(args) == 0
	assert not (tmp_path / "out").exists()
	assert "puzzles: 4 grids" in capsys.readouterr().out


#============================================
def test_run_pipeline_reports_short_input(tmp_path: pathlib.Path, make_records, capsys) -> None:
	records_path = write_records(tmp_path / "records.txt", make_records(3))
	args = sudoku_book_press.cli.parse_args(
		["-r", str(records_path), "-n", "5", "--dry-run"]
	)
	assert sudoku_book_press.cli.run_pipeline(args) == 1
	assert "Build failed" in capsys.readouterr().out
