import pytest

import sudoku_book_press.compose
import sudoku_book_press.config
import sudoku_book_press.layout
import sudoku_book_press.paginate
import sudoku_book_press.render
import sudoku_book_press.surface


PAGE_SIZE = sudoku_book_press.config.page_size_mm("Letter", "P")


#============================================
def build_config(band: str, count: int, puzzles=(1, 2), solutions=(2, 3), title_pages=True):
	layout = sudoku_book_press.config.BandLayout(
		puzzles=sudoku_book_press.config.TileLayout(*puzzles),
		solutions=sudoku_book_press.config.TileLayout(*solutions),
	)
	return sudoku_book_press.config.build_book_config(
		bands=(band,),
		band_counts={band: count},
		band_layouts={band: layout},
		title_pages=title_pages,
	)


#============================================
def run_section(records, kind, layout, band="easy"):
	config = build_config(band, len(records))
	surface = sudoku_book_press.surface.RecordingSurface()
	policy = config.puzzle_section if kind == "puzzle" else config.solution_section
	result = sudoku_book_press.paginate.paginate_section(
		surface,
		records,
		band,
		kind,
		sudoku_book_press.config.TileLayout(*layout),
		policy,
		PAGE_SIZE,
		config,
		verbose=False,
	)
	return (surface, result)


#============================================
def grids_on_page(page: list) -> int:
	return sudoku_book_press.render.count_directives(page, "label")


#============================================
def test_even_count_fills_every_page(make_records) -> None:
	surface, result = run_section(make_records(100), "puzzle", (1, 2))
	assert result.pages == 50
	assert surface.page_number == 50
	assert all(grids_on_page(page) == 2 for page in surface.pages)


#============================================
def test_odd_count_leaves_last_slot_empty(make_records) -> None:
	surface, result = run_section(make_records(101), "puzzle", (1, 2))
	assert result.pages == 51
	assert grids_on_page(surface.pages[-1]) == 1
	assert sudoku_book_press.render.count_directives(surface.pages[-1], "line") == 20
	assert all(grids_on_page(page) == 2 for page in surface.pages[:-1])


#============================================
def test_page_footer_numbers(make_records) -> None:
	surface, result = run_section(make_records(6), "puzzle", (1, 2))
	footers = [page[-1] for page in surface.pages]
	assert [footer.text for footer in footers] == ["P1", "P2", "P3"]
	geometry = sudoku_book_press.layout.compute_page_geometry(
		PAGE_SIZE[0],
		PAGE_SIZE[1],
		sudoku_book_press.config.DEFAULT_MARGIN_MM,
		sudoku_book_press.config.TileLayout(1, 2),
		sudoku_book_press.config.PUZZLE_SECTION,
	)
	# footer font tracks the digit font at two thirds size
	digit = next(d for d in surface.pages[0] if d.kind == "digit")
	assert footers[0].font_size == pytest.approx(digit.font_size / 1.5)
	assert digit.font_size == pytest.approx(geometry.cell_side * 0.8 * sudoku_book_press.config.POINTS_PER_MM)
	assert (result.first_page, result.last_page) == (1, 3)


#============================================
def test_running_title_on_content_pages(make_records) -> None:
	surface, _result = run_section(make_records(2), "puzzle", (1, 2))
	titles = [d for d in surface.pages[0] if d.kind == "rotated_text"]
	assert len(titles) == 1
	assert titles[0].text == "Easy Sudoku - Volume #1"
	assert titles[0].angle == 90.0


#============================================
def test_band_sections_realign(make_records) -> None:
	"""
	Fifty easy puzzles: 25 puzzle pages, 9 solution pages, numbering restarts.
	"""
	records = make_records(50)
	config = build_config("easy", 50)
	surface = sudoku_book_press.surface.RecordingSurface()
	puzzle_result, solution_result = sudoku_book_press.paginate.paginate_band(
		surface,
		records,
		"easy",
		config.band_layouts["easy"],
		PAGE_SIZE,
		config,
		verbose=False,
	)
	assert puzzle_result.pages == 25
	assert solution_result.pages == 9
	assert surface.page_number == 1 + 25 + 1 + 9
	assert puzzle_result.first_page == 2
	assert solution_result.first_page == 28

	solution_pages = surface.pages[27:]
	assert grids_on_page(solution_pages[-1]) == 2
	lines = sum(sudoku_book_press.render.count_directives(page, "line") for page in solution_pages)
	digits = sum(sudoku_book_press.render.count_directives(page, "digit") for page in solution_pages)
	assert lines + digits == 50 * (20 + 81)

	labels = [d.text for page in solution_pages for d in page if d.kind == "label"]
	assert labels[0] == "Easy Sudoku - #1"
	assert labels[-1] == "Easy Sudoku - #50"
	assert len(labels) == 50


#============================================
def test_title_pages(make_records) -> None:
	config = build_config("expert", 4)
	surface = sudoku_book_press.surface.RecordingSurface()
	sudoku_book_press.paginate.paginate_band(
		surface,
		make_records(4),
		"expert",
		config.band_layouts["expert"],
		PAGE_SIZE,
		config,
		verbose=False,
	)
	puzzle_title = [d.text for d in surface.pages[0]]
	assert puzzle_title == ["Expert Sudoku - Puzzles", "Volume #1"]
	solution_title = [d.text for d in surface.pages[3]]
	assert solution_title == ["Expert Sudoku - Solutions"]


#============================================
def test_no_title_pages(make_records) -> None:
	config = build_config("easy", 4, title_pages=False)
	surface = sudoku_book_press.surface.RecordingSurface()
	sudoku_book_press.paginate.paginate_band(
		surface,
		make_records(4),
		"easy",
		config.band_layouts["easy"],
		PAGE_SIZE,
		config,
		verbose=False,
	)
	assert surface.page_number == 2 + 1


#============================================
def test_divisible_count_has_no_trailing_page(make_records) -> None:
	surface, result = run_section(make_records(12), "solution", (2, 3))
	assert result.pages == 2
	assert surface.page_number == 2
	assert all(grids_on_page(page) == 6 for page in surface.pages)


#============================================
def solution_digits_by_page_slot(records) -> list[str]:
	"""
	Collect the solution board drawn in each tile, in page order.
	"""
	surface, _result = run_section(records, "solution", (2, 3))
	boards = []
	for page in surface.pages:
		digits = [d.text for d in page if d.kind == "digit"]
		for start in range(0, len(digits), 81):
			boards.append("".join(digits[start:start + 81]))
	return boards


#============================================
def test_solution_follows_record_order(make_records) -> None:
	"""
	Solution #k is always drawn from record k of the fetched sequence.
	"""
	records = make_records(8)
	boards = solution_digits_by_page_slot(records)
	assert boards == [record.solution for record in records]

	shuffled = list(reversed(records))
	shuffled_boards = solution_digits_by_page_slot(shuffled)
	assert shuffled_boards == [record.solution for record in shuffled]
	assert shuffled_boards[0] != boards[0]


#============================================
def test_slice_larger_than_capacity_rejected(make_records) -> None:
	config = build_config("easy", 3)
	geometry = sudoku_book_press.layout.compute_page_geometry(
		PAGE_SIZE[0],
		PAGE_SIZE[1],
		config.margin,
		sudoku_book_press.config.TileLayout(1, 2),
		config.puzzle_section,
	)
	with pytest.raises(ValueError):
		sudoku_book_press.compose.compose_page(
			geometry,
			sudoku_book_press.config.TileLayout(1, 2),
			make_records(3),
			0,
			"puzzle",
			config.puzzle_section,
			"easy",
			1,
		)
