"""
Pagination of puzzle and solution sections.
"""

# Standard Library
import dataclasses

# local repo modules
import sudoku_book_press as sbp
import sudoku_book_press.board
import sudoku_book_press.compose
import sudoku_book_press.config
import sudoku_book_press.layout


BandLayout = sbp.config.BandLayout
BookConfig = sbp.config.BookConfig
PuzzleRecord = sbp.board.PuzzleRecord
SectionPolicy = sbp.config.SectionPolicy
SectionResult = sbp.config.SectionResult
TileLayout = sbp.config.TileLayout

PROGRESS_BAR_WIDTH = sbp.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = sbp.config.PROGRESS_UPDATE_EVERY


@dataclasses.dataclass
class PaginationCursor:
	puzzle_index: int = 0
	page_number: int = 0


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def paginate_section(
	surface,
	records: list[PuzzleRecord],
	band: str,
	kind: str,
	layout: TileLayout,
	policy: SectionPolicy,
	page_size: tuple[float, float],
	config: BookConfig,
	verbose: bool = True,
) -> SectionResult:
	"""
	Emit every content page of one section onto a surface.

	Numbering restarts at 1 for each section so solution #k always refers
	to record k of the band.

	Args:
		surface: Draw surface with draw_page() and page_number.
		records: Band records in fetch order.
		band: Difficulty band.
		kind: "puzzle" or "solution".
		layout: Tile counts for this section.
		policy: Section constants.
		page_size: Page (width, height) in mm.
		config: Book configuration.
		verbose: Print progress.

	Returns:
		SectionResult.
	"""
	page_width, page_height = page_size
	geometry = sbp.layout.compute_page_geometry(
		page_width,
		page_height,
		config.margin,
		layout,
		policy,
	)
	total = len(records)
	running_title = sbp.compose.format_running_title(
		config.running_title,
		band,
		config.volume,
		config.title_suffix,
	)
	cursor = PaginationCursor(puzzle_index=0, page_number=surface.page_number)
	first_page = cursor.page_number + 1
	directive_count = 0
	emitted_pages = 0
	prefix = f"{sbp.compose.format_band_name(band) or 'All'} {kind}s"
	while cursor.puzzle_index < total:
		page_records = records[cursor.puzzle_index:cursor.puzzle_index + layout.capacity]
		directives = sbp.compose.compose_page(
			geometry,
			layout,
			page_records,
			cursor.puzzle_index,
			kind,
			policy,
			band,
			cursor.page_number + 1,
			running_title=running_title,
			page_number_format=config.page_number_format,
			background_image=config.background_image,
		)
		surface.draw_page(directives)
		directive_count += len(directives) - 1
		emitted_pages += 1
		cursor.puzzle_index += len(page_records)
		cursor.page_number = surface.page_number
		if verbose and (emitted_pages % PROGRESS_UPDATE_EVERY == 0 or cursor.puzzle_index == total):
			print_progress(prefix, cursor.puzzle_index, total)
	if verbose and total > 0:
		print()
	return SectionResult(
		band=band,
		kind=kind,
		layout=layout,
		records=total,
		pages=emitted_pages,
		first_page=first_page,
		last_page=cursor.page_number,
		directives=directive_count,
	)


#============================================
def emit_title_page(surface, lines: list[str], page_size: tuple[float, float]) -> None:
	page_width, page_height = page_size
	surface.draw_page(sbp.compose.compose_title_page(page_width, page_height, lines))


#============================================
def paginate_band(
	surface,
	records: list[PuzzleRecord],
	band: str,
	band_layout: BandLayout,
	page_size: tuple[float, float],
	config: BookConfig,
	verbose: bool = True,
) -> list[SectionResult]:
	"""
	Emit one band: puzzle title and pages, then solution title and pages.

	The solution section starts only after every puzzle page is out, and
	uses its own tiling and geometry.

	Args:
		surface: Draw surface.
		records: Band records in fetch order.
		band: Difficulty band.
		band_layout: Puzzle and solution tilings.
		page_size: Page (width, height) in mm.
		config: Book configuration.
		verbose: Print progress.

	Returns:
		List of [puzzle SectionResult, solution SectionResult].
	"""
	results: list[SectionResult] = []
	sections = (
		("puzzle", band_layout.puzzles, config.puzzle_section),
		("solution", band_layout.solutions, config.solution_section),
	)
	for kind, layout, policy in sections:
		if config.title_pages:
			lines = [sbp.compose.format_section_title(band, kind)]
			if kind == "puzzle":
				lines.append(f"Volume #{config.volume}")
			emit_title_page(surface, lines, page_size)
		if verbose:
			pages = sbp.layout.compute_page_count(len(records), layout.capacity)
			print(f"{sbp.compose.format_section_title(band, kind)}: {len(records)} grids, "
				f"{layout.nx}x{layout.ny} per page, {pages} pages")
		result = paginate_section(
			surface,
			records,
			band,
			kind,
			layout,
			policy,
			page_size,
			config,
			verbose=verbose,
		)
		results.append(result)
	return results
