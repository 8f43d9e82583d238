"""
Page composition: tiles, captions, running titles, footers, title pages.
"""

# local repo modules
import sudoku_book_press as sbp
import sudoku_book_press.board
import sudoku_book_press.config
import sudoku_book_press.layout
import sudoku_book_press.render


DrawDirective = sbp.render.DrawDirective
PageGeometry = sbp.layout.PageGeometry
PuzzleRecord = sbp.board.PuzzleRecord
SectionPolicy = sbp.config.SectionPolicy
TileLayout = sbp.config.TileLayout

BAND_ANY = sbp.config.BAND_ANY
DEFAULT_FONT_REGULAR = sbp.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = sbp.config.DEFAULT_FONT_BOLD
DEFAULT_FONT_ITALIC = sbp.config.DEFAULT_FONT_ITALIC
SECTION_TITLE_SIZE = sbp.config.SECTION_TITLE_SIZE
RUNNING_TITLE_SIZE = sbp.config.RUNNING_TITLE_SIZE
DEFAULT_PAGE_NUMBER_FORMAT = sbp.config.DEFAULT_PAGE_NUMBER_FORMAT
DIGIT_FONT_RATIO = sbp.config.DIGIT_FONT_RATIO
PAGE_NUMBER_FONT_DIVISOR = sbp.config.PAGE_NUMBER_FONT_DIVISOR
POINTS_PER_MM = sbp.config.POINTS_PER_MM

SECTION_HEADINGS = {
	"puzzle": "Puzzles",
	"solution": "Solutions",
}


#============================================
def format_band_name(band: str) -> str:
	"""
	Title-case a band for display. The unfiltered band has no name.
	"""
	if band == BAND_ANY:
		return ""
	return band.title()


#============================================
def join_words(*parts: str) -> str:
	return " ".join(part for part in parts if part)


#============================================
def format_puzzle_label(band: str, index: int) -> str:
	"""
	Format the caption above a grid.

	Args:
		band: Difficulty band.
		index: 1-based puzzle number within the band.

	Returns:
		Caption like "Easy Sudoku - #12".
	"""
	return join_words(format_band_name(band), f"Sudoku - #{index}")


#============================================
def format_running_title(template: str, band: str, volume: int, suffix: str | None) -> str:
	"""
	Format the rotated title printed along the page edge.

	Args:
		template: Title template with {band} and {volume} fields.
		band: Difficulty band.
		volume: Volume number.
		suffix: Optional trailing text, such as a publisher name.

	Returns:
		Title text.
	"""
	title = template.format(band=format_band_name(band), volume=volume).strip()
	if suffix:
		title = f"{title} - {suffix}"
	return title


#============================================
def format_section_title(band: str, kind: str) -> str:
	return join_words(format_band_name(band), f"Sudoku - {SECTION_HEADINGS[kind]}")


#============================================
def build_background_directive(
	page_width: float,
	page_height: float,
	background_image: str | None,
) -> list[DrawDirective]:
	if not background_image:
		return []
	return [DrawDirective(
		kind="image",
		x=0.0,
		y=0.0,
		width=page_width,
		height=page_height,
		path=background_image,
	)]


#============================================
def build_running_title(
	geometry: PageGeometry,
	policy: SectionPolicy,
	title: str,
) -> DrawDirective:
	"""
	Build the running title, rotated 90 degrees along the left edge.

	The directive describes a text band of two margins starting
	title_offset margins from the left edge, running the full page height
	and reading bottom to top.

	Args:
		geometry: Section geometry.
		policy: Section constants.
		title: Title text.

	Returns:
		Rotated text directive.
	"""
	return DrawDirective(
		kind="rotated_text",
		x=policy.title_offset * geometry.margin,
		y=geometry.page_height,
		width=geometry.page_height,
		height=2.0 * geometry.margin,
		text=title,
		font_name=DEFAULT_FONT_ITALIC,
		font_size=RUNNING_TITLE_SIZE,
		angle=90.0,
	)


#============================================
def build_page_footer(
	geometry: PageGeometry,
	policy: SectionPolicy,
	page_number: int,
	page_number_format: str,
) -> DrawDirective:
	return DrawDirective(
		kind="text",
		x=0.0,
		y=geometry.page_height - policy.footer_offset * geometry.margin,
		width=geometry.page_width,
		height=2.0 * geometry.margin,
		text=page_number_format.format(page=page_number),
		font_name=DEFAULT_FONT_REGULAR,
		font_size=geometry.cell_side * DIGIT_FONT_RATIO * POINTS_PER_MM / PAGE_NUMBER_FONT_DIVISOR,
	)


#============================================
def compose_page(
	geometry: PageGeometry,
	layout: TileLayout,
	records: list[PuzzleRecord],
	first_index: int,
	kind: str,
	policy: SectionPolicy,
	band: str,
	page_number: int,
	running_title: str | None = None,
	page_number_format: str = DEFAULT_PAGE_NUMBER_FORMAT,
	background_image: str | None = None,
) -> list[DrawDirective]:
	"""
	Compose one content page of tiled grids.

	A slice shorter than the tile capacity leaves the trailing slots empty.

	Args:
		geometry: Section geometry.
		layout: Tile counts.
		records: Up to nx*ny records for this page.
		first_index: 0-based band index of records[0].
		kind: "puzzle" or "solution", selects the board drawn.
		policy: Section constants.
		band: Difficulty band for captions.
		page_number: Document page number printed in the footer.
		running_title: Optional rotated title text.
		page_number_format: Footer template with a {page} field.
		background_image: Optional full-page image path.

	Returns:
		Directives for the page, starting with a page break.
	"""
	if len(records) > layout.capacity:
		raise ValueError(f"{len(records)} records exceed page capacity {layout.capacity}")
	directives = [DrawDirective(kind="page", width=geometry.page_width, height=geometry.page_height)]
	directives.extend(build_background_directive(
		geometry.page_width,
		geometry.page_height,
		background_image,
	))
	if policy.running_title and running_title:
		directives.append(build_running_title(geometry, policy, running_title))
	for offset, (slot, record) in enumerate(zip(sbp.layout.iter_tile_slots(layout), records)):
		origin = sbp.layout.compute_tile_origin(geometry, slot[0], slot[1])
		label = format_puzzle_label(band, first_index + offset + 1)
		directives.extend(sbp.render.build_puzzle_directives(
			record.board_for(kind),
			origin,
			geometry,
			policy,
			label,
		))
	directives.append(build_page_footer(geometry, policy, page_number, page_number_format))
	return directives


#============================================
def compose_title_page(
	page_width: float,
	page_height: float,
	lines: list[str],
) -> list[DrawDirective]:
	"""
	Compose a section title page with centered lines.

	Args:
		page_width: Page width in mm.
		page_height: Page height in mm.
		lines: Title lines, first line centered on the page.

	Returns:
		Directives for the page.
	"""
	directives = [DrawDirective(kind="page", width=page_width, height=page_height)]
	line_height = 1.5 * SECTION_TITLE_SIZE / POINTS_PER_MM
	for index, line in enumerate(lines):
		directives.append(DrawDirective(
			kind="text",
			x=0.0,
			y=index * line_height,
			width=page_width,
			height=page_height,
			text=line,
			font_name=DEFAULT_FONT_BOLD,
			font_size=SECTION_TITLE_SIZE,
		))
	return directives


#============================================
def compose_front_matter_page(
	page_width: float,
	page_height: float,
	background_image: str | None = None,
) -> list[DrawDirective]:
	directives = [DrawDirective(kind="page", width=page_width, height=page_height)]
	directives.extend(build_background_directive(page_width, page_height, background_image))
	return directives
