"""
Draw directives for a single sudoku grid.
"""

# Standard Library
import dataclasses

# local repo modules
import sudoku_book_press as sbp
import sudoku_book_press.board
import sudoku_book_press.config
import sudoku_book_press.layout


PageGeometry = sbp.layout.PageGeometry
SectionPolicy = sbp.config.SectionPolicy

BOARD_SIZE = sbp.config.BOARD_SIZE
BOX_SIZE = sbp.config.BOX_SIZE
BLANK_MARKER = sbp.config.BLANK_MARKER
DIGIT_FONT_RATIO = sbp.config.DIGIT_FONT_RATIO
DIGIT_NUDGE_DIVISOR = sbp.config.DIGIT_NUDGE_DIVISOR
POINTS_PER_MM = sbp.config.POINTS_PER_MM
DEFAULT_FONT_REGULAR = sbp.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = sbp.config.DEFAULT_FONT_BOLD


@dataclasses.dataclass(frozen=True)
class DrawDirective:
	kind: str
	x: float = 0.0
	y: float = 0.0
	width: float = 0.0
	height: float = 0.0
	x2: float = 0.0
	y2: float = 0.0
	text: str = ""
	font_name: str = DEFAULT_FONT_REGULAR
	font_size: float = 0.0
	line_width: float = 0.0
	angle: float = 0.0
	path: str = ""


#============================================
def grid_line_width(index: int, geometry: PageGeometry) -> float:
	"""
	Pick the stroke width for grid line number index.

	Args:
		index: Line index 0..9.
		geometry: Section geometry.

	Returns:
		Line width in mm.
	"""
	if index % BOX_SIZE == 0:
		return geometry.thick_line_width
	return geometry.thin_line_width


#============================================
def build_grid_lines(x0: float, y0: float, geometry: PageGeometry) -> list[DrawDirective]:
	"""
	Build the ten horizontal and ten vertical grid lines.

	Each line overhangs by half its own width at both ends so thick
	borders close cleanly at the corners.

	Args:
		x0: Grid left edge in mm.
		y0: Grid top edge in mm.
		geometry: Section geometry.

	Returns:
		Line directives, horizontal lines first.
	"""
	cell = geometry.cell_side
	side = geometry.grid_side
	lines: list[DrawDirective] = []
	for ly in range(BOARD_SIZE + 1):
		width = grid_line_width(ly, geometry)
		y = y0 + cell * ly
		lines.append(DrawDirective(
			kind="line",
			x=x0 - width / 2.0,
			y=y,
			x2=x0 + side + width / 2.0,
			y2=y,
			line_width=width,
		))
	for lx in range(BOARD_SIZE + 1):
		width = grid_line_width(lx, geometry)
		x = x0 + cell * lx
		lines.append(DrawDirective(
			kind="line",
			x=x,
			y=y0 - width / 2.0,
			x2=x,
			y2=y0 + side + width / 2.0,
			line_width=width,
		))
	return lines


#============================================
def build_digit_directives(
	board: str,
	x0: float,
	y0: float,
	geometry: PageGeometry,
) -> list[DrawDirective]:
	"""
	Build one centered text cell per filled board position.

	Board offset i*9+j is drawn at column offset i and row offset j. The
	same mapping is used for clue and solution boards.

	Args:
		board: Validated 81 symbol board.
		x0: Grid left edge in mm.
		y0: Grid top edge in mm.
		geometry: Section geometry.

	Returns:
		Digit directives, blanks skipped.
	"""
	cell = geometry.cell_side
	nudge = cell / DIGIT_NUDGE_DIVISOR
	font_size = cell * DIGIT_FONT_RATIO * POINTS_PER_MM
	digits: list[DrawDirective] = []
	for i in range(BOARD_SIZE):
		for j in range(BOARD_SIZE):
			symbol = board[i * BOARD_SIZE + j]
			if symbol == BLANK_MARKER:
				continue
			digits.append(DrawDirective(
				kind="digit",
				x=x0 + cell * i,
				y=y0 + cell * j + nudge,
				width=cell,
				height=cell,
				text=symbol,
				font_name=DEFAULT_FONT_REGULAR,
				font_size=font_size,
			))
	return digits


#============================================
def build_label_directive(
	text: str,
	x0: float,
	y0: float,
	geometry: PageGeometry,
	policy: SectionPolicy,
) -> DrawDirective:
	"""
	Build the caption drawn in the band above a grid.

	Args:
		text: Caption text.
		x0: Grid left edge in mm.
		y0: Grid top edge in mm.
		geometry: Section geometry.
		policy: Section constants.

	Returns:
		Label directive.
	"""
	band_height = policy.label_band * geometry.margin
	return DrawDirective(
		kind="label",
		x=x0,
		y=y0 - band_height,
		width=geometry.grid_side,
		height=band_height,
		text=text,
		font_name=DEFAULT_FONT_BOLD,
		font_size=geometry.cell_side * policy.label_font_ratio * POINTS_PER_MM,
	)


#============================================
def build_puzzle_directives(
	board: str,
	origin: tuple[float, float],
	geometry: PageGeometry,
	policy: SectionPolicy,
	label: str,
) -> list[DrawDirective]:
	"""
	Build every directive for one grid: label, lines, then digits.

	Args:
		board: 81 symbol board string.
		origin: Grid top-left (x0, y0) in mm.
		geometry: Section geometry.
		policy: Section constants.
		label: Caption text.

	Returns:
		Ordered directives.
	"""
	sbp.board.validate_board(board)
	x0, y0 = origin
	directives = [build_label_directive(label, x0, y0, geometry, policy)]
	directives.extend(build_grid_lines(x0, y0, geometry))
	directives.extend(build_digit_directives(board, x0, y0, geometry))
	return directives


#============================================
def count_directives(directives: list[DrawDirective], kind: str) -> int:
	"""
	Count directives of one kind.

	Args:
		directives: Directive list.
		kind: Directive kind.

	Returns:
		Count.
	"""
	return sum(1 for directive in directives if directive.kind == kind)
