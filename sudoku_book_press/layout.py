"""
Page geometry for tiled sudoku grids.

All values are millimetres measured from the top-left page corner, the
convention the directive layer uses. The PDF surface flips the y axis.
"""

# Standard Library
import dataclasses

# local repo modules
import sudoku_book_press as sbp
import sudoku_book_press.config


TileLayout = sbp.config.TileLayout
SectionPolicy = sbp.config.SectionPolicy

BOARD_SIZE = sbp.config.BOARD_SIZE
GRID_FILL_RATIO = sbp.config.GRID_FILL_RATIO
THIN_LINE_DIVISOR = sbp.config.THIN_LINE_DIVISOR
THICK_LINE_DIVISOR = sbp.config.THICK_LINE_DIVISOR


@dataclasses.dataclass(frozen=True)
class PageGeometry:
	page_width: float
	page_height: float
	margin: float
	drawing_width: float
	drawing_height: float
	offset_x: float
	offset_y: float
	nx: int
	ny: int
	grid_side: float
	cell_side: float
	thin_line_width: float
	thick_line_width: float


#============================================
def compute_page_geometry(
	page_width: float,
	page_height: float,
	margin: float,
	layout: TileLayout,
	policy: SectionPolicy,
) -> PageGeometry:
	"""
	Compute the shared grid geometry for one section.

	Every tile on the page gets the same grid side, 85% of the smaller
	per-tile share of the drawing area.

	Args:
		page_width: Page width in mm.
		page_height: Page height in mm.
		margin: Margin unit in mm.
		layout: Tile counts for the section.
		policy: Section reservation constants.

	Returns:
		PageGeometry.
	"""
	if page_width <= 0.0 or page_height <= 0.0:
		raise ValueError(f"Page size must be positive, got {page_width}x{page_height}")
	if layout.nx < 1 or layout.ny < 1:
		raise ValueError(f"Tile counts must be >= 1, got {layout.nx}x{layout.ny}")
	drawing_width = page_width - policy.width_reserve * margin
	drawing_height = page_height - policy.height_reserve * margin
	if drawing_width <= 0.0 or drawing_height <= 0.0:
		raise ValueError(
			f"Margin {margin} leaves no drawing area on a {page_width:.1f}x{page_height:.1f} page"
		)
	offset_y = (page_height - drawing_height) / policy.offset_divisor
	grid_side = GRID_FILL_RATIO * min(drawing_width / layout.nx, drawing_height / layout.ny)
	return PageGeometry(
		page_width=page_width,
		page_height=page_height,
		margin=margin,
		drawing_width=drawing_width,
		drawing_height=drawing_height,
		offset_x=policy.left_reserve * margin,
		offset_y=offset_y,
		nx=layout.nx,
		ny=layout.ny,
		grid_side=grid_side,
		cell_side=grid_side / BOARD_SIZE,
		thin_line_width=grid_side / THIN_LINE_DIVISOR,
		thick_line_width=grid_side / THICK_LINE_DIVISOR,
	)


#============================================
def compute_tile_origin(geometry: PageGeometry, tile_x: int, tile_y: int) -> tuple[float, float]:
	"""
	Compute the top-left corner of a tile's grid.

	Args:
		geometry: Section geometry.
		tile_x: Tile column.
		tile_y: Tile row.

	Returns:
		Tuple of (x0, y0) in mm.
	"""
	share_width = geometry.drawing_width / geometry.nx
	share_height = geometry.drawing_height / geometry.ny
	x0 = geometry.offset_x + tile_x * share_width + (share_width - geometry.grid_side) / 2.0
	y0 = geometry.offset_y + tile_y * share_height + (share_height - geometry.grid_side) / 2.0
	return (x0, y0)


#============================================
def iter_tile_slots(layout: TileLayout) -> list[tuple[int, int]]:
	"""
	List tile slots in fill order.

	Slots fill column by column: every row of tile column 0 first.

	Args:
		layout: Tile counts.

	Returns:
		List of (tile_x, tile_y).
	"""
	slots: list[tuple[int, int]] = []
	for tile_x in range(layout.nx):
		for tile_y in range(layout.ny):
			slots.append((tile_x, tile_y))
	return slots


#============================================
def compute_page_count(count: int, capacity: int) -> int:
	"""
	Compute pages needed for a number of puzzles.

	Args:
		count: Number of puzzles.
		capacity: Puzzles per page.

	Returns:
		Page count, including a partial last page.
	"""
	if capacity < 1:
		raise ValueError(f"Capacity must be >= 1, got {capacity}")
	if count < 0:
		raise ValueError(f"Count must be >= 0, got {count}")
	pages = count // capacity
	if count % capacity != 0:
		pages += 1
	return pages
