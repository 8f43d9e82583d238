"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.pagesizes
import reportlab.lib.units


POINTS_PER_MM = reportlab.lib.units.mm
BOARD_SIZE = 9
BOARD_CELLS = BOARD_SIZE * BOARD_SIZE
BOX_SIZE = 3
BLANK_MARKER = "."
DIGITS = "123456789"

GRID_FILL_RATIO = 0.85
THIN_LINE_DIVISOR = 300.0
THICK_LINE_DIVISOR = 120.0
DIGIT_NUDGE_DIVISOR = 20.0
DIGIT_FONT_RATIO = 0.8

DEFAULT_MARGIN_MM = 6.0
DEFAULT_PAPER_SIZE = "Letter"
DEFAULT_ORIENTATION = "P"
DEFAULT_COUNT = 100
DEFAULT_VOLUME = 1

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
DEFAULT_FONT_ITALIC = "Helvetica-Oblique"
DEFAULT_FONT_BOLD_ITALIC = "Helvetica-BoldOblique"
SECTION_TITLE_SIZE = 24.0
RUNNING_TITLE_SIZE = 10.0
PAGE_NUMBER_FONT_DIVISOR = 1.5
PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 5

DEFAULT_RUNNING_TITLE = "{band} Sudoku - Volume #{volume}"
DEFAULT_PAGE_NUMBER_FORMAT = "P{page}"
DEFAULT_FILENAME_TEMPLATE = "sudokus-{timestamp}-{nx}x{ny}-{label}"
DEFAULT_OUTPUT_DIR = "sudokus"
DEFAULT_AUTHOR = "sudoku_book_press"

BAND_ANY = "any"
BANDS = ("simple", "easy", "intermediate", "expert")
VALID_BANDS = BANDS + (BAND_ANY,)
PAPER_SIZES = {
	"A4": reportlab.lib.pagesizes.A4,
	"A5": reportlab.lib.pagesizes.A5,
	"Letter": reportlab.lib.pagesizes.letter,
}
ORIENTATIONS = ("P", "L")

MIX_MULTIPLIER = 50
MIX_BASE_SIZES = {
	"simple": 1,
	"easy": 1,
	"intermediate": 3,
	"expert": 6,
}


@dataclasses.dataclass(frozen=True)
class TileLayout:
	nx: int
	ny: int

	@property
	def capacity(self) -> int:
		return self.nx * self.ny


@dataclasses.dataclass(frozen=True)
class BandLayout:
	puzzles: TileLayout
	solutions: TileLayout


@dataclasses.dataclass(frozen=True)
class SectionPolicy:
	kind: str
	width_reserve: float
	height_reserve: float
	left_reserve: float
	offset_divisor: float
	label_band: float
	label_font_ratio: float
	footer_offset: float
	running_title: bool
	title_offset: float


PUZZLE_SECTION = SectionPolicy(
	kind="puzzle",
	width_reserve=5.0,
	height_reserve=6.0,
	left_reserve=3.0,
	offset_divisor=2.0,
	label_band=2.0,
	label_font_ratio=0.7,
	footer_offset=3.0,
	running_title=True,
	title_offset=2.5,
)

SOLUTION_SECTION = SectionPolicy(
	kind="solution",
	width_reserve=6.0,
	height_reserve=5.0,
	left_reserve=4.0,
	offset_divisor=2.5,
	label_band=1.0,
	label_font_ratio=0.7,
	footer_offset=3.0,
	running_title=True,
	title_offset=3.0,
)


@dataclasses.dataclass(frozen=True)
class VolumePolicy:
	"""
	Record range selection for numbered volumes.

	Volume N starts at (N - 1) * records_per_volume. When records_per_volume
	is None the band's requested count is used as the stride.
	"""
	records_per_volume: int | None = None

	def offset(self, volume: int, count: int) -> int:
		if volume < 1:
			raise ValueError(f"Volume must be >= 1, got {volume}")
		stride = count if self.records_per_volume is None else self.records_per_volume
		return (volume - 1) * stride


@dataclasses.dataclass
class BookConfig:
	paper_size: str
	orientation: str
	margin: float
	bands: tuple[str, ...]
	band_layouts: dict[str, BandLayout]
	band_counts: dict[str, int]
	volume: int
	volume_policy: VolumePolicy
	running_title: str
	title_suffix: str | None
	page_number_format: str
	front_matter_pages: int
	background_image: str | None
	title_pages: bool
	output_dir: str
	filename_template: str
	label: str
	puzzle_section: SectionPolicy = PUZZLE_SECTION
	solution_section: SectionPolicy = SOLUTION_SECTION


@dataclasses.dataclass
class SectionResult:
	band: str
	kind: str
	layout: TileLayout
	records: int
	pages: int
	first_page: int
	last_page: int
	directives: int


@dataclasses.dataclass
class BookResult:
	output_path: str | None
	pages: int
	sections: list[SectionResult]


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimetres to points.

	Args:
		value: Millimetre value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_MM


#============================================
def page_size_mm(paper_size: str, orientation: str) -> tuple[float, float]:
	"""
	Look up a page size in millimetres.

	Args:
		paper_size: One of A4, A5, Letter (case-insensitive).
		orientation: P for portrait, L for landscape.

	Returns:
		Tuple of (width, height) in millimetres.
	"""
	key = normalize_paper_size(paper_size)
	orient = orientation.strip().upper()
	if orient not in ORIENTATIONS:
		raise ValueError(f"Invalid orientation: {orientation}")
	size = PAPER_SIZES[key]
	if orient == "L":
		size = reportlab.lib.pagesizes.landscape(size)
	else:
		size = reportlab.lib.pagesizes.portrait(size)
	return (size[0] / POINTS_PER_MM, size[1] / POINTS_PER_MM)


#============================================
def normalize_paper_size(value: str) -> str:
	"""
	Normalize a paper size name to its canonical spelling.

	Args:
		value: Paper size name.

	Returns:
		Canonical name from PAPER_SIZES.
	"""
	for name in PAPER_SIZES:
		if name.lower() == value.strip().lower():
			return name
	raise ValueError(f"Invalid paper size: {value}")


#============================================
def normalize_band(value: str) -> str:
	"""
	Normalize a difficulty band name.

	Args:
		value: Band name.

	Returns:
		Lower case band name.
	"""
	band = value.strip().lower()
	if band not in VALID_BANDS:
		raise ValueError(f"Invalid difficulty value: {value}")
	return band


#============================================
def default_band_layout(orientation: str) -> BandLayout:
	"""
	Build the default puzzle and solution tilings for an orientation.

	Args:
		orientation: P for portrait, L for landscape.

	Returns:
		BandLayout.
	"""
	if orientation.strip().upper() == "L":
		return BandLayout(puzzles=TileLayout(2, 1), solutions=TileLayout(3, 2))
	return BandLayout(puzzles=TileLayout(1, 2), solutions=TileLayout(2, 3))


#============================================
def build_book_config(
	bands: tuple[str, ...] = (BAND_ANY,),
	band_counts: dict[str, int] | None = None,
	paper_size: str = DEFAULT_PAPER_SIZE,
	orientation: str = DEFAULT_ORIENTATION,
	margin: float = DEFAULT_MARGIN_MM,
	band_layouts: dict[str, BandLayout] | None = None,
	volume: int = DEFAULT_VOLUME,
	records_per_volume: int | None = None,
	title_suffix: str | None = None,
	front_matter_pages: int = 0,
	background_image: str | None = None,
	title_pages: bool = True,
	output_dir: str = DEFAULT_OUTPUT_DIR,
	label: str | None = None,
) -> BookConfig:
	"""
	Build a BookConfig with defaults filled in.

	Args:
		bands: Band order.
		band_counts: Records requested per band.
		paper_size: Paper size name.
		orientation: P or L.
		margin: Margin in millimetres.
		band_layouts: Optional per-band tilings.
		volume: Volume number (1-based).
		records_per_volume: Optional volume stride.
		title_suffix: Optional text appended to the running title.
		front_matter_pages: Number of blank leading pages.
		background_image: Optional image painted under content pages.
		title_pages: Whether section title pages are emitted.
		output_dir: Output directory.
		label: Filename label, defaults to the band or "mix".

	Returns:
		BookConfig.
	"""
	bands = tuple(normalize_band(band) for band in bands)
	if not bands:
		raise ValueError("At least one band is required")
	orient = orientation.strip().upper()
	if orient not in ORIENTATIONS:
		raise ValueError(f"Invalid orientation: {orientation}")
	if margin <= 0.0:
		raise ValueError(f"Margin must be positive, got {margin}")
	if volume < 1:
		raise ValueError(f"Volume must be >= 1, got {volume}")
	if records_per_volume is not None and records_per_volume < 1:
		raise ValueError(f"Records per volume must be >= 1, got {records_per_volume}")
	if band_counts is None:
		band_counts = {band: DEFAULT_COUNT for band in bands}
	layouts: dict[str, BandLayout] = {}
	for band in bands:
		if band_layouts is not None and band in band_layouts:
			layouts[band] = band_layouts[band]
		else:
			layouts[band] = default_band_layout(orient)
		for tile_layout in (layouts[band].puzzles, layouts[band].solutions):
			if tile_layout.nx < 1 or tile_layout.ny < 1:
				raise ValueError(f"Tile counts must be >= 1 for band {band}")
		if band_counts.get(band, 0) < 1:
			raise ValueError(f"Record count must be >= 1 for band {band}")
	if label is None:
		label = bands[0] if len(bands) == 1 else "mix"
	return BookConfig(
		paper_size=normalize_paper_size(paper_size),
		orientation=orient,
		margin=margin,
		bands=bands,
		band_layouts=layouts,
		band_counts=dict(band_counts),
		volume=volume,
		volume_policy=VolumePolicy(records_per_volume),
		running_title=DEFAULT_RUNNING_TITLE,
		title_suffix=title_suffix,
		page_number_format=DEFAULT_PAGE_NUMBER_FORMAT,
		front_matter_pages=front_matter_pages,
		background_image=background_image,
		title_pages=title_pages,
		output_dir=output_dir,
		filename_template=DEFAULT_FILENAME_TEMPLATE,
		label=label,
	)


#============================================
def build_mix_config(volume: int = DEFAULT_VOLUME, **kwargs) -> BookConfig:
	"""
	Build the mixed-band book configuration.

	Args:
		volume: Volume number (1-based).
		**kwargs: Extra build_book_config overrides.

	Returns:
		BookConfig covering all four bands.
	"""
	band_counts = {band: MIX_BASE_SIZES[band] * MIX_MULTIPLIER for band in BANDS}
	return build_book_config(
		bands=BANDS,
		band_counts=band_counts,
		volume=volume,
		label="mix",
		**kwargs,
	)
