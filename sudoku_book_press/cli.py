"""
CLI entry point for building sudoku puzzle books.
"""

# Standard Library
import argparse
import pathlib
import sys

# local repo modules
import sudoku_book_press as sbp
import sudoku_book_press.assemble
import sudoku_book_press.config
import sudoku_book_press.errors
import sudoku_book_press.source


BandLayout = sbp.config.BandLayout
BookConfig = sbp.config.BookConfig
TileLayout = sbp.config.TileLayout

BOOK_ERRORS = (
	sbp.errors.InputShapeError,
	sbp.errors.InsufficientDataError,
	sbp.errors.SurfaceError,
)


#============================================
def parse_tiles(value: str) -> TileLayout:
	"""
	Parse an "NXxNY" tiling such as "2x3".

	Args:
		value: Tiling text.

	Returns:
		TileLayout.
	"""
	parts = value.lower().split("x")
	if len(parts) != 2 or not parts[0].isdigit() or not parts[1].isdigit():
		raise argparse.ArgumentTypeError(f"Expected tiles like 2x3, got {value!r}")
	layout = TileLayout(int(parts[0]), int(parts[1]))
	if layout.nx < 1 or layout.ny < 1:
		raise argparse.ArgumentTypeError(f"Tile counts must be >= 1, got {value!r}")
	return layout


#============================================
def build_config(args: argparse.Namespace) -> BookConfig:
	"""
	Build book config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		BookConfig.
	"""
	band_layouts = None
	if args.puzzle_tiles is not None or args.solution_tiles is not None:
		default = sbp.config.default_band_layout(args.orientation)
		layout = BandLayout(
			puzzles=args.puzzle_tiles or default.puzzles,
			solutions=args.solution_tiles or default.solutions,
		)
		bands = sbp.config.BANDS if args.mix else (args.difficulty,)
		band_layouts = {sbp.config.normalize_band(band): layout for band in bands}
	options = {
		"paper_size": args.paper_size,
		"orientation": args.orientation,
		"margin": args.margin,
		"band_layouts": band_layouts,
		"records_per_volume": args.records_per_volume,
		"title_suffix": args.title_suffix,
		"front_matter_pages": args.front_matter,
		"background_image": args.background,
		"title_pages": args.title_pages,
		"output_dir": args.output_dir,
	}
	if args.mix:
		return sbp.config.build_mix_config(volume=args.volume, **options)
	return sbp.config.build_book_config(
		bands=(args.difficulty,),
		band_counts={sbp.config.normalize_band(args.difficulty): args.count},
		volume=args.volume,
		**options,
	)


#============================================
def build_fetch(args: argparse.Namespace) -> sbp.assemble.FetchRecords:
	"""
	Build the record fetcher for the selected source.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Callable taking (band, limit, offset).
	"""
	if args.records_path is not None:
		records = sbp.source.load_records_file(
			pathlib.Path(args.records_path),
			pathlib.Path(args.solutions_path) if args.solutions_path else None,
		)
		print(f"Records loaded: {len(records)}")

		def fetch_file(band: str, limit: int, offset: int) -> list:
			return records[offset:offset + limit]

		return fetch_file

	if args.generate:
		def fetch_generated(band: str, limit: int, offset: int) -> list:
			print(f"Generating {limit} {band} Sudokus")
			generated = sbp.source.generate_records(limit, band, command=args.qqwing)
			if args.db_path is not None:
				conn = sbp.source.connect_store(pathlib.Path(args.db_path))
				try:
					inserted = sbp.source.store_records(conn, band, generated)
				finally:
					conn.close()
				print(f"Stored {inserted} new {band} records")
			return generated

		return fetch_generated

	def fetch_store(band: str, limit: int, offset: int) -> list:
		conn = sbp.source.connect_store(pathlib.Path(args.db_path))
		try:
			return sbp.source.fetch_records(conn, band, limit, offset)
		finally:
			conn.close()

	return fetch_store


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Build printable sudoku puzzle books.")

	source_group = parser.add_argument_group("Source")
	source_group.add_argument("-r", "--records", dest="records_path", default=None, help="Record file, board and solution per line.")
	source_group.add_argument("-s", "--solutions", dest="solutions_path", default=None, help="Solutions file matching a board-only --records file.")
	source_group.add_argument("-b", "--db", dest="db_path", default=None, help="sqlite puzzle store path.")
	source_group.add_argument("-g", "--generate", dest="generate", action="store_true", help="Generate puzzles with qqwing.")
	source_group.add_argument("--qqwing", dest="qqwing", default=sbp.source.QQWING_COMMAND, help="qqwing executable.")

	book_group = parser.add_argument_group("Book")
	book_group.add_argument("-d", "--difficulty", dest="difficulty", type=sbp.config.normalize_band, default=sbp.config.BAND_ANY, help="One of simple, easy, intermediate, expert, any.")
	book_group.add_argument("-m", "--mix", dest="mix", action="store_true", help="Build the four-band mixed book.")
	book_group.add_argument("-n", "--count", dest="count", type=int, default=sbp.config.DEFAULT_COUNT, help="Number of puzzles.")
	book_group.add_argument("-v", "--volume", dest="volume", type=int, default=sbp.config.DEFAULT_VOLUME, help="Volume number.")
	book_group.add_argument("--records-per-volume", dest="records_per_volume", type=int, default=None, help="Record stride between volumes.")
	book_group.add_argument("--title-suffix", dest="title_suffix", default=None, help="Text appended to the running title.")
	book_group.add_argument("--front-matter", dest="front_matter", type=int, default=0, help="Blank leading pages.")
	book_group.add_argument("--background", dest="background", default=None, help="Background image for content pages.")
	book_group.add_argument("-T", "--no-title-pages", dest="title_pages", action="store_false", help="Skip section title pages.")

	page_group = parser.add_argument_group("Page")
	page_group.add_argument("-p", "--paper-size", dest="paper_size", default=sbp.config.DEFAULT_PAPER_SIZE, help="One of A4, A5, Letter.")
	page_group.add_argument("-o", "--orientation", dest="orientation", default=sbp.config.DEFAULT_ORIENTATION, choices=("P", "L", "p", "l"), help="P for portrait, L for landscape.")
	page_group.add_argument("--margin", dest="margin", type=float, default=sbp.config.DEFAULT_MARGIN_MM, help="Margin unit in mm.")
	page_group.add_argument("--puzzle-tiles", dest="puzzle_tiles", type=parse_tiles, default=None, help="Puzzle tiling, e.g. 1x2.")
	page_group.add_argument("--solution-tiles", dest="solution_tiles", type=parse_tiles, default=None, help="Solution tiling, e.g. 2x3.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("--output", dest="output_path", default=None, help="Output PDF path.")
	output_group.add_argument("--output-dir", dest="output_dir", default=sbp.config.DEFAULT_OUTPUT_DIR, help="Directory for generated filenames.")
	output_group.add_argument("--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("--dry-run", dest="dry_run", action="store_true", help="Lay out pages without writing a PDF.")

	parser.set_defaults(title_pages=True, generate=False, mix=False, dry_run=False)
	args = parser.parse_args(argv)

	if args.records_path is None and args.db_path is None and not args.generate:
		parser.error("one of --records, --db or --generate is required")
	if args.records_path is not None and args.mix:
		parser.error("--records holds a single band and cannot build --mix")
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> int:
	"""
	Run the book build.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Process exit status.
	"""
	config = build_config(args)
	print("Sudoku book pipeline")
	print(f"Bands: {', '.join(config.bands)}")
	print(f"Paper: {config.paper_size} {config.orientation}, margin {config.margin} mm")
	print(f"Volume: {config.volume}")
	output_path = pathlib.Path(args.output_path) if args.output_path else None

	try:
		result = sbp.assemble.build_book(
			build_fetch(args),
			config,
			output_path=output_path,
			dry_run=args.dry_run,
		)
	except BOOK_ERRORS as exc:
		print(f"Build failed: {exc}")
		return 1

	for section in result.sections:
		print(
			f"{section.band} {section.kind}s: {section.records} grids on pages "
			f"{section.first_page}-{section.last_page}"
		)
		if args.dry_run:
			print(f"  directives: {section.directives}")
	if result.output_path is not None:
		manifest_path = args.manifest_path or f"{result.output_path}.json"
		sbp.assemble.write_manifest(pathlib.Path(manifest_path), config, result)
		print(f"Manifest written: {manifest_path}")
	return 0


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	sys.exit(run_pipeline(args))
