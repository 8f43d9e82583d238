"""
Book assembly: fetch band records, paginate every band, finalize the PDF.
"""

# Standard Library
import datetime
import json
import pathlib
import time
from typing import Callable

# local repo modules
import sudoku_book_press as sbp
import sudoku_book_press.board
import sudoku_book_press.compose
import sudoku_book_press.config
import sudoku_book_press.errors
import sudoku_book_press.paginate
import sudoku_book_press.surface


BookConfig = sbp.config.BookConfig
BookResult = sbp.config.BookResult
PuzzleRecord = sbp.board.PuzzleRecord
InsufficientDataError = sbp.errors.InsufficientDataError

FetchRecords = Callable[[str, int, int], list[PuzzleRecord]]


#============================================
def fetch_band_records(fetch: FetchRecords, config: BookConfig) -> dict[str, list[PuzzleRecord]]:
	"""
	Fetch each band's records once, in band order.

	Args:
		fetch: Callable taking (band, limit, offset).
		config: Book configuration.

	Returns:
		Records keyed by band.
	"""
	band_records: dict[str, list[PuzzleRecord]] = {}
	for band in config.bands:
		count = config.band_counts[band]
		offset = config.volume_policy.offset(config.volume, count)
		records = list(fetch(band, count, offset))
		if len(records) < count:
			raise InsufficientDataError(f"Band {band}: {len(records)} records, {count} requested")
		band_records[band] = records[:count]
	return band_records


#============================================
def build_output_path(config: BookConfig, timestamp: str | None = None) -> pathlib.Path:
	"""
	Build the output filename from the naming template.

	Args:
		config: Book configuration.
		timestamp: Optional fixed timestamp, defaults to now.

	Returns:
		Output PDF path.
	"""
	if timestamp is None:
		timestamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
	layout = config.band_layouts[config.bands[0]].puzzles
	stem = config.filename_template.format(
		timestamp=timestamp,
		nx=layout.nx,
		ny=layout.ny,
		label=config.label,
	)
	if len(config.bands) > 1 or config.volume > 1:
		stem += f"-vol-{config.volume}"
	return pathlib.Path(config.output_dir) / f"{stem}.pdf"


#============================================
def format_document_title(config: BookConfig) -> str:
	band = config.bands[0] if len(config.bands) == 1 else sbp.config.BAND_ANY
	return sbp.compose.format_running_title(
		config.running_title,
		band,
		config.volume,
		config.title_suffix,
	)


#============================================
def assemble_book(
	band_records: dict[str, list[PuzzleRecord]],
	config: BookConfig,
	output_path: pathlib.Path | None,
	surface=None,
	verbose: bool = True,
) -> BookResult:
	"""
	Lay out every band and finalize the document once.

	Args:
		band_records: Records keyed by band, in fetch order.
		config: Book configuration.
		output_path: Output PDF path, None for a dry run.
		surface: Optional draw surface. Defaults to a ReportlabSurface, or a
			RecordingSurface when output_path is None.
		verbose: Print progress.

	Returns:
		BookResult.
	"""
	page_size = sbp.config.page_size_mm(config.paper_size, config.orientation)
	if surface is None and output_path is None:
		surface = sbp.surface.RecordingSurface()
	elif surface is None:
		surface = sbp.surface.ReportlabSurface(page_size[0], page_size[1])
	for band in config.bands:
		if band not in band_records:
			raise InsufficientDataError(f"No records supplied for band {band}")

	for _ in range(config.front_matter_pages):
		surface.draw_page(sbp.compose.compose_front_matter_page(
			page_size[0],
			page_size[1],
			config.background_image,
		))

	sections = []
	for band in config.bands:
		if verbose:
			print(f"Band: {band} ({len(band_records[band])} puzzles)")
		sections.extend(sbp.paginate.paginate_band(
			surface,
			band_records[band],
			band,
			config.band_layouts[band],
			page_size,
			config,
			verbose=verbose,
		))

	surface.finalize(output_path, format_document_title(config))
	if verbose and output_path is not None:
		print(f"Wrote sudokus to file {output_path}")
	return BookResult(
		output_path=str(output_path) if output_path is not None else None,
		pages=surface.page_number,
		sections=sections,
	)


#============================================
def build_book(
	fetch: FetchRecords,
	config: BookConfig,
	output_path: pathlib.Path | None = None,
	dry_run: bool = False,
	verbose: bool = True,
) -> BookResult:
	"""
	Fetch records and assemble the book.

	Args:
		fetch: Callable taking (band, limit, offset).
		config: Book configuration.
		output_path: Optional output path, defaults to build_output_path().
		dry_run: Record directives instead of writing a PDF.
		verbose: Print progress.

	Returns:
		BookResult.
	"""
	start_time = time.perf_counter()
	band_records = fetch_band_records(fetch, config)
	fetch_end = time.perf_counter()
	surface = None
	if dry_run:
		surface = sbp.surface.RecordingSurface()
		output_path = None
	elif output_path is None:
		output_path = build_output_path(config)
	result = assemble_book(band_records, config, output_path, surface=surface, verbose=verbose)
	if verbose:
		print(f"Pages: {result.pages}")
		print(
			"Timing: fetch={:.2f}s layout={:.2f}s".format(
				fetch_end - start_time,
				time.perf_counter() - fetch_end,
			)
		)
	return result


#============================================
def write_manifest(manifest_path: pathlib.Path, config: BookConfig, result: BookResult) -> None:
	"""
	Write a manifest JSON file describing the book.

	Args:
		manifest_path: Output path.
		config: Book configuration.
		result: Assembly result.
	"""
	data = {
		"output": result.output_path,
		"pages": result.pages,
		"volume": config.volume,
		"paper_size": config.paper_size,
		"orientation": config.orientation,
		"margin_mm": config.margin,
		"band_counts": config.band_counts,
		"sections": [
			{
				"band": section.band,
				"kind": section.kind,
				"nx": section.layout.nx,
				"ny": section.layout.ny,
				"records": section.records,
				"pages": section.pages,
				"first_page": section.first_page,
				"last_page": section.last_page,
			}
			for section in result.sections
		],
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
