"""
Draw surfaces that execute directives.
"""

# Standard Library
import io
import pathlib

# PIP3 modules
import PIL.Image
import pypdf
import reportlab.lib.utils
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfgen.canvas

# local repo modules
import sudoku_book_press as sbp
import sudoku_book_press.config
import sudoku_book_press.errors
import sudoku_book_press.render


DrawDirective = sbp.render.DrawDirective
SurfaceError = sbp.errors.SurfaceError

POINTS_PER_MM = sbp.config.POINTS_PER_MM
DEFAULT_AUTHOR = sbp.config.DEFAULT_AUTHOR
TEXT_KINDS = ("digit", "label", "text")


#============================================
def compute_centered_baseline(center_y: float, font_name: str, font_size: float) -> float:
	"""
	Compute a baseline that centers the font's ascent-descent box.

	Args:
		center_y: Target vertical center in points.
		font_name: ReportLab font name.
		font_size: Font size in points.

	Returns:
		Baseline y in points.
	"""
	ascent = reportlab.pdfbase.pdfmetrics.getAscent(font_name) * font_size / 1000.0
	descent = reportlab.pdfbase.pdfmetrics.getDescent(font_name) * font_size / 1000.0
	return center_y - (ascent + descent) / 2.0


class RecordingSurface:
	"""
	Keep directives in memory, one list per page.
	"""

	def __init__(self) -> None:
		self.pages: list[list[DrawDirective]] = []

	@property
	def page_number(self) -> int:
		return len(self.pages)

	@property
	def directive_count(self) -> int:
		return sum(len(page) for page in self.pages)

	def draw_page(self, directives: list[DrawDirective]) -> None:
		for directive in directives:
			if directive.kind == "page":
				self.pages.append([])
				continue
			if not self.pages:
				raise ValueError(f"Directive {directive.kind} before the first page")
			self.pages[-1].append(directive)

	def finalize(self, output_path: pathlib.Path | None, title: str) -> None:
		return None


class ReportlabSurface:
	"""
	Draw directives onto a ReportLab canvas.

	Directive coordinates are millimetres from the top-left corner; the
	canvas works in points from the bottom-left corner.
	"""

	def __init__(self, page_width: float, page_height: float, author: str = DEFAULT_AUTHOR) -> None:
		self.page_width = page_width
		self.page_height = page_height
		self.author = author
		self.buffer = io.BytesIO()
		self.pdf = reportlab.pdfgen.canvas.Canvas(
			self.buffer,
			pagesize=(page_width * POINTS_PER_MM, page_height * POINTS_PER_MM),
		)
		self.pages = 0
		self.directive_count = 0
		self.image_cache: dict[str, reportlab.lib.utils.ImageReader] = {}

	@property
	def page_number(self) -> int:
		return self.pages

	def to_x(self, value: float) -> float:
		return value * POINTS_PER_MM

	def to_y(self, value: float) -> float:
		return (self.page_height - value) * POINTS_PER_MM

	def load_image(self, path: str) -> reportlab.lib.utils.ImageReader:
		image_reader = self.image_cache.get(path)
		if image_reader is None:
			image = PIL.Image.open(path)
			image.load()
			image_reader = reportlab.lib.utils.ImageReader(image)
			self.image_cache[path] = image_reader
		return image_reader

	def start_page(self) -> None:
		if self.pages > 0:
			self.pdf.showPage()
		self.pages += 1
		self.pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
		self.pdf.setFillColorRGB(0.0, 0.0, 0.0)

	def draw_line(self, directive: DrawDirective) -> None:
		self.pdf.setLineWidth(directive.line_width * POINTS_PER_MM)
		self.pdf.line(
			self.to_x(directive.x),
			self.to_y(directive.y),
			self.to_x(directive.x2),
			self.to_y(directive.y2),
		)

	def draw_text_cell(self, directive: DrawDirective) -> None:
		center_x = self.to_x(directive.x + directive.width / 2.0)
		center_y = self.to_y(directive.y + directive.height / 2.0)
		baseline = compute_centered_baseline(center_y, directive.font_name, directive.font_size)
		self.pdf.setFont(directive.font_name, directive.font_size)
		self.pdf.drawCentredString(center_x, baseline, directive.text)

	def draw_rotated_text(self, directive: DrawDirective) -> None:
		# pivot sits on the band's center line at directive.y
		self.pdf.saveState()
		self.pdf.translate(self.to_x(directive.x + directive.height / 2.0), self.to_y(directive.y))
		self.pdf.rotate(directive.angle)
		baseline = compute_centered_baseline(0.0, directive.font_name, directive.font_size)
		self.pdf.setFont(directive.font_name, directive.font_size)
		self.pdf.drawCentredString(directive.width * POINTS_PER_MM / 2.0, baseline, directive.text)
		self.pdf.restoreState()

	def draw_image(self, directive: DrawDirective) -> None:
		self.pdf.drawImage(
			self.load_image(directive.path),
			self.to_x(directive.x),
			self.to_y(directive.y + directive.height),
			width=directive.width * POINTS_PER_MM,
			height=directive.height * POINTS_PER_MM,
			mask=None,
			preserveAspectRatio=False,
			anchor="sw",
		)

	def draw_page(self, directives: list[DrawDirective]) -> None:
		"""
		Execute one page worth of directives in order.

		Args:
			directives: Directives starting with a page break.
		"""
		for directive in directives:
			if directive.kind == "page":
				self.start_page()
				continue
			if self.pages == 0:
				raise ValueError(f"Directive {directive.kind} before the first page")
			if directive.kind == "line":
				self.draw_line(directive)
			elif directive.kind in TEXT_KINDS:
				self.draw_text_cell(directive)
			elif directive.kind == "rotated_text":
				self.draw_rotated_text(directive)
			elif directive.kind == "image":
				self.draw_image(directive)
			else:
				raise ValueError(f"Unknown directive kind: {directive.kind}")
			self.directive_count += 1

	def finalize(self, output_path: pathlib.Path, title: str) -> None:
		"""
		Write the PDF with document metadata.

		The file is written next to the target and renamed into place, so a
		failed write never leaves a file under the final name.

		Args:
			output_path: Output PDF path.
			title: Document title metadata.
		"""
		self.pdf.save()
		self.buffer.seek(0)
		reader = pypdf.PdfReader(self.buffer)
		writer = pypdf.PdfWriter()
		for page in reader.pages:
			writer.add_page(page)
		writer.add_metadata({"/Title": title, "/Author": self.author})

		partial_path = output_path.with_name(output_path.name + ".part")
		try:
			output_path.parent.mkdir(parents=True, exist_ok=True)
			with partial_path.open("wb") as handle:
				writer.write(handle)
			partial_path.replace(output_path)
		except OSError as exc:
			if partial_path.exists():
				partial_path.unlink()
			raise SurfaceError(f"Could not write {output_path}: {exc}") from exc
