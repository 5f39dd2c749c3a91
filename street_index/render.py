"""
PDF rendering: the printed street index and the grid overlay.
"""

# Standard Library
import dataclasses
import io
import json
import pathlib

# PIP3 modules
import pypdf
import reportlab.lib.pagesizes
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfgen.canvas

# local repo modules
import street_index as sidx
import street_index.column_label
import street_index.config
import street_index.grid
import street_index.roads


BoundingBox = sidx.config.BoundingBox
GridConfig = sidx.config.GridConfig
IndexPageConfig = sidx.config.IndexPageConfig
IndexResult = sidx.config.IndexResult
ProcessedRoad = sidx.roads.ProcessedRoad
UnprocessedRoad = sidx.roads.UnprocessedRoad

column_label = sidx.column_label.column_label
grid_dimensions = sidx.grid.grid_dimensions
mm_to_points = sidx.config.mm_to_points

RIGHT_TO_LEFT = sidx.config.RIGHT_TO_LEFT
BOTTOM_TO_TOP = sidx.config.BOTTOM_TO_TOP
DEFAULT_FONT_REGULAR = sidx.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = sidx.config.DEFAULT_FONT_BOLD
DEFAULT_LEADING_FACTOR = sidx.config.DEFAULT_LEADING_FACTOR
MANUAL_REVIEW_HEADING = sidx.config.MANUAL_REVIEW_HEADING
GRID_LINE_WIDTH = sidx.config.GRID_LINE_WIDTH
GRID_LABEL_SIZE = sidx.config.GRID_LABEL_SIZE
GRID_LABEL_MARGIN = sidx.config.GRID_LABEL_MARGIN
ELLIPSIS = "..."


@dataclasses.dataclass
class FlowCursor:
	page: int
	column: int
	y: float


#============================================
def default_page_config() -> IndexPageConfig:
	"""
	Build an index page config for US letter.

	Returns:
		IndexPageConfig.
	"""
	page_width, page_height = reportlab.lib.pagesizes.letter
	return IndexPageConfig(page_width=page_width, page_height=page_height)


#============================================
def fit_text(text: str, font_name: str, font_size: float, max_width: float) -> str:
	"""
	Shorten text with an ellipsis until it fits the width.

	Args:
		text: Input text.
		font_name: ReportLab font name.
		font_size: Font size in points.
		max_width: Available width in points.

	Returns:
		Text that fits, possibly shortened.
	"""
	string_width = reportlab.pdfbase.pdfmetrics.stringWidth
	if string_width(text, font_name, font_size) <= max_width:
		return text
	shortened = text
	while shortened:
		shortened = shortened[:-1]
		candidate = shortened.rstrip() + ELLIPSIS
		if string_width(candidate, font_name, font_size) <= max_width:
			return candidate
	return ""


#============================================
def compute_column_width(page_config: IndexPageConfig) -> float:
	usable_width = page_config.page_width - 2.0 * page_config.margin
	gaps = page_config.column_gap * (page_config.columns - 1)
	return (usable_width - gaps) / page_config.columns


#============================================
def column_left(page_config: IndexPageConfig, column: int) -> float:
	column_width = compute_column_width(page_config)
	return page_config.margin + column * (column_width + page_config.column_gap)


#============================================
def column_top(page_config: IndexPageConfig, page: int) -> float:
	"""
	Top y of the index columns; the first page leaves room for the title.
	"""
	top = page_config.page_height - page_config.margin
	if page == 1 and page_config.title:
		top -= page_config.title_size * 2.0
	return top


#============================================
def start_index_page(
	pdf: reportlab.pdfgen.canvas.Canvas,
	page_config: IndexPageConfig,
	cursor: FlowCursor,
) -> None:
	"""
	Reset the cursor to the top of the current page, drawing the title on
	the first page.

	Args:
		pdf: ReportLab canvas.
		page_config: Index page configuration.
		cursor: Flow cursor to reset.
	"""
	if cursor.page == 1 and page_config.title:
		top = page_config.page_height - page_config.margin
		pdf.setFont(DEFAULT_FONT_BOLD, page_config.title_size)
		pdf.drawString(page_config.margin, top - page_config.title_size, page_config.title)
	cursor.column = 0
	cursor.y = column_top(page_config, cursor.page)


#============================================
def advance_line(
	pdf: reportlab.pdfgen.canvas.Canvas,
	page_config: IndexPageConfig,
	cursor: FlowCursor,
	leading: float,
) -> None:
	"""
	Move the cursor down one line, wrapping to the next column or page.

	Args:
		pdf: ReportLab canvas.
		page_config: Index page configuration.
		cursor: Flow cursor.
		leading: Line height in points.
	"""
	if cursor.y - leading >= page_config.margin:
		cursor.y -= leading
		return
	if cursor.column + 1 < page_config.columns:
		cursor.column += 1
		cursor.y = column_top(page_config, cursor.page) - leading
		return
	pdf.showPage()
	cursor.page += 1
	start_index_page(pdf, page_config, cursor)
	cursor.y -= leading


#============================================
def draw_index_row(
	pdf: reportlab.pdfgen.canvas.Canvas,
	page_config: IndexPageConfig,
	cursor: FlowCursor,
	name: str,
	reference: str,
) -> None:
	"""
	Draw one index row: street name on the left, reference on the right.

	Args:
		pdf: ReportLab canvas.
		page_config: Index page configuration.
		cursor: Flow cursor, already advanced to the row baseline.
		name: Street name.
		reference: Grid reference text.
	"""
	font_size = page_config.text_size
	column_width = compute_column_width(page_config)
	left = column_left(page_config, cursor.column)
	right = left + column_width
	reference_width = reportlab.pdfbase.pdfmetrics.stringWidth(
		reference,
		DEFAULT_FONT_REGULAR,
		font_size,
	)
	name_width = max(0.0, column_width - reference_width - font_size)
	pdf.setFont(DEFAULT_FONT_REGULAR, font_size)
	pdf.drawString(left, cursor.y, fit_text(name, DEFAULT_FONT_REGULAR, font_size, name_width))
	pdf.drawRightString(right, cursor.y, reference)


#============================================
def draw_heading(
	pdf: reportlab.pdfgen.canvas.Canvas,
	page_config: IndexPageConfig,
	cursor: FlowCursor,
	text: str,
) -> None:
	left = column_left(page_config, cursor.column)
	pdf.setFont(DEFAULT_FONT_BOLD, page_config.heading_size)
	pdf.drawString(left, cursor.y, text)


#============================================
def wrap_references(
	references: list[str],
	font_size: float,
	max_width: float,
) -> list[str]:
	"""
	Wrap a list of grid references into lines that fit the column.

	Args:
		references: Grid reference strings.
		font_size: Font size in points.
		max_width: Available width in points.

	Returns:
		List of lines.
	"""
	lines: list[str] = []
	current = ""
	for reference in references:
		candidate = reference if not current else f"{current}, {reference}"
		width = reportlab.pdfbase.pdfmetrics.stringWidth(candidate, DEFAULT_FONT_REGULAR, font_size)
		if current and width > max_width:
			lines.append(current + ",")
			current = reference
		else:
			current = candidate
	if current:
		lines.append(current)
	return lines


#============================================
def render_index_pdf(
	processed: list[ProcessedRoad],
	unprocessed: list[UnprocessedRoad],
	output_path: pathlib.Path,
	page_config: IndexPageConfig | None = None,
) -> IndexResult:
	"""
	Render the printable street index.

	Processed roads flow through the index columns first; roads touching
	three or more cells follow under a manual review heading with every
	reference listed.

	Args:
		processed: Roads with one or two references.
		unprocessed: Roads needing manual review.
		output_path: Output PDF path.
		page_config: Index page configuration, defaults to US letter.

	Returns:
		IndexResult.
	"""
	if page_config is None:
		page_config = default_page_config()
	pdf = reportlab.pdfgen.canvas.Canvas(
		str(output_path),
		pagesize=(page_config.page_width, page_config.page_height),
	)
	leading = page_config.text_size * DEFAULT_LEADING_FACTOR
	cursor = FlowCursor(page=1, column=0, y=0.0)
	start_index_page(pdf, page_config, cursor)

	for road in processed:
		advance_line(pdf, page_config, cursor, leading)
		draw_index_row(pdf, page_config, cursor, road.name, str(road.position))

	if unprocessed:
		heading_leading = page_config.heading_size * DEFAULT_LEADING_FACTOR
		if processed:
			advance_line(pdf, page_config, cursor, leading)
		advance_line(pdf, page_config, cursor, heading_leading)
		draw_heading(pdf, page_config, cursor, MANUAL_REVIEW_HEADING)
		column_width = compute_column_width(page_config)
		indent = page_config.text_size
		for road in unprocessed:
			advance_line(pdf, page_config, cursor, leading)
			draw_index_row(pdf, page_config, cursor, road.name, "")
			references = [str(position) for position in road.positions]
			for line in wrap_references(references, page_config.text_size, column_width - indent):
				advance_line(pdf, page_config, cursor, leading)
				left = column_left(page_config, cursor.column)
				pdf.setFont(DEFAULT_FONT_REGULAR, page_config.text_size)
				pdf.drawString(left + indent, cursor.y, line)

	pdf.save()
	return IndexResult(
		processed_roads=len(processed),
		unprocessed_roads=len(unprocessed),
		pages=cursor.page,
	)


#============================================
def compute_cell_span(
	index: int,
	cell_size: float,
	extent: float,
	reversed_axis: bool,
) -> tuple[float, float]:
	"""
	Compute where a cell sits on the page along one axis.

	Args:
		index: Zero-based cell index along the axis.
		cell_size: Cell size in millimeters.
		extent: Page size along the axis in millimeters.
		reversed_axis: Whether the grid counts from the far edge.

	Returns:
		Tuple of (start, end) in millimeters from the near page edge.
	"""
	start = index * cell_size
	end = min(extent, start + cell_size)
	if reversed_axis:
		start, end = (max(0.0, extent - end), extent - start)
	return (start, end)


#============================================
def draw_grid(
	pdf: reportlab.pdfgen.canvas.Canvas,
	bbox: BoundingBox,
	config: GridConfig,
) -> None:
	"""
	Draw grid cell outlines plus column letters along the top and row
	numbers down the left.

	Args:
		pdf: ReportLab canvas sized to the page bounding box.
		bbox: Page bounding box.
		config: Grid configuration.
	"""
	page_height = mm_to_points(bbox.height)
	columns, rows = grid_dimensions(bbox, config)
	column_reversed = config.column_direction == RIGHT_TO_LEFT
	row_reversed = config.row_direction == BOTTOM_TO_TOP
	pdf.setLineWidth(GRID_LINE_WIDTH)
	pdf.setStrokeColorRGB(0.5, 0.5, 0.5)
	pdf.setFillColorRGB(0.3, 0.3, 0.3)
	pdf.setFont(DEFAULT_FONT_BOLD, GRID_LABEL_SIZE)

	for col in range(columns):
		x0_mm, x1_mm = compute_cell_span(col, config.cell_width, bbox.width, column_reversed)
		x0 = mm_to_points(x0_mm)
		x1 = mm_to_points(x1_mm)
		for row in range(rows):
			top_mm, bottom_mm = compute_cell_span(row, config.cell_height, bbox.height, row_reversed)
			y0 = page_height - mm_to_points(bottom_mm)
			y1 = page_height - mm_to_points(top_mm)
			pdf.rect(x0, y0, x1 - x0, y1 - y0, stroke=1, fill=0)
			if top_mm == 0.0:
				text = column_label(col + config.column_offset)
				pdf.drawCentredString((x0 + x1) / 2.0, y1 - GRID_LABEL_SIZE - GRID_LABEL_MARGIN, text)
			if x0_mm == 0.0:
				text = str(row + 1 + config.row_offset)
				pdf.drawString(x0 + GRID_LABEL_MARGIN, (y0 + y1) / 2.0 - GRID_LABEL_SIZE / 2.0, text)


#============================================
def render_grid_overlay_pdf(
	bbox: BoundingBox,
	config: GridConfig,
	output_path: pathlib.Path,
) -> None:
	"""
	Render the grid alone on a page the size of the map.

	Args:
		bbox: Page bounding box.
		config: Grid configuration.
		output_path: Output PDF path.
	"""
	page_size = (mm_to_points(bbox.width), mm_to_points(bbox.height))
	pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=page_size)
	draw_grid(pdf, bbox, config)
	pdf.save()


#============================================
def build_grid_overlay_page(bbox: BoundingBox, config: GridConfig) -> pypdf.PageObject:
	"""
	Build a PDF page object holding only the grid.

	Args:
		bbox: Page bounding box.
		config: Grid configuration.

	Returns:
		PDF page object.
	"""
	buffer = io.BytesIO()
	page_size = (mm_to_points(bbox.width), mm_to_points(bbox.height))
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=page_size)
	draw_grid(pdf, bbox, config)
	pdf.save()
	buffer.seek(0)
	reader = pypdf.PdfReader(buffer)
	return reader.pages[0]


#============================================
def overlay_grid_on_map(
	map_path: pathlib.Path,
	bbox: BoundingBox,
	config: GridConfig,
	output_path: pathlib.Path,
) -> int:
	"""
	Merge the grid onto the first page of a map PDF.

	The overlay is scaled to the map page's media box; later pages are
	copied unchanged.

	Args:
		map_path: Input map PDF.
		bbox: Page bounding box the labels were measured in.
		config: Grid configuration.
		output_path: Output PDF path.

	Returns:
		Number of pages written.
	"""
	reader = pypdf.PdfReader(str(map_path))
	writer = pypdf.PdfWriter()
	overlay = build_grid_overlay_page(bbox, config)
	for index, page in enumerate(reader.pages):
		if index == 0:
			x_scale = float(page.mediabox.width) / mm_to_points(bbox.width)
			y_scale = float(page.mediabox.height) / mm_to_points(bbox.height)
			transform = pypdf.Transformation().scale(x_scale, y_scale).translate(
				float(page.mediabox.left),
				float(page.mediabox.bottom),
			)
			page.merge_transformed_page(overlay, transform)
		writer.add_page(page)
	writer.write(str(output_path))
	return len(reader.pages)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	inputs: list[pathlib.Path],
	label_count: int,
	entry_count: int,
	result: IndexResult,
	bbox: BoundingBox,
	config: GridConfig,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		inputs: Input label files.
		label_count: Number of labels read.
		entry_count: Number of street entries assigned.
		result: Index result.
		bbox: Page bounding box.
		config: Grid configuration.
	"""
	columns, rows = grid_dimensions(bbox, config)
	data = {
		"inputs": [str(path) for path in inputs],
		"labels": label_count,
		"street_entries": entry_count,
		"processed_roads": result.processed_roads,
		"unprocessed_roads": result.unprocessed_roads,
		"pages": result.pages,
		"page": {
			"width_mm": bbox.width,
			"height_mm": bbox.height,
		},
		"grid": {
			"cell_width_mm": config.cell_width,
			"cell_height_mm": config.cell_height,
			"columns": columns,
			"rows": rows,
			"column_direction": config.column_direction,
			"row_direction": config.row_direction,
			"column_offset": config.column_offset,
			"row_offset": config.row_offset,
			"sampling": config.sampling,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
