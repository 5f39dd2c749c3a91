"""
CLI entry points for building a street index.
"""

# Standard Library
import argparse
import pathlib
import time

# PIP3 modules
import reportlab.lib.pagesizes

# local repo modules
import street_index as sidx
import street_index.config
import street_index.export
import street_index.grid
import street_index.label_io
import street_index.render
import street_index.roads


BoundingBox = sidx.config.BoundingBox
GridConfig = sidx.config.GridConfig
IndexPageConfig = sidx.config.IndexPageConfig
IndexResult = sidx.config.IndexResult

DEFAULT_CELL_WIDTH = sidx.config.DEFAULT_CELL_WIDTH
DEFAULT_CELL_HEIGHT = sidx.config.DEFAULT_CELL_HEIGHT
DEFAULT_PAGE_WIDTH = sidx.config.DEFAULT_PAGE_WIDTH
DEFAULT_PAGE_HEIGHT = sidx.config.DEFAULT_PAGE_HEIGHT
DEFAULT_INDEX_COLUMNS = sidx.config.DEFAULT_INDEX_COLUMNS
DEFAULT_TITLE = sidx.config.DEFAULT_TITLE
LEFT_TO_RIGHT = sidx.config.LEFT_TO_RIGHT
RIGHT_TO_LEFT = sidx.config.RIGHT_TO_LEFT
TOP_TO_BOTTOM = sidx.config.TOP_TO_BOTTOM
BOTTOM_TO_TOP = sidx.config.BOTTOM_TO_TOP
SAMPLING_CORNERS = sidx.config.SAMPLING_CORNERS
SAMPLING_FULL = sidx.config.SAMPLING_FULL


#============================================
def build_page_box(args: argparse.Namespace) -> BoundingBox:
	return BoundingBox(width=args.page_width, height=args.page_height)


#============================================
def build_grid_config(args: argparse.Namespace) -> GridConfig:
	"""
	Build grid config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		GridConfig.
	"""
	config = GridConfig(
		cell_width=args.cell_width,
		cell_height=args.cell_height,
		column_direction=RIGHT_TO_LEFT if args.right_to_left else LEFT_TO_RIGHT,
		row_direction=BOTTOM_TO_TOP if args.bottom_to_top else TOP_TO_BOTTOM,
		column_offset=args.column_offset,
		row_offset=args.row_offset,
		sampling=SAMPLING_FULL if args.full_coverage else SAMPLING_CORNERS,
	)
	return config


#============================================
def build_page_config(args: argparse.Namespace) -> IndexPageConfig:
	"""
	Build index page config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		IndexPageConfig.
	"""
	page_width, page_height = reportlab.lib.pagesizes.letter
	page_config = IndexPageConfig(
		page_width=page_width,
		page_height=page_height,
		columns=args.index_columns,
		title=args.title,
	)
	return page_config


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Build a printed street index from map label boxes.")
	parser.add_argument("inputs", nargs="+", help="Label JSON/TSV files or directories.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output index text path.")
	output_group.add_argument("--pdf", dest="pdf_path", default=None, help="Output street index PDF path.")
	output_group.add_argument("--map", dest="map_path", default=None, help="Map PDF to draw the grid onto.")
	output_group.add_argument(
		"--overlay-output",
		dest="overlay_path",
		default=None,
		help="Output path for the gridded map (or the bare grid when --map is not given).",
	)
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-t", "--title", dest="title", default=DEFAULT_TITLE, help="Index PDF title.")
	output_group.add_argument(
		"--index-columns",
		dest="index_columns",
		type=int,
		default=DEFAULT_INDEX_COLUMNS,
		help="Text columns per index page.",
	)

	grid_group = parser.add_argument_group("Grid")
	grid_group.add_argument("-W", "--cell-width", dest="cell_width", type=float, default=DEFAULT_CELL_WIDTH, help="Cell width in mm.")
	grid_group.add_argument("-H", "--cell-height", dest="cell_height", type=float, default=DEFAULT_CELL_HEIGHT, help="Cell height in mm.")
	grid_group.add_argument("--page-width", dest="page_width", type=float, default=DEFAULT_PAGE_WIDTH, help="Map page width in mm.")
	grid_group.add_argument("--page-height", dest="page_height", type=float, default=DEFAULT_PAGE_HEIGHT, help="Map page height in mm.")
	grid_group.add_argument("--column-offset", dest="column_offset", type=int, default=0, help="First column index.")
	grid_group.add_argument("--row-offset", dest="row_offset", type=int, default=0, help="Rows to add to every row number.")
	grid_group.add_argument("--right-to-left", dest="right_to_left", action="store_true", help="Count columns from the right edge.")
	grid_group.add_argument("--bottom-to-top", dest="bottom_to_top", action="store_true", help="Count rows from the bottom edge.")
	grid_group.add_argument(
		"--full-coverage",
		dest="full_coverage",
		action="store_true",
		help="Record every cell a label covers, not only its corner cells.",
	)

	parser.set_defaults(
		right_to_left=False,
		bottom_to_top=False,
		full_coverage=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> IndexResult:
	"""
	Run the full pipeline from label files to index output.

	Args:
		args: Parsed argparse namespace.

	Returns:
		IndexResult.
	"""
	bbox = build_page_box(args)
	config = build_grid_config(args)
	print("Street index pipeline")
	print(f"Output index: {args.output_path}")
	if args.pdf_path:
		print(f"Output PDF: {args.pdf_path}")
	print(f"Page: {bbox.width:g} x {bbox.height:g} mm")
	print(f"Cells: {config.cell_width:g} x {config.cell_height:g} mm")
	if config.sampling == SAMPLING_FULL:
		print("Full coverage: True")

	output_path = pathlib.Path(args.output_path)
	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	manifest_path = pathlib.Path(manifest_path)

	start_time = time.perf_counter()
	# earlier runs may have left their outputs beside the labels
	paths = sidx.label_io.gather_label_paths(args.inputs, exclude=[output_path, manifest_path])
	print(f"Label files found: {len(paths)}")
	rects = []
	for path in paths:
		rects.extend(sidx.label_io.load_label_rects(path))
	print(f"Labels loaded: {len(rects)}")

	grid = sidx.grid.Grid(bbox, config)
	entry_count = grid.insert_labels(rects, verbose=True)
	print(f"Street entries: {entry_count}")

	roads = sidx.roads.deduplicate_roads(grid.drain())
	processed, unprocessed = sidx.roads.classify_roads(roads)
	print(f"Processed roads: {len(processed)}")
	print(f"Unprocessed roads: {len(unprocessed)}")

	sidx.export.write_index_text(output_path, processed, unprocessed)
	print(f"Index written: {output_path}")

	if args.pdf_path:
		page_config = build_page_config(args)
		result = sidx.render.render_index_pdf(
			processed,
			unprocessed,
			pathlib.Path(args.pdf_path),
			page_config,
		)
		print(f"Index pages written: {result.pages}")
	else:
		result = IndexResult(
			processed_roads=len(processed),
			unprocessed_roads=len(unprocessed),
			pages=0,
		)

	overlay_path = args.overlay_path
	if args.map_path and not overlay_path:
		overlay_path = f"{output_path}.grid.pdf"
	if overlay_path:
		overlay_path = pathlib.Path(overlay_path)
		if args.map_path:
			pages = sidx.render.overlay_grid_on_map(pathlib.Path(args.map_path), bbox, config, overlay_path)
			print(f"Gridded map written: {overlay_path} ({pages} pages)")
		else:
			sidx.render.render_grid_overlay_pdf(bbox, config, overlay_path)
			print(f"Grid overlay written: {overlay_path}")

	sidx.render.write_manifest(
		manifest_path,
		paths,
		len(rects),
		entry_count,
		result,
		bbox,
		config,
	)
	print(f"Manifest written: {manifest_path}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.2f}s")
	return result


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
