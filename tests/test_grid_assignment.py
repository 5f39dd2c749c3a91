import math

import pytest

import street_index.config
import street_index.grid


BoundingBox = street_index.config.BoundingBox
GridConfig = street_index.config.GridConfig
ConfigError = street_index.config.ConfigError
GeometryError = street_index.config.GeometryError
IndexPageConfig = street_index.config.IndexPageConfig
Grid = street_index.grid.Grid
GridPosition = street_index.grid.GridPosition
LabelRect = street_index.grid.LabelRect
StreetEntry = street_index.grid.StreetEntry
assign_cells = street_index.grid.assign_cells
grid_dimensions = street_index.grid.grid_dimensions


#============================================
def build_default_grid(**kwargs) -> Grid:
	"""
	Build a 200 x 200 mm page with 20 mm cells.
	"""
	bbox = BoundingBox(width=200.0, height=200.0)
	config = GridConfig(cell_width=20.0, cell_height=20.0, **kwargs)
	return Grid(bbox, config)


#============================================
def canterbury_road() -> LabelRect:
	return LabelRect("Canterbury Road", x_from_left=30.0, y_from_top=30.0, width=50.0, height=8.0)


#============================================
def test_single_cell() -> None:
	"""
	A label inside one cell yields exactly that cell.
	"""
	config = GridConfig(cell_width=20.0, cell_height=20.0)
	rect = LabelRect("Ash Lane", 2.0, 3.0, 10.0, 5.0)
	assert assign_cells(rect, config) == [GridPosition("A", 1)]


#============================================
def test_two_columns_same_row() -> None:
	"""
	A label spanning columns yields two cells sharing the row.
	"""
	config = GridConfig(cell_width=20.0, cell_height=20.0)
	positions = assign_cells(canterbury_road(), config)
	assert positions == [GridPosition("B", 2), GridPosition("E", 2)]
	assert len({position.row for position in positions}) == 1


#============================================
def test_two_rows_same_column() -> None:
	"""
	A label spanning rows yields two cells sharing the column.
	"""
	config = GridConfig(cell_width=20.0, cell_height=20.0)
	rect = LabelRect("Mayer Street", 5.0, 45.0, 12.0, 20.0)
	positions = assign_cells(rect, config)
	assert positions == [GridPosition("A", 3), GridPosition("A", 4)]


#============================================
def test_four_corners_only() -> None:
	"""
	A label spanning both axes yields only its four corner cells.
	"""
	config = GridConfig(cell_width=20.0, cell_height=20.0)
	rect = LabelRect("High Street", 150.0, 150.0, 30.0, 30.0)
	positions = assign_cells(rect, config)
	assert positions == [
		GridPosition("H", 8),
		GridPosition("H", 10),
		GridPosition("J", 8),
		GridPosition("J", 10),
	]
	assert GridPosition("I", 9) not in positions


#============================================
def test_full_coverage_enumerates_interior() -> None:
	"""
	FULL sampling lists every cell in the covered ranges.
	"""
	config = GridConfig(cell_width=20.0, cell_height=20.0, sampling="FULL")
	rect = LabelRect("High Street", 150.0, 150.0, 30.0, 30.0)
	positions = assign_cells(rect, config)
	assert len(positions) == 9
	assert GridPosition("I", 9) in positions


#============================================
def test_rows_are_one_based() -> None:
	"""
	The top-left cell is A1 and a label on a cell boundary starts the next cell.
	"""
	config = GridConfig(cell_width=20.0, cell_height=20.0)
	assert assign_cells(LabelRect("Top", 0.0, 0.0, 0.0, 0.0), config) == [GridPosition("A", 1)]
	assert assign_cells(LabelRect("Edge", 20.0, 20.0, 0.0, 0.0), config) == [GridPosition("B", 2)]


#============================================
def test_many_columns_use_double_letters() -> None:
	"""
	Columns past Z continue with AA.
	"""
	config = GridConfig(cell_width=1.0, cell_height=1.0)
	positions = assign_cells(LabelRect("Long Road", 25.5, 0.5, 1.0, 0.1), config)
	assert positions == [GridPosition("Z", 1), GridPosition("AA", 1)]


#============================================
def test_reversed_directions() -> None:
	"""
	Reversed grids measure from the right and bottom page edges.
	"""
	grid = build_default_grid(column_direction="RIGHT_TO_LEFT")
	entries = grid.insert_label(canterbury_road())
	assert [entry.position for entry in entries] == [GridPosition("G", 2), GridPosition("I", 2)]

	grid = build_default_grid(row_direction="BOTTOM_TO_TOP")
	entries = grid.insert_label(canterbury_road())
	assert [entry.position for entry in entries] == [GridPosition("B", 9), GridPosition("E", 9)]


#============================================
def test_reversed_direction_needs_page() -> None:
	"""
	Mirroring without a page bounding box is a configuration error.
	"""
	config = GridConfig(cell_width=20.0, cell_height=20.0, column_direction="RIGHT_TO_LEFT")
	with pytest.raises(ConfigError):
		assign_cells(canterbury_road(), config)


#============================================
def test_offsets() -> None:
	"""
	Offsets shift column letters and row numbers.
	"""
	grid = build_default_grid(column_offset=2, row_offset=10)
	entries = grid.insert_label(canterbury_road())
	assert [str(entry.position) for entry in entries] == ["D12", "G12"]


#============================================
def test_invalid_config() -> None:
	"""
	Bad cell sizes, offsets or directions fail at construction.
	"""
	for width, height in ((0.0, 20.0), (20.0, 0.0), (-1.0, 20.0), (math.nan, 20.0)):
		with pytest.raises(ConfigError):
			GridConfig(cell_width=width, cell_height=height)
	with pytest.raises(ConfigError):
		GridConfig(cell_width=20.0, cell_height=20.0, sampling="EDGES")
	with pytest.raises(ConfigError):
		GridConfig(cell_width=20.0, cell_height=20.0, column_offset=-1)
	for offsets in ({"column_offset": 1.5}, {"row_offset": True}, {"row_offset": "2"}):
		with pytest.raises(ConfigError):
			GridConfig(cell_width=20.0, cell_height=20.0, **offsets)
	with pytest.raises(ConfigError):
		GridConfig(cell_width=20.0, cell_height=20.0, column_direction="UPWARDS")
	with pytest.raises(ConfigError):
		GridConfig(cell_width=20.0, cell_height=20.0, row_direction="SIDEWAYS")
	with pytest.raises(ConfigError):
		BoundingBox(width=0.0, height=200.0)
	assert issubclass(ConfigError, ValueError)


#============================================
def test_invalid_geometry() -> None:
	"""
	Negative or non-finite label geometry fails at assignment time.
	"""
	config = GridConfig(cell_width=20.0, cell_height=20.0)
	bad_rects = [
		LabelRect("Neg X", -1.0, 0.0, 5.0, 5.0),
		LabelRect("Neg Y", 0.0, -1.0, 5.0, 5.0),
		LabelRect("Neg W", 0.0, 0.0, -5.0, 5.0),
		LabelRect("Neg H", 0.0, 0.0, 5.0, -5.0),
		LabelRect("Inf", 0.0, 0.0, math.inf, 5.0),
		LabelRect("NaN", math.nan, 0.0, 5.0, 5.0),
		LabelRect("  ", 0.0, 0.0, 5.0, 5.0),
	]
	for rect in bad_rects:
		with pytest.raises(GeometryError):
			assign_cells(rect, config)


#============================================
def test_grid_accumulates_and_drains() -> None:
	"""
	The grid keeps every entry in insertion order until drained.
	"""
	grid = build_default_grid()
	grid.insert_label(canterbury_road())
	added = grid.insert_labels([
		LabelRect("Ash Lane", 0.0, 0.0, 5.0, 5.0),
		LabelRect("Ash Lane", 0.0, 0.0, 5.0, 5.0),
	])
	assert added == 2
	assert len(grid) == 4
	entries = grid.drain()
	assert entries == [
		StreetEntry("Canterbury Road", GridPosition("B", 2)),
		StreetEntry("Canterbury Road", GridPosition("E", 2)),
		StreetEntry("Ash Lane", GridPosition("A", 1)),
		StreetEntry("Ash Lane", GridPosition("A", 1)),
	]
	assert len(grid) == 0
	assert grid.drain() == []


#============================================
def test_grid_dimensions() -> None:
	"""
	Partial cells at the page edge still count.
	"""
	config = GridConfig(cell_width=20.0, cell_height=30.0)
	assert grid_dimensions(BoundingBox(200.0, 200.0), config) == (10, 7)


#============================================
def test_invalid_index_page_config() -> None:
	"""
	Index pages need a column, a printable area and positive font sizes.
	"""
	IndexPageConfig(page_width=100.0, page_height=100.0, margin=10.0)
	bad_settings = [
		{"columns": 0},
		{"margin": 60.0},
		{"margin": 50.0},
		{"text_size": 0.0},
		{"title_size": -1.0},
		{"heading_size": 0.0},
	]
	for settings in bad_settings:
		with pytest.raises(ConfigError):
			IndexPageConfig(page_width=100.0, page_height=100.0, **settings)
